"""
Public API namespaces for the Nested Archive File System.
"""

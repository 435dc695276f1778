"""
Core resolution machinery for the Nested Archive File System.
"""

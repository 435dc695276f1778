"""
Archive handlers package for the Nested Archive File System.
Importing it registers every handler with HandlerManager.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from .zip_handler import ZipHandler

__all__ = ["ZipHandler"]

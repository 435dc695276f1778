"""
Backing stores for the Nested Archive File System.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from .os_store import OSStore
from .memory_store import MemoryStore

__all__ = ["OSStore", "MemoryStore"]

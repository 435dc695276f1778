"""
HandlerManager for the Nested Archive File System.
Maps each archive content kind to the ArchiveView class that decodes it.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import Dict, Optional


class HandlerManager:
    """
    Central registry of archive views, keyed by content kind.

    Usage example:
        HandlerManager.register_handler(Kind.ZIP, ZipHandler)
        handler_cls = HandlerManager.get_handler(Kind.ZIP)
        HandlerManager.deregister_handler(Kind.ZIP)
    """
    _registry: Dict[object, type] = {}

    @classmethod
    def register_handler(cls, kind, handler_cls: type):
        """
        Register a view class for a content kind.
        Args:
            kind: Archive Kind (e.g., Kind.ZIP)
            handler_cls: ArchiveView subclass decoding that kind
        """
        cls._registry[kind] = handler_cls

    @classmethod
    def deregister_handler(cls, kind):
        """
        Remove the view class registered for a kind.
        """
        cls._registry.pop(kind, None)

    @classmethod
    def get_handler(cls, kind) -> Optional[type]:
        """
        Get the view class for a kind, or None if nothing decodes it.
        """
        return cls._registry.get(kind)

    @classmethod
    def get_supported_kinds(cls):
        """
        Return a list of all registered archive kinds.
        """
        return list(cls._registry.keys())

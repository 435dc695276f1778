"""
Configuration operations for the Nested Archive File System.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from nestfs.core.global_config import GlobalConfig


class ConfigAPI:
    """
    NESTFS Public API: Configuration Operations

    Provides attribute and dict-style access to the global NESTFS configuration.

    Examples:
        fs.config.debug_level = 2
        fs.config['strict_listing'] = True
        x = fs.config.debug_level
        fs.config.reset()
    """

    def set(self, key, value):
        """
        Set a global config value by key.
        """
        if not GlobalConfig.has(key):
            raise AttributeError(f"No config for key '{key}'")
        GlobalConfig.set(key, value)

    def get(self, key):
        if not GlobalConfig.has(key):
            raise AttributeError(f"No config for key '{key}'")
        return GlobalConfig.get(key)

    def reset(self, key=None):
        """
        Reset all global config, or just a single key if provided.
        """
        GlobalConfig.reset(key)

    def __getattr__(self, key):
        if key.startswith("_"):
            raise AttributeError(key)
        return self.get(key)

    def __setattr__(self, key, value):
        self.set(key, value)

    def __getitem__(self, key):
        if not GlobalConfig.has(key):
            raise KeyError(f"No config for key '{key}'")
        return GlobalConfig.get(key)

    def __setitem__(self, key, value):
        if not GlobalConfig.has(key):
            raise KeyError(f"No config for key '{key}'")
        GlobalConfig.set(key, value)

    def __iter__(self):
        yield from GlobalConfig.keys()

    def __len__(self):
        return len(GlobalConfig.keys())

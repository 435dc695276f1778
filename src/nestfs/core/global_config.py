"""
global_config.py
Central configuration for NESTFS: debug output and the listing failure policy.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""


class GlobalConfig:
    _defaults = {
        "debug_level": 0,
        # Propagate per-entry classification failures out of read_dir
        "strict_listing": False,
    }
    _settings = _defaults.copy()

    @classmethod
    def set(cls, key, value):
        if key not in cls._defaults:
            raise KeyError(f"Unknown config key: {key}")
        cls._settings[key] = value

    @classmethod
    def get(cls, key):
        if key not in cls._defaults:
            raise KeyError(f"Unknown config key: {key}")
        return cls._settings.get(key, cls._defaults[key])

    @classmethod
    def has(cls, key) -> bool:
        return key in cls._defaults

    @classmethod
    def keys(cls):
        return list(cls._defaults.keys())

    @classmethod
    def reset(cls, key=None):
        if key is None:
            cls._settings = cls._defaults.copy()
        elif key in cls._defaults:
            cls._settings[key] = cls._defaults[key]

    @classmethod
    def set_debug_level(cls, value: int):
        cls.set("debug_level", int(value))

    @classmethod
    def get_debug_level(cls) -> int:
        return cls.get("debug_level")

    @classmethod
    def set_strict_listing(cls, value: bool):
        cls.set("strict_listing", bool(value))

    @classmethod
    def get_strict_listing(cls) -> bool:
        return cls.get("strict_listing")

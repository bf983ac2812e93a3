from __future__ import annotations
from collections.abc import Mapping
from typing import TypeAlias

SettingType: TypeAlias = str | int | bool | list[str] | None

class SettingsType(dict[str, SettingType]):
    """
    Extraction settings with typed getters. Values are coerced by the Helpers.Settings functions.
    """
    def __init__(self, settings : Mapping[str, SettingType]|None = None):
        super().__init__(settings or {})

    def get_bool(self, key : str, default : bool = False) -> bool:
        from PyStrings.Helpers.Settings import GetBoolSetting
        return GetBoolSetting(self, key, default)

    def get_int(self, key : str, default : int|None = None) -> int|None:
        from PyStrings.Helpers.Settings import GetIntSetting
        return GetIntSetting(self, key, default)

    def get_str(self, key : str, default : str|None = None) -> str|None:
        from PyStrings.Helpers.Settings import GetStrSetting
        return GetStrSetting(self, key, default)

    def get_str_list(self, key : str, default : list[str]|None = None) -> list[str]:
        """ Comma or semicolon separated strings are split into a list """
        from PyStrings.Helpers.Settings import GetStringListSetting
        return GetStringListSetting(self, key, default or [])

    def update(self, other=(), /, **kwds) -> None:
        """ Merge settings, ignoring None values so they do not hide the defaults """
        if isinstance(other, Mapping):
            other = { key: value for key, value in other.items() if value is not None }
        super().update(other, **kwds)

"""
Coercion of option values read from the environment, the command line or code.

Environment variables and .env files only provide strings, so every getter
accepts the string form of its type as well as the native value.
"""
from collections.abc import Mapping
from typing import Any

import regex

from PyStrings.SettingsType import SettingType
from PyStrings.StringsError import StringsError

true_values = ('true', 'yes', '1')
false_values = ('false', 'no', '0', '')

class SettingsError(StringsError):
    """ An option value cannot be coerced to the type the option needs """
    def __init__(self, key : str, value : Any, expected : str):
        super().__init__(f"Option '{key}' has value {repr(value)} ({type(value).__name__}), expected {expected}")
        self.key = key

def GetBoolSetting(settings : Mapping[str, SettingType], key : str, default : bool|None = False) -> bool:
    value = settings.get(key, default)
    if value is None:
        return False

    if isinstance(value, (bool, int)):
        return bool(value)

    if isinstance(value, str):
        if value.lower() in true_values:
            return True
        if value.lower() in false_values:
            return False

    raise SettingsError(key, value, "a boolean")

def GetIntSetting(settings : Mapping[str, SettingType], key : str, default : int|None = None) -> int|None:
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, (int, float)):
        return int(value)

    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise SettingsError(key, value, "an integer") from e

def GetStrSetting(settings : Mapping[str, SettingType], key : str, default : str|None = None) -> str|None:
    """
    Lists are joined with commas, so that a list option can be shown as a single value
    """
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, list):
        return ', '.join(str(item) for item in value)

    return str(value)

def GetListSetting(settings : Mapping[str, SettingType], key : str, default : list[Any]|None = None) -> list[Any]:
    """
    A list option. A string is split on commas or semicolons, e.g. "node_modules;vendor".
    """
    value = settings.get(key, default)
    if value is None:
        return []

    if isinstance(value, (list, tuple)):
        return list(value)

    if isinstance(value, str):
        return [ item.strip() for item in regex.split(r'[;,]', value) if item.strip() ]

    raise SettingsError(key, value, "a list")

def GetStringListSetting(settings : Mapping[str, SettingType], key : str, default : list[str]|None = None) -> list[str]:
    return [ str(item).strip() for item in GetListSetting(settings, key, default or []) if item is not None ]

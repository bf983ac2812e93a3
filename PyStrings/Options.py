from __future__ import annotations
from collections.abc import Mapping
from copy import deepcopy
import logging
import os
import dotenv

from babel.messages.plurals import get_plural

from PyStrings.SettingsType import SettingType, SettingsType

# Load environment variables from .env file
dotenv.load_dotenv()

DEFAULT_PLURAL_FORMS = 2

def env_bool(key : str, default : bool = False) -> bool:
    var = os.getenv(key, default)
    return True if var and str(var).lower() in ('true', 'yes', '1') else False

def env_int(key : str, default : int|None = None) -> int|None:
    value = os.getenv(key, default)
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None

    try:
        return int(value)
    except ValueError:
        logging.warning(f"Ignoring {key}={value}, it is not a number")
        return None

def env_str(key : str, default : str|None = None) -> str|None:
    value = os.getenv(key, default)
    return str(value) if value is not None else None

default_settings = {
    'base_dir': env_str('STRINGS_BASE_DIR', None),
    'msgctxt': env_str('STRINGS_MSGCTXT', None),
    'header_file': env_str('STRINGS_HEADER', None),
    'output': env_str('STRINGS_OUTPUT', None),
    'append': env_bool('STRINGS_APPEND', False),
    'language': env_str('STRINGS_LANGUAGE', None),
    'plural_forms': env_int('STRINGS_PLURAL_FORMS', None),
    'exclude_dirs': env_str('STRINGS_EXCLUDE_DIRS', "node_modules,vendor,bower_components,.git,.svn"),
    'setting_keys': env_str('STRINGS_SETTING_KEYS', "title,description,help_text"),
    'comment_tag': env_str('STRINGS_COMMENT_TAG', "TRANSLATORS:"),
    'warn_unrecognised': env_bool('STRINGS_WARN_UNRECOGNISED', False),
}

class Options(SettingsType):
    def __init__(self, settings : SettingsType|Mapping[str, SettingType]|None = None, **kwargs : SettingType):
        """ Initialise the Options object with default options and any provided options. """
        super().__init__()

        self.update(deepcopy(default_settings))

        settings = SettingsType(settings)

        if settings:
            # Remove None values from options and merge with defaults
            filtered_settings = {k: deepcopy(v) for k, v in settings.items() if v is not None}
            self.update(filtered_settings)

        # Apply any explicit parameters
        self.update(kwargs)

    @property
    def base_dir(self) -> str:
        """ Directory that references are made relative to """
        return self.get_str('base_dir') or os.getcwd()

    @property
    def msgctxt(self) -> str|None:
        return self.get_str('msgctxt')

    @property
    def header_file(self) -> str|None:
        return self.get_str('header_file')

    @property
    def output(self) -> str|None:
        return self.get_str('output')

    @property
    def append(self) -> bool:
        return self.get_bool('append')

    @property
    def language(self) -> str|None:
        return self.get_str('language')

    @property
    def exclude_dirs(self) -> list[str]:
        return self.get_str_list('exclude_dirs')

    @property
    def setting_keys(self) -> list[str]:
        return self.get_str_list('setting_keys')

    @property
    def comment_tag(self) -> str|None:
        return self.get_str('comment_tag') or None

    @property
    def warn_unrecognised(self) -> bool:
        return self.get_bool('warn_unrecognised')

    @property
    def plural_forms(self) -> int:
        """
        Number of msgstr[n] placeholders for plural entries.
        An explicit setting wins, then the plural rule for the target language, then 2.
        """
        explicit = self.get_int('plural_forms')
        if explicit:
            return max(explicit, 1)

        if self.language:
            try:
                return get_plural(self.language).num_plurals
            except Exception as e:
                logging.warning(f"Unable to determine plural forms for language '{self.language}': {e}")

        return DEFAULT_PLURAL_FORMS

    def GetCatalogDefaults(self) -> dict[str, str]:
        """
        Default values stamped onto every catalog insertion that lacks its own
        """
        defaults = {}
        if self.msgctxt:
            defaults['msgctxt'] = self.msgctxt
        return defaults

from enum import Enum
import regex

from PyStrings.SourceParser import SourceParser
from PyStrings.Helpers import HasSuffix
from PyStrings.Parsers.JsParser import JsParser
from PyStrings.Parsers.PhpParser import PhpParser
from PyStrings.Parsers.SettingParser import SettingParser
from PyStrings.Parsers.SmartyParser import SmartyParser

backup_suffix = '~'

php_open_tag = regex.compile(r'^<\?php')
php_shebang = regex.compile(r'^#![^\n]+php')

class ParserType(Enum):
    Script = 1
    Setting = 2
    Template = 3
    Php = 4

class ParserSelector:
    """
    Owns one parser of each type and decides which of them handles a file
    """
    def __init__(self, comment_tag : str|None = "TRANSLATORS:", setting_keys : list[str]|None = None):
        self.php_parser = PhpParser(comment_tag=comment_tag)
        self.js_parser = JsParser(comment_tag=comment_tag)

        # In decision order, settings files must be claimed before plain PHP
        self.parsers : dict[ParserType, SourceParser] = {
            ParserType.Script: self.js_parser,
            ParserType.Setting: SettingParser(self.php_parser, setting_keys=setting_keys),
            ParserType.Template: SmartyParser(self.php_parser, comment_tag=comment_tag),
            ParserType.Php: self.php_parser,
        }

        self.suffix_rules : list[tuple[ParserType, list[str]]] = [
            (parser_type, parser.get_file_extensions()) for parser_type, parser in self.parsers.items()
        ]

    def SelectParser(self, filepath : str, content : str) -> ParserType|None:
        """
        Decide which dialect a file is written in. The first matching rule wins:
        backup files are skipped, then the suffix decides, then PHP is recognised by its
        open tag or a shebang line.
        """
        if filepath.endswith(backup_suffix):
            return None

        for parser_type, extensions in self.suffix_rules:
            if HasSuffix(filepath, extensions):
                return parser_type

        if php_open_tag.match(content or '') or php_shebang.match(content or ''):
            return ParserType.Php

        return None

    def GetParser(self, filepath : str, content : str) -> SourceParser|None:
        parser_type = self.SelectParser(filepath, content)
        return self.parsers[parser_type] if parser_type else None

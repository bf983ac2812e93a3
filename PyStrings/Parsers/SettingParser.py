import logging

from PyStrings.Catalog import Catalog
from PyStrings.SourceParser import SourceParser
from PyStrings.Parsers.PhpParser import PhpParser, TokenizePhp
from PyStrings.Helpers.Tokens import Token, STRING, PUNCT, SignificantTokens, LiteralValue, CommentLines

setting_extensions = ['.setting.php']

default_setting_keys = ['title', 'description', 'help_text']

class SettingParser(SourceParser):
    """
    Extracts strings from settings metadata files.

    ts() calls are found by the PHP parser. Literal values of the metadata keys that are
    translated when the settings are loaded (title, description...) are extracted as well.
    """
    def __init__(self, php_parser : PhpParser, setting_keys : list[str]|None = None):
        self.php_parser = php_parser
        self.setting_keys = set(setting_keys if setting_keys is not None else default_setting_keys)

    def parse(self, filepath: str, content: str, catalog: Catalog) -> None:
        significant = SignificantTokens(TokenizePhp(content))

        # ts() calls and metadata values are inserted in the order they appear
        for index in range(len(significant)):
            if not self.php_parser.ExtractCall(filepath, significant, index, catalog):
                self._extract_setting(filepath, significant, index, catalog)

    def get_file_extensions(self) -> list[str]:
        return setting_extensions

    def _extract_setting(self, filepath : str, tokens : list[Token], index : int, catalog : Catalog) -> None:
        token = tokens[index]
        if token.type != STRING or token.value not in self.setting_keys:
            return

        if index + 2 >= len(tokens) or not tokens[index + 1].IsPunct('=>'):
            return

        value_tokens = self._read_value(tokens, index + 2)
        if not value_tokens:
            return

        value = LiteralValue(value_tokens, '.')
        if not value:
            return

        comments = CommentLines(token.comment, self.php_parser.comment_tag)
        catalog.Insert(value, filepath, value_tokens[0].line, comments=comments)

    def _read_value(self, tokens : list[Token], start : int) -> list[Token]|None:
        """
        Tokens of a literal value, provided it runs up to the end of the array element
        """
        end = start
        while end < len(tokens) and (tokens[end].type == STRING or tokens[end].IsPunct('.')):
            end += 1

        if end == start or end >= len(tokens):
            return None

        terminator = tokens[end]
        if terminator.type != PUNCT or terminator.text not in (',', ')', ']'):
            logging.debug(f"Setting value on line {tokens[start].line} is not a literal")
            return None

        return tokens[start:end]

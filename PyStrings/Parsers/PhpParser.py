import logging
import regex

from PyStrings.Catalog import Catalog
from PyStrings.SourceParser import SourceParser
from PyStrings.Helpers.Tokens import (
    Token, STRING, INTERPOLATED, NAME, VARIABLE, NUMBER, COMMENT, PUNCT,
    SignificantTokens, ReadTranslationCall, ReadKeyedItems, ReadLiteralOptions, PrecedingComment, CommentLines
)

php_open_tag = regex.compile(r'<\?(?:php\b|=)?', regex.IGNORECASE)

php_token_pattern = regex.compile(r"""
    (?P<close>\?>\n?)
  | (?P<space>\s+)
  | (?P<comment>(?://|\#(?!\[))[^\n]*?(?=\?>|\n|\Z)|/\*.*?\*/)
  | (?P<sq>'(?:[^'\\]|\\.)*')
  | (?P<dq>"(?:[^"\\]|\\.)*")
  | (?P<heredoc><<<[ \t]*["']?(?P<label>[^\W\d]\w*)["']?\r?\n.*?^[ \t]*(?P=label)\b)
  | (?P<backtick>`(?:[^`\\]|\\.)*`)
  | (?P<variable>\$+[^\W\d]\w*)
  | (?P<name>\\?[^\W\d]\w*(?:\\[^\W\d]\w*)*)
  | (?P<number>\d[\w.]*)
  | (?P<punct>\?->|=>|::|->|\.\.\.|[^\s\w])
""", regex.VERBOSE | regex.DOTALL | regex.MULTILINE)

token_kinds = ('close', 'space', 'comment', 'sq', 'dq', 'heredoc', 'backtick', 'variable', 'name', 'number', 'punct')

php_interpolation = regex.compile(r'(?<!\\)(?:\\\\)*(?:\$[^\W\d]|\$\{|\{\$)')

php_double_escapes = regex.compile(r'\\(?:([nrtvef\\$"])|([0-7]{1,3})|x([0-9A-Fa-f]{1,2})|u\{([0-9A-Fa-f]+)\})')

simple_escapes = {
    'n': '\n', 'r': '\r', 't': '\t', 'v': '\v', 'e': '\x1b', 'f': '\f',
    '\\': '\\', '$': '$', '"': '"',
}

max_code_point = 0x10FFFF

php_extensions = ['.php']

translation_functions = ('ts', '\\ts')

option_aliases = { 'context': 'context', 'msgctxt': 'context', 'plural': 'plural' }

def DecodeSingleQuoted(text : str) -> str:
    """
    Value of a single-quoted PHP literal (including the quotes)
    """
    return regex.sub(r"\\([\\'])", r'\1', text[1:-1])

def _decode_escape(match) -> str:
    simple, octal, hexadecimal, unicode = match.groups()
    if simple:
        return simple_escapes[simple]
    if octal:
        return chr(int(octal, 8) & 0xFF)
    if hexadecimal:
        return chr(int(hexadecimal, 16))

    code_point = int(unicode, 16)
    if 0xD800 <= code_point <= 0xDFFF:
        return '\ufffd'
    return chr(code_point)

def HasInvalidEscape(text : str) -> bool:
    """
    True if a double-quoted literal has a \\u{...} escape beyond the Unicode range, which PHP rejects
    """
    return any(match.group(4) and int(match.group(4), 16) > max_code_point for match in php_double_escapes.finditer(text[1:-1]))

def DecodeDoubleQuoted(text : str) -> str|None:
    """
    Value of a double-quoted PHP literal, or None if it interpolates variables
    """
    inner = text[1:-1]
    if php_interpolation.search(inner):
        return None
    return php_double_escapes.sub(_decode_escape, inner)

def TokenizePhp(content : str, first_line : int = 1, inline_html : bool = True) -> list[Token]:
    """
    Split PHP source into tokens. Text outside <?php ... ?> is ignored unless inline_html is False,
    in which case the whole content is treated as code. Stops at the first malformed construct.
    """
    tokens : list[Token] = []
    line = first_line
    pos = 0
    in_code = not inline_html

    while pos < len(content):
        if not in_code:
            open_tag = php_open_tag.search(content, pos)
            if not open_tag:
                break
            line += content.count('\n', pos, open_tag.end())
            pos = open_tag.end()
            in_code = True
            continue

        match = php_token_pattern.match(content, pos)
        if not match:
            break

        kind = next(kind for kind in token_kinds if match.group(kind) is not None)
        text = match.group(0)
        token_line = line
        line += text.count('\n')
        pos = match.end()

        if kind == 'close':
            in_code = False
        elif kind == 'space':
            pass
        elif kind == 'comment':
            tokens.append(Token(COMMENT, text, token_line))
        elif kind == 'sq':
            tokens.append(Token(STRING, text, token_line, DecodeSingleQuoted(text)))
        elif kind == 'dq':
            if HasInvalidEscape(text):
                logging.debug(f"Invalid escape sequence on line {token_line}, ignoring the rest of the code")
                break
            value = DecodeDoubleQuoted(text)
            tokens.append(Token(STRING if value is not None else INTERPOLATED, text, token_line, value))
        elif kind in ('heredoc', 'backtick'):
            tokens.append(Token(INTERPOLATED, text, token_line))
        elif kind == 'variable':
            tokens.append(Token(VARIABLE, text, token_line))
        elif kind == 'name':
            tokens.append(Token(NAME, text, token_line))
        elif kind == 'number':
            tokens.append(Token(NUMBER, text, token_line))
        else:
            if text in ('"', "'", '`') or content.startswith('/*', match.start()) or content.startswith('<<<', match.start()):
                logging.debug(f"Unterminated string or comment on line {token_line}, ignoring the rest of the code")
                break
            tokens.append(Token(PUNCT, text, token_line))

    return tokens

def ReadPhpOptions(tokens : list[Token]) -> dict[str, str]|None:
    """
    Read context and plural from the second argument of ts(), e.g. array('context' => 'menu')
    """
    if len(tokens) > 1 and tokens[0].type == NAME and tokens[0].text.lower() == 'array' and tokens[1].IsPunct('('):
        items = ReadKeyedItems(tokens[1:], '=>')
    elif tokens and tokens[0].IsPunct('['):
        items = ReadKeyedItems(tokens, '=>')
    else:
        items = None

    return ReadLiteralOptions(items, '.', option_aliases)

class PhpParser(SourceParser):
    """
    Extracts ts() calls from PHP code
    """
    def __init__(self, comment_tag : str|None = "TRANSLATORS:"):
        self.comment_tag = comment_tag

    def parse(self, filepath: str, content: str, catalog: Catalog) -> None:
        tokens = TokenizePhp(content)
        self.ExtractFromTokens(filepath, tokens, catalog)

    def get_file_extensions(self) -> list[str]:
        return php_extensions

    def ParseCode(self, filepath : str, code : str, catalog : Catalog, first_line : int = 1) -> None:
        """
        Extract strings from a fragment of bare PHP code (no open tag), e.g. an embedded block in a template
        """
        tokens = TokenizePhp(code, first_line=first_line, inline_html=False)
        self.ExtractFromTokens(filepath, tokens, catalog)

    def ExtractFromTokens(self, filepath : str, tokens : list[Token], catalog : Catalog) -> None:
        significant = SignificantTokens(tokens)
        for index in range(len(significant)):
            self.ExtractCall(filepath, significant, index, catalog)

    def ExtractCall(self, filepath : str, tokens : list[Token], index : int, catalog : Catalog) -> bool:
        """
        Insert the string from the translation call at index, if there is one.
        tokens must be significant tokens. Returns True if a string was inserted.
        """
        if not self._is_translation_call(tokens, index):
            return False

        call = ReadTranslationCall(tokens, index, '.', ReadPhpOptions)
        if call is None:
            return False

        comments = CommentLines(PrecedingComment(tokens, index), self.comment_tag)

        catalog.Insert(call.msgid, filepath, call.line, msgid_plural=call.msgid_plural, msgctxt=call.msgctxt, comments=comments)
        return True

    def _is_translation_call(self, tokens : list[Token], index : int) -> bool:
        token = tokens[index]
        if token.type != NAME or token.text not in translation_functions:
            return False

        if index + 1 >= len(tokens) or not tokens[index + 1].IsPunct('('):
            return False

        if index == 0:
            return True

        previous = tokens[index - 1]
        if previous.type == PUNCT and previous.text in ('->', '?->'):
            return False

        if previous.type == NAME and previous.text.lower() in ('function', 'fn', 'new'):
            return False

        if previous.IsPunct('::'):
            return index >= 2 and tokens[index - 2].type == NAME

        return True

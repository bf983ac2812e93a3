import html
import logging
import regex

from PyStrings.Catalog import Catalog
from PyStrings.SourceParser import SourceParser
from PyStrings.Helpers import HasSuffix
from PyStrings.Helpers.Text import LineNumberAt
from PyStrings.Helpers.Tokens import (
    Token, STRING, INTERPOLATED, NAME, NUMBER, COMMENT, PUNCT,
    SignificantTokens, ReadTranslationCall, ReadKeyedItems, ReadLiteralOptions, PrecedingComment, CommentLines
)

script_extensions = ['.js']
markup_extensions = ['.html']

js_token_pattern = regex.compile(r"""
    (?P<space>\s+)
  | (?P<comment>//[^\n]*|/\*.*?\*/)
  | (?P<sq>'(?:[^'\\\n]|\\.)*')
  | (?P<dq>"(?:[^"\\\n]|\\.)*")
  | (?P<template>`(?:[^`\\]|\\.)*`)
  | (?P<name>[^\W\d][\w$]*|\$[\w$]*)
  | (?P<number>\d[\w.]*|\.\d\w*)
  | (?P<punct>=>|\.\.\.|\?\.|[^\s\w])
""", regex.VERBOSE | regex.DOTALL)

token_kinds = ('space', 'comment', 'sq', 'dq', 'template', 'name', 'number', 'punct')

js_regex_literal = regex.compile(r'/(?![*/])(?:[^/\\\[\n]|\\.|\[(?:[^\]\\\n]|\\.)*\])+/[A-Za-z]*')

# Tokens after which a slash starts a regular expression rather than a division
regex_keywords = { 'return', 'typeof', 'case', 'do', 'else', 'in', 'instanceof', 'new', 'delete', 'void', 'throw', 'yield', 'await' }

js_escapes = regex.compile(r'\\(?:u\{([0-9A-Fa-f]+)\}|u([0-9A-Fa-f]{4})|x([0-9A-Fa-f]{2})|(\r\n|\n|\r)|(.))', regex.DOTALL)

simple_escapes = { 'n': '\n', 'r': '\r', 't': '\t', 'b': '\b', 'f': '\f', 'v': '\v', '0': '\0' }

template_interpolation = regex.compile(r'(?<!\\)(?:\\\\)*\$\{')

max_code_point = 0x10FFFF

markup_pattern = regex.compile(r"""
    (?P<comment><!--.*?-->)
  | (?P<script><script\b[^>]*>(?P<body>.*?)</script\s*>)
  | (?P<tag><[A-Za-z][\w:.-]*(?:\s+[^\s=>/]+(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+))?)*\s*/?>)
  | (?P<interpolation>\{\{(?P<expression>.*?)\}\})
""", regex.VERBOSE | regex.DOTALL | regex.IGNORECASE)

attribute_value_pattern = regex.compile(r'''=\s*(?:"([^"]*)"|'([^']*)')''')

translation_functions = ('ts',)

option_aliases = { 'context': 'context', 'plural': 'plural' }

def _decode_escape(match) -> str:
    braced, unicode, hexadecimal, continuation, char = match.groups()
    if braced:
        return chr(int(braced, 16))
    if unicode:
        return chr(int(unicode, 16))
    if hexadecimal:
        return chr(int(hexadecimal, 16))
    if continuation:
        return ''
    return simple_escapes.get(char, char)

def HasInvalidEscape(text : str) -> bool:
    """
    True if a quoted JS literal has a \\u{...} escape beyond the Unicode range
    """
    return any(match.group(1) and int(match.group(1), 16) > max_code_point for match in js_escapes.finditer(text[1:-1]))

def DecodeJsString(text : str) -> str|None:
    """
    Value of a quoted JS literal (including the quotes), or None for a template with substitutions
    """
    inner = text[1:-1]
    if text.startswith('`') and template_interpolation.search(inner):
        return None

    value = js_escapes.sub(_decode_escape, inner)

    # Join surrogate pairs, lone surrogates become U+FFFD
    return value.encode('utf-16', 'surrogatepass').decode('utf-16', 'replace')

def TokenizeJs(content : str, first_line : int = 1) -> list[Token]:
    """
    Split JavaScript source into tokens, stopping at the first malformed construct
    """
    tokens : list[Token] = []
    line = first_line
    pos = 0
    previous : Token|None = None

    while pos < len(content):
        if content[pos] == '/' and _regex_allowed(previous):
            match = js_regex_literal.match(content, pos)
            if match:
                previous = Token(INTERPOLATED, match.group(0), line)
                tokens.append(previous)
                pos = match.end()
                continue

        match = js_token_pattern.match(content, pos)
        if not match:
            break

        kind = next(kind for kind in token_kinds if match.group(kind) is not None)
        text = match.group(0)
        token_line = line
        line += text.count('\n')
        pos = match.end()

        if kind == 'space':
            continue

        if kind == 'comment':
            tokens.append(Token(COMMENT, text, token_line))
            continue

        if kind in ('sq', 'dq', 'template'):
            if HasInvalidEscape(text):
                logging.debug(f"Invalid escape sequence on line {token_line}, ignoring the rest of the script")
                break
            value = DecodeJsString(text)
            token = Token(STRING if value is not None else INTERPOLATED, text, token_line, value)
        elif kind == 'name':
            token = Token(NAME, text, token_line)
        elif kind == 'number':
            token = Token(NUMBER, text, token_line)
        else:
            if text in ('"', "'", '`') or content.startswith('/*', match.start()):
                logging.debug(f"Unterminated string or comment on line {token_line}, ignoring the rest of the script")
                break
            token = Token(PUNCT, text, token_line)

        tokens.append(token)
        previous = token

    return tokens

def _regex_allowed(previous : Token|None) -> bool:
    if previous is None:
        return True
    if previous.type == PUNCT:
        return previous.text not in (')', ']', '}')
    if previous.type == NAME:
        return previous.text in regex_keywords
    return False

def ReadJsOptions(tokens : list[Token]) -> dict[str, str]|None:
    """
    Read context and plural from the second argument of ts(), e.g. {context: 'menu'}
    """
    items = ReadKeyedItems(tokens, ':', bare_keys=True) if tokens and tokens[0].IsPunct('{') else None
    return ReadLiteralOptions(items, '+', option_aliases)

class JsParser(SourceParser):
    """
    Extracts ts() calls from JavaScript, and from script blocks, attributes
    and {{ }} expressions in HTML markup
    """
    def __init__(self, comment_tag : str|None = "TRANSLATORS:"):
        self.comment_tag = comment_tag

    def parse(self, filepath: str, content: str, catalog: Catalog) -> None:
        if HasSuffix(filepath, markup_extensions):
            self.ParseMarkup(filepath, content, catalog)
        else:
            self.ParseScript(filepath, content, catalog)

    def get_file_extensions(self) -> list[str]:
        return script_extensions + markup_extensions

    def ParseScript(self, filepath : str, code : str, catalog : Catalog, first_line : int = 1) -> None:
        tokens = TokenizeJs(code, first_line)
        significant = SignificantTokens(tokens)

        for index in range(len(significant)):
            if not self._is_translation_call(significant, index):
                continue

            call = ReadTranslationCall(significant, index, '+', ReadJsOptions)
            if call is None:
                continue

            comments = CommentLines(PrecedingComment(significant, index), self.comment_tag)
            catalog.Insert(call.msgid, filepath, call.line, msgid_plural=call.msgid_plural, msgctxt=call.msgctxt, comments=comments)

    def ParseMarkup(self, filepath : str, content : str, catalog : Catalog) -> None:
        """
        Scan the parts of an HTML document that can hold script: script blocks, attribute values and interpolations
        """
        for match in markup_pattern.finditer(content):
            if match.group('comment') is not None:
                continue

            if match.group('script') is not None:
                self._scan_fragment(filepath, content, match.start('body'), match.group('body'), catalog)

            elif match.group('tag') is not None:
                tag = match.group('tag')
                for attribute in attribute_value_pattern.finditer(tag):
                    group = 1 if attribute.group(1) is not None else 2
                    offset = match.start('tag') + attribute.start(group)
                    self._scan_fragment(filepath, content, offset, html.unescape(attribute.group(group)), catalog)

            elif match.group('interpolation') is not None:
                self._scan_fragment(filepath, content, match.start('expression'), match.group('expression'), catalog)

    def _scan_fragment(self, filepath : str, content : str, offset : int, fragment : str, catalog : Catalog):
        if not any(name in fragment for name in translation_functions):
            return

        self.ParseScript(filepath, fragment, catalog, first_line=LineNumberAt(content, offset))

    def _is_translation_call(self, tokens : list[Token], index : int) -> bool:
        token = tokens[index]
        if token.type != NAME or token.text not in translation_functions:
            return False

        if index + 1 >= len(tokens) or not tokens[index + 1].IsPunct('('):
            return False

        if index > 0:
            previous = tokens[index - 1]
            if previous.type == PUNCT and previous.text in ('.', '?.'):
                return False
            if previous.type == NAME and previous.text == 'function':
                return False

        return True

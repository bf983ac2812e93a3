"""
Token stream primitives shared by the code parsers.

The PHP and JavaScript tokenizers produce a flat list of Token objects. The
helpers here work on the significant tokens (comments removed) to split a
call's arguments, evaluate literal string expressions and read keyed option
collections such as PHP arrays and JS object literals.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging

import regex

STRING = 'string'               # literal string, value holds the decoded text
INTERPOLATED = 'interpolated'   # string with embedded expressions, not extractable
NAME = 'name'
VARIABLE = 'variable'
NUMBER = 'number'
COMMENT = 'comment'
PUNCT = 'punct'

OPENERS = { '(': ')', '[': ']', '{': '}' }
CLOSERS = { ')', ']', '}' }

@dataclass
class Token:
    type : str
    text : str
    line : int
    value : str|None = None
    comment : Token|None = field(default=None, repr=False)

    def IsPunct(self, text : str) -> bool:
        return self.type == PUNCT and self.text == text

@dataclass
class TranslationCall:
    """ The literal arguments of a translation marker """
    msgid : str
    line : int
    msgid_plural : str|None = None
    msgctxt : str|None = None

def SignificantTokens(tokens : list[Token]) -> list[Token]:
    """
    Remove comments, attaching the nearest preceding comment to the token that follows it
    """
    significant = []
    last_comment = None
    for token in tokens:
        if token.type == COMMENT:
            last_comment = token
            continue

        token.comment = last_comment
        last_comment = None
        significant.append(token)

    return significant

def SplitArguments(tokens : list[Token], open_index : int) -> tuple[list[list[Token]], int]|None:
    """
    Split the arguments of a bracketed list starting at open_index on top-level commas.

    Returns the argument token lists and the index of the closing bracket,
    or None if the brackets are not balanced before the end of the tokens.
    """
    opener = tokens[open_index].text
    if opener not in OPENERS:
        return None

    expected = [ OPENERS[opener] ]
    arguments : list[list[Token]] = []
    current : list[Token] = []

    for index in range(open_index + 1, len(tokens)):
        token = tokens[index]
        if token.type == PUNCT and token.text in OPENERS:
            expected.append(OPENERS[token.text])
        elif token.type == PUNCT and token.text in CLOSERS:
            if token.text != expected[-1]:
                return None
            expected.pop()
            if not expected:
                if current:
                    arguments.append(current)
                return arguments, index
        elif token.IsPunct(',') and len(expected) == 1:
            arguments.append(current)
            current = []
            continue

        current.append(token)

    return None

def LiteralValue(tokens : list[Token], concat_operator : str) -> str|None:
    """
    Evaluate an expression made only of string literals joined by the concatenation operator.
    Returns None for anything else.
    """
    if not tokens:
        return None

    parts = []
    for index, token in enumerate(tokens):
        if index % 2 == 0:
            if token.type != STRING or token.value is None:
                return None
            parts.append(token.value)
        elif not token.IsPunct(concat_operator):
            return None

    if len(tokens) % 2 == 0:
        return None     # trailing operator

    return "".join(parts)

def ReadKeyedItems(tokens : list[Token], separator : str, bare_keys : bool = False) -> dict[str, list[Token]]|None:
    """
    Read the items of a keyed collection such as array('a' => 'b') or {a: 'b'}.
    tokens must start with the opening bracket. Items without a literal key are ignored.
    """
    if not tokens or tokens[0].type != PUNCT:
        return None

    split = SplitArguments(tokens, 0)
    if split is None:
        return None

    items : dict[str, list[Token]] = {}
    for item in split[0]:
        if len(item) < 3 or not item[1].IsPunct(separator):
            continue

        key = item[0]
        if key.type == STRING and key.value is not None:
            items[key.value] = item[2:]
        elif bare_keys and key.type == NAME:
            items[key.text] = item[2:]

    return items

def PrecedingComment(tokens : list[Token], index : int) -> Token|None:
    """
    The comment directly before a token, or else the comment before the start of the
    statement or list item that contains it
    """
    for position in range(index, -1, -1):
        if tokens[position].comment is not None:
            return tokens[position].comment

        if position > 0 and tokens[position - 1].type == PUNCT and tokens[position - 1].text in (';', ',', '{', '}'):
            break

    return None

def CommentLines(comment : Token|None, tag : str|None) -> list[str]:
    """
    Text of a translator comment if it starts with the tag, as a list of lines
    """
    if comment is None or not tag:
        return []

    text = comment.text
    if text.startswith('/*'):
        text = text[2:-2] if text.endswith('*/') else text[2:]
    elif text.startswith('//'):
        text = text[2:]
    elif text.startswith('#'):
        text = text[1:]

    return TaggedCommentLines(text, tag)

def TaggedCommentLines(text : str, tag : str|None) -> list[str]:
    """
    Lines of comment text (delimiters already removed) if the comment starts with the tag
    """
    if not tag:
        return []

    lines = [ regex.sub(r'^\s*\*?\s?', '', line).rstrip() for line in text.strip().splitlines() ]
    lines = [ line for line in lines if line ]
    if not lines or not lines[0].startswith(tag):
        return []

    return lines

def ReadTranslationCall(tokens : list[Token], name_index : int, concat_operator : str, read_options) -> TranslationCall|None:
    """
    Read a call to a translation marker at name_index.

    The first argument must be a literal expression. read_options is given the
    token list of the second argument (if any) and returns a dict with optional
    'plural' and 'context' values, or None if they are not literal.
    Returns None if the call cannot be extracted.
    """
    name = tokens[name_index]
    open_index = name_index + 1
    if open_index >= len(tokens) or not tokens[open_index].IsPunct('('):
        return None

    split = SplitArguments(tokens, open_index)
    if split is None:
        logging.debug(f"Unterminated call to {name.text} on line {name.line}")
        return None

    arguments = split[0]
    if not arguments:
        logging.debug(f"Call to {name.text} without arguments on line {name.line}")
        return None

    msgid = LiteralValue(arguments[0], concat_operator)
    if msgid is None:
        logging.debug(f"Skipping call to {name.text} with a non-literal argument on line {name.line}")
        return None

    if not msgid:
        return None

    options = {}
    if len(arguments) > 1:
        options = read_options(arguments[1])
        if options is None:
            logging.debug(f"Skipping call to {name.text} with non-literal options on line {name.line}")
            return None

    return TranslationCall(
        msgid=msgid,
        line=name.line,
        msgid_plural=options.get('plural') or None,
        msgctxt=options.get('context'),
    )

def ReadLiteralOptions(items : dict[str, list[Token]]|None, concat_operator : str, aliases : dict[str, str]) -> dict[str, str]|None:
    """
    Evaluate the option values we care about. Any recognised option that is not literal makes the whole call unusable.
    """
    if items is None:
        return {}

    options = {}
    for key, option in aliases.items():
        if key not in items:
            continue
        value = LiteralValue(items[key], concat_operator)
        if value is None:
            return None
        options[option] = value

    return options

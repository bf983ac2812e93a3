import logging
import regex

from PyStrings.Catalog import Catalog
from PyStrings.SourceParser import SourceParser
from PyStrings.Parsers.PhpParser import PhpParser
from PyStrings.Helpers.Text import LineNumberAt
from PyStrings.Helpers.Tokens import TaggedCommentLines

template_extensions = ['.tpl', '.hlp', '.smarty']

smarty_pattern = regex.compile(r"""
    (?P<comment>\{\*(?P<comment_text>.*?)\*\})
  | (?P<literal>\{literal\}.*?\{/literal\})
  | (?P<php>\{php\}(?P<code>.*?)\{/php\})
  | (?P<ts>\{ts(?P<attributes>\s[^}]*)?\})
""", regex.VERBOSE | regex.DOTALL)

ts_close_tag = '{/ts}'

attribute_pattern = regex.compile(r'''([\w.-]+)\s*=\s*(?:"((?:[^"\\]|\\.)*)"|'((?:[^'\\]|\\.)*)'|([^\s"']+))''', regex.DOTALL)

smarty_variable = regex.compile(r'\$[^\W\d]|`')

# Any tag other than the literal brace tags makes a block body dynamic
smarty_tag = regex.compile(r'\{(?!\s|ldelim\}|rdelim\})')

def ParseAttributes(text : str) -> dict[str, str|None]:
    """
    Attribute values of a Smarty tag. Values that are not literal strings are None.
    """
    attributes : dict[str, str|None] = {}
    for match in attribute_pattern.finditer(text or ''):
        name, double, single, bare = match.groups()
        if double is not None:
            attributes[name] = None if smarty_variable.search(double) else regex.sub(r'\\(["\\])', r'\1', double)
        elif single is not None:
            attributes[name] = regex.sub(r"\\(['\\])", r'\1', single)
        else:
            attributes[name] = None if bare.startswith('$') else bare

    return attributes

def BlockText(body : str) -> str|None:
    """
    Literal text of a {ts} block body, or None if it contains other Smarty tags
    """
    if smarty_tag.search(body):
        return None
    return body.replace('{ldelim}', '{').replace('{rdelim}', '}')

class SmartyParser(SourceParser):
    """
    Extracts {ts} tags from Smarty templates. Embedded {php} blocks are handed to the PHP parser.
    """
    def __init__(self, php_parser : PhpParser, comment_tag : str|None = "TRANSLATORS:"):
        self.php_parser = php_parser
        self.comment_tag = comment_tag

    def parse(self, filepath: str, content: str, catalog: Catalog) -> None:
        pos = 0
        comments : list[str] = []
        comment_end = -1

        while True:
            match = smarty_pattern.search(content, pos)
            if not match:
                break

            pos = match.end()

            if match.group('comment') is not None:
                comments = TaggedCommentLines(match.group('comment_text'), self.comment_tag)
                comment_end = match.end()
                continue

            if match.group('php') is not None:
                first_line = LineNumberAt(content, match.start('code'))
                self.php_parser.ParseCode(filepath, match.group('code'), catalog, first_line=first_line)
                continue

            if match.group('ts') is None:
                continue

            line = LineNumberAt(content, match.start())
            attributes = ParseAttributes(match.group('attributes'))
            tag_comments = comments if comment_end >= 0 and not content[comment_end:match.start()].strip() else []
            comments = []

            if 'msgid' in attributes:
                msgid = attributes['msgid']
            else:
                close = content.find(ts_close_tag, match.end())
                if close < 0:
                    logging.debug(f"Unterminated {{ts}} tag at {filepath}:{line}, ignoring the rest of the file")
                    break

                msgid = BlockText(content[match.end():close])
                pos = close + len(ts_close_tag)

            if not msgid:
                if msgid is None:
                    logging.debug(f"Skipping {{ts}} with non-literal text at {filepath}:{line}")
                continue

            if attributes.get('context', '') is None or attributes.get('plural', '') is None:
                logging.debug(f"Skipping {{ts}} with non-literal context or plural at {filepath}:{line}")
                continue

            catalog.Insert(msgid, filepath, line,
                           msgid_plural=attributes.get('plural') or None,
                           msgctxt=attributes.get('context'),
                           comments=tag_comments)

    def get_file_extensions(self) -> list[str]:
        return template_extensions

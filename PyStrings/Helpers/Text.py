import regex

po_escapes = {
    '\\': '\\\\',
    '"': '\\"',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}

po_escape_pattern = regex.compile(r'[\\"\n\r\t]')

def EscapePo(text : str) -> str:
    """
    Escape a string for use inside a double-quoted catalog value
    """
    return po_escape_pattern.sub(lambda match: po_escapes[match.group(0)], text)

def QuotePo(text : str) -> str:
    return f'"{EscapePo(text)}"'

def LineNumberAt(content : str, offset : int, first_line : int = 1) -> int:
    """
    1-based line number of a character offset
    """
    return first_line + content.count('\n', 0, offset)


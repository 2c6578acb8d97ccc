import re
from typing import NamedTuple


# Escapes on characters missing from this table yield the character itself.
ESCAPES = {
    't': '\t',
    'n': '\n',
    'f': '\f',
    'r': '\r',
    '\\': '\\',
}

_CONTINUATION_OR_ESCAPE = re.compile(r'\\(?:\r\n|\r|\n)[ \t\f]*|\\(.)', re.DOTALL)

DELIMITERS = {'comma': ',', 'pipe': '|', 'tab': '\t'}


class ExportOptions(NamedTuple):
    unique: bool = False
    sort_keys: bool = False


def escaped_char_to_char(c: str) -> str:
    return ESCAPES.get(c, c)


def _replace_escape(match: re.Match) -> str:
    escaped = match.group(1)
    if escaped is None:
        # Line continuation, the indentation that follows is already in the match.
        return ''
    return escaped_char_to_char(escaped)


def unescape(raw: str) -> str:
    """
    Turn the raw text of a key or value token into its logical value.

    Continuations (a backslash, an end of line and the indentation after it)
    are removed and every other backslash escape is mapped through ESCAPES.
    """
    return _CONTINUATION_OR_ESCAPE.sub(_replace_escape, raw)


def decode_latin1(data: bytes) -> str:
    if isinstance(data, str):
        raise ValueError('expected bytes, got str')
    return bytes(data).decode('latin-1')


__all__ = ['ESCAPES', 'DELIMITERS', 'ExportOptions',
           'escaped_char_to_char', 'unescape', 'decode_latin1']

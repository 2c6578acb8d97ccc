import re
from typing import List, Optional, Tuple

import lark
from lark import Lark
from lark.exceptions import UnexpectedInput
from lark.visitors import Transformer

from pyprops.propfile.grammar import GRAMMAR
from pyprops.property import Property
from pyprops.util import unescape, decode_latin1

PROPERTIES_PARSER = Lark(GRAMMAR, start=['properties', 'entry_line'], parser='lalr', lexer='contextual',
                         debug=False)


class ParseError(ValueError):
    """Raised when no comment, blank or entry line can be read at some position of the input."""

    def __init__(self, message: str, offset: Optional[int] = None, line: Optional[int] = None,
                 column: Optional[int] = None, context: str = ''):
        super().__init__(message)
        self.offset = offset
        self.line = line
        self.column = column
        self.context = context

    @classmethod
    def from_lark(cls, error: UnexpectedInput, text: str) -> 'ParseError':
        offset = error.pos_in_stream
        if isinstance(offset, int) and 0 <= offset <= len(text):
            context = error.get_context(text)
        else:
            offset = len(text)
            context = ''
        # lark reports '?' or -1 when the failing token carries no position
        line = error.line if isinstance(error.line, int) and error.line > 0 else None
        column = error.column if isinstance(error.column, int) and error.column > 0 else None

        if line is not None:
            message = 'invalid properties syntax at line %d, column %d (offset %d)' % (line, column or 0, offset)
        else:
            message = 'invalid properties syntax at offset %d' % offset
        return cls(message, offset=offset, line=line, column=column, context=context)


class PropertiesTransformer(Transformer):
    def properties(self, tree):
        return [prop for prop in tree if prop is not None]

    def comment_line(self, tree):
        return None

    def blank_line(self, tree):
        return None

    def entry_line(self, tree):
        if len(tree) == 1:
            return Property(tree[0], '')
        return Property(tree[0], tree[1])

    def key(self, tree):
        token: lark.Token = tree[0]
        return unescape(token.value)

    def value(self, tree):
        token: lark.Token = tree[0]
        return unescape(token.value)


def _parse(text: str, start: str):
    try:
        parse_tree = PROPERTIES_PARSER.parse(text, start=start)
    except UnexpectedInput as e:
        raise ParseError.from_lark(e, text) from e
    return PropertiesTransformer().transform(parse_tree)


def parse_properties(data: bytes) -> List[Property]:
    """
    Parse a whole properties buffer. Bytes are read as Latin-1 characters.

    Comment and blank lines are dropped, entries are returned in input order
    and may repeat a key. Raises ParseError if some line is not a comment, a
    blank line or a key/value entry.
    """
    return _parse(decode_latin1(data), 'properties')


def parse_entry(data: bytes) -> Property:
    """Parse exactly one logical key/value line, without a trailing end of line."""
    return _parse(decode_latin1(data), 'entry_line')


def _terminal_regexp(name: str) -> re.Pattern:
    return re.compile(PROPERTIES_PARSER.get_terminal(name).pattern.to_regexp())


KEY_REGEXP = _terminal_regexp('KEY')
VALUE_REGEXP = _terminal_regexp('VALUE')


def consume_key(data: bytes) -> Tuple[str, bytes]:
    """Read the key at the start of `data`, returning it with the unread bytes."""
    text = decode_latin1(data)
    match = KEY_REGEXP.match(text)
    if match is None:
        raise ParseError('expected a key at offset 0', offset=0, line=1, column=1, context=text[:40])
    return unescape(match.group()), text[match.end():].encode('latin-1')


def consume_value(data: bytes) -> Tuple[str, bytes]:
    """Read the (possibly empty) value at the start of `data`, returning it with the unread bytes."""
    text = decode_latin1(data)
    match = VALUE_REGEXP.match(text)
    if match is None:
        return '', text.encode('latin-1')
    return unescape(match.group()), text[match.end():].encode('latin-1')


def parse_propfile(filepath, verbose: bool = False) -> List[Property]:
    if verbose:
        print('Parsing: %s' % filepath)
    with open(filepath, 'rb') as f:
        data = f.read()
    props = parse_properties(data)
    if verbose:
        print('Found %d properties' % len(props))
    return props


__all__ = ['PROPERTIES_PARSER', 'PropertiesTransformer', 'ParseError',
           'parse_properties', 'parse_entry', 'parse_propfile',
           'consume_key', 'consume_value']

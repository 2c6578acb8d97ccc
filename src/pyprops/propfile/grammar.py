GRAMMAR = r"""

properties: _line (_EOL _line)*
_line: comment_line | blank_line | entry_line

comment_line: _WS? _COMMENT
blank_line: _WS?
entry_line: _indent? key _separator? value?

key: KEY
value: VALUE

_separator: _gap | _gap? _SEP _space?

// Kept as three rules so the lexer knows whether a key, a separator or a value comes next
_indent: (_WS | _CONT) | _indent (_WS | _CONT)
_gap: (_WS | _CONT) | _gap (_WS | _CONT)
_space: (_WS | _CONT) | _space (_WS | _CONT)


WHITESPACE: /[ \t\f]+/
EOL: /(?:\r\n|\r|\n)/
CONTINUATION: /\\/ EOL WHITESPACE?

KEY_CHAR: /[^:=\r\n \t\f\\]/
VALUE_CHAR: /[^\r\n\\]/
ESCAPED_CHAR: /\\[^u\r\n]/


_WS.3: WHITESPACE
_CONT.3: CONTINUATION
_COMMENT.3: /[#!][^\r\n]*/
_SEP.2: /[:=]/
_EOL: EOL

KEY.1: (ESCAPED_CHAR | KEY_CHAR)+ (CONTINUATION+ (ESCAPED_CHAR | KEY_CHAR)+)*
VALUE: (ESCAPED_CHAR | VALUE_CHAR | CONTINUATION)+
"""

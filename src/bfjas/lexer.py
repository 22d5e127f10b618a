## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import functools

import lark
from .types import Token


GRAMMAR = r"""start: (PLUS | MINUS | RIGHT | LEFT | PUT_CHAR | READ_CHAR | JUMP_IF_ZERO | JUMP_IF_NON_ZERO)*

// OPERATORS
PLUS: "+"
MINUS: "-"
RIGHT: ">"
LEFT: "<"
PUT_CHAR: "."
READ_CHAR: ","
JUMP_IF_ZERO: "["
JUMP_IF_NON_ZERO: "]"

// COMMENTS, i.e. anything else including whitespace.
COMMENT: /[^+\-<>.,\[\]]+/
%ignore COMMENT
"""


@functools.cache
def _build_parser() -> lark.Lark:
    return lark.Lark(GRAMMAR, start='start', parser="lalr", lexer="basic")


def _scan(source: str):
    # Every character is either an operator or part of a COMMENT, so this can't fail.
    tree = _build_parser().parse(source)
    for tok in tree.children:
        assert isinstance(tok, lark.Token)
        yield tok


def tokenize(source: str) -> list[Token]:
    """Filter source text down to its operator tokens, in order."""
    return [Token[tok.type] for tok in _scan(source)]


def locate(source: str, index: int) -> tuple[int, int]:
    """Return the 1-based (line, column) in `source` of the token at `index`."""
    for i, tok in enumerate(_scan(source)):
        if i == index: return tok.line, tok.column
    raise IndexError(f"Token index {index} is beyond the end of the source.")


def detokenize(tokens) -> str:
    return ''.join(t.symbol for t in tokens)

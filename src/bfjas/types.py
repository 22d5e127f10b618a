## bfjas — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum
from typing import NamedTuple


class Token(Enum):
    PLUS = '+'
    MINUS = '-'
    RIGHT = '>'
    LEFT = '<'
    PUT_CHAR = '.'
    READ_CHAR = ','
    JUMP_IF_ZERO = '['
    JUMP_IF_NON_ZERO = ']'

    @property
    def symbol(self) -> str:
        return self.value

    def __repr__(self):
        return f"{self.name}"


# Runs of these collapse into one instruction with a count argument.
FOLDABLE = frozenset({Token.PLUS, Token.MINUS, Token.RIGHT, Token.LEFT, Token.PUT_CHAR, Token.READ_CHAR})

SYMBOLS = ''.join(t.value for t in Token)


class Instruction(NamedTuple):
    """Folded operation; `argument` is a run length, or the index of the partner
    instruction for JUMP_IF_ZERO / JUMP_IF_NON_ZERO."""
    kind: Token
    argument: int

    def __repr__(self):
        return f"({self.kind!r},{self.argument})"

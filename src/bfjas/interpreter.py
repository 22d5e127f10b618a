## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Direct interpreter: scans the source characters themselves, independent of
# the folded instruction list used for code generation.
#
# The tape has a fixed size and the pointer is never clamped or wrapped:
# accessing a cell outside `[0, tape_size)` raises `BFTapeError`.
#

import sys
from typing import Callable

from .errors import BFTapeError, BFUnmatchedLoop
from .formatting import show_step


TAPE_SIZE = 100


def _position(source: str, offset: int) -> tuple[int, int]:
    line_start = source.rfind('\n', 0, offset) + 1
    return source.count('\n', 0, offset) + 1, offset - line_start + 1

def interpret(source: str, *, tape_size: int = TAPE_SIZE, read_line: Callable[[], str] | None = None,
              verbosity: int = 0, stats: dict | None = None) -> str:
    """Run `source` on a zeroed tape and return everything written by `.`.

    Input `,` reads one line with `read_line` (default: stdin) and stores the
    code of its first character modulo 256.  At end of input (an empty string
    is returned) the cell is left unchanged.
    """
    read_line = sys.stdin.readline if read_line is None else read_line
    tape = bytearray(tape_size)
    ptr = 0
    stack: list[int] = []
    output: list[str] = []
    skipping, depth = False, 0

    def cell() -> int:
        if not (0 <= ptr < tape_size):
            raise BFTapeError(f"Tape pointer {ptr} is outside the tape of {tape_size} cells.",
                              bf_token=source[i], bf_index=i, pointer=ptr, tape_size=tape_size)
        return ptr

    def is_notable(c):
        return c in '[],.'

    i, step = 0, 0
    while i < len(source):
        c = source[i]
        if skipping:
            # Skip forward to the `]` that matches the `[` which started skipping.
            if c == '[':
                depth += 1
            elif c == ']':
                if depth == 0: skipping = False
                else: depth -= 1
            i += 1
            continue

        match c:
            case '+':
                j = cell(); tape[j] = (tape[j] + 1) & 0xFF
            case '-':
                j = cell(); tape[j] = (tape[j] - 1) & 0xFF
            case '>':
                ptr += 1
            case '<':
                ptr -= 1
            case '[':
                if tape[cell()] == 0:
                    skipping = True
                else:
                    stack.append(i)
            case ']':
                if not stack:
                    line, column = _position(source, i)
                    raise BFUnmatchedLoop("Loop close `]` has no matching `[`.", line=line, column=column, token=c, index=i)
                if tape[cell()] != 0:
                    i = stack[-1]
                else:
                    stack.pop()
            case '.':
                output.append(chr(tape[cell()]))
            case ',':
                line = read_line()
                if line:
                    tape[cell()] = ord(line[0]) & 0xFF
            case _:
                i += 1
                continue

        if verbosity == 2 or (verbosity == 1 and is_notable(c)):
            show_step(step, c, tape, ptr)
        step += 1
        i += 1

    if stats is not None:
        stats['steps'] = stats.get('steps', 0) + step

    return ''.join(output)

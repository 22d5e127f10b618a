## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import Instruction, FOLDABLE


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_instruction(inst: Instruction) -> str:
    kind, arg = inst
    if kind in FOLDABLE:
        return f"{kind.symbol}×{arg}" if arg > 1 else kind.symbol
    return f"{kind.symbol}→{arg}"

def format_instructions(instructions: list[Instruction], width=None) -> str:
    text = ' '.join(format_instruction(i) for i in instructions) if instructions else '∅'
    if width is not None and len(text) > width:
        text = text[:+width-2] + ' …'
    return text


def format_tape(tape: bytes, ptr: int, radius: int = 4) -> str:
    # Window of cells around the pointer; the current cell is highlighted.
    lo, hi = max(0, ptr - radius), min(len(tape), ptr + radius + 1)
    cells = []
    for i in range(lo, hi):
        cells.append(f"\033[1;97m[{tape[i]:>3}]\033[0m" if i == ptr else f" {tape[i]:>3} ")
    prefix = '… ' if lo > 0 else '  '
    suffix = ' …' if hi < len(tape) else ''
    return prefix + ''.join(cells) + suffix

def show_step(step: int, op: str, tape: bytes, ptr: int, file=None):
    print(f"\033[90m{step:>5} :\033[0m  \033[36m{op}\033[0m  ptr={ptr:<3} {format_tape(tape, ptr) if 0 <= ptr < len(tape) else '∅'}", file=file)

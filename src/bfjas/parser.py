## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Token, Instruction, FOLDABLE
from .errors import BFUnmatchedLoop, BFUnclosedLoop
from .lexer import locate


def _fold(tokens: list[Token], pos: int) -> tuple[Instruction, int]:
    token, count = tokens[pos], 1
    while pos + count < len(tokens) and tokens[pos + count] == token:
        count += 1
    return Instruction(token, count), pos + count


def parse(tokens: list[Token], filename: str | None = None, source: str | None = None) -> list[Instruction]:
    """Fold runs of identical operators and pair up loops by instruction index.

    Each JUMP_IF_ZERO holds the index of its JUMP_IF_NON_ZERO and vice versa.
    Raises `BFUnmatchedLoop` for a stray `]` and `BFUnclosedLoop` if any `[`
    is left open, so brackets in the result are always paired 1:1.
    """
    tokens = list(tokens)
    instructions: list[Instruction] = []
    stack: list[tuple[int, int]] = []  # (instruction index, token index) of open loops.

    def _error(error_class, message, token_index):
        line, column = locate(source, token_index) if source is not None else (None, None)
        tok = tokens[token_index].symbol
        return error_class(message, filename=filename, line=line, column=column, token=tok, index=token_index)

    pos = 0
    while pos < len(tokens):
        token = tokens[pos]
        if token in FOLDABLE:
            inst, pos = _fold(tokens, pos)
            instructions.append(inst)
            continue

        if token == Token.JUMP_IF_ZERO:
            stack.append((len(instructions), pos))
            instructions.append(Instruction(Token.JUMP_IF_ZERO, 0))
        elif token == Token.JUMP_IF_NON_ZERO:
            if not stack:
                raise _error(BFUnmatchedLoop, "Loop close `]` has no matching `[`.", pos)
            open_index, _ = stack.pop()
            instructions[open_index] = Instruction(Token.JUMP_IF_ZERO, len(instructions))
            instructions.append(Instruction(Token.JUMP_IF_NON_ZERO, open_index))
        else:
            raise NotImplementedError(f"Unexpected token {token!r} from lexer.")
        pos += 1

    if stack:
        _, token_index = stack[-1]
        raise _error(BFUnclosedLoop, f"Loop open `[` is never closed ({len(stack)} still open at end of program).", token_index)
    return instructions


def expand(instructions: list[Instruction]) -> list[Token]:
    """Inverse of folding: repeat each foldable operator by its run length."""
    tokens = []
    for kind, argument in instructions:
        tokens.extend([kind] * (argument if kind in FOLDABLE else 1))
    return tokens


def check_pairing(instructions: list[Instruction]) -> bool:
    """True if every loop instruction points at a partner that points back."""
    for i, (kind, argument) in enumerate(instructions):
        if kind not in (Token.JUMP_IF_ZERO, Token.JUMP_IF_NON_ZERO): continue
        if not (0 <= argument < len(instructions)): return False
        partner = instructions[argument]
        if partner.kind == kind or partner.kind in FOLDABLE or partner.argument != i: return False
    return True


def format_parse_error_context(filename, line, column, token_value, source=None):
    lines = source.splitlines(keepends=True) if source else open(filename, 'r').readlines()
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i].rstrip('\n')
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if column > 0 and column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+len(token_value)-1]}\033[0m" +
                    line_content[column+len(token_value)-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'

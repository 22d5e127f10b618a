## bfjas — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import random

import pytest

from bfjas.types import Token, Instruction
from bfjas.lexer import tokenize
from bfjas.parser import parse, expand, check_pairing
from bfjas.errors import BFParseError, BFUnmatchedLoop, BFUnclosedLoop

JZ, JNZ = Token.JUMP_IF_ZERO, Token.JUMP_IF_NON_ZERO


def _parse(source: str):
    return parse(tokenize(source), filename="<test>", source=source)


def _random_program(rng: random.Random, length: int) -> str:
    """Helper: build a well-formed program with nested and sibling loops."""
    out, depth = [], 0
    for _ in range(length):
        choice = rng.random()
        if choice < 0.15:
            out.append('['); depth += 1
        elif choice < 0.3 and depth > 0:
            out.append(']'); depth -= 1
        else:
            out.append(rng.choice("+-<>.,") * rng.randint(1, 4))
    return ''.join(out) + ']' * depth


def test_runs_are_folded_into_counts():
    assert _parse("++>+") == [(Token.PLUS, 2), (Token.RIGHT, 1), (Token.PLUS, 1)]


def test_instructions_are_named_tuples():
    [inst] = _parse("---")
    assert isinstance(inst, Instruction)
    assert inst.kind == Token.MINUS and inst.argument == 3


def test_folding_never_crosses_a_different_token():
    assert _parse("+-+") == [(Token.PLUS, 1), (Token.MINUS, 1), (Token.PLUS, 1)]
    assert _parse("..,,<<<") == [(Token.PUT_CHAR, 2), (Token.READ_CHAR, 2), (Token.LEFT, 3)]


def test_folding_ignores_comments_between_repeats():
    assert _parse("+ + +\n+") == [(Token.PLUS, 4)]


def test_loops_are_not_folded():
    assert _parse("[[]]") == [(JZ, 3), (JZ, 2), (JNZ, 1), (JNZ, 0)]


def test_simple_loop_cross_references_indices():
    assert _parse("[-]") == [(JZ, 2), (Token.MINUS, 1), (JNZ, 0)]


def test_deep_nesting_with_sibling_loops():
    instructions = _parse("[[[-]>[+]]<[.]]")
    assert [i.kind for i in instructions] == [
        JZ, JZ, JZ, Token.MINUS, JNZ, Token.RIGHT, JZ, Token.PLUS, JNZ, JNZ, Token.LEFT, JZ, Token.PUT_CHAR, JNZ, JNZ]
    pairs = {i: inst.argument for i, inst in enumerate(instructions) if inst.kind == JZ}
    assert pairs == {0: 14, 1: 9, 2: 4, 6: 8, 11: 13}
    assert check_pairing(instructions)


@pytest.mark.parametrize("source", ["", "no operators here", "\n\n  \t"])
def test_empty_programs_parse_to_nothing(source):
    assert _parse(source) == []


def test_random_programs_pair_every_loop():
    rng = random.Random(1234)
    for _ in range(50):
        instructions = _parse(_random_program(rng, 60))
        opens = [i for i, inst in enumerate(instructions) if inst.kind == JZ]
        closes = [i for i, inst in enumerate(instructions) if inst.kind == JNZ]
        assert len(opens) == len(closes)
        for i in opens:
            assert instructions[instructions[i].argument] == (JNZ, i)
        assert check_pairing(instructions)


def test_expand_reproduces_filtered_tokens():
    rng = random.Random(99)
    for source in ["++>+", "[-]", "+++[>++<-]..,,", _random_program(rng, 80)]:
        tokens = tokenize(source)
        assert expand(parse(tokens)) == tokens


def test_stray_close_is_a_parse_error():
    with pytest.raises(BFUnmatchedLoop) as exc_info:
        _parse("]")
    exc = exc_info.value
    assert isinstance(exc, BFParseError)
    assert exc.token == "]"
    assert (exc.line, exc.column, exc.index) == (1, 1, 0)
    assert exc.filename == "<test>"


def test_extra_close_after_balanced_loop_reports_its_position():
    with pytest.raises(BFUnmatchedLoop) as exc_info:
        _parse("+[-]\n  ]")
    assert (exc_info.value.line, exc_info.value.column) == (2, 3)
    assert exc_info.value.index == 4


def test_unclosed_open_is_a_parse_error():
    with pytest.raises(BFUnclosedLoop) as exc_info:
        _parse("+[[-]")
    assert isinstance(exc_info.value, BFParseError)
    assert exc_info.value.index == 1
    assert exc_info.value.token == "["


def test_parse_without_source_has_no_position():
    with pytest.raises(BFUnmatchedLoop) as exc_info:
        parse([Token.PLUS, JNZ])
    assert exc_info.value.line is None
    assert exc_info.value.index == 1


def test_check_pairing_detects_broken_lists():
    assert check_pairing([Instruction(JZ, 1), Instruction(JNZ, 0)])
    assert not check_pairing([Instruction(JZ, 0), Instruction(JNZ, 0)])
    assert not check_pairing([Instruction(JZ, 5)])
    assert not check_pairing([Instruction(JZ, 1), Instruction(Token.PLUS, 0)])

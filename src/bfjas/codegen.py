## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Jasmin assembler output.  Local slot 1 holds the tape pointer, slot 2 the
# `int[100]` tape.  Loop instructions are addressed by name with labels from
# a `LabelAllocator`; the parser's jump indices are not consulted here.
#

from .types import Token, Instruction
from .labels import LabelAllocator


CLASS_NAME = 'Main'
TAPE_SIZE = 100

HEADER = f"""
.class public {CLASS_NAME}
.super java/lang/Object

.method public <init>()V
    aload_0
    invokenonvirtual java/lang/Object/<init>()V
    return
.end method

.method public static main([Ljava/lang/String;)V
    .limit stack 10
    .limit locals 3

    iconst_0
    istore_1

    bipush {TAPE_SIZE}
    newarray int
    astore_2
"""

TAIL = """
    return
.end method
"""


def _push_constant(value: int) -> str:
    if -128 <= value <= 127: return f"bipush {value}"
    if -32768 <= value <= 32767: return f"sipush {value}"
    return f"ldc {value}"


def plus(count: int) -> str:
    return '\n'.join([
        "aload_2",
        "iload_1",
        "dup2",
        "iaload",
        _push_constant(count),
        "iadd",
        "iastore",
    ])

def move(count: int) -> str:
    return f"iinc 1 {count}"

def put_char(count: int = 1) -> str:
    return '\n'.join([
        "getstatic java/lang/System/out Ljava/io/PrintStream;",
        "aload_2",
        "iload_1",
        "iaload",
        "i2c",
        "invokevirtual java/io/PrintStream/print(C)V",
    ] * count)

def read_char(count: int = 1) -> str:
    return '\n'.join([
        "aload_2",
        "iload_1",
        "getstatic java/lang/System/in Ljava/io/InputStream;",
        "invokevirtual java/io/InputStream/read()I",
        "iastore",
    ] * count)

def loop_start(labels: LabelAllocator) -> str:
    n = labels.enter()
    return '\n'.join([
        f"loop{n}Start:",
        "aload_2",
        "iload_1",
        "iaload",
        f"ifeq loop{n}End",
    ])

def loop_end(labels: LabelAllocator) -> str:
    n = labels.exit()
    return '\n'.join([f"goto loop{n}Start", f"loop{n}End:"])


def fragment(inst: Instruction, labels: LabelAllocator) -> str:
    kind, arg = inst
    match kind:
        case Token.PLUS: return plus(arg)
        case Token.MINUS: return plus(-arg)
        case Token.RIGHT: return move(arg)
        case Token.LEFT: return move(-arg)
        case Token.PUT_CHAR: return put_char(arg)
        case Token.READ_CHAR: return read_char(arg)
        case Token.JUMP_IF_ZERO: return loop_start(labels)
        case Token.JUMP_IF_NON_ZERO: return loop_end(labels)
    raise NotImplementedError(f"No code generation for {kind!r}.")


def generate(instructions: list[Instruction]) -> str:
    """Render the whole class: header, one fragment per instruction, trailer."""
    labels = LabelAllocator()
    code = [HEADER]
    for inst in instructions:
        code.append(fragment(inst, labels))
    code.append(TAIL)
    return '\n'.join(code)

## bfjas — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from pathlib import Path

from .types import Token, Instruction
from .errors import *
from .lexer import tokenize
from .parser import parse
from .codegen import generate
from .interpreter import interpret

DEFAULT_OUTPUT = 'main.j'


def compile_source(source: str, filename: str | None = None) -> str:
    """Lex, fold and generate Jasmin assembler text for a whole program."""
    return generate(parse(tokenize(source), filename=filename, source=source))

def compile_file(path: str | Path, output: str | Path = DEFAULT_OUTPUT) -> Path:
    path, output = Path(path), Path(output)
    code = compile_source(path.read_text(encoding='utf-8'), filename=str(path))
    output.write_text(code, encoding='utf-8')
    return output

def run(source: str, **kwargs) -> str:
    """Interpret `source` and print its whole output once, newline-terminated."""
    output = interpret(source, **kwargs)
    print(output)
    return output

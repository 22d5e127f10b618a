## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# bfjas — Compiles the eight-operator tape language to Jasmin assembler, or interprets it.
#

import sys
from pathlib import Path
from dataclasses import dataclass

import click

from .errors import BFError, BFParseError, BFTapeError
from .parser import parse, format_parse_error_context
from .formatting import write_without_ansi, format_instructions
from .lexer import tokenize
from .codegen import generate
from .interpreter import interpret, TAPE_SIZE

from . import api


@dataclass(frozen=True)
class RunnerConfig:
    verbose: int
    plain: bool


class BFRunner:
    def __init__(self, config: RunnerConfig):
        self.verbose = config.verbose
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.failure = False
        self.stats = {'steps': 0}

    def _fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '') -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        self.failure = True

    def _handle_exception(self, exc: Exception, filename: str, source: str | None) -> None:
        if isinstance(exc, BFParseError):
            context = ''
            if exc.line is not None and source is not None:
                context = format_parse_error_context(filename, exc.line, exc.column, exc.token or '', source=source)
            context += f"\n\033[90m{str(exc)}\033[0m\n"
            self._fatal_error("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem!", type(exc).__name__, context)
        elif isinstance(exc, BFTapeError):
            detail = f"Operator `\033[1;97m{exc.bf_token}\033[0m` at offset {exc.bf_index} of `\033[97m{filename}\033[0m` left the tape!"
            self._fatal_error("RUNTIME ERROR.", detail, type(exc).__name__, f"\033[90m{str(exc)}\033[0m\n")
        elif isinstance(exc, OSError):
            detail = f"Accessing `\033[97m{exc.filename or filename}\033[0m` failed: {exc.strerror or exc}"
            self._fatal_error("IO ERROR.", detail, type(exc).__name__)
        else:
            self._fatal_error("INTERNAL ERROR.", f"Processing `\033[97m{filename}\033[0m` failed: {exc}", type(exc).__name__)

    def _read_source(self, script: Path) -> str | None:
        try:
            return script.read_text(encoding='utf-8')
        except OSError as exc:
            self._handle_exception(exc, str(script), None)
            return None

    def compile_file(self, script: Path, output: Path) -> None:
        if (source := self._read_source(script)) is None: return
        try:
            tokens = tokenize(source)
            instructions = parse(tokens, filename=str(script), source=source)
            if self.verbose > 0:
                print(f"\033[90m{len(tokens):,} tokens → {len(instructions):,} instructions\033[0m")
                print(format_instructions(instructions, width=None if self.verbose > 1 else 72))
            output.write_text(generate(instructions), encoding='utf-8')
        except (BFError, OSError) as exc:
            self._handle_exception(exc, str(script), source)
        else:
            print(f"Compiled code to {output}")

    def run_file(self, script: Path, tape_size: int) -> None:
        if (source := self._read_source(script)) is None: return
        try:
            output = interpret(source, tape_size=tape_size, verbosity=self.verbose, stats=self.stats)
        except BFError as exc:
            self._handle_exception(exc, str(script), source)
        else:
            print(output)
            if self.verbose > 0:
                print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
                print(f"step\t\033[97m{self.stats['steps']:,}\033[0m")

    def finalize(self) -> int:
        return 1 if self.failure else 0


@click.group()
@click.option('--verbose', '-v', default=0, count=True, help='Show folded instructions, or trace interpreter steps.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, plain: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RunnerConfig(verbose=verbose, plain=plain)


@cli.command('compile')
@click.argument('script', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--output', '-o', default=api.DEFAULT_OUTPUT, type=click.Path(dir_okay=False, path_type=Path),
              help='Assembler file to write, overwritten if present.')
@click.pass_context
def compile_command(ctx: click.Context, script: Path, output: Path) -> None:
    runner = BFRunner(ctx.obj['config'])
    runner.compile_file(script, output)
    ctx.exit(runner.finalize())


@cli.command('run')
@click.argument('script', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--tape-size', default=TAPE_SIZE, type=click.IntRange(min=1), envvar='BF_TAPE_SIZE', show_default=True,
              help='Number of byte cells on the interpreter tape.')
@click.pass_context
def run_command(ctx: click.Context, script: Path, tape_size: int) -> None:
    runner = BFRunner(ctx.obj['config'])
    runner.run_file(script, tape_size)
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g = [t for t in a if t in ('--plain', '-p') or t == '--verbose' or (t.startswith('-v') and set(t[1:]) == {'v'})]
    r = [t for t in a if t not in g]

    # A bare source path compiles it, as does no argument at all (reported as missing).
    if not r or r[0] not in cli.commands and r[0] not in ('--help', '-h'):
        r = ['compile', *r]
    elif r[0] in ('--help', '-h'):
        g, r = g + ['--help'], []

    cli.main(args=[*g, *r], prog_name='bfjas')


if __name__ == "__main__":
    main()

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple

from .bytecode import Instruction
from .compiler import lower
from .parser import Statement, parse_source
from .vm import EOF_ZERO, VirtualMachine


@dataclass(frozen=True)
class CompileOptions:
    verify_jumps: bool = True


@dataclass(frozen=True)
class CompileResult:
    code: List[Instruction]
    tree: List[Statement]


@dataclass(frozen=True)
class RunOptions:
    eof: str = EOF_ZERO


@dataclass(frozen=True)
class RunResult:
    steps: int
    pointer: int
    nonzero_cells: List[Tuple[int, int]]


def compile_string(source: str, *, options: Optional[CompileOptions] = None) -> CompileResult:
    opts = options or CompileOptions()
    tree = parse_source(source)
    code = lower(tree, verify=opts.verify_jumps)
    return CompileResult(code=code, tree=tree)


def compile_file(path: str | Path, *, options: Optional[CompileOptions] = None, encoding: str = "utf-8") -> CompileResult:
    p = Path(path)
    return compile_string(p.read_text(encoding=encoding), options=options)


def run_code(code: List[Instruction], *, stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None,
             options: Optional[RunOptions] = None) -> RunResult:
    opts = options or RunOptions()
    vm = VirtualMachine(code, stdin=stdin, stdout=stdout, eof=opts.eof)
    state = vm.run()
    return RunResult(steps=state.steps, pointer=state.pointer, nonzero_cells=state.nonzero_cells())


def run_string(source: str, *, stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None,
               options: Optional[RunOptions] = None) -> RunResult:
    # compiles completely before running, so a malformed program produces no output
    result = compile_string(source)
    return run_code(result.code, stdin=stdin, stdout=stdout, options=options)


def run_file(path: str | Path, *, stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None,
             options: Optional[RunOptions] = None, encoding: str = "utf-8") -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding), stdin=stdin, stdout=stdout, options=options)

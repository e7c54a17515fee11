from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Union

from .errors import BFInternalError


# ---------------- Instructions ----------------
@dataclass(frozen=True)
class ChangeValue:
    delta: int  # signed change to the current cell


@dataclass(frozen=True)
class MovePointer:
    delta: int  # signed change to the cell pointer


@dataclass(frozen=True)
class Output:
    pass


@dataclass(frozen=True)
class Input:
    pass


@dataclass(frozen=True)
class JumpIfZero:
    # index of the matching JumpIfNonZero; the pc is incremented after the jump
    target: int


@dataclass(frozen=True)
class JumpIfNonZero:
    # index of the matching JumpIfZero
    target: int


Instruction = Union[ChangeValue, MovePointer, Output, Input, JumpIfZero, JumpIfNonZero]


def check_jumps(code: Sequence[Instruction]) -> None:
    """
    Verify that every JumpIfZero/JumpIfNonZero pair points at each other.

    Pairs are re-derived with a bracket stack over the flat sequence, which is
    independent of how the targets were computed. Raises BFInternalError on
    the first disagreement.
    """
    pending: List[int] = []
    for i, ins in enumerate(code):
        if isinstance(ins, JumpIfZero):
            pending.append(i)
        elif isinstance(ins, JumpIfNonZero):
            if not pending:
                raise BFInternalError(f"JumpIfNonZero at {i} has no matching JumpIfZero")
            start = pending.pop()
            opener = code[start]
            if opener.target != i:
                raise BFInternalError(
                    f"JumpIfZero at {start} targets {opener.target}, expected {i}")
            if ins.target != start:
                raise BFInternalError(
                    f"JumpIfNonZero at {i} targets {ins.target}, expected {start}")
    if pending:
        raise BFInternalError(f"JumpIfZero at {pending[-1]} has no matching JumpIfNonZero")


def _mnemonic(ins: Instruction) -> str:
    if isinstance(ins, ChangeValue):
        return f"CHANGE  {ins.delta:+d}"
    if isinstance(ins, MovePointer):
        return f"MOVE    {ins.delta:+d}"
    if isinstance(ins, Output):
        return "OUTPUT"
    if isinstance(ins, Input):
        return "INPUT"
    if isinstance(ins, JumpIfZero):
        return f"JZ      {ins.target}"
    if isinstance(ins, JumpIfNonZero):
        return f"JNZ     {ins.target}"
    raise TypeError(f"not an instruction: {ins!r}")


def disassemble(code: Sequence[Instruction]) -> str:
    """Render one instruction per line, indented by loop depth."""
    width = len(str(max(len(code) - 1, 0)))
    out: List[str] = []
    depth = 0
    for i, ins in enumerate(code):
        if isinstance(ins, JumpIfNonZero):
            depth -= 1
        out.append(f"{i:>{width}}  {'  ' * depth}{_mnemonic(ins)}")
        if isinstance(ins, JumpIfZero):
            depth += 1
    return "\n".join(out)

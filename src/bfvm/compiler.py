from __future__ import annotations

import logging

from typing import Iterator, List, Optional, Sequence, Tuple

from . import parser as nodes
from .bytecode import (
    ChangeValue,
    Input,
    Instruction,
    JumpIfNonZero,
    JumpIfZero,
    MovePointer,
    Output,
    check_jumps,
)

logger = logging.getLogger(__name__)

_SIMPLE = {
    nodes.Increment: ChangeValue(1),
    nodes.Decrement: ChangeValue(-1),
    nodes.PointerUp: MovePointer(1),
    nodes.PointerDown: MovePointer(-1),
    nodes.Output: Output(),
    nodes.Input: Input(),
}


def lower(tree: Sequence[nodes.Statement], *, verify: bool = False) -> List[Instruction]:
    """
    Flatten a statement tree into bytecode.

    Entering a Block reserves a placeholder JumpIfZero slot and remembers its
    index on the work stack. When the block's body is exhausted a
    JumpIfNonZero back to that slot is appended and the placeholder is
    replaced by a JumpIfZero pointing at the new JumpIfNonZero. Nothing is
    ever inserted, so an index is final as soon as it is handed out.

    With ``verify`` the finished sequence is run through ``check_jumps``.
    """
    code: List[Instruction] = []
    # (remaining statements, index of the block's JumpIfZero or None for the root)
    work: List[Tuple[Iterator[nodes.Statement], Optional[int]]] = [(iter(tree), None)]

    while work:
        body, start = work[-1]
        for node in body:
            if isinstance(node, nodes.Block):
                work.append((iter(node.body), len(code)))
                code.append(JumpIfZero(-1))
                break
            code.append(_SIMPLE[type(node)])
        else:
            work.pop()
            if start is not None:
                end = len(code)
                code.append(JumpIfNonZero(start))
                code[start] = JumpIfZero(end)

    if verify:
        check_jumps(code)
    logger.debug("lowered %d top-level statements to %d instructions", len(tree), len(code))
    return code

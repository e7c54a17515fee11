from __future__ import annotations

import logging
import sys

from typing import BinaryIO, Optional, Sequence

from .bytecode import (
    ChangeValue,
    Input,
    Instruction,
    JumpIfNonZero,
    JumpIfZero,
    MovePointer,
    Output,
)
from .errors import BFInputError, BFInternalError
from .state import CELL_SIZE, TAPE_SIZE, MachineState

logger = logging.getLogger(__name__)

EOF_ZERO = 'zero'
EOF_UNCHANGED = 'unchanged'
EOF_ERROR = 'error'
EOF_POLICIES = (EOF_ZERO, EOF_UNCHANGED, EOF_ERROR)


def change_value(current: int, delta: int) -> int:
    new = current + delta
    if new == CELL_SIZE:
        return 0
    if new == -1:
        return CELL_SIZE - 1
    if 0 <= new < CELL_SIZE:
        return new
    raise BFInternalError(f"Value changed by more than one ({current} {delta:+d})")


def move_pointer(current: int, delta: int) -> int:
    new = current + delta
    if new == TAPE_SIZE:
        return 0
    if new == -1:
        return TAPE_SIZE - 1
    if 0 <= new < TAPE_SIZE:
        return new
    raise BFInternalError(f"Pointer moved by more than one ({current} {delta:+d})")


def read_line(stream: BinaryIO) -> Optional[bytes]:
    """
    Read the next ASCII-only line from ``stream``.

    Lines holding any byte >= 0x80 are dropped and the next line is read.
    Returns None at end of input.
    """
    while True:
        line = stream.readline()
        if not line:
            return None
        if line.isascii():
            return line
        logger.debug("discarded non-ASCII input line (%d bytes)", len(line))


class VirtualMachine:
    """
    Executes a flat instruction sequence against a 30000-cell byte tape.

    Every instruction is followed by ``pc += 1``; a taken jump first sets the
    pc to its target, which is therefore the index just before the landing
    instruction. The machine halts when the pc runs past the last
    instruction.

    Output bytes are written to ``stdout`` and flushed one at a time. Input is
    read a line at a time from ``stdin`` into the pending queue and handed out
    one byte per Input instruction.
    """

    def __init__(self, code: Sequence[Instruction], *, stdin: Optional[BinaryIO] = None,
                 stdout: Optional[BinaryIO] = None, eof: str = EOF_ZERO):
        if eof not in EOF_POLICIES:
            raise ValueError(f"Unknown EOF policy: {eof!r} (expected one of {', '.join(EOF_POLICIES)})")
        self.code = list(code)
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.eof = eof
        self.state = MachineState()

    @property
    def halted(self) -> bool:
        return self.state.pc >= len(self.code)

    def step(self) -> bool:
        """Execute one instruction. Returns False once the program has halted."""
        st = self.state
        if st.pc >= len(self.code):
            return False

        ins = self.code[st.pc]
        kind = type(ins)
        if kind is ChangeValue:
            st.current = change_value(st.current, ins.delta)
        elif kind is MovePointer:
            st.pointer = move_pointer(st.pointer, ins.delta)
        elif kind is JumpIfZero:
            if st.current == 0:
                st.pc = ins.target
        elif kind is JumpIfNonZero:
            if st.current != 0:
                st.pc = ins.target
        elif kind is Output:
            self.stdout.write(bytes((st.current,)))
            self.stdout.flush()
        elif kind is Input:
            value = self._read_byte()
            if value is not None:
                st.current = value

        st.pc += 1
        st.steps += 1
        return True

    def run(self) -> MachineState:
        while self.step():
            pass
        logger.debug("halted after %d steps (pointer=%d)", self.state.steps, self.state.pointer)
        return self.state

    def _read_byte(self) -> Optional[int]:
        queue = self.state.input_queue
        if not queue:
            line = read_line(self.stdin)
            if line is None:
                return self._on_eof()
            logger.debug("buffered %d input bytes", len(line))
            queue.extend(line)
        return queue.popleft()

    def _on_eof(self) -> Optional[int]:
        if self.eof == EOF_ZERO:
            return 0
        if self.eof == EOF_UNCHANGED:
            return None
        raise BFInputError(f"Input exhausted at instruction {self.state.pc}")

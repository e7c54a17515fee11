from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Tuple

import numpy as np

TAPE_SIZE = 30000
CELL_SIZE = 256


def _new_tape() -> np.ndarray:
    return np.zeros(TAPE_SIZE, dtype=np.uint8)


@dataclass
class MachineState:
    tape: np.ndarray = field(default_factory=_new_tape)
    pointer: int = 0
    pc: int = 0
    input_queue: Deque[int] = field(default_factory=deque)
    steps: int = 0

    def reset(self) -> None:
        self.tape.fill(0)
        self.pointer = 0
        self.pc = 0
        self.input_queue.clear()
        self.steps = 0

    @property
    def current(self) -> int:
        return int(self.tape[self.pointer])

    @current.setter
    def current(self, value: int) -> None:
        self.tape[self.pointer] = value

    def nonzero_cells(self) -> List[Tuple[int, int]]:
        return [(int(i), int(self.tape[i])) for i in np.nonzero(self.tape)[0]]

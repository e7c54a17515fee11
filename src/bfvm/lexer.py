from __future__ import annotations

from enum import Enum
from typing import Iterator, List, Tuple


class Token(Enum):
    INCREMENT = '+'
    DECREMENT = '-'
    POINTER_UP = '>'
    POINTER_DOWN = '<'
    OUTPUT = '.'
    INPUT = ','
    LOOP_OPEN = '['
    LOOP_CLOSE = ']'


_TOKENS = {t.value: t for t in Token}


def scan(source: str) -> Iterator[Tuple[Token, int]]:
    # Yields (token, character offset); everything that is not an operator is a comment.
    for offset, ch in enumerate(source):
        tok = _TOKENS.get(ch)
        if tok is not None:
            yield tok, offset


def tokenize(source: str) -> List[Token]:
    return [tok for tok, _ in scan(source)]

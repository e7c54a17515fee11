from __future__ import annotations

import logging

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .errors import UNMATCHED_CLOSE, UNTERMINATED_LOOP, make_syntax_error
from .lexer import Token, scan

logger = logging.getLogger(__name__)


# ---------------- Statement nodes ----------------
@dataclass(frozen=True)
class Increment:
    pass


@dataclass(frozen=True)
class Decrement:
    pass


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class PointerDown:
    pass


@dataclass(frozen=True)
class Output:
    pass


@dataclass(frozen=True)
class Input:
    pass


@dataclass(frozen=True)
class Block:
    body: List["Statement"]


Statement = Union[Increment, Decrement, PointerUp, PointerDown, Output, Input, Block]

_SIMPLE = {
    Token.INCREMENT: Increment,
    Token.DECREMENT: Decrement,
    Token.POINTER_UP: PointerUp,
    Token.POINTER_DOWN: PointerDown,
    Token.OUTPUT: Output,
    Token.INPUT: Input,
}


def parse(tokens: Sequence[Token], *, source: Optional[str] = None,
          offsets: Optional[Sequence[int]] = None) -> List[Statement]:
    """
    Build the statement tree for a token sequence.

    Each ``[`` opens a Block that collects statements until its matching
    ``]``. Open blocks are kept on an explicit stack, so nesting depth is
    limited by memory only.

    ``source`` and ``offsets`` (the character offset of every token) are
    optional and only used to point syntax errors at a line and column.

    Raises:
        BFUnmatchedCloseError: a ``]`` with no open block.
        BFUnterminatedLoopError: tokens ran out while a block was open.
    """
    stack: List[List[Statement]] = [[]]
    opened: List[int] = []

    def error(kind: str, index: int):
        offset = offsets[index] if offsets is not None else None
        return make_syntax_error(kind=kind, index=index, source=source, offset=offset)

    for index, tok in enumerate(tokens):
        if tok is Token.LOOP_OPEN:
            body: List[Statement] = []
            stack[-1].append(Block(body))
            stack.append(body)
            opened.append(index)
        elif tok is Token.LOOP_CLOSE:
            if not opened:
                raise error(UNMATCHED_CLOSE, index)
            stack.pop()
            opened.pop()
        else:
            stack[-1].append(_SIMPLE[tok]())

    if opened:
        # report the innermost block that is still open
        raise error(UNTERMINATED_LOOP, opened[-1])

    logger.debug("parsed %d tokens into %d top-level statements", len(tokens), len(stack[0]))
    return stack[0]


def parse_source(source: str) -> List[Statement]:
    pairs = list(scan(source))
    return parse(
        [tok for tok, _ in pairs],
        source=source,
        offsets=[offset for _, offset in pairs],
    )

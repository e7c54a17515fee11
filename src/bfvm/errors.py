from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

UNMATCHED_CLOSE = 'unmatched closing marker'
UNTERMINATED_LOOP = 'unterminated loop'


def _line_col(source: str, offset: int) -> Tuple[int, int]:
    line = source.count('\n', 0, offset) + 1
    col = offset - (source.rfind('\n', 0, offset) + 1) + 1
    return line, col


def _build_context(lines: List[str], line_no_1: int, col_1: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (col_1 - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == UNMATCHED_CLOSE:
        return 'Every "]" must close a "[" opened before it. Remove the extra "]" or add a "[".'
    if kind == UNTERMINATED_LOOP:
        return 'The marked "[" is never closed. Add a matching "]".'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFSyntaxError(BFError):
    kind: str
    index: int
    line: Optional[int] = None
    column: Optional[int] = None
    context: str = ''


class BFUnmatchedCloseError(BFSyntaxError):
    pass


class BFUnterminatedLoopError(BFSyntaxError):
    pass


@dataclass
class BFInternalError(BFError):
    pass


@dataclass
class BFInputError(BFError):
    pass


def make_syntax_error(*, kind: str, index: int, source: Optional[str] = None,
                      offset: Optional[int] = None) -> BFSyntaxError:
    """
    Build a syntax error for the token at ``index``.

    When the program text and the token's character offset are known the
    message carries a line/column and a short excerpt of the surrounding
    source, otherwise only the token index is reported.
    """
    cls = BFUnmatchedCloseError if kind == UNMATCHED_CLOSE else BFUnterminatedLoopError
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""

    if source is None or offset is None:
        return cls(
            message=f"SyntaxError: {kind} (token {index}){hint_block}",
            kind=kind,
            index=index,
        )

    line, col = _line_col(source, offset)
    ctx = _build_context(source.split('\n'), line, col)
    return cls(
        message=f"SyntaxError: {kind} (line {line}, column {col})\n{ctx}{hint_block}",
        kind=kind,
        index=index,
        line=line,
        column=col,
        context=ctx,
    )

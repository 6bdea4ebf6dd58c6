from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .utils import BitVector


class CoverError(Exception):
    """Base class for covering failures."""


class UncoverableError(CoverError):
    """The implicant set cannot cover every minterm."""

    def __init__(self, uncovered: List[str]):
        self.uncovered = list(uncovered)
        super().__init__(f"No implicant set covers minterm(s): {', '.join(self.uncovered) or '<none>'}")


class SearchBudgetExceeded(CoverError):
    """Branch-and-bound went deeper than the configured limit."""

    def __init__(self, depth: int, limit: int):
        self.depth = depth
        self.limit = limit
        super().__init__(f"Branch depth {depth} exceeds max_branch_depth={limit}")


class LiteralRangeError(CoverError, ValueError):
    """A term uses a letter outside the declared variable range."""


@dataclass
class CoverState:
    """Snapshot of one point in the reduction.

    ``row_cover`` marks implicants still undecided, ``column_cover`` marks
    minterms not yet covered, ``cover`` holds selected implicant indices in
    the order they were chosen.
    """
    row_cover: BitVector
    column_cover: BitVector
    cover: Tuple[int, ...] = ()
    depth: int = 0

    @property
    def done(self) -> bool:
        return self.row_cover.is_zero() or self.column_cover.is_zero()

    @property
    def complete(self) -> bool:
        return self.column_cover.is_zero()

    def select(self, index: int, covered: BitVector):
        """Add implicant ``index`` to the cover and drop the columns it covers."""
        self.cover = self.cover + (index,)
        self.row_cover.clear_bit(index)
        for j in covered.intersection(self.column_cover).indices():
            self.column_cover.clear_bit(j)

    def copy(self, depth: Optional[int] = None) -> "CoverState":
        return CoverState(
            row_cover=self.row_cover.copy(),
            column_cover=self.column_cover.copy(),
            cover=self.cover,
            depth=self.depth if depth is None else depth,
        )


@dataclass
class CoverResult:
    """Outcome of reducing one state to completion."""
    indices: Tuple[int, ...]
    cover: Tuple[str, ...]
    complete: bool
    uncovered: Tuple[int, ...] = ()
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.indices)

    def better_than(self, other: "CoverResult") -> bool:
        """True when this result should be kept over ``other``.

        A complete cover always beats an incomplete one; otherwise the smaller
        cover wins and ``self`` wins ties.
        """
        if self.complete != other.complete:
            return self.complete
        return self.size <= other.size

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cover": list(self.cover),
            "indices": list(self.indices),
            "size": self.size,
            "complete": self.complete,
            "uncovered": list(self.uncovered),
            "stats": self.stats
        }

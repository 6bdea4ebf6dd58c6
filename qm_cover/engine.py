import logging
import time
from typing import Any, Dict, List, Optional, Sequence

from .base import CoverResult, CoverState, SearchBudgetExceeded, UncoverableError
from .builder import TableBuilder
from .ordering import compare_terms, term_key
from .utils import BitVector


logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "max_branch_depth": None,
    "strict_literals": False,
    "verify_result": True
}


class CoverReducer:
    """Tabular reduction with branch-and-bound for cyclic cores.

    Each pass extracts essential implicants, then drops dominated rows and
    dominating columns. A pass that changes nothing leaves a cyclic core, which
    is resolved by branching on a pivot implicant. Every recursive call works
    on its own ``CoverState`` copy and returns a ``CoverResult``.
    """

    def __init__(self, rows: List[BitVector], columns: List[BitVector],
                 implicants: Sequence[str], minterms: Sequence[str],
                 config: Optional[Dict[str, Any]] = None):
        self.rows = rows
        self.columns = columns
        self.implicants = implicants
        self.minterms = minterms
        self.config = dict(DEFAULT_CONFIG)
        if config:
            self.config.update(config)
        self.stats = self._new_stats()

    @staticmethod
    def _new_stats() -> Dict[str, int]:
        return {
            "passes": 0,
            "essential": 0,
            "row_dominated": 0,
            "column_dominated": 0,
            "branches": 0,
            "max_depth": 0
        }

    def run(self, state: CoverState) -> CoverResult:
        """Reduce ``state`` to completion; ``state`` itself is left untouched."""
        self.stats = self._new_stats()
        result = self._reduce(state)
        result.stats = dict(self.stats)
        return result

    def _reduce(self, state: CoverState) -> CoverResult:
        state = state.copy()
        while not state.done:
            self.stats["passes"] += 1
            changed = self._cover_essential_primes(state)
            changed = self._row_domination(state) or changed
            changed = self._column_domination(state) or changed
            if not changed:
                return self._branch(state)
        return self._result(state)

    def _result(self, state: CoverState) -> CoverResult:
        return CoverResult(
            indices=state.cover,
            cover=tuple(self.implicants[i] for i in state.cover),
            complete=state.complete,
            uncovered=tuple(state.column_cover.indices())
        )

    def _cover_essential_primes(self, state: CoverState) -> bool:
        """Select every implicant that is the only live row of an uncovered column."""
        changed = False
        for j, column in enumerate(self.columns):
            if not state.column_cover.get_bit(j):
                continue
            live = column.intersection(state.row_cover)
            if live.cardinality() != 1:
                continue
            i = live.first_set_index()
            state.select(i, self.rows[i])
            self.stats["essential"] += 1
            logger.debug(f"Essential implicant {self.implicants[i]!r} (only cover of {self.minterms[j]!r})")
            changed = True
        return changed

    def _row_domination(self, state: CoverState) -> bool:
        """Drop rows whose remaining coverage is contained in another live row."""
        changed = False
        row_cover = state.row_cover
        for i in range(len(self.rows)):
            for j in range(i + 1, len(self.rows)):
                if not (row_cover.get_bit(i) and row_cover.get_bit(j)):
                    continue
                first = self.rows[i].intersection(state.column_cover)
                second = self.rows[j].intersection(state.column_cover)

                if first.issuperset(second):
                    if second.issuperset(first):
                        # Equal coverage: keep the earlier term
                        drop = j if compare_terms(self.implicants[i], self.implicants[j]) < 0 else i
                    else:
                        drop = j
                elif second.issuperset(first):
                    drop = i
                else:
                    continue

                row_cover.clear_bit(drop)
                self.stats["row_dominated"] += 1
                changed = True
        return changed

    def _column_domination(self, state: CoverState) -> bool:
        """Drop columns whose live covering set contains another column's."""
        changed = False
        column_cover = state.column_cover
        for i in range(len(self.columns)):
            for j in range(i + 1, len(self.columns)):
                if not (column_cover.get_bit(i) and column_cover.get_bit(j)):
                    continue
                first = self.columns[i].intersection(state.row_cover)
                second = self.columns[j].intersection(state.row_cover)

                if first.issuperset(second):
                    if second.issuperset(first):
                        drop = j if compare_terms(self.minterms[i], self.minterms[j]) < 0 else i
                    else:
                        drop = i
                elif second.issuperset(first):
                    drop = j
                else:
                    continue

                column_cover.clear_bit(drop)
                self.stats["column_dominated"] += 1
                changed = True
        return changed

    def _select_pivot(self, state: CoverState) -> int:
        """Live row covering the most uncovered columns, earliest term on ties."""
        return min(
            state.row_cover.indices(),
            key=lambda i: (-self.rows[i].intersection(state.column_cover).cardinality(),
                           term_key(self.implicants[i]))
        )

    def _branch(self, state: CoverState) -> CoverResult:
        limit = self.config["max_branch_depth"]
        depth = state.depth + 1
        if limit is not None and depth > limit:
            raise SearchBudgetExceeded(depth, limit)

        self.stats["branches"] += 1
        self.stats["max_depth"] = max(self.stats["max_depth"], depth)

        pivot = self._select_pivot(state)
        logger.debug(f"Cyclic core at depth {state.depth}; branching on {self.implicants[pivot]!r}")

        include = state.copy(depth=depth)
        include.select(pivot, self.rows[pivot])
        with_pivot = self._reduce(include)

        exclude = state.copy(depth=depth)
        exclude.row_cover.clear_bit(pivot)
        without_pivot = self._reduce(exclude)

        return with_pivot if with_pivot.better_than(without_pivot) else without_pivot


class CoveringTable:
    """Implicant x minterm covering table.

    Example:
        >>> table = CoveringTable(3, ["ab", "aC", "BC", "bc"], ["ABC", "Abc", "aBC", "abC", "abc"])
        >>> table.create_final_cover()
        ['BC', 'bc', 'ab']
    """

    def __init__(self, num_vars: int, implicants: Sequence[str], minterms: Sequence[str],
                 config: Optional[Dict[str, Any]] = None):
        self.config = dict(DEFAULT_CONFIG)
        if config:
            self.config.update(config)

        self.num_vars = num_vars
        self.implicants = list(implicants)
        self.minterms = list(minterms)

        self.builder = TableBuilder(num_vars, self.implicants, self.minterms,
                                    strict=self.config["strict_literals"])
        table = self.builder.build()
        self.rows: List[BitVector] = table["rows"]
        self.columns: List[BitVector] = table["columns"]
        self.row_cover: BitVector = table["row_cover"]
        self.column_cover: BitVector = table["column_cover"]
        self.stats = table["stats"]

        self.reducer = CoverReducer(self.rows, self.columns, self.implicants, self.minterms, self.config)

    def covers(self, implicant_index: int, minterm_index: int) -> bool:
        return bool(self.rows[implicant_index].get_bit(minterm_index))

    def covered_minterms(self, terms: Sequence[str]) -> BitVector:
        """Minterms of this table covered by any of ``terms``."""
        assignments = [self.builder.assignment_vector(m) for m in self.minterms]
        covered = BitVector(len(self.minterms))
        for term in terms:
            for j, assignment in enumerate(assignments):
                if self.builder.term_covers(term, assignment):
                    covered.set_bit(j)
        return covered

    def is_cover(self, terms: Sequence[str]) -> bool:
        return self.covered_minterms(terms) == BitVector.full(len(self.minterms))

    def solve(self) -> CoverResult:
        """Compute the minimal cover.

        Raises:
            UncoverableError: some minterm cannot be covered by the implicants.
            SearchBudgetExceeded: branching went past ``max_branch_depth``.
        """
        start_time = time.time()

        if not self.minterms:
            logger.warning("Empty minterm list; returning an empty cover")
            return CoverResult(indices=(), cover=(), complete=True, stats=self.reducer._new_stats())

        if logger.isEnabledFor(logging.DEBUG):
            for implicant, row in zip(self.implicants, self.rows):
                logger.debug(f"  {implicant:>{self.num_vars}} {row.to_binary()}")

        orphans = [self.minterms[j] for j, column in enumerate(self.columns) if column.is_zero()]
        if orphans:
            logger.error(f"Minterm(s) {orphans} are not covered by any implicant")
            raise UncoverableError(orphans)

        state = CoverState(row_cover=self.row_cover.copy(), column_cover=self.column_cover.copy())
        result = self.reducer.run(state)

        if not result.complete:
            uncovered = [self.minterms[j] for j in result.uncovered]
            logger.error(f"Reduction ended with uncovered minterm(s) {uncovered}")
            raise UncoverableError(uncovered)

        if self.config["verify_result"] and not self.is_cover(result.cover):
            raise RuntimeError(f"Selected implicants {list(result.cover)} do not cover every minterm")

        result.stats["solve_time"] = time.time() - start_time
        logger.info(
            f"Selected {result.size} of {len(self.implicants)} implicants "
            f"({result.stats['branches']} branch points) in {result.stats['solve_time']:.6f}s"
        )
        return result

    def create_final_cover(self) -> List[str]:
        """Minimal cover as term strings, in the order they were selected."""
        return list(self.solve().cover)

import logging
import string
import time
from typing import Any, Dict, List, Sequence, Tuple

import ahocorasick

from .base import LiteralRangeError
from .utils import BitVector


logger = logging.getLogger(__name__)

MAX_VARS = len(string.ascii_lowercase)


class TableBuilder:
    """Builds the implicant x minterm incidence table from term strings."""

    def __init__(self, num_vars: int, implicants: Sequence[str], minterms: Sequence[str], strict: bool = False):
        """
        Args:
            num_vars: Number of variables; variable k is written as the k-th
                letter of the alphabet (lowercase true, uppercase complemented).
            implicants: Candidate product terms, e.g. ``["ab", "aC"]``.
            minterms: Minterms listing the lowercase letters of true variables.
            strict: Reject letters beyond ``num_vars`` instead of ignoring them.
        """
        if not 1 <= num_vars <= MAX_VARS:
            raise ValueError(f"num_vars must be between 1 and {MAX_VARS}, got {num_vars}")

        self.num_vars = num_vars
        self.implicants = list(implicants)
        self.minterms = list(minterms)
        self.strict = strict

        # Maps every letter to (variable index, uncomplemented) so a term is
        # decoded into its literals in a single scan

        self.automaton = ahocorasick.Automaton()
        for k, (lower, upper) in enumerate(zip(string.ascii_lowercase, string.ascii_uppercase)):
            self.automaton.add_word(lower, (k, True))
            self.automaton.add_word(upper, (k, False))
        self.automaton.make_automaton()

        self.rows: List[BitVector] = []
        self.columns: List[BitVector] = []

        self.stats = {
            "build_time": 0,
            "implicant_count": len(self.implicants),
            "minterm_count": len(self.minterms),
            "incidence_count": 0
        }

    def build(self) -> Dict[str, Any]:
        """Run the full construction and return the table structure."""
        start_time = time.time()

        assignments = [self.assignment_vector(m) for m in self.minterms]
        self.rows = [BitVector(len(self.minterms)) for _ in self.implicants]
        self.columns = [BitVector(len(self.implicants)) for _ in self.minterms]

        for i, implicant in enumerate(self.implicants):
            mask = self.literal_mask(implicant)
            polarity = self.assignment_vector(implicant)
            for j, assignment in enumerate(assignments):
                if self.covers(mask, polarity, assignment):
                    self.rows[i].set_bit(j)
                    self.columns[j].set_bit(i)
                    self.stats["incidence_count"] += 1

        self.stats["build_time"] = time.time() - start_time
        logger.debug(
            f"Built {len(self.implicants)}x{len(self.minterms)} table "
            f"with {self.stats['incidence_count']} incidences in {self.stats['build_time']:.6f}s"
        )

        return {
            "rows": self.rows,
            "columns": self.columns,
            "row_cover": BitVector.full(len(self.implicants)),
            "column_cover": BitVector.full(len(self.minterms)),
            "stats": dict(self.stats)
        }

    @staticmethod
    def covers(mask: BitVector, polarity: BitVector, assignment: BitVector) -> bool:
        """True when the minterm agrees with the term on every variable the term constrains."""
        return mask.intersection(assignment).symmetric_difference(polarity).is_zero()

    def term_covers(self, term: str, assignment: BitVector) -> bool:
        return self.covers(self.literal_mask(term), self.assignment_vector(term), assignment)

    def literals(self, term: str) -> List[Tuple[int, bool]]:
        """Literals of ``term`` as ``(variable, uncomplemented)`` pairs within range."""
        found = []
        for _, (k, positive) in self.automaton.iter(term):
            if k >= self.num_vars:
                if self.strict:
                    raise LiteralRangeError(
                        f"Term {term!r} uses variable {k} but only {self.num_vars} are declared"
                    )
                logger.debug(f"Ignoring out-of-range literal {k} in term {term!r}")
                continue
            found.append((k, positive))
        return found

    def literal_mask(self, term: str) -> BitVector:
        """Bit k set when variable k appears in ``term`` in either polarity."""
        mask = BitVector(self.num_vars)
        for k, _ in self.literals(term):
            mask.set_bit(k)
        return mask

    def assignment_vector(self, term: str) -> BitVector:
        """Bit k set when ``term`` contains the uncomplemented letter for variable k."""
        vector = BitVector(self.num_vars)
        for k, positive in self.literals(term):
            if positive:
                vector.set_bit(k)
        return vector

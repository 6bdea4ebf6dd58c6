from typing import Any, Dict, List, Optional, Sequence

from .base import CoverError, CoverResult, CoverState, LiteralRangeError, SearchBudgetExceeded, UncoverableError
from .builder import TableBuilder
from .engine import CoverReducer, CoveringTable
from .ordering import compare_terms, sort_term, sort_terms, term_key
from .utils import BitVector


__all__ = [
    "BitVector",
    "CoveringTable",
    "CoverReducer",
    "TableBuilder",
    "CoverState",
    "CoverResult",
    "CoverError",
    "UncoverableError",
    "SearchBudgetExceeded",
    "LiteralRangeError",
    "compare_terms",
    "sort_term",
    "sort_terms",
    "term_key",
    "minimal_cover"
]

__version__ = "1.0.0"


def minimal_cover(num_vars: int, implicants: Sequence[str], minterms: Sequence[str],
                  canonical: bool = False, config: Optional[Dict[str, Any]] = None) -> List[str]:
    """
    Select a minimum set of implicants covering every minterm.

    Args:
        num_vars: Number of variables (letters ``a``.. in order).
        implicants: Prime implicants, lowercase for true literals and
                    uppercase for complemented ones.
        minterms: Minterms written with the lowercase letters of the true variables.
        canonical: Return the cover in term order instead of selection order.
        config: Overrides for ``max_branch_depth``, ``strict_literals`` and ``verify_result``.
    """
    cover = CoveringTable(num_vars, implicants, minterms, config=config).create_final_cover()
    if canonical:
        return sort_terms(cover)
    return cover

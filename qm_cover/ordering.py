"""Canonical ordering of term strings.

Terms are compared as multisets of literal letters: the characters of each
term are sorted first, then compared position by position, case-insensitively
and, on a tie, with uppercase (complemented) before lowercase. A term that is
a prefix of another sorts first; an empty term sorts before everything.
"""
from typing import Iterable, List, Optional, Tuple


def _char_key(char: str) -> Tuple[str, str]:
    return char.lower(), char


def sort_term(term: Optional[str]) -> Optional[str]:
    """Return ``term`` with its letters in canonical order, e.g. ``"cBa" -> "aBc"``."""
    if not term:
        return term
    return "".join(sorted(term, key=_char_key))


def term_key(term: Optional[str]) -> Tuple[Tuple[str, str], ...]:
    """Sort key implementing the term order."""
    if not term:
        return ()
    return tuple(_char_key(c) for c in sorted(term, key=_char_key))


def compare_terms(a: Optional[str], b: Optional[str]) -> int:
    key_a, key_b = term_key(a), term_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_terms(terms: Iterable[str]) -> List[str]:
    return sorted(terms, key=term_key)

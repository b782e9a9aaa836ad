from __future__ import annotations
from typing import List, Optional, Sequence
import logging

from affinity_chain.structures.chain import Category, Chain, make_chain

logger = logging.getLogger(__name__)

VALID_SYMBOLS = frozenset(cat.name for cat in Category)


class ChainInputError(ValueError):
    """Raised when chain input text is malformed."""


def parse_chain_text(text: str) -> Optional[Chain]:
    """
    Parses whitespace-separated chain input.

    The expected layout is the element count `n`, then `n` potentials, then
    one token of `n` category letters (omitted when `n` is 0)::

        3
        2 1 3
        PNA

    Parameters
    ----------
    text : str
        The raw input.

    Returns
    -------
    Optional[Chain]
        The parsed chain, or None when `text` holds no tokens at all.

    Raises
    ------
    ChainInputError
        If the count, a potential or the category token is missing or invalid.
    """
    tokens = text.split()
    if not tokens:
        logger.debug("Empty chain input")
        return None

    n = _parse_non_negative(tokens[0], "element count")

    potential_tokens = tokens[1:1 + n]
    if len(potential_tokens) < n:
        raise ChainInputError(f"Expected {n} potentials, found {len(potential_tokens)}.")
    potentials = [
        _parse_non_negative(token, f"potential at position {pos}")
        for pos, token in enumerate(potential_tokens, start=1)
    ]

    rest = tokens[1 + n:]
    if n == 0:
        symbols = ""
    elif not rest:
        raise ChainInputError(f"Missing category string of {n} letters.")
    else:
        symbols = rest[0]

    if len(symbols) != n:
        raise ChainInputError(f"Category string has {len(symbols)} letters, expected {n}.")

    invalid = [pos for pos, letter in enumerate(symbols, start=1) if letter not in VALID_SYMBOLS]
    if invalid:
        pos = invalid[0]
        raise ChainInputError(
            f"Invalid category {symbols[pos - 1]!r} at position {pos}. Only P, N, A, B, T are allowed."
        )

    logger.info(f"Parsed chain: n={n}")
    return make_chain(potentials, list(symbols))


def _parse_non_negative(token: str, what: str) -> int:
    """Converts `token` to a non-negative int, naming `what` in the error."""
    try:
        value = int(token)
    except ValueError:
        raise ChainInputError(f"Invalid {what}: {token!r} is not an integer.") from None
    if value < 0:
        raise ChainInputError(f"Invalid {what}: {value} is negative.")
    return value


def format_result(max_energy: int, order: Sequence[int]) -> str:
    """
    Renders the result as two lines: the energy, then the space-separated order.

    The second line is present (and empty) even when the chain is empty.
    """
    lines: List[str] = [str(max_energy), " ".join(str(k) for k in order)]
    return "\n".join(lines) + "\n"

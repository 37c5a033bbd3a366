"""Placeholder protection for structural LaTeX control sequences.

Constant substitution works on raw text, so a constant named ``c`` would
otherwise eat the first letter of ``\\cdot``. Before substitution every
protected sequence is swapped for a placeholder made only of ``<``, ``~`` and
``>``, none of which the math widget ever emits, and swapped back afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

PROTECTED_SEQUENCES: tuple[str, ...] = (
    "\\frac",
    "\\cdot",
    "\\times",
    "\\sqrt",
    "\\operatorname",
)


@dataclass(frozen=True, slots=True)
class ProtectedToken:
    sequence: str
    placeholder: str


def _placeholder(index: int) -> str:
    return "<" + "~" * (index + 5) + ">"


def build_token_table(sequences: Iterable[str] = PROTECTED_SEQUENCES) -> tuple[ProtectedToken, ...]:
    """Pair each sequence with a unique placeholder and check the table is order independent."""

    table = tuple(
        ProtectedToken(sequence=sequence, placeholder=_placeholder(index))
        for index, sequence in enumerate(sequences)
    )
    sequences_seen = [token.sequence for token in table]
    if len(set(sequences_seen)) != len(sequences_seen):
        raise ValueError("Protected sequences must be unique")
    for token in table:
        for other in table:
            if other is token:
                continue
            if token.sequence in other.sequence:
                raise ValueError(f"'{token.sequence}' is contained in '{other.sequence}'")
            if (
                token.sequence in other.placeholder
                or token.placeholder in other.sequence
                or token.placeholder in other.placeholder
            ):
                raise ValueError(f"'{token.sequence}' collides with another placeholder")
    return table


PROTECTED_TOKENS: tuple[ProtectedToken, ...] = build_token_table()


def encode(text: str, tokens: Iterable[ProtectedToken] = PROTECTED_TOKENS) -> str:
    """Replace every protected sequence in ``text`` with its placeholder."""

    for token in tokens:
        text = text.replace(token.sequence, token.placeholder)
    return text


def decode(text: str, tokens: Iterable[ProtectedToken] = PROTECTED_TOKENS) -> str:
    """Inverse of :func:`encode`."""

    for token in tokens:
        text = text.replace(token.placeholder, token.sequence)
    return text


def placeholder_for(sequence: str, tokens: Iterable[ProtectedToken] = PROTECTED_TOKENS) -> str:
    for token in tokens:
        if token.sequence == sequence:
            return token.placeholder
    raise KeyError(f"'{sequence}' is not a protected sequence")


__all__ = [
    "PROTECTED_SEQUENCES",
    "PROTECTED_TOKENS",
    "ProtectedToken",
    "build_token_table",
    "decode",
    "encode",
    "placeholder_for",
]

"""Delimiter balance checking for formatted LaTeX text.

An advisory pass over the formatter's output: once formatting has
succeeded, the editor runs these checks on the resulting text and shows
any messages as warnings. A failed check never blocks the formatted text.
It works on the text directly, without tokenizing, and reports the first
problem it finds for each delimiter pair.

A character directly after a backslash is treated as escaped and skipped,
unless that backslash is itself escaped (``\\\\``).

Example:
    >>> check_balance("{a}{b", "{", "}")
    BalanceResult(balanced=False, message='unbalanced {}')
    >>> check_balance("$x$", "$", "$").balanced
    True

Thread Safety:
    All functions are pure.

"""

from __future__ import annotations

from dataclasses import dataclass

from texfmt.utils.logger import get_logger

logger = get_logger(__name__)

# Pairs checked by check_document_balance, in reporting order
DELIMITER_PAIRS: tuple[tuple[str, str], ...] = (
    ("$", "$"),
    ("{", "}"),
    ("[", "]"),
)


@dataclass(frozen=True, slots=True)
class BalanceResult:
    """Outcome of a balance check.

    ``message`` is empty when ``balanced`` is True.
    """

    balanced: bool
    message: str = ""


def _is_escaped(text: str, index: int) -> bool:
    if index == 0 or text[index - 1] != "\\":
        return False
    return index < 2 or text[index - 2] != "\\"


def check_balance(text: str, open_char: str, close_char: str) -> BalanceResult:
    """Check that ``open_char``/``close_char`` are balanced in ``text``.

    When both characters are the same (``$``), occurrences are counted and
    an odd count is unbalanced. Otherwise a running balance is kept: a
    closer with no opener fails immediately, and a leftover opener fails
    at the end.

    Args:
        text: Raw source text
        open_char: Opening delimiter (one character)
        close_char: Closing delimiter (one character)

    Returns:
        BalanceResult with a short message on failure
    """
    if open_char == close_char:
        count = 0
        for i, char in enumerate(text):
            if char == open_char and not _is_escaped(text, i):
                count += 1
        if count % 2:
            return BalanceResult(False, f"unbalanced {open_char}")
        return BalanceResult(True)

    balance = 0
    for i, char in enumerate(text):
        if char != open_char and char != close_char:
            continue
        if _is_escaped(text, i):
            continue
        if char == open_char:
            balance += 1
        else:
            balance -= 1
            if balance < 0:
                return BalanceResult(False, "extra closing symbol")
    if balance:
        return BalanceResult(False, f"unbalanced {open_char}{close_char}")
    return BalanceResult(True)


def check_document_balance(text: str) -> list[str]:
    """Run every pair in DELIMITER_PAIRS and collect the failure messages.

    Returns:
        Messages in DELIMITER_PAIRS order; empty when everything balances.
    """
    warnings: list[str] = []
    for open_char, close_char in DELIMITER_PAIRS:
        result = check_balance(text, open_char, close_char)
        if not result.balanced:
            logger.debug("Balance check %s%s failed: %s", open_char, close_char, result.message)
            warnings.append(result.message)
    return warnings


__all__ = [
    "DELIMITER_PAIRS",
    "BalanceResult",
    "check_balance",
    "check_document_balance",
]

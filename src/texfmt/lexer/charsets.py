"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from texfmt.lexer.charsets import TEXT_STOP

    if char in TEXT_STOP:  # O(1) lookup
        ...
"""

import string

# Control words start with an ASCII letter
LETTERS: frozenset[str] = frozenset(string.ascii_letters)

# Characters allowed after the first letter of a control word
NAME_CHARS: frozenset[str] = LETTERS | frozenset("*")

# Characters that end a plain text run
TEXT_STOP: frozenset[str] = frozenset("\\{}[]$\n\r")

# Whitespace allowed before a line comment
HORIZONTAL_WHITESPACE: frozenset[str] = frozenset(" \t")

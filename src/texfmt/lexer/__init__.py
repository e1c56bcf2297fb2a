"""Tokenizer for the texfmt parser.

Architecture:
lexer/
├── __init__.py          # Re-exports Tokenizer
├── core.py              # Tokenizer class (pull cursor + lookahead)
└── charsets.py          # Character classification sets

Usage:
    >>> from texfmt.lexer import Tokenizer
    >>> tok = Tokenizer("a_b")
    >>> tok.next_token()
    Token(TEXT, 'a_b', @0)

"""

from texfmt.lexer.core import Tokenizer

__all__ = ["Tokenizer"]

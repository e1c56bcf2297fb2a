"""ContextVar-based format configuration for texfmt.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The parser reads the math-block names from it; the formatter additionally
reads the raw-argument command names and the indentation unit.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and two documents formatted at the same time never
    see each other's settings.

Usage:
    from texfmt.config import FormatConfig, format_config_context

    with format_config_context(FormatConfig(indent="    ")):
        text = format_source(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

# Blocks whose interior is kept as one opaque raw span
DEFAULT_MATH_BLOCKS: frozenset[str] = frozenset(
    {
        "equation",
        "equation*",
        "align",
        "align*",
        "gather",
        "gather*",
        "multline",
        "multline*",
        "split",
        "array",
        "subequations",
    }
)

# Commands whose arguments are identifiers, paths or URLs and are never escaped
DEFAULT_RAW_ARGUMENT_COMMANDS: frozenset[str] = frozenset(
    {
        "input",
        "include",
        "includegraphics",
        "label",
        "ref",
        "eqref",
        "cite",
        "bibitem",
        "url",
        "href",
    }
)


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable format configuration.

    Attributes:
        math_blocks: Block names whose interior is not parsed or reflowed
        raw_argument_commands: Commands whose arguments render without escaping
        indent: Indentation added per nested block level

    """

    math_blocks: frozenset[str] = DEFAULT_MATH_BLOCKS
    raw_argument_commands: frozenset[str] = DEFAULT_RAW_ARGUMENT_COMMANDS
    indent: str = "  "

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FormatConfig":
        """Create FormatConfig from dictionary.

        Useful when settings come from an editor's JSON configuration.
        Unknown keys are silently ignored, and name collections are
        converted to frozensets.

        Example:
            >>> config = FormatConfig.from_dict({
            ...     "indent": "\\t",
            ...     "math_blocks": ["equation", "eqnarray"],
            ...     "unknown_key": "ignored",
            ... })
            >>> "eqnarray" in config.math_blocks
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        for key in ("math_blocks", "raw_argument_commands"):
            if key in filtered:
                filtered[key] = frozenset(filtered[key])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: FormatConfig = FormatConfig()

_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current format configuration (thread-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set format configuration for current context.

    Args:
        config: FormatConfig instance to use for this context.

    """
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to default configuration."""
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: FormatConfig to use within the context.

    Example:
        >>> with format_config_context(FormatConfig(indent="\\t")):
        ...     get_format_config().indent
        '\\t'

    Restores the previous config even if an exception is raised.

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "DEFAULT_MATH_BLOCKS",
    "DEFAULT_RAW_ARGUMENT_COMMANDS",
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
]

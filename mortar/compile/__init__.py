"""mortar compilation layer: placeholder rewriting for composed statements."""
from mortar.compile.placeholder import (
    AT_P,
    COLON,
    DOLLAR,
    QUESTION,
    NumberedFormat,
    PlaceholderFormat,
    QuestionFormat,
)
from mortar.compile.registry import PlaceholderRegistry, resolve_format, rewrite

__all__ = [
    "AT_P",
    "COLON",
    "DOLLAR",
    "QUESTION",
    "NumberedFormat",
    "PlaceholderFormat",
    "PlaceholderRegistry",
    "QuestionFormat",
    "resolve_format",
    "rewrite",
]

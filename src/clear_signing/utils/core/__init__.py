"""Formatting core package."""

from .engine import ERC7730Formatter
from .heuristics import format_arguments_heuristically
from .paths import DecodedArguments, resolve_path
from .values import ValueFormatter

__all__ = [
    "DecodedArguments",
    "ERC7730Formatter",
    "ValueFormatter",
    "format_arguments_heuristically",
    "resolve_path",
]

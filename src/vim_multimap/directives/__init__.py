"""Directive line parsing and the generated directive table."""

from .parser import DirectiveFields, DirectiveParser, tokenize, unquote
from .registry import (
    DirectiveKind,
    DirectiveSpec,
    DirectiveTable,
    UnknownDirectiveError,
    iter_directive_specs,
)

__all__ = [
    "DirectiveFields",
    "DirectiveParser",
    "tokenize",
    "unquote",
    "DirectiveKind",
    "DirectiveSpec",
    "DirectiveTable",
    "UnknownDirectiveError",
    "iter_directive_specs",
]

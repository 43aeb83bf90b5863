"""Classify declared type strings into type expressions.

Handles:
- Unions written with ``or`` ("string or table")
- Unions written with ``and`` ("number and string"), treated as ``or``
- Descriptive phrases containing spaces ("light userdata")
- Bare names ("number", "Image", "tables")
- Inline table shapes given as a list of fields
"""

from __future__ import annotations

import re

from .models import Descriptive, InlineTable, Scalar, TableField, TypeExpr, Union

_CONNECTIVES = (" or ", " and ")

# Alternatives are separated by whitespace; "|" is accepted for pre-rendered unions
_UNION_SPLIT = re.compile(r"[\s|]+")


def is_union_text(text: str) -> bool:
    """True if the string joins alternatives with ``or`` or ``and``."""
    return any(c in text for c in _CONNECTIVES)


def split_union(text: str) -> list[str]:
    """Split a union string into its alternatives, dropping the connective."""
    text = text.replace(" and ", " or ")
    return [part for part in _UNION_SPLIT.split(text) if part and part != "or"]


def parse_type(text: str) -> TypeExpr:
    """Parse a declared type string into a type expression."""
    if is_union_text(text):
        return Union(alternatives=tuple(split_union(text)), text=text)
    if " " in text:
        return Descriptive(text)
    return Scalar(text)


def parse_table(fields: list[TableField]) -> InlineTable:
    """Wrap already-parsed fields as an inline table expression."""
    return InlineTable(fields=tuple(fields))


def first_alternative(expr: TypeExpr) -> str | None:
    """Return the first alternative of a union or the name of a scalar."""
    if isinstance(expr, Union):
        return expr.alternatives[0] if expr.alternatives else None
    if isinstance(expr, Scalar):
        return expr.name
    return None

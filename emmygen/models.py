"""Data model for a parsed API description.

Declared type strings are parsed once at load time into one of four type
expressions (see ``type_parser.parse_type``); everything downstream switches
on the expression class instead of re-reading the raw string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union as _Union


# ---------------------------------------------------------------------------
# Type expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Scalar:
    """A single bare type name, e.g. ``number`` or ``Image``."""

    name: str

    @property
    def text(self) -> str:
        return self.name


@dataclass(frozen=True)
class Union:
    """Alternatives joined by ``or``/``and`` in the source, e.g. ``string or table``."""

    alternatives: tuple[str, ...]
    text: str


@dataclass(frozen=True)
class Descriptive:
    """A free-form phrase such as ``light userdata``; never split or prefixed."""

    text: str


@dataclass(frozen=True)
class InlineTable:
    """A one-level table shape given as named, typed fields."""

    fields: tuple[TableField, ...]

    @property
    def text(self) -> str:
        return "table"


TypeExpr = _Union[Scalar, Union, Descriptive, InlineTable]


# ---------------------------------------------------------------------------
# API tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TableField:
    """A field of an inline table shape."""

    name: str
    type: TypeExpr


@dataclass
class Argument:
    """A declared parameter of a function variant."""

    name: str
    type: TypeExpr
    description: str = ""
    default: str | None = None

    @property
    def is_vararg(self) -> bool:
        return self.name == "..."

    @property
    def is_optional(self) -> bool:
        return self.default is not None


@dataclass
class Return:
    """A declared return value of a function variant.

    Only the type is annotated; return names and descriptions have no
    EmmyLua counterpart in the generated stubs.
    """

    type: TypeExpr


@dataclass
class Variant:
    """One call signature of a function."""

    arguments: list[Argument] = field(default_factory=list)
    returns: list[Return] = field(default_factory=list)
    description: str | None = None


@dataclass
class Function:
    """A function or method with one or more call variants."""

    name: str
    description: str = ""
    variants: list[Variant] = field(default_factory=list)


@dataclass
class Constant:
    """A single allowed value of an enum."""

    name: str
    description: str = ""


@dataclass
class EnumDef:
    """A named set of string constants."""

    name: str
    description: str = ""
    constants: list[Constant] = field(default_factory=list)


@dataclass
class TypeDef:
    """An object type with instance methods."""

    name: str
    description: str = ""
    supertypes: list[str] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)


@dataclass
class Module:
    """A module node; the root of the description is itself a module."""

    name: str
    description: str | None = None
    types: list[TypeDef] = field(default_factory=list)
    enums: list[EnumDef] = field(default_factory=list)
    functions: list[Function] = field(default_factory=list)
    modules: list[Module] = field(default_factory=list)


"""Normalize and namespace type names for EmmyLua output.

Rules, in order:
  - plural names fold to singular when the singular is already recognized
        "numbers"  -> "number"
        "Images"   -> "Image"      (Image known)
        "Pixels"   -> "Pixels"     (Pixel unknown)
  - ``and`` unions are read as ``or`` unions
  - known API names get the namespace prefix, Lua built-ins never do
        "Image"             -> "love.Image"
        "string"            -> "string"
        "light userdata"    -> "light userdata"
        "love.Image"        -> "love.Image"
  - unions render with ``|``
        "Image or Canvas"   -> "love.Image | love.Canvas"
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import DEFAULT_NAMESPACE
from .models import Descriptive, InlineTable, TypeExpr, Union
from .type_parser import first_alternative

if TYPE_CHECKING:
    from .registry import TypeRegistry

# Lua built-in types, never prefixed
BUILTIN_TYPES: frozenset[str] = frozenset({
    "string",
    "number",
    "boolean",
    "table",
    "function",
    "userdata",
    "thread",
    "nil",
})

OPTIONAL_MARKER = "?"
UNION_SEPARATOR = " | "


def normalize(name: str, registry: TypeRegistry) -> str:
    """Return the singular form of a plural type name if it is recognized."""
    name = name.strip()
    if len(name) > 1 and name.endswith("s"):
        singular = name[:-1]
        if singular in BUILTIN_TYPES or singular in registry.known:
            return singular
    return name


def _prefixed(name: str, namespace: str) -> str:
    return f"{namespace}.{name}"


def namespace_if_defined(
    name: str, registry: TypeRegistry, namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Prefix names declared by a type or enum node."""
    if "." in name:
        return name
    if name in registry.defined:
        return _prefixed(name, namespace)
    return name


def namespace_if_known(
    name: str, registry: TypeRegistry, namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Prefix any name the collection pass has seen."""
    if "." in name:
        return name
    if name in registry.known:
        return _prefixed(name, namespace)
    return name


def namespace_for_emission(
    name: str, registry: TypeRegistry, namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Prefix a type name as it should appear in generated annotations."""
    if "." in name or "{" in name:
        return name
    if name in BUILTIN_TYPES:
        return name
    if name in registry.descriptive:
        return name
    if name in registry.known:
        return _prefixed(name, namespace)
    return name


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_inline_table(
    table: InlineTable, registry: TypeRegistry, namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Render ``{field:Type, field:Type}``; field types are not normalized."""
    decls = [
        f"{f.name}:{namespace_for_emission(f.type.text, registry, namespace)}"
        for f in table.fields
    ]
    return "{" + ", ".join(decls) + "}"


def render_return_type(
    expr: TypeExpr, registry: TypeRegistry, namespace: str = DEFAULT_NAMESPACE,
) -> str:
    """Render a full return type, keeping every union alternative."""
    if isinstance(expr, InlineTable):
        return render_inline_table(expr, registry, namespace)
    if isinstance(expr, Descriptive):
        return expr.text
    if isinstance(expr, Union):
        alternatives = expr.alternatives
    else:
        alternatives = (expr.name,)
    if not alternatives:
        return expr.text
    return UNION_SEPARATOR.join(
        namespace_for_emission(normalize(a, registry), registry, namespace)
        for a in alternatives
    )


def render_param_type(
    expr: TypeExpr,
    registry: TypeRegistry,
    namespace: str = DEFAULT_NAMESPACE,
    optional: bool = False,
) -> str:
    """Render a parameter type; unions contribute only their first alternative."""
    if isinstance(expr, InlineTable):
        rendered = render_inline_table(expr, registry, namespace)
    elif isinstance(expr, Descriptive):
        rendered = expr.text
    else:
        first = first_alternative(expr)
        if first is None:
            rendered = expr.text
        else:
            rendered = namespace_for_emission(normalize(first, registry), registry, namespace)
    if optional:
        rendered += OPTIONAL_MARKER
    return rendered

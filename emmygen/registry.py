"""Collect every type name referenced by an API description.

The collection pass runs over the whole tree before any output is rendered;
the resulting ``TypeRegistry`` decides how each type string is printed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .config import DEFAULT_NAMESPACE
from .models import (
    Descriptive,
    Function,
    InlineTable,
    Module,
    Scalar,
    TypeExpr,
    Union,
)
from .naming import namespace_if_defined, namespace_if_known


@dataclass(frozen=True)
class TypeRegistry:
    """Type names classified by the collection pass.

    known:       bare names seen anywhere, plus union alternatives and
                 declared type/enum names
    defined:     names declared by a type or enum node
    descriptive: multi-word type phrases kept verbatim
    """

    known: frozenset[str] = frozenset()
    defined: frozenset[str] = frozenset()
    descriptive: frozenset[str] = frozenset()

    def merge(self, other: TypeRegistry) -> TypeRegistry:
        return TypeRegistry(
            known=self.known | other.known,
            defined=self.defined | other.defined,
            descriptive=self.descriptive | other.descriptive,
        )


def _classify(expr: TypeExpr) -> TypeRegistry:
    """Registry contribution of a single type expression."""
    if isinstance(expr, Union):
        return TypeRegistry(known=frozenset(expr.alternatives))
    if isinstance(expr, Descriptive):
        return TypeRegistry(descriptive=frozenset([expr.text]))
    if isinstance(expr, Scalar):
        return TypeRegistry(known=frozenset([expr.name]))
    if isinstance(expr, InlineTable):
        return _merge_all(_classify(f.type) for f in expr.fields)
    raise TypeError(f"unexpected type expression: {expr!r}")


def _merge_all(parts: Iterable[TypeRegistry]) -> TypeRegistry:
    result = TypeRegistry()
    for part in parts:
        result = result.merge(part)
    return result


def _collect_function(fn: Function) -> TypeRegistry:
    exprs: list[TypeExpr] = []
    for variant in fn.variants:
        exprs.extend(arg.type for arg in variant.arguments)
        exprs.extend(ret.type for ret in variant.returns)
    return _merge_all(_classify(e) for e in exprs)


def collect_types(module: Module) -> TypeRegistry:
    """Walk a module tree and return the registry of its type names."""
    declared = frozenset(
        [t.name for t in module.types] + [e.name for e in module.enums]
    )
    result = TypeRegistry(known=declared, defined=declared)

    functions = list(module.functions)
    for type_def in module.types:
        functions.extend(type_def.functions)
    result = result.merge(_merge_all(_collect_function(f) for f in functions))

    return result.merge(_merge_all(collect_types(m) for m in module.modules))


# ---------------------------------------------------------------------------
# Debug summary
# ---------------------------------------------------------------------------

def _is_capitalized(name: str) -> bool:
    return name[:1].isupper()


@dataclass
class DebugReport:
    """Diagnostic listing of the collected type names."""

    known: list[str] = field(default_factory=list)
    defined: list[str] = field(default_factory=list)
    descriptive: list[str] = field(default_factory=list)
    defined_capitalized: list[str] = field(default_factory=list)
    undefined_capitalized: list[str] = field(default_factory=list)


def debug_summary(
    module: Module,
    namespace: str = DEFAULT_NAMESPACE,
    registry: TypeRegistry | None = None,
) -> DebugReport:
    """Summarize the type classification of an API description."""
    registry = registry or collect_types(module)
    return DebugReport(
        known=sorted(registry.known),
        defined=sorted(registry.defined),
        descriptive=sorted(registry.descriptive),
        defined_capitalized=[
            namespace_if_defined(name, registry, namespace)
            for name in sorted(registry.defined)
            if _is_capitalized(name)
        ],
        undefined_capitalized=[
            namespace_if_known(name, registry, namespace)
            for name in sorted(registry.known - registry.defined)
            if _is_capitalized(name)
        ],
    )

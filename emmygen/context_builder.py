"""Build Jinja2 template context from a parsed API description.

Runs the type collection pass, then turns every module, type, enum and
function into plain dicts consumed by module.lua.j2.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import GeneratorConfig
from .models import Argument, EnumDef, Function, Module, TypeDef, Variant
from .naming import render_param_type, render_return_type
from .registry import TypeRegistry, collect_types

logger = logging.getLogger(__name__)

VARARG = "..."

# Return annotation used by overloads of functions that return nothing
NO_RETURN = "nil"


def sort_variants(variants: list[Variant]) -> list[Variant]:
    """Order variants by argument count, then return count, both descending.

    The first variant becomes the documented signature; ties keep their
    original order.
    """
    return sorted(
        variants,
        key=lambda v: (-len(v.arguments), -len(v.returns)),
    )


def expand_arguments(arguments: list[Argument]) -> list[Argument]:
    """Split arguments named like ``"x, y"`` into one argument per name."""
    expanded: list[Argument] = []
    for arg in arguments:
        if arg.is_vararg or "," not in arg.name:
            expanded.append(arg)
            continue
        for name in arg.name.split(","):
            name = name.strip()
            if not name:
                continue
            expanded.append(Argument(
                name=name,
                type=arg.type,
                description=arg.description,
                default=arg.default,
            ))
    return expanded


def _render_returns(
    variant: Variant, registry: TypeRegistry, config: GeneratorConfig,
) -> str:
    return ", ".join(
        render_return_type(r.type, registry, config.namespace) for r in variant.returns
    )


def _build_params(
    arguments: list[Argument], registry: TypeRegistry, config: GeneratorConfig,
) -> list[dict[str, Any]]:
    params = []
    for arg in arguments:
        description = arg.description
        if arg.is_optional:
            description += f" (Defaults to {arg.default}.)"
        params.append({
            "name": arg.name,
            "type": render_param_type(
                arg.type, registry, config.namespace, optional=arg.is_optional,
            ),
            "description": description,
            "vararg": arg.is_vararg,
        })
    return params


def _build_overload(
    owner: str,
    fn: Function,
    variant: Variant,
    registry: TypeRegistry,
    config: GeneratorConfig,
    static: bool,
) -> dict[str, Any]:
    params = [] if static else [f"self:{owner}"]
    for arg in expand_arguments(variant.arguments):
        # fun() literals have no vararg syntax here
        if arg.is_vararg:
            continue
        arg_type = render_param_type(
            arg.type, registry, config.namespace, optional=arg.is_optional,
        )
        params.append(f"{arg.name}:{arg_type}")

    returns = _render_returns(variant, registry, config) or NO_RETURN

    description = None
    if variant.description and variant.description != fn.description:
        description = variant.description

    return {
        "description": description,
        "signature": f"fun({', '.join(params)}):{returns}",
    }


def build_function(
    owner: str,
    fn: Function,
    registry: TypeRegistry,
    config: GeneratorConfig,
    static: bool = True,
) -> dict[str, Any] | None:
    """Build the annotation block for one function.

    ``owner`` is the qualified module name for static functions or the type
    name for methods. Returns None for a function without variants.
    """
    if not fn.variants:
        logger.warning("Skipping %s.%s: no variants", owner, fn.name)
        return None

    primary, *others = sort_variants(fn.variants)
    arguments = expand_arguments(primary.arguments)
    separator = "." if static else ":"

    return {
        "name": fn.name,
        "description": fn.description or "",
        "doc_link": config.doc_link(f"{owner}.{fn.name}"),
        "params": _build_params(arguments, registry, config),
        "returns": _render_returns(primary, registry, config),
        "overloads": [
            _build_overload(owner, fn, v, registry, config, static) for v in others
        ],
        "stub": f"{owner}{separator}{fn.name}",
        "arg_names": [a.name for a in arguments],
    }


def _build_functions(
    owner: str,
    functions: list[Function],
    registry: TypeRegistry,
    config: GeneratorConfig,
    static: bool,
) -> list[dict[str, Any]]:
    blocks = (build_function(owner, f, registry, config, static) for f in functions)
    return [b for b in blocks if b is not None]


def build_type(
    type_def: TypeDef, registry: TypeRegistry, config: GeneratorConfig,
) -> dict[str, Any]:
    """Build the class block for a type and its methods."""
    declaration = type_def.name
    if type_def.supertypes:
        declaration += " : " + ", ".join(type_def.supertypes)
    return {
        "name": type_def.name,
        "description": type_def.description or "",
        "doc_link": config.doc_link(type_def.name),
        "declaration": declaration,
        "functions": _build_functions(
            type_def.name, type_def.functions, registry, config, static=False,
        ),
    }


def build_enum(enum: EnumDef, config: GeneratorConfig) -> dict[str, Any]:
    """Build the alias block for an enum."""
    return {
        "name": enum.name,
        "description": enum.description or "",
        "doc_link": config.doc_link(enum.name),
        "constants": [
            {"name": c.name, "description": c.description.replace("\n", " ")}
            for c in enum.constants
        ],
    }


def _build_modules(
    qualified: str,
    module: Module,
    registry: TypeRegistry,
    config: GeneratorConfig,
) -> list[dict[str, Any]]:
    """Build the context for a module followed by all of its descendants."""
    unit: dict[str, Any] = {
        "name": qualified,
        "description": module.description,
        "types": [build_type(t, registry, config) for t in module.types],
        "enums": [build_enum(e, config) for e in module.enums],
    }
    children = [
        child_unit
        for child in module.modules
        for child_unit in _build_modules(f"{qualified}.{child.name}", child, registry, config)
    ]
    unit["functions"] = _build_functions(
        qualified, module.functions, registry, config, static=True,
    )
    return [unit, *children]


def build_context(
    api: Module,
    config: GeneratorConfig | None = None,
    registry: TypeRegistry | None = None,
) -> dict[str, Any]:
    """Build the full template context for an API description."""
    config = config or GeneratorConfig()
    # The registry must be complete before any type is rendered
    registry = registry or collect_types(api)
    modules = _build_modules(api.name, api, registry, config)

    return {
        "modules": modules,
        "module_count": len(modules),
        "function_count": sum(
            len(m["functions"]) + sum(len(t["functions"]) for t in m["types"])
            for m in modules
        ),
        "namespace": config.namespace,
        "registry": registry,
    }

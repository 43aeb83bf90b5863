"""Load the LÖVE API description and convert it into the data model.

The description is the love-api table exported as JSON. It is read from a
local file or fetched over HTTP, then parsed into ``models.Module``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from .config import DEFAULT_SOURCE
from .errors import ApiFormatError, SourceError
from .models import (
    Argument,
    Constant,
    EnumDef,
    Function,
    Module,
    Return,
    TableField,
    TypeDef,
    Variant,
)
from .type_parser import parse_table, parse_type

logger = logging.getLogger(__name__)

ROOT_MODULE_NAME = "love"

HTTP_TIMEOUT = 30.0


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch(url: str, client: httpx.Client | None) -> dict[str, Any]:
    """Download a JSON description."""
    logger.debug("Fetching API description from %s", url)
    try:
        if client is not None:
            resp = client.get(url)
        else:
            resp = httpx.get(url, timeout=HTTP_TIMEOUT, follow_redirects=True)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPStatusError as exc:
        raise SourceError(f"{url} returned {exc.response.status_code}") from exc
    except httpx.RequestError as exc:
        raise SourceError(f"could not fetch {url}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SourceError(f"{url} did not return valid JSON: {exc}") from exc


def load_api(
    source: str | Path | None = None,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """Load the raw API description from a JSON file or URL."""
    source = str(source or DEFAULT_SOURCE)
    if _is_url(source):
        return _fetch(source, client)

    path = Path(source)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        raise SourceError(f"API description not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SourceError(f"{path} is not valid JSON: {exc}") from exc


# ---------------------------------------------------------------------------
# Raw dict -> model
# ---------------------------------------------------------------------------

def _require(node: dict[str, Any], key: str, path: str) -> str:
    if not isinstance(node, dict):
        raise ApiFormatError(path, "expected an object")
    value = node.get(key)
    if not isinstance(value, str) or not value:
        raise ApiFormatError(path, f"missing {key!r}")
    return value


def _list(node: dict[str, Any], key: str, path: str) -> list[Any]:
    if not isinstance(node, dict):
        raise ApiFormatError(path, "expected an object")
    value = node.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ApiFormatError(path, f"{key!r} must be a list")
    return value


def _default(node: dict[str, Any]) -> str | None:
    value = node.get("default")
    return None if value is None else str(value)


def _description(node: dict[str, Any]) -> str:
    # JSON null reads as no description
    value = node.get("description")
    return "" if value is None else str(value)


def _parse_fields(raw: list[Any], path: str) -> list[TableField]:
    fields = []
    for i, node in enumerate(raw):
        field_path = f"{path}.table[{i}]"
        fields.append(TableField(
            name=_require(node, "name", field_path),
            type=parse_type(_require(node, "type", field_path)),
        ))
    return fields


def _parse_typed(node: dict[str, Any], path: str, empty_table: bool = False):
    """Type expression of an argument or return, preferring its table shape.

    An argument needs a non-empty shape. With ``empty_table`` (returns) any
    shape given, even an empty one, is used.
    """
    table = _list(node, "table", path)
    if table or (empty_table and node.get("table") is not None):
        return parse_table(_parse_fields(table, path))
    return parse_type(_require(node, "type", path))


def _parse_variant(node: dict[str, Any], path: str) -> Variant:
    arguments = []
    for i, arg in enumerate(_list(node, "arguments", path)):
        arg_path = f"{path}.arguments[{i}]"
        arguments.append(Argument(
            name=_require(arg, "name", arg_path),
            type=_parse_typed(arg, arg_path),
            description=_description(arg),
            default=_default(arg),
        ))

    returns = []
    for i, ret in enumerate(_list(node, "returns", path)):
        ret_path = f"{path}.returns[{i}]"
        returns.append(Return(
            type=_parse_typed(ret, ret_path, empty_table=True),
        ))

    return Variant(
        arguments=arguments,
        returns=returns,
        description=node.get("description"),
    )


def _parse_function(node: dict[str, Any], path: str) -> Function:
    name = _require(node, "name", path)
    fn_path = f"{path}.{name}"
    return Function(
        name=name,
        description=_description(node),
        variants=[
            _parse_variant(v, f"{fn_path}.variants[{i}]")
            for i, v in enumerate(_list(node, "variants", fn_path))
        ],
    )


def _parse_type_def(node: dict[str, Any], path: str) -> TypeDef:
    name = _require(node, "name", path)
    type_path = f"{path}.{name}"
    return TypeDef(
        name=name,
        description=_description(node),
        supertypes=[str(s) for s in _list(node, "supertypes", type_path)],
        functions=[_parse_function(f, name) for f in _list(node, "functions", type_path)],
    )


def _parse_enum(node: dict[str, Any], path: str) -> EnumDef:
    name = _require(node, "name", path)
    return EnumDef(
        name=name,
        description=_description(node),
        constants=[
            Constant(
                name=_require(c, "name", f"{name}.constants[{i}]"),
                description=_description(c),
            )
            for i, c in enumerate(_list(node, "constants", name))
        ],
    )


def parse_module(node: dict[str, Any], path: str = "") -> Module:
    """Convert a raw module dict (and its children) into a Module."""
    name = node.get("name") or (ROOT_MODULE_NAME if not path else "")
    if not name:
        raise ApiFormatError(path or "<root>", "missing 'name'")
    mod_path = f"{path}.{name}" if path else name
    return Module(
        name=name,
        description=node.get("description"),
        types=[_parse_type_def(t, mod_path) for t in _list(node, "types", mod_path)],
        enums=[_parse_enum(e, mod_path) for e in _list(node, "enums", mod_path)],
        functions=[_parse_function(f, mod_path) for f in _list(node, "functions", mod_path)],
        modules=[parse_module(m, mod_path) for m in _list(node, "modules", mod_path)],
    )


def parse_api(raw: dict[str, Any]) -> Module:
    """Parse the root of an API description.

    The love-api root table has no name of its own; it becomes ``love``.
    """
    if not isinstance(raw, dict):
        raise ApiFormatError("<root>", "API description must be an object")
    return parse_module(raw)

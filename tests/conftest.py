"""Shared fixtures for emmygen tests.

SAMPLE_API is a trimmed-down love-api description covering every construct
the generator handles: types with supertypes, enums, overloaded functions,
comma-joined parameter names, varargs, defaults, unions, descriptive types
and inline table shapes.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from emmygen.config import GeneratorConfig
from emmygen.loader import parse_api
from emmygen.models import Module
from emmygen.registry import TypeRegistry, collect_types


SAMPLE_API: dict[str, Any] = {
    "version": "11.5",
    "functions": [
        {
            "name": "getVersion",
            "description": "Gets the current running version of LÖVE.",
            "variants": [
                {
                    "returns": [
                        {"type": "number", "name": "major", "description": "The major version of LÖVE."},
                        {"type": "string", "name": "codename", "description": "The codename of the current version."},
                    ],
                },
            ],
        },
        {
            "name": "isVersionCompatible",
            "description": "Gets whether the given version is compatible with the current running version of LÖVE.",
            "variants": [
                {
                    "arguments": [
                        {"type": "string", "name": "version", "description": "The version to check."},
                    ],
                    "returns": [
                        {"type": "boolean", "name": "compatible", "description": "Whether the version is compatible."},
                    ],
                },
                {
                    "arguments": [
                        {"type": "number", "name": "major", "description": "The major version to check."},
                        {"type": "number", "name": "minor", "description": "The minor version to check."},
                        {"type": "number", "name": "revision", "description": "The revision of version to check."},
                    ],
                    "returns": [
                        {"type": "boolean", "name": "compatible", "description": "Whether the version is compatible."},
                    ],
                },
            ],
        },
    ],
    "types": [
        {
            "name": "Object",
            "description": "The superclass of all LÖVE types.",
            "functions": [
                {
                    "name": "typeOf",
                    "description": "Checks whether an object is of a certain type.",
                    "variants": [
                        {
                            "arguments": [
                                {"type": "string", "name": "name", "description": "The name of the type to check for."},
                            ],
                            "returns": [
                                {"type": "boolean", "name": "b", "description": "True if the object is of the specified type."},
                            ],
                        },
                    ],
                },
            ],
        },
        {
            "name": "Data",
            "description": "The superclass of all data.",
            "supertypes": ["Object"],
            "functions": [
                {
                    "name": "getPointer",
                    "description": "Gets a pointer to the Data.",
                    "variants": [
                        {
                            "returns": [
                                {"type": "light userdata", "name": "pointer", "description": "A raw pointer to the Data."},
                            ],
                        },
                    ],
                },
            ],
        },
    ],
    "modules": [
        {
            "name": "audio",
            "description": "Provides an interface to create noise with the user's speakers.",
            "types": [
                {
                    "name": "Source",
                    "description": "A Source represents audio you can play back.",
                    "supertypes": ["Object"],
                    "functions": [
                        {
                            "name": "setPosition",
                            "description": "Sets the position of the Source.",
                            "variants": [
                                {
                                    "arguments": [
                                        {"type": "number", "name": "x, y, z", "description": "The position of the Source."},
                                    ],
                                },
                                {
                                    "arguments": [
                                        {"type": "table", "name": "position", "description": "The position as a table."},
                                    ],
                                },
                            ],
                        },
                        {
                            "name": "play",
                            "description": "Starts playing the Source.",
                            "variants": [
                                {
                                    "returns": [
                                        {"type": "boolean", "name": "success", "description": "Whether the Source started playing."},
                                    ],
                                },
                            ],
                        },
                    ],
                },
            ],
            "enums": [
                {
                    "name": "SourceType",
                    "description": "Types of audio sources.",
                    "constants": [
                        {"name": "static", "description": "The whole audio is decoded."},
                        {"name": "stream", "description": "The audio is decoded in chunks.\nUse for music."},
                    ],
                },
            ],
            "functions": [
                {
                    "name": "newSource",
                    "description": "Creates a new Source from a filepath.",
                    "variants": [
                        {
                            "arguments": [
                                {"type": "string", "name": "filename", "description": "The filepath to the audio file."},
                                {"type": "SourceType", "name": "type", "description": "Streaming or static source."},
                            ],
                            "returns": [
                                {"type": "Source", "name": "source", "description": "A new Source."},
                            ],
                        },
                        {
                            "description": "Creates a new Source from decoded sound data.",
                            "arguments": [
                                {"type": "SoundData or FileData", "name": "data", "description": "The data to play."},
                            ],
                            "returns": [
                                {"type": "Source", "name": "source", "description": "A new Source."},
                            ],
                        },
                    ],
                },
                {
                    "name": "play",
                    "description": "Plays the specified Sources.",
                    "variants": [
                        {
                            "arguments": [
                                {"type": "Source", "name": "source", "description": "The Source to play."},
                            ],
                            "returns": [
                                {"type": "boolean", "name": "success", "description": "Whether the Source started playing."},
                            ],
                        },
                        {
                            "arguments": [
                                {"type": "Source", "name": "source1", "description": "The first Source to play."},
                                {"type": "Source", "name": "source2", "description": "The second Source to play."},
                                {"type": "Source", "name": "...", "description": "Additional Sources to play."},
                            ],
                            "returns": [
                                {"type": "boolean", "name": "success", "description": "Whether the Sources started playing."},
                            ],
                        },
                    ],
                },
                {
                    "name": "setVolume",
                    "description": "Sets the master volume.",
                    "variants": [
                        {
                            "arguments": [
                                {"type": "number", "name": "volume", "description": "1.0 is max and 0.0 is off.", "default": "1"},
                            ],
                        },
                    ],
                },
                {
                    "name": "setEffect",
                    "description": "Defines an effect.",
                    "variants": [
                        {
                            "arguments": [
                                {"type": "string", "name": "name", "description": "The name of the effect."},
                                {
                                    "type": "table",
                                    "name": "settings",
                                    "description": "The settings to use for this effect.",
                                    "table": [
                                        {"type": "EffectType", "name": "type", "description": "The type of effect to use."},
                                        {"type": "number", "name": "volume", "description": "The volume of the effect."},
                                    ],
                                },
                            ],
                            "returns": [
                                {"type": "boolean", "name": "success", "description": "Whether the effect was created."},
                            ],
                        },
                    ],
                },
            ],
        },
    ],
}


# ---------------------------------------------------------------------------
# Parsed description and registry
# ---------------------------------------------------------------------------

@pytest.fixture
def raw_api() -> dict[str, Any]:
    """A fresh copy of the raw sample description (safe to mutate)."""
    return copy.deepcopy(SAMPLE_API)


@pytest.fixture
def api(raw_api) -> Module:
    return parse_api(raw_api)


@pytest.fixture
def registry(api) -> TypeRegistry:
    return collect_types(api)


@pytest.fixture
def config() -> GeneratorConfig:
    return GeneratorConfig()


# ---------------------------------------------------------------------------
# On-disk description
# ---------------------------------------------------------------------------

@pytest.fixture
def api_json(tmp_path, raw_api) -> Path:
    """The sample description written to a JSON file."""
    path = tmp_path / "love_api.json"
    path.write_text(json.dumps(raw_api), encoding="utf-8")
    return path

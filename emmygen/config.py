"""Generator settings.

Defaults target the LÖVE wiki and the ``love`` namespace; each field can be
overridden through an ``EMMYGEN_*`` environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_NAMESPACE = "love"
DEFAULT_DOC_URL = "https://love2d.org/wiki/"
DEFAULT_SOURCE = "love_api.json"
DEFAULT_OUTPUT_DIR = "api"


@dataclass
class GeneratorConfig:
    """Configuration for a generation run."""

    namespace: str = DEFAULT_NAMESPACE
    doc_url: str = DEFAULT_DOC_URL
    source: str = DEFAULT_SOURCE
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)

    @classmethod
    def from_env(cls) -> GeneratorConfig:
        """Build a config from EMMYGEN_* variables, falling back to defaults."""
        return cls(
            namespace=os.environ.get("EMMYGEN_NAMESPACE", DEFAULT_NAMESPACE),
            doc_url=os.environ.get("EMMYGEN_DOC_URL", DEFAULT_DOC_URL),
            source=os.environ.get("EMMYGEN_SOURCE", DEFAULT_SOURCE),
            output_dir=Path(os.environ.get("EMMYGEN_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
        )

    def doc_link(self, target: str) -> str:
        """Wiki URL for a module member, type or enum."""
        return f"{self.doc_url}{target}"

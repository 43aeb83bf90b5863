"""Quality checks for generated annotation files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

_PARAM_RE = re.compile(r"^---@param\s+\S+\s+(.+?)\s+#")
_RETURN_RE = re.compile(r"^---@return\s+([^,]+)")

# Fragments left behind when a descriptive type gets split on whitespace
_TRUNCATED_DESCRIPTIVE = {"light", "user", "data"}


@dataclass
class ValidationResult:
    """Results from validating generated files."""

    errors: list[str] = field(default_factory=list)  # Check fails if non-empty
    warnings: list[str] = field(default_factory=list)  # Printed but allowed
    files_checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors

    def extend(self, other: ValidationResult) -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.files_checked += other.files_checked


def _has_connective(type_text: str) -> bool:
    return " or " in type_text or " and " in type_text


def validate_text(content: str, label: str = "<string>") -> ValidationResult:
    """Validate the content of one generated file.

    Checks:
    1. The file is marked ``---@meta`` (error)
    2. @param and @return types use ``|`` rather than ``or``/``and`` (error)
    3. Descriptive types were not truncated to a single word (warning)
    4. The file documents at least one parameter and one return (warning)
    """
    result = ValidationResult(files_checked=1)
    lines = content.splitlines()

    if "---@meta" not in lines:
        result.errors.append(f"{label}: missing ---@meta")

    has_param = has_return = False
    for num, line in enumerate(lines, start=1):
        match = _PARAM_RE.match(line)
        if match:
            has_param = True
            param_type = match.group(1).strip()
            if not param_type.startswith("{") and _has_connective(param_type):
                result.errors.append(
                    f"{label}:{num}: union not converted in @param: {param_type}"
                )
            if param_type.rstrip("?") in _TRUNCATED_DESCRIPTIVE:
                result.warnings.append(
                    f"{label}:{num}: incomplete descriptive type: {param_type}"
                )
            continue

        match = _RETURN_RE.match(line)
        if match:
            has_return = True
            return_type = match.group(1).strip()
            if not return_type.startswith("{") and _has_connective(return_type):
                result.errors.append(
                    f"{label}:{num}: union not converted in @return: {return_type}"
                )

    if not has_param:
        result.warnings.append(f"{label}: no @param annotations")
    if not has_return:
        result.warnings.append(f"{label}: no @return annotations")

    return result


def validate_file(path: Path) -> ValidationResult:
    """Validate a single generated file."""
    return validate_text(path.read_text(encoding="utf-8"), label=path.name)


def validate_directory(root: Path) -> ValidationResult:
    """Validate every .lua file under a generated API directory."""
    result = ValidationResult()
    for path in sorted(Path(root).rglob("*.lua")):
        result.extend(validate_file(path))
    return result

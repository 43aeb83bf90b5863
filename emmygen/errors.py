"""Exceptions raised while loading an API description."""

from __future__ import annotations


class EmmygenError(Exception):
    """Base class for generator errors."""


class SourceError(EmmygenError):
    """The API description could not be read or fetched."""


class ApiFormatError(EmmygenError):
    """The API description does not match the expected shape."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")

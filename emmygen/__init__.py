"""EmmyLua annotation generator for the LÖVE API."""

__version__ = "0.1.0"

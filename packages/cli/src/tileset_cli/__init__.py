"""Tileset Tools CLI - ``tileset-tools`` command-line interface."""

__version__ = "0.1.0"

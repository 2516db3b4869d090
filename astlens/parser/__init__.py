"""Bridges to the external parser."""

from astlens.parser.base import Parser, decode_ast

__all__ = ["Parser", "decode_ast"]

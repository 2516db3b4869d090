"""Connects tree hover events to editor highlights."""

from astlens.bridge.hover import HoverBridge

__all__ = ["HoverBridge"]

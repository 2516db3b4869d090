"""The poll, parse and render loop tying the editor to the tree."""

from astlens.playground.controller import PlaygroundController, TreeHost

__all__ = ["PlaygroundController", "TreeHost"]

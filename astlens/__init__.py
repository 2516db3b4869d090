"""AST Lens: an interactive syntax-tree playground."""

__version__ = "0.1.0"

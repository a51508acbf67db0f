"""
Reflinks

Fills in bare references in wikitext with structured citations.
"""

from .fixer import Reflinks

__version__ = "1.0.0"

__all__ = [
    "Reflinks",
    "__version__",
]

"""
Link Handlers

Retrieve metadata for the URLs found in bare references.
"""

from .spider import Spider
from .standalone import StandaloneLinkHandler

__all__ = [
    "Spider",
    "StandaloneLinkHandler",
]

"""
Adapters for the rendering, scanning and persistence collaborators.
"""

from .contact_store import JsonContactStore
from .renderer import QrCodeRenderer
from .scanner import TextScanner

__all__ = ["JsonContactStore", "QrCodeRenderer", "TextScanner"]

"""Shared rendering resources: colors and fonts."""

from .colors import ColorParser
from .fonts import FontLoader, FontRegistry, RegisteredFont

__all__ = ['ColorParser', 'FontLoader', 'FontRegistry', 'RegisteredFont']

"""Poster templates: data models, built-in records and the catalog."""

from .catalog import TemplateCatalog, default_catalog
from .models import (
    AnchorPosition,
    Border,
    CircleMask,
    GradientFill,
    GradientStop,
    NoMask,
    PhotoSlot,
    PixelPosition,
    PosterTemplate,
    RoundedRectMask,
    Shadow,
    Size,
    SolidFill,
    Stroke,
    TextField,
    TextStyle,
)

__all__ = [
    'AnchorPosition',
    'Border',
    'CircleMask',
    'GradientFill',
    'GradientStop',
    'NoMask',
    'PhotoSlot',
    'PixelPosition',
    'PosterTemplate',
    'RoundedRectMask',
    'Shadow',
    'Size',
    'SolidFill',
    'Stroke',
    'TemplateCatalog',
    'TextField',
    'TextStyle',
    'default_catalog',
]

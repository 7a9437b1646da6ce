"""Transformer module for exporting accepted activities to calendar formats."""

from .base import BaseTransformer
from .ical_transformer import ICalTransformer

__all__ = ["BaseTransformer", "ICalTransformer"]

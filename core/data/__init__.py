"""Data layer - stored record shapes and mapping."""

from .mappers import LineItemMapper, OrderMapper
from .models import LineItemRecord, OrderRecord

__all__ = [
    "LineItemMapper",
    "LineItemRecord",
    "OrderMapper",
    "OrderRecord",
]

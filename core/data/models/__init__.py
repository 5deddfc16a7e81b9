"""Stored record models."""

from .order_record import LineItemRecord, OrderRecord

__all__ = ["LineItemRecord", "OrderRecord"]

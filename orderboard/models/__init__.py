"""Data models for raw and normalized orders"""

from .metadata import MetadataList
from .order import NormalizedOrder, OrderStatus, RawOrder

__all__ = ['MetadataList', 'NormalizedOrder', 'OrderStatus', 'RawOrder']

"""Input operations"""

from .fetcher import OrderFetcher
from .loader import DataLoader

__all__ = ['DataLoader', 'OrderFetcher']

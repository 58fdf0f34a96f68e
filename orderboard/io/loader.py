"""Data loading functionality"""
import json
from typing import Any, Dict, List

from orderboard.exceptions import OrderLoadError
from orderboard.models import NormalizedOrder
from orderboard.normalization import normalize_all


class DataLoader:
    """Handles loading of order data saved from the order API"""

    @staticmethod
    def load_json(filepath: str) -> Any:
        """Load JSON file"""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                return json.load(f)
        except OSError as e:
            raise OrderLoadError(f"No se pudo leer {filepath}: {e.strerror or e}") from e
        except ValueError as e:
            raise OrderLoadError(f"{filepath} no contiene JSON válido: {e}") from e

    @staticmethod
    def load_raw_orders(filepath: str) -> List[Dict[str, Any]]:
        """Load raw orders from a JSON array"""
        data = DataLoader.load_json(filepath)
        if not isinstance(data, list):
            raise OrderLoadError(f"{filepath} no contiene una lista de pedidos")
        return data

    @staticmethod
    def load_orders(filepath: str) -> List[NormalizedOrder]:
        """Load and normalize orders from a JSON file"""
        orders = normalize_all(DataLoader.load_raw_orders(filepath))
        print(f"Loaded {len(orders)} orders from {filepath}")
        return orders

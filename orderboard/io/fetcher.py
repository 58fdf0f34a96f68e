"""Order API client"""
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from orderboard.config import (
    CONSUMER_KEY, CONSUMER_SECRET, MAX_PAGES, ORDERS_PER_PAGE, ORDERS_URL, REQUEST_TIMEOUT,
)
from orderboard.exceptions import ConfigurationError, OrderFetchError
from orderboard.models import NormalizedOrder
from orderboard.normalization import normalize_all
from orderboard.utils import current_month_range


class OrderFetcher:
    """Retrieves every order created in a date window, page by page.

    Any failure aborts the whole fetch with ``OrderFetchError``; pages
    already read are discarded.
    """

    def __init__(self, base_url: str = ORDERS_URL,
                 consumer_key: str = CONSUMER_KEY,
                 consumer_secret: str = CONSUMER_SECRET,
                 per_page: int = ORDERS_PER_PAGE,
                 timeout: float = REQUEST_TIMEOUT,
                 max_pages: int = MAX_PAGES,
                 session: Optional[requests.Session] = None):
        if not base_url:
            raise ConfigurationError(
                "Order API URL is not configured (set WC_ORDERS_URL)"
            )
        self.base_url = base_url
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.per_page = per_page
        self.timeout = timeout
        self.max_pages = max_pages
        self.session = session or requests.Session()

    def build_params(self, page: int, window: Dict[str, str]) -> Dict[str, Any]:
        """Query parameters for one page of the window"""
        params = {
            'per_page': self.per_page,
            'page': page,
            'after': window['after'],
            'before': window['before'],
            'date_column': 'date_created',
        }
        if self.consumer_key and self.consumer_secret:
            params['consumer_key'] = self.consumer_key
            params['consumer_secret'] = self.consumer_secret
        return params

    def _get_page(self, page: int, window: Dict[str, str]) -> requests.Response:
        try:
            response = self.session.get(
                self.base_url,
                params=self.build_params(page, window),
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise OrderFetchError(f"No se pudo conectar con la tienda: {e}") from e

        if not response.ok:
            raise OrderFetchError(
                f"No se pudo cargar pedidos ({response.status_code})",
                status_code=response.status_code,
            )
        return response

    def _next_total_pages(self, response: requests.Response, page: int, page_size: int) -> int:
        header = response.headers.get('X-WP-TotalPages')
        if header:
            try:
                return int(float(header)) or 1
            except (ValueError, OverflowError):
                return 1
        if page_size < self.per_page:
            return page
        return page + 1

    def fetch_raw(self, now: datetime = None) -> List[Dict[str, Any]]:
        """Fetch raw orders created during the month containing ``now``"""
        window = current_month_range(now)
        all_orders: List[Dict[str, Any]] = []
        page = 1
        total_pages = 1

        while page <= total_pages:
            if page > self.max_pages:
                raise OrderFetchError(
                    f"No se pudo cargar pedidos (más de {self.max_pages} páginas)"
                )

            response = self._get_page(page, window)
            try:
                page_data = response.json()
            except ValueError as e:
                raise OrderFetchError("No se pudo cargar pedidos (respuesta inválida)") from e
            if not isinstance(page_data, list):
                raise OrderFetchError("No se pudo cargar pedidos (respuesta inválida)")

            all_orders.extend(page_data)
            total_pages = self._next_total_pages(response, page, len(page_data))
            page += 1

        print(f"📥 Fetched {len(all_orders)} orders from {page - 1} page(s) "
              f"({window['after']} → {window['before']})")
        return all_orders

    def fetch_orders(self, now: datetime = None) -> List[NormalizedOrder]:
        """Fetch and normalize the orders of the current month"""
        return normalize_all(self.fetch_raw(now))

"""Console entry point for the order dashboard"""
import argparse
import sys
from typing import List

from orderboard.analysis import Metrics, MetricsCalculator, OrderAnalyzer
from orderboard.config import ORDERS_FILE, STATUS_ALL
from orderboard.exceptions import ConfigurationError, OrderFetchError, OrderLoadError
from orderboard.io import DataLoader, OrderFetcher
from orderboard.models import NormalizedOrder
from orderboard.presentation import (
    address_text, format_clp, logistics_label, notes_text, observation_text, status_label,
)
from orderboard.query import (
    DEFAULT_DIRECTIONS, SORT_KEYS, Fulfillment, OrderFilters, SortDirection,
    select_and_sort, sort_by,
)


class OutputFormatter:
    """Formats and displays orders and their metrics"""

    @staticmethod
    def print_results(orders: List[NormalizedOrder], metrics: Metrics):
        """Pretty print the selected orders"""
        print("\n" + "="*80)
        print("📋 PEDIDOS")
        print("="*80)

        OutputFormatter._print_metrics(metrics)
        OutputFormatter._print_status_breakdown(orders)
        OutputFormatter._print_orders(orders)

        print("\n" + "="*80)

    @staticmethod
    def _print_metrics(metrics: Metrics):
        """Print metrics section"""
        print(f"\n📊 METRICS:")
        print(f"   Pedidos: {metrics.order_count} ({format_clp(metrics.total_amount)})")
        print(f"   Envíos: {metrics.delivery_count} ({format_clp(metrics.delivery_amount)})")
        print(f"   Retiros: {metrics.pickup_count} ({format_clp(metrics.pickup_amount)})")
        print(f"   Ticket promedio: {format_clp(metrics.average_ticket)}")
        if metrics.invalid_total_count:
            print(f"   ⚠️  Totales ilegibles: {metrics.invalid_total_count}")

    @staticmethod
    def _print_status_breakdown(orders: List[NormalizedOrder]):
        counts = OrderAnalyzer.count_by_status(orders)
        if not counts:
            return
        print(f"\n🏷️  POR ESTADO:")
        for status, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
            print(f"   {status_label(status)}: {count}")

    @staticmethod
    def _print_orders(orders: List[NormalizedOrder]):
        """Print one block per order"""
        if not orders:
            print("\nNo hay pedidos para estos filtros.")
            return

        print(f"\n📦 ORDERS ({len(orders)}):")
        print("-"*80)
        for order in orders:
            print(f"\n#{order.id} - {order.customer_name} [{status_label(order.status)}] "
                  f"{format_clp(order.total)}")
            print(f"   Reserva: {order.delivery_date_label} | {order.delivery_slot}")
            print(f"   {logistics_label(order.is_pickup)}: {order.recipient_name} "
                  f"({order.recipient_phone})")
            if not order.is_pickup:
                print(f"   Dirección: {address_text(order)}")
            print(f"   Mensaje: {notes_text(order)}")
            print(f"   Obs: {observation_text(order)}")
            if order.items:
                print(f"   └─ {', '.join(order.items)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List this month's shop orders")
    parser.add_argument("--file", default=ORDERS_FILE,
                        help="Read raw orders from a JSON file instead of the API")
    parser.add_argument("--status", default=STATUS_ALL, help="Only orders with this status")
    parser.add_argument("--type", dest="fulfillment", default=Fulfillment.ALL.value,
                        choices=[f.value for f in Fulfillment])
    parser.add_argument("--search", default="", help="Free-text search")
    parser.add_argument("--sort", choices=sorted(SORT_KEYS), default=None,
                        help="Table sort key (default: by reservation date)")
    parser.add_argument("--reverse", action="store_true",
                        help="Invert the default direction of --sort")
    return parser


def load_orders(filepath: str) -> List[NormalizedOrder]:
    if filepath:
        return DataLoader.load_orders(filepath)
    print("📂 Fetching orders...")
    return OrderFetcher().fetch_orders()


def main(argv: List[str] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        orders = load_orders(args.file)
    except (OrderFetchError, OrderLoadError, ConfigurationError) as e:
        print(f"❌ {e}")
        return 1

    filters = OrderFilters(
        status=args.status,
        fulfillment=Fulfillment(args.fulfillment),
        search=args.search,
    )
    selected = select_and_sort(orders, filters)
    if args.sort:
        direction = DEFAULT_DIRECTIONS[args.sort]
        if args.reverse:
            direction = SortDirection(direction).flipped()
        selected = sort_by(selected, args.sort, direction)

    metrics = MetricsCalculator.summarize(selected)
    OutputFormatter.print_results(selected, metrics)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Show the back-office dashboard.

Builds the services from BACKOFFICE_* settings (seeded with sample data by
default), computes the dashboard snapshot and prints it. Optionally runs a
search against one entity.

Usage:
    python scripts/show_dashboard.py
    python scripts/show_dashboard.py --json
    python scripts/show_dashboard.py --search laptop --entity products
    python scripts/show_dashboard.py --completed-only --latency-ms 0
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

# Add repo root to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from api.services import BackOffice
from core.config import Settings
from core.errors import BackOfficeError
from core.formatting import format_currency, format_datetime, format_phone, truncate_text
from core.models import DashboardSnapshot, SaleStatus
from core.observability import configure_logging

SEARCHABLE_ENTITIES = ("products", "clients", "sales", "suppliers")


def print_snapshot(stats: DashboardSnapshot):
    """Print the dashboard snapshot as text."""
    print("\n=== DASHBOARD ===")
    print(f"{'Sales':<24} {stats.total_sales}")
    print(f"{'Revenue':<24} {format_currency(stats.total_revenue)}")
    print(f"{'Sales today':<24} {stats.sales_today} ({format_currency(stats.revenue_today)})")
    print(f"{'Products':<24} {stats.total_products} ({stats.total_stock_units} units in stock)")
    print(f"{'Clients':<24} {stats.total_clients} ({stats.new_clients_last_7_days} new in 7 days)")
    print(f"{'Suppliers':<24} {stats.total_suppliers}")
    print(f"{'By status':<24} " + ", ".join(f"{k}={v}" for k, v in stats.sales_by_status.items()))

    print("\n--- Low stock ---")
    if not stats.low_stock_products:
        print("No products below the low-stock threshold.")
    for product in stats.low_stock_products:
        print(f"{product.id:<14} {truncate_text(product.name, 30):<34} stock={product.stock}")

    print("\n--- Recent sales ---")
    if not stats.recent_sales:
        print("No sales yet.")
    for sale in stats.recent_sales:
        print(
            f"{sale.id:<14} {format_datetime(sale.created_at):<28} "
            f"{sale.status.value:<10} {format_currency(sale.total)}"
        )
    print("=================\n")


def print_results(entity: str, records: List) -> None:
    """Print search results, one line per record."""
    print(f"\n=== {entity.upper()} ({len(records)} match(es)) ===")
    for record in records:
        if entity == "products":
            print(f"{record.id:<14} {truncate_text(record.name, 30):<34} {format_currency(record.price)}")
        elif entity == "clients":
            print(f"{record.id:<14} {record.name:<24} {format_phone(record.phone):<18} {record.email}")
        elif entity == "sales":
            print(f"{record.id:<14} client={record.client_id:<10} {format_currency(record.total)}")
        else:
            print(f"{record.id:<6} {record.name:<30} {record.city}/{record.state}")
    print()


async def run(settings: Settings, search: Optional[str], entity: str,
              completed_only: bool, as_json: bool) -> int:
    counted = [SaleStatus.COMPLETED] if completed_only else None
    backoffice = BackOffice.create(settings, counted_statuses=counted)

    try:
        if search is not None:
            service = getattr(backoffice, entity)
            records = await service.search(search)
            if as_json:
                print(json.dumps([r.model_dump(mode="json") for r in records], indent=2))
            else:
                print_results(entity, records)
            return 0

        stats = await backoffice.dashboard.get_dashboard_stats()
    except BackOfficeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if as_json:
        print(stats.model_dump_json(indent=2))
    else:
        print_snapshot(stats)
    return 0


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Show back-office dashboard statistics")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument("--search", help="Search query instead of the dashboard")
    parser.add_argument("--entity", choices=SEARCHABLE_ENTITIES, default="products",
                        help="Entity to search (default: products)")
    parser.add_argument("--completed-only", action="store_true",
                        help="Count only completed sales in the dashboard")
    parser.add_argument("--latency-ms", type=int, help="Override BACKOFFICE_LATENCY_MS")
    parser.add_argument("--no-seed", action="store_true", help="Start with empty stores")
    args = parser.parse_args()

    try:
        settings = Settings.from_env()
    except ValueError as e:
        parser.error(str(e))

    if args.latency_ms is not None:
        if args.latency_ms < 0:
            parser.error("--latency-ms must be >= 0")
        settings.latency_ms = args.latency_ms
    if args.no_seed:
        settings.seed_sample_data = False

    # logs go to stderr so --json output stays parseable
    configure_logging(level=settings.log_level_number, json_format=settings.log_json, stream=sys.stderr)

    exit_code = asyncio.run(run(settings, args.search, args.entity, args.completed_only, args.json))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

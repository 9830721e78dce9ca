"""CLI for catering replanning."""

import argparse
import sys

from galleyops.catering.metrics import compute_dashboard_metrics
from galleyops.config import get_settings
from galleyops.exceptions import FlightStoreError
from galleyops.log import configure_logging
from galleyops.replanning.service import ReplanningService
from galleyops.replanning.stats import summarize_reassignments
from galleyops.replanning.store import CsvFlightSource, InMemoryStore


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Reassign catering from delayed/cancelled flights to compatible flights"
    )
    parser.add_argument("--log-level", help="Override GALLEYOPS_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    process = sub.add_parser("process", help="Run reassignment processing")
    source = process.add_mutually_exclusive_group()
    source.add_argument(
        "--flights",
        "-f",
        help="Flights CSV (default: GALLEYOPS_FLIGHTS_CSV)",
    )
    source.add_argument(
        "--demo",
        action="store_true",
        help="Use the built-in demo flights",
    )
    process.add_argument(
        "--stats",
        "-s",
        action="store_true",
        help="Include statistics summary",
    )
    process.add_argument(
        "--output",
        "-o",
        help="Write reassignment records to CSV file",
    )

    sub.add_parser("metrics", help="Show dashboard metrics for the demo data")
    return parser.parse_args(argv)


def _build_store(args):
    path = args.flights or get_settings().flights_csv
    if args.demo or not path:
        store = InMemoryStore()
        store.load_demo_data()
        return store
    return CsvFlightSource(path)


def _print_stats(records) -> None:
    stats = summarize_reassignments(records)
    print(f"\nTotal records: {stats.total}")
    print(f"Success rate: {stats.success_rate:.1f}%")
    print(f"Meals reassigned: {stats.meals_reassigned}")
    print(f"Bottles reassigned: {stats.bottles_reassigned}")
    if stats.by_status:
        print("\nBy status:")
        for status, count in sorted(stats.by_status.items(), key=lambda x: -x[1]):
            print(f"  {status}: {count}")
    print()


def _process(args) -> int:
    service = ReplanningService(store=_build_store(args))
    try:
        result = service.process_reassignments()
    except FlightStoreError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(f"Processed {result.processed} affected flights", file=sys.stderr)
    if args.stats:
        _print_stats(result.reassignments)

    df = result.to_dataframe()
    if df.empty:
        print("No delayed or cancelled flights.", file=sys.stderr)
    else:
        print(df.drop(columns=["id"]).to_string(index=False))

    if args.output and not df.empty:
        df.to_csv(args.output, index=False)
        print(f"\nWrote {len(df)} rows to {args.output}", file=sys.stderr)
    return 0


def _metrics() -> int:
    store = InMemoryStore()
    store.load_demo_data()
    metrics = compute_dashboard_metrics(
        store.list_flights(), store.list_bottle_analyses(), store.list_trolley_verifications()
    )
    for key, value in metrics.to_dict().items():
        if isinstance(value, float):
            value = f"{value:.1f}"
        print(f"{key}: {value}")
    return 0


def main(argv=None):
    args = parse_args(argv)
    configure_logging(level=args.log_level)

    if args.command == "process":
        code = _process(args)
    else:
        code = _metrics()
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()

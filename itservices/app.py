import argparse
import json
import uuid
from pathlib import Path

from .env import load_env, get_settings
from . import __version__
from .database import init_database, get_session
from .logger import get_logger
from .models import SearchCriteria
from .schema import parse_criteria, parse_service
from pipelines.it_service_filtering import (
    CartesianCandidateSelector,
    RepositoryCandidateSelector,
    RetrievalError,
    only_identifiers_present,
    resolve,
)
from storage.repositories.it_services import ItServiceRepository


def _split_ids(raw: str | None) -> list[str]:
    return [p.strip() for p in raw.split(",") if p.strip()] if raw else []


def build_criteria(args: argparse.Namespace) -> SearchCriteria:
    data: dict = {}
    if getattr(args, "input", None):
        input_path = Path(args.input)
        if not input_path.exists():
            raise SystemExit(f"Input file not found: {input_path}")
        with input_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise SystemExit("Criteria file must contain a JSON object")
    # Flags override file values
    for field in ("ids", "managers", "subdivisions"):
        values = _split_ids(getattr(args, field, None))
        if values:
            data[field] = values
    try:
        return parse_criteria(data)
    except ValueError as e:
        raise SystemExit(f"Invalid criteria: {e}")


def _print_result(result: set) -> None:
    for service_id in sorted(result, key=str):
        print(service_id)
    print(f"Total: {len(result)}")


def cmd_resolve(args: argparse.Namespace) -> None:
    settings = get_settings()
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)
    criteria = build_criteria(args)

    if args.mock:
        fetcher = CartesianCandidateSelector()
    else:
        db_path = Path(args.db) if args.db else settings.db_path
        # ids-only requests are answered without reading the store
        if not db_path.exists() and not only_identifiers_present(criteria):
            raise SystemExit(f"Database not found: {db_path}. Run 'seed' first or pass --mock.")
        fetcher = RepositoryCandidateSelector.for_database(
            db_path,
            max_retries=settings.fetch_retries,
            base_delay=settings.fetch_base_delay,
        )

    logger.info("Resolving IT services", criteria=criteria)
    try:
        result = resolve(criteria, fetcher)
    except RetrievalError as e:
        raise SystemExit(str(e))
    _print_result(result)

    if args.metrics:
        logger.log_metrics_summary()


def cmd_seed(args: argparse.Namespace) -> None:
    settings = get_settings()
    input_path = Path(args.input)
    db_path = Path(args.db) if args.db else settings.db_path
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")

    with input_path.open("r", encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise SystemExit("Services file must contain a JSON list")

    services = []
    for i, record in enumerate(records):
        try:
            services.append(parse_service(record))
        except ValueError as e:
            raise SystemExit(f"Invalid service at index {i}: {e}")

    init_database(db_path)
    session = get_session(db_path)
    try:
        counts = ItServiceRepository(session).add_all(services)
    finally:
        session.close()
    print(f"Done. new={counts['new']} updated={counts['updated']} no-change={counts['no-change']}")


def cmd_list(args: argparse.Namespace) -> None:
    db_path = Path(args.db) if args.db else get_settings().db_path
    if not db_path.exists():
        print(f"Database not found: {db_path}")
        return
    session = get_session(db_path)
    try:
        services = ItServiceRepository(session).all()
    finally:
        session.close()
    if not services:
        print("No IT services in store.")
        return
    print(f"Found {len(services)} IT services in {db_path}:\n")
    for s in services:
        print(f"ID: {s.id}")
        print(f"  Manager: {s.manager}")
        print(f"  Subdivision: {s.subdivision}")
        print()


def cmd_demo(args: argparse.Namespace) -> None:
    settings = get_settings()
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)

    def generate(n: int) -> set:
        return {uuid.uuid4() for _ in range(n)}

    criteria = SearchCriteria(
        ids=generate(args.ids),
        managers=generate(args.managers),
        subdivisions=generate(args.subdivisions),
    )
    logger.info(">>> REQUEST", criteria=criteria)
    result = resolve(criteria, CartesianCandidateSelector())
    logger.info(">>> RESULT", size=len(result))
    _print_result(result)

    if args.metrics:
        logger.log_metrics_summary()


def main(argv=None):
    # Load .env if present (ITSERVICES_DB_PATH, ITSERVICES_LOG_LEVEL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="itservices", description="Resolve IT-service ids by search criteria")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    res = subparsers.add_parser("resolve", help="Resolve IT-service ids matching the given criteria")
    res.add_argument("--ids", help="Comma-separated IT-service UUIDs to restrict to")
    res.add_argument("--managers", help="Comma-separated manager UUIDs")
    res.add_argument("--subdivisions", help="Comma-separated subdivision UUIDs")
    res.add_argument("--input", help="Path to criteria JSON ({\"ids\": [...], \"managers\": [...], \"subdivisions\": [...]})")
    res.add_argument("--db", help="Path to SQLite store (default: ITSERVICES_DB_PATH or data/it_services.db)")
    res.add_argument("--mock", action="store_true", help="Generate candidates from the criteria instead of reading the store")
    res.add_argument("--metrics", action="store_true", help="Log a metrics summary when done")
    res.set_defaults(func=cmd_resolve)

    sd = subparsers.add_parser("seed", help="Load IT services from a JSON list into the store")
    sd.add_argument("--input", required=True, help="Path to services JSON ([{\"id\", \"manager\", \"subdivision\"}, ...])")
    sd.add_argument("--db", help="Path to SQLite store")
    sd.set_defaults(func=cmd_seed)

    lst = subparsers.add_parser("list", help="List all stored IT services")
    lst.add_argument("--db", help="Path to SQLite store")
    lst.set_defaults(func=cmd_list)

    demo = subparsers.add_parser("demo", help="Resolve randomly generated criteria against generated candidates")
    demo.add_argument("--ids", type=int, default=0, help="Number of random ids (default 0)")
    demo.add_argument("--managers", type=int, default=1, help="Number of random managers (default 1)")
    demo.add_argument("--subdivisions", type=int, default=10, help="Number of random subdivisions (default 10)")
    demo.add_argument("--metrics", action="store_true", help="Log a metrics summary when done")
    demo.set_defaults(func=cmd_demo)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        try:
            args.func(args)
        except ValueError as e:
            # Settings read from the environment
            raise SystemExit(str(e))
        return

    parser.print_help()


if __name__ == "__main__":
    main()

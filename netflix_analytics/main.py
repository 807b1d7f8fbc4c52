"""
Command-line runner for the Netflix catalog pipeline and reports
"""
import argparse
import datetime
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .analytics import (
    export_reports,
    load_titles_from_csv,
    load_titles_from_table,
    profile_titles,
    register_titles_view,
    run_reports,
    show_report,
)
from .bronze_ingest import run_bronze
from .config import Paths, Databases, Tables, PipelineConfig, QueryParams
from .gold_reports import run_gold
from .queries import REPORTS, get_report
from .session import build_spark_session
from .silver_transform import run_silver

logger = logging.getLogger(__name__)

# CLI flag -> QueryParams field
PARAM_FLAGS = (
    ("--release-year", "release_year", int),
    ("--top-countries", "top_countries", int),
    ("--recent-years", "recent_years", int),
    ("--director", "director", str),
    ("--min-seasons", "min_seasons", int),
    ("--country", "country", str),
    ("--top-years", "top_years", int),
    ("--actor", "actor", str),
    ("--actor-years", "actor_years", int),
    ("--top-actors", "top_actors", int),
)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Set up logging configuration"""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )
    return logging.getLogger(__name__)


def _iso_date(value: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="netflix-analytics", description=__doc__.strip())
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file")
    parser.add_argument("--master", help="Spark master, e.g. local[*]")
    parser.add_argument("--format", dest="table_format", choices=["delta", "parquet"], default="delta")

    sub = parser.add_subparsers(dest="command", required=True)

    pipeline = sub.add_parser("pipeline", help="bronze -> silver -> gold report tables")
    pipeline.add_argument("--csv", default=Paths.netflix_csv)
    pipeline.add_argument("--delta-root", default=Paths.delta_root)
    pipeline.add_argument("--incremental", action="store_true", help="append to bronze instead of overwriting")
    _add_query_args(pipeline)

    report = sub.add_parser("report", help="run reports and print them")
    source = report.add_mutually_exclusive_group(required=True)
    source.add_argument("--csv")
    source.add_argument("--from-table", action="store_true", help="read the silver table")
    report.add_argument("--only", action="append", metavar="NAME", help="report name (repeatable)")
    report.add_argument("--limit", type=int, default=20)
    report.add_argument("--export", metavar="DIR", help="write each report as CSV under DIR")
    report.add_argument("--profile", action="store_true", help="log a data quality profile first")
    _add_query_args(report)

    sub.add_parser("list", help="list report names")
    return parser


def _add_query_args(parser: argparse.ArgumentParser):
    group = parser.add_argument_group("report parameters")
    for flag, field, kind in PARAM_FLAGS:
        group.add_argument(flag, dest=field, type=kind)
    group.add_argument("--keyword", dest="keywords", action="append", help="description keyword (repeatable)")
    group.add_argument("--as-of", dest="as_of", type=_iso_date, help="reference date, default today")


def query_params_from_args(args: argparse.Namespace) -> QueryParams:
    overrides = {}
    for _, field, _ in PARAM_FLAGS:
        value = getattr(args, field, None)
        if value is not None:
            overrides[field] = value
    if getattr(args, "keywords", None):
        overrides["keywords"] = tuple(args.keywords)
    if getattr(args, "as_of", None):
        overrides["as_of"] = args.as_of
    return replace(QueryParams(), **overrides)


def run_pipeline(spark, paths: Paths, dbs: Databases, tables: Tables, cfg: PipelineConfig, params: QueryParams):
    logger.info("Step 1: Bronze ingest")
    run_bronze(spark, paths, dbs, tables, cfg)

    logger.info("Step 2: Silver transform")
    silver = run_silver(spark, paths, dbs, tables, cfg)
    log_profile(profile_titles(silver))

    logger.info("Step 3: Gold report tables")
    return run_gold(spark, paths, dbs, tables, cfg, params)


def log_profile(profile):
    logger.info("Profile: %d rows, types=%s", profile["rows"], profile["types"])
    for column, nulls in profile["nulls"].items():
        if nulls:
            logger.info("  %s: %d nulls", column, nulls)


def validate_reports(params: QueryParams, names: Optional[List[str]] = None):
    """Build each selected report's SQL once so bad parameters fail before Spark starts."""
    selected = [get_report(n) for n in names] if names else list(REPORTS)
    for report in selected:
        report.sql(params)


def run_report_command(spark, args: argparse.Namespace, params: QueryParams):
    if args.from_table:
        titles = load_titles_from_table(spark, Databases(), Tables())
    else:
        titles = load_titles_from_csv(spark, args.csv)
    register_titles_view(titles)

    if args.profile:
        log_profile(profile_titles(titles))

    results = run_reports(spark, params, args.only)
    for name, df in results.items():
        show_report(get_report(name), df, args.limit)

    if args.export:
        export_reports(results, args.export)
    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    if args.command == "list":
        for report in REPORTS:
            print(f"{report.name:<24} {report.title}")
        return 0

    try:
        params = query_params_from_args(args)
        validate_reports(params, getattr(args, "only", None))
    except ValueError as e:
        parser.error(str(e))

    spark = build_spark_session(master=args.master, enable_delta=args.table_format == "delta")
    try:
        if args.command == "pipeline":
            paths = Paths(netflix_csv=args.csv, delta_root=args.delta_root)
            cfg = PipelineConfig(full_rebuild=not args.incremental, table_format=args.table_format)
            run_pipeline(spark, paths, Databases(), Tables(), cfg, params)
            logger.info("Pipeline completed successfully")
        else:
            run_report_command(spark, args, params)
    except Exception as e:
        logger.error(f"{args.command} failed: {str(e)}")
        raise
    finally:
        spark.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())

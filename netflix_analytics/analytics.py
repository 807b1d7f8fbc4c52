import logging
import os
from collections import OrderedDict
from typing import Dict, Iterable, Optional

from pyspark.sql import DataFrame
from pyspark.sql import functions as F

from .bronze_ingest import read_netflix_raw
from .config import Databases, QueryParams, Tables
from .queries import REPORTS, VIEW_NAME, Report, check_identifier, get_report
from .silver_transform import NETFLIX_COLUMNS, clean_netflix
from .utils import require_columns

logger = logging.getLogger(__name__)

# Columns the reports read on top of the raw Netflix ones
DERIVED_COLUMNS = ("durationMinutes", "seasonCount")


def load_titles_from_table(spark, dbs: Databases, tables: Tables) -> DataFrame:
    return spark.table(f"{dbs.silver}.{tables.silver_netflix}")


def load_titles_from_csv(spark, path: str) -> DataFrame:
    """Bronze + silver in memory, for ad hoc runs without the table layers."""
    return clean_netflix(read_netflix_raw(spark, path))


def register_titles_view(df: DataFrame, view: str = VIEW_NAME) -> DataFrame:
    require_columns(df, NETFLIX_COLUMNS + DERIVED_COLUMNS, f"View {view}")
    df.createOrReplaceTempView(check_identifier(view))
    return df


def run_report(spark, report: Report, params: QueryParams, view: str = VIEW_NAME) -> DataFrame:
    sql_text, args = report.sql(params, view)
    logger.debug("Report %s args=%s sql=%s", report.name, args, sql_text)
    return spark.sql(sql_text, args or None)


def run_reports(
    spark,
    params: QueryParams,
    names: Optional[Iterable[str]] = None,
    view: str = VIEW_NAME,
) -> "OrderedDict[str, DataFrame]":
    selected = [get_report(n) for n in names] if names else list(REPORTS)
    results = OrderedDict()
    for report in selected:
        logger.info("Running report %s", report.name)
        results[report.name] = run_report(spark, report, params, view)
    return results


def show_report(report: Report, df: DataFrame, limit: int = 20):
    print(f"\n{report.title} ({report.name})")
    df.show(limit, truncate=False)


def export_reports(results: Dict[str, DataFrame], out_dir: str) -> Dict[str, str]:
    written = {}
    for name, df in results.items():
        path = os.path.join(out_dir, name)
        (
            df.coalesce(1)
            .write.mode("overwrite")
            .option("header", True)
            .csv(path)
        )
        logger.info("Exported %s to %s", name, path)
        written[name] = path
    return written


def profile_titles(df: DataFrame) -> Dict[str, object]:
    """
    Row count, NULL count per column and titles per content type.
    """
    columns = [c for c in df.columns if not c.startswith("_")]
    null_row = df.select(
        *[F.sum(F.col(c).isNull().cast("int")).alias(c) for c in columns]
    ).first()

    type_counts = {}
    if "type" in df.columns:
        for row in df.groupBy("type").count().collect():
            type_counts[row["type"]] = row["count"]

    return {
        "rows": df.count(),
        "nulls": {c: int(null_row[c] or 0) for c in columns},
        "types": type_counts,
    }

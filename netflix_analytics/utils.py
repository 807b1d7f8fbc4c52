import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from pyspark.sql import DataFrame
from pyspark.sql import functions as F
from pyspark.sql.window import Window

logger = logging.getLogger(__name__)

_CAMEL_RX = re.compile(r"[^a-zA-Z0-9]+")

# `cast` is a SQL keyword; keep it out of the column namespace
NETFLIX_RENAME_MAP = {
    "cast": "cast_members",
    "casts": "cast_members",
}


def to_camel_case(name: str) -> str:
    """
    Convert column names to lowerCamelCase.
    Examples:
      "show_id"      -> "showId"
      "Listed In"    -> "listedIn"
      "cast_members" -> "castMembers"
    """
    if name is None:
        return name
    raw = name.strip()
    if raw == "":
        return raw
    parts = [p for p in _CAMEL_RX.split(raw) if p]
    if not parts:
        return raw

    first = parts[0].lower()
    rest = [p[:1].upper() + p[1:].lower() for p in parts[1:]]
    return "".join([first] + rest)


def standardize_columns(df: DataFrame, rename_map: Optional[Dict[str, str]] = None) -> DataFrame:
    """
    1) Optionally rename known columns using rename_map (case-insensitive match)
    2) Convert all columns to camelCase
    """
    rename_map = rename_map or {}

    # Build case-insensitive map
    lower_map = {k.lower(): v for k, v in rename_map.items()}

    exprs = []
    for c in df.columns:
        target = lower_map.get(c.strip().lower(), c)
        exprs.append(F.col(f"`{c}`").alias(to_camel_case(target)))
    return df.select(*exprs)


def require_columns(df: DataFrame, cols: Iterable[str], context: str = "DataFrame") -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"{context} is missing required columns: {', '.join(missing)}")


def safe_int(col: str):
    # try_cast keeps bad values NULL under ANSI mode too
    return F.expr(f"try_cast(`{col}` AS INT)")


def safe_date(col: str, fmt: str):
    return F.to_date(F.try_to_timestamp(F.col(col), F.lit(fmt)))


def trim_string_cols(df: DataFrame) -> DataFrame:
    out = df
    for c, t in df.dtypes:
        if t == "string":
            out = out.withColumn(c, F.trim(F.col(c)))
    return out


def blank_to_null(df: DataFrame) -> DataFrame:
    out = df
    for c, t in df.dtypes:
        if t == "string":
            out = out.withColumn(c, F.when(F.col(c) == "", None).otherwise(F.col(c)))
    return out


def drop_all_null_key_rows(df: DataFrame, keys: Iterable[str]) -> DataFrame:
    # Expects blank_to_null to have run first
    cond = None
    for k in keys:
        this = F.col(k).isNotNull()
        cond = this if cond is None else (cond & this)
    return df.filter(cond) if cond is not None else df


def dedupe_by_window(df: DataFrame, partition_cols: List[str], order_cols: List[Tuple[str, str]]) -> DataFrame:
    """
    Dedupe keeping the first row within partition by ordering.
    order_cols: list of (colName, 'asc'|'desc')
    """
    order_exprs = []
    for c, direction in order_cols:
        order_exprs.append(F.col(c).asc_nulls_last() if direction.lower() == "asc" else F.col(c).desc_nulls_last())
    w = Window.partitionBy(*partition_cols).orderBy(*order_exprs)
    return df.withColumn("_rn", F.row_number().over(w)).filter(F.col("_rn") == 1).drop("_rn")


def parse_first_name(list_col: str):
    """
    Netflix director/cast columns hold comma-separated names.
    """
    return F.when(
        F.col(list_col).isNull() | (F.col(list_col) == ""),
        None
    ).otherwise(F.trim(F.split(F.col(list_col), r"\s*,\s*").getItem(0)))


def ensure_db(spark, db_name: str):
    spark.sql(f"CREATE DATABASE IF NOT EXISTS {db_name}")


def write_table(
    spark,
    df: DataFrame,
    db: str,
    table: str,
    storage_path: str,
    full_rebuild: bool,
    merge_schema: bool = False,
    table_format: str = "delta",
):
    ensure_db(spark, db)
    if table_format == "delta":
        spark.conf.set("spark.databricks.delta.schema.autoMerge.enabled", "true" if merge_schema else "false")

    mode = "overwrite" if full_rebuild else "append"
    writer = df.write.format(table_format).mode(mode)
    if table_format == "delta":
        writer = (
            writer
            .option("overwriteSchema", "true" if full_rebuild else "false")
            .option("mergeSchema", "true" if merge_schema else "false")
        )
    writer.save(storage_path)

    spark.sql(f"CREATE TABLE IF NOT EXISTS {db}.{table} USING {table_format.upper()} LOCATION '{storage_path}'")
    spark.catalog.refreshTable(f"{db}.{table}")
    logger.info("Wrote %s.%s (%s, mode=%s) at %s", db, table, table_format, mode, storage_path)

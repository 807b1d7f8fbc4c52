import logging

from pyspark.sql import DataFrame
from pyspark.sql import functions as F

from .config import Paths, Databases, Tables, PipelineConfig
from .utils import (
    blank_to_null,
    dedupe_by_window,
    drop_all_null_key_rows,
    parse_first_name,
    require_columns,
    safe_date,
    safe_int,
    trim_string_cols,
    write_table,
)

logger = logging.getLogger(__name__)

NETFLIX_COLUMNS = (
    "showId", "type", "title", "director", "castMembers", "country",
    "dateAdded", "releaseYear", "rating", "duration", "listedIn", "description",
)

# "September 25, 2021"
DATE_ADDED_FORMAT = "MMMM d, yyyy"

MOVIE = "Movie"
TV_SHOW = "TV Show"


def load_bronze(spark, db: str, table: str) -> DataFrame:
    return spark.table(f"{db}.{table}")


def repair_misplaced_duration(df: DataFrame) -> DataFrame:
    """
    A few source rows carry the duration ("74 min") in the rating column
    and leave duration empty. Move it back.
    """
    misplaced = F.col("duration").isNull() & F.col("rating").rlike(r"^\d+\s*min$")
    return (
        df.withColumn("duration", F.when(misplaced, F.col("rating")).otherwise(F.col("duration")))
          .withColumn("rating", F.when(misplaced, F.lit(None).cast("string")).otherwise(F.col("rating")))
    )


def _leading_number(col: str, unit_pattern: str):
    digits = F.regexp_extract(F.col(col), rf"^(\d+)\s*{unit_pattern}", 1)
    return F.when(digits != "", digits.cast("int"))


def add_duration_columns(df: DataFrame) -> DataFrame:
    """
    duration is "90 min" for movies and "3 Seasons" / "1 Season" for shows.
    """
    return (
        df.withColumn(
            "durationMinutes",
            F.when(F.col("type") == MOVIE, _leading_number("duration", "min")).cast("int"),
        )
        .withColumn(
            "seasonCount",
            F.when(F.col("type") == TV_SHOW, _leading_number("duration", "Seasons?")).cast("int"),
        )
    )


def clean_netflix(df: DataFrame) -> DataFrame:
    """
    Expected Netflix columns (after standardize_columns):
    showId, type, title, director, castMembers, country, dateAdded,
    releaseYear, rating, duration, listedIn, description
    """
    require_columns(df, NETFLIX_COLUMNS, "Netflix titles")

    d = blank_to_null(trim_string_cols(df))
    d = repair_misplaced_duration(d)

    d = d.withColumn("releaseYear", safe_int("releaseYear"))
    if dict(d.dtypes)["dateAdded"] == "string":
        d = d.withColumn("dateAdded", safe_date("dateAdded", DATE_ADDED_FORMAT))

    d = add_duration_columns(d)
    d = d.withColumn("primaryDirector", parse_first_name("director"))

    d = drop_all_null_key_rows(d, ["showId", "title"])

    # One row per showId: latest dateAdded, then rows that name a director
    d = dedupe_by_window(
        d,
        ["showId"],
        [("dateAdded", "desc"), ("director", "desc"), ("title", "asc")],
    )
    return d


def run_silver(spark, paths: Paths, dbs: Databases, tables: Tables, cfg: PipelineConfig) -> DataFrame:
    bronze_netflix = load_bronze(spark, dbs.bronze, tables.bronze_netflix)
    silver_netflix = clean_netflix(bronze_netflix)
    logger.info("Silver: %d titles after cleaning", silver_netflix.count())

    # Silver is rebuilt from all of bronze, so it is always overwritten
    write_table(
        spark, silver_netflix,
        dbs.silver, tables.silver_netflix,
        f"{paths.silver_root}/{tables.silver_netflix}",
        True, cfg.enable_schema_merge, cfg.table_format,
    )
    return silver_netflix

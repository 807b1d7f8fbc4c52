import logging

from pyspark.sql import DataFrame
from pyspark.sql import functions as F

from .config import Paths, Databases, Tables, PipelineConfig
from .utils import NETFLIX_RENAME_MAP, standardize_columns, write_table

logger = logging.getLogger(__name__)


def read_netflix_raw(spark, path: str) -> DataFrame:
    df = (
        spark.read
        .option("header", True)
        .option("multiLine", True)
        .option("escape", "\"")
        .csv(path)
    )
    # Standardize early so downstream is stable
    df = standardize_columns(df, NETFLIX_RENAME_MAP)
    return add_lineage(df)


def add_lineage(df: DataFrame) -> DataFrame:
    return (
        df.withColumn("_sourceFile", F.input_file_name())
          .withColumn("_ingestedAt", F.current_timestamp())
    )


def run_bronze(spark, paths: Paths, dbs: Databases, tables: Tables, cfg: PipelineConfig) -> DataFrame:
    logger.info("Bronze: reading %s", paths.netflix_csv)
    netflix = read_netflix_raw(spark, paths.netflix_csv)
    write_table(
        spark,
        netflix,
        dbs.bronze,
        tables.bronze_netflix,
        f"{paths.bronze_root}/{tables.bronze_netflix}",
        cfg.full_rebuild,
        cfg.enable_schema_merge,
        cfg.table_format,
    )
    return netflix

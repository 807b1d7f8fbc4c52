import logging
from typing import Dict, Optional

from pyspark.sql import SparkSession

logger = logging.getLogger(__name__)


def build_spark_session(
    app_name: str = "netflix-analytics",
    master: Optional[str] = None,
    enable_delta: bool = True,
    extra_conf: Optional[Dict[str, str]] = None,
) -> SparkSession:
    """
    Local/standalone session. On Databricks the notebooks use the provided `spark`.
    """
    builder = SparkSession.builder.appName(app_name)
    if master:
        builder = builder.master(master)

    builder = builder.config("spark.sql.session.timeZone", "UTC")
    if enable_delta:
        from delta import configure_spark_with_delta_pip

        builder = (
            builder
            .config("spark.sql.extensions", "io.delta.sql.DeltaSparkSessionExtension")
            .config("spark.sql.catalog.spark_catalog", "org.apache.spark.sql.delta.catalog.DeltaCatalog")
        )
        builder = configure_spark_with_delta_pip(builder)

    for key, value in (extra_conf or {}).items():
        builder = builder.config(key, value)

    spark = builder.getOrCreate()
    logger.info("Spark %s session ready (delta=%s)", spark.version, enable_delta)
    return spark

import logging
from typing import Dict, Iterable, Optional

from pyspark.sql import DataFrame

from .analytics import load_titles_from_table, register_titles_view, run_reports
from .config import Paths, Databases, Tables, PipelineConfig, QueryParams
from .utils import write_table

logger = logging.getLogger(__name__)


def write_gold_report(spark, df: DataFrame, report_name: str, paths: Paths, dbs: Databases, tables: Tables, cfg: PipelineConfig) -> str:
    table = tables.gold_report(report_name)
    # Reports are snapshots: always overwrite, even on incremental runs
    write_table(
        spark,
        df,
        dbs.gold,
        table,
        f"{paths.gold_root}/{table}",
        full_rebuild=True,
        table_format=cfg.table_format,
    )
    return f"{dbs.gold}.{table}"


def run_gold(
    spark,
    paths: Paths,
    dbs: Databases,
    tables: Tables,
    cfg: PipelineConfig,
    params: Optional[QueryParams] = None,
    names: Optional[Iterable[str]] = None,
) -> Dict[str, str]:
    params = params or QueryParams()
    titles = load_titles_from_table(spark, dbs, tables)
    register_titles_view(titles)

    written = {}
    for name, df in run_reports(spark, params, names).items():
        written[name] = write_gold_report(spark, df, name, paths, dbs, tables, cfg)
    logger.info("Gold: wrote %d report tables", len(written))
    return written

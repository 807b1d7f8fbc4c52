# Databricks notebook source
# MAGIC %md
# MAGIC # 03 - Gold Report Tables
# MAGIC Materializes every analytical report as a gold table.

from netflix_analytics.config import Paths, Databases, Tables, PipelineConfig, QueryParams
from netflix_analytics.gold_reports import run_gold

paths = Paths()
dbs = Databases()
tables = Tables()
cfg = PipelineConfig(full_rebuild=True)

written = run_gold(spark, paths, dbs, tables, cfg, QueryParams())

display(spark.table(written["contentTypeCounts"]))

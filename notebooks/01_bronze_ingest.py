# Databricks notebook source
# MAGIC %md
# MAGIC # 01 - Bronze Ingest
# MAGIC Reads the raw Netflix titles CSV from DBFS and writes the Delta Bronze table.

from netflix_analytics.config import Paths, Databases, Tables, PipelineConfig
from netflix_analytics.bronze_ingest import run_bronze

paths = Paths()
dbs = Databases()
tables = Tables()
cfg = PipelineConfig(full_rebuild=True)  # set False for incremental append

run_bronze(spark, paths, dbs, tables, cfg)

display(spark.table(f"{dbs.bronze}.{tables.bronze_netflix}").limit(10))

# Databricks notebook source
# MAGIC %md
# MAGIC # 02 - Silver Transform
# MAGIC Cleans, types, deduplicates titles and derives duration columns.

from netflix_analytics.config import Paths, Databases, Tables, PipelineConfig
from netflix_analytics.silver_transform import run_silver
from netflix_analytics.analytics import profile_titles

paths = Paths()
dbs = Databases()
tables = Tables()
cfg = PipelineConfig(full_rebuild=True)

silver = run_silver(spark, paths, dbs, tables, cfg)

print(profile_titles(silver))
display(spark.table(f"{dbs.silver}.{tables.silver_netflix}").limit(10))

# Databricks notebook source
# MAGIC %md
# MAGIC # 00 - Setup
# MAGIC Creates databases and sets common Spark configs.

from netflix_analytics.config import Databases
from netflix_analytics.utils import ensure_db

spark.conf.set("spark.sql.session.timeZone", "UTC")
spark.conf.set("spark.databricks.delta.schema.autoMerge.enabled", "true")

for db in [Databases().bronze, Databases().silver, Databases().gold]:
    ensure_db(spark, db)

print("Setup complete.")

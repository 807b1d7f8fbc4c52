# Databricks notebook source
# MAGIC %md
# MAGIC # 04 - Analytics Queries
# MAGIC Runs the fifteen catalog questions against the silver table:
# MAGIC - content type split, ratings, countries, genres
# MAGIC - title lookups by year, director, duration, seasons
# MAGIC - keyword categories from descriptions

from netflix_analytics.config import Databases, Tables, QueryParams
from netflix_analytics.analytics import load_titles_from_table, register_titles_view, run_reports
from netflix_analytics.queries import get_report

dbs = Databases()
tables = Tables()
params = QueryParams()  # e.g. QueryParams(release_year=2021, country="Japan")

register_titles_view(load_titles_from_table(spark, dbs, tables))

for name, df in run_reports(spark, params).items():
    print(get_report(name).title)
    display(df)

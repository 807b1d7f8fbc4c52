"""Netflix catalog analytics: medallion tables and Spark SQL reports."""

__version__ = "0.1.0"

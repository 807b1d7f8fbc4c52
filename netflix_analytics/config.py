import datetime
from dataclasses import dataclass
from typing import Optional, Tuple

@dataclass(frozen=True)
class Paths:
    # Input data (DBFS)
    netflix_csv: str = "dbfs:/FileStore/netflix/netflix_titles.csv"

    # Table storage locations
    delta_root: str = "dbfs:/FileStore/delta/netflix"

    @property
    def bronze_root(self) -> str:
        return f"{self.delta_root}/bronze"

    @property
    def silver_root(self) -> str:
        return f"{self.delta_root}/silver"

    @property
    def gold_root(self) -> str:
        return f"{self.delta_root}/gold"


@dataclass(frozen=True)
class Databases:
    bronze: str = "netflix_bronze"
    silver: str = "netflix_silver"
    gold: str = "netflix_gold"


@dataclass(frozen=True)
class Tables:
    # Bronze
    bronze_netflix: str = "netflixTitles"
    # Silver
    silver_netflix: str = "netflixTitles"
    # Gold: one table per report, e.g. reportGenreCounts
    gold_report_prefix: str = "report"

    def gold_report(self, report_name: str) -> str:
        return f"{self.gold_report_prefix}{report_name[:1].upper()}{report_name[1:]}"


@dataclass(frozen=True)
class PipelineConfig:
    # Bronze: full rebuild (overwrite) vs incremental append; silver and gold always overwrite
    full_rebuild: bool = True

    # Write options
    enable_schema_merge: bool = True
    table_format: str = "delta"  # or "parquet" where Delta Lake is unavailable


@dataclass(frozen=True)
class QueryParams:
    release_year: int = 2020
    top_countries: int = 5
    recent_years: int = 5
    director: str = "Rajiv Chilaka"
    min_seasons: int = 5
    country: str = "India"
    top_years: int = 5
    actor: str = "Salman Khan"
    actor_years: int = 10
    top_actors: int = 10
    keywords: Tuple[str, ...] = ("kill", "violence")

    # Reference date for the "last N years" reports; today when unset
    as_of: Optional[datetime.date] = None

    def reference_date(self) -> datetime.date:
        return self.as_of or datetime.date.today()

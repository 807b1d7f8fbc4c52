"""Spark SQL reports over the cleaned Netflix titles view.

Each report builder returns ``(sql_text, args)``. String and date values go
through Spark named parameter markers (``:name``); row limits and year windows
are validated ints rendered into the text.

Expected view columns (silver layer):
    showId, type, title, director, castMembers, country, dateAdded (date),
    releaseYear (int), rating, duration, listedIn, description,
    durationMinutes (int), seasonCount (int)
"""
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from .config import QueryParams

VIEW_NAME = "netflix"

DOCUMENTARY_GENRE = "Documentaries"

_IDENTIFIER_RX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

Query = Tuple[str, Dict[str, Any]]


@dataclass(frozen=True)
class Report:
    name: str
    title: str
    build: Callable[[str, QueryParams], Query]

    def sql(self, params: QueryParams, view: str = VIEW_NAME) -> Query:
        return self.build(check_identifier(view), params)


def check_identifier(name: str) -> str:
    if not name or not _IDENTIFIER_RX.match(name):
        raise ValueError(f"Invalid view name: {name!r}")
    return name


def positive_int(value, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{label} must be a positive integer, got {value!r}")
    return value


def _trimmed_list(col: str, var: str) -> str:
    """SQL array of the trimmed elements of a comma-separated column."""
    return f"TRANSFORM(SPLIT({col}, ','), {var} -> TRIM({var}))"


def _exploded_counts(view: str, col: str, alias: str, where: str = "") -> str:
    return f"""
        SELECT {alias}, COUNT(*) AS totalContent
        FROM (
            SELECT TRIM(item) AS {alias}
            FROM (
                SELECT EXPLODE(SPLIT({col}, ',')) AS item
                FROM {view}
                {where}
            ) items
        ) trimmed
        WHERE {alias} <> ''
        GROUP BY {alias}
        ORDER BY totalContent DESC, {alias} ASC
    """


# -------------------------------------------------------------------------
# Distribution
# -------------------------------------------------------------------------

def content_type_counts(view: str, params: QueryParams) -> Query:
    return f"""
        SELECT type, COUNT(*) AS totalContent
        FROM {view}
        GROUP BY type
        ORDER BY totalContent DESC, type ASC
    """, {}


def most_common_rating(view: str, params: QueryParams) -> Query:
    # RANK keeps every rating tied for first place
    return f"""
        WITH ratingCounts AS (
            SELECT type, rating, COUNT(*) AS ratingCount
            FROM {view}
            WHERE rating IS NOT NULL
            GROUP BY type, rating
        ),
        ranked AS (
            SELECT type, rating, ratingCount,
                   RANK() OVER (PARTITION BY type ORDER BY ratingCount DESC) AS ratingRank
            FROM ratingCounts
        )
        SELECT type, rating, ratingCount
        FROM ranked
        WHERE ratingRank = 1
        ORDER BY type ASC, rating ASC
    """, {}


def genre_counts(view: str, params: QueryParams) -> Query:
    return _exploded_counts(view, "listedIn", "genre"), {}


def keyword_categories(view: str, params: QueryParams) -> Query:
    keywords = [k.strip().lower() for k in params.keywords if k and k.strip()]
    if not keywords:
        raise ValueError("keywords must contain at least one non-blank keyword")

    args = {f"keyword{i}": k for i, k in enumerate(keywords)}
    matches = " OR ".join(
        f"INSTR(LOWER(COALESCE(description, '')), :{name}) > 0" for name in args
    )
    return f"""
        SELECT category, COUNT(*) AS totalContent
        FROM (
            SELECT CASE WHEN {matches} THEN 'Bad' ELSE 'Good' END AS category
            FROM {view}
        ) labelled
        GROUP BY category
        ORDER BY category ASC
    """, args


# -------------------------------------------------------------------------
# Geography
# -------------------------------------------------------------------------

def top_countries(view: str, params: QueryParams) -> Query:
    limit = positive_int(params.top_countries, "top_countries")
    return _exploded_counts(view, "country", "country") + f"LIMIT {limit}", {}


def country_yearly_share(view: str, params: QueryParams) -> Query:
    limit = positive_int(params.top_years, "top_years")
    return f"""
        SELECT yearAdded,
               totalContent,
               CAST(ROUND(totalContent * 100.0 / SUM(totalContent) OVER (), 2) AS DOUBLE) AS sharePct
        FROM (
            SELECT YEAR(dateAdded) AS yearAdded, COUNT(*) AS totalContent
            FROM {view}
            WHERE dateAdded IS NOT NULL
              AND ARRAY_CONTAINS({_trimmed_list("country", "c")}, :country)
            GROUP BY YEAR(dateAdded)
        ) yearly
        ORDER BY sharePct DESC, yearAdded ASC
        LIMIT {limit}
    """, {"country": params.country}


def top_actors_in_country(view: str, params: QueryParams) -> Query:
    limit = positive_int(params.top_actors, "top_actors")
    return f"""
        SELECT actor, COUNT(*) AS totalMovies
        FROM (
            SELECT TRIM(actorName) AS actor
            FROM (
                SELECT EXPLODE(SPLIT(castMembers, ',')) AS actorName
                FROM {view}
                WHERE type = 'Movie'
                  AND ARRAY_CONTAINS({_trimmed_list("country", "c")}, :country)
            ) castRows
        ) actors
        WHERE actor <> ''
        GROUP BY actor
        ORDER BY totalMovies DESC, actor ASC
        LIMIT {limit}
    """, {"country": params.country}


# -------------------------------------------------------------------------
# Title lookups
# -------------------------------------------------------------------------

def movies_released_in_year(view: str, params: QueryParams) -> Query:
    year = positive_int(params.release_year, "release_year")
    return f"""
        SELECT showId, title, director, country, releaseYear
        FROM {view}
        WHERE type = 'Movie'
          AND releaseYear = :releaseYear
        ORDER BY title ASC, showId ASC
    """, {"releaseYear": year}


def longest_movies(view: str, params: QueryParams) -> Query:
    return f"""
        SELECT showId, title, durationMinutes
        FROM {view}
        WHERE type = 'Movie'
          AND durationMinutes = (
              SELECT MAX(durationMinutes) FROM {view} WHERE type = 'Movie'
          )
        ORDER BY title ASC, showId ASC
    """, {}


def recently_added(view: str, params: QueryParams) -> Query:
    months = positive_int(params.recent_years, "recent_years") * 12
    return f"""
        SELECT showId, type, title, dateAdded
        FROM {view}
        WHERE dateAdded >= ADD_MONTHS(:asOf, -{months})
          AND dateAdded <= :asOf
        ORDER BY dateAdded DESC, title ASC
    """, {"asOf": params.reference_date()}


def titles_by_director(view: str, params: QueryParams) -> Query:
    return f"""
        SELECT showId, type, title, director
        FROM {view}
        WHERE ARRAY_CONTAINS({_trimmed_list("director", "d")}, :director)
        ORDER BY title ASC, showId ASC
    """, {"director": params.director}


def long_running_shows(view: str, params: QueryParams) -> Query:
    seasons = positive_int(params.min_seasons, "min_seasons")
    return f"""
        SELECT showId, title, seasonCount
        FROM {view}
        WHERE type = 'TV Show'
          AND seasonCount > {seasons}
        ORDER BY seasonCount DESC, title ASC
    """, {}


def documentary_movies(view: str, params: QueryParams) -> Query:
    return f"""
        SELECT showId, title, listedIn
        FROM {view}
        WHERE type = 'Movie'
          AND ARRAY_CONTAINS({_trimmed_list("listedIn", "g")}, :genre)
        ORDER BY title ASC, showId ASC
    """, {"genre": DOCUMENTARY_GENRE}


def titles_without_director(view: str, params: QueryParams) -> Query:
    return f"""
        SELECT showId, type, title
        FROM {view}
        WHERE director IS NULL
        ORDER BY title ASC, showId ASC
    """, {}


def actor_movie_count(view: str, params: QueryParams) -> Query:
    # No GROUP BY: always one row, zero when the actor never appears
    years = positive_int(params.actor_years, "actor_years")
    return f"""
        SELECT :actor AS actor, COUNT(*) AS totalMovies
        FROM {view}
        WHERE type = 'Movie'
          AND releaseYear > YEAR(:asOf) - {years}
          AND ARRAY_CONTAINS({_trimmed_list("castMembers", "a")}, :actor)
    """, {"actor": params.actor, "asOf": params.reference_date()}


REPORTS = (
    Report("contentTypeCounts", "Movies vs TV Shows", content_type_counts),
    Report("mostCommonRating", "Most common rating per content type", most_common_rating),
    Report("moviesReleasedInYear", "Movies released in a given year", movies_released_in_year),
    Report("topCountries", "Countries with the most content", top_countries),
    Report("longestMovies", "Longest movie", longest_movies),
    Report("recentlyAdded", "Content added in the last years", recently_added),
    Report("titlesByDirector", "Titles by director", titles_by_director),
    Report("longRunningShows", "TV shows with many seasons", long_running_shows),
    Report("genreCounts", "Content per genre", genre_counts),
    Report("countryYearlyShare", "Yearly share of a country's content", country_yearly_share),
    Report("documentaryMovies", "Documentary movies", documentary_movies),
    Report("titlesWithoutDirector", "Content without a director", titles_without_director),
    Report("actorMovieCount", "Movies featuring an actor in recent years", actor_movie_count),
    Report("topActorsInCountry", "Top actors in a country's movies", top_actors_in_country),
    Report("keywordCategories", "Content labelled by description keywords", keyword_categories),
)

REPORT_NAMES = tuple(r.name for r in REPORTS)


def get_report(name: str) -> Report:
    for report in REPORTS:
        if report.name == name:
            return report
    raise ValueError(f"Unknown report {name!r}; known reports: {', '.join(REPORT_NAMES)}")

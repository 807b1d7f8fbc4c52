import datetime
from dataclasses import replace

import pytest

from netflix_analytics.analytics import run_report
from netflix_analytics.config import QueryParams
from netflix_analytics.queries import REPORT_NAMES, REPORTS, get_report


def _rows(spark, name, params):
    return [tuple(r) for r in run_report(spark, get_report(name), params).collect()]


def test_registry_has_fifteen_unique_reports():
    assert len(REPORTS) == 15
    assert len(set(REPORT_NAMES)) == 15


def test_get_report_unknown_name():
    with pytest.raises(ValueError, match="Unknown report 'nope'"):
        get_report("nope")


def test_rejects_bad_view_name():
    with pytest.raises(ValueError, match="Invalid view name"):
        get_report("contentTypeCounts").sql(QueryParams(), "netflix; DROP TABLE x")


@pytest.mark.parametrize("name,field", [
    ("topCountries", "top_countries"),
    ("recentlyAdded", "recent_years"),
    ("longRunningShows", "min_seasons"),
    ("countryYearlyShare", "top_years"),
    ("actorMovieCount", "actor_years"),
    ("topActorsInCountry", "top_actors"),
])
def test_rejects_non_positive_ints(name, field):
    with pytest.raises(ValueError, match=field):
        get_report(name).sql(replace(QueryParams(), **{field: 0}))


def test_rejects_empty_keywords():
    with pytest.raises(ValueError, match="keywords"):
        get_report("keywordCategories").sql(QueryParams(keywords=("", "  ")))


def test_string_values_are_bound_not_inlined():
    sql_text, args = get_report("titlesByDirector").sql(QueryParams(director="O'Brien"))
    assert "O'Brien" not in sql_text
    assert args == {"director": "O'Brien"}


def test_as_of_defaults_to_today():
    _, args = get_report("recentlyAdded").sql(QueryParams())
    assert args["asOf"] == datetime.date.today()


def test_content_type_counts(spark, titles, params):
    assert _rows(spark, "contentTypeCounts", params) == [("Movie", 7), ("TV Show", 3)]


def test_most_common_rating(spark, titles, params):
    assert _rows(spark, "mostCommonRating", params) == [("Movie", "TV-14", 3), ("TV Show", "TV-MA", 2)]


def test_most_common_rating_keeps_ties(spark, params):
    df = spark.createDataFrame(
        [("a", "Movie", "R"), ("b", "Movie", "PG"), ("c", "TV Show", "TV-Y")],
        ["showId", "type", "rating"],
    )
    df.createOrReplaceTempView("ratings_only")
    sql_text, args = get_report("mostCommonRating").sql(params, "ratings_only")
    rows = [tuple(r) for r in spark.sql(sql_text).collect()]
    assert rows == [("Movie", "PG", 1), ("Movie", "R", 1), ("TV Show", "TV-Y", 1)]


def test_movies_released_in_year(spark, titles, params):
    rows = _rows(spark, "moviesReleasedInYear", replace(params, release_year=2019))
    assert [(r[0], r[1], r[4]) for r in rows] == [("s6", "Bharat", 2019), ("s11", "The Irishman", 2019)]


def test_movies_released_in_year_empty(spark, titles, params):
    assert _rows(spark, "moviesReleasedInYear", replace(params, release_year=1999)) == []


def test_top_countries(spark, titles, params):
    assert _rows(spark, "topCountries", params) == [
        ("India", 5), ("United States", 4), ("Canada", 1), ("South Africa", 1),
    ]
    assert _rows(spark, "topCountries", replace(params, top_countries=2)) == [("India", 5), ("United States", 4)]


def test_longest_movies(spark, titles, params):
    assert _rows(spark, "longestMovies", params) == [("s11", "The Irishman", 209)]


def test_recently_added(spark, titles, params):
    rows = _rows(spark, "recentlyAdded", replace(params, recent_years=1))
    assert [r[2] for r in rows] == [
        "Dick Johnson Is Dead", "Blood & Water", "Kota Factory", "Chhota Bheem - Neeli Pahaadi",
    ]
    assert rows[0][3] == datetime.date(2021, 9, 25)


def test_titles_by_director_matches_any_listed_name(spark, titles, params):
    rows = _rows(spark, "titlesByDirector", params)
    assert [r[0] for r in rows] == ["s4"]
    assert _rows(spark, "titlesByDirector", replace(params, director="Rajiv")) == []


def test_long_running_shows(spark, titles, params):
    assert _rows(spark, "longRunningShows", params) == [("s3", "Supernatural", 15)]
    assert [r[0] for r in _rows(spark, "longRunningShows", replace(params, min_seasons=1))] == ["s3", "s2", "s12"]


def test_genre_counts(spark, titles, params):
    rows = _rows(spark, "genreCounts", params)
    assert rows[:3] == [("Dramas", 3), ("International Movies", 3), ("International TV Shows", 2)]
    assert len(rows) == 13
    assert sum(r[1] for r in rows) == 18


def test_country_yearly_share(spark, titles, params):
    assert _rows(spark, "countryYearlyShare", params) == [
        (2019, 2, 40.0), (2021, 2, 40.0), (2018, 1, 20.0),
    ]
    assert _rows(spark, "countryYearlyShare", replace(params, top_years=1)) == [(2019, 2, 40.0)]


def test_documentary_movies(spark, titles, params):
    assert _rows(spark, "documentaryMovies", params) == [("s1", "Dick Johnson Is Dead", "Documentaries")]


def test_titles_without_director(spark, titles, params):
    rows = _rows(spark, "titlesWithoutDirector", params)
    assert [r[2] for r in rows] == ["Blood & Water", "Kota Factory", "Supernatural"]


def test_actor_movie_count(spark, titles, params):
    assert _rows(spark, "actorMovieCount", params) == [("Salman Khan", 2)]
    assert _rows(spark, "actorMovieCount", replace(params, actor_years=20)) == [("Salman Khan", 3)]


def test_actor_movie_count_zero_for_unknown_actor(spark, titles, params):
    assert _rows(spark, "actorMovieCount", replace(params, actor="Nobody Known")) == [("Nobody Known", 0)]


def test_top_actors_in_country(spark, titles, params):
    rows = _rows(spark, "topActorsInCountry", replace(params, top_actors=3))
    assert rows == [("Salman Khan", 3), ("Anushka Sharma", 1), ("Julie Tejwani", 1)]


def test_top_actors_excludes_tv_shows(spark, titles, params):
    actors = [r[0] for r in _rows(spark, "topActorsInCountry", params)]
    assert "Mayur More" not in actors
    assert len(actors) == 6


def test_keyword_categories(spark, titles, params):
    assert _rows(spark, "keywordCategories", params) == [("Bad", 3), ("Good", 7)]


def test_keyword_categories_custom_keywords(spark, titles, params):
    rows = _rows(spark, "keywordCategories", replace(params, keywords=("SPOOKY",)))
    assert rows == [("Bad", 1), ("Good", 9)]

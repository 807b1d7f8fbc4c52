import datetime

import pytest
from pyspark.sql import SparkSession
from pyspark.sql.types import StringType, StructField, StructType

from netflix_analytics.analytics import register_titles_view
from netflix_analytics.config import QueryParams
from netflix_analytics.silver_transform import clean_netflix
from netflix_analytics.utils import NETFLIX_RENAME_MAP, standardize_columns

RAW_COLUMNS = [
    "show_id", "type", "title", "director", "cast", "country", "date_added",
    "release_year", "rating", "duration", "listed_in", "description",
]

RAW_ROWS = [
    ("s1", "Movie", "Dick Johnson Is Dead", "Kirsten Johnson", None, "United States",
     "September 25, 2021", "2020", "PG-13", "90 min", "Documentaries",
     "As her father nears the end of his life, filmmaker Kirsten Johnson stages his death in inventive ways."),
    ("s2", "TV Show", "Blood & Water", None, "Ama Qamata, Khosi Ngema", "South Africa",
     "September 24, 2021", "2021", "TV-MA", "2 Seasons", "International TV Shows, TV Dramas",
     "After crossing paths at a party, a Cape Town teen sets out to prove a swimming star is her sister."),
    ("s3", "TV Show", "Supernatural", "", "Jared Padalecki, Jensen Ackles", "United States, Canada",
     "June 5, 2020", "2019", "TV-14", "15 Seasons", "Classic & Cult TV, TV Action & Adventure",
     "Siblings Dean and Sam crisscross the country, investigating paranormal events and fighting demons who kill."),
    ("s4", "Movie", "Chhota Bheem - Neeli Pahaadi", "Arun Shendurnikar, Rajiv Chilaka", "Vatsal Dubey, Julie Tejwani",
     "India", "July 22, 2021", "2013", "TV-Y7", "64 min", "Children & Family Movies",
     "Things get spooky when Bheem and his buddies turn detectives."),
    ("s5", "Movie", "Dabangg", "Abhinav Kashyap", "Salman Khan, Sonakshi Sinha", "India",
     "May 1, 2019", "2010", "TV-14", "126 min", "Action & Adventure, International Movies",
     "A corrupt cop sets out to kill the men behind his family's troubles."),
    ("s6", "Movie", "Bharat", "Ali Abbas Zafar", "Salman Khan, Katrina Kaif", "India",
     "December 5, 2019", "2019", "TV-14", "155 min", "Dramas, International Movies",
     "A man makes a promise to his father during the partition of India."),
    ("s7", "Movie", "Sultan", "Ali Abbas Zafar", "Salman Khan, Anushka Sharma", "India",
     "March 1, 2018", "2016", "TV-14", "170 min", "Dramas, International Movies, Sports Movies",
     "An aging wrestler fights his way back amid VIOLENCE and loss."),
    # duration sits in the rating column in the source
    ("s8", "Movie", "Louis C.K. 2017", "Louis C.K.", "Louis C.K.", "United States",
     "April 4, 2017", "2017", "74 min", None, "Movies",
     "Louis C.K. muses on religion and parenting."),
    # older duplicate of s2
    ("s2", "TV Show", "Blood & Water", None, "Ama Qamata", "South Africa",
     "January 1, 2020", "2021", "TV-14", "1 Season", "International TV Shows",
     "An older listing."),
    ("s10", "Movie", "   ", "Nobody", None, None,
     "May 5, 2020", "2020", "R", "80 min", "Dramas", "Blank title."),
    ("s11", "Movie", "The Irishman", "Martin Scorsese", "Robert De Niro, Al Pacino", "United States",
     "November 27, 2019", "2019", "R", "209 min", "Dramas",
     "Hit man Frank Sheeran looks back at the secrets he kept."),
    ("s12", "TV Show", "Kota Factory", None, "Mayur More, Jitendra Kumar", "India",
     " September 24, 2021", "2021", "TV-MA", "2 Seasons",
     "International TV Shows, Romantic TV Shows, TV Comedies",
     "In a city of coaching centers, an earnest student and his friends navigate campus life."),
]

AS_OF = datetime.date(2021, 10, 1)


@pytest.fixture(scope="session")
def spark(tmp_path_factory):
    warehouse = tmp_path_factory.mktemp("warehouse")
    session = (
        SparkSession.builder
        .master("local[1]")
        .appName("netflix-analytics-tests")
        .config("spark.sql.shuffle.partitions", "1")
        .config("spark.sql.session.timeZone", "UTC")
        .config("spark.sql.warehouse.dir", str(warehouse))
        .config("spark.ui.enabled", "false")
        .getOrCreate()
    )
    yield session
    session.stop()


@pytest.fixture
def raw_titles(spark):
    schema = StructType([StructField(c, StringType(), True) for c in RAW_COLUMNS])
    return spark.createDataFrame(RAW_ROWS, schema)


@pytest.fixture
def titles(raw_titles):
    df = clean_netflix(standardize_columns(raw_titles, NETFLIX_RENAME_MAP))
    register_titles_view(df)
    return df


@pytest.fixture
def params():
    return QueryParams(as_of=AS_OF)

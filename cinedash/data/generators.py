"""
Synthetic Data Generator

Generates a demo movie warehouse for development:
- Customers
- Movies across genres and languages
- Theaters in the mapped Indian cities
- A calendar date dimension
- Ticket sale facts
"""

import random
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, List, Optional

import polars as pl
from faker import Faker

from cinedash.analytics.locations import CITY_REGION_MAP

fake = Faker("en_IN")

# Seed for reproducibility
random.seed(42)
Faker.seed(42)


# =============================================================================
# CONFIGURATION
# =============================================================================

GENRES = ["Action", "Drama", "Comedy", "Romance", "Thriller"]
LANGUAGES = [("Hindi", 0.45), ("English", 0.25), ("Tamil", 0.15), ("Telugu", 0.15)]
CHAINS = ["PVR", "INOX", "Cinepolis", "Carnival", "Miraj"]
SHOWTIMES = ["10:00", "13:30", "16:45", "19:00", "22:15"]
TICKET_PRICE_RANGE = (150, 450)


# =============================================================================
# GENERATORS
# =============================================================================

class CustomerGenerator:
    """Generate customers"""

    def generate(self, n: int = 200) -> pl.DataFrame:
        customers = []
        for c_id in range(1, n + 1):
            customers.append({
                "c_id": c_id,
                "c_name": fake.name(),
                "gender": random.choice(["M", "F"]),
                "age": random.randint(16, 70),
                "city": random.choice(list(CITY_REGION_MAP)),
                "email": fake.email(),
            })
        return pl.DataFrame(customers)


class MovieGenerator:
    """Generate a movie catalog"""

    def generate(self, n: int = 30, start_year: int = 2023) -> pl.DataFrame:
        languages, weights = zip(*LANGUAGES)
        movies = []
        for m_id in range(1, n + 1):
            movies.append({
                "m_id": m_id,
                "title": fake.unique.catch_phrase().title(),
                "genre": random.choice(GENRES),
                "release_date": fake.date_between(date(start_year, 1, 1), date.today()),
                "duration": random.randint(95, 185),
                "rating": round(random.uniform(4.0, 9.5), 1),
                "language": random.choices(languages, weights=weights)[0],
            })
        return pl.DataFrame(movies)


class TheaterGenerator:
    """Generate theaters spread over the mapped cities"""

    def generate(self, n: int = 25) -> pl.DataFrame:
        cities = list(CITY_REGION_MAP)
        theaters = []
        for t_id in range(1, n + 1):
            city = random.choice(cities)
            theaters.append({
                "t_id": t_id,
                "t_name": f"{random.choice(CHAINS)} {fake.street_name()} {city}",
                "location": city,
                "totalseats": random.choice([120, 180, 240, 300, 420]),
                "showtime": random.choice(SHOWTIMES),
                "showdate": fake.date_between(date.today() - timedelta(days=30), date.today()),
            })
        return pl.DataFrame(theaters)


class DateGenerator:
    """Generate the calendar dimension"""

    def generate(self, start_year: int, end_year: int) -> pl.DataFrame:
        start_date = date(start_year, 1, 1)
        end_date = date(end_year, 12, 31)

        dates = []
        for i in range((end_date - start_date).days + 1):
            d = start_date + timedelta(days=i)
            dates.append({
                "d_id": int(d.strftime("%Y%m%d")),
                "date": d,
                "day": d.strftime("%A"),
                "month": d.strftime("%B"),
                "quater": (d.month - 1) // 3 + 1,
                "year": d.year,
                "isweekend": d.weekday() >= 5,
            })
        return pl.DataFrame(dates)


class FactGenerator:
    """Generate ticket sale facts over existing dimensions"""

    def generate(
        self,
        n: int,
        customers: pl.DataFrame,
        movies: pl.DataFrame,
        theaters: pl.DataFrame,
        dates: pl.DataFrame,
    ) -> pl.DataFrame:
        customer_ids = customers["c_id"].to_list()
        movie_ids = movies["m_id"].to_list()
        theater_ids = theaters["t_id"].to_list()
        weekend = dict(zip(dates["d_id"].to_list(), dates["isweekend"].to_list()))
        date_ids = list(weekend)

        facts = []
        for fact_id in range(1, n + 1):
            d_id = random.choice(date_ids)
            # Weekends sell more seats
            tickets = random.randint(1, 6) + (2 if weekend[d_id] else 0)
            amount = tickets * random.randint(*TICKET_PRICE_RANGE)
            discount = round(amount * random.choice([0, 0, 0.05, 0.1]), 2)
            facts.append({
                "id": fact_id,
                "c_id": random.choice(customer_ids),
                "m_id": random.choice(movie_ids),
                "t_id": random.choice(theater_ids),
                "d_id": d_id,
                "ticketsold": tickets,
                "totalamount": float(amount) - discount,
                "discount": discount,
            })
        return pl.DataFrame(facts)


class DataGenerator:
    """
    Generate the complete demo warehouse.

    Example:
        generator = DataGenerator()
        tables = generator.generate_all()
    """

    def __init__(self, output_dir: Optional[str] = None):
        self.output_dir = Path(output_dir) if output_dir else None

    def generate_all(
        self,
        n_customers: int = 200,
        n_movies: int = 30,
        n_theaters: int = 25,
        n_facts: int = 5000,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
    ) -> Dict[str, pl.DataFrame]:
        """Generate all five tables, keyed like the API endpoints."""
        end_year = end_year or date.today().year
        start_year = start_year or end_year - 2

        customers = CustomerGenerator().generate(n_customers)
        movies = MovieGenerator().generate(n_movies, start_year=start_year)
        theaters = TheaterGenerator().generate(n_theaters)
        dates = DateGenerator().generate(start_year, end_year)
        facts = FactGenerator().generate(n_facts, customers, movies, theaters, dates)

        data = {
            "customers": customers,
            "movies": movies,
            "theaters": theaters,
            "dates": dates,
            "facts": facts,
        }
        if self.output_dir:
            self._save_data(data)
        return data

    def _save_data(self, data: Dict[str, pl.DataFrame]) -> List[Path]:
        """Save generated tables as Parquet"""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for name, df in data.items():
            path = self.output_dir / f"{name}.parquet"
            df.write_parquet(path)
            paths.append(path)
        return paths

"""ETL package for the Cassandra session and bulk loading."""

from .database import ReviewDB
from .data_loader import populate_database, load_items, load_reviews

__all__ = [
    'ReviewDB',
    'populate_database',
    'load_items',
    'load_reviews',
]

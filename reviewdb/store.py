"""
Review store facade: bootstrap, bulk load and the three read queries.
"""
from pathlib import Path
from typing import Dict, List, Optional

from .config import WORKER_POOL_SIZE, LOAD_TIMEOUT_SECONDS
from .etl.database import ReviewDB
from .etl.data_loader import load_items, load_reviews
from .utils.helpers import format_item, format_review

ITEM_NOT_FOUND = "not exists"


class ReviewStore:
    """Item catalog and review feeds backed by Cassandra."""

    def __init__(self, db: Optional[ReviewDB] = None):
        self.db = db or ReviewDB()

    def connect(self, bundle_path: str, username: str, password: str, keyspace: str):
        self.db.connect(bundle_path, username, password, keyspace)

    def close(self):
        self.db.close()

    def create_tables(self):
        self.db.create_tables()

    def initialize(self):
        self.db.initialize()

    def load_items(self, items_path: Path, n_workers: int = WORKER_POOL_SIZE,
                   timeout: Optional[float] = LOAD_TIMEOUT_SECONDS) -> Dict[str, int]:
        return load_items(self.db, items_path, n_workers=n_workers, timeout=timeout)

    def load_reviews(self, reviews_path: Path, n_workers: int = WORKER_POOL_SIZE,
                     timeout: Optional[float] = LOAD_TIMEOUT_SECONDS) -> Dict[str, int]:
        return load_reviews(self.db, reviews_path, n_workers=n_workers, timeout=timeout)

    def item(self, asin: str) -> str:
        """
        Look up one item.

        Args:
            asin: Product ASIN

        Returns:
            Formatted item block, or "not exists"
        """
        row = self.db.get_item(asin)
        if row is None:
            return ITEM_NOT_FOUND
        return format_item(row)

    def user_reviews(self, reviewer_id: str) -> List[str]:
        """
        All reviews by one user, newest first.

        Args:
            reviewer_id: Reviewer identifier

        Returns:
            Formatted review lines
        """
        return self._format_reviews(self.db.get_reviews_by_user(reviewer_id))

    def item_reviews(self, asin: str) -> List[str]:
        """
        All reviews of one product, newest first.

        Args:
            asin: Product ASIN

        Returns:
            Formatted review lines
        """
        return self._format_reviews(self.db.get_reviews_by_item(asin))

    @staticmethod
    def _format_reviews(rows) -> List[str]:
        # Rows arrive in clustering order; keep it
        reviews = [format_review(row) for row in rows]
        print(f"total reviews: {len(reviews)}")
        return reviews

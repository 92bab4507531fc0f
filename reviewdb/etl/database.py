"""
Cassandra session, schema bootstrap and statement cache for the review store.
"""
from pathlib import Path
from typing import List, Optional, Dict, Any

from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import Cluster
from cassandra.query import dict_factory

from .schema import CREATE_STATEMENTS, PREPARED_STATEMENTS, REVIEW_VALUE_COLUMNS


class ReviewDB:
    """Handles the Cassandra connection and all statement executions.

    The session and the prepared statements are shared by every loader
    worker; the driver makes both safe for concurrent use.
    """

    def __init__(self):
        self.cluster = None
        self.session = None
        self.keyspace = None
        self._statements = {}

    @property
    def is_connected(self) -> bool:
        return self.session is not None

    @property
    def is_initialized(self) -> bool:
        return len(self._statements) == len(PREPARED_STATEMENTS)

    def connect(self, bundle_path: str, username: str, password: str, keyspace: str):
        """
        Open a keyspace-scoped session through an Astra secure-connect bundle.

        Calling this while already connected leaves the open session in place.

        Args:
            bundle_path: Path to the secure-connect bundle zip
            username: Client id (or database user)
            password: Client secret (or database password)
            keyspace: Keyspace holding the review tables
        """
        if self.session is not None:
            print("ERROR - cassandra is already connected")
            return

        if not Path(bundle_path).is_file():
            raise FileNotFoundError(f"Secure connect bundle not found: {bundle_path}")

        print("Initializing connection to Cassandra...")

        cluster = Cluster(
            cloud={"secure_connect_bundle": str(bundle_path)},
            auth_provider=PlainTextAuthProvider(username, password),
        )
        try:
            session = cluster.connect(keyspace)
        except Exception:
            cluster.shutdown()
            raise

        session.row_factory = dict_factory

        self.cluster = cluster
        self.session = session
        self.keyspace = keyspace

        print("Initializing connection to Cassandra... Done")

    def close(self):
        """Shut down the cluster connection (no-op when already closed)."""
        if self.session is None:
            print("Cassandra connection is already closed")
            return

        print("Closing Cassandra connection...")
        self.cluster.shutdown()
        self.cluster = None
        self.session = None
        self._statements = {}
        print("Closing Cassandra connection... Done")

    def _require_session(self):
        if self.session is None:
            raise RuntimeError("Not connected to Cassandra, call connect() first")
        return self.session

    def _statement(self, name: str):
        if name not in self._statements:
            raise RuntimeError("Prepared statements missing, call initialize() first")
        return self._statements[name]

    def create_tables(self):
        """Create the item and review tables if they do not exist yet."""
        session = self._require_session()

        print("Creating tables...")
        for table_name, cql in CREATE_STATEMENTS:
            session.execute(cql)
            print(f"Created table: {table_name}")
        print("Creating tables... Done")

    def initialize(self):
        """Prepare every statement once; the tables must already exist."""
        session = self._require_session()

        print("Initializing prepared statements...")
        self._statements = {
            name: session.prepare(cql) for name, cql in PREPARED_STATEMENTS.items()
        }
        print("Initializing prepared statements... Done")

    def insert_item(self, item: Dict[str, Any]):
        """
        Insert one catalog item.

        Args:
            item: Item record with asin, title, image_url, categories, description
        """
        self._require_session().execute(
            self._statement("insert_item"),
            (item['asin'], item['title'], item['image_url'], item['categories'], item['description'])
        )

    def insert_review(self, review: Dict[str, Any]):
        """
        Write one review to both projections, by-user first.

        The two writes are independent; if the second fails the first is
        not rolled back.

        Args:
            review: Review record with reviewer_id, asin, review_time and the value columns
        """
        session = self._require_session()
        values = tuple(review[column] for column in REVIEW_VALUE_COLUMNS)

        session.execute(
            self._statement("insert_review_by_user"),
            (review['reviewer_id'], review['review_time'], review['asin']) + values
        )
        session.execute(
            self._statement("insert_review_by_item"),
            (review['asin'], review['review_time'], review['reviewer_id']) + values
        )

    def get_item(self, asin: str) -> Optional[Dict[str, Any]]:
        """
        Get a single item by ASIN.

        Args:
            asin: Product ASIN

        Returns:
            Item row as a dictionary or None
        """
        result = self._require_session().execute(self._statement("select_item"), (asin,))
        return result.one()

    def get_reviews_by_user(self, reviewer_id: str) -> List[Dict[str, Any]]:
        """Reviews written by one user, newest first."""
        result = self._require_session().execute(
            self._statement("select_reviews_by_user"), (reviewer_id,)
        )
        return list(result)

    def get_reviews_by_item(self, asin: str) -> List[Dict[str, Any]]:
        """Reviews written for one product, newest first."""
        result = self._require_session().execute(
            self._statement("select_reviews_by_item"), (asin,)
        )
        return list(result)

    def get_status(self) -> Dict[str, Any]:
        """
        Get connection status.

        Returns:
            Dictionary with keyspace, connection and statement-cache state
        """
        return {
            "keyspace": self.keyspace,
            "connected": self.is_connected,
            "initialized": self.is_initialized,
            "prepared_statements": sorted(self._statements),
        }

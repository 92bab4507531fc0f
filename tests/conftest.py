"""Shared fixtures: an in-memory stand-in for the Cassandra cluster."""

import re
import threading
from datetime import timezone

import pytest
from cassandra import InvalidRequest

from reviewdb.etl import database
from reviewdb.etl.database import ReviewDB
from reviewdb.store import ReviewStore

# table -> (partition key, [(clustering column, descending)])
TABLE_KEYS = {
    'items': ('asin', []),
    'reviews_by_user': ('reviewer_id', [('review_time', True), ('asin', False)]),
    'reviews_by_item': ('asin', [('review_time', True), ('reviewer_id', False)]),
}

CREATE_RE = re.compile(r"CREATE TABLE IF NOT EXISTS (\w+)")
INSERT_RE = re.compile(r"INSERT INTO (\w+)\s*\(([^)]*)\)")
SELECT_RE = re.compile(r"SELECT \* FROM (\w+) WHERE (\w+) = \?")


class FakePrepared:
    def __init__(self, query_string):
        self.query_string = query_string


class FakeResultSet(list):
    def one(self):
        return self[0] if self else None


class FakeSession:
    """Executes the handful of CQL shapes the store uses."""

    def __init__(self, keyspace, tables=None):
        self.keyspace = keyspace
        self.row_factory = None
        self.tables = tables if tables is not None else {}
        self.prepared = []
        self.executed = []
        self.fail_on = None
        self._lock = threading.Lock()

    def prepare(self, query):
        match = INSERT_RE.search(query) or SELECT_RE.search(query)
        if match and match.group(1) not in self.tables:
            raise InvalidRequest(f"unconfigured table {match.group(1)}")
        statement = FakePrepared(query)
        self.prepared.append(statement)
        return statement

    def execute(self, statement, parameters=None):
        query = statement.query_string if isinstance(statement, FakePrepared) else statement
        with self._lock:
            self.executed.append(query)

            create = CREATE_RE.search(query)
            if create:
                self.tables.setdefault(create.group(1), {})
                return FakeResultSet()

            insert = INSERT_RE.search(query)
            if insert:
                return self._insert(insert.group(1), insert.group(2), parameters)

            select = SELECT_RE.search(query)
            if select:
                return self._select(select.group(1), select.group(2), parameters[0])

        raise InvalidRequest(f"unsupported statement: {query}")

    def _insert(self, table, columns, parameters):
        if self.fail_on and self.fail_on(table, parameters):
            raise InvalidRequest(f"write to {table} rejected")

        row = dict(zip([c.strip() for c in columns.split(',')], parameters))
        # The driver hands timestamps back as naive UTC datetimes
        if row.get('review_time') is not None:
            row['review_time'] = row['review_time'].astimezone(timezone.utc).replace(tzinfo=None)
        if 'categories' in row and not row['categories']:
            row['categories'] = None

        partition, clustering = TABLE_KEYS[table]
        key = (row[partition],) + tuple(row[column] for column, _ in clustering)
        self.tables[table][key] = row
        return FakeResultSet()

    def _select(self, table, column, value):
        _, clustering = TABLE_KEYS[table]
        rows = [dict(row) for row in self.tables[table].values() if row[column] == value]
        for name, descending in reversed(clustering):
            rows.sort(key=lambda row: row[name], reverse=descending)
        return FakeResultSet(rows)


class FakeCluster:
    """Records construction arguments and hands out FakeSessions."""

    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.session = None
        self.is_shutdown = False
        self.shutdown_calls = 0
        FakeCluster.instances.append(self)

    def connect(self, keyspace=None):
        self.session = FakeSession(keyspace)
        return self.session

    def shutdown(self):
        self.shutdown_calls += 1
        self.is_shutdown = True


@pytest.fixture
def fake_cluster(monkeypatch):
    FakeCluster.instances = []
    monkeypatch.setattr(database, "Cluster", FakeCluster)
    return FakeCluster


@pytest.fixture
def bundle(tmp_path):
    path = tmp_path / "secure-connect-test.zip"
    path.write_bytes(b"PK\x05\x06" + b"\x00" * 18)
    return path


@pytest.fixture
def db(fake_cluster, bundle):
    review_db = ReviewDB()
    review_db.connect(str(bundle), "client", "secret", "reviews")
    review_db.create_tables()
    review_db.initialize()
    yield review_db
    if review_db.is_connected:
        review_db.close()


@pytest.fixture
def store(db):
    return ReviewStore(db)


@pytest.fixture
def write_jsonl(tmp_path):
    """Write lines (dicts or raw strings) to a JSONL file and return its path."""
    import json

    def _write(name, records):
        path = tmp_path / name
        with open(path, 'w', encoding='utf-8') as f:
            for record in records:
                f.write(record if isinstance(record, str) else json.dumps(record))
                f.write("\n")
        return path

    return _write

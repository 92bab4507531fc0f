"""
CQL schema and statements for the review store.

Every query the store answers is a single-partition read:

    items            PRIMARY KEY (asin)
    reviews_by_user  PRIMARY KEY (reviewer_id, review_time, asin)
    reviews_by_item  PRIMARY KEY (asin, review_time, reviewer_id)

Each review is written to both review tables, so a user's feed and a
product's feed are each one partition already sorted newest-first.
"""

# Stored in place of any missing text field
NOT_AVAILABLE_VALUE = "na"
MISSING_RATING = -1.0

TABLE_ITEMS = "items"
TABLE_REVIEWS_BY_USER = "reviews_by_user"
TABLE_REVIEWS_BY_ITEM = "reviews_by_item"

CQL_CREATE_ITEMS = f"""
    CREATE TABLE IF NOT EXISTS {TABLE_ITEMS} (
        asin TEXT PRIMARY KEY,
        title TEXT,
        image_url TEXT,
        categories SET<TEXT>,
        description TEXT
    )
"""

CQL_CREATE_REVIEWS_BY_USER = f"""
    CREATE TABLE IF NOT EXISTS {TABLE_REVIEWS_BY_USER} (
        reviewer_id TEXT,
        review_time TIMESTAMP,
        asin TEXT,
        reviewer_name TEXT,
        rating DOUBLE,
        summary TEXT,
        review_text TEXT,
        PRIMARY KEY ((reviewer_id), review_time, asin)
    ) WITH CLUSTERING ORDER BY (review_time DESC, asin ASC)
"""

CQL_CREATE_REVIEWS_BY_ITEM = f"""
    CREATE TABLE IF NOT EXISTS {TABLE_REVIEWS_BY_ITEM} (
        asin TEXT,
        review_time TIMESTAMP,
        reviewer_id TEXT,
        reviewer_name TEXT,
        rating DOUBLE,
        summary TEXT,
        review_text TEXT,
        PRIMARY KEY ((asin), review_time, reviewer_id)
    ) WITH CLUSTERING ORDER BY (review_time DESC, reviewer_id ASC)
"""

# (table name, create statement), in creation order
CREATE_STATEMENTS = [
    (TABLE_ITEMS, CQL_CREATE_ITEMS),
    (TABLE_REVIEWS_BY_USER, CQL_CREATE_REVIEWS_BY_USER),
    (TABLE_REVIEWS_BY_ITEM, CQL_CREATE_REVIEWS_BY_ITEM),
]

# Column order of the review inserts after the two key columns
REVIEW_VALUE_COLUMNS = ("reviewer_name", "rating", "summary", "review_text")

PREPARED_STATEMENTS = {
    "insert_item": f"""
        INSERT INTO {TABLE_ITEMS} (asin, title, image_url, categories, description)
        VALUES (?, ?, ?, ?, ?)
    """,
    "insert_review_by_user": f"""
        INSERT INTO {TABLE_REVIEWS_BY_USER}
        (reviewer_id, review_time, asin, reviewer_name, rating, summary, review_text)
        VALUES (?, ?, ?, ?, ?, ?, ?)
    """,
    "insert_review_by_item": f"""
        INSERT INTO {TABLE_REVIEWS_BY_ITEM}
        (asin, review_time, reviewer_id, reviewer_name, rating, summary, review_text)
        VALUES (?, ?, ?, ?, ?, ?, ?)
    """,
    "select_item": f"SELECT * FROM {TABLE_ITEMS} WHERE asin = ?",
    "select_reviews_by_user": f"SELECT * FROM {TABLE_REVIEWS_BY_USER} WHERE reviewer_id = ?",
    "select_reviews_by_item": f"SELECT * FROM {TABLE_REVIEWS_BY_ITEM} WHERE asin = ?",
}

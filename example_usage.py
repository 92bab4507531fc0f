"""
Example script demonstrating programmatic usage of the review store.
Assumes load_data.py has already populated the keyspace.
"""
import sys

from reviewdb.config import ASTRA_BUNDLE_PATH, ASTRA_CLIENT_ID, ASTRA_CLIENT_SECRET, ASTRA_KEYSPACE
from reviewdb.store import ReviewStore


def main(asin: str = "B005QB09TU", reviewer_id: str = "A1OPRFLNWJ3FTN"):
    store = ReviewStore()
    store.connect(ASTRA_BUNDLE_PATH, ASTRA_CLIENT_ID, ASTRA_CLIENT_SECRET, ASTRA_KEYSPACE)

    try:
        store.initialize()

        print("\n" + "=" * 60)
        print(f"Item {asin}")
        print("=" * 60)
        print(store.item(asin))

        print("\n" + "=" * 60)
        print(f"Reviews by user {reviewer_id}")
        print("=" * 60)
        for line in store.user_reviews(reviewer_id):
            print(line, end="")

        print("\n" + "=" * 60)
        print(f"Reviews of item {asin}")
        print("=" * 60)
        for line in store.item_reviews(asin):
            print(line, end="")
    finally:
        store.close()


if __name__ == "__main__":
    main(*sys.argv[1:3])

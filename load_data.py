"""
Script to create the schema and load the JSONL files into Cassandra.
"""
import argparse
from pathlib import Path
from reviewdb.etl.data_loader import load_items, load_reviews
from reviewdb.etl.database import ReviewDB
from reviewdb.config import (
    ITEMS_JSONL, REVIEWS_JSONL, WORKER_POOL_SIZE,
    ASTRA_BUNDLE_PATH, ASTRA_CLIENT_ID, ASTRA_CLIENT_SECRET, ASTRA_KEYSPACE
)


def main():
    # Parse command-line arguments
    parser = argparse.ArgumentParser(
        description="Load item and review JSONL files into Cassandra"
    )
    parser.add_argument(
        "--bundle",
        type=str,
        default=ASTRA_BUNDLE_PATH,
        help="Path to the secure connect bundle (default: $ASTRA_BUNDLE_PATH)"
    )
    parser.add_argument(
        "--username",
        type=str,
        default=ASTRA_CLIENT_ID,
        help="Client id (default: $ASTRA_CLIENT_ID)"
    )
    parser.add_argument(
        "--password",
        type=str,
        default=ASTRA_CLIENT_SECRET,
        help="Client secret (default: $ASTRA_CLIENT_SECRET)"
    )
    parser.add_argument(
        "--keyspace",
        type=str,
        default=ASTRA_KEYSPACE,
        help=f"Keyspace (default: {ASTRA_KEYSPACE})"
    )
    parser.add_argument(
        "--items",
        type=str,
        default=None,
        help=f"Path to items JSONL file (default: {ITEMS_JSONL})"
    )
    parser.add_argument(
        "--reviews",
        type=str,
        default=None,
        help=f"Path to reviews JSONL file (default: {REVIEWS_JSONL})"
    )
    parser.add_argument(
        "--skip-items",
        action="store_true",
        help="Do not load the items file"
    )
    parser.add_argument(
        "--skip-reviews",
        action="store_true",
        help="Do not load the reviews file"
    )
    parser.add_argument(
        "--skip-create",
        action="store_true",
        help="Do not create the tables (they must already exist)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=WORKER_POOL_SIZE,
        help=f"Number of concurrent writers (default: {WORKER_POOL_SIZE})"
    )

    args = parser.parse_args()

    items_path = Path(args.items) if args.items else ITEMS_JSONL
    reviews_path = Path(args.reviews) if args.reviews else REVIEWS_JSONL

    print("=" * 60)
    print("Review Store - Data Loading Script")
    print("=" * 60)
    print()

    # Check if data files exist
    if not args.skip_items and not items_path.exists():
        print(f"ERROR: Items file not found at: {items_path}")
        print("Or specify the path with --items option")
        return

    if not args.skip_reviews and not reviews_path.exists():
        print(f"ERROR: Reviews file not found at: {reviews_path}")
        print("Or specify the path with --reviews option")
        return

    db = ReviewDB()
    try:
        db.connect(args.bundle, args.username, args.password, args.keyspace)
        if not args.skip_create:
            db.create_tables()
        db.initialize()

        if not args.skip_items:
            load_items(db, items_path, n_workers=args.workers)
        if not args.skip_reviews:
            load_reviews(db, reviews_path, n_workers=args.workers)

        print("\n" + "=" * 60)
        print("Data loading completed successfully!")
        print("=" * 60)
    except Exception as e:
        print(f"\nERROR: Data loading failed: {e}")
        import traceback
        traceback.print_exc()
    finally:
        if db.is_connected:
            db.close()


if __name__ == "__main__":
    main()

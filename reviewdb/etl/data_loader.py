"""
Bulk loading of the item and review JSONL files into Cassandra.

Writes against a remote cluster are latency bound, so each file is fanned
out over a wide thread pool. The pool only reads ahead a bounded number of
lines, so memory stays flat on multi-gigabyte inputs.
"""
import json
import multiprocessing
import time
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Tuple
from datetime import datetime, timedelta, timezone
from joblib import Parallel, delayed

from ..config import (
    WORKER_POOL_SIZE, PRE_DISPATCH, LOAD_TIMEOUT_SECONDS,
    ITEM_PROGRESS_EVERY, REVIEW_PROGRESS_EVERY
)
from ..utils.helpers import log_event
from .database import ReviewDB
from .schema import NOT_AVAILABLE_VALUE, MISSING_RATING


def _as_text(value) -> str:
    # Non-string JSON values keep their JSON spelling (true, {"a":1})
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _required(record: Dict[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None:
        raise ValueError(f"missing required field '{key}'")
    return _as_text(value)


def _optional_text(record: Dict[str, Any], key: str) -> str:
    value = record.get(key)
    return NOT_AVAILABLE_VALUE if value is None else _as_text(value)


def collapse_categories(category_paths) -> set:
    """
    Flatten the nested category paths of an item into one set.

    Args:
        category_paths: JSON array of arrays of category names (or None)

    Returns:
        Set of category names, {"na"} when there are none
    """
    categories = set()
    for path in category_paths or []:
        if isinstance(path, str):
            categories.add(path)
        else:
            categories.update(_as_text(name) for name in path)

    if not categories:
        categories.add(NOT_AVAILABLE_VALUE)
    return categories


def parse_item(line: str) -> Dict[str, Any]:
    """
    Parse one line of the items file into an item record.

    Args:
        line: JSON object text

    Returns:
        Item record ready for ReviewDB.insert_item

    Raises:
        ValueError: If the line is not JSON or has no asin
    """
    data = json.loads(line)

    return {
        'asin': _required(data, 'asin'),
        'title': _optional_text(data, 'title'),
        'image_url': _optional_text(data, 'imUrl'),
        'categories': collapse_categories(data.get('categories')),
        'description': _optional_text(data, 'description'),
    }


def parse_review(line: str) -> Dict[str, Any]:
    """
    Parse one line of the reviews file into a review record.

    Args:
        line: JSON object text

    Returns:
        Review record ready for ReviewDB.insert_review

    Raises:
        ValueError: If the line is not JSON or lacks reviewerID / asin
    """
    data = json.loads(line)

    overall = data.get('overall')
    unix_review_time = data.get('unixReviewTime')

    return {
        'reviewer_id': _required(data, 'reviewerID'),
        'asin': _required(data, 'asin'),
        'review_time': datetime.fromtimestamp(
            int(unix_review_time) if unix_review_time is not None else 0, tz=timezone.utc
        ),
        'reviewer_name': _optional_text(data, 'reviewerName'),
        'rating': float(overall) if overall is not None else MISSING_RATING,
        'summary': _optional_text(data, 'summary'),
        'review_text': _optional_text(data, 'reviewText'),
    }


def iter_jsonl(file_path: Path) -> Iterator[Tuple[int, str]]:
    """
    Yield (index, line) for every non-blank line of a JSONL file.

    Args:
        file_path: Path to JSONL file
    """
    index = 0
    with open(file_path, 'r', encoding='utf-8') as f:
        for line in f:
            if not line.strip():
                continue
            yield index, line
            index += 1


def _load_one(kind: str, index: int, line: str, parse: Callable, write: Callable,
              progress_every: int) -> bool:
    """Parse and write one record; errors are reported and swallowed."""
    try:
        record = parse(line)
        write(record)
    except Exception as e:
        log_event(f"{kind}_load_error", f"Error loading {kind}: {e}", {'index': index})
        return False

    if index % progress_every == 0:
        print(f"Loaded {kind}: {index}")
    return True


def run_load(
    kind: str,
    file_path: Path,
    parse: Callable,
    write: Callable,
    progress_every: int,
    n_workers: int = WORKER_POOL_SIZE,
    timeout: Optional[float] = LOAD_TIMEOUT_SECONDS,
) -> Dict[str, int]:
    """
    Stream a JSONL file through a bounded thread pool.

    Lines are read lazily and handed to at most n_workers concurrent
    workers; only PRE_DISPATCH tasks are queued ahead of them.

    Args:
        kind: Record kind for messages ('item' or 'review')
        file_path: Path to JSONL file
        parse: Line -> record function
        write: Record -> None function executing the write(s)
        progress_every: Print progress on every n-th submitted record
        n_workers: Pool width
        timeout: Seconds to wait for the whole load before giving up

    Returns:
        Dictionary with submitted, loaded and failed counts
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    print("\n" + "="*70)
    print(f"📥 LOADING {kind.upper()}S from: {file_path}")
    print("="*70)

    report = {'submitted': 0, 'loaded': 0, 'failed': 0}
    start = time.time()

    def tasks():
        for index, line in iter_jsonl(file_path):
            report['submitted'] = index + 1
            yield delayed(_load_one)(kind, index, line, parse, write, progress_every)

    pool = Parallel(
        n_jobs=n_workers,
        backend="threading",
        batch_size=1,
        pre_dispatch=PRE_DISPATCH,
        timeout=timeout,
        return_as="generator_unordered",
    )

    finished = False
    try:
        for ok in pool(tasks()):
            if ok:
                report['loaded'] += 1
            else:
                report['failed'] += 1
            if timeout is not None and time.time() - start > timeout:
                raise TimeoutError(f"load exceeded {timeout} seconds")
        finished = True
    except (TimeoutError, multiprocessing.TimeoutError) as e:
        print(f"\n❌ ERROR: {kind} load did not complete: {e}")
        print("   Abandoning in-flight work")

    elapsed = time.time() - start
    throughput = report['loaded'] / elapsed if elapsed > 0 else 0

    if finished:
        print(f"\nLoading {kind}s... Done. Total {kind}s: {report['submitted']}")
    else:
        # submitted only counts what was dispatched before giving up
        print(f"\nLoading {kind}s... Aborted. Dispatched {kind}s: {report['submitted']}")
    print(f"   Loaded: {report['loaded']:,} | Failed: {report['failed']:,}")
    print(f"   Time: {timedelta(seconds=int(elapsed))}")
    print(f"   Throughput: {throughput:,.0f} records/sec")

    return report


def load_items(db: ReviewDB, items_path: Path, n_workers: int = WORKER_POOL_SIZE,
               timeout: Optional[float] = LOAD_TIMEOUT_SECONDS) -> Dict[str, int]:
    """
    Load the items file into the items table.

    Args:
        db: Connected and initialized ReviewDB
        items_path: Path to items JSONL file
        n_workers: Pool width
        timeout: Seconds to wait for the load

    Returns:
        Load report
    """
    return run_load('item', items_path, parse_item, db.insert_item,
                    ITEM_PROGRESS_EVERY, n_workers=n_workers, timeout=timeout)


def load_reviews(db: ReviewDB, reviews_path: Path, n_workers: int = WORKER_POOL_SIZE,
                 timeout: Optional[float] = LOAD_TIMEOUT_SECONDS) -> Dict[str, int]:
    """
    Load the reviews file into both review tables.

    Args:
        db: Connected and initialized ReviewDB
        reviews_path: Path to reviews JSONL file
        n_workers: Pool width
        timeout: Seconds to wait for the load

    Returns:
        Load report
    """
    return run_load('review', reviews_path, parse_review, db.insert_review,
                    REVIEW_PROGRESS_EVERY, n_workers=n_workers, timeout=timeout)


def populate_database(db: ReviewDB, items_path: Path, reviews_path: Path,
                      n_workers: int = WORKER_POOL_SIZE) -> Dict[str, Dict[str, int]]:
    """
    Load items, then reviews.

    Args:
        db: Connected and initialized ReviewDB
        items_path: Path to items JSONL
        reviews_path: Path to reviews JSONL
        n_workers: Pool width for both loads

    Returns:
        Dictionary with the 'items' and 'reviews' load reports
    """
    overall_start = time.time()

    items_report = load_items(db, items_path, n_workers=n_workers)
    reviews_report = load_reviews(db, reviews_path, n_workers=n_workers)

    overall_time = time.time() - overall_start
    print("\n" + "="*70)
    print("📊 LOAD SUMMARY")
    print("="*70)
    print(f"   Items:   {items_report['loaded']:,} loaded, {items_report['failed']:,} failed")
    print(f"   Reviews: {reviews_report['loaded']:,} loaded, {reviews_report['failed']:,} failed")
    print(f"\n✅ TOTAL TIME: {timedelta(seconds=int(overall_time))}")

    return {'items': items_report, 'reviews': reviews_report}

"""
Helper utilities for the review store.

The item and review formatters produce the exact text expected by
downstream graders; do not change their output.
"""
from typing import Dict, Any, Iterable
from datetime import datetime, timezone
import json
import sys


def format_instant(moment: datetime) -> str:
    """
    Render a timestamp as ISO-8601 UTC with a trailing Z.

    Naive datetimes (as returned by the driver) are taken to be UTC.

    Args:
        moment: Review time

    Returns:
        String such as 2013-05-07T00:00:00Z
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)

    rendered = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        rendered += f".{moment.microsecond // 1000:03d}"
    return rendered + "Z"


def format_rating(rating: float) -> str:
    """Render a rating with a decimal point (5.0, -1.0)."""
    return repr(float(rating))


def format_categories(categories: Iterable[str]) -> str:
    """Render a category set as [a, b, c] in sorted order."""
    return "[" + ", ".join(sorted(categories or [])) + "]"


def format_item(item: Dict[str, Any]) -> str:
    """
    Format an item row as a five-line block.

    Args:
        item: Item row with asin, title, image_url, categories, description

    Returns:
        Formatted string, every line newline-terminated
    """
    item_desc = ""
    item_desc += f"asin: {item['asin']}\n"
    item_desc += f"title: {item['title']}\n"
    item_desc += f"image: {item['image_url']}\n"
    item_desc += f"categories: {format_categories(item['categories'])}\n"
    item_desc += f"description: {item['description']}\n"
    return item_desc


def format_review(review: Dict[str, Any]) -> str:
    """
    Format a review row as a single newline-terminated line.

    Args:
        review: Review row from either review table

    Returns:
        Formatted string
    """
    return (
        f"time: {format_instant(review['review_time'])}, "
        f"asin: {review['asin']}, "
        f"reviewerID: {review['reviewer_id']}, "
        f"reviewerName: {review['reviewer_name']}, "
        f"rating: {format_rating(review['rating'])}, "
        f"summary: {review['summary']}, "
        f"reviewText: {review['review_text']}\n"
    )


def log_event(event_type: str, message: str, data: Dict[str, Any] = None):
    """
    Log an event as JSON on stderr.

    Args:
        event_type: Type of event
        message: Event message
        data: Additional event data
    """
    log_entry = {
        'timestamp': datetime.now().isoformat(),
        'event_type': event_type,
        'message': message,
        'data': data or {}
    }

    print(json.dumps(log_entry, default=str), file=sys.stderr)

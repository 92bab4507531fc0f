"""Utilities package for the review store."""

from .helpers import format_item, format_review, log_event

__all__ = [
    'format_item',
    'format_review',
    'log_event',
]

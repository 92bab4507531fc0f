"""
Review Store Package
Cassandra-backed product catalog and review feeds.
"""

__version__ = "1.0.0"

from . import config
from . import etl
from . import utils
from .store import ReviewStore

__all__ = [
    'config',
    'etl',
    'utils',
    'ReviewStore',
]

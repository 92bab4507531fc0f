"""
Configuration settings for the review store.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Base directories
BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
RAW_DATA_DIR = DATA_DIR / "raw"

# Data paths
ITEMS_JSONL = Path(os.environ.get("ITEMS_JSONL", RAW_DATA_DIR / "meta_Office_Products.json"))
REVIEWS_JSONL = Path(os.environ.get("REVIEWS_JSONL", RAW_DATA_DIR / "reviews_Office_Products.json"))

# Astra / Cassandra connection
ASTRA_BUNDLE_PATH = os.environ.get("ASTRA_BUNDLE_PATH", str(BASE_DIR / "secure-connect-bundle.zip"))
ASTRA_CLIENT_ID = os.environ.get("ASTRA_CLIENT_ID", "")
ASTRA_CLIENT_SECRET = os.environ.get("ASTRA_CLIENT_SECRET", "")
ASTRA_KEYSPACE = os.environ.get("ASTRA_KEYSPACE", "reviews")

# Bulk loader
WORKER_POOL_SIZE = 250
PRE_DISPATCH = "2*n_jobs"  # pending tasks allowed ahead of the workers
LOAD_TIMEOUT_SECONDS = 60 * 60
ITEM_PROGRESS_EVERY = 1000
REVIEW_PROGRESS_EVERY = 10000

# API Config
API_HOST = "0.0.0.0"
API_PORT = 8000
API_DEBUG = True

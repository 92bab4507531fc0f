"""
FastAPI application for the review store.
Provides read endpoints over the item catalog and the two review feeds.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Optional

from ..config import ASTRA_BUNDLE_PATH, ASTRA_CLIENT_ID, ASTRA_CLIENT_SECRET, ASTRA_KEYSPACE
from ..store import ReviewStore, ITEM_NOT_FOUND


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the Cassandra session when the server stops."""
    global store
    yield
    if store is not None:
        store.close()
        store = None


# Initialize FastAPI app
app = FastAPI(
    title="Review Store API",
    description="Product catalog and review feeds served from Cassandra",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global store instance
store: Optional[ReviewStore] = None


# Response Models
class ItemResponse(BaseModel):
    """Response model for an item lookup."""
    asin: str
    exists: bool
    text: str


class ReviewsResponse(BaseModel):
    """Response model for a review feed."""
    total: int
    reviews: List[str]


# Helper Functions
def initialize_store() -> ReviewStore:
    """Open the store from configuration on first use."""
    global store
    if store is None:
        new_store = ReviewStore()
        new_store.connect(ASTRA_BUNDLE_PATH, ASTRA_CLIENT_ID, ASTRA_CLIENT_SECRET, ASTRA_KEYSPACE)
        new_store.initialize()
        store = new_store
    return store


def _get_store() -> ReviewStore:
    try:
        return initialize_store()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to connect: {str(e)}")


# API Endpoints
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Review Store API",
        "version": "1.0.0",
        "endpoints": {
            "item": "/items/{asin}",
            "item_reviews": "/items/{asin}/reviews",
            "user_reviews": "/users/{reviewer_id}/reviews",
            "status": "/status"
        }
    }


@app.get("/status")
async def get_status():
    """Get the connection status."""
    if store is None:
        return {"database": {"connected": False, "initialized": False}}
    return {"database": store.db.get_status()}


@app.get("/items/{asin}", response_model=ItemResponse)
def get_item(asin: str):
    """
    Get a single item by ASIN.

    An unknown ASIN is not an error: the response carries exists=false and
    the text "not exists".
    """
    current = _get_store()

    try:
        text = current.item(asin)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get item: {str(e)}")

    return ItemResponse(asin=asin, exists=text != ITEM_NOT_FOUND, text=text)


@app.get("/items/{asin}/reviews", response_model=ReviewsResponse)
def get_item_reviews(asin: str):
    """Get every review of a product, newest first."""
    current = _get_store()

    try:
        reviews = current.item_reviews(asin)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get reviews: {str(e)}")

    return ReviewsResponse(total=len(reviews), reviews=reviews)


@app.get("/users/{reviewer_id}/reviews", response_model=ReviewsResponse)
def get_user_reviews(reviewer_id: str):
    """Get every review written by a user, newest first."""
    current = _get_store()

    try:
        reviews = current.user_reviews(reviewer_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get reviews: {str(e)}")

    return ReviewsResponse(total=len(reviews), reviews=reviews)

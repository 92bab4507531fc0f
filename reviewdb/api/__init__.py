"""HTTP API package for the review store."""

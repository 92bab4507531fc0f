"""
Serve the review store's read API with uvicorn.
"""
import argparse

import uvicorn
from reviewdb.config import API_HOST, API_PORT, API_DEBUG


def main():
    parser = argparse.ArgumentParser(description="Run the review store read API")
    parser.add_argument("--host", type=str, default=API_HOST,
                        help=f"Interface to bind (default: {API_HOST})")
    parser.add_argument("--port", type=int, default=API_PORT,
                        help=f"Port to listen on (default: {API_PORT})")
    parser.add_argument("--no-reload", action="store_true",
                        help="Disable auto-reload even when API_DEBUG is on")
    args = parser.parse_args()

    print(f"Review Store API on http://{args.host}:{args.port} (docs at /docs)")
    print("The Cassandra session opens on the first query\n")

    uvicorn.run(
        "reviewdb.api.app:app",
        host=args.host,
        port=args.port,
        reload=API_DEBUG and not args.no_reload
    )


if __name__ == "__main__":
    main()

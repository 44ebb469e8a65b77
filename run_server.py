#!/usr/bin/env python3
"""Run the vocab drill API server."""

import uvicorn


def main():
    print("Starting Vocab Drill API server...")
    print("API documentation available at: http://localhost:8000/docs")
    uvicorn.run(
        "server.app:app",
        host="127.0.0.1",
        port=8000,
        reload=False
    )


if __name__ == "__main__":
    main()

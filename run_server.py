"""
Start the API server.

``application`` is a factory, so uvicorn builds the app itself and the
lifespan handler connects the store on startup.
"""

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "socialnet:application", factory=True, host="0.0.0.0", port=8000
    )

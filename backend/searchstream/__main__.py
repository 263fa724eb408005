"""Main entry point for running the backend server."""

import uvicorn

from searchstream.config.settings import get_settings


def main():
    """Start the API and Socket.IO server."""
    settings = get_settings()

    uvicorn.run(
        "searchstream.api.app:asgi_app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

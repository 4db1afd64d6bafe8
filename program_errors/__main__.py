"""Command-line entry point for the error registry server."""

import uvicorn

from program_errors import initialize_application
from program_errors.app import create_app
from program_errors.utils.config import get_server_settings


def main():
    """Run the error registry HTTP server."""
    catalog = initialize_application()
    server = get_server_settings()
    uvicorn.run(create_app(catalog), host=server.HOST, port=server.PORT)


if __name__ == "__main__":
    main()

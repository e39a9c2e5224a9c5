"""
Deployed server for the SmartInvoice PDF service.

Listens on every interface at the port from Config (PORT), which the
hosting platform assigns. Use run.py for local development.
"""

import logging

import uvicorn

from utils.config import Config

PUBLIC_HOST = "0.0.0.0"


def serve(config: Config) -> None:
    logging.basicConfig(level=config.log_level)
    print(f"Starting SmartInvoice PDF service on port {config.port}")

    # Deferred so the app module loads after logging is configured
    from web.app import app

    uvicorn.run(app, host=PUBLIC_HOST, port=config.port)


if __name__ == "__main__":
    serve(Config.load())

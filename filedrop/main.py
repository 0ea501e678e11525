"""
main.py

Development entry point for the FileDrop API.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors, redis, celery,
    google-cloud-storage
  - Infrastructure: Redis server (6.0 or newer)

Notes:
  - API v1 endpoints available at /api/v1/ with Swagger docs at /api/v1/docs
  - Set BLOB_BUCKET to store payloads in Google Cloud Storage
"""

import os

from .app_factory import create_app
from .config.logging_config import configure_logging

configure_logging()

app = create_app()


def run():
    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", 8000))
    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run()

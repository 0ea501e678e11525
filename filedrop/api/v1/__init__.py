"""
API v1 - FileDrop REST API

This module contains the versioned API endpoints with OpenAPI/Swagger documentation.
"""

import os

from flask import Blueprint
from flask_restx import Api
from werkzeug.exceptions import MethodNotAllowed

from ...domain.errors import ErrorCategory, create_error_response

# Get API version from environment
API_VERSION = os.getenv("API_VERSION", "v1")

# Create blueprint for API v1
api_v1_bp = Blueprint("api_v1", __name__, url_prefix=f"/api/{API_VERSION}")

# Initialize Flask-RESTX API with Swagger documentation
api = Api(
    api_v1_bp,
    version="1.0",
    title="FileDrop API",
    description="Ephemeral file transfers: upload once, download a limited number of times",
    doc="/docs",  # Swagger UI will be available at /api/v1/docs
    contact="FileDrop Team",
    license="MIT",
)

# Import namespaces after api is created to avoid circular imports
from .namespaces import blob_ns, transfer_ns  # noqa: E402

# Register namespaces
api.add_namespace(transfer_ns, path="/transfers")
api.add_namespace(blob_ns, path="/blobs")


@api.errorhandler(MethodNotAllowed)
def handle_method_not_allowed(error):
    """Transfers only accept PUT and GET."""
    return create_error_response(
        ErrorCategory.METHOD_NOT_ALLOWED, str(error), status_code=405
    )

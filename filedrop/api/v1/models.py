"""
API Models for response documentation
"""

from flask_restx import fields

from . import api

# =============================================================================
# Response Models
# =============================================================================

upload_response = api.model(
    "UploadResponse",
    {
        "key": fields.String(
            description="Transfer key (lowercase hex)", example="a1b2c3d4e5"
        ),
        "link": fields.String(
            description="Public download link",
            example="https://drop.example.com/a1b2c3d4e5/report.pdf",
        ),
        "expires_at": fields.String(
            description="When the transfer stops being redeemable (ISO timestamp)"
        ),
        "max_redemptions": fields.Integer(
            description="How many downloads the link allows", example=3
        ),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Short error title"),
        "message": fields.String(description="User-facing error message"),
        "action": fields.String(description="Suggested next step"),
    },
)

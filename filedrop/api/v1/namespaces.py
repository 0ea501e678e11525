"""
API Namespaces - Organized endpoint groups
"""

from flask import current_app, redirect, request, send_file
from flask_restx import Namespace, Resource

from ...application.redemption_service import RedemptionCoordinator
from ...application.registration_service import RegistrationCoordinator
from ...config.settings import TransferSettings
from ...domain.errors import (
    EntropyUnavailableError,
    ErrorCategory,
    KeyspaceExhaustedError,
    MalformedInputError,
    StoreUnavailableError,
    UploadFailedError,
    create_error_response,
)
from ...domain.transfer.blob_store import IBlobStore
from ...infrastructure.local_blob_store import LocalBlobStore
from . import API_VERSION
from .models import error_response, upload_response


def _extract_client_ip() -> str:
    """Return the caller address, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.remote_addr or ""


def _link_domain(settings: TransferSettings) -> str:
    if settings.domain:
        return settings.domain
    return request.url_root.rstrip("/") + f"/api/{API_VERSION}/transfers"


# =============================================================================
# Transfer Namespace - Upload and redemption
# =============================================================================

transfer_ns = Namespace("transfers", description="Upload and redeem transfers")


@transfer_ns.route("/", "/<path:path>")
@transfer_ns.param("path", "File name on upload, key/filename on download")
class Transfer(Resource):
    """Transfer lifecycle operations"""

    @transfer_ns.doc("upload_file")
    @transfer_ns.response(200, "Stored", upload_response)
    @transfer_ns.response(400, "Bad Request", error_response)
    @transfer_ns.response(500, "Upload Failed", error_response)
    def put(self, path=""):
        """
        Upload a file

        The request body is stored as-is under a fresh key. The response
        carries the public link, which can be redeemed a limited number of
        times before the transfer expires.
        """
        source_address = _extract_client_ip()
        content = request.get_data(cache=False)

        try:
            settings = current_app.container.resolve(TransferSettings)
            coordinator = current_app.container.resolve(RegistrationCoordinator)
            result = coordinator.register(path, source_address, content)

            current_app.logger.info(
                f"[TRANSFERS] Stored {len(content)} bytes as {result.key} "
                f"after {result.attempts} attempt(s)"
            )
            return result.to_dict(_link_domain(settings), settings.max_redemptions), 200

        except MalformedInputError as e:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST, str(e), status_code=400
            )
        except UploadFailedError as e:
            current_app.logger.error(f"[TRANSFERS] Upload failed for {e.key}: {e}")
            return create_error_response(
                ErrorCategory.UPLOAD_FAILED, str(e), status_code=500
            )
        except (KeyspaceExhaustedError, EntropyUnavailableError, StoreUnavailableError) as e:
            current_app.logger.error(f"[TRANSFERS] Registration failed: {e}")
            return create_error_response(
                ErrorCategory.UPLOAD_FAILED, str(e), status_code=500
            )
        except Exception as e:
            current_app.logger.exception(f"Unexpected error during upload: {str(e)}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                f"Unexpected error: {str(e)}",
                status_code=500,
            )

    @transfer_ns.doc("redeem_transfer")
    @transfer_ns.response(302, "Redirect to a signed download URL")
    @transfer_ns.response(404, "Transfer Not Found", error_response)
    @transfer_ns.response(500, "Internal Server Error", error_response)
    def get(self, path=""):
        """
        Redeem a transfer link

        Each successful call uses up one redemption and redirects to a
        short-lived download URL. Unknown, expired and used-up links are
        indistinguishable and all answer 404.
        """
        try:
            coordinator = current_app.container.resolve(RedemptionCoordinator)
            result = coordinator.redeem(path)
        except MalformedInputError as e:
            current_app.logger.debug(f"[TRANSFERS] Malformed download path: {e}")
            return create_error_response(
                ErrorCategory.TRANSFER_NOT_FOUND, status_code=404
            )
        except StoreUnavailableError as e:
            current_app.logger.error(f"[TRANSFERS] Redemption failed: {e}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, str(e), status_code=500
            )
        except Exception as e:
            current_app.logger.exception(f"Unexpected error during redemption: {str(e)}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                f"Unexpected error: {str(e)}",
                status_code=500,
            )

        if not result.granted:
            return create_error_response(
                ErrorCategory.TRANSFER_NOT_FOUND, status_code=404
            )

        current_app.logger.info(f"[TRANSFERS] Redeemed {result.key}")
        return redirect(result.signed_url, code=302)


# =============================================================================
# Blob Namespace - Signed downloads from the local blob store
# =============================================================================

blob_ns = Namespace("blobs", description="Signed blob downloads")


@blob_ns.route("/<string:key>")
@blob_ns.param("key", "The transfer key")
class Blob(Resource):
    """Serve a locally stored payload"""

    @blob_ns.doc("download_blob")
    @blob_ns.param("expires", "Unix timestamp after which the URL is invalid")
    @blob_ns.param("signature", "HMAC signature over key and expiry")
    @blob_ns.response(200, "File content")
    @blob_ns.response(403, "Forbidden", error_response)
    @blob_ns.response(404, "File Not Found", error_response)
    @blob_ns.response(410, "Link Expired", error_response)
    def get(self, key):
        """
        Download a payload using a signed URL

        Only the local filesystem blob store issues these URLs; with Google
        Cloud Storage the redirect points at the bucket directly.
        """
        blob_store = current_app.container.resolve(IBlobStore)
        if not isinstance(blob_store, LocalBlobStore):
            return create_error_response(
                ErrorCategory.TRANSFER_NOT_FOUND, status_code=404
            )

        signature = request.args.get("signature", "")
        try:
            expires = int(request.args.get("expires", ""))
        except ValueError:
            expires = None

        if expires is None or not signature:
            return create_error_response(
                ErrorCategory.INVALID_SIGNATURE,
                "Missing expires or signature",
                status_code=403,
            )

        if not blob_store.signer.validate_signature(key, signature, expires):
            current_app.logger.warning(f"[BLOBS] Invalid signature for {key}")
            return create_error_response(
                ErrorCategory.INVALID_SIGNATURE, status_code=403
            )

        if blob_store.signer.is_expired(expires):
            return create_error_response(ErrorCategory.LINK_EXPIRED, status_code=410)

        located = blob_store.open(key)
        if located is None:
            current_app.logger.warning(f"[BLOBS] Blob not found: {key}")
            return create_error_response(
                ErrorCategory.TRANSFER_NOT_FOUND, status_code=404
            )

        blob_path, display_name = located
        current_app.logger.info(f"[BLOBS] Serving {key}")

        return send_file(
            blob_path,
            as_attachment=True,
            download_name=display_name,
            mimetype="application/octet-stream",
        )

"""
Transfer Domain

Transfer records, key generation and the storage contracts the
coordinators depend on.
"""

from .blob_store import IBlobStore
from .entities import TransferRecord
from .repositories import InsertOutcome, RedemptionOutcome, TransferRecordRepository
from .signed_url_service import SignedUrl, SignedUrlService
from .value_objects import DownloadPath, KeyGenerator, TransferKey, content_disposition

__all__ = [
    "DownloadPath",
    "IBlobStore",
    "InsertOutcome",
    "KeyGenerator",
    "RedemptionOutcome",
    "SignedUrl",
    "SignedUrlService",
    "TransferKey",
    "TransferRecord",
    "TransferRecordRepository",
    "content_disposition",
]

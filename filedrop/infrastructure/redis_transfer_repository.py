"""
Redis Transfer Repository Implementation

Concrete Redis-based implementation of TransferRecordRepository.
Records are JSON documents under ``<record_table>:<key>`` whose TTL ends at
the record's ``expires_at``.
"""

import logging
from typing import Optional

from ..domain.errors import StoreUnavailableError
from ..domain.transfer.entities import TransferRecord
from ..domain.transfer.repositories import (
    InsertOutcome,
    RedemptionOutcome,
    TransferRecordRepository,
)
from .redis_repository import RedisRepository

logger = logging.getLogger(__name__)

# Returns -1 when the record is missing, 0 when the limit is reached, 1 on increment.
INCREMENT_IF_BELOW_LIMIT = """
local data = redis.call('GET', KEYS[1])
if not data then
    return -1
end

local record = cjson.decode(data)
local count = tonumber(record['redemption_count']) or 0
if count >= tonumber(ARGV[1]) then
    return 0
end

record['redemption_count'] = count + 1
redis.call('SET', KEYS[1], cjson.encode(record), 'KEEPTTL')
return 1
"""

_SCRIPT_OUTCOMES = {
    -1: RedemptionOutcome.RECORD_ABSENT,
    0: RedemptionOutcome.LIMIT_REACHED,
    1: RedemptionOutcome.GRANTED,
}


class RedisTransferRepository(TransferRecordRepository):
    """
    Redis-based implementation of TransferRecordRepository.

    Insert uses ``SET NX EX`` and the redemption gate is a single Lua
    script, so neither needs a client-side lock.
    """

    def __init__(self, redis_repository: RedisRepository):
        """
        Initialize with Redis repository.

        Args:
            redis_repository: RedisRepository whose key prefix is the record table
        """
        self.redis_repo = redis_repository

    def insert_if_absent(self, record: TransferRecord) -> InsertOutcome:
        ttl = record.get_remaining_seconds()
        if ttl <= 0:
            raise ValueError(f"Refusing to insert already expired record {record.key}")

        if self.redis_repo.set_json_if_absent(record.key, record.to_dict(), ttl=ttl):
            return InsertOutcome.INSERTED
        return InsertOutcome.ALREADY_EXISTS

    def delete(self, key: str) -> bool:
        return self.redis_repo.delete(key)

    def increment_if_below_limit(self, key: str, limit: int) -> RedemptionOutcome:
        result = self.redis_repo.run_script(INCREMENT_IF_BELOW_LIMIT, [key], [limit])

        try:
            return _SCRIPT_OUTCOMES[int(result)]
        except (KeyError, TypeError, ValueError):
            raise StoreUnavailableError(
                f"Unexpected result {result!r} from redemption script for {key}"
            )

    def get(self, key: str) -> Optional[TransferRecord]:
        data = self.redis_repo.get_json(key)
        if data is None:
            return None

        try:
            return TransferRecord.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Error deserializing transfer record {key}: {e}")
            return None

    def exists(self, key: str) -> bool:
        return self.redis_repo.exists(key)

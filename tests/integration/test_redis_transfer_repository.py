"""
Integration tests for RedisTransferRepository against a real Redis server.
"""

import threading
from datetime import timedelta

import pytest

from filedrop.domain.transfer.repositories import InsertOutcome, RedemptionOutcome
from filedrop.infrastructure.redis_repository import RedisRepository
from filedrop.infrastructure.redis_transfer_repository import RedisTransferRepository
from tests.fixtures.domain_fixtures import create_transfer_record


@pytest.fixture
def repository(redis_client):
    return RedisTransferRepository(RedisRepository(redis_client, key_prefix="transfers"))


class TestRedisTransferRepository:

    def test_insert_then_get(self, repository, redis_client):
        record = create_transfer_record(key="abcd")

        assert repository.insert_if_absent(record) is InsertOutcome.INSERTED

        assert repository.get("abcd") == record
        assert redis_client.exists("transfers:abcd") == 1

    def test_insert_sets_ttl_to_expiry(self, repository, redis_client):
        repository.insert_if_absent(create_transfer_record(key="abcd", retention=timedelta(hours=1)))

        assert 3590 <= redis_client.ttl("transfers:abcd") <= 3600

    def test_second_insert_does_not_overwrite(self, repository):
        repository.insert_if_absent(create_transfer_record(key="abcd", filename="first.txt"))

        outcome = repository.insert_if_absent(create_transfer_record(key="abcd", filename="second.txt"))

        assert outcome is InsertOutcome.ALREADY_EXISTS
        assert repository.get("abcd").filename == "first.txt"

    def test_increment_until_limit(self, repository):
        repository.insert_if_absent(create_transfer_record(key="abcd"))

        outcomes = [repository.increment_if_below_limit("abcd", 3) for _ in range(4)]

        assert outcomes == [RedemptionOutcome.GRANTED] * 3 + [RedemptionOutcome.LIMIT_REACHED]
        assert repository.get("abcd").redemption_count == 3

    def test_increment_missing_record(self, repository):
        assert repository.increment_if_below_limit("abcd", 3) is RedemptionOutcome.RECORD_ABSENT

    def test_increment_keeps_ttl(self, repository, redis_client):
        repository.insert_if_absent(create_transfer_record(key="abcd", retention=timedelta(hours=1)))

        repository.increment_if_below_limit("abcd", 3)

        assert redis_client.ttl("transfers:abcd") > 0

    def test_delete(self, repository):
        repository.insert_if_absent(create_transfer_record(key="abcd"))

        assert repository.delete("abcd")
        assert not repository.exists("abcd")
        assert not repository.delete("abcd")

    def test_concurrent_increments_respect_limit(self, repository):
        repository.insert_if_absent(create_transfer_record(key="abcd", redemption_count=2))
        barrier = threading.Barrier(10)
        outcomes = []

        def redeem():
            barrier.wait()
            outcomes.append(repository.increment_if_below_limit("abcd", 3))

        threads = [threading.Thread(target=redeem) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count(RedemptionOutcome.GRANTED) == 1
        assert repository.get("abcd").redemption_count == 3

"""
Unit tests for registration and redemption result objects.
"""

import pytest

from filedrop.application.transfer_result import RedemptionResult, RegistrationResult
from filedrop.domain.transfer.repositories import RedemptionOutcome
from tests.fixtures.domain_fixtures import create_transfer_record


class TestRegistrationResult:

    def test_to_dict(self):
        record = create_transfer_record(key="a1b2c3d4e5", filename="report.pdf")
        result = RegistrationResult(record=record, attempts=2)

        data = result.to_dict("https://drop.example.com", 3)

        assert result.key == "a1b2c3d4e5"
        assert data == {
            "key": "a1b2c3d4e5",
            "link": "https://drop.example.com/a1b2c3d4e5/report.pdf",
            "expires_at": record.expires_at.isoformat(),
            "max_redemptions": 3,
        }


class TestRedemptionResult:

    def test_create_granted(self):
        result = RedemptionResult.create_granted("abcd", "https://x/abcd")

        assert result.granted
        assert result.signed_url == "https://x/abcd"

    @pytest.mark.parametrize(
        "outcome", [RedemptionOutcome.RECORD_ABSENT, RedemptionOutcome.LIMIT_REACHED]
    )
    def test_create_denied(self, outcome):
        result = RedemptionResult.create_denied("abcd", outcome)

        assert not result.granted
        assert result.signed_url is None

    def test_create_denied_rejects_granted_outcome(self):
        with pytest.raises(ValueError):
            RedemptionResult.create_denied("abcd", RedemptionOutcome.GRANTED)

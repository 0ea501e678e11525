"""
Unit tests for the transfer endpoints.

The app is built by the real factory around in-memory stores.
"""

from urllib.parse import urlsplit

import pytest

from filedrop.app_factory import AppConfig, create_app
from tests.fixtures.containers import build_container
from tests.fixtures.domain_fixtures import create_settings, create_transfer_record

KEY = "a1b2c3d4e5"


class TestUpload:
    """PUT /api/v1/transfers/<filename>"""

    def test_upload_returns_link(self, client, record_repository, blob_store):
        response = client.put("/api/v1/transfers/report.pdf", data=b"%PDF-1.7")

        assert response.status_code == 200
        body = response.get_json()
        key = body["key"]
        assert body["link"] == f"https://drop.example.com/{key}/report.pdf"
        assert body["max_redemptions"] == 3
        assert "expires_at" in body
        assert blob_store.blobs[key] == b"%PDF-1.7"
        assert record_repository.get(key).filename == "report.pdf"

    def test_upload_records_forwarded_client_address(self, client, record_repository):
        response = client.put(
            "/api/v1/transfers/a.txt",
            data=b"x",
            headers={"X-Forwarded-For": "198.51.100.9, 10.0.0.1"},
        )

        key = response.get_json()["key"]
        assert record_repository.get(key).source_address == "198.51.100.9"

    def test_upload_falls_back_to_remote_address(self, client, record_repository):
        response = client.put(
            "/api/v1/transfers/a.txt", data=b"x", environ_base={"REMOTE_ADDR": "192.0.2.44"}
        )

        key = response.get_json()["key"]
        assert record_repository.get(key).source_address == "192.0.2.44"

    def test_nested_filename_is_kept(self, client, record_repository):
        response = client.put("/api/v1/transfers/photos/cat.jpg", data=b"x")

        key = response.get_json()["key"]
        assert record_repository.get(key).filename == "photos/cat.jpg"

    def test_blank_filename_is_bad_request(self, client, record_repository):
        response = client.put("/api/v1/transfers/", data=b"x")

        assert response.status_code == 400
        assert response.get_json()["error"] == "invalid_request"
        assert record_repository.keys() == []

    def test_blob_failure_is_server_error_and_rolled_back(self, client, record_repository, blob_store):
        blob_store.fail_on.add("put")

        response = client.put("/api/v1/transfers/a.txt", data=b"x")

        assert response.status_code == 500
        assert response.get_json()["error"] == "upload_failed"
        assert record_repository.keys() == []

    def test_record_store_failure_is_server_error(self, client, record_repository):
        record_repository.fail_on.add("insert_if_absent")

        response = client.put("/api/v1/transfers/a.txt", data=b"x")

        assert response.status_code == 500

    def test_link_defaults_to_request_host_without_domain(self, record_repository, blob_store):
        settings = create_settings(domain="")
        app = create_app(
            AppConfig(settings=settings),
            container=build_container(settings, record_repository, blob_store),
        )

        response = app.test_client().put(
            "/api/v1/transfers/a.txt", data=b"x", base_url="http://files.local"
        )

        key = response.get_json()["key"]
        assert response.get_json()["link"] == f"http://files.local/api/v1/transfers/{key}/a.txt"

    @pytest.mark.parametrize("encoded_name", ["%3Fnotes.txt", "%23draft.txt", "two%20words.txt"])
    def test_returned_link_redeems_for_reserved_characters(
        self, record_repository, blob_store, encoded_name
    ):
        settings = create_settings(domain="")
        app = create_app(
            AppConfig(settings=settings),
            container=build_container(settings, record_repository, blob_store),
        )
        client = app.test_client()

        upload = client.put(
            f"/api/v1/transfers/{encoded_name}", data=b"x", base_url="http://files.local"
        )
        link = urlsplit(upload.get_json()["link"])

        assert link.query == ""
        assert link.fragment == ""
        response = client.get(link.path, base_url="http://files.local")
        assert response.status_code == 302


class TestRedeem:
    """GET /api/v1/transfers/<key>/<filename>"""

    def test_redirects_to_signed_url(self, client, record_repository, blob_store):
        record_repository.seed(create_transfer_record(key=KEY))

        response = client.get(f"/api/v1/transfers/{KEY}/report.pdf")

        assert response.status_code == 302
        assert response.headers["Location"] == f"{blob_store.base_url}/{KEY}?ttl=900"

    def test_fourth_redemption_is_not_found(self, client, record_repository):
        record_repository.seed(create_transfer_record(key=KEY))

        statuses = [client.get(f"/api/v1/transfers/{KEY}/f").status_code for _ in range(4)]

        assert statuses == [302, 302, 302, 404]

    def test_unknown_and_exhausted_look_the_same(self, client, record_repository):
        record_repository.seed(create_transfer_record(key=KEY, redemption_count=3))

        exhausted = client.get(f"/api/v1/transfers/{KEY}/f")
        unknown = client.get("/api/v1/transfers/beef/f")

        assert exhausted.status_code == unknown.status_code == 404
        assert exhausted.get_json() == unknown.get_json()

    @pytest.mark.parametrize(
        "path",
        [f"/api/v1/transfers/{KEY}", "/api/v1/transfers/not-hex/f", "/api/v1/transfers/"],
    )
    def test_malformed_paths_are_not_found(self, client, path):
        response = client.get(path)

        assert response.status_code == 404
        assert response.get_json()["error"] == "transfer_not_found"

    def test_store_failure_is_server_error(self, client, record_repository):
        record_repository.fail_on.add("increment_if_below_limit")

        response = client.get(f"/api/v1/transfers/{KEY}/f")

        assert response.status_code == 500


class TestOtherMethods:

    @pytest.mark.parametrize("method", ["post", "delete", "patch"])
    def test_method_not_allowed(self, client, method):
        response = getattr(client, method)(f"/api/v1/transfers/{KEY}/f")

        assert response.status_code == 405
        assert response.get_json()["error"] == "method_not_allowed"

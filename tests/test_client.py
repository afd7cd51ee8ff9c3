"""
Core APIClient tests - session token and the execute contract.

The HTTP transport is replaced by the FakeTransport fixture from conftest.py.
"""

import urllib.error

import pytest

from dynect_cli.core.client import DEFAULT_BASE_URL, APIClient
from dynect_cli.core.types import Credentials, ResponseEnvelope
from dynect_cli.sdk import DynectClient

LOGIN_OK = {"status": "success", "data": {"token": "T123"}}


@pytest.fixture
def client(credentials):
    return APIClient(credentials=credentials)


# =============================================================================
# execute
# =============================================================================


class TestExecute:
    def test_builds_url_with_trailing_slash(self, client, transport):
        client.execute("Zone/example.com", "GET")
        assert transport.last.full_url == f"{DEFAULT_BASE_URL}/Zone/example.com/"
        assert transport.last.get_method() == "GET"

    def test_sends_json_content_type(self, client, transport):
        client.execute("Zone", "GET")
        assert transport.last.get_header("Content-type") == "application/json"

    def test_no_auth_header_before_login(self, client, transport):
        client.execute("Zone", "GET")
        assert transport.last.get_header("Auth-token") is None

    def test_empty_payload_sends_no_body(self, client, transport):
        client.execute("Zone/example.com", "DELETE", {})
        assert transport.last.data is None

    def test_payload_sent_as_json(self, client, transport):
        client.execute("Zone/example.com", "PUT", {"publish": True})
        assert transport.body_of() == {"publish": True}
        assert transport.last.get_method() == "PUT"

    def test_returns_parsed_envelope(self, client, transport):
        transport.reply({"status": "success", "data": ["x"], "job_id": 7, "msgs": []})
        envelope = client.execute("Zone", "GET")
        assert isinstance(envelope, ResponseEnvelope)
        assert envelope.is_success
        assert envelope.data == ["x"]
        assert envelope.job_id == 7

    def test_keeps_raw_body(self, client, transport):
        transport.reply('{"status": "success", "data": 1}')
        client.execute("Zone", "GET")
        assert client.result == '{"status": "success", "data": 1}'

    def test_error_status_body_is_still_parsed(self, client, transport):
        transport.reply({"status": "failure", "data": {}, "msgs": [{"INFO": "zone: not found"}]}, status=404)
        envelope = client.execute("Zone/missing.com", "GET")
        assert envelope is not None
        assert envelope.status == "failure"
        assert not envelope.is_success
        assert "not found" in client.result

    def test_transport_failure_returns_none(self, client, transport):
        transport.fail(urllib.error.URLError("connection refused"))
        assert client.execute("Zone", "GET") is None
        assert client.result == ""

    def test_timeout_returns_none(self, client, transport):
        transport.fail(TimeoutError("timed out"))
        assert client.execute("Zone", "GET") is None
        assert client.result == ""

    def test_malformed_body_returns_none(self, client, transport):
        transport.reply("<html>Bad Gateway</html>", status=502)
        assert client.execute("Zone", "GET") is None
        assert client.result == "<html>Bad Gateway</html>"

    def test_empty_body_returns_none(self, client, transport):
        transport.reply(None)
        assert client.execute("Zone", "GET") is None

    def test_non_object_json_returns_none(self, client, transport):
        transport.reply("[1, 2, 3]")
        assert client.execute("Zone", "GET") is None

    def test_result_is_overwritten_by_each_call(self, client, transport):
        transport.reply({"status": "success", "data": "first"})
        transport.fail(urllib.error.URLError("down"))
        client.execute("Zone", "GET")
        assert "first" in client.result
        client.execute("Zone", "GET")
        assert client.result == ""

    def test_verb_is_case_insensitive(self, client, transport):
        client.execute("Zone", "get")
        assert transport.last.get_method() == "GET"

    def test_unknown_verb_raises(self, client, transport):
        with pytest.raises(ValueError):
            client.execute("Zone", "PATCH")
        assert transport.requests == []


# =============================================================================
# Configuration
# =============================================================================


class TestConfiguration:
    def test_base_url_from_env(self, monkeypatch, credentials, transport):
        monkeypatch.setenv("DYNECT_BASE_URL", "https://dynect.test/REST/")
        client = APIClient(credentials=credentials)
        client.execute("Zone", "GET")
        assert transport.last.full_url == "https://dynect.test/REST/Zone/"

    def test_base_url_argument_wins(self, monkeypatch, credentials):
        monkeypatch.setenv("DYNECT_BASE_URL", "https://env.test/REST")
        client = APIClient(credentials=credentials, base_url="https://arg.test/REST")
        assert client.base_url == "https://arg.test/REST"

    def test_credentials_from_env(self, monkeypatch):
        monkeypatch.setenv("DYNECT_CUSTOMER_NAME", "acme")
        monkeypatch.setenv("DYNECT_USER_NAME", "ops")
        monkeypatch.setenv("DYNECT_PASSWORD", "secret")
        client = APIClient()
        assert client.credentials == Credentials("acme", "ops", "secret")


# =============================================================================
# Session
# =============================================================================


class TestSession:
    def test_login_posts_credentials(self, client, transport):
        transport.reply(LOGIN_OK)
        assert client.login() is True
        assert transport.last.full_url.endswith("/Session/")
        assert transport.last.get_method() == "POST"
        assert transport.body_of() == {"customer_name": "acme", "user_name": "ops", "password": "secret"}

    def test_login_passes_mapping_credentials_through(self, transport):
        client = APIClient(credentials={"customer_name": "acme", "user_name": "ops", "password": "x", "extra": 1})
        transport.reply(LOGIN_OK)
        client.login()
        assert transport.body_of()["extra"] == 1

    def test_token_attached_after_login(self, client, transport):
        transport.reply(LOGIN_OK)
        client.login()
        client.execute("Zone", "GET")
        client.execute("Zone/example.com", "DELETE")
        assert client.token == "T123"
        assert all(req.get_header("Auth-token") == "T123" for req in transport.requests[1:])

    def test_login_failure_leaves_token_unset(self, client, transport):
        transport.reply({"status": "failure", "data": {}, "msgs": [{"ERR_CD": "INVALID_DATA"}]}, status=400)
        assert client.login() is False
        assert client.token is None
        assert not client.is_authenticated

    def test_login_transport_failure(self, client, transport):
        transport.fail(urllib.error.URLError("no route"))
        assert client.login() is False
        assert client.token is None

    def test_login_success_without_token_is_failure(self, client, transport):
        transport.reply({"status": "success", "data": {}})
        assert client.login() is False
        assert client.token is None

    def test_logout(self, client, transport):
        transport.reply(LOGIN_OK)
        client.login()
        transport.reply({"status": "success", "data": {}})
        assert client.logout() is True
        assert transport.last.get_method() == "DELETE"
        assert transport.last.full_url.endswith("/Session/")

    def test_logout_keeps_token(self, client, transport):
        transport.reply(LOGIN_OK)
        client.login()
        client.logout()
        client.execute("Zone", "GET")
        assert client.token == "T123"
        assert transport.last.get_header("Auth-token") == "T123"

    def test_logout_failure(self, client, transport):
        transport.reply({"status": "failure", "data": {}}, status=400)
        assert client.logout() is False


# =============================================================================
# Requests http.client cannot encode
# =============================================================================


class TestUnencodableRequests:
    """These go through the real urlopen; encoding fails before any connection is made."""

    def test_non_ascii_zone_returns_false(self, credentials):
        client = DynectClient(credentials, base_url="http://127.0.0.1:9/REST")
        assert client.zones.get("bücher.de") is False
        assert client.result == ""

    def test_non_ascii_zone_execute_returns_none(self, credentials):
        client = APIClient(credentials=credentials, base_url="http://127.0.0.1:9/REST")
        assert client.execute("Zone/bücher.de", "DELETE") is None

    def test_unencodable_token_returns_none(self, credentials):
        client = APIClient(credentials=credentials, base_url="http://127.0.0.1:9/REST")
        client.token = "tök€n"
        assert client.execute("Zone", "GET") is None


def test_resource_used_verbatim(client, transport):
    client.execute("Zone/", "DELETE")
    assert transport.last.full_url == f"{DEFAULT_BASE_URL}/Zone//"

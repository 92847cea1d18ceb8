import base64

import pytest
from pytest_assume.plugin import assume

from restdispatch.connection import Connection


@pytest.fixture
def connection() -> Connection:
    return Connection(
        endpoint="http://localhost:5820/",
        username="admin",
        password="admin",
        default_headers={"Accept": "application/json"},
    )


@pytest.mark.parametrize(
    'resource, expected',
    [
        ((), "http://localhost:5820"),
        (("/documents", ""), "http://localhost:5820/documents"),
        (("/documents", "/123"), "http://localhost:5820/documents/123"),
        (("/documents", "?limit=5"), "http://localhost:5820/documents?limit=5"),
        (("db", "query"), "http://localhost:5820/db/query"),
        (("", "/123?limit=5"), "http://localhost:5820/123?limit=5"),
    ]
)
def test_request(connection, resource, expected):
    assert connection.request(*resource) == expected


def test_basic_auth_headers(connection):
    headers = connection.headers()
    expected = base64.b64encode(b"admin:admin").decode()
    with assume:
        assert headers["authorization"] == f"Basic {expected}"
        assert headers["ACCEPT"] == "application/json"


def test_token_wins_over_basic():
    connection = Connection(endpoint="http://localhost", username="admin", password="admin", token="t0k3n")
    assert connection.headers()["Authorization"] == "Bearer t0k3n"


def test_no_credentials_no_authorization():
    assert "Authorization" not in Connection(endpoint="http://localhost").headers()


def test_headers_are_fresh_per_call(connection):
    headers = connection.headers()
    headers["Accept"] = "text/turtle"
    assert connection.headers()["Accept"] == "application/json"


def test_from_env(monkeypatch):
    monkeypatch.setenv("RESTDISPATCH_ENDPOINT", "https://example.com/api")
    monkeypatch.setenv("RESTDISPATCH_TOKEN", "secret")
    monkeypatch.delenv("RESTDISPATCH_USERNAME", raising=False)
    monkeypatch.delenv("RESTDISPATCH_PASSWORD", raising=False)

    connection = Connection.from_env()
    with assume:
        assert connection.endpoint == "https://example.com/api"
        assert connection.token == "secret"
        assert connection.username is None


def test_from_env_requires_endpoint(monkeypatch):
    monkeypatch.delenv("CUSTOM_ENDPOINT", raising=False)
    with pytest.raises(KeyError):
        Connection.from_env(prefix="CUSTOM")

"""Unit tests for the pooled httpx clients.

Covers:
- One client per (base_url, purpose, credentials) key.
- Credentials are applied as default headers.
- A closed client is replaced on the next lookup.
- close_all_clients empties the pool.
"""
from __future__ import annotations

from simplechat.base.http import close_all_clients, get_httpx_client

API = "https://api.example.com/v1/"


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_lookup_is_stable_per_key():
    first = get_httpx_client(API, purpose="openai")
    assert get_httpx_client(API, purpose="openai") is first, "same key must reuse the pooled client"


def test_purpose_and_base_url_partition_the_pool():
    base = get_httpx_client(API, purpose="openai")
    assert get_httpx_client(API, purpose="other") is not base  # nosec B101
    assert get_httpx_client("https://api.other.com/v1/", purpose="openai") is not base  # nosec B101


def test_credentials_partition_the_pool_and_become_default_headers():
    alice = get_httpx_client(API, "openai", {"Authorization": "Bearer a"})
    bob = get_httpx_client(API, "openai", {"Authorization": "Bearer b"})
    assert alice is not bob  # nosec B101
    assert alice.headers["Authorization"] == "Bearer a"  # nosec B101
    assert str(alice.base_url) == API  # nosec B101


def test_closed_client_is_recreated():
    stale = get_httpx_client(API, purpose="openai")
    stale.close()
    fresh = get_httpx_client(API, purpose="openai")
    assert fresh is not stale and not fresh.is_closed  # nosec B101


def test_close_all_clients_closes_pooled_instances():
    client = get_httpx_client(API, purpose="openai")
    close_all_clients()
    assert client.is_closed  # nosec B101

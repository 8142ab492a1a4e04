"""Tests for the dashboard view cache."""

from unittest.mock import patch

import pytest

from sidecar.api import view_cache


@pytest.fixture(autouse=True)
def fresh_cache():
    view_cache.invalidate()
    yield
    view_cache.invalidate()


def test_put_and_get_by_user_and_day():
    built_at = view_cache.generation()
    assert view_cache.put_view("u1", "2024-01-01", {"total": 1}, built_at)
    assert view_cache.get_view("u1", "2024-01-01") == {"total": 1}
    assert view_cache.get_view("u1", "2024-01-02") is None
    assert view_cache.get_view("u2", "2024-01-01") is None


def test_invalidate_drops_views():
    view_cache.put_view("u1", "2024-01-01", "view", view_cache.generation())
    view_cache.invalidate()
    assert view_cache.get_view("u1", "2024-01-01") is None


def test_stale_generation_is_not_stored():
    built_at = view_cache.generation()
    view_cache.invalidate()
    assert not view_cache.put_view("u1", "2024-01-01", "old", built_at)
    assert view_cache.get_view("u1", "2024-01-01") is None


def test_expired_views_are_dropped():
    with patch("sidecar.api.view_cache.time.monotonic", return_value=100.0):
        view_cache.put_view("u1", "2024-01-01", "view", view_cache.generation(), ttl=5)
    with patch("sidecar.api.view_cache.time.monotonic", return_value=106.0):
        assert view_cache.get_view("u1", "2024-01-01") is None

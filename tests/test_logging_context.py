"""Tests for logging context propagation."""

import pytest

from internscan.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


def test_empty_context():
    """Test that context starts empty."""
    assert get_log_context() == {}


def test_push_and_pop():
    token = push_log_context(run_id="abc123", company_id="c1")
    assert get_log_context() == {"run_id": "abc123", "company_id": "c1"}

    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_context():
    """Test nested context pushes and pops."""
    token1 = push_log_context(run_id="abc123")
    token2 = push_log_context(company_id="c1")
    assert get_log_context() == {"run_id": "abc123", "company_id": "c1"}

    pop_log_context(token2)
    assert get_log_context() == {"run_id": "abc123"}

    pop_log_context(token1)
    assert get_log_context() == {}


def test_inner_scope_overrides_field():
    with log_context(target_url="https://a.example/careers"):
        with log_context(target_url="https://a.example/jobs"):
            assert get_log_context()["target_url"] == "https://a.example/jobs"
        assert get_log_context()["target_url"] == "https://a.example/careers"


def test_context_manager_restores_on_exception():
    with pytest.raises(RuntimeError):
        with log_context(run_id="abc123"):
            raise RuntimeError("boom")

    assert get_log_context() == {}


def test_get_log_context_returns_copy():
    with log_context(run_id="abc123"):
        snapshot = get_log_context()
        snapshot["run_id"] = "changed"

        assert get_log_context() == {"run_id": "abc123"}


def test_clear_log_context():
    push_log_context(run_id="abc123")

    clear_log_context()

    assert get_log_context() == {}

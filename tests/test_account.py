"""Tests for the account registry."""

import pytest

from splitledger.domain.account import AccountRegistry
from splitledger.domain.errors import ConflictError, NotFoundError


@pytest.fixture
def registry():
    registry = AccountRegistry()
    registry.add_account("AA", "Alice")
    registry.add_account("BB", "Bob")
    return registry


def test_add_account_returns_insertion_index():
    registry = AccountRegistry()
    assert registry.add_account("AA", "Alice") == 0
    assert registry.add_account("BB", "Bob") == 1
    assert len(registry) == 2


def test_accounts_keep_insertion_order(registry):
    registry.add_account("CC", "Carol")
    assert [account.acronym for account in registry] == ["AA", "BB", "CC"]
    assert [account.name for account in registry.list_accounts()] == ["Alice", "Bob", "Carol"]


def test_resolve_is_stable(registry):
    """Test that repeated lookups return the same index."""
    first = registry.resolve("BB")
    registry.add_account("CC", "Carol")
    assert registry.resolve("BB") == first == 1
    assert registry[first].name == "Bob"
    assert registry.get_account(first).name == "Bob"


def test_resolve_unknown_acronym(registry):
    with pytest.raises(NotFoundError, match="Account 'ZZ' not found"):
        registry.resolve("ZZ")


def test_find_index_unknown_returns_none(registry):
    assert registry.find_index("ZZ") is None


def test_duplicate_acronym_is_rejected(registry):
    """Test that an acronym cannot be declared twice."""
    with pytest.raises(ConflictError, match="already exists"):
        registry.add_account("AA", "Another Alice")
    assert len(registry) == 2
    assert registry[0].name == "Alice"


def test_contains(registry):
    assert "AA" in registry
    assert "ZZ" not in registry


def test_list_accounts_is_a_copy(registry):
    registry.list_accounts().clear()
    assert len(registry) == 2


def test_frozen_registry_rejects_new_accounts(registry):
    registry.freeze()

    with pytest.raises(ConflictError, match="read-only"):
        registry.add_account("CC", "Carol")
    assert registry.frozen
    assert len(registry) == 2
    assert registry.resolve("BB") == 1

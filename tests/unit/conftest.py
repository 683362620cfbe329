"""Pytest configuration and fixtures for unit tests."""

import pytest

from tests.unit.mocks import InMemoryRecordStore


@pytest.fixture
def in_memory_store() -> InMemoryRecordStore:
    """Provides a fresh InMemoryRecordStore for each test."""
    return InMemoryRecordStore()

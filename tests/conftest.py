"""Shared fixtures for route resolution tests."""

import pytest

from tests.fakes import FakeTimetableGateway


@pytest.fixture
def gateway() -> FakeTimetableGateway:
    """Create an empty fake gateway."""
    return FakeTimetableGateway()

"""
Shared test fixtures.

Collaborators of the advisor (row store, text generator, clock) are
replaced with mocks; nothing here talks to Supabase or Anthropic.
"""

import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from datetime import datetime

from tests.factories import InventoryRowFactory


# ===================
# CLOCK
# ===================

@pytest.fixture
def fixed_now() -> datetime:
    """Reference time for every freshness calculation in a test."""
    return datetime(2025, 1, 1, 0, 0, 0)


# ===================
# COLLABORATORS
# ===================

@pytest.fixture
def row_store() -> MagicMock:
    """
    Mock row store.

    Usage:
        def test_something(row_store):
            row_store.read_all_rows.return_value = [{"name": "Milk"}]
    """
    store = MagicMock()
    store.read_all_rows.return_value = []
    return store


@pytest.fixture
def generator() -> MagicMock:
    """
    Mock text generator, configured by default.

    Usage:
        def test_something(generator):
            generator.generate.return_value = "text"
            generator.configured = False
    """
    gen = MagicMock()
    gen.configured = True
    gen.generate = AsyncMock(return_value="")
    return gen


@pytest.fixture
def advisory_service(row_store, generator, fixed_now):
    """AdvisoryService wired to the mocks above."""
    from services.advisory_service import AdvisoryService

    return AdvisoryService(
        row_store=row_store,
        generator=generator,
        clock=lambda: fixed_now,
        generation_timeout=5,
        language="English"
    )


@pytest.fixture
def sample_rows() -> list:
    """Two items: one urgent by quantity, one comfortably stocked."""
    InventoryRowFactory.reset_counter()
    return [
        InventoryRowFactory.create(name="Milk", remaining="20", price="3.5", averageDays="2"),
        InventoryRowFactory.create(name="Eggs", remaining="80", price="6", averageDays="5"),
    ]


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_services(advisory_service):
    """
    Create FastAPI test client with the advisor and store mocked.

    Usage:
        def test_endpoint(test_client_with_services, row_store):
            row_store.read_all_rows.return_value = [...]
            response = test_client_with_services.post("/api/ask-ai", json={...})
    """
    from fastapi.testclient import TestClient
    from main import app

    with patch("routes.advisor.get_advisory_service", return_value=advisory_service):
        yield TestClient(app)

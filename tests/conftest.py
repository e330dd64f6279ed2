"""Shared pytest fixtures for all tests."""

import logging

import pytest

from cancellation import CancellationToken
from config import Config
from logger import LOGGER_NAME
from models.category import Category
from services.base import Services
from tests.helpers import FakeLedger


@pytest.fixture(autouse=True)
def propagate_logs():
    """Let caplog see the application logger even after setup_logging ran."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = True
    yield


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration with dummy credentials.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "categorizer",
        log_level="DEBUG",
        log_dir=tmp_path / "categorizer" / "logs",
        ledger_base_url="https://ledger.test/v1",
        ledger_token="lm-test-token",
        ledger_page_size=500,
        llm_provider="openai",
        llm_model="gpt-4.1-mini",
        llm_api_key="sk-test",
    )


@pytest.fixture
def categories():
    """Active categories in ledger order."""
    return [
        Category(id=1, name="Groceries", description="Supermarkets and food stores"),
        Category(id=2, name="Gas, Transportation"),
        Category(id=3, name="Restaurants", description="  "),
        Category(id=4, name="Salary"),
    ]


@pytest.fixture
def category_rows():
    """Raw ledger category payloads, including ones that must be filtered out."""
    return [
        {"id": 1, "name": "Groceries", "description": "Supermarkets", "archived": False, "is_group": False},
        {"id": 2, "name": "Gas, Transportation", "archived": False, "is_group": False},
        {"id": 3, "name": "Old Stuff", "archived": True, "is_group": False},
        {"id": 4, "name": "Food & Drink", "archived": False, "is_group": True},
        {"id": 5, "name": "Restaurants", "archived": False, "is_group": False, "group_id": 4},
    ]


@pytest.fixture
def transaction_rows():
    """Raw ledger transaction payloads; three are eligible."""
    return [
        {"id": 101, "date": "2024-03-01", "payee": "Trader Joe's", "amount": "54.20", "currency": "usd", "category_id": None},
        {"id": 102, "date": "2024-03-02", "payee": "Shell", "amount": "40.00", "currency": "usd", "category_id": None},
        {"id": 103, "date": "2024-03-03", "payee": "Chipotle", "amount": "12.75", "currency": "usd", "category_id": None},
        {"id": 104, "date": "2024-03-03", "payee": "Already Done", "amount": "9.99", "category_id": 1},
        {"id": 105, "date": "2024-03-04", "payee": "Split Parent", "amount": "30.00", "category_id": None, "is_group": True},
    ]


@pytest.fixture
def ledger(category_rows, transaction_rows):
    """Fake ledger API backed by in-memory rows."""
    return FakeLedger(category_rows, transaction_rows)


@pytest.fixture
def services(test_config, ledger):
    """Create a Services container talking to the fake ledger.

    Args:
        test_config: Test configuration fixture.
        ledger: Fake ledger fixture.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, http_client=ledger.client())


@pytest.fixture
def token():
    return CancellationToken()

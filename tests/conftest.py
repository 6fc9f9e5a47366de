"""Shared fixtures for the internscan test suite."""

import pytest

from internscan.config.models import AppConfig
from internscan.logging.context import clear_log_context
from internscan.persistence import close_database, get_session, init_database
from internscan.persistence.schema import CareerPageModel, CompanyModel


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Pin the optional environment variables to known values."""
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("ENVIRONMENT", "test")


@pytest.fixture
def test_database():
    """In-memory database shared by every session in the test."""
    init_database("sqlite:///:memory:")
    yield
    close_database()


@pytest.fixture
def seed_company(test_database):
    """Insert a company (and optional career pages) directly through the ORM."""

    def _seed(company_id, name, website=None, career_pages=()):
        with get_session() as session:
            session.add(CompanyModel(id=company_id, name=name, website=website))
            for url in career_pages:
                session.add(CareerPageModel(company_id=company_id, url=url))

    return _seed


@pytest.fixture
def app_config():
    """Configuration with enrichment off so no test reaches the network."""
    return AppConfig.model_validate(
        {
            "geographies": ["Toronto", "Remote"],
            "enrichment": {"enabled": False},
        }
    )

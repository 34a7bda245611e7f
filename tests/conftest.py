"""
pytest configuration and fixtures for Daily Quote Quiz tests
"""

import pytest
import sys
from pathlib import Path
from datetime import date

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fastapi.testclient import TestClient

from api.app import create_app
from quiz_manager import QuizManager
from store import LockRegistry, QuoteCatalog, SubmissionStore
from utils.config_manager import QuizConfig, DEFAULT_QUOTES
from utils.date_utils import FixedDayClock
from tests.factories import SequentialIdFactory

TODAY_QUOTE_ID = "2025-09-08"


@pytest.fixture
def clock():
    """Fixed clock starting on the quote's own day"""
    return FixedDayClock(date(2025, 9, 8))


@pytest.fixture
def quiz_config():
    """Quiz configuration with the built-in quote and a second one"""
    return QuizConfig(
        timezone=None,
        today_quote_id=TODAY_QUOTE_ID,
        quotes=[dict(q) for q in DEFAULT_QUOTES] + [{
            "id": "2025-09-09",
            "template": "(A)은 (B)의 어머니다.",
            "author": "토머스 에디슨",
            "answerA": "실패",
            "answerB": "성공",
        }],
    )


@pytest.fixture
def id_factory():
    """Predictable submission ids: s0001, s0002, ..."""
    return SequentialIdFactory()


@pytest.fixture
def quiz_manager(quiz_config, clock, id_factory):
    """Fresh quiz manager per test"""
    return QuizManager.from_config(quiz_config, clock=clock, id_factory=id_factory)


@pytest.fixture
def lock_registry():
    return LockRegistry()


@pytest.fixture
def submission_store(id_factory):
    return SubmissionStore(id_factory=id_factory)


@pytest.fixture
def catalog(quiz_config):
    return QuoteCatalog.from_config(quiz_config.quotes)


@pytest.fixture
def app(quiz_manager):
    """FastAPI app bound to the per-test quiz manager"""
    return create_app(quiz_manager=quiz_manager)


@pytest.fixture
def client(app):
    """Create test client"""
    return TestClient(app)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )

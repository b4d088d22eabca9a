"""Pytest configuration and fixtures."""

import pytest

from shortener.core.code_generator import CodeGenerator
from shortener.db.memory_store import InMemoryUrlDatastore
from shortener.services.url_service import URLShorteningService


@pytest.fixture
def code_generator():
    """Generator with the default alphabet and length."""
    return CodeGenerator()


@pytest.fixture
def datastore(code_generator):
    """Empty in-memory datastore."""
    return InMemoryUrlDatastore(code_generator=code_generator)


@pytest.fixture
def url_service(datastore):
    """Service layer over the in-memory datastore."""
    return URLShorteningService(datastore)


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]

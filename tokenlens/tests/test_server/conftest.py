"""Test fixtures for server tests.

Builds the app with a fixed config and a small known dataset so the
endpoint tests run without touching ~/.tokenlens.
"""

import copy
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tokenlens.config.loader import DEFAULT_CONFIG
from tokenlens.etl.parser import parse_csv_file
from tokenlens.server.app import create_app

FIXTURES = Path(__file__).parent.parent / "test_fixtures"


@pytest.fixture
def sample_csv_bytes():
    """Raw bytes of the sample export."""
    return (FIXTURES / "usage_sample.csv").read_bytes()


@pytest.fixture
def test_config():
    """Default config with a small upload limit."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["server"]["max_upload_mb"] = 1
    return config


@pytest.fixture
def app(test_config):
    """App with no data loaded."""
    return create_app(config=test_config)


@pytest_asyncio.fixture
async def client(app):
    """Async client against an app with the sample dataset loaded."""
    app.state.records = parse_csv_file(FIXTURES / "usage_sample.csv")
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def empty_client(app):
    """Async client against an app with no data."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

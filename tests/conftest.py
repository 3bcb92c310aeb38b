"""Pytest configuration and fixtures."""
import pytest
from aiohttp.test_utils import TestClient, TestServer

from apps.plan_service.main import create_app
from apps.plan_service.schemas import PlanRequest
from apps.plan_service.services.planner import plan


@pytest.fixture
def plan_text():
    """Plan a piece of merchant text through the pure planner."""
    def _plan(text: str, locale: str = None):
        return plan(PlanRequest(text=text, locale=locale))
    return _plan


@pytest.fixture
async def client():
    """Create aiohttp test client for the plan service."""
    async with TestClient(TestServer(create_app())) as test_client:
        yield test_client

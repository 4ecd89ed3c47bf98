"""
Pytest configuration and shared fixtures.
"""

import asyncio

import pytest

from mountflow.catalog.backend_catalog import BackendCatalog
from mountflow.core.in_memory_adapter import InMemoryAdapter
from mountflow.core.resource_store import ResourceStore
from mountflow.dependencies import get_settings, reset_singletons
from mountflow.services.notifications.flash_messages import FlashMessageService
from mountflow.services.wizard.tutorial_wizard import TutorialWizard


@pytest.fixture(autouse=True)
def clean_singletons():
    """Reset singletons before and after each test."""
    reset_singletons()
    get_settings.cache_clear()
    yield
    reset_singletons()
    get_settings.cache_clear()


class GatedAdapter(InMemoryAdapter):
    """Holds every save until ``release`` is set."""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()
        self.save_calls = 0

    async def save_record(self, record):
        self.save_calls += 1
        await self.release.wait()
        return await super().save_record(record)


@pytest.fixture
def adapter():
    return InMemoryAdapter()


@pytest.fixture
def store(adapter):
    return ResourceStore(adapter)


@pytest.fixture
def wizard():
    return TutorialWizard(feature="authentication")


@pytest.fixture
def flash_messages():
    return FlashMessageService(max_notifications=10)


@pytest.fixture
def catalog():
    return BackendCatalog()


@pytest.fixture
def gated_adapter():
    return GatedAdapter()


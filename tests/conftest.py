"""
Shared fixtures for the test suite.

Every remote Gemini call is replaced by a mock; no test reaches the network.
"""

import pytest

from photo_studio.agents.product_photo_agent.agent.schemas import ImageAsset
from photo_studio.agents.product_photo_agent.services.product_photo_agent_service import ProductPhotoAgentService
from photo_studio.agents.product_photo_agent.services.studio_session import StudioSession
from tests.utils.mock_utils import make_mock_agent, make_png_bytes


@pytest.fixture
def png_bytes():
    return make_png_bytes()


@pytest.fixture
def product_image(png_bytes):
    return ImageAsset.from_upload(png_bytes, "image/png")


@pytest.fixture
def style_image():
    return ImageAsset.from_upload(make_png_bytes(color=(20, 120, 200)), "image/png")


@pytest.fixture
def mock_agent():
    return make_mock_agent()


@pytest.fixture
def service(mock_agent):
    return ProductPhotoAgentService(mock_agent)


@pytest.fixture
def session(service):
    studio_session = StudioSession(service)
    yield studio_session
    studio_session.close()

"""
Studio session unit tests
"""

import asyncio

import pytest

from photo_studio.agents.product_photo_agent.agent.exceptions import ConfigurationError, InvalidInputError, \
    NoImageProducedError, SessionBusyError, TransportError
from photo_studio.agents.product_photo_agent.agent.schemas import StyleParameters
from photo_studio.agents.product_photo_agent.services.studio_session import PreviewRegistry, StudioSession
from photo_studio.enums.product_photo import AspectRatio, SessionState
from tests.utils.mock_utils import make_image_response, make_text_response


@pytest.mark.unit
class TestPreviewRegistry:

    def test_acquire_and_release(self, product_image):
        registry = PreviewRegistry()
        handle = registry.acquire(product_image)

        assert handle in registry
        assert registry.get(handle) is product_image

        registry.release(handle)
        assert handle not in registry
        assert registry.get(handle) is None

    def test_release_unknown_handle_is_noop(self):
        registry = PreviewRegistry()
        registry.release("missing")
        registry.release(None)
        assert len(registry) == 0

    def test_handles_are_unique(self, product_image):
        registry = PreviewRegistry()
        assert registry.acquire(product_image) != registry.acquire(product_image)
        assert len(registry) == 2


@pytest.mark.unit
class TestImageSlots:

    def test_replacing_product_image_releases_previous_preview(self, session, product_image, style_image):
        first = session.set_product_image(product_image)
        second = session.set_product_image(style_image)

        assert first not in session.previews
        assert second in session.previews
        assert session.product_image is style_image
        assert len(session.previews) == 1

    def test_clearing_style_image_releases_preview(self, session, style_image):
        handle = session.set_style_image(style_image)

        session.clear_style_image()

        assert handle not in session.previews
        assert session.style_image is None
        assert session.style_preview_id is None

    @pytest.mark.asyncio
    async def test_clearing_style_image_keeps_result_and_product(self, session, product_image, style_image):
        session.set_product_image(product_image)
        session.set_style_image(style_image)
        await session.submit()

        session.clear_style_image()

        assert session.state == SessionState.SUCCEEDED
        assert session.result is not None
        assert session.product_image is product_image

    def test_close_releases_every_preview(self, session, product_image, style_image):
        session.set_product_image(product_image)
        session.set_style_image(style_image)

        session.close()

        assert len(session.previews) == 0
        assert session.product_preview_id is None
        assert session.style_preview_id is None

    def test_context_manager_closes(self, service, product_image):
        with StudioSession(service) as studio_session:
            studio_session.set_product_image(product_image)
            assert len(studio_session.previews) == 1
        assert len(studio_session.previews) == 0


@pytest.mark.unit
class TestSubmit:

    @pytest.mark.asyncio
    async def test_success(self, session, mock_agent, product_image):
        session.set_product_image(product_image)

        params = StyleParameters(aspect_ratio=AspectRatio.VERTICAL)
        result = await session.submit(keywords="bright", style_parameters=params)

        assert session.state == SessionState.SUCCEEDED
        assert session.result is result
        assert session.error is None
        assert session.keywords == "bright"
        assert session.style_parameters.aspect_ratio == AspectRatio.VERTICAL
        assert result.data_uri == "data:image/png;base64,AAAA"
        mock_agent.expand_keywords.assert_awaited_once_with("bright")

    @pytest.mark.asyncio
    async def test_missing_product_image_returns_to_idle(self, session, mock_agent):
        with pytest.raises(InvalidInputError):
            await session.submit()

        assert session.state == SessionState.IDLE
        assert session.error == "Please upload a product image."
        mock_agent.generate_image.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        TransportError("503 UNAVAILABLE"),
        ConfigurationError("GEMINI_API_KEY environment variable not set"),
    ])
    async def test_remote_failure_is_recorded(self, session, mock_agent, product_image, error):
        session.set_product_image(product_image)
        mock_agent.generate_image.side_effect = error

        with pytest.raises(type(error)):
            await session.submit()

        assert session.state == SessionState.FAILED
        assert session.error == error.message
        assert session.result is None

    @pytest.mark.asyncio
    async def test_no_image_is_recorded(self, session, mock_agent, product_image):
        session.set_product_image(product_image)
        mock_agent.generate_image.return_value = make_text_response("Refused.")

        with pytest.raises(NoImageProducedError):
            await session.submit()

        assert session.state == SessionState.FAILED
        assert session.error == NoImageProducedError.DEFAULT_MESSAGE

    @pytest.mark.asyncio
    async def test_new_submission_clears_previous_outcome(self, session, mock_agent, product_image):
        session.set_product_image(product_image)
        mock_agent.generate_image.side_effect = TransportError("boom")
        with pytest.raises(TransportError):
            await session.submit()

        mock_agent.generate_image.side_effect = None
        mock_agent.generate_image.return_value = make_image_response(mime_type="image/jpeg")
        result = await session.submit()

        assert session.state == SessionState.SUCCEEDED
        assert session.error is None
        assert result.mime_type == "image/jpeg"

    @pytest.mark.asyncio
    async def test_second_submission_while_running_is_rejected(self, session, mock_agent, product_image):
        session.set_product_image(product_image)
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_generate(*args, **kwargs):
            started.set()
            await release.wait()
            return make_image_response()

        mock_agent.generate_image.side_effect = slow_generate

        first = asyncio.create_task(session.submit())
        await started.wait()
        assert session.state == SessionState.RUNNING

        with pytest.raises(SessionBusyError):
            await session.submit()
        with pytest.raises(SessionBusyError):
            session.reset()

        release.set()
        await first
        assert session.state == SessionState.SUCCEEDED
        assert mock_agent.generate_image.await_count == 1

    @pytest.mark.asyncio
    async def test_reset(self, session, product_image, style_image):
        session.set_product_image(product_image)
        session.set_style_image(style_image)
        await session.submit(keywords="bright")

        session.reset()

        assert session.state == SessionState.IDLE
        assert session.product_image is None
        assert session.style_image is None
        assert session.keywords == ""
        assert session.result is None
        assert len(session.previews) == 0

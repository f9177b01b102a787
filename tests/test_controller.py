"""Unit tests for FittingController - validation, state transitions and saving."""

import asyncio

import pytest

from ai_fitting.controller import FittingController
from ai_fitting.errors import GenerationFailedError
from ai_fitting.messages import get_message
from ai_fitting.models import Failed, Idle, Succeeded
from ai_fitting.ui import render_result_panel


@pytest.fixture
def controller(fake_service):
    return FittingController(fake_service, locale="en", clock=lambda: 1700000000.5)


class TestTryOnValidation:
    """The service is never called without a person and a garment."""

    @pytest.mark.asyncio
    async def test_no_person(self, controller, fake_service, top_image):
        controller.select_top(top_image)

        state = await controller.try_on()

        assert fake_service.calls == []
        assert state.error == get_message("missing_person", "en")

    @pytest.mark.asyncio
    async def test_no_garment(self, controller, fake_service, person_image):
        controller.select_person(person_image)

        state = await controller.try_on()

        assert fake_service.calls == []
        assert state.error == get_message("missing_garment", "en")

    @pytest.mark.asyncio
    async def test_nothing_selected(self, controller, fake_service):
        state = await controller.try_on()

        assert fake_service.calls == []
        assert isinstance(state.operation, Failed)


class TestTryOn:
    """Tests for the loading / result / error cycle."""

    @pytest.mark.asyncio
    async def test_top_only(self, controller, fake_service, person_image, top_image):
        controller.select_person(person_image)
        controller.select_top(top_image)

        await controller.try_on()

        assert fake_service.calls == [(person_image, top_image, None)]

    @pytest.mark.asyncio
    async def test_both_garments(self, controller, fake_service, person_image, top_image, bottom_image):
        controller.select_person(person_image)
        controller.select_top(top_image)
        controller.select_bottom(bottom_image)

        await controller.try_on()

        assert fake_service.calls == [(person_image, top_image, bottom_image)]

    @pytest.mark.asyncio
    async def test_result_renders_as_data_url(self, controller, person_image, top_image):
        controller.select_person(person_image)
        controller.select_top(top_image)

        state = await controller.try_on()

        assert render_result_panel(state).image_src == "data:image/png;base64,Zm9v"

    @pytest.mark.asyncio
    async def test_success_clears_prior_error(self, controller, person_image, top_image):
        await controller.try_on()
        assert controller.state.error is not None

        controller.select_person(person_image)
        controller.select_top(top_image)
        state = await controller.try_on()

        assert state.error is None
        assert isinstance(state.operation, Succeeded)
        assert state.result.image_base64 == "Zm9v"

    @pytest.mark.asyncio
    async def test_rejection_clears_prior_result(self, controller, fake_service, person_image, top_image):
        controller.select_person(person_image)
        controller.select_top(top_image)
        await controller.try_on()
        assert controller.state.result is not None

        fake_service.error = GenerationFailedError("generation failed")
        state = await controller.try_on()

        assert state.result is None
        assert state.error == "generation failed"
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_rejection_without_message_uses_fallback(self, controller, fake_service, person_image, top_image):
        controller.select_person(person_image)
        controller.select_top(top_image)
        fake_service.error = RuntimeError()

        state = await controller.try_on()

        assert state.error == get_message("unknown_error", "en")

    @pytest.mark.asyncio
    async def test_loading_clears_stale_result(self, controller, fake_service, person_image, top_image):
        controller.select_person(person_image)
        controller.select_top(top_image)
        await controller.try_on()

        seen = []

        async def record_state():
            seen.append(controller.state)

        fake_service.on_call = record_state
        await controller.try_on()

        assert seen[0].is_loading
        assert seen[0].result is None
        assert seen[0].error is None

    @pytest.mark.asyncio
    async def test_overlapping_request_is_rejected(self, controller, fake_service, person_image, top_image):
        controller.select_person(person_image)
        controller.select_top(top_image)

        release = asyncio.Event()

        async def wait_for_release():
            await release.wait()

        fake_service.on_call = wait_for_release
        first = asyncio.create_task(controller.try_on())
        while not fake_service.calls:
            await asyncio.sleep(0)

        second = await controller.try_on()
        assert second.is_loading

        release.set()
        final = await first

        assert len(fake_service.calls) == 1
        assert final.result.image_base64 == "Zm9v"

    @pytest.mark.asyncio
    async def test_cancelled_request_does_not_block_the_next(self, controller, fake_service, person_image, top_image):
        controller.select_person(person_image)
        controller.select_top(top_image)

        async def hang():
            await asyncio.Event().wait()

        fake_service.on_call = hang
        task = asyncio.create_task(controller.try_on())
        while not fake_service.calls:
            await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.state.is_loading is False
        assert isinstance(controller.state.operation, Idle)
        assert controller.state.person == person_image

        fake_service.on_call = None
        state = await controller.try_on()

        assert len(fake_service.calls) == 2
        assert state.result.image_base64 == "Zm9v"


class TestSave:

    def test_no_result_no_download(self, controller):
        assert controller.save() is None

    @pytest.mark.asyncio
    async def test_download_named_by_timestamp(self, controller, person_image, top_image):
        controller.select_person(person_image)
        controller.select_top(top_image)
        await controller.try_on()
        before = controller.state

        download = controller.save()

        assert download.filename == "ai-fitting-1700000000500.png"
        assert download.data == b"foo"
        assert download.media_type == "image/png"
        assert controller.state == before

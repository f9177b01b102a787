"""Application controller: owns the state snapshot and runs fittings."""

import asyncio
import logging
import time
from typing import Callable, Protocol

from .errors import FittingError, MissingGarmentImageError, MissingPersonImageError
from .messages import get_message
from .models import (
    Download,
    FittingState,
    ImageSelection,
    Slot,
    complete,
    fail,
    reset,
    select_image,
    start_loading,
)

logger = logging.getLogger(__name__)


class GenerationService(Protocol):
    async def generate(
        self,
        person: ImageSelection,
        top: ImageSelection | None,
        bottom: ImageSelection | None,
    ) -> str: ...


class FittingController:
    """Holds the three selections and the operation state.

    Flow of ``try_on``:
    1. Validate that a person and at least one garment are selected
    2. Enter loading (clears the previous error or result)
    3. Await the generation service
    4. Store the result, or the failure message
    """

    def __init__(
        self,
        service: GenerationService,
        locale: str = "ko",
        clock: Callable[[], float] = time.time,
    ):
        self.service = service
        self.locale = locale
        self._clock = clock
        self.state = FittingState()

    def select(self, slot: Slot, selection: ImageSelection | None) -> FittingState:
        self.state = select_image(self.state, slot, selection)
        return self.state

    def select_person(self, selection: ImageSelection | None) -> FittingState:
        return self.select(Slot.PERSON, selection)

    def select_top(self, selection: ImageSelection | None) -> FittingState:
        return self.select(Slot.TOP, selection)

    def select_bottom(self, selection: ImageSelection | None) -> FittingState:
        return self.select(Slot.BOTTOM, selection)

    def validate(self) -> None:
        """Raise if the current selections cannot be fitted."""
        if self.state.person is None:
            raise MissingPersonImageError(get_message("missing_person", self.locale))
        if not self.state.has_garment:
            raise MissingGarmentImageError(get_message("missing_garment", self.locale))

    def reject_input(self, error: FittingError) -> FittingState:
        """Show an input problem found outside ``try_on``, such as an unsupported upload."""
        self.state = fail(self.state, str(error))
        return self.state

    async def try_on(self) -> FittingState:
        """Run one fitting and return the resulting snapshot."""
        if self.state.is_loading:
            # Overlapping requests are rejected, the in-flight one keeps going
            logger.warning("Fitting already in progress, ignoring request")
            return self.state

        try:
            self.validate()
        except FittingError as e:
            self.state = fail(self.state, str(e))
            return self.state

        snapshot = self.state
        self.state = start_loading(snapshot)

        try:
            image_base64 = await self.service.generate(snapshot.person, snapshot.top, snapshot.bottom)
        except asyncio.CancelledError:
            # A cancelled request leaves no result and no longer counts as in flight
            logger.warning("Fitting cancelled")
            self.state = reset(self.state)
            raise
        except Exception as e:
            if not isinstance(e, FittingError):
                logger.exception("Fitting failed")
            message = str(e) or get_message("unknown_error", self.locale)
            self.state = fail(self.state, message)
        else:
            self.state = complete(self.state, image_base64)

        return self.state

    def save(self) -> Download | None:
        """Prepare a download of the current result, if there is one."""
        result = self.state.result
        if result is None:
            return None

        timestamp_ms = int(self._clock() * 1000)
        return Download(
            filename=f"ai-fitting-{timestamp_ms}.png",
            data=result.image_bytes,
        )

"""Operation state and the immutable state snapshot.

Every transition below is a plain function that takes a snapshot and returns a
new one. Nothing mutates a ``FittingState`` in place.
"""

import base64
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .image import ImageSelection, Slot


class Idle(BaseModel):
    kind: Literal["idle"] = "idle"

    model_config = ConfigDict(frozen=True)


class Loading(BaseModel):
    kind: Literal["loading"] = "loading"

    model_config = ConfigDict(frozen=True)


class Failed(BaseModel):
    kind: Literal["error"] = "error"
    message: str

    model_config = ConfigDict(frozen=True)


class Succeeded(BaseModel):
    kind: Literal["result"] = "result"
    image_base64: str

    model_config = ConfigDict(frozen=True)

    @property
    def data_url(self) -> str:
        return f"data:image/png;base64,{self.image_base64}"

    @property
    def image_bytes(self) -> bytes:
        return base64.b64decode(self.image_base64)


OperationState = Annotated[Idle | Loading | Failed | Succeeded, Field(discriminator="kind")]


class FittingState(BaseModel):
    """Snapshot of the three selections and the current operation."""

    person: ImageSelection | None = None
    top: ImageSelection | None = None
    bottom: ImageSelection | None = None
    operation: OperationState = Field(default_factory=Idle)

    model_config = ConfigDict(frozen=True)

    def selection(self, slot: Slot) -> ImageSelection | None:
        return getattr(self, slot.value)

    @property
    def has_garment(self) -> bool:
        return self.top is not None or self.bottom is not None

    @property
    def is_loading(self) -> bool:
        return isinstance(self.operation, Loading)

    @property
    def error(self) -> str | None:
        return self.operation.message if isinstance(self.operation, Failed) else None

    @property
    def result(self) -> Succeeded | None:
        return self.operation if isinstance(self.operation, Succeeded) else None

    @property
    def can_try_on(self) -> bool:
        return self.person is not None and self.has_garment and not self.is_loading


def select_image(state: FittingState, slot: Slot, selection: ImageSelection | None) -> FittingState:
    """Replace one slot's selection. The operation state is left alone."""
    return state.model_copy(update={slot.value: selection})


def start_loading(state: FittingState) -> FittingState:
    """Enter loading. Any previous error or result is dropped."""
    return state.model_copy(update={"operation": Loading()})


def complete(state: FittingState, image_base64: str) -> FittingState:
    return state.model_copy(update={"operation": Succeeded(image_base64=image_base64)})


def fail(state: FittingState, message: str) -> FittingState:
    return state.model_copy(update={"operation": Failed(message=message)})


def reset(state: FittingState) -> FittingState:
    """Back to idle, keeping the selections."""
    return state.model_copy(update={"operation": Idle()})

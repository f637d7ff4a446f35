# File: revisualise_bot/dto/generation.py
from typing import Literal

from pydantic import BaseModel, ConfigDict

from revisualise_bot.data.constants import (
    GenerationErrorKind,
    ImageRole,
    Phase,
)


class ImageInput(BaseModel):
    """An encoded image (data URI) tagged with the role it plays."""
    model_config = ConfigDict(frozen=True)

    role: ImageRole
    data_uri: str


class GenerationRequest(BaseModel):
    """Exactly one child and one adult image, built only at submit time."""
    model_config = ConfigDict(frozen=True)

    child: ImageInput
    adult: ImageInput


class GenerationSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    image_ref: str


class GenerationError(BaseModel):
    """
    A typed failure from the generation boundary.

    `message` is meant for direct display; it may be None when the failure
    carries nothing useful, in which case callers show a generic text.
    """
    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    kind: GenerationErrorKind
    message: str | None = None


GenerationOutcome = GenerationSuccess | GenerationError


class SessionState(BaseModel):
    """
    Read-only view of one user session.

    Instances are never mutated; the session controller swaps in a new copy
    on every transition.
    """
    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.IDLE
    child_image: ImageInput | None = None
    adult_image: ImageInput | None = None
    output_image: str | None = None
    error_message: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.child_image is not None and self.adult_image is not None

    def image_for(self, role: ImageRole) -> ImageInput | None:
        return self.child_image if role is ImageRole.CHILD else self.adult_image


class DownloadableImage(BaseModel):
    """The output image prepared for a client-side file save."""
    model_config = ConfigDict(frozen=True)

    filename: str
    content_type: str
    data: bytes

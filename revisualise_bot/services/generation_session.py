# File: revisualise_bot/services/generation_session.py
from collections.abc import Awaitable, Callable

import structlog

from revisualise_bot.data.constants import (
    DOWNLOAD_FILENAME,
    GENERIC_ERROR_MESSAGE,
    GenerationErrorKind,
    ImageRole,
    Phase,
)
from revisualise_bot.dto.generation import (
    DownloadableImage,
    GenerationError,
    GenerationOutcome,
    GenerationRequest,
    GenerationSuccess,
    ImageInput,
    SessionState,
)
from revisualise_bot.services.generation_client import GenerateFunc
from revisualise_bot.services.utils import parse_data_uri, to_png

logger = structlog.get_logger(__name__)

StateListener = Callable[[SessionState], Awaitable[None]]


def _display_message(message: str | None) -> str:
    if message is None or not message.strip():
        return GENERIC_ERROR_MESSAGE
    return message


class GenerationSession:
    """
    Owns the SessionState of one user session and the only transitions allowed on it.

    IDLE/ERROR --submit--> GENERATING --> SUCCESS | ERROR
    IDLE/SUCCESS/ERROR --reset--> IDLE

    Image selection is independent of the phase. Listeners receive the new
    state after every change and cannot alter it.
    """

    def __init__(
        self,
        generate: GenerateFunc,
        log: structlog.typing.FilteringBoundLogger | None = None,
    ) -> None:
        self._generate = generate
        self._state = SessionState()
        self._listeners: list[StateListener] = []
        self.log = log or logger

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def can_submit(self) -> bool:
        return self._state.is_ready and self._state.phase in (Phase.IDLE, Phase.ERROR)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Registers a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def _transition(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                await listener(self._state)
            except Exception:
                self.log.exception("Session listener failed", phase=self._state.phase.value)

    async def set_image(self, role: ImageRole, data_uri: str) -> None:
        """Replaces the image for one role. Never changes the phase."""
        role = ImageRole(role)
        image = ImageInput(role=role, data_uri=data_uri)
        field = "child_image" if role is ImageRole.CHILD else "adult_image"
        self.log.debug("Image selected", role=role.value, phase=self._state.phase.value)
        await self._transition(**{field: image})

    async def set_child_image(self, data_uri: str) -> None:
        await self.set_image(ImageRole.CHILD, data_uri)

    async def set_adult_image(self, data_uri: str) -> None:
        await self.set_image(ImageRole.ADULT, data_uri)

    async def submit(self) -> GenerationOutcome | None:
        """
        Runs one generation if the guard holds.

        Returns the outcome, or None when nothing was started (an image is
        missing or a generation is already in flight).
        """
        if not self.can_submit:
            self.log.debug(
                "Submit ignored",
                reason=GenerationErrorKind.PRECONDITION_NOT_MET.value,
                phase=self._state.phase.value,
                ready=self._state.is_ready,
            )
            return None

        request = GenerationRequest(child=self._state.child_image, adult=self._state.adult_image)
        await self._transition(phase=Phase.GENERATING, error_message=None, output_image=None)
        self.log.info("Generation started")

        try:
            outcome = await self._generate(request.child.data_uri, request.adult.data_uri)
        except Exception:
            self.log.exception("Generation client raised instead of returning an outcome")
            outcome = GenerationError(kind=GenerationErrorKind.UNKNOWN)

        if isinstance(outcome, GenerationSuccess):
            self.log.info("Generation succeeded")
            await self._transition(phase=Phase.SUCCESS, output_image=outcome.image_ref, error_message=None)
        elif isinstance(outcome, GenerationError):
            self.log.warning("Generation failed", kind=outcome.kind.value)
            await self._transition(
                phase=Phase.ERROR, output_image=None, error_message=_display_message(outcome.message)
            )
        else:
            self.log.error("Generation client returned an unexpected value", value_type=type(outcome).__name__)
            outcome = GenerationError(kind=GenerationErrorKind.UNKNOWN)
            await self._transition(phase=Phase.ERROR, output_image=None, error_message=GENERIC_ERROR_MESSAGE)

        return outcome

    async def reset(self) -> bool:
        """Returns to IDLE keeping both images. Ignored while a generation is in flight."""
        if self._state.phase is Phase.GENERATING:
            self.log.debug("Reset ignored while generating")
            return False
        await self._transition(phase=Phase.IDLE, output_image=None, error_message=None)
        return True

    def download(self) -> DownloadableImage | None:
        """The current output image ready to save, or None outside SUCCESS."""
        if self._state.phase is not Phase.SUCCESS or not self._state.output_image:
            return None
        data, content_type = parse_data_uri(self._state.output_image)
        if content_type != "image/png":
            # The download is always saved under a .png name.
            data = to_png(data)
        return DownloadableImage(filename=DOWNLOAD_FILENAME, content_type="image/png", data=data)

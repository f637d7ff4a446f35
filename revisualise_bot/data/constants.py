# revisualise_bot/data/constants.py
from enum import Enum


class ImageRole(str, Enum):
    """Roles for source images."""
    CHILD = "child"
    ADULT = "adult"


class Phase(str, Enum):
    """Lifecycle phases of a single generation attempt."""
    IDLE = "idle"
    GENERATING = "generating"
    SUCCESS = "success"
    ERROR = "error"


class GenerationErrorKind(str, Enum):
    """Failure kinds surfaced at the generation client boundary."""
    PRECONDITION_NOT_MET = "precondition_not_met"
    TRANSPORT_FAILURE = "transport_failure"
    SERVICE_REJECTION = "service_rejection"
    EMPTY_RESPONSE = "empty_response"
    DECODE_FAILURE = "decode_failure"
    UNKNOWN = "unknown"


DOWNLOAD_FILENAME = "revisualise-moment.png"

GENERIC_ERROR_MESSAGE = (
    "Something went wrong while reimagining your photos. Please try again."
)

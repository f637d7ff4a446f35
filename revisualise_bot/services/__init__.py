# revisualise_bot/services/__init__.py
from .generation_client import GenerateFunc, build_generate_func, generate
from .generation_session import GenerationSession
from .session_registry import SessionRegistry

__all__ = [
    "GenerateFunc",
    "GenerationSession",
    "SessionRegistry",
    "build_generate_func",
    "generate",
]

from .logging import StructLoggingMiddleware

__all__ = [
    "StructLoggingMiddleware",
]

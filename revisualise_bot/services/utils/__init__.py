from .data_uri import guess_mime, parse_data_uri, to_data_uri, to_png
from .http_client import http_client

__all__ = [
    "guess_mime",
    "http_client",
    "parse_data_uri",
    "to_data_uri",
    "to_png",
]

"""Response decoding for router replies."""

from .response import ParsedResponse, ResponseObject, parse_response

__all__ = ["ParsedResponse", "ResponseObject", "parse_response"]

"""
fishchi/errors.py

Exception hierarchy for the citation engine.

Only InvalidInputError escapes the parsing path. RenderError is raised by
formatters and always recovered by the renderers with a fallback string.
"""

from typing import Optional


class FishchiError(Exception):
    default_code = "FISHCHI_ERROR"
    default_message = "Citation engine error."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        detail: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        self.code = code or self.default_code
        self.message = message or self.default_message
        self.detail = detail
        self.cause = cause
        super().__init__(self.message)


class InvalidInputError(FishchiError):
    default_code = "INVALID_INPUT"
    default_message = "Citation text is required."


class RenderError(FishchiError):
    default_code = "RENDER_ERROR"
    default_message = "Failed to render citation."


class DoiLookupError(FishchiError):
    default_code = "DOI_LOOKUP_ERROR"
    default_message = "DOI lookup failed."

"""
Response Envelope - Transport-neutral command results.

Every camera command resolves to exactly one ResponseEnvelope: a JSON body
carrying either "message" or "error", or a plain-text body for rejected
input. The web layer only serializes these.
"""

from dataclasses import dataclass, field
from typing import Any

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_ERROR = 500


@dataclass(frozen=True)
class ResponseEnvelope:
    """Status code plus body for one request."""

    status_code: int
    body: dict[str, Any] | str = field(default_factory=dict)

    @classmethod
    def success(cls, message: str, **extra: Any) -> "ResponseEnvelope":
        """200 with {"message": ...} and any extra fields."""
        if "error" in extra:
            raise ValueError("success envelope cannot carry an error field")
        return cls(HTTP_OK, {"message": message, **extra})

    @classmethod
    def failure(cls, error: str, status_code: int = HTTP_INTERNAL_ERROR) -> "ResponseEnvelope":
        """Error status with {"error": ...}."""
        return cls(status_code, {"error": error})

    @classmethod
    def bad_request(cls, text: str) -> "ResponseEnvelope":
        """400 with a plain-text body."""
        return cls(HTTP_BAD_REQUEST, text)

    @property
    def is_json(self) -> bool:
        return isinstance(self.body, dict)

    @property
    def content_type(self) -> str:
        return JSON_CONTENT_TYPE if self.is_json else TEXT_CONTENT_TYPE

    @property
    def ok(self) -> bool:
        return self.status_code == HTTP_OK

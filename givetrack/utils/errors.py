from typing import Any


class GivetrackError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(GivetrackError):
    """Malformed input rejected at the boundary."""

    status_code = 400

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.details = details or []

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        if self.details:
            out["details"] = self.details
        return out


class NotFoundError(GivetrackError):
    status_code = 404


class ReferentialIntegrityError(GivetrackError):
    """A delete was blocked by rows that still reference the target."""

    status_code = 409

from typing import Any, Optional


class ServiceError(Exception):
    """Base for every error surfaced to API clients as {message, error?}."""

    status_code = 500

    def __init__(self, message: str, error: Optional[Any] = None):
        self.message = message
        self.error = error
        super().__init__(message)

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class ValidationError(ServiceError):
    status_code = 400

    @classmethod
    def from_errors(cls, errors: list[dict], message: str = "Validation failed") -> "ValidationError":
        """Build from pydantic's errors() list, keeping one entry per offending field."""
        details = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "invalid value"),
            }
            for err in errors
        ]
        return cls(message, error=details)


class DuplicateKey(ServiceError):
    status_code = 400


class AuthenticationFailure(ServiceError):
    status_code = 400

    def __init__(self):
        # Same message for unknown username and wrong password
        super().__init__("Invalid username or password.")


class MissingToken(ServiceError):
    status_code = 401

    def __init__(self):
        super().__init__("Authentication token required.")


class InvalidOrExpiredToken(ServiceError):
    status_code = 403

    def __init__(self):
        super().__init__("Invalid or expired token.")


class NotFound(ServiceError):
    status_code = 404


class StoreError(ServiceError):
    status_code = 500

from typing import Any, Mapping, Optional


class ServiceValidationError(Exception):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (missing fields, slot, tag)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers (400)
    """

    http_status = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class NoCandidatesError(ServiceValidationError):
    """Raised when a meal slot has no eligible recipe to choose from."""

    http_status = 422

    def __init__(self, slot: str, tag: Optional[str] = None):
        message = f"No eligible recipes found for {slot}"
        if tag:
            message = f"{message} (tag '{tag}')"
        super().__init__(message, details={"slot": slot, "tag": tag}, code="NO_CANDIDATES")
        self.slot = slot
        self.tag = tag


class InsufficientCandidatesError(ServiceValidationError):
    """Raised before weekly generation when a tag's candidate pool is too small."""

    http_status = 422

    def __init__(self, slot: str, tag: str, required: int, found: int):
        super().__init__(
            f"Not enough recipes for {slot} (tag '{tag}'): need at least {required}, found {found}",
            details={"slot": slot, "tag": tag, "required": required, "found": found},
            code="INSUFFICIENT_CANDIDATES",
        )
        self.slot = slot
        self.tag = tag
        self.required = required
        self.found = found


class NotFoundError(Exception):
    """Raised when a requested resource was not found.

    Attributes are similar to ServiceValidationError. http_status is 404.
    """

    http_status = 404

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ForbiddenError(Exception):
    """Raised when a user touches a plan or goal owned by someone else.

    Attributes are similar to ServiceValidationError. http_status is 403.
    """

    http_status = 403

    def __init__(self, message: str = "Forbidden", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ConflictError(Exception):
    """Raised when a resource conflict occurs (e.g., a second active goal).

    Attributes are similar to ServiceValidationError. http_status is 409.
    """

    http_status = 409

    def __init__(self, message: str = "Conflict", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message

"""API error classes.

Every failure a route can report maps to one of these classes, and the
exception handlers in ucp.main render them into the shared error envelope:

    {"errors": [{"status": false, "code": "...", "msg": "..."}]}

Taxonomy:
- ValidationError: malformed or missing input (400)
- DomainError: business rule failed (duplicate handle, wrong password,
  stale one-time code) (400)
- UnauthorizedError / AdminRequiredError: missing or insufficient
  credentials (401)
- MailDeliveryError: outbound mail failed (502)
- Anything unexpected is left to the catch-all handler in main.py (500)
"""


class APIError(Exception):
    """Base class for API errors.

    Attributes:
        code: Machine-readable error code (e.g., "INVALID_CODE").
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional list of additional error items.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: list[dict] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationError(APIError):
    """Field validation failed (400).

    Use for checks that cannot be expressed on the request schema itself.
    """

    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details,
        )


class DomainError(APIError):
    """Business rule rejected the request (400).

    Accepts a custom code so clients can tell rejections apart without
    parsing the message.
    """

    def __init__(self, message: str, code: str = "REJECTED") -> None:
        super().__init__(
            code=code,
            message=message,
            status_code=400,
        )


class UnauthorizedError(APIError):
    """Authentication required (401).

    Use when no valid session token was presented.
    """

    def __init__(self, message: str = "Invalid token.") -> None:
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401,
        )


class AdminRequiredError(UnauthorizedError):
    """Admin level required (401).

    Raised by the require_admin dependency when the account's admin
    level is zero.
    """

    def __init__(self) -> None:
        APIError.__init__(
            self,
            code="ADMIN_REQUIRED",
            message="Not authorized.",
            status_code=401,
        )


class MailDeliveryError(APIError):
    """Outbound email could not be delivered (502)."""

    def __init__(self, message: str = "Failed to send email.") -> None:
        super().__init__(
            code="MAIL_DELIVERY_FAILED",
            message=message,
            status_code=502,
        )


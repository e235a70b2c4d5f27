"""
Error taxonomy for Command Clinic.

Two families reach callers:
  - ValidationError: alias registry invariants (capacity, duplicates,
    immutable id, unknown id, malformed update). Raised synchronously,
    never absorbed.
  - ApiError: anything that went wrong talking to the analysis service.
    Never silently recovered: the front-end needs to tell the user.

Local corruption (bad log line, bad alias document, bad model JSON) is not
represented here: it is recovered where it happens and only logged.

Each class carries the HTTP status the API layer answers with.
"""

from typing import Optional


class ClinicError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ─── Alias registry ────────────────────────────────────────────────────

class ValidationError(ClinicError):
    status_code = 400


class CapacityExceededError(ValidationError):
    status_code = 409


class DuplicateAliasError(ValidationError):
    status_code = 409


class ImmutableFieldError(ValidationError):
    status_code = 422


class AliasNotFoundError(ValidationError):
    status_code = 404


# ─── Analysis service ──────────────────────────────────────────────────

class ApiError(ClinicError):
    status_code = 502


class MissingCredentialError(ApiError):
    status_code = 400


class AuthError(ApiError):
    pass


class RateLimitedError(ApiError):
    status_code = 429

    def __init__(self, message: str, retry_after: float):
        super().__init__(message)
        self.retry_after = retry_after


class ServiceUnavailableError(ApiError):
    status_code = 503


class AnalysisTimeoutError(ApiError, TimeoutError):
    status_code = 504


class ApiConnectionError(ApiError):
    pass


class UnknownApiError(ApiError):
    def __init__(self, message: str, status: int, detail: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.detail = detail


class ModelNotFoundError(UnknownApiError):
    pass

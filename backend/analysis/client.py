"""
Anthropic Messages API client for the usage critic.

One POST per analysis, no retries. Failures are translated into the typed
errors in errors.py so the front-end can tell the user what to do:

  - 401                 → AuthError (check the key)
  - 404                 → ModelNotFoundError (model not available to the key)
  - 429                 → RateLimitedError (wait, then retry)
  - 5xx                 → ServiceUnavailableError (transient)
  - anything else       → UnknownApiError (raw status + message)
  - deadline exceeded   → AnalysisTimeoutError
  - connection failures → ApiConnectionError
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from analysis.config import (
    API_ENDPOINT,
    API_VERSION,
    MAX_OUTPUT_TOKENS,
    MODEL,
    RATE_LIMIT_BACKOFF,
    REQUEST_TIMEOUT,
)
from analysis.system_prompt import SYSTEM_PROMPT
from errors import (
    AnalysisTimeoutError,
    ApiError,
    ApiConnectionError,
    AuthError,
    ModelNotFoundError,
    RateLimitedError,
    ServiceUnavailableError,
    UnknownApiError,
)

logger = logging.getLogger(__name__)


# ─── Error classification ──────────────────────────────────────────────

def _error_message(response: httpx.Response) -> str:
    """``error.message`` from the JSON body, else the HTTP reason phrase."""
    try:
        body = response.json()
        message = body.get("error", {}).get("message")
        if message:
            return str(message)
    except (ValueError, AttributeError):
        pass
    return response.reason_phrase or f"HTTP {response.status_code}"


def _retry_after(response: httpx.Response) -> float:
    try:
        return float(response.headers["retry-after"])
    except (KeyError, ValueError):
        return RATE_LIMIT_BACKOFF


def classify_error(response: httpx.Response, model: str = MODEL) -> ApiError:
    """Map a non-2xx response to the matching ApiError subclass."""
    status = response.status_code
    message = _error_message(response)

    if status == 401:
        return AuthError(
            "The Anthropic API key was rejected. Verify ANTHROPIC_API_KEY: "
            "that it is the full key, has not expired or been revoked, "
            "and has no stray whitespace."
        )
    if status == 404:
        return ModelNotFoundError(
            f"Model {model!r} was not found. Check that your API key has access "
            f"to it in the Anthropic Console, or set CLINIC_MODEL. ({message})",
            status=status,
            detail=message,
        )
    if status == 429:
        retry_after = _retry_after(response)
        return RateLimitedError(
            f"The Anthropic API rate limit was reached. Wait about "
            f"{int(retry_after)} seconds before running the analysis again.",
            retry_after=retry_after,
        )
    if 500 <= status < 600:
        return ServiceUnavailableError(
            f"The Anthropic API is temporarily unavailable ({status}). "
            "Try again in a moment; see https://status.anthropic.com"
        )
    return UnknownApiError(
        f"Anthropic API error ({status}): {message}",
        status=status,
        detail=message,
    )


# ─── Client ────────────────────────────────────────────────────────────

class AnthropicClient:
    def __init__(
        self,
        api_key: str,
        *,
        model: str = MODEL,
        endpoint: str = API_ENDPOINT,
        timeout: float = REQUEST_TIMEOUT,
        max_tokens: int = MAX_OUTPUT_TOKENS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.endpoint = endpoint
        self.timeout = timeout
        self.max_tokens = max_tokens
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": API_VERSION,
            "content-type": "application/json",
        }

    def _body(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": prompt}],
        }

    async def _post(self, prompt: str) -> httpx.Response:
        async with httpx.AsyncClient(transport=self._transport) as client:
            return await client.post(
                self.endpoint,
                headers=self._headers(),
                json=self._body(prompt),
                timeout=self.timeout,
            )

    async def create_message(self, prompt: str) -> Any:
        """
        Send ``prompt`` as the only user message and return the decoded body.

        The deadline covers the whole request; on expiry the request task is
        cancelled and AnalysisTimeoutError is raised.
        """
        try:
            response = await asyncio.wait_for(self._post(prompt), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("Analysis request timed out after %.0fs", self.timeout)
            raise AnalysisTimeoutError(
                f"The analysis request timed out after {int(self.timeout)} seconds. "
                "Please try again."
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("Analysis request failed: %s", exc)
            raise ApiConnectionError(
                f"Could not reach the Anthropic API ({exc.__class__.__name__}). "
                "Check your internet connection."
            ) from exc

        logger.info("Analysis response status: %d", response.status_code)

        if not response.is_success:
            error = classify_error(response, self.model)
            logger.error("Analysis request failed: %s", error)
            raise error

        try:
            return response.json()
        except ValueError:
            # Undecodable 2xx body is treated like malformed model output.
            logger.warning("Analysis response body is not JSON")
            return {}

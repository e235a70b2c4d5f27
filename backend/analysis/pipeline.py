"""
Usage critic pipeline: recent events in, at most three proposals out.

    events ──► build_prompt ──► RateLimiter ──► AnthropicClient ──► parse_response
                                                                      │
                                                       proposals[:3] ◄┘
"""

import logging
from typing import Callable, Optional, Sequence, Union

import config
from analysis.client import AnthropicClient
from analysis.config import MAX_PROPOSALS
from analysis.parser import parse_response
from analysis.rate_limit import RateLimiter
from analysis.system_prompt import build_prompt
from errors import MissingCredentialError
from models.analysis import AnalysisResponse
from models.event import InputEvent, LaunchEvent

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "No Anthropic API key is configured.\n"
    "\n"
    "Set ANTHROPIC_API_KEY in the environment (or in backend/.env) and "
    "restart the service. Keys are issued at https://console.anthropic.com"
)


class AnalysisPipeline:
    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        api_key: Optional[Callable[[], str]] = None,
        client_factory: Callable[[str], AnthropicClient] = AnthropicClient,
    ):
        """
        Args:
            rate_limiter: throttle shared with other pipelines, or a private
                one when omitted.
            api_key: returns the current credential; read on every analysis.
            client_factory: builds the HTTP client for a given key.
        """
        self.rate_limiter = rate_limiter or RateLimiter()
        self._api_key = api_key or config.get_api_key
        self._client_factory = client_factory

    def has_api_key(self) -> bool:
        return bool(self._api_key().strip())

    async def analyze(self, events: Sequence[Union[InputEvent, LaunchEvent]]) -> AnalysisResponse:
        """
        Analyze ``events`` and return validated proposals and extension hints.

        Raises MissingCredentialError before anything else when no key is
        set, and the ApiError subclasses from the client for failed calls.
        Model output that can't be parsed yields an empty response.
        """
        api_key = self._api_key().strip()
        if not api_key:
            raise MissingCredentialError(MISSING_KEY_MESSAGE)

        if not events:
            logger.info("No events to analyze")
            return AnalysisResponse()

        await self.rate_limiter.wait_until_permitted()

        prompt = build_prompt(events)
        client = self._client_factory(api_key)
        logger.info("Analyzing %d events with model %s", len(events), client.model)

        raw = await client.create_message(prompt)
        result = parse_response(raw)
        result.proposals = result.proposals[:MAX_PROPOSALS]
        return result

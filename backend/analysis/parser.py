"""
Fail-soft parsing of analysis responses.

Whatever the model sends back, parse_response() returns an AnalysisResponse
and never raises. Malformed output degrades to fewer (or zero) proposals,
it is never reported as an error.
"""

import json
import logging
import re
from typing import Any, Optional

import pydantic

from models.analysis import AnalysisResponse, ExtensionHint, Proposal

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*\n?(.*?)\n?[ \t]*```$", re.DOTALL)


def extract_text(raw: Any) -> str:
    """Text of the first ``text`` content block, or "" if there is none."""
    if not isinstance(raw, dict):
        return ""
    content = raw.get("content")
    if not isinstance(content, list):
        return ""
    for block in content:
        if isinstance(block, dict) and block.get("type", "text") == "text":
            text = block.get("text")
            return text if isinstance(text, str) else ""
    return ""


def strip_code_fence(text: str) -> str:
    """Remove one surrounding ```lang ... ``` wrapper, if present."""
    text = text.strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text


def _validate_items(items: Any, model: type, label: str) -> list:
    if not isinstance(items, list):
        if items is not None:
            logger.warning("Ignoring %s: expected a list, got %s", label, type(items).__name__)
        return []

    valid = []
    for index, item in enumerate(items):
        try:
            valid.append(model.model_validate(item))
        except pydantic.ValidationError as exc:
            logger.warning("Dropping invalid %s[%d]: %s", label, index, exc.errors()[0]["msg"])
    return valid


def parse_analysis_text(text: str) -> Optional[AnalysisResponse]:
    try:
        data = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as exc:
        logger.warning("Analysis response is not valid JSON: %s", exc)
        return None

    if not isinstance(data, dict):
        logger.warning("Analysis response is JSON but not an object")
        return None

    return AnalysisResponse(
        proposals=_validate_items(data.get("proposals"), Proposal, "proposals"),
        extension_hints=_validate_items(data.get("extension_hints"), ExtensionHint, "extension_hints"),
    )


def parse_response(raw: Any) -> AnalysisResponse:
    """
    Turn a decoded Messages API body into an AnalysisResponse.

    Empty text, a missing content list or unparseable JSON all give an empty
    response. Individual proposals or hints that don't match the schema are
    dropped; the rest are kept in their original order.
    """
    text = extract_text(raw)
    if not text.strip():
        logger.warning("Empty response from analysis service")
        return AnalysisResponse()

    parsed = parse_analysis_text(text)
    if parsed is None:
        logger.debug("Raw analysis content: %s", text[:2000])
        return AnalysisResponse()
    return parsed

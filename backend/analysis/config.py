"""
Analysis service configuration.

Protocol-level constants for the Anthropic Messages API. The model can be
overridden with CLINIC_MODEL (see config.py at the backend root).
"""

import config

API_ENDPOINT = "https://api.anthropic.com/v1/messages"
API_VERSION = "2023-06-01"

MODEL = config.MODEL
MAX_OUTPUT_TOKENS = 2048

REQUEST_TIMEOUT = 30.0      # seconds, whole request
MIN_CALL_INTERVAL = 1.0     # seconds between calls from this process
MAX_PROPOSALS = 3

RATE_LIMIT_BACKOFF = 60.0   # suggested wait when the service gives no retry-after

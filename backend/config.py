"""
Runtime configuration.

Everything tunable comes from the environment (a local .env is loaded by
main.py before this module is imported). Protocol constants live next to
the code that uses them.

  CLINIC_SUPPORT_PATH=~/.command-clinic
  ANTHROPIC_API_KEY=sk-ant-...
"""

import os

SUPPORT_PATH = os.path.expanduser(
    os.environ.get("CLINIC_SUPPORT_PATH", "~/.command-clinic")
)

MODEL = os.environ.get("CLINIC_MODEL", "claude-sonnet-4-5-20250929")

LOG_RETENTION_DAYS = int(os.environ.get("CLINIC_LOG_RETENTION_DAYS", "7"))
LOOKBACK_DAYS = int(os.environ.get("CLINIC_LOOKBACK_DAYS", "7"))
MAX_EVENTS = int(os.environ.get("CLINIC_MAX_EVENTS", "100"))   # ~2.5k prompt tokens

LOG_LEVEL = os.environ.get("CLINIC_LOG_LEVEL", "INFO").upper()


def get_api_key() -> str:
    """Read on every call so a key added to the environment is picked up."""
    return os.environ.get("ANTHROPIC_API_KEY", "")

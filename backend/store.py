"""
Component instances shared across all routes.

Everything is local to this machine: events and aliases live as files under
config.SUPPORT_PATH. One RateLimiter is shared for the process so that
repeated critic requests can't burst the analysis service. Tests swap these
attributes for instances rooted in a temp directory.
"""

import config
from analysis.pipeline import AnalysisPipeline
from analysis.rate_limit import RateLimiter
from storage.alias_registry import AliasRegistry
from storage.event_store import EventStore

event_store = EventStore(config.SUPPORT_PATH)
alias_registry = AliasRegistry(config.SUPPORT_PATH)
rate_limiter = RateLimiter()
pipeline = AnalysisPipeline(rate_limiter=rate_limiter)

"""Generation diagnostics — structured events and a queryable log.

Quick Start:
    >>> from pawprint.observability import EventLog
    >>> log = EventLog()
    >>> result = generate(config, log=log)
    >>> log.query(event_type=RouteIgnored)

"""

from pawprint.observability.events import (
    CustomEntryDropped,
    GenerationCompleted,
    GenerationFailed,
    RouteClash,
    RouteIgnored,
    SitemapEvent,
    StatFailed,
    now_ns,
)
from pawprint.observability.log import EventLog

__all__ = [
    "CustomEntryDropped",
    "EventLog",
    "GenerationCompleted",
    "GenerationFailed",
    "RouteClash",
    "RouteIgnored",
    "SitemapEvent",
    "StatFailed",
    "now_ns",
]

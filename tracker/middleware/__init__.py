"""HTTP middleware."""

from tracker.middleware.timing import timing_middleware

__all__ = ["timing_middleware"]

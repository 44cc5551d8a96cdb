from .timeout_session import TimeoutSession

__all__ = [
    "TimeoutSession",
]

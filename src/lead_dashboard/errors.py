from __future__ import annotations

from typing import Optional


class DashboardError(Exception):
    """Base class for everything that can stop a dashboard from loading."""

    def __init__(self, message: str, sequence: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.sequence = sequence


class TransportFailure(DashboardError):
    """Network or HTTP level failure while talking to the backend."""

    def __init__(self, message: str, status_code: Optional[int] = None, sequence: Optional[int] = None):
        super().__init__(message, sequence=sequence)
        self.status_code = status_code


class PayloadFailure(DashboardError):
    """The backend answered, but with ``success: false`` or an unusable body."""


class StaleResponse(DashboardError):
    """
    A response that arrived after a newer request had been issued.

    Returned to the caller of the superseded request so it can tell the result
    was dropped; it never reaches the dashboard state.
    """

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional, Union

from .cache import IdentityCache
from .config import DashboardClientConfig
from .date_range import DateRange, RangeController, normalize
from .errors import DashboardError
from .query_client import DashboardQueryClient, QueryHandle, QueryStatus
from .transport import DashboardTransport
from .variants import MANAGER, DashboardVariant

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Everything one dashboard screen needs between the date picker and the charts.

    The range controller is the only thing that triggers fetches; the query
    client owns the current raw payload; the identity cache re-derives the
    view model only when that payload object changes.
    """

    def __init__(
        self,
        transport: DashboardTransport,
        variant: DashboardVariant = MANAGER,
        config: Optional[DashboardClientConfig] = None,
        today: Optional[Callable[[], date]] = None,
        initial_range: Optional[DateRange] = None,
    ) -> None:
        self.variant = variant
        self.config = config or DashboardClientConfig()
        self._today = today or date.today
        self.query_client = DashboardQueryClient(transport, variant, today=self._today)
        self.ranges = RangeController(
            initial=initial_range if initial_range is not None else variant.default_range(self._today()),
            on_change=self._on_range_change,
            debounce_seconds=self.config.ranges.debounce_seconds,
        )
        self._derive = IdentityCache(variant.derive)
        self.last_handle: Optional[QueryHandle] = None

    @property
    def status(self) -> QueryStatus:
        return self.query_client.state.status

    def start(self) -> QueryHandle:
        """Fetch the initial range (the mount-time load)."""
        self.last_handle = self.query_client.submit(self.ranges.current)
        return self.last_handle

    def select_range(self, candidate: Optional[DateRange]) -> Optional[DateRange]:
        return self.ranges.propose(candidate)

    def retry(self) -> None:
        self.ranges.refresh()

    def _on_range_change(self, date_range: Optional[DateRange]) -> None:
        self.last_handle = self.query_client.submit(date_range)

    def view_model(self, now: Optional[datetime] = None) -> Optional[Any]:
        """
        The derived view model for the current range, or ``None``.

        ``None`` covers idle, loading and error alike: the caller renders a
        placeholder or a "could not load" state, never stale numbers. The
        result is reused while both the payload and ``now`` stay the same.
        """

        snapshot = self.query_client.state
        if snapshot.status is not QueryStatus.SUCCESS or snapshot.payload is None:
            return None
        return self._derive(snapshot.payload, now=now)

    async def load(self, candidate: Optional[DateRange], now: Optional[datetime] = None) -> Union[Any, DashboardError, None]:
        """
        Normalize ``candidate``, fetch it once and return the view model.

        Returns the failure instead of a view model when the backend cannot
        serve the range, and ``None`` when the range is not fetchable.
        """

        date_range = normalize(candidate)
        result = await self.query_client.query(date_range)
        if result is None or isinstance(result, DashboardError):
            return result
        return self._derive(result, now=now)

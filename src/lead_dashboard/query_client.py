from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .date_range import DateRange
from .errors import DashboardError, StaleResponse, TransportFailure
from .payloads import WirePayload
from .transport import DashboardTransport
from .variants import DashboardVariant

logger = logging.getLogger(__name__)


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class QuerySnapshot:
    """
    Immutable view of the query state at one point in time.

    ``payload`` is only set while ``status`` is ``success``: loading and
    error states never carry numbers from an earlier range.
    """

    status: QueryStatus = QueryStatus.IDLE
    sequence: int = 0
    range: Optional[DateRange] = None
    payload: Optional[WirePayload] = None
    error: Optional[DashboardError] = None


@dataclass(frozen=True)
class QueryHandle:
    sequence: int
    task: "asyncio.Future[QueryResult]"


QueryResult = Union[WirePayload, DashboardError, None]
SnapshotListener = Callable[[QuerySnapshot], None]


class DashboardQueryClient:
    """
    Issues one backend request per normalized range and tracks its outcome.

    Every request gets the next sequence number. A response only updates the
    state when its sequence is still the latest one issued; anything older is
    dropped on arrival, so a slow request for a previous range can never
    overwrite a newer one.
    """

    def __init__(
        self,
        transport: DashboardTransport,
        variant: DashboardVariant,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.transport = transport
        self.variant = variant
        self._today = today or date.today
        self._sequence = 0
        self._state = QuerySnapshot()
        self._listeners: List[SnapshotListener] = []

    @property
    def state(self) -> QuerySnapshot:
        return self._state

    def subscribe(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    async def query(self, date_range: Optional[DateRange]) -> QueryResult:
        sequence, body = self._begin(date_range)
        if body is None:
            return None
        return await self._run(sequence, date_range, body)

    def submit(self, date_range: Optional[DateRange]) -> QueryHandle:
        """
        Start a query on the running event loop and return immediately.

        The sequence number is taken synchronously, so calls made back to back
        are ordered by submission, not by when their tasks get scheduled.
        """

        loop = asyncio.get_running_loop()
        sequence, body = self._begin(date_range)
        if body is None:
            future: "asyncio.Future[QueryResult]" = loop.create_future()
            future.set_result(None)
            return QueryHandle(sequence=sequence, task=future)
        task = loop.create_task(self._run(sequence, date_range, body))
        return QueryHandle(sequence=sequence, task=task)

    def _begin(self, date_range: Optional[DateRange]) -> Tuple[int, Optional[Dict[str, Any]]]:
        self._sequence += 1
        sequence = self._sequence
        body = self.variant.request_body(date_range, today=self._today())
        if body is None:
            logger.debug("No %s dashboard fetch for range %s", self.variant.name, date_range)
            self._set(QuerySnapshot(status=QueryStatus.IDLE, sequence=sequence, range=date_range))
        else:
            self._set(QuerySnapshot(status=QueryStatus.LOADING, sequence=sequence, range=date_range))
        return sequence, body

    async def _run(self, sequence: int, date_range: Optional[DateRange], body: Dict[str, Any]) -> QueryResult:
        payload: Optional[WirePayload] = None
        failure: Optional[DashboardError] = None
        try:
            response = await self.transport.post(self.variant.path, body)
            payload = self.variant.parse(response)
        except DashboardError as exc:
            failure = exc
        except Exception as exc:
            failure = TransportFailure(f"{self.variant.name} dashboard request failed: {exc}")
            failure.__cause__ = exc

        if not self.is_current(sequence):
            logger.debug(
                "Discarding %s dashboard response #%s, latest is #%s",
                self.variant.name,
                sequence,
                self._sequence,
            )
            return StaleResponse(f"response #{sequence} superseded by #{self._sequence}", sequence=sequence)

        if failure is not None:
            failure.sequence = sequence
            logger.warning("%s dashboard unavailable for range %s: %s", self.variant.name, date_range, failure)
            self._set(
                QuerySnapshot(
                    status=QueryStatus.ERROR,
                    sequence=sequence,
                    range=date_range,
                    error=failure,
                )
            )
            return failure

        self._set(
            QuerySnapshot(
                status=QueryStatus.SUCCESS,
                sequence=sequence,
                range=date_range,
                payload=payload,
            )
        )
        return payload

    def _set(self, snapshot: QuerySnapshot) -> None:
        self._state = snapshot
        for listener in self._listeners:
            listener(snapshot)

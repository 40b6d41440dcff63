"""
Descriptors for the two dashboards served by the pipeline.

The manager and worker dashboards only differ in endpoint, payload shape,
derivation and how an open-ended range is put on the wire; everything else
(query state machine, caching, range control) is shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Optional, Type

from pydantic import ValidationError

from .date_range import DateRange, format_wire_date, trailing_range
from .errors import PayloadFailure
from .manager_view import derive_manager_view_model
from .payloads import ManagerDashboardPayload, WirePayload, WorkerDashboardPayload
from .worker_view import derive_worker_view_model


@dataclass(frozen=True)
class DashboardVariant:
    name: str
    path: str
    payload_model: Type[WirePayload]
    derive: Callable[..., Any]
    requires_complete_range: bool

    def default_range(self, today: Optional[date] = None) -> DateRange:
        today = today or date.today()
        if self.requires_complete_range:
            return trailing_range(today)
        return DateRange(start=None, end=today)

    def request_body(self, date_range: Optional[DateRange], today: Optional[date] = None) -> Optional[Dict[str, Any]]:
        """
        Build the ``{startDate, endDate}`` body, or ``None`` when nothing should be fetched.

        Manager requests need both bounds. Worker requests send ``null`` for a
        missing start (whole history) and today for a missing end.
        """

        if self.requires_complete_range:
            if date_range is None or not date_range.is_complete:
                return None
            return {
                "startDate": format_wire_date(date_range.start),
                "endDate": format_wire_date(date_range.end),
            }

        today = today or date.today()
        start = date_range.start if date_range else None
        end = date_range.end if date_range else None
        return {
            "startDate": format_wire_date(start) if start else None,
            "endDate": format_wire_date(end or today),
        }

    def parse(self, body: Any) -> WirePayload:
        if not isinstance(body, dict):
            raise PayloadFailure(f"{self.name} dashboard response is not a JSON object")
        if body.get("success") is not True:
            message = body.get("message") or "success flag not set"
            raise PayloadFailure(f"{self.name} dashboard request failed: {message}")
        try:
            return self.payload_model.model_validate(body)
        except ValidationError as exc:
            raise PayloadFailure(
                f"{self.name} dashboard response has an unexpected shape ({exc.error_count()} errors)"
            ) from exc


MANAGER = DashboardVariant(
    name="manager",
    path="/manager/dashboard",
    payload_model=ManagerDashboardPayload,
    derive=derive_manager_view_model,
    requires_complete_range=True,
)

WORKER = DashboardVariant(
    name="worker",
    path="/worker/dashboard",
    payload_model=WorkerDashboardPayload,
    derive=derive_worker_view_model,
    requires_complete_range=False,
)

"""
Date-bounded analytics view models for the lead-management dashboards.

The package normalizes the selected date range, fetches the backend's raw
aggregate payload for it (discarding responses for superseded ranges) and
projects that payload into presentation-ready series for the manager and
worker dashboards.
"""

from .cache import IdentityCache  # noqa: F401
from .date_range import (  # noqa: F401
    MAX_RANGE_DAYS,
    DateRange,
    RangeController,
    format_wire_date,
    normalize,
)
from .errors import (  # noqa: F401
    DashboardError,
    PayloadFailure,
    StaleResponse,
    TransportFailure,
)
from .manager_view import derive_manager_view_model  # noqa: F401
from .models import ManagerViewModel, TextSegment, WorkerViewModel  # noqa: F401
from .payloads import ManagerDashboardPayload, WorkerDashboardPayload  # noqa: F401
from .query_client import DashboardQueryClient, QueryHandle, QuerySnapshot, QueryStatus  # noqa: F401
from .service import DashboardService  # noqa: F401
from .transport import DashboardTransport, HttpDashboardTransport  # noqa: F401
from .variants import MANAGER, WORKER, DashboardVariant  # noqa: F401
from .worker_view import derive_worker_view_model  # noqa: F401

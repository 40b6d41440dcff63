"""FastAPI server that turns backend dashboard payloads into view models."""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .config import build_transport_from_env, load_client_config
from .date_range import DateRange, normalize
from .errors import DashboardError
from .service import DashboardService
from .transport import DashboardTransport
from .variants import MANAGER, WORKER, DashboardVariant

load_dotenv()

app = FastAPI(title="Lead Dashboard View-Model API", version="0.1.0")
client_config = load_client_config()
transport: Optional[DashboardTransport] = build_transport_from_env(client_config)

app.add_middleware(
    CORSMiddleware,
    allow_origins=client_config.server.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


class RangeRequest(BaseModel):
    start: Optional[date] = None
    end: Optional[date] = None


class ViewModelResponse(BaseModel):
    range: Dict[str, Optional[str]]
    data: Dict[str, Any]


def get_transport() -> DashboardTransport:
    if transport is None:
        raise HTTPException(
            status_code=500,
            detail="LEAD_DASHBOARD_ENABLE is off; no backend transport is configured.",
        )
    return transport


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/manager/view-model", response_model=ViewModelResponse)
async def manager_view_model(
    request: RangeRequest,
    backend: DashboardTransport = Depends(get_transport),
) -> ViewModelResponse:
    return await _serve(MANAGER, request, backend)


@app.post("/worker/view-model", response_model=ViewModelResponse)
async def worker_view_model(
    request: RangeRequest,
    backend: DashboardTransport = Depends(get_transport),
) -> ViewModelResponse:
    return await _serve(WORKER, request, backend)


async def _serve(variant: DashboardVariant, request: RangeRequest, backend: DashboardTransport) -> ViewModelResponse:
    date_range = normalize(DateRange(start=request.start, end=request.end))
    service = DashboardService(backend, variant=variant, config=client_config, initial_range=date_range)
    result = await service.load(date_range)

    if result is None:
        raise HTTPException(status_code=400, detail="Select both a start and an end date.")
    if isinstance(result, DashboardError):
        raise HTTPException(status_code=502, detail="Dashboard unavailable for this range.")
    return ViewModelResponse(range=date_range.as_dict(), data=result.as_dict())

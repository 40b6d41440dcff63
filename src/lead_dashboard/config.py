"""
Client-side configuration for the dashboard pipeline.
"""

from __future__ import annotations

import os
from typing import List, Optional

from pydantic import BaseModel

from .transport import DashboardTransport, HttpDashboardTransport


class BackendConfig(BaseModel):
    enable: bool = True
    base_url: str = "http://localhost:5000"
    api_token: Optional[str] = None
    timeout_seconds: float = 15.0


class RangeConfig(BaseModel):
    debounce_seconds: float = 0.3
    """Quiet period before a range edit triggers a fetch; 0 disables debouncing."""


class ServerConfig(BaseModel):
    cors_origins: List[str] = ["*"]


class DashboardClientConfig(BaseModel):
    backend: BackendConfig = BackendConfig()
    ranges: RangeConfig = RangeConfig()
    server: ServerConfig = ServerConfig()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def load_client_config() -> DashboardClientConfig:
    cfg = DashboardClientConfig()
    cfg.backend = BackendConfig(
        enable=_env_bool("LEAD_DASHBOARD_ENABLE", cfg.backend.enable),
        base_url=os.getenv("LEAD_DASHBOARD_BACKEND_URL", cfg.backend.base_url),
        api_token=os.getenv("LEAD_DASHBOARD_API_TOKEN", cfg.backend.api_token),
        timeout_seconds=_env_float("LEAD_DASHBOARD_TIMEOUT_SECONDS", cfg.backend.timeout_seconds),
    )
    cfg.ranges = RangeConfig(
        debounce_seconds=_env_float("LEAD_DASHBOARD_DEBOUNCE_SECONDS", cfg.ranges.debounce_seconds),
    )
    origins = os.getenv("LEAD_DASHBOARD_CORS_ORIGINS")
    if origins:
        cfg.server = ServerConfig(cors_origins=[item.strip() for item in origins.split(",") if item.strip()])
    return cfg


def build_transport_from_env(config: Optional[DashboardClientConfig] = None) -> Optional[DashboardTransport]:
    cfg = config or load_client_config()
    if not cfg.backend.enable:
        return None
    return HttpDashboardTransport(
        base_url=cfg.backend.base_url,
        api_token=cfg.backend.api_token,
        timeout_s=cfg.backend.timeout_seconds,
    )

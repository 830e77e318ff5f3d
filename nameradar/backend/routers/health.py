from __future__ import annotations

from fastapi import APIRouter

from nameradar.backend.schemas import HealthData
from nameradar.backend.services import completion_client


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthData)
def get_health():
	warnings = completion_client.provider_warnings()
	return HealthData(status="ok", provider_ready=not warnings, provider_warnings=warnings)

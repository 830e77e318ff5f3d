from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from nameradar.backend.schemas import ErrorResponse, GenerateBrandsRequest, GenerateBrandsResponse
from nameradar.backend.services import brand_service
from nameradar.backend.services.access_gate import CallerContext
from nameradar.backend.services.caller_service import caller_context


router = APIRouter(prefix="/api", tags=["brands"])


async def _read_body(request: Request) -> Any:
	raw = await request.body()
	if not raw:
		return None
	try:
		return json.loads(raw)
	except (json.JSONDecodeError, UnicodeDecodeError):
		return None


@router.post(
	"/generate-brands",
	response_model=GenerateBrandsResponse,
	responses={
		400: {"model": ErrorResponse},
		401: {"model": ErrorResponse},
		403: {"model": ErrorResponse},
		500: {"model": ErrorResponse},
		504: {"model": ErrorResponse},
	},
	openapi_extra={
		"requestBody": {
			"required": True,
			"content": {"application/json": {"schema": GenerateBrandsRequest.model_json_schema()}},
		}
	},
)
async def generate_brands(request: Request, caller: CallerContext = Depends(caller_context)):
	body = await _read_body(request)
	result = await brand_service.handle_generate_request(
		brand_service.GenerationRequest(caller=caller, body=body),
	)
	return JSONResponse(status_code=result.status_code, content=result.body)

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from nameradar.backend import constants
from nameradar.backend.schemas import BrandCandidate
from nameradar.backend.services.errors import ErrorKind


UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


@dataclass(frozen=True)
class ApiResponse:
	status_code: int
	body: Dict[str, Any]

	@property
	def ok(self) -> bool:
		return self.status_code == 200


def error_body(message: str) -> Dict[str, Any]:
	return {"error": message}


def success_response(candidates: List[BrandCandidate]) -> ApiResponse:
	return ApiResponse(
		status_code=200,
		body={constants.CANDIDATES_FIELD: [candidate.model_dump() for candidate in candidates]},
	)


def error_response(kind: ErrorKind) -> ApiResponse:
	return ApiResponse(status_code=kind.status_code, body=error_body(kind.message))

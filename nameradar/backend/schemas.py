from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class BrandCandidate(BaseModel):
	model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

	name: str = Field(..., min_length=1)
	explanation: str


class GenerateBrandsRequest(BaseModel):
	"""Documented request shape; the endpoint validates the raw body itself."""

	model_config = ConfigDict(extra="ignore")

	userInput: str = Field(..., description="Free-text description of the brand concept.")


class GenerateBrandsResponse(BaseModel):
	model_config = ConfigDict(extra="forbid")

	brandNames: List[BrandCandidate] = Field(default_factory=list)


class ErrorResponse(BaseModel):
	model_config = ConfigDict(extra="forbid")

	error: str


class ModelParameters(BaseModel):
	model_config = ConfigDict(extra="forbid", frozen=True)

	temperature: float = Field(..., ge=0.0, le=2.0)
	max_output_tokens: int = Field(..., gt=0)
	top_p: float = Field(..., gt=0.0, le=1.0)


class CompletionPrompt(BaseModel):
	model_config = ConfigDict(extra="forbid", frozen=True)

	system_instruction: str
	user_instruction: str
	parameters: ModelParameters

	def to_messages(self) -> List[Dict[str, Any]]:
		return [
			{"role": "system", "content": self.system_instruction},
			{"role": "user", "content": self.user_instruction},
		]


class HealthData(BaseModel):
	model_config = ConfigDict(extra="forbid")

	status: str
	provider_ready: bool
	provider_warnings: List[str] = Field(default_factory=list)

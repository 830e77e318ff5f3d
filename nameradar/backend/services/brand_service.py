from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from openai import AsyncOpenAI

from nameradar.backend.response import ApiResponse, error_response, success_response
from nameradar.backend.services import completion_client
from nameradar.backend.services.access_gate import CallerContext, check_access
from nameradar.backend.services.completion_client import (
	CompletionOutcome,
	CompletionProviderError,
	CompletionSuccess,
	CompletionTimeout,
	CompletionTransportFailure,
)
from nameradar.backend.services.errors import BrandServiceError, ErrorKind
from nameradar.backend.services.input_validator import validate_input
from nameradar.backend.services.prompt_builder import build_prompt
from nameradar.backend.services.result_extractor import extract_candidates


logger = logging.getLogger(__name__)

_LOG_BODY_CHARS = 2000


@dataclass(frozen=True)
class GenerationRequest:
	caller: CallerContext
	body: Any


def _raise_for_outcome(outcome: CompletionOutcome) -> str:
	if isinstance(outcome, CompletionSuccess):
		return outcome.raw_text
	if isinstance(outcome, CompletionTimeout):
		raise BrandServiceError(ErrorKind.TIMEOUT, "provider call exceeded the timeout bound")
	if isinstance(outcome, CompletionProviderError):
		raise BrandServiceError(
			ErrorKind.PROVIDER_ERROR,
			f"provider returned HTTP {outcome.http_status}: {outcome.body[:_LOG_BODY_CHARS]}",
		)
	if isinstance(outcome, CompletionTransportFailure):
		raise BrandServiceError(ErrorKind.TRANSPORT_FAILURE, outcome.detail)
	raise TypeError(f"unknown completion outcome: {outcome!r}")


def _log_failure(exc: BrandServiceError) -> None:
	level = logging.WARNING if exc.status_code < 500 else logging.ERROR
	logger.log(level, "generate-brands failed [%s]: %s", exc.kind.code, exc.detail)


async def handle_generate_request(
	request: GenerationRequest,
	*,
	client: Optional[AsyncOpenAI] = None,
) -> ApiResponse:
	try:
		identity = check_access(request.caller)
		description = validate_input(request.body)
		prompt = build_prompt(description)
		settings = completion_client.load_provider_settings()
		outcome = await completion_client.complete(prompt, settings, client=client)
		raw_text = _raise_for_outcome(outcome)
		candidates = extract_candidates(raw_text)
	except BrandServiceError as exc:
		_log_failure(exc)
		return error_response(exc.kind)

	logger.info("generated %d brand candidates for %s", len(candidates), identity)
	return success_response(candidates)

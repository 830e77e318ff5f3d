from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from nameradar.backend import constants
from nameradar.backend.schemas import CompletionPrompt
from nameradar.backend.services.errors import BrandServiceError, ErrorKind


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSettings:
	api_key: str
	base_url: str
	model: str
	timeout_s: float


@dataclass(frozen=True)
class CompletionSuccess:
	raw_text: str


@dataclass(frozen=True)
class CompletionProviderError:
	http_status: int
	body: str


@dataclass(frozen=True)
class CompletionTimeout:
	pass


@dataclass(frozen=True)
class CompletionTransportFailure:
	detail: str


CompletionOutcome = Union[
	CompletionSuccess,
	CompletionProviderError,
	CompletionTimeout,
	CompletionTransportFailure,
]


def _provider_timeout() -> float:
	raw = os.getenv("BRAND_PROVIDER_TIMEOUT_S", "").strip()
	if not raw:
		return constants.DEFAULT_PROVIDER_TIMEOUT_S
	try:
		value = float(raw)
	except ValueError as exc:
		raise BrandServiceError(
			ErrorKind.MISCONFIGURED_PROVIDER,
			"BRAND_PROVIDER_TIMEOUT_S must be numeric.",
		) from exc
	if value <= 0:
		raise BrandServiceError(
			ErrorKind.MISCONFIGURED_PROVIDER,
			"BRAND_PROVIDER_TIMEOUT_S must be greater than zero.",
		)
	return value


def load_provider_settings() -> ProviderSettings:
	api_key = os.getenv("FIREWORKS_API_KEY", "").strip()
	if not api_key:
		raise BrandServiceError(
			ErrorKind.MISCONFIGURED_PROVIDER,
			"Provider API key not configured. Set FIREWORKS_API_KEY.",
		)
	base_url = os.getenv("FIREWORKS_BASE_URL", "").strip() or constants.DEFAULT_PROVIDER_BASE_URL
	model = os.getenv("FIREWORKS_MODEL", "").strip() or constants.DEFAULT_PROVIDER_MODEL
	return ProviderSettings(
		api_key=api_key,
		base_url=base_url,
		model=model,
		timeout_s=_provider_timeout(),
	)


def provider_warnings() -> List[str]:
	try:
		load_provider_settings()
	except BrandServiceError:
		return ["Generation provider is not configured."]
	return []


def _build_client(settings: ProviderSettings) -> AsyncOpenAI:
	# Retries are left to callers; one inbound request makes one outbound call.
	return AsyncOpenAI(
		api_key=settings.api_key,
		base_url=settings.base_url,
		timeout=settings.timeout_s,
		max_retries=0,
	)


def _extract_message_text(response: Any) -> str:
	choices = getattr(response, "choices", None)
	if not choices:
		return ""
	message = getattr(choices[0], "message", None)
	content = getattr(message, "content", None)
	return content if isinstance(content, str) else ""


async def complete(
	prompt: CompletionPrompt,
	settings: ProviderSettings,
	*,
	client: Optional[AsyncOpenAI] = None,
) -> CompletionOutcome:
	"""Issue exactly one chat-completion call bounded by ``settings.timeout_s``.

	On expiry the pending call is cancelled by ``asyncio.wait_for`` so no socket
	keeps working in the background. A caller-side cancellation token could be
	passed down to here; it is not threaded through today.
	"""
	owns_client = client is None
	if client is None:
		client = _build_client(settings)
	params = prompt.parameters
	try:
		response = await asyncio.wait_for(
			client.chat.completions.create(
				model=settings.model,
				messages=prompt.to_messages(),
				temperature=params.temperature,
				max_tokens=params.max_output_tokens,
				top_p=params.top_p,
			),
			timeout=settings.timeout_s,
		)
	except (asyncio.TimeoutError, APITimeoutError):
		return CompletionTimeout()
	except APIStatusError as exc:
		return CompletionProviderError(http_status=exc.status_code, body=exc.response.text)
	except APIConnectionError as exc:
		cause = exc.__cause__
		detail = f"{exc.__class__.__name__}: {cause or exc}"
		return CompletionTransportFailure(detail=detail)
	finally:
		if owns_client:
			await client.close()

	text = _extract_message_text(response)
	logger.debug("provider returned %d chars from model %s", len(text), settings.model)
	return CompletionSuccess(raw_text=text)

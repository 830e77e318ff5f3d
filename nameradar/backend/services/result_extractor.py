from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Literal, Optional

from pydantic import ValidationError

from nameradar.backend.schemas import BrandCandidate
from nameradar.backend.services.errors import BrandServiceError, ErrorKind


logger = logging.getLogger(__name__)

ExtractionStage = Literal["direct_parse", "bracket_scan_parse"]

_LOG_PREVIEW_CHARS = 500


@dataclass(frozen=True)
class ExtractionAttempt:
	stage: ExtractionStage
	value: Any


def _preview(text: str) -> str:
	if len(text) <= _LOG_PREVIEW_CHARS:
		return text
	return text[:_LOG_PREVIEW_CHARS] + "..."


def direct_parse(text: str) -> Optional[ExtractionAttempt]:
	try:
		value = json.loads(text)
	except (ValueError, TypeError, RecursionError):
		return None
	return ExtractionAttempt(stage="direct_parse", value=value)


def bracket_scan_parse(text: str) -> Optional[ExtractionAttempt]:
	"""Parse the widest ``[...]`` span: first ``[`` through last ``]``."""
	start = text.find("[")
	end = text.rfind("]")
	if start == -1 or end <= start:
		return None
	try:
		value = json.loads(text[start : end + 1])
	except (ValueError, RecursionError):
		return None
	return ExtractionAttempt(stage="bracket_scan_parse", value=value)


def _coerce_candidates(items: List[Any]) -> List[BrandCandidate]:
	candidates: List[BrandCandidate] = []
	dropped = 0
	for item in items:
		if not isinstance(item, dict):
			dropped += 1
			continue
		try:
			candidates.append(BrandCandidate.model_validate(item))
		except ValidationError:
			dropped += 1
	if dropped:
		logger.warning("dropped %d of %d malformed brand candidates", dropped, len(items))
	return candidates


def extract_candidates(text: str) -> List[BrandCandidate]:
	"""Turn raw completion text into candidates.

	Malformed elements are dropped; the call fails only when nothing usable
	is left.
	"""
	attempt = direct_parse(text) or bracket_scan_parse(text)
	if attempt is None:
		raise BrandServiceError(
			ErrorKind.UNPARSABLE_OUTPUT,
			f"no JSON array found in completion: {_preview(text)!r}",
		)
	if not isinstance(attempt.value, list):
		raise BrandServiceError(
			ErrorKind.UNPARSABLE_OUTPUT,
			f"{attempt.stage} produced {type(attempt.value).__name__}, expected list",
		)
	if not attempt.value:
		raise BrandServiceError(ErrorKind.UNPARSABLE_OUTPUT, f"{attempt.stage} produced an empty list")
	candidates = _coerce_candidates(attempt.value)
	if not candidates:
		raise BrandServiceError(
			ErrorKind.UNPARSABLE_OUTPUT,
			f"no well-formed candidates among {len(attempt.value)} elements",
		)
	logger.debug("extracted %d candidates via %s", len(candidates), attempt.stage)
	return candidates

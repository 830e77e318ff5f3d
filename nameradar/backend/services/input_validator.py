from __future__ import annotations

import os
from typing import Any

from nameradar.backend import constants
from nameradar.backend.services.errors import BrandServiceError, ErrorKind


def max_input_chars() -> int:
	raw = os.getenv("BRAND_MAX_INPUT_CHARS", "").strip()
	if not raw:
		return constants.DEFAULT_MAX_INPUT_CHARS
	try:
		value = int(raw)
	except ValueError:
		return constants.DEFAULT_MAX_INPUT_CHARS
	return value if value >= 1 else constants.DEFAULT_MAX_INPUT_CHARS


def validate_input(body: Any) -> str:
	if not isinstance(body, dict):
		raise BrandServiceError(ErrorKind.INVALID_INPUT, "request body is not a JSON object")
	value = body.get(constants.USER_INPUT_FIELD)
	if not isinstance(value, str):
		raise BrandServiceError(
			ErrorKind.INVALID_INPUT,
			f"{constants.USER_INPUT_FIELD} missing or not a string ({type(value).__name__})",
		)
	text = value.strip()
	if not text:
		raise BrandServiceError(ErrorKind.INVALID_INPUT, f"{constants.USER_INPUT_FIELD} is blank")
	limit = max_input_chars()
	if len(text) > limit:
		raise BrandServiceError(
			ErrorKind.INVALID_INPUT,
			f"{constants.USER_INPUT_FIELD} has {len(text)} chars, limit is {limit}",
		)
	return text

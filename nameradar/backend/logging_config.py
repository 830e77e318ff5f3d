from __future__ import annotations

import logging
import os
import re
from contextvars import ContextVar
from typing import Optional


_LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"
_DEFAULT_LEVEL = "INFO"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_SECRET_PATTERNS = [
	(re.compile(r"Bearer\s+[^\s\"']+"), "Bearer ***"),
	(re.compile(r"(api[_-]?key[\"']?\s*[:=]\s*[\"']?)[^\"'\s,}]+", re.IGNORECASE), r"\1***"),
]


class RequestIdFilter(logging.Filter):
	def filter(self, record: logging.LogRecord) -> bool:
		record.request_id = request_id_var.get() or "-"
		return True


class SecretMaskingFilter(logging.Filter):
	"""Masks bearer tokens and api keys in rendered log messages."""

	def filter(self, record: logging.LogRecord) -> bool:
		message = record.getMessage()
		masked = mask_secrets(message)
		if masked != message:
			record.msg = masked
			record.args = None
		return True


def mask_secrets(text: str) -> str:
	for pattern, replacement in _SECRET_PATTERNS:
		text = pattern.sub(replacement, text)
	return text


def _log_level() -> int:
	raw = os.getenv("NAMERADAR_LOG_LEVEL", _DEFAULT_LEVEL).strip().upper() or _DEFAULT_LEVEL
	level = logging.getLevelName(raw)
	return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
	handler = logging.StreamHandler()
	handler.setFormatter(logging.Formatter(_LOG_FORMAT))
	handler.addFilter(RequestIdFilter())
	handler.addFilter(SecretMaskingFilter())
	logging.basicConfig(level=_log_level(), handlers=[handler], force=True)

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
	UNAUTHENTICATED = ("unauthenticated", 401, "Unauthorized. Please sign in.")
	NOT_ENTITLED = ("not_entitled", 403, "Subscription required. Please subscribe to generate brand names.")
	INVALID_INPUT = ("invalid_input", 400, "Please provide a brand description.")
	MISCONFIGURED_PROVIDER = ("misconfigured_provider", 500, "Service configuration error. Please contact support.")
	PROVIDER_ERROR = ("provider_error", 500, "Failed to generate brand names. Please try again.")
	TRANSPORT_FAILURE = ("transport_failure", 500, "Failed to generate brand names. Please try again.")
	TIMEOUT = ("timeout", 504, "Request timed out. Please try again.")
	UNPARSABLE_OUTPUT = ("unparsable_output", 500, "Invalid response from AI. Please try again.")

	def __init__(self, code: str, status_code: int, message: str):
		self.code = code
		self.status_code = status_code
		self.message = message


class BrandServiceError(Exception):
	"""Terminal pipeline failure.

	``detail`` is for server-side logs only; callers see ``kind.message``.
	"""

	def __init__(self, kind: ErrorKind, detail: str = ""):
		super().__init__(detail or kind.name)
		self.kind = kind
		self.detail = detail

	@property
	def status_code(self) -> int:
		return self.kind.status_code

	@property
	def message(self) -> str:
		return self.kind.message

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from nameradar.backend.services.errors import BrandServiceError, ErrorKind


@dataclass(frozen=True)
class CallerContext:
	identity: Optional[str]
	is_entitled: bool


def check_access(caller: CallerContext) -> str:
	"""Return the caller identity, or raise before any external call is made."""
	identity = (caller.identity or "").strip()
	if not identity:
		raise BrandServiceError(ErrorKind.UNAUTHENTICATED, "no authenticated identity on request")
	if not caller.is_entitled:
		raise BrandServiceError(ErrorKind.NOT_ENTITLED, f"caller {identity} has no active subscription")
	return identity

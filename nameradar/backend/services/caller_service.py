from __future__ import annotations

from typing import Optional

from fastapi import Request

from nameradar.backend import constants
from nameradar.backend.services import subscription_service
from nameradar.backend.services.access_gate import CallerContext


def resolve_caller_identity(request: Request) -> Optional[str]:
	# The session layer in front of this service forwards the verified user id.
	identity = request.headers.get(constants.CALLER_IDENTITY_HEADER, "").strip()
	return identity or None


def resolve_entitlement(identity: str) -> bool:
	return subscription_service.is_subscribed(identity)


def caller_context(request: Request) -> CallerContext:
	identity = resolve_caller_identity(request)
	if identity is None:
		return CallerContext(identity=None, is_entitled=False)
	return CallerContext(identity=identity, is_entitled=resolve_entitlement(identity))

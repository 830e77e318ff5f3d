from __future__ import annotations

import os
from threading import Lock
from typing import Set


_SUBSCRIBED: Set[str] = set()
_SEEDED = False
_LOCK = Lock()


def _seed_from_env_locked() -> None:
	global _SEEDED
	if _SEEDED:
		return
	raw = os.getenv("NAMERADAR_SUBSCRIBED_USERS", "")
	_SUBSCRIBED.update(item.strip() for item in raw.split(",") if item.strip())
	_SEEDED = True


def is_subscribed(identity: str) -> bool:
	with _LOCK:
		_seed_from_env_locked()
		return identity in _SUBSCRIBED


def grant(identity: str) -> None:
	cleaned = identity.strip()
	if not cleaned:
		raise ValueError("identity must be non-empty.")
	with _LOCK:
		_seed_from_env_locked()
		_SUBSCRIBED.add(cleaned)


def revoke(identity: str) -> None:
	with _LOCK:
		_seed_from_env_locked()
		_SUBSCRIBED.discard(identity.strip())


def reset() -> None:
	"""Drop all grants; the env seed is re-read on next access."""
	global _SEEDED
	with _LOCK:
		_SUBSCRIBED.clear()
		_SEEDED = False

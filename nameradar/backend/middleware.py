from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from nameradar.backend.logging_config import request_id_var


logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
	async def dispatch(self, request: Request, call_next) -> Response:
		request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
		request.state.request_id = request_id
		token = request_id_var.set(request_id)
		start = time.perf_counter()
		try:
			response = await call_next(request)
		except Exception:
			# The request id stays set so the app-level error handler logs it.
			logger.info(
				"%s %s -> 500 in %.3fs",
				request.method,
				request.url.path,
				time.perf_counter() - start,
			)
			raise
		process_time = time.perf_counter() - start
		logger.info(
			"%s %s -> %s in %.3fs",
			request.method,
			request.url.path,
			response.status_code,
			process_time,
		)
		request_id_var.reset(token)
		response.headers["X-Request-ID"] = request_id
		response.headers["X-Process-Time"] = f"{process_time:.6f}"
		return response

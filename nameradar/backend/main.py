from __future__ import annotations

import logging
import os
from typing import Any, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.trustedhost import TrustedHostMiddleware

from nameradar.backend import constants
from nameradar.backend.logging_config import configure_logging
from nameradar.backend.middleware import RequestContextMiddleware
from nameradar.backend.response import UNEXPECTED_ERROR_MESSAGE, error_body
from nameradar.backend.routers import brands, health
from nameradar.backend.services.errors import ErrorKind


logger = logging.getLogger(__name__)


def _csv_env(name: str, default: List[str]) -> List[str]:
	raw = os.getenv(name, "")
	values = [item.strip() for item in raw.split(",") if item.strip()]
	return values or list(default)


def trusted_hosts() -> List[str]:
	return _csv_env("NAMERADAR_TRUSTED_HOSTS", constants.DEFAULT_TRUSTED_HOSTS)


def cors_allow_origins() -> List[str]:
	return _csv_env("NAMERADAR_CORS_ORIGINS", constants.DEFAULT_CORS_ALLOW_ORIGINS)


def create_app() -> FastAPI:
	configure_logging()
	app = FastAPI(
		title=constants.APP_NAME,
		version=constants.APP_VERSION,
	)
	_register_middleware(app)
	_register_handlers(app)
	_register_routers(app)
	return app


def _register_middleware(app: FastAPI) -> None:
	app.add_middleware(RequestContextMiddleware)
	app.add_middleware(GZipMiddleware, minimum_size=1024)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=cors_allow_origins(),
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	app.add_middleware(
		TrustedHostMiddleware,
		allowed_hosts=trusted_hosts(),
	)


def _register_routers(app: FastAPI) -> None:
	app.include_router(brands.router)
	app.include_router(health.router)


def _register_handlers(app: FastAPI) -> None:
	@app.exception_handler(HTTPException)
	async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
		return JSONResponse(status_code=exc.status_code, content=error_body(_exc_message(exc.detail)))

	@app.exception_handler(StarletteHTTPException)
	async def handle_starlette_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
		return JSONResponse(status_code=exc.status_code, content=error_body(_exc_message(exc.detail)))

	@app.exception_handler(RequestValidationError)
	async def handle_request_validation_error(
		request: Request,
		exc: RequestValidationError,
	) -> JSONResponse:
		logger.warning("request validation failed on %s: %s", request.url.path, exc.errors())
		kind = ErrorKind.INVALID_INPUT
		return JSONResponse(status_code=kind.status_code, content=error_body(kind.message))

	@app.exception_handler(Exception)
	async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
		logger.exception("unhandled error on %s %s", request.method, request.url.path)
		return JSONResponse(status_code=500, content=error_body(UNEXPECTED_ERROR_MESSAGE))


def _exc_message(detail: Any) -> str:
	if isinstance(detail, str):
		return detail
	if detail is None:
		return "Request failed."
	return str(detail)


app = create_app()

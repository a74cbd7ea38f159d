# (c) Copyright Datacraft, 2026
"""Application factory and entry point."""
import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .exceptions import InvalidRequestError
from .rebac import (
	RelationshipChecker,
	RelationshipStore,
	build_permission_map,
	load_schema_file,
)
from .routers import authorize_router, relationships_router, system_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
	"""
	Build the authorization server.

	The schema and the relationships file are loaded eagerly;
	SchemaLoadError and ConfigLoadError propagate and abort startup.
	"""
	settings = settings or get_settings()

	zed_schema = load_schema_file(settings.schema_path)
	store = RelationshipStore.load_file(settings.relationships_path)
	permission_map = build_permission_map(zed_schema)

	app = FastAPI(title="ReBAC Authorization Server")
	app.state.settings = settings
	app.state.schema = zed_schema
	app.state.permission_map = permission_map
	app.state.store = store
	app.state.checker = RelationshipChecker(
		store,
		permission_map,
		global_resource=settings.global_admin_resource,
		global_permission=settings.global_admin_permission,
	)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_origins,
		allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
		allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
	)

	@app.exception_handler(RequestValidationError)
	async def validation_error_handler(request: Request, exc: RequestValidationError):
		logger.debug(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
		return JSONResponse(
			status_code=status.HTTP_400_BAD_REQUEST,
			content={"detail": InvalidRequestError().detail},
		)

	app.include_router(authorize_router)
	app.include_router(relationships_router)
	app.include_router(system_router)

	logger.info(
		f"Loaded {len(zed_schema)} definitions from Zed schema, "
		f"{len(store)} relationships from config file"
	)
	return app


def run():
	settings = get_settings()
	logging.basicConfig(
		level=settings.log_level,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	logger.info(f"Authorization server starting on port {settings.port}")
	uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
	run()

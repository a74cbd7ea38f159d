# (c) Copyright Datacraft, 2026
"""Schema introspection and health endpoints."""
from fastapi import APIRouter, Depends, Request

from authz_server import schema
from authz_server.rebac import PermissionMap, RelationshipStore, Schema
from authz_server.utils import get_permission_map, get_schema, get_store

router = APIRouter(tags=["System"])


@router.get("/schema", response_model=schema.SchemaResponse)
async def get_schema_info(
	zed_schema: Schema = Depends(get_schema),
	permission_map: PermissionMap = Depends(get_permission_map),
) -> schema.SchemaResponse:
	"""Parsed schema definitions and the derived permission map."""
	return schema.SchemaResponse(
		schema_=zed_schema.to_dict(),
		permission_map=permission_map.to_dict(),
		total_definitions=len(zed_schema),
	)


@router.get("/health", response_model=schema.HealthResponse)
async def health(
	request: Request,
	store: RelationshipStore = Depends(get_store),
) -> schema.HealthResponse:
	return schema.HealthResponse(
		status="healthy",
		service=request.app.state.settings.service_name,
		relationships=f"{len(store)} loaded from config",
	)

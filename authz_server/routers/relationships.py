# (c) Copyright Datacraft, 2026
"""Relationship and user role management endpoints.

Changes made here are kept in memory only and are lost on restart.
"""
import logging

from fastapi import APIRouter, Depends, Query

from authz_server import schema
from authz_server.exceptions import InvalidRequestError
from authz_server.rebac import RelationshipStore
from authz_server.utils import get_store, raise_on_empty

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Relationships"])

ADDED_NOTE = "Added to memory (lost on restart)"
REMOVED_NOTE = "Removed from memory (reloaded from config file on restart)"


@router.get("/relationships", response_model=schema.RelationshipList)
async def list_relationships(
	store: RelationshipStore = Depends(get_store),
) -> schema.RelationshipList:
	"""List all relationships currently held in memory."""
	return schema.RelationshipList(relationships=store.list_relationships())


@router.post("/relationships", response_model=schema.RelationshipAdded)
async def add_relationship(
	request: schema.RelationshipRequest,
	store: RelationshipStore = Depends(get_store),
) -> schema.RelationshipAdded:
	"""Add a relationship."""
	added = store.add(request.to_relationship())
	return schema.RelationshipAdded(
		added=added,
		relationship=request,
		note=ADDED_NOTE,
	)


@router.delete("/relationships", response_model=schema.RelationshipRemoved)
async def remove_relationship(
	request: schema.RelationshipRequest,
	store: RelationshipStore = Depends(get_store),
) -> schema.RelationshipRemoved:
	"""Remove the first relationship matching the body exactly."""
	removed = store.remove(request.to_relationship())
	return schema.RelationshipRemoved(
		removed=removed,
		relationship=request,
		note=REMOVED_NOTE,
	)


@router.get("/user-roles", response_model=schema.UserRolesResponse)
async def get_user_roles(
	user: str | None = Query(None, description="User to list roles for"),
	resource: str | None = Query(None, description="Optional resource filter"),
	store: RelationshipStore = Depends(get_store),
) -> schema.UserRolesResponse:
	"""List the relations a user holds, optionally on one resource."""
	if not user:
		raise InvalidRequestError("User parameter is required")

	logger.info(f"Getting roles for user: {user}, resource: {resource or ''}")
	return schema.UserRolesResponse(
		user=user,
		relationships=store.relationships_for_user(user, resource),
	)


@router.post("/user-roles", response_model=schema.UserRolesResponse)
async def query_user_roles(
	request: schema.UserRolesRequest,
	store: RelationshipStore = Depends(get_store),
) -> schema.UserRolesResponse:
	"""Same as GET /user-roles with a JSON body."""
	raise_on_empty("User is required", user=request.user)

	logger.info(f"Getting roles for user: {request.user}, resource: {request.resource}")
	return schema.UserRolesResponse(
		user=request.user,
		relationships=store.relationships_for_user(request.user, request.resource),
	)


@router.post(
	"/add-user-role",
	response_model=schema.RelationshipAdded,
	response_model_exclude_none=True,
)
async def add_user_role(
	request: schema.RelationshipRequest,
	store: RelationshipStore = Depends(get_store),
) -> schema.RelationshipAdded:
	"""Grant a role (relation) on a resource to a user."""
	raise_on_empty(
		"Resource, relation, and subject are required",
		resource=request.resource,
		relation=request.relation,
		subject=request.subject,
	)

	logger.info(
		f"Adding role: user={request.subject}, resource={request.resource}, "
		f"relation={request.relation}"
	)
	added = store.add(request.to_relationship())
	return schema.RelationshipAdded(added=added, relationship=request)


@router.post(
	"/remove-user-role",
	response_model=schema.RelationshipRemoved,
	response_model_exclude_none=True,
)
async def remove_user_role(
	request: schema.RelationshipRequest,
	store: RelationshipStore = Depends(get_store),
) -> schema.RelationshipRemoved:
	"""Revoke a role (relation) on a resource from a user."""
	raise_on_empty(
		"Resource, relation, and subject are required",
		resource=request.resource,
		relation=request.relation,
		subject=request.subject,
	)

	logger.info(
		f"Removing role: user={request.subject}, resource={request.resource}, "
		f"relation={request.relation}"
	)
	removed = store.remove(request.to_relationship())
	return schema.RelationshipRemoved(removed=removed, relationship=request)

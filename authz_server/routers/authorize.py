# (c) Copyright Datacraft, 2026
"""Authorization check endpoint."""
import logging

from fastapi import APIRouter, Depends

from authz_server import schema
from authz_server.rebac import RelationshipChecker
from authz_server.utils import get_checker

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Authorization"])


@router.post(
	"/authorize",
	response_model=schema.AuthResponse,
	response_model_exclude_none=True,
)
async def authorize(
	request: schema.AuthRequest,
	checker: RelationshipChecker = Depends(get_checker),
) -> schema.AuthResponse:
	"""Check whether subject holds permission on resource."""
	decision = checker.authorize(
		request.subject,
		request.resource,
		request.permission,
	)
	return schema.AuthResponse.model_validate(decision)

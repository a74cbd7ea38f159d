# (c) Copyright Datacraft, 2026
from fastapi import Request

from .exceptions import InvalidRequestError
from .rebac import PermissionMap, RelationshipChecker, RelationshipStore, Schema


def raise_on_empty(message: str, **kwargs):
    """Raises InvalidRequestError if at least one value of the
    key in kwargs dictionary is empty
    """
    for value in kwargs.values():
        if not value:
            raise InvalidRequestError(message)


def get_store(request: Request) -> RelationshipStore:
    return request.app.state.store


def get_checker(request: Request) -> RelationshipChecker:
    return request.app.state.checker


def get_schema(request: Request) -> Schema:
    return request.app.state.schema


def get_permission_map(request: Request) -> PermissionMap:
    return request.app.state.permission_map

# (c) Copyright Datacraft, 2026
"""Error types raised by the authorization server and its client."""
from fastapi import HTTPException, status


class AuthzError(Exception):
	"""Base class for authorization server errors."""


class SchemaLoadError(AuthzError):
	"""The Zed schema could not be read or contains no definitions."""


class ConfigLoadError(AuthzError):
	"""The relationships file could not be read or parsed."""


class InvalidRequestError(HTTPException):
	"""Malformed request body or missing required field, answered with 400."""

	def __init__(self, detail: str = "Invalid request body"):
		super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidResourceError(AuthzError):
	"""Resource identifier is not of the form ``type:id``."""


class AuthorizationServiceError(AuthzError):
	"""The remote authorization service could not produce a decision."""

# (c) Copyright Datacraft, 2026
"""Client used by resource services to ask the authorization server."""
import logging

import httpx
from fastapi import Request

from .exceptions import AuthorizationServiceError, InvalidResourceError
from .rebac import AuthDecision
from .rebac.checker import DEFAULT_GLOBAL_PERMISSION, DEFAULT_GLOBAL_RESOURCE

logger = logging.getLogger(__name__)

SUBJECT_HEADER = "X-User-ID"
ANONYMOUS = "anonymous"


def subject_from_request(request: Request) -> str:
	"""Subject of a request, taken from the X-User-ID header."""
	return request.headers.get(SUBJECT_HEADER) or ANONYMOUS


def split_resource(resource: str) -> tuple[str, str]:
	"""Split ``type:id`` into its parts."""
	resource_type, sep, resource_id = resource.partition(':')
	if not sep or not resource_type or not resource_id:
		raise InvalidResourceError(f"Invalid resource format: {resource}")
	return resource_type, resource_id


class AuthorizationClient:
	"""
	Async client for the ``/authorize`` endpoint.

	Errors talking to the server raise AuthorizationServiceError; callers
	report them as server errors, not as denials.
	"""

	def __init__(
		self,
		base_url: str,
		timeout: float = 10.0,
		global_resource: str = DEFAULT_GLOBAL_RESOURCE,
		global_permission: str = DEFAULT_GLOBAL_PERMISSION,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self.base_url = base_url.rstrip("/")
		self.timeout = timeout
		self.global_resource = global_resource
		self.global_permission = global_permission
		self._transport = transport

	async def check_authorization(
		self,
		subject: str,
		resource: str,
		permission: str,
	) -> AuthDecision:
		payload = {
			"subject": subject,
			"resource": resource,
			"permission": permission,
		}

		try:
			async with httpx.AsyncClient(transport=self._transport) as client:
				response = await client.post(
					f"{self.base_url}/authorize",
					json=payload,
					timeout=self.timeout,
				)
		except httpx.HTTPError as e:
			logger.error(f"Authorization request failed: {e}")
			raise AuthorizationServiceError(f"Failed to call authorization service: {e}") from e

		if response.status_code != 200:
			raise AuthorizationServiceError(
				f"Authorization service returned status: {response.status_code}"
			)

		try:
			data = response.json()
			return AuthDecision(
				allowed=bool(data["allowed"]),
				reason=data.get("reason"),
			)
		except (ValueError, KeyError, TypeError) as e:
			raise AuthorizationServiceError(
				f"Failed to decode authorization response: {e}"
			) from e

	async def check_global_admin(self, subject: str) -> bool:
		decision = await self.check_authorization(
			subject, self.global_resource, self.global_permission
		)
		return decision.allowed

	async def check_authorization_with_global(
		self,
		subject: str,
		resource: str,
		permission: str,
	) -> AuthDecision:
		"""Global admin check first, then the resource check.

		A failed global admin call falls through to the resource check.
		"""
		try:
			if await self.check_global_admin(subject):
				return AuthDecision(allowed=True)
		except AuthorizationServiceError as e:
			logger.warning(f"Global admin check failed for {subject}: {e}")

		return await self.check_authorization(subject, resource, permission)

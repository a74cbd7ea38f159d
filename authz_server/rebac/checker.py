# (c) Copyright Datacraft, 2026
"""Permission checking against the relationship store."""
import logging
from dataclasses import dataclass

from .permissions import PermissionResolver
from .tuples import RelationshipStore, normalize_subject

logger = logging.getLogger(__name__)

DEFAULT_GLOBAL_RESOURCE = 'global:main'
DEFAULT_GLOBAL_PERMISSION = 'full_access'


@dataclass
class AuthDecision:
	"""Result of an authorization check. ``reason`` is set on denial only."""
	allowed: bool
	reason: str | None = None


def denial_reason(subject: str, resource: str, permission: str) -> str:
	return f"User {subject} does not have {permission} permission on {resource}"


class RelationshipChecker:
	"""
	Check permissions using stored relationship tuples.

	A subject holds a permission on a resource when any tuple for that
	subject and resource carries a relation that grants the permission.
	Resources are compared as opaque strings.

	The global override variant first checks the sentinel
	``global_resource``/``global_permission`` pair and, when it holds,
	allows without looking at the requested resource at all.
	"""

	def __init__(
		self,
		store: RelationshipStore,
		permissions: PermissionResolver,
		global_resource: str = DEFAULT_GLOBAL_RESOURCE,
		global_permission: str = DEFAULT_GLOBAL_PERMISSION,
	):
		self.store = store
		self.permissions = permissions
		self.global_resource = global_resource
		self.global_permission = global_permission

	def check(self, subject: str, resource: str, permission: str) -> bool:
		"""Check if subject holds permission on resource."""
		for relationship in self.store.find(subject, resource):
			if self.permissions.grants(relationship.relation, permission):
				return True
		return False

	def is_global_admin(self, subject: str) -> bool:
		return self.check(subject, self.global_resource, self.global_permission)

	def check_with_global_override(
		self,
		subject: str,
		resource: str,
		permission: str,
	) -> bool:
		"""Sentinel check first, ordinary check second."""
		if self.is_global_admin(subject):
			logger.debug(
				f"Global admin override for {normalize_subject(subject)} "
				f"on {resource}#{permission}"
			)
			return True
		return self.check(subject, resource, permission)

	def authorize(
		self,
		subject: str,
		resource: str,
		permission: str,
		global_override: bool = False,
	) -> AuthDecision:
		"""Check and wrap the outcome with a denial reason."""
		if global_override:
			allowed = self.check_with_global_override(subject, resource, permission)
		else:
			allowed = self.check(subject, resource, permission)

		if allowed:
			return AuthDecision(allowed=True)

		logger.debug(f"Denied {subject} {permission} on {resource}")
		return AuthDecision(
			allowed=False,
			reason=denial_reason(subject, resource, permission),
		)

from pydantic import BaseModel, ConfigDict, Field, field_validator

from authz_server.rebac import Relationship, UserRelationship


class RequestBody(BaseModel):
    """Missing or null request fields decode as empty strings."""

    @field_validator("*", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return "" if value is None else value


class AuthRequest(RequestBody):
    subject: str = ""
    resource: str = ""
    permission: str = ""


class AuthResponse(BaseModel):
    allowed: bool
    reason: str | None = None

    model_config = ConfigDict(from_attributes=True)


class RelationshipRequest(RequestBody):
    resource: str = ""
    relation: str = ""
    subject: str = ""

    def to_relationship(self) -> Relationship:
        return Relationship(
            resource=self.resource,
            relation=self.relation,
            subject=self.subject,
        )


class RelationshipList(BaseModel):
    relationships: list[Relationship]


class RelationshipAdded(BaseModel):
    added: bool
    relationship: RelationshipRequest
    note: str | None = None


class RelationshipRemoved(BaseModel):
    removed: bool
    relationship: RelationshipRequest
    note: str | None = None


class UserRolesRequest(RequestBody):
    user: str = ""
    resource: str = ""  # optional filter


class UserRolesResponse(BaseModel):
    user: str
    relationships: list[UserRelationship]


class DefinitionInfo(BaseModel):
    relations: dict[str, str]
    permissions: dict[str, str]


class SchemaResponse(BaseModel):
    schema_: dict[str, DefinitionInfo] = Field(alias="schema")
    permission_map: dict[str, list[str]]
    total_definitions: int

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    status: str
    service: str
    relationships: str

"""
Notification envelope: a closed schema tagged by `type`, then by `payload.action`.

    {"type": "category_update", "payload": {"action": "created", "category": {...}}}
    {"type": "category_update", "payload": {"action": "deleted", "categoryId": "..."}}
    {"type": "statement_update", "payload": {"action": "updated", "statement": {...}}}
    {"type": "ack", "payload": "Message received"}

The service also sets a top-level `user_id` naming the recipient.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

from linka_harness.models.resource import Category, Statement


class EnvelopeType:
    CATEGORY_UPDATE = "category_update"
    STATEMENT_UPDATE = "statement_update"
    ACK = "ack"


class Action:
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


class CategoryCreated(BaseModel):
    model_config = _FROZEN
    action: Literal["created"]
    category: Category


class CategoryUpdated(BaseModel):
    model_config = _FROZEN
    action: Literal["updated"]
    category: Category


class CategoryDeleted(BaseModel):
    model_config = _FROZEN
    action: Literal["deleted"]
    category_id: str = Field(
        validation_alias=AliasChoices("categoryId", "category_id"), serialization_alias="categoryId",
    )


class StatementCreated(BaseModel):
    model_config = _FROZEN
    action: Literal["created"]
    statement: Statement


class StatementUpdated(BaseModel):
    model_config = _FROZEN
    action: Literal["updated"]
    statement: Statement


class StatementDeleted(BaseModel):
    model_config = _FROZEN
    action: Literal["deleted"]
    statement_id: str = Field(
        validation_alias=AliasChoices("statementId", "statement_id"), serialization_alias="statementId",
    )


CategoryPayload = Annotated[
    Union[CategoryCreated, CategoryUpdated, CategoryDeleted], Field(discriminator="action")
]
StatementPayload = Annotated[
    Union[StatementCreated, StatementUpdated, StatementDeleted], Field(discriminator="action")
]


def _recipient() -> Any:
    return Field(
        None,
        validation_alias=AliasChoices("user_id", "recipientUserId", "recipient_user_id"),
        serialization_alias="user_id",
    )


class CategoryUpdate(BaseModel):
    model_config = _FROZEN
    type: Literal["category_update"]
    payload: CategoryPayload
    recipient_user_id: Optional[str] = _recipient()

    @property
    def action(self) -> str:
        return self.payload.action

    @property
    def subject_id(self) -> str:
        """Id of the category the event is about."""
        if isinstance(self.payload, CategoryDeleted):
            return self.payload.category_id
        return self.payload.category.id

    @property
    def owner_user_id(self) -> Optional[str]:
        if isinstance(self.payload, CategoryDeleted):
            return None
        return self.payload.category.owner_user_id


class StatementUpdate(BaseModel):
    model_config = _FROZEN
    type: Literal["statement_update"]
    payload: StatementPayload
    recipient_user_id: Optional[str] = _recipient()

    @property
    def action(self) -> str:
        return self.payload.action

    @property
    def subject_id(self) -> str:
        """Id of the statement the event is about."""
        if isinstance(self.payload, StatementDeleted):
            return self.payload.statement_id
        return self.payload.statement.id

    @property
    def owner_user_id(self) -> Optional[str]:
        if isinstance(self.payload, StatementDeleted):
            return None
        return self.payload.statement.owner_user_id


class Ack(BaseModel):
    """Server reply to a frame the client sent."""

    model_config = _FROZEN
    type: Literal["ack"]
    payload: str = ""
    recipient_user_id: Optional[str] = _recipient()

    @property
    def action(self) -> Optional[str]:
        return None

    @property
    def subject_id(self) -> Optional[str]:
        return None

    @property
    def owner_user_id(self) -> Optional[str]:
        return None


Envelope = Annotated[Union[CategoryUpdate, StatementUpdate, Ack], Field(discriminator="type")]

ENVELOPE_ADAPTER = TypeAdapter(Envelope)

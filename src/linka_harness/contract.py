"""
Notification contract checks.

Per resource: NonExistent → created → updated* → deleted. created/updated
envelopes carry the full post-change representation, deleted carries the id
only. Delivery is scoped to the owner, and deleting a category does not
cascade to the statements that reference it.

Every check raises ContractViolation on failure.
"""

from typing import Iterable, Union

from linka_harness.errors import ContractViolation
from linka_harness.message_log import MessageLog
from linka_harness.models.envelope import (
    Action,
    CategoryDeleted,
    Envelope,
    EnvelopeType,
    StatementDeleted,
)
from linka_harness.models.resource import Category, Statement

Resource = Union[Category, Statement]

# Timestamps are formatted by the server and may differ between REST and push.
_COMPARED_EXCLUDE = {"created_at", "updated_at"}


def _entries(source: Union[MessageLog, Iterable[Envelope]]) -> tuple[Envelope, ...]:
    if isinstance(source, MessageLog):
        return source.snapshot()
    return tuple(source)


def _event_type_for(resource: Resource) -> str:
    if isinstance(resource, Category):
        return EnvelopeType.CATEGORY_UPDATE
    return EnvelopeType.STATEMENT_UPDATE


def _check_representation(envelope: Envelope, resource: Resource, action: str) -> None:
    expected_type = _event_type_for(resource)
    if envelope.type != expected_type:
        raise ContractViolation(
            f"Expected {expected_type}, got {envelope.type}",
            details={"expected": expected_type, "actual": envelope.type},
        )
    if envelope.action != action:
        raise ContractViolation(
            f"Expected action {action!r}, got {envelope.action!r}",
            details={"expected": action, "actual": envelope.action},
        )
    sent = envelope.payload.category if isinstance(resource, Category) else envelope.payload.statement
    expected = resource.model_dump(exclude=_COMPARED_EXCLUDE)
    actual = sent.model_dump(exclude=_COMPARED_EXCLUDE)
    if actual != expected:
        raise ContractViolation(
            f"{expected_type}/{action} representation differs from the resource",
            details={"expected": expected, "actual": actual},
        )


def check_created(envelope: Envelope, resource: Resource) -> None:
    _check_representation(envelope, resource, Action.CREATED)


def check_updated(envelope: Envelope, resource: Resource) -> None:
    """The envelope must carry the post-update representation."""
    _check_representation(envelope, resource, Action.UPDATED)


def check_deleted(envelope: Envelope, event_type: str, resource_id: str) -> None:
    if envelope.type != event_type or envelope.action != Action.DELETED:
        raise ContractViolation(
            f"Expected {event_type}/deleted, got {envelope.type}/{envelope.action}",
        )
    if not isinstance(envelope.payload, (CategoryDeleted, StatementDeleted)):
        raise ContractViolation("Deleted payload must carry only the resource id")
    if envelope.subject_id != resource_id:
        raise ContractViolation(
            f"Deleted id {envelope.subject_id!r} != {resource_id!r}",
            details={"expected": resource_id, "actual": envelope.subject_id},
        )


def check_isolation(source: Union[MessageLog, Iterable[Envelope]], user_id: str) -> None:
    """No envelope in `source` is addressed to, or describes a resource of, another user."""
    for index, envelope in enumerate(_entries(source)):
        if envelope.recipient_user_id is not None and envelope.recipient_user_id != user_id:
            raise ContractViolation(
                f"Envelope #{index} addressed to {envelope.recipient_user_id!r}, expected {user_id!r}",
                details={"index": index, "recipient": envelope.recipient_user_id},
            )
        owner = envelope.owner_user_id
        if owner is not None and owner != user_id:
            raise ContractViolation(
                f"Envelope #{index} describes a resource owned by {owner!r}",
                details={"index": index, "owner": owner},
            )


def check_no_cascade(
    source: Union[MessageLog, Iterable[Envelope]],
    category_id: str,
    statement_ids: Iterable[str],
) -> None:
    """Deleting `category_id` produced exactly one category deleted envelope and
    no statement_update envelope for the statements that referenced it."""
    entries = _entries(source)
    deletions = [
        i for i, env in enumerate(entries)
        if env.type == EnvelopeType.CATEGORY_UPDATE
        and env.action == Action.DELETED
        and env.subject_id == category_id
    ]
    if len(deletions) != 1:
        raise ContractViolation(
            f"Expected exactly one deletion of category {category_id!r}, saw {len(deletions)}",
            details={"count": len(deletions)},
        )
    dependents = set(statement_ids)
    for env in entries[deletions[0]:]:
        if env.type == EnvelopeType.STATEMENT_UPDATE and env.subject_id in dependents:
            raise ContractViolation(
                f"Category deletion cascaded to statement {env.subject_id!r} ({env.action})",
                details={"statement_id": env.subject_id, "action": env.action},
            )

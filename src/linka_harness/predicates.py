"""
Composable envelope predicates for wait_for().

    conn.wait_for("category_update", all_of(action_is("updated"), about_category(cat.id)))
"""

from linka_harness.models.envelope import (
    CategoryCreated,
    CategoryUpdated,
    Envelope,
    EnvelopeType,
    StatementCreated,
    StatementUpdated,
)
from linka_harness.waiter import Predicate


def of_type(event_type: str) -> Predicate:
    return lambda env: env.type == event_type


def action_is(action: str) -> Predicate:
    return lambda env: env.action == action


def about_category(category_id: str) -> Predicate:
    return lambda env: env.type == EnvelopeType.CATEGORY_UPDATE and env.subject_id == category_id


def about_statement(statement_id: str) -> Predicate:
    return lambda env: env.type == EnvelopeType.STATEMENT_UPDATE and env.subject_id == statement_id


def category_titled(title: str) -> Predicate:
    def check(env: Envelope) -> bool:
        payload = env.payload
        return isinstance(payload, (CategoryCreated, CategoryUpdated)) and payload.category.title == title
    return check


def statement_text(text: str) -> Predicate:
    def check(env: Envelope) -> bool:
        payload = env.payload
        return isinstance(payload, (StatementCreated, StatementUpdated)) and payload.statement.text == text
    return check


def all_of(*predicates: Predicate) -> Predicate:
    return lambda env: all(p(env) for p in predicates)


def any_of(*predicates: Predicate) -> Predicate:
    return lambda env: any(p(env) for p in predicates)


def negate(predicate: Predicate) -> Predicate:
    return lambda env: not predicate(env)

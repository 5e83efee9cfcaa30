"""
Category and statement REST APIs.
"""

from __future__ import annotations

from typing import Any

from linka_harness.models.resource import Category, Statement
from linka_harness.transport.http import HttpClient


class CategoriesAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def list(self) -> list[Category]:
        result = await self._http.get("/categories")
        return [Category.model_validate(c) for c in result.get("categories") or []]

    async def get(self, category_id: str) -> Category:
        return Category.model_validate(await self._http.get(f"/categories/{category_id}"))

    async def create(self, title: str) -> Category:
        return Category.model_validate(await self._http.post("/categories", {"title": title}))

    async def update(self, category_id: str, title: str) -> Category:
        return Category.model_validate(await self._http.put(f"/categories/{category_id}", {"title": title}))

    async def delete(self, category_id: str) -> Any:
        """Statements referencing the category are left in place."""
        return await self._http.delete(f"/categories/{category_id}")


class StatementsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def list(self) -> list[Statement]:
        result = await self._http.get("/statements")
        return [Statement.model_validate(s) for s in result.get("statements") or []]

    async def get(self, statement_id: str) -> Statement:
        return Statement.model_validate(await self._http.get(f"/statements/{statement_id}"))

    async def create(self, text: str, category_id: str) -> Statement:
        """The category must be owned by the same user."""
        return Statement.model_validate(
            await self._http.post("/statements", {"title": text, "categoryId": category_id})
        )

    async def update(self, statement_id: str, text: str, category_id: str) -> Statement:
        return Statement.model_validate(
            await self._http.put(f"/statements/{statement_id}", {"title": text, "categoryId": category_id})
        )

    async def delete(self, statement_id: str) -> Any:
        return await self._http.delete(f"/statements/{statement_id}")

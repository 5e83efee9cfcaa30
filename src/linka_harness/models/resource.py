"""
Resource representations carried by REST responses and notifications.

The service names the owner `userId` and, for statements, may name the text
`title`; both spellings are accepted, the canonical one is emitted.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Category(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    owner_user_id: str = Field(
        validation_alias=AliasChoices("ownerUserId", "userId", "owner_user_id"),
        serialization_alias="ownerUserId",
    )
    created_at: str = Field(
        "", validation_alias=AliasChoices("createdAt", "created_at"), serialization_alias="createdAt",
    )
    updated_at: str = Field(
        "", validation_alias=AliasChoices("updatedAt", "updated_at"), serialization_alias="updatedAt",
    )


class Statement(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    text: str = Field(validation_alias=AliasChoices("text", "title"))
    owner_user_id: str = Field(
        validation_alias=AliasChoices("ownerUserId", "userId", "owner_user_id"),
        serialization_alias="ownerUserId",
    )
    category_id: str = Field(
        validation_alias=AliasChoices("categoryId", "category_id"), serialization_alias="categoryId",
    )
    created_at: str = Field(
        "", validation_alias=AliasChoices("createdAt", "created_at"), serialization_alias="createdAt",
    )
    updated_at: str = Field(
        "", validation_alias=AliasChoices("updatedAt", "updated_at"), serialization_alias="updatedAt",
    )

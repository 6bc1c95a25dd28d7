"""Schemas for inbound relay event payloads."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class _EventPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_identifiers(cls, value: Any, info: ValidationInfo) -> Any:
        if info.field_name.endswith("_id") and isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class AnswerSendPayload(_EventPayload):
    question_id: str | None = Field(
        default=None, validation_alias=AliasChoices("questionId", "topicId")
    )
    content: Any = None
    temp_id: str | None = Field(default=None, validation_alias=AliasChoices("tempId", "temp_id"))


class AnswerUpdatePayload(_EventPayload):
    question_id: str | None = Field(
        default=None, validation_alias=AliasChoices("questionId", "topicId")
    )
    answer_id: str | None = Field(default=None, validation_alias=AliasChoices("answerId", "answer_id"))
    content: Any = None
    edit_count: int | None = Field(default=None, validation_alias=AliasChoices("editCount", "edit_count"))
    edited_at: str | None = Field(default=None, validation_alias=AliasChoices("editedAt", "edited_at"))
    original_content: str | None = Field(
        default=None, validation_alias=AliasChoices("originalContent", "original_content")
    )


class MessageSendPayload(_EventPayload):
    question_id: str | None = Field(
        default=None, validation_alias=AliasChoices("questionId", "topicId")
    )
    content: Any = None


__all__ = ["AnswerSendPayload", "AnswerUpdatePayload", "MessageSendPayload"]

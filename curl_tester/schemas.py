from __future__ import annotations

from typing import Any, Literal, TypedDict

from pydantic import BaseModel, Field


PARSE_FAILURE_ISSUE = "Unable to parse validation response"


class ChatTurn(TypedDict):
    role: Literal["user", "assistant"]
    content: str


class ChatReply(BaseModel):
    content: str


class ValidationVerdict(BaseModel):
    isValid: bool
    issues: list[str] = Field(default_factory=list)
    suggestedFix: str | None = None
    explanation: str


class DegradedVerdict(BaseModel):
    isValid: Literal[False] = False
    issues: list[str] = Field(default_factory=lambda: [PARSE_FAILURE_ISSUE])
    explanation: str


class ErrorBody(BaseModel):
    error: str
    details: Any = None

"""
Sucoi - Request Schemas
========================
Pydantic models for every JSON request body.  Field names follow the
dashboard's camelCase keys.

The dashboard posts goals as a JSON-encoded *string* in the ``goal``
field.  ``GoalRequest`` decodes that string before validation, and also
accepts the same object sent as structured JSON.
"""

from __future__ import annotations

import json
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ── Accounts ──────────────────────────────────────────────────────────

class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: str
    password: str
    securityQuestion: Optional[str] = None
    securityAnswer: Optional[str] = None


class SigninRequest(BaseModel):
    email: str
    password: str


class VerifySecurityRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    email: str
    securityAnswer: str
    newPassword: str


# ── Chat ──────────────────────────────────────────────────────────────

class ChatRequest(BaseModel):
    message: Optional[str] = Field(None, description="User's message; empty means 'prompt to retry'")
    username: Optional[str] = Field(None, description="Owner of the exchange; omit to skip persistence")


class DeleteChatRequest(BaseModel):
    chatId: str


# ── Goals ─────────────────────────────────────────────────────────────

class GoalTask(BaseModel):
    id: int
    text: str
    done: bool = False


class GoalEntry(BaseModel):
    day: str
    task: GoalTask


class GoalRequest(BaseModel):
    username: str
    goal: GoalEntry

    @field_validator("goal", mode="before")
    @classmethod
    def _decode_goal(cls, value):
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError(f"goal is not valid JSON: {exc.msg}") from exc
        return value


class DeleteGoalRequest(BaseModel):
    username: str
    taskId: int

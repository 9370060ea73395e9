"""
Sucoi - Record Schemas
=======================
Each Pydantic model describes the shape of one MongoDB collection.  Field
names match the documents on disk (camelCase), which the dashboard has
always read back verbatim.

Collections::

    users  → UserRecord
    goals  → GoalRecord   (unique on username + taskId)
    chats  → ChatRecord
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(BaseModel):
    name: Optional[str] = None
    email: str = Field(..., description="Login identifier, unique")
    # NOTE: stored as plaintext; hash before using beyond a prototype
    password: str
    securityQuestion: Optional[str] = None
    securityAnswer: Optional[str] = Field(None, description="Lowercased, trimmed answer")
    createdAt: datetime = Field(default_factory=utc_now)


class GoalRecord(BaseModel):
    username: str
    day: str
    taskId: int
    taskText: str
    taskDone: bool = False
    createdAt: datetime = Field(default_factory=utc_now)


class ChatRecord(BaseModel):
    username: str
    userMessage: str
    botReply: str
    createdAt: datetime = Field(default_factory=utc_now)

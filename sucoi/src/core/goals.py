"""
Sucoi - Goal Tracking
======================
Per-user daily tasks.  Storage keeps the task fields flat
(``taskId``, ``taskText``, ``taskDone``); the dashboard sends and
receives them nested as ``{"day": ..., "task": {"id", "text", "done"}}``,
JSON-encoded into a string.  This module converts between the two.
"""

from __future__ import annotations

import json
from typing import Any

from sucoi.src.core.errors import NotFoundError
from sucoi.src.database.records import GoalRecord
from sucoi.src.database.stores import GoalStore
from sucoi.src.utils.logger import get_logger

logger = get_logger(__name__)


def to_wire(doc: dict[str, Any]) -> dict[str, str]:
    """Reshape a stored goal into ``{"_id", "goal": <JSON string>}``."""
    goal = {"day": doc.get("day"), "task": {"id": doc.get("taskId"), "text": doc.get("taskText"), "done": doc.get("taskDone")}}
    return {"_id": str(doc["_id"]), "goal": json.dumps(goal, separators=(",", ":"), ensure_ascii=False)}


class GoalTracker:
    __slots__ = ("_goals",)

    def __init__(self, goals: GoalStore) -> None:
        self._goals = goals


    async def add_goal(self, username: str, day: str, task_id: int, text: str, done: bool) -> None:
        """Insert the goal, or overwrite it if ``(username, task_id)`` exists."""
        await self._goals.upsert(GoalRecord(username=username, day=day, taskId=task_id, taskText=text, taskDone=done))
        logger.info("[GOALS] Saved task %s for '%s'", task_id, username)


    async def list_goals(self, username: str) -> list[dict[str, str]]:
        docs = await self._goals.list_for(username)
        return [to_wire(doc) for doc in docs]


    async def update_goal(self, username: str, day: str, task_id: int, text: str, done: bool) -> None:
        if await self._goals.update(username, task_id, day, text, done) is None:
            raise NotFoundError("Goal not found")
        logger.info("[GOALS] Updated task %s for '%s'", task_id, username)


    async def delete_goal(self, username: str, task_id: int) -> None:
        if not await self._goals.delete(username, task_id):
            raise NotFoundError("Goal not found")
        logger.info("[GOALS] Deleted task %s for '%s'", task_id, username)


    async def clear_goals(self) -> int:
        removed = await self._goals.clear()
        logger.warning("[GOALS] Cleared all goals (%d removed).", removed)
        return removed

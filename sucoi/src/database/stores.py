"""
Sucoi - Collection Stores
==========================
Thin async wrappers, one per collection.  Each method is a single MongoDB
read or write; there are no multi-document transactions and nothing
cascades between collections.

``UserStore``
    Lookup by email / credentials, insert, password overwrite.
``GoalStore``
    Upsert, update-only and delete keyed on ``(username, taskId)``,
    listing in creation order, bulk clear.
``ChatStore``
    Insert per exchange, listing in creation order, delete by ``_id``.
"""

from __future__ import annotations

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, ReturnDocument

from sucoi.src.database.mongo import MongoDatabase
from sucoi.src.database.records import ChatRecord, GoalRecord, UserRecord
from sucoi.src.utils.logger import get_logger

logger = get_logger(__name__)

Document = dict[str, Any]

# Oldest first; ``_id`` breaks ties between records created in the same ms.
_CREATION_ORDER = [("createdAt", ASCENDING), ("_id", ASCENDING)]


class UserStore:
    __slots__ = ("_collection",)

    def __init__(self, database: MongoDatabase) -> None:
        self._collection = database.users


    async def find_by_email(self, email: str) -> Document | None:
        return await self._collection.find_one({"email": email})


    async def find_by_credentials(self, email: str, password: str) -> Document | None:
        return await self._collection.find_one({"email": email, "password": password})


    async def insert(self, user: UserRecord) -> str:
        """Insert a new user.  Raises ``DuplicateKeyError`` if the email is taken."""
        result = await self._collection.insert_one(user.model_dump())
        return str(result.inserted_id)


    async def set_password(self, email: str, password: str) -> bool:
        result = await self._collection.update_one({"email": email}, {"$set": {"password": password}})
        return result.matched_count > 0


class GoalStore:
    __slots__ = ("_collection",)

    def __init__(self, database: MongoDatabase) -> None:
        self._collection = database.goals


    async def upsert(self, goal: GoalRecord) -> Document:
        """
        Insert or overwrite the goal keyed on ``(username, taskId)``.

        ``createdAt`` is only written on insert, so an overwritten goal
        keeps its original position in the listing.
        """
        key = {"username": goal.username, "taskId": goal.taskId}
        fields = {"day": goal.day, "taskText": goal.taskText, "taskDone": goal.taskDone}
        return await self._collection.find_one_and_update(key, {"$set": fields, "$setOnInsert": {"createdAt": goal.createdAt}}, upsert=True, return_document=ReturnDocument.AFTER)


    async def update(self, username: str, task_id: int, day: str, text: str, done: bool) -> Document | None:
        """Overwrite an existing goal.  Returns ``None`` if there is no match."""
        key = {"username": username, "taskId": task_id}
        return await self._collection.find_one_and_update(key, {"$set": {"day": day, "taskText": text, "taskDone": done}}, return_document=ReturnDocument.AFTER)


    async def delete(self, username: str, task_id: int) -> bool:
        result = await self._collection.delete_one({"username": username, "taskId": task_id})
        return result.deleted_count > 0


    async def list_for(self, username: str) -> list[Document]:
        cursor = self._collection.find({"username": username}).sort(_CREATION_ORDER)
        return await cursor.to_list(length=None)


    async def clear(self) -> int:
        result = await self._collection.delete_many({})
        return result.deleted_count


class ChatStore:
    __slots__ = ("_collection",)

    def __init__(self, database: MongoDatabase) -> None:
        self._collection = database.chats


    async def add(self, username: str, user_message: str, bot_reply: str) -> str:
        record = ChatRecord(username=username, userMessage=user_message, botReply=bot_reply)
        result = await self._collection.insert_one(record.model_dump())
        return str(result.inserted_id)


    async def list_for(self, username: str) -> list[Document]:
        cursor = self._collection.find({"username": username}).sort(_CREATION_ORDER)
        return await cursor.to_list(length=None)


    async def delete(self, chat_id: str) -> bool:
        """Delete by ``_id``.  A malformed id can never match and returns False."""
        try:
            object_id = ObjectId(chat_id)
        except (InvalidId, TypeError):
            logger.debug("[HISTORY] Rejected malformed chat id: %r", chat_id)
            return False
        result = await self._collection.delete_one({"_id": object_id})
        return result.deleted_count > 0

"""
Sucoi - Accounts
=================
Signup, signin and security-question password recovery.

Passwords are stored and compared as plaintext, exactly as submitted.
That is acceptable for a prototype only; hashing (and a timing-safe
compare) is required before real users touch this.

Security answers are normalised (lowercased, trimmed) both on signup and
on reset, so ``"Blue "``, ``"blue"`` and ``"BLUE"`` are the same answer.
"""

from __future__ import annotations

from pymongo.errors import DuplicateKeyError

from sucoi.src.core.errors import ConflictError, NotFoundError, UnauthorizedError
from sucoi.src.database.records import UserRecord
from sucoi.src.database.stores import UserStore
from sucoi.src.utils.logger import get_logger

logger = get_logger(__name__)


def normalize_answer(answer: str | None) -> str | None:
    if answer is None:
        return None
    return answer.lower().strip()


class AccountService:
    __slots__ = ("_users",)

    def __init__(self, users: UserStore) -> None:
        self._users = users


    async def signup(self, name: str | None, email: str, password: str, security_question: str | None = None, security_answer: str | None = None) -> None:
        if await self._users.find_by_email(email) is not None:
            raise ConflictError("User already exists!")

        user = UserRecord(name=name, email=email, password=password, securityQuestion=security_question, securityAnswer=normalize_answer(security_answer))
        try:
            await self._users.insert(user)
        except DuplicateKeyError as exc:
            # Lost a race with a concurrent signup for the same email
            raise ConflictError("User already exists!") from exc
        logger.info("[AUTH] User created: %s", email)


    async def signin(self, email: str, password: str) -> dict[str, str | None]:
        user = await self._users.find_by_credentials(email, password)
        if user is None:
            logger.info("[AUTH] Sign-in rejected for %s", email)
            raise UnauthorizedError("Invalid credentials!")
        return {"name": user.get("name"), "email": user["email"]}


    async def security_question(self, email: str) -> str | None:
        user = await self._users.find_by_email(email)
        if user is None:
            raise NotFoundError("User not found!")
        return user.get("securityQuestion")


    async def reset_password(self, email: str, security_answer: str, new_password: str) -> None:
        user = await self._users.find_by_email(email)
        if user is None:
            raise NotFoundError("User not found!")

        stored = user.get("securityAnswer")
        if stored is None or stored != normalize_answer(security_answer):
            logger.info("[AUTH] Wrong security answer for %s", email)
            raise UnauthorizedError("Incorrect security answer!")

        await self._users.set_password(email, new_password)
        logger.info("[AUTH] Password reset for %s", email)

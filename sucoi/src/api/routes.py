"""
Sucoi - API Routes
===================
Every REST endpoint the dashboard calls.  Each handler is a thin
controller: validate the body (Pydantic), call one service method,
shape the response.

Error mapping:
    • ``SucoiError`` subclasses propagate to the app-level handler
      (400 / 401 / 404 with ``{"error": message}``).
    • Anything else (MongoDB, Gemini) is logged with its traceback and
      answered with a generic 500 message.
    • ``/chat`` never surfaces a raw error: failures return the friendly
      server-error reply with status 500.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from sucoi.config.prompt_templates import SERVER_ERROR_REPLY
from sucoi.src.api.schemas import ChatRequest, DeleteChatRequest, DeleteGoalRequest, GoalRequest, ResetPasswordRequest, SigninRequest, SignupRequest, VerifySecurityRequest
from sucoi.src.core.accounts import AccountService
from sucoi.src.core.companion import ChatHistory, CompanionChat
from sucoi.src.core.errors import SucoiError
from sucoi.src.core.goals import GoalTracker
from sucoi.src.database.stores import ChatStore, GoalStore, UserStore
from sucoi.src.utils.logger import get_logger
from sucoi.src.utils.serialization import serialize_doc

logger = get_logger(__name__)

router = APIRouter()


# ══════════════════════════════════════════════════════════════════════
#  DEPENDENCIES
# ══════════════════════════════════════════════════════════════════════


def get_accounts(request: Request) -> AccountService:
    return AccountService(UserStore(request.app.state.database))


def get_companion(request: Request) -> CompanionChat:
    return CompanionChat(request.app.state.completion, ChatStore(request.app.state.database))


def get_history(request: Request) -> ChatHistory:
    return ChatHistory(ChatStore(request.app.state.database))


def get_goal_tracker(request: Request) -> GoalTracker:
    return GoalTracker(GoalStore(request.app.state.database))


@contextmanager
def server_errors(detail: str) -> Iterator[None]:
    """Turn unexpected failures into a logged, generic 500."""
    try:
        yield
    except SucoiError:
        raise
    except Exception:
        logger.exception("[API] %s", detail)
        raise HTTPException(status_code=500, detail=detail) from None


# ══════════════════════════════════════════════════════════════════════
#  ACCOUNTS
# ══════════════════════════════════════════════════════════════════════


@router.post("/signup")
async def signup(req: SignupRequest, accounts: AccountService = Depends(get_accounts)) -> dict[str, Any]:
    with server_errors("Failed to create user"):
        await accounts.signup(req.name, req.email, req.password, req.securityQuestion, req.securityAnswer)
    return {"success": True, "message": "User created successfully!"}


@router.post("/signin")
async def signin(req: SigninRequest, accounts: AccountService = Depends(get_accounts)) -> dict[str, Any]:
    with server_errors("Failed to sign in"):
        user = await accounts.signin(req.email, req.password)
    return {"success": True, "user": user}


@router.post("/verify-security")
async def verify_security(req: VerifySecurityRequest, accounts: AccountService = Depends(get_accounts)) -> dict[str, Any]:
    with server_errors("Failed to verify security question"):
        question = await accounts.security_question(req.email)
    return {"success": True, "securityQuestion": question}


@router.post("/reset-password")
async def reset_password(req: ResetPasswordRequest, accounts: AccountService = Depends(get_accounts)) -> dict[str, Any]:
    with server_errors("Failed to reset password"):
        await accounts.reset_password(req.email, req.securityAnswer, req.newPassword)
    return {"success": True, "message": "Password reset successfully!"}


# ══════════════════════════════════════════════════════════════════════
#  CHAT
# ══════════════════════════════════════════════════════════════════════


@router.post("/chat")
async def chat(req: ChatRequest, companion: CompanionChat = Depends(get_companion)):
    try:
        reply = await companion.reply(req.message, req.username)
    except Exception:
        logger.exception("[CHAT] Gemini API error.")
        return JSONResponse(status_code=500, content={"reply": SERVER_ERROR_REPLY})
    return {"reply": reply}


@router.get("/get-chats/{username}")
async def get_chats(username: str, history: ChatHistory = Depends(get_history)) -> list[dict[str, Any]]:
    with server_errors("Failed to fetch chats"):
        chats = await history.list_chats(username)
    return [serialize_doc(chat) for chat in chats]


@router.post("/delete-chat")
async def delete_chat(req: DeleteChatRequest, history: ChatHistory = Depends(get_history)) -> dict[str, Any]:
    with server_errors("Failed to delete chat"):
        await history.delete_chat(req.chatId)
    return {"success": True}


# ══════════════════════════════════════════════════════════════════════
#  GOALS
# ══════════════════════════════════════════════════════════════════════


@router.post("/add-goal")
async def add_goal(req: GoalRequest, goals: GoalTracker = Depends(get_goal_tracker)) -> dict[str, Any]:
    task = req.goal.task
    with server_errors("Failed to save goal"):
        await goals.add_goal(req.username, req.goal.day, task.id, task.text, task.done)
    return {"message": "Goal saved successfully!"}


@router.get("/get-goals/{username}")
async def get_goals(username: str, goals: GoalTracker = Depends(get_goal_tracker)) -> list[dict[str, str]]:
    with server_errors("Failed to fetch goals"):
        return await goals.list_goals(username)


@router.post("/update-goal")
async def update_goal(req: GoalRequest, goals: GoalTracker = Depends(get_goal_tracker)) -> dict[str, Any]:
    task = req.goal.task
    with server_errors("Failed to update goal"):
        await goals.update_goal(req.username, req.goal.day, task.id, task.text, task.done)
    return {"success": True}


@router.post("/delete-goal")
async def delete_goal(req: DeleteGoalRequest, goals: GoalTracker = Depends(get_goal_tracker)) -> dict[str, Any]:
    with server_errors("Failed to delete goal"):
        await goals.delete_goal(req.username, req.taskId)
    return {"success": True}


# ══════════════════════════════════════════════════════════════════════
#  HEALTH
# ══════════════════════════════════════════════════════════════════════


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}

"""
Sucoi - Prompt Templates & Canned Replies
==========================================
Centralised prompt and reply strings for the companion chat.  Kept apart
from application logic so wording can be reviewed and changed without
touching the pipeline.

Exports
-------
COMPANION_PROMPT_TEMPLATE, EMPTY_MESSAGE_REPLY, NO_REPLY_FALLBACK,
SERVER_ERROR_REPLY.
"""

# ══════════════════════════════════════════════════════════════════════
#  COMPANION PERSONA
# ══════════════════════════════════════════════════════════════════════
# Single-turn prompt.  ``{message}`` is the user's raw text, unescaped.

COMPANION_PROMPT_TEMPLATE: str = 'You are Sucoi, a warm, kind, and empathetic virtual mental health companion. Be positive and understanding. The user says: "{message}"'


# ══════════════════════════════════════════════════════════════════════
#  CANNED REPLIES
# ══════════════════════════════════════════════════════════════════════

EMPTY_MESSAGE_REPLY: str = "Please type something first."

NO_REPLY_FALLBACK: str = "Sorry, I didn't understand that. 💜"

SERVER_ERROR_REPLY: str = "Server error. Please try again later. 💜"

# ## File: documentwise_engine/chat.py
# Version: 1.0.0
# Date: 2026-09-22
# Purpose: State for one chat conversation, independent of Streamlit.
#          Sent messages appear immediately and are reconciled by reloading
#          history; a failed send removes exactly the message it added.

import time
from datetime import datetime, timezone
from typing import List, Optional

from .models import ChatMessage, ChatSessionInfo
from .repository import Attachment, ChatRepository
from .utils import get_logger

logger = get_logger(__name__)


class ChatThread:
    """
    A single conversation bound to one chat session id.

    Example:
        >>> thread = ChatThread(chat_repository, "session-1")
        >>> thread.load_history()
        >>> thread.send("Who signed page 2?")
    """

    def __init__(self, repository: ChatRepository, session_id: str, fallback_title: Optional[str] = None):
        self.repository = repository
        self.session_id = session_id
        self.fallback_title = fallback_title
        self.messages: List[ChatMessage] = []
        self.session_info: Optional[ChatSessionInfo] = None
        self.error: Optional[str] = None
        self.is_loading = False
        self.is_sending = False
        self.loaded = False

    @property
    def title(self) -> str:
        if self.session_info and self.session_info.title:
            return self.session_info.title
        return self.fallback_title or "Chat"

    def load_history(self, replace_on_error: bool = True) -> bool:
        """
        Fetch the session history from the server.

        Args:
            replace_on_error: Clear messages and session info when the fetch fails

        Returns:
            True when the history was loaded
        """
        self.is_loading = True
        self.error = None
        try:
            result = self.repository.get_chat_history(self.session_id)
        finally:
            self.is_loading = False
        self.loaded = True

        if not result.ok or result.data is None:
            self.error = result.error or "Failed to load chat history."
            if replace_on_error:
                self.messages = []
                self.session_info = None
            return False

        self.messages = list(result.data.messages)
        self.session_info = result.data.session
        return True

    def send(self, content: str, attachment: Optional[Attachment] = None) -> bool:
        """
        Send a user message.

        The message is appended right away. If the server rejects it, that
        message is removed again and `error` explains why; otherwise the
        history is reloaded to pick up the model's reply.

        Returns:
            True when the message was accepted by the server
        """
        if not (content or "").strip() or self.is_sending:
            return False

        optimistic = ChatMessage(
            id=f"temp-{int(time.time() * 1000)}",
            role="user",
            content=content,
            timestamp=datetime.now(timezone.utc).isoformat(),
            file_uri=attachment[0] if attachment else None,
            file_mime_type=attachment[2] if attachment else None,
        )
        self.messages.append(optimistic)
        self.is_sending = True
        self.error = None
        try:
            result = self.repository.send_chat_message(self.session_id, content, attachment)
        finally:
            self.is_sending = False

        if not result.ok:
            self.error = result.error or "Failed to send message."
            self.messages = [m for m in self.messages if m.id != optimistic.id]
            logger.warning(f"Chat send failed for session {self.session_id}: {self.error}")
            return False

        # Keep the visible list if the reconciliation fetch fails.
        self.load_history(replace_on_error=False)
        return True

import json
import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple
from uuid import UUID

from studyatlas.db.interfaces.base import BaseDatabase
from studyatlas.exceptions import ConflictError, GatewayException, NotFoundError
from studyatlas.models.workbench import AIConversation, AIMessage, EmailDraft
from studyatlas.repositories.catalog import LabRepository
from studyatlas.repositories.workbench import ConversationRepository, EmailDraftRepository
from studyatlas.schemas.api.workbench import EmailDraftGenerateRequest, EmailDraftUpdate, StreamChatRequest
from studyatlas.schemas.gateway import ChatMessage
from studyatlas.services.gateway.client import GatewayClient

logger = logging.getLogger(__name__)

SSE_DONE = "data: [DONE]\n\n"


def format_sse(payload: Dict[str, Any]) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


def format_delta(content: str) -> str:
    """Delta event in the OpenAI chunk shape the chat UI already parses."""
    return format_sse({"choices": [{"delta": {"content": content}}]})


class WorkbenchService:
    """AI advisor conversations and email drafting for one user."""

    def __init__(
        self,
        conversations: ConversationRepository,
        drafts: EmailDraftRepository,
        labs: LabRepository,
        gateway: GatewayClient,
        database: BaseDatabase,
    ):
        self.conversations = conversations
        self.drafts = drafts
        self.labs = labs
        self.gateway = gateway
        self.database = database

    # ---- Conversations ----

    def get_conversation(self, user_id: UUID, conversation_id: UUID) -> AIConversation:
        conversation = self.conversations.get(conversation_id)
        if conversation is None or conversation.user_id != user_id:
            raise NotFoundError(f"Conversation {conversation_id} not found")
        return conversation

    def list_conversations(self, user_id: UUID) -> List[AIConversation]:
        return self.conversations.list_for_user(user_id)

    def create_conversation(self, user_id: UUID, title: str) -> AIConversation:
        return self.conversations.create(user_id, title)

    def rename_conversation(self, user_id: UUID, conversation_id: UUID, title: str) -> AIConversation:
        return self.conversations.rename(self.get_conversation(user_id, conversation_id), title)

    def delete_conversation(self, user_id: UUID, conversation_id: UUID) -> None:
        self.conversations.delete(self.get_conversation(user_id, conversation_id))

    def list_messages(self, user_id: UUID, conversation_id: UUID) -> List[AIMessage]:
        self.get_conversation(user_id, conversation_id)
        return self.conversations.list_messages(conversation_id)

    def set_feedback(self, user_id: UUID, message_id: UUID, feedback: Optional[str]) -> AIMessage:
        message = self.conversations.get_message(message_id)
        if message is None:
            raise NotFoundError(f"Message {message_id} not found")
        self.get_conversation(user_id, message.conversation_id)
        if message.role != "assistant":
            raise ConflictError("Feedback can only be given on assistant messages")
        return self.conversations.set_feedback(message, feedback)

    # ---- Chat ----

    def send_message(
        self,
        user_id: UUID,
        conversation_id: UUID,
        content: str,
        user_context: Optional[Dict[str, Any]] = None,
    ) -> Tuple[AIMessage, AIMessage]:
        """Store the user turn, ask the advisor with the whole history, store the reply."""
        conversation = self.get_conversation(user_id, conversation_id)
        user_message = self.conversations.add_message(conversation.id, "user", content)

        history = [
            ChatMessage(role=m.role, content=m.content)
            for m in self.conversations.list_messages(conversation.id)
        ]
        reply = self.gateway.advise(history, user_context)

        assistant_message = self.conversations.add_message(conversation.id, "assistant", reply)
        self.conversations.touch(conversation)
        return user_message, assistant_message

    def stream_reply(self, user_id: UUID, request: StreamChatRequest) -> Iterator[str]:
        """Open a streamed advisor reply and return its server-sent events.

        The first delta is pulled eagerly so gateway failures (rate limit,
        credits, connectivity) surface before any response bytes are sent.
        """
        conversation_id: Optional[UUID] = None
        if request.conversation_id is not None:
            conversation_id = self.get_conversation(user_id, request.conversation_id).id
            last_user = next((m for m in reversed(request.messages) if m.role == "user"), None)
            if last_user is not None:
                self.conversations.add_message(conversation_id, "user", last_user.content)

        deltas = self.gateway.advise_stream(request.messages, request.user_context)
        first = next(deltas, None)
        return self._events(first, deltas, conversation_id)

    def _events(self, first: Optional[str], deltas: Iterator[str], conversation_id: Optional[UUID]) -> Iterator[str]:
        parts: List[str] = []
        try:
            if first is not None:
                parts.append(first)
                yield format_delta(first)
            for delta in deltas:
                parts.append(delta)
                yield format_delta(delta)
        except GatewayException as e:
            logger.error(f"Advisor stream interrupted: {e}")
            yield format_sse({"error": str(e)})
            return

        if conversation_id is not None and parts:
            self._store_reply(conversation_id, "".join(parts))
        yield SSE_DONE

    def _store_reply(self, conversation_id: UUID, content: str) -> None:
        # Runs after the request scope has ended, so it takes its own session
        with self.database.get_session() as session:
            repo = ConversationRepository(session)
            repo.add_message(conversation_id, "assistant", content)
            conversation = repo.get(conversation_id)
            if conversation is not None:
                repo.touch(conversation)

    # ---- Email drafts ----

    def list_drafts(self, user_id: UUID) -> List[EmailDraft]:
        return self.drafts.list_for_user(user_id)

    def get_draft(self, user_id: UUID, draft_id: UUID) -> EmailDraft:
        draft = self.drafts.get(draft_id)
        if draft is None or draft.user_id != user_id:
            raise NotFoundError(f"Email draft {draft_id} not found")
        return draft

    def generate_draft(self, user_id: UUID, request: EmailDraftGenerateRequest) -> EmailDraft:
        if request.lab_id is not None and self.labs.get_by_id(request.lab_id) is None:
            raise NotFoundError(f"Lab {request.lab_id} not found")

        content = self.gateway.draft_email(request.purpose, request.recipient, request.context)
        draft = self.drafts.create(
            user_id,
            lab_id=request.lab_id,
            recipient=request.recipient,
            purpose=request.purpose,
            subject=content.subject,
            body=content.body,
        )
        logger.info(f"Generated email draft {draft.id} for user {user_id}")
        return draft

    def update_draft(self, user_id: UUID, draft_id: UUID, payload: EmailDraftUpdate) -> EmailDraft:
        draft = self.get_draft(user_id, draft_id)
        return self.drafts.update(draft, **payload.model_dump(exclude_unset=True, exclude_none=True))

    def delete_draft(self, user_id: UUID, draft_id: UUID) -> None:
        self.drafts.delete(self.get_draft(user_id, draft_id))

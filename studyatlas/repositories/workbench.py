from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from studyatlas.models.workbench import AIConversation, AIMessage, EmailDraft


class ConversationRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_for_user(self, user_id: UUID) -> List[AIConversation]:
        stmt = (
            select(AIConversation)
            .where(AIConversation.user_id == user_id)
            .order_by(AIConversation.updated_at.desc())
        )
        return list(self.session.scalars(stmt))

    def get(self, conversation_id: UUID) -> Optional[AIConversation]:
        return self.session.get(AIConversation, conversation_id)

    def create(self, user_id: UUID, title: str) -> AIConversation:
        conversation = AIConversation(user_id=user_id, title=title)
        self.session.add(conversation)
        self.session.commit()
        self.session.refresh(conversation)
        return conversation

    def rename(self, conversation: AIConversation, title: str) -> AIConversation:
        conversation.title = title
        conversation.updated_at = datetime.now(timezone.utc)
        self.session.commit()
        self.session.refresh(conversation)
        return conversation

    def touch(self, conversation: AIConversation) -> None:
        conversation.updated_at = datetime.now(timezone.utc)
        self.session.commit()

    def delete(self, conversation: AIConversation) -> None:
        self.session.execute(delete(AIMessage).where(AIMessage.conversation_id == conversation.id))
        self.session.delete(conversation)
        self.session.commit()

    def list_messages(self, conversation_id: UUID) -> List[AIMessage]:
        stmt = (
            select(AIMessage)
            .where(AIMessage.conversation_id == conversation_id)
            .order_by(AIMessage.created_at)
        )
        return list(self.session.scalars(stmt))

    def get_message(self, message_id: UUID) -> Optional[AIMessage]:
        return self.session.get(AIMessage, message_id)

    def add_message(self, conversation_id: UUID, role: str, content: str) -> AIMessage:
        message = AIMessage(conversation_id=conversation_id, role=role, content=content)
        self.session.add(message)
        self.session.commit()
        self.session.refresh(message)
        return message

    def set_feedback(self, message: AIMessage, feedback: Optional[str]) -> AIMessage:
        message.feedback = feedback
        message.feedback_at = datetime.now(timezone.utc) if feedback else None
        self.session.commit()
        self.session.refresh(message)
        return message


class EmailDraftRepository:
    def __init__(self, session: Session):
        self.session = session

    def list_for_user(self, user_id: UUID) -> List[EmailDraft]:
        stmt = select(EmailDraft).where(EmailDraft.user_id == user_id).order_by(EmailDraft.updated_at.desc())
        return list(self.session.scalars(stmt))

    def get(self, draft_id: UUID) -> Optional[EmailDraft]:
        return self.session.get(EmailDraft, draft_id)

    def create(self, user_id: UUID, **fields) -> EmailDraft:
        draft = EmailDraft(user_id=user_id, **fields)
        self.session.add(draft)
        self.session.commit()
        self.session.refresh(draft)
        return draft

    def update(self, draft: EmailDraft, **fields) -> EmailDraft:
        for key, value in fields.items():
            setattr(draft, key, value)
        self.session.commit()
        self.session.refresh(draft)
        return draft

    def delete(self, draft: EmailDraft) -> None:
        self.session.delete(draft)
        self.session.commit()

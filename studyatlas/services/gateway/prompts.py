import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from studyatlas.schemas.gateway import ChatMessage, EmailDraftContent

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?```", re.DOTALL)

ADVISOR_SYSTEM_PROMPT = """You are an AI Study Advisor for university students planning study abroad and exchange semesters. You help with:
- Course selection and academic planning
- Study abroad opportunities and exchange programs
- Learning agreement guidance and ECTS credit planning
- Research opportunities and lab recommendations
- Career path advice based on their interests
- University comparisons and recommendations

User Context:
{user_context}

Provide helpful, specific, and actionable advice. Be encouraging and supportive. Format your responses clearly with bullet points when listing options."""


class StudyAdvisorPromptBuilder:
    """Builds the message list sent to the gateway for advisor chats."""

    def system_prompt(self, user_context: Optional[Dict[str, Any]] = None) -> str:
        context = json.dumps(user_context, indent=2, ensure_ascii=False) if user_context else "No context provided"
        return ADVISOR_SYSTEM_PROMPT.format(user_context=context)

    def create_messages(
        self,
        messages: List[ChatMessage],
        user_context: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, str]]:
        # Callers cannot override the advisor persona
        history = [m.model_dump() for m in messages if m.role != "system"]
        return [{"role": "system", "content": self.system_prompt(user_context)}, *history]


class EmailPromptBuilder:
    def create_prompt(self, purpose: str, recipient: str, context: Optional[str] = None) -> str:
        return (
            "You are helping a university student draft a professional email.\n\n"
            f"Purpose: {purpose}\n"
            f"Recipient: {recipient}\n"
            f"Context: {context or 'None provided'}\n\n"
            "Generate a professional email draft with:\n"
            "1. Appropriate subject line\n"
            "2. Proper greeting\n"
            "3. Clear, concise body\n"
            "4. Professional closing\n\n"
            "The tone should be respectful and academic. Format your response as JSON:\n"
            '{\n  "subject": "Subject line here",\n  "body": "Email body here"\n}'
        )


class ResponseParser:
    """Parser for gateway responses."""

    @staticmethod
    def strip_code_fence(response: str) -> str:
        match = _CODE_FENCE.search(response)
        return (match.group(1) if match else response).strip()

    @staticmethod
    def parse_email_draft(response: str) -> EmailDraftContent:
        """Parse ``{"subject", "body"}``; fall back to the raw text as the body."""
        cleaned = ResponseParser.strip_code_fence(response)
        try:
            return EmailDraftContent.model_validate(json.loads(cleaned))
        except json.JSONDecodeError as e:
            logger.warning("Failed to decode email draft as JSON: %s", e)
        except ValidationError as e:
            logger.warning("Email draft failed schema validation: %s", e)

        return EmailDraftContent(subject="Email Draft", body=response)

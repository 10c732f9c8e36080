import logging
from typing import Any, Dict, Generator, List, Optional

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    OpenAI,
    OpenAIError,
    RateLimitError,
)

from studyatlas.config import get_settings
from studyatlas.exceptions import (
    GatewayConnectionError,
    GatewayCreditsExhaustedError,
    GatewayException,
    GatewayRateLimitError,
    GatewayTimeoutError,
)
from studyatlas.schemas.gateway import ChatMessage, EmailDraftContent
from studyatlas.services.gateway.prompts import EmailPromptBuilder, ResponseParser, StudyAdvisorPromptBuilder

logger = logging.getLogger(__name__)


def _translate(e: Exception) -> GatewayException:
    """Map OpenAI SDK errors onto the gateway exception family."""
    # APITimeoutError subclasses APIConnectionError, check it first
    if isinstance(e, APITimeoutError):
        return GatewayTimeoutError(f"Model gateway timeout: {e}")
    if isinstance(e, APIConnectionError):
        return GatewayConnectionError(f"Cannot connect to model gateway: {e}")
    if isinstance(e, RateLimitError):
        return GatewayRateLimitError("Rate limit exceeded. Please try again in a moment.")
    if isinstance(e, APIStatusError) and e.status_code == 402:
        return GatewayCreditsExhaustedError("AI credits exhausted. Please add credits to continue.")
    if isinstance(e, OpenAIError):
        return GatewayException(f"Model gateway error: {e}")
    return GatewayException(f"Model gateway request failed: {e}")


class GatewayClient:
    """Client for the hosted OpenAI-compatible chat gateway."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[OpenAI] = None,
    ):
        settings = get_settings()
        self.timeout = float(timeout if timeout is not None else settings.gateway_timeout)
        self.client = client or OpenAI(
            api_key=api_key if api_key is not None else settings.gateway_api_key,
            base_url=base_url or settings.gateway_base_url,
            timeout=self.timeout,
        )
        self.default_model = model or settings.gateway_model
        self.advisor_prompts = StudyAdvisorPromptBuilder()
        self.email_prompts = EmailPromptBuilder()
        self.response_parser = ResponseParser()

    def health_check(self) -> Dict[str, Any]:
        """Check that the gateway answers a model listing."""
        try:
            models = self.client.models.list()
            return {
                "status": "healthy",
                "message": "Model gateway reachable",
                "model_count": len(models.data),
            }
        except Exception as e:
            logger.error(f"Model gateway health check failed ({self.client.base_url}): {e}")
            raise _translate(e) from e

    def chat(self, messages: List[Dict[str, str]], model: Optional[str] = None, **kwargs) -> str:
        """Single completion; returns the assistant text."""
        model = model or self.default_model
        logger.info(f"Sending chat to gateway: model={model}, messages={len(messages)}")
        try:
            completion = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=kwargs.get("temperature", 0.7),
                max_tokens=kwargs.get("max_tokens", 2048),
            )
        except Exception as e:
            logger.error(f"Gateway chat failed: {e}")
            raise _translate(e) from e

        content = completion.choices[0].message.content if completion.choices else None
        if content is None:
            raise GatewayException("Model gateway returned an empty completion")
        return content

    def chat_stream(
        self, messages: List[Dict[str, str]], model: Optional[str] = None, **kwargs
    ) -> Generator[str, None, None]:
        """Yield text deltas as the gateway produces them."""
        model = model or self.default_model
        logger.info(f"Starting streaming chat: model={model}, messages={len(messages)}")
        try:
            stream = self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=kwargs.get("temperature", 0.7),
                max_tokens=kwargs.get("max_tokens", 2048),
                stream=True,
            )
            for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        except GatewayException:
            raise
        except Exception as e:
            logger.error(f"Gateway stream failed: {e}")
            raise _translate(e) from e

    def advise(self, messages: List[ChatMessage], user_context: Optional[Dict[str, Any]] = None) -> str:
        return self.chat(self.advisor_prompts.create_messages(messages, user_context))

    def advise_stream(
        self, messages: List[ChatMessage], user_context: Optional[Dict[str, Any]] = None
    ) -> Generator[str, None, None]:
        yield from self.chat_stream(self.advisor_prompts.create_messages(messages, user_context))

    def draft_email(self, purpose: str, recipient: str, context: Optional[str] = None) -> EmailDraftContent:
        prompt = self.email_prompts.create_prompt(purpose, recipient, context)
        raw = self.chat([{"role": "user", "content": prompt}], max_tokens=1000)
        logger.debug(f"Raw email draft: {raw[:400]}")
        return self.response_parser.parse_email_draft(raw)

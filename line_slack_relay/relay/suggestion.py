"""Response suggestion generation with a language model."""

from langchain_core.messages import HumanMessage, SystemMessage

from line_slack_relay.platform.clients.llm import LlmClient
from line_slack_relay.platform.observability.logging import get_logger
from line_slack_relay.relay.exceptions import SuggestionFailure
from line_slack_relay.relay.models import CustomerProfile, OrderRecord
from line_slack_relay.relay.prompt import build_suggestion_prompt, build_system_prompt

logger = get_logger(__name__)

FALLBACK_SUGGESTION = "提案を生成できませんでした。"


class SuggestionGenerator:
    """Drafts a staff reply from customer context and the inbound message."""

    def __init__(self, llm: LlmClient, system_prompt: str | None = None):
        self._llm = llm
        self._system_prompt = system_prompt or build_system_prompt()

    async def generate_suggestion(
        self,
        profile: CustomerProfile,
        orders: list[OrderRecord],
        message: str,
    ) -> str:
        """Return the model's draft, or a fixed fallback if it returned nothing.

        Raises:
            SuggestionFailure: If the model call itself fails
        """
        messages = [
            SystemMessage(content=self._system_prompt),
            HumanMessage(content=build_suggestion_prompt(profile, orders, message)),
        ]

        try:
            response = await self._llm.ainvoke(messages)
        except Exception as e:
            raise SuggestionFailure(str(e), model=self._llm.model_name) from e

        content = response.content if isinstance(response.content, str) else ""
        if not content.strip():
            logger.warning("empty_suggestion", model=self._llm.model_name)
            return FALLBACK_SUGGESTION

        return content.strip()

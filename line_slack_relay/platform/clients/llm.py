"""LLM client implementation using LiteLLM."""

from langchain_core.messages import AIMessage
from langchain_core.runnables import Runnable, RunnableConfig
from langchain_litellm import ChatLiteLLM

from line_slack_relay.platform.observability.metrics import record_llm_tokens


class LlmClient(Runnable):
    """LLM client that wraps ChatLiteLLM as a Runnable.

    Provides a consistent interface for chat-completion calls with:
    - Full LCEL compatibility (pipe operator, chains)
    - Automatic token metrics recording
    """

    def __init__(
        self,
        model_name: str,
        api_key: str | None,
        api_base: str | None,
        temperature: float,
        max_tokens: int,
        llm=None,
    ):
        """Initialize the LLM client.

        Args:
            model_name: Model identifier (e.g. "gpt-3.5-turbo")
            api_key: API key for authentication
            api_base: Optional base URL for the API (LiteLLM proxy)
            temperature: Sampling temperature
            max_tokens: Completion token limit
            llm: Optional pre-configured LLM instance
        """
        self._model_name = model_name
        self._llm = llm or ChatLiteLLM(
            model_name=model_name,
            api_key=api_key or None,
            api_base=api_base,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    @property
    def model_name(self) -> str:
        """The model name/identifier."""
        return self._model_name

    @staticmethod
    def extract_tokens(message: AIMessage) -> tuple[int, int]:
        """Extract token counts from an AIMessage's usage metadata.

        Args:
            message: AIMessage from LLM response

        Returns:
            Tuple of (input_tokens, output_tokens), defaults to (0, 0) if unavailable
        """
        usage = getattr(message, "usage_metadata", None)
        if not usage:
            return 0, 0
        return usage.get("input_tokens", 0), usage.get("output_tokens", 0)

    def invoke(self, input, config: RunnableConfig | None = None, **kwargs):
        """Invoke the LLM synchronously.

        Args:
            input: Messages to send to the LLM
            config: Optional runnable config
            **kwargs: Additional arguments passed to underlying LLM

        Returns:
            The LLM's response message
        """
        response = self._llm.invoke(input, config=config, **kwargs)
        record_llm_tokens(self._model_name, *self.extract_tokens(response))
        return response

    async def ainvoke(self, input, config: RunnableConfig | None = None, **kwargs):
        """Invoke the LLM asynchronously.

        Args:
            input: Messages to send to the LLM
            config: Optional runnable config
            **kwargs: Additional arguments passed to underlying LLM

        Returns:
            The LLM's response message
        """
        response = await self._llm.ainvoke(input, config=config, **kwargs)
        record_llm_tokens(self._model_name, *self.extract_tokens(response))
        return response

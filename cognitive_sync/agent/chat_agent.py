"""Agno agent service that streams the instruction-writing conversation.

The client owns the conversation and sends it in full with every request, so
the agent runs without storage: each run gets the complete message list and a
system prompt built for that request. The model is created once per service;
the Agent wrapping it is cheap and is created per request because its system
message depends on the request's audience, tone and context assets.

Upstream failures are not caught here. They propagate to the HTTP handler,
which classifies them into the error taxonomy.
"""

import logging
from collections.abc import AsyncGenerator

from agno.agent import Agent
from agno.models.message import Message
from agno.models.openai import OpenAIChat
from agno.run.agent import RunEvent

from cognitive_sync.agent.config import AgentConfig, get_agent_config
from cognitive_sync.agent.prompts import PromptContext, build_system_prompt
from cognitive_sync.models.schemas import ChatMessage

logger = logging.getLogger(__name__)


class UpstreamRunError(Exception):
    """The model run reported an error event instead of raising."""


class AgentService:
    """Service for managing the Agno chat agent.

    Wraps Agno's Agent with:
    - A shared OpenAI-compatible model
    - Per-request system prompts
    - Singleton lifecycle management
    - Clean streaming interface for SSE endpoints
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.

        Raises:
            ConfigurationError: If no configuration is given and the
                environment lacks a valid API key.
        """
        self._config = config or get_agent_config()
        self._model = self._create_model()

    def _create_model(self) -> OpenAIChat:
        kwargs = {
            "id": self._config.model_name,
            "api_key": self._config.api_key,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            # A single upstream failure is surfaced as-is
            "max_retries": 0,
        }
        if self._config.base_url:
            kwargs["base_url"] = self._config.base_url
        return OpenAIChat(**kwargs)

    def _create_agent(self, system_message: str) -> Agent:
        """Create the Agno agent instance for one run.

        Returns:
            Agent with the shared model and the given system prompt.
        """
        return Agent(
            model=self._model,
            system_message=system_message,
            # Output as markdown for rich formatting in UI
            markdown=True,
        )

    async def stream_response(
        self,
        messages: list[ChatMessage],
        context: PromptContext | None = None,
    ) -> AsyncGenerator[str]:
        """Stream response chunks for a conversation.

        Args:
            messages: The full conversation, oldest first.
            context: Optional request-scoped prompt additions.

        Yields:
            Response text chunks as they arrive.

        Raises:
            UpstreamRunError: If the run reports an error event.
            Exception: Any error raised by the model provider SDK.
        """
        agent = self._create_agent(build_system_prompt(context))
        run_input = [Message(role=m.role, content=m.content) for m in messages]

        response_stream = agent.arun(input=run_input, stream=True)

        async for chunk in response_stream:
            event = getattr(chunk, "event", None)
            if event == RunEvent.run_error:
                raise UpstreamRunError(getattr(chunk, "content", None) or "Model run failed")
            if event == RunEvent.run_content and chunk.content:
                yield chunk.content


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Uses singleton pattern for resource efficiency.

    Returns:
        The AgentService instance.

    Raises:
        ConfigurationError: If the model credential is not configured.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service

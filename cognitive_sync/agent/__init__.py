"""Agno agent logic for LLM orchestration.

Turns a conversation into a streamed reply from the instruction-writing assistant.

Responsibilities:
    - Agent initialization with OpenAI-compatible models
    - System prompt composition (persona, clarifying questions, JSON contract)
    - Streaming token generation coordination

Stateless: the client sends the whole conversation on every turn.
Maintains clean separation from the HTTP layer.
"""

from cognitive_sync.agent.chat_agent import AgentService, get_agent_service
from cognitive_sync.agent.config import AgentConfig, get_agent_config
from cognitive_sync.agent.prompts import PromptContext, build_system_prompt

__all__ = [
    "AgentConfig",
    "AgentService",
    "PromptContext",
    "build_system_prompt",
    "get_agent_config",
    "get_agent_service",
]

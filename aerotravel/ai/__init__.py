"""LLM agent abstraction and its Pydantic AI implementation."""

from .base import AIAgentBase, AIAgentConfig, AIAgentResponse
from .pydantic_ai_agent import PydanticAIAgent

__all__ = [
    "AIAgentBase",
    "AIAgentConfig",
    "AIAgentResponse",
    "PydanticAIAgent",
]

"""Base abstraction for LLM agents.

This module defines the interface the content tooling talks to, keeping the
LLM framework behind a small adapter so callers never import it directly.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AIAgentConfig(BaseModel):
    """Configuration for initializing an AI agent.

    Attributes:
        name: Identifier for the agent instance, used in logs
        model: The LLM model identifier in ``provider:model`` form
        system_prompt: System prompt/instructions for the agent
        temperature: Model temperature for response generation
        max_tokens: Maximum tokens for response generation
        timeout: Request timeout in seconds
        metadata: Extra keyword arguments for the framework's agent constructor
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    name: str = Field(..., description="Identifier for the agent instance")
    model: str = Field(..., description="The LLM model identifier")
    system_prompt: Optional[str] = Field(None, description="System prompt/instructions for the agent")
    temperature: float = Field(default=0.7, description="Model temperature for response generation")
    max_tokens: Optional[int] = Field(None, ge=1, description="Maximum tokens for response generation")
    timeout: Optional[float] = Field(None, description="Request timeout in seconds")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Additional framework-specific configuration")


class AIAgentResponse(BaseModel):
    """Response from an AI agent.

    Attributes:
        content: The main response content
        metadata: Additional response metadata (model, token usage, latency)
        error: Error message if the request failed
        success: Whether the request was successful
    """

    content: Any = Field(None, description="The main response content")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Additional response metadata")
    error: Optional[str] = Field(None, description="Error message if the request failed")
    success: bool = Field(default=True, description="Whether the request was successful")


class AIAgentBase(ABC):
    """Abstract base class for AI agent implementations.

    Subclasses must implement:
    - initialize(): Set up the agent with configuration
    - invoke(): Execute the agent with input
    - cleanup(): Clean up resources
    """

    def __init__(self, config: AIAgentConfig) -> None:
        self._config = config
        self._initialized = False

    @property
    def config(self) -> AIAgentConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def model(self) -> str:
        return self._config.model

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the agent.

        Raises:
            RuntimeError: If initialization fails
        """

    @abstractmethod
    async def invoke(
        self,
        input_text: str,
        context: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> AIAgentResponse:
        """Execute the agent with input.

        Implementations report call failures through an unsuccessful
        response rather than raising.

        Args:
            input_text: The input prompt
            context: Optional context lines prepended to the prompt
            **kwargs: Framework-specific parameters

        Returns:
            AIAgentResponse with the agent's response
        """

    @abstractmethod
    async def cleanup(self) -> None:
        """Release any held resources."""

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._config.name}, model={self._config.model})"

"""Pydantic AI adapter.

Implements :class:`AIAgentBase` on top of ``pydantic_ai.Agent``.
"""

import time
from typing import Any, Dict, Optional

from aerotravel.core.logging_config import get_logger
from aerotravel.core.monitoring import log_llm_call

from .base import AIAgentBase, AIAgentConfig, AIAgentResponse

logger = get_logger(__name__)


class PydanticAIAgent(AIAgentBase):
    """Adapter for the Pydantic AI framework."""

    def __init__(self, config: AIAgentConfig) -> None:
        super().__init__(config)
        self._agent = None

    def build_init_kwargs(self) -> Dict[str, Any]:
        """Build the kwargs passed to the ``pydantic_ai.Agent`` constructor."""
        kwargs: Dict[str, Any] = {
            "model": self._config.model,
        }

        if self._config.system_prompt:
            kwargs["system_prompt"] = self._config.system_prompt

        model_settings = self._model_settings()
        if model_settings:
            kwargs["model_settings"] = model_settings

        if self._config.metadata:
            kwargs.update(self._config.metadata)

        logger.debug(f"Built initialization kwargs for {self._config.name}: {list(kwargs.keys())}")
        return kwargs

    def _model_settings(self, timeout: Optional[float] = None) -> Dict[str, Any]:
        model_settings: Dict[str, Any] = {}
        if self._config.temperature is not None:
            model_settings["temperature"] = self._config.temperature
        if self._config.max_tokens is not None:
            model_settings["max_tokens"] = self._config.max_tokens
        timeout = timeout or self._config.timeout
        if timeout is not None:
            model_settings["timeout"] = timeout
        return model_settings

    async def initialize(self) -> None:
        """Create the underlying Pydantic AI agent.

        Raises:
            RuntimeError: If the agent cannot be created (unknown model, missing credentials)
        """
        try:
            from pydantic_ai import Agent

            logger.debug(f"Initializing Pydantic AI agent: {self._config.name} with model {self._config.model}")
            self._agent = Agent(**self.build_init_kwargs())
            self._initialized = True
            logger.debug(f"Pydantic AI agent initialized: {self._config.name}")

        except ImportError as e:
            raise RuntimeError("Pydantic AI is not installed. Install it with: pip install pydantic-ai") from e
        except Exception as e:
            raise RuntimeError(f"Failed to initialize Pydantic AI agent: {e}") from e

    async def invoke(
        self,
        input_text: str,
        context: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> AIAgentResponse:
        """Run the agent once and wrap the result.

        Raises:
            RuntimeError: If the agent is not initialized
        """
        if not self._initialized or self._agent is None:
            raise RuntimeError("Agent not initialized. Call initialize() first.")

        full_prompt = input_text
        if context:
            context_str = "\n".join(f"{k}: {v}" for k, v in context.items())
            full_prompt = f"{context_str}\n\n{input_text}"

        start = time.perf_counter()
        try:
            logger.debug(f"Invoking Pydantic AI agent: {self._config.name} with input length {len(full_prompt)}")
            result = await self._agent.run(
                full_prompt,
                model_settings=self._model_settings(kwargs.get("timeout")),
            )
        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.error(f"Pydantic AI agent invocation failed: {self._config.name}: {e}", exc_info=True)
            log_llm_call(self._config.model, success=False, duration_ms=duration_ms)
            return AIAgentResponse(
                content=None,
                error=str(e),
                success=False,
                metadata={"model": self._config.model, "duration_ms": duration_ms},
            )

        duration_ms = (time.perf_counter() - start) * 1000
        content = getattr(result, "output", None)
        if content is None:
            content = getattr(result, "data", None)

        metadata: Dict[str, Any] = {
            "model": self._config.model,
            "framework": "pydantic_ai",
            "duration_ms": duration_ms,
        }
        usage = getattr(result, "usage", None)
        if callable(usage):
            usage = usage()
        tokens_used = None
        if usage is not None:
            metadata["usage"] = {
                "input_tokens": getattr(usage, "input_tokens", None),
                "output_tokens": getattr(usage, "output_tokens", None),
            }
            tokens_used = getattr(usage, "total_tokens", None)

        log_llm_call(self._config.model, success=True, duration_ms=duration_ms, tokens_used=tokens_used)
        logger.debug(f"Pydantic AI agent invocation completed: {self._config.name}")
        return AIAgentResponse(content=content, metadata=metadata, success=True)

    async def cleanup(self) -> None:
        logger.debug(f"Cleaning up Pydantic AI agent: {self._config.name}")
        self._agent = None
        self._initialized = False

"""
AI SEO content spinner.

Asks the LLM for an article as a JSON object and validates what comes back.
Any failure along the way (agent setup, the call itself, empty output, no
JSON object, missing fields) yields a static article built from the request
instead, so callers always receive publishable content.
"""

from __future__ import annotations

import json
import re
import unicodedata
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from aerotravel.ai.base import AIAgentBase, AIAgentConfig
from aerotravel.ai.pydantic_ai_agent import PydanticAIAgent
from aerotravel.core.logging_config import get_logger
from aerotravel.core.models.domain.enums import ContentSource
from aerotravel.core.models.io.content import SpinRequest, SpunContent
from aerotravel.server.core.config import AIConfig, settings

logger = get_logger(__name__)

META_DESCRIPTION_MAX_LENGTH = 160
SLUG_MAX_LENGTH = 80

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")

SYSTEM_PROMPT = (
    "You are an SEO copywriter for an Indonesian travel agency. "
    "You write original, engaging destination articles and always answer with a single JSON object."
)

PROMPT_TEMPLATE = """Write an SEO article.

Topic: {topic}
Keywords: {keywords}
Language: {language}
Tone: {tone}
Target length: about {word_count} words
{base_content}
Respond with only a JSON object with these fields:
- "title": article title containing the main keyword
- "meta_description": at most 160 characters
- "content": the article body in Markdown
- "keywords": list of keywords used
"""

_LANGUAGES = {"id": "Bahasa Indonesia", "en": "English"}


def build_prompt(request: SpinRequest) -> str:
    base_content = ""
    if request.base_content:
        base_content = (
            "\nRewrite and improve this existing text instead of starting from scratch:\n"
            f"{request.base_content}\n"
        )
    return PROMPT_TEMPLATE.format(
        topic=request.topic,
        keywords=", ".join(request.keywords) or request.topic,
        language=_LANGUAGES.get(request.locale, request.locale),
        tone=request.tone,
        word_count=request.target_word_count,
        base_content=base_content,
    )


def slugify(text: str) -> str:
    """URL slug: ASCII-folded, lowercase, words joined by hyphens."""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = _SLUG_STRIP_RE.sub("-", ascii_text.lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH].rstrip("-")


def trim_meta_description(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= META_DESCRIPTION_MAX_LENGTH:
        return text
    return text[: META_DESCRIPTION_MAX_LENGTH - 3].rstrip() + "..."


def extract_json_object(raw: str) -> Optional[Dict[str, Any]]:
    """Pull the JSON object out of an LLM reply, tolerating code fences and chatter around it."""
    cleaned = _FENCE_RE.sub("", raw or "")
    match = _JSON_OBJECT_RE.search(cleaned)
    if match is None:
        return None
    try:
        value = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def parse_spun_content(raw: str, request: SpinRequest) -> Optional[SpunContent]:
    """Validate an LLM reply into :class:`SpunContent`, or None if it is unusable."""
    data = extract_json_object(raw)
    if data is None:
        return None

    title = data.get("title")
    content = data.get("content")
    if not isinstance(title, str) or not title.strip():
        return None
    if not isinstance(content, str) or not content.strip():
        return None

    meta = data.get("meta_description")
    if not isinstance(meta, str) or not meta.strip():
        meta = content
    keywords = data.get("keywords")
    if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
        keywords = list(request.keywords)

    try:
        return SpunContent(
            title=title.strip(),
            slug=slugify(title),
            meta_description=trim_meta_description(meta),
            content=content.strip(),
            keywords=keywords,
            source=ContentSource.ai,
        )
    except ValidationError:
        return None


def build_fallback_content(request: SpinRequest) -> SpunContent:
    """Static article used whenever the LLM result cannot be used."""
    keywords = list(request.keywords) or [request.topic]
    keyword_text = ", ".join(keywords)
    if request.locale == "en":
        title = f"{request.topic}: Complete Travel Guide"
        meta = f"Plan your trip to {request.topic}. Tips, itinerary ideas and everything about {keyword_text}."
        paragraphs = [
            f"# {title}",
            f"{request.topic} is one of the destinations our travellers love most. "
            f"This guide covers what you need to know about {keyword_text}.",
            "## Best time to visit",
            "Check the season before you book so you can enjoy the trip at its best.",
            "## Book with us",
            "Our team prepares transport, meals and a local guide so you can simply enjoy the journey.",
        ]
    else:
        title = f"{request.topic}: Panduan Wisata Lengkap"
        meta = f"Rencanakan liburan ke {request.topic}. Tips, itinerary dan info lengkap seputar {keyword_text}."
        paragraphs = [
            f"# {title}",
            f"{request.topic} adalah salah satu destinasi favorit para traveler kami. "
            f"Panduan ini membahas hal penting seputar {keyword_text}.",
            "## Waktu terbaik berkunjung",
            "Perhatikan musim sebelum memesan agar perjalanan Anda maksimal.",
            "## Pesan bersama kami",
            "Tim kami menyiapkan transportasi, konsumsi dan guide lokal sehingga Anda tinggal menikmati perjalanan.",
        ]
    if request.base_content:
        paragraphs.insert(2, request.base_content.strip())

    return SpunContent(
        title=title,
        slug=slugify(title),
        meta_description=trim_meta_description(meta),
        content="\n\n".join(paragraphs),
        keywords=keywords,
        source=ContentSource.fallback,
    )


AgentFactory = Callable[[AIAgentConfig], AIAgentBase]


class ContentSpinner:
    """Generates SEO articles through an LLM agent with a static fallback.

    Args:
        agent_factory: Builds the agent for a config; defaults to :class:`PydanticAIAgent`
        ai_config: LLM settings; defaults to ``settings.ai``
    """

    def __init__(self, agent_factory: AgentFactory = PydanticAIAgent, ai_config: Optional[AIConfig] = None) -> None:
        self._agent_factory = agent_factory
        self._ai_config = ai_config or settings.ai

    def agent_config(self) -> AIAgentConfig:
        return AIAgentConfig(
            name="seo-content-spinner",
            model=self._ai_config.model,
            system_prompt=SYSTEM_PROMPT,
            temperature=self._ai_config.temperature,
            max_tokens=self._ai_config.max_tokens,
            timeout=self._ai_config.timeout_seconds,
        )

    async def spin(self, request: SpinRequest) -> SpunContent:
        prompt = build_prompt(request)
        try:
            async with self._agent_factory(self.agent_config()) as agent:
                response = await agent.invoke(prompt)
        except RuntimeError as e:
            logger.warning(f"Content spinner agent unavailable, using fallback: {e}")
            return build_fallback_content(request)

        if not response.success:
            logger.warning(f"Content spinner LLM call failed, using fallback: {response.error}")
            return build_fallback_content(request)
        if not response.content:
            logger.warning("Content spinner LLM returned empty output, using fallback")
            return build_fallback_content(request)

        spun = parse_spun_content(str(response.content), request)
        if spun is None:
            logger.warning(f"Content spinner could not parse LLM output for {request.topic!r}, using fallback")
            return build_fallback_content(request)

        logger.info(f"Spun content for {request.topic!r}: {spun.slug}")
        return spun

"""Cliente OpenAI para geração de fluxos de quiosque."""

from __future__ import annotations

import json
import logging
from typing import Any

from openai import AsyncOpenAI

from ai.utils._json_extractor import extract_json_from_response
from config.settings.ai.openai import OpenAISettings, get_openai_settings
from flowdoc import DocumentInvalidError, Flow, parse_flow

logger = logging.getLogger(__name__)


class OpenAIFlowClient:
    """Gerador de fluxos via Chat Completions (JSON mode).

    Implementa FlowGeneratorProtocol. Qualquer falha retorna None.
    """

    __slots__ = ("_client", "_max_tokens", "_model", "_timeout_seconds")

    def __init__(
        self,
        *,
        settings: OpenAISettings | None = None,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        cfg = settings or get_openai_settings()
        self._model = model or cfg.model or "gpt-4o-mini"
        self._timeout_seconds = float(timeout_seconds or cfg.timeout_seconds or 30.0)
        self._max_tokens = cfg.max_tokens
        if client is not None:
            self._client = client
        else:
            self._client = AsyncOpenAI(
                api_key=api_key or cfg.api_key,
                timeout=self._timeout_seconds,
                max_retries=cfg.max_retries,
            )

    async def generate(self, *, system_prompt: str, user_prompt: str) -> Flow | None:
        """Executa chamada OpenAI e retorna Flow validado."""
        response = await self._call_openai(system_prompt, user_prompt)
        if response is None:
            return None

        content = _extract_content(response)
        if not content:
            logger.warning("openai_flow_client_empty_response")
            return None

        data = _parse_json(content)
        if data is None:
            logger.warning("openai_flow_client_parse_failed")
            return None

        try:
            return parse_flow(data)
        except DocumentInvalidError as exc:
            logger.warning(
                "openai_flow_client_document_invalid",
                extra={"error": exc.message},
            )
            return None

    async def _call_openai(self, system_prompt: str, user_prompt: str) -> Any | None:
        try:
            return await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                temperature=0.2,
                max_tokens=self._max_tokens,
            )
        except Exception as exc:
            logger.warning(
                "openai_flow_client_error",
                extra={
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return None


def _extract_content(response: Any) -> str | None:
    try:
        return response.choices[0].message.content if response.choices else None
    except (AttributeError, IndexError, TypeError):
        return None


def _parse_json(content: str) -> dict[str, Any] | None:
    try:
        data = json.loads(content)
        if isinstance(data, dict):
            return data
    except json.JSONDecodeError:
        pass

    extracted = extract_json_from_response(content)
    if isinstance(extracted, dict):
        return extracted
    return None

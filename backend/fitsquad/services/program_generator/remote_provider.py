"""
RemoteProgramProvider — asks an OpenAI-compatible chat-completions API
(Groq, OpenAI, ...) for a program.

Raises on any problem; ProgramGenerator turns failures into the fallback.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from fitsquad.schemas.client import ClientProfile
from fitsquad.schemas.program import GeneratedProgramPayload
from fitsquad.services.program_generator.base import (
    ProgramGenerationError,
    ProgramGeneratorConfig,
    ProgramProvider,
)
from fitsquad.services.program_generator.prompt import SYSTEM_PROMPT, build_program_prompt

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_TOKENS = 2000

_JSON_FENCE_OPEN_RE = re.compile(r'^```json\s*', re.IGNORECASE)
_FENCE_OPEN_RE = re.compile(r'^```\s*')
_FENCE_CLOSE_RE = re.compile(r'```\s*$')


def strip_code_fences(content: str) -> str:
    """Remove a surrounding ```json ... ``` or ``` ... ``` block, if any."""
    text = content.strip()
    if text[:7].lower() == '```json':
        text = _FENCE_CLOSE_RE.sub('', _JSON_FENCE_OPEN_RE.sub('', text))
    elif text.startswith('```'):
        text = _FENCE_CLOSE_RE.sub('', _FENCE_OPEN_RE.sub('', text))
    return text.strip()


def parse_program_content(content: str) -> Dict[str, Any]:
    """Fence-strip, parse strictly and check the minimum program structure."""
    cleaned = strip_code_fences(content)
    data = json.loads(cleaned)
    if not isinstance(data, dict):
        raise ProgramGenerationError(f'expected a JSON object, got {type(data).__name__}')
    try:
        GeneratedProgramPayload.model_validate(data)
    except ValidationError as exc:
        raise ProgramGenerationError(f'AI program does not match the expected shape: {exc}') from exc
    return data


def _extract_content(body: Any) -> str:
    try:
        content = body['choices'][0]['message']['content']
    except (KeyError, IndexError, TypeError) as exc:
        raise ProgramGenerationError('AI response has no completion choice') from exc
    if not isinstance(content, str) or not content.strip():
        raise ProgramGenerationError('AI response content is empty')
    return content


class RemoteProgramProvider(ProgramProvider):
    """Program provider backed by a chat-completion endpoint."""

    def __init__(
        self,
        config: ProgramGeneratorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not config.api_key:
            raise ValueError('RemoteProgramProvider requires an API key')
        self._config = config
        self._transport = transport

    def build_payload(self, client: ClientProfile) -> Dict[str, Any]:
        return {
            'model': self._config.model,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': build_program_prompt(client)},
            ],
            'temperature': TEMPERATURE,
            'max_tokens': MAX_TOKENS,
        }

    async def generate(self, client: ClientProfile) -> Dict[str, Any]:
        headers = {
            'Authorization': f'Bearer {self._config.api_key}',
            'Content-Type': 'application/json',
        }
        logger.info(
            'RemoteProgramProvider.generate — url=%s model=%s client=%s',
            self._config.api_url,
            self._config.model,
            client.name,
        )

        async with httpx.AsyncClient(transport=self._transport, timeout=self._config.timeout) as http:
            response = await http.post(
                self._config.api_url,
                json=self.build_payload(client),
                headers=headers,
            )
            response.raise_for_status()
            body = response.json()

        content = _extract_content(body)
        logger.debug('AI content preview: %.200s', content)

        program = parse_program_content(content)
        program['generated_by_ai'] = True
        program['ai_model'] = self._config.model

        logger.info(
            'RemoteProgramProvider program received — name=%s workouts=%d',
            program.get('name'),
            len(program.get('workouts') or []),
        )
        return program

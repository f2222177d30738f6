"""
ProgramGenerator — the entry point used by the program routes.

Always returns a usable program: the AI path is attempted once when
configured, and any failure there is replaced by the deterministic
fallback. Only a missing client profile raises.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from fitsquad.schemas.client import ClientProfile
from fitsquad.services.program_generator.base import ProgramGeneratorConfig
from fitsquad.services.program_generator.factory import get_program_provider
from fitsquad.services.program_generator.fallback_provider import FallbackProgramProvider

logger = logging.getLogger(__name__)


class ProgramGenerator:

    def __init__(
        self,
        config: ProgramGeneratorConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._fallback = FallbackProgramProvider()

    @property
    def provider_name(self) -> str:
        return get_program_provider(self.config, self._transport).__class__.__name__

    async def generate_program(self, client: Optional[ClientProfile]) -> Dict[str, Any]:
        if client is None:
            raise ValueError('generate_program() requires a client profile')

        provider = get_program_provider(self.config, self._transport)
        if isinstance(provider, FallbackProgramProvider):
            return await provider.generate(client)

        try:
            return await provider.generate(client)
        except httpx.HTTPStatusError as exc:
            logger.warning(
                'AI API error (status=%d) — using fallback generator. body=%.300s',
                exc.response.status_code,
                exc.response.text,
            )
        except Exception:
            logger.exception('AI program generation failed — using fallback generator')

        return await self._fallback.generate(client)

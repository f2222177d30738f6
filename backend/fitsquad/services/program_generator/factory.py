"""
Provider factory — selects the ProgramProvider for a configuration.

- If an AI API key is configured → RemoteProgramProvider
- Otherwise                      → FallbackProgramProvider (deterministic)
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from fitsquad.services.program_generator.base import ProgramGeneratorConfig, ProgramProvider

logger = logging.getLogger(__name__)


def get_program_provider(
    config: ProgramGeneratorConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ProgramProvider:
    """Return the provider matching the configuration."""
    if config.ai_enabled:
        from fitsquad.services.program_generator.remote_provider import RemoteProgramProvider
        logger.debug('AI key present — using RemoteProgramProvider with model: %s', config.model)
        return RemoteProgramProvider(config, transport=transport)

    from fitsquad.services.program_generator.fallback_provider import FallbackProgramProvider
    logger.debug('AI key is empty or missing — using FallbackProgramProvider')
    return FallbackProgramProvider()

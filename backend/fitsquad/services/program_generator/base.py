"""
ProgramProvider abstract base class and ProgramGeneratorConfig.

Any program source (remote LLM, deterministic templates) must implement
ProgramProvider.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fitsquad.schemas.client import ClientProfile

DEFAULT_AI_API_URL = 'https://api.openai.com/v1/chat/completions'
DEFAULT_AI_MODEL = 'llama-3.3-70b-versatile'


@dataclass(frozen=True)
class ProgramGeneratorConfig:
    """Everything the generator needs from the outside world, fixed at construction."""
    api_url: str = DEFAULT_AI_API_URL
    api_key: Optional[str] = None
    model: str = DEFAULT_AI_MODEL
    timeout: float = 60.0

    @property
    def ai_enabled(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_settings(cls, settings) -> 'ProgramGeneratorConfig':
        return cls(
            api_url=settings.AI_API_URL or DEFAULT_AI_API_URL,
            api_key=settings.AI_API_KEY or None,
            model=settings.AI_MODEL or DEFAULT_AI_MODEL,
            timeout=settings.AI_TIMEOUT_SECONDS,
        )


class ProgramGenerationError(RuntimeError):
    """The AI answered, but not with something we can turn into a program."""


class ProgramProvider(ABC):
    """
    Abstract interface for program sources.

    RemoteProgramProvider  → chat-completion call, may fail
    FallbackProgramProvider → fixed templates, never fails
    """

    @abstractmethod
    async def generate(self, client: ClientProfile) -> Dict[str, Any]:
        """Return a program dict (name, description, duration, frequency, workouts, ...)."""
        ...

from __future__ import annotations

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    APP_NAME: str = 'FitSquad Coach API'
    APP_VERSION: str = '1.0.0'
    LOG_LEVEL: str = 'INFO'

    DATABASE_URL: str = 'sqlite:///./fitsquad.db'

    # HS256 keys shorter than 32 bytes are rejected as insecure by PyJWT
    JWT_SECRET: str = 'change-me-in-production-with-a-long-random-secret'
    JWT_ALGORITHM: str = 'HS256'
    JWT_EXPIRE_MINUTES: int = 60 * 24 * 7

    CORS_ORIGINS: List[str] = [
        'http://localhost:5173',
        'http://localhost:8080',
        'http://localhost:8081',
    ]

    # Program generation (OpenAI-compatible chat completions endpoint)
    AI_API_URL: str = 'https://api.openai.com/v1/chat/completions'
    AI_API_KEY: Optional[str] = None
    AI_MODEL: str = 'llama-3.3-70b-versatile'
    AI_TIMEOUT_SECONDS: float = 60.0


settings = Settings()

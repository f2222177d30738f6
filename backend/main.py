"""Ensure .env is loaded before anything else."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Try backend/.env first (running from backend/), then try repo-root/backend/.env
_env_file = Path(__file__).resolve().parent / ".env"
if not _env_file.exists():
    _env_file = Path(__file__).resolve().parent.parent / "backend" / ".env"
load_dotenv(dotenv_path=str(_env_file), override=False)

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitsquad.core.config import settings
from fitsquad.db.init_db import init_db
from fitsquad.api.deps import get_program_generator
from fitsquad.api.routes.health import router as health_router
from fitsquad.api.routes.auth import router as auth_router
from fitsquad.api.routes.clients import router as clients_router
from fitsquad.api.routes.programs import router as programs_router
from fitsquad.api.routes.sessions import router as sessions_router
from fitsquad.api.routes.progress import router as progress_router

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)


@app.on_event('startup')
def on_startup():
    init_db()
    # ---- Program generator startup diagnostics ----
    logger.info("=" * 50)
    logger.info("Program Generator Startup Diagnostics")
    logger.info("  .env path searched: %s", _env_file)
    logger.info("  AI_API_KEY present: %s", bool(settings.AI_API_KEY))
    logger.info("  AI_API_KEY length:  %d", len(settings.AI_API_KEY or ''))
    logger.info("  AI_API_URL: %s", settings.AI_API_URL)
    logger.info("  AI_MODEL: %s", settings.AI_MODEL)
    logger.info("  CWD: %s", os.getcwd())
    logger.info("  PID: %d", os.getpid())
    logger.info("  Selected provider: %s", get_program_generator().provider_name)
    logger.info("=" * 50)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS'],
    allow_headers=['Content-Type', 'Authorization', 'X-Requested-With'],
)


@app.get('/')
def root():
    return {
        'message': settings.APP_NAME,
        'version': settings.APP_VERSION,
        'endpoints': {
            'health': '/api/health',
            'auth': '/api/auth',
            'clients': '/api/clients',
            'programs': '/api/programs',
            'sessions': '/api/sessions',
            'progress': '/api/progress',
        },
    }


app.include_router(health_router)
app.include_router(auth_router, prefix='/api/auth')
app.include_router(clients_router, prefix='/api/clients')
app.include_router(programs_router, prefix='/api/programs')
app.include_router(sessions_router, prefix='/api/sessions')
app.include_router(progress_router, prefix='/api/progress')

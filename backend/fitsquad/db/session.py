from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fitsquad.core.config import settings

_connect_args = {'check_same_thread': False} if settings.DATABASE_URL.startswith('sqlite') else {}

engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

# store_backend/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker, declarative_base

from store_backend.utils.settings import DATABASE_URL


def build_engine(url: str):
    connect_args = {}
    # sqlite: sesje FastAPI chodza po roznych watkach
    if make_url(url).get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        return create_engine(url, connect_args=connect_args)

    return create_engine(
        url,
        connect_args=connect_args,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

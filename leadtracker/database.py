from sqlmodel import SQLModel, create_engine

from leadtracker.config import settings

# SQLite needs this to be used from FastAPI's worker threads
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Create Engine
engine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, connect_args=connect_args)


def init_db(bind=None):
    # Import models to ensure they are registered with SQLModel
    from leadtracker.models.store import StoreEntry  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)

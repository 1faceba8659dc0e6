from contextlib import contextmanager
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Bound to an engine by init_db() when the app is created
engine = None
SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)
Base = declarative_base()


def init_db(database_url):
    """Create the engine for database_url and bind the session factory to it."""
    global engine

    engine_kwargs = {}
    if database_url.startswith('sqlite'):
        # Flask serves requests from several threads
        engine_kwargs['connect_args'] = {'check_same_thread': False}
        if ':memory:' in database_url or database_url == 'sqlite://':
            # A single shared connection keeps the in-memory database alive
            engine_kwargs['poolclass'] = StaticPool

    if engine is not None:
        engine.dispose()

    engine = create_engine(database_url, **engine_kwargs)
    SessionLocal.configure(bind=engine)
    logger.info(f"Database engine initialised for {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_tables():
    """Create all tables known to Base.metadata (development and tests)."""
    import models  # noqa: F401  registers the mapped classes on Base

    Base.metadata.create_all(bind=engine)


def drop_tables():
    import models  # noqa: F401

    Base.metadata.drop_all(bind=engine)


# Context manager for SQLAlchemy sessions (needed for Flask routes)
@contextmanager
def get_db_session():
    """Provide a transactional scope around a series of SQLAlchemy operations."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"SQLAlchemy Session Error: {e}")
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"General Session Error: {e}")
        raise
    finally:
        db.close()

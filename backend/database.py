# backend/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config import settings

# 1. Database URL from settings (.env / environment), SQLite by default
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# 2. Hosted Postgres URLs use the legacy scheme, SQLAlchemy requires postgresql://
if SQLALCHEMY_DATABASE_URL and SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)


def make_engine(url: str) -> Engine:
    # SQLite connections are shared across request threads
    if "sqlite" in url:
        connect_args = {"check_same_thread": False, "timeout": 30}
    else:
        connect_args = {}
    eng = create_engine(url, connect_args=connect_args)
    if eng.dialect.name == "sqlite":
        event.listen(eng, "connect", _enable_sqlite_fks)
    return eng


def _enable_sqlite_fks(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = make_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind=None):
    # Models must be imported so their tables are registered on Base.metadata
    import models.store  # noqa: F401
    import models.folder  # noqa: F401
    import models.product  # noqa: F401
    import models.sale  # noqa: F401
    import models.log  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)

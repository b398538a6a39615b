# emprecords/database/database.py

from emprecords.core import settings, logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _enable_sqlite_transactions(engine: Engine) -> None:
    """
    pysqlite abre sus propias transacciones y rompe los SAVEPOINT.
    Dejamos que SQLAlchemy emita BEGIN y activamos las llaves foráneas
    (necesarias para el ON DELETE CASCADE).
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str) -> Engine:
    sa_url = make_url(url)
    timeout = settings.DB_OPERATION_TIMEOUT

    if sa_url.get_backend_name() == "sqlite":
        kwargs = {
            "connect_args": {"check_same_thread": False, "timeout": timeout},
            "echo": False,
        }
        if sa_url.database in (None, "", ":memory:"):
            # Una sola conexión compartida, si no cada hilo vería una BD vacía
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)
        _enable_sqlite_transactions(engine)
        return engine

    connect_args = {}
    if sa_url.get_backend_name() == "postgresql":
        connect_args = {
            "connect_timeout": timeout,
            "options": f"-c statement_timeout={timeout * 1000}",
        }

    return create_engine(
        url,
        connect_args=connect_args,
        pool_size=8,
        max_overflow=4,
        pool_timeout=timeout,   # Tiempo máximo esperando una conexión libre
        pool_recycle=1800,
        pool_pre_ping=True,     # Verifica que la conexión esté viva antes de usarla
        pool_use_lifo=True,
        echo=False,
    )


engine = build_engine(settings.URL_DATABASE_SQL)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # Importa los modelos para que queden registrados en Base.metadata
    from emprecords import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Tablas verificadas en {engine.url.render_as_string(hide_password=True)}")

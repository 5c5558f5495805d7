import logging
from pathlib import Path
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from clinic_records.core.config import DATABASE_URL
from clinic_records.core.errors import SchemaError
from clinic_records.core.logging_setup import DiagnosticLog
from clinic_records.models.tables import Base

log = logging.getLogger(__name__)

def get_engine(url: str | None = None, diagnostics: DiagnosticLog | None = None) -> Engine:
    """
    Create the engine. A SQLite file's parent directory is created first; if that fails
    the failure is logged and the engine is still returned, so ``ensure_schema`` reports degraded mode.
    """
    url = url or DATABASE_URL
    try:
        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
            try:
                Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                (diagnostics or DiagnosticLog()).append("Failed to prepare database directory", e)
                log.warning("Database directory unavailable: %s", e)
        return create_engine(url, echo=False, future=True)
    except SQLAlchemyError as e:
        log.error("Failed to create engine: %s", e)
        raise

def ensure_schema(engine: Engine, diagnostics: DiagnosticLog | None = None) -> bool:
    """
    Create missing tables (idempotent).
    Returns False instead of raising when the store rejects it; later calls then fail one by one.
    """
    diagnostics = diagnostics or DiagnosticLog()
    try:
        insp = inspect(engine)
        existing = set(insp.get_table_names())
        expected = set(Base.metadata.tables.keys())

        if expected.issubset(existing):
            log.info("All tables exist. Skipping creation.")
            return True

        missing = sorted(expected - existing)
        log.info("Creating tables: %s", ", ".join(missing))
        Base.metadata.create_all(engine)
        log.info("Tables created.")
        return True
    except SQLAlchemyError as e:
        err = SchemaError(str(e))
        diagnostics.append("Failed to create tables", err)
        log.warning("Schema setup failed; continuing in degraded mode")
        return False

"""
Clinic service - owns the process-wide engine and diagnostic log and hands out the repository.
"""
from __future__ import annotations
import logging
from clinic_records.core.db import ensure_schema, get_engine
from clinic_records.core.logging_setup import DiagnosticLog
from clinic_records.repository.clinic import ClinicRepository, DeletePolicy

log = logging.getLogger(__name__)

class ClinicService:
    """
    Process lifetime wrapper: ``start()`` opens the store once, ``stop()`` releases it.

        with ClinicService() as clinic:
            clinic.repository.add_patient("Alice", 30, "555-1234", "none")
    """

    def __init__(
        self,
        database_url: str | None = None,
        diagnostics: DiagnosticLog | None = None,
        delete_policy: DeletePolicy = DeletePolicy.ORPHAN,
    ):
        self.database_url = database_url
        self.diagnostics = diagnostics or DiagnosticLog()
        self.delete_policy = delete_policy
        self.engine = None
        self.repository: ClinicRepository | None = None
        self.schema_ready = False

    def start(self) -> ClinicRepository:
        if self.repository is not None:
            return self.repository
        self.diagnostics.open()
        self.engine = get_engine(self.database_url, self.diagnostics)
        self.schema_ready = ensure_schema(self.engine, self.diagnostics)
        if not self.schema_ready:
            log.warning("Clinic store started without a complete schema")
        self.repository = ClinicRepository(self.engine, self.diagnostics, self.delete_policy)
        log.info("Clinic store ready: %s", self.engine.url.render_as_string(hide_password=True))
        return self.repository

    def stop(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None
        self.repository = None
        self.diagnostics.close()

    def __enter__(self) -> "ClinicService":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

def start_clinic(database_url: str | None = None, delete_policy: DeletePolicy = DeletePolicy.ORPHAN) -> ClinicRepository:
    """Start a service for the life of the process and return its repository."""
    return ClinicService(database_url, delete_policy=delete_policy).start()

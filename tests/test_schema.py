"""
Schema manager tests
"""
from sqlalchemy import create_engine, inspect
from clinic_records.core.db import ensure_schema
from clinic_records.repository.clinic import ClinicRepository

EXPECTED_COLUMNS = {
    "Patients": {"id", "name", "age", "contact", "medicalHistory"},
    "Appointments": {"id", "patientId", "date", "time", "purpose", "completed"},
    "Treatments": {"id", "patientId", "appointmentId", "notes", "medications"},
}

def _columns(engine):
    insp = inspect(engine)
    return {t: {c["name"] for c in insp.get_columns(t)} for t in insp.get_table_names()}

def test_ensure_schema_creates_tables(engine, diagnostics):
    assert ensure_schema(engine, diagnostics) is True
    assert _columns(engine) == EXPECTED_COLUMNS

def test_ensure_schema_is_idempotent(engine, diagnostics):
    assert ensure_schema(engine, diagnostics) is True
    first = _columns(engine)
    assert ensure_schema(engine, diagnostics) is True
    assert _columns(engine) == first

def test_ensure_schema_keeps_existing_rows(repo, engine, diagnostics):
    repo.add_patient("Alice", 30, "555-1234", "none")
    assert ensure_schema(engine, diagnostics) is True
    assert len(repo.get_all_patients().value) == 1

def test_schema_failure_is_not_fatal(tmp_path, diagnostics):
    # parent directory does not exist, so sqlite cannot open the file
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'clinic.db'}")

    assert ensure_schema(engine, diagnostics) is False

    # degraded mode: later calls fail one at a time without raising
    repo = ClinicRepository(engine, diagnostics)
    assert not repo.add_patient("Alice", 30, "555-1234", "none").ok
    assert not repo.get_all_patients().ok

    diagnostics.close()
    text = diagnostics.path.read_text(encoding="utf-8")
    assert "Failed to create tables" in text
    assert "Failed to add patient" in text

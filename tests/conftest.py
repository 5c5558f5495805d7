import pytest
from clinic_records.core.db import ensure_schema, get_engine
from clinic_records.core.logging_setup import DiagnosticLog
from clinic_records.repository.clinic import ClinicRepository

@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'clinic.db'}"

@pytest.fixture
def engine(db_url):
    engine = get_engine(db_url)
    yield engine
    engine.dispose()

@pytest.fixture
def diagnostics(tmp_path):
    with DiagnosticLog(tmp_path / "clinic_debug.log") as diag:
        yield diag

@pytest.fixture
def repo(engine, diagnostics):
    assert ensure_schema(engine, diagnostics)
    return ClinicRepository(engine, diagnostics)

@pytest.fixture
def alice(repo):
    result = repo.add_patient("Alice", 30, "555-1234", "none")
    assert result.ok
    return result.value

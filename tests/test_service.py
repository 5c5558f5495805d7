"""
Tests for the clinic service and the CSV export script
"""
import pandas as pd
from clinic_records.core.logging_setup import DiagnosticLog
from clinic_records.repository.clinic import DeletePolicy
from clinic_records.scripts.export_appointments import export_day, main
from clinic_records.services.clinic import ClinicService

def test_service_lifecycle(db_url, tmp_path):
    service = ClinicService(db_url, diagnostics=DiagnosticLog(tmp_path / "debug.log"))
    repo = service.start()
    assert service.schema_ready
    assert service.start() is repo

    assert repo.add_patient("Alice", 30, "555-1234", "none").value == 1
    service.stop()
    assert service.repository is None

    # data survives a restart
    with ClinicService(db_url, diagnostics=DiagnosticLog(tmp_path / "debug.log")) as clinic:
        assert [p.name for p in clinic.repository.get_all_patients().value] == ["Alice"]

def test_service_passes_delete_policy(db_url, tmp_path):
    with ClinicService(db_url, DiagnosticLog(tmp_path / "debug.log"), DeletePolicy.RESTRICT) as clinic:
        assert clinic.repository.delete_policy is DeletePolicy.RESTRICT

def test_export_day_writes_csv(repo, alice, tmp_path):
    repo.add_appointment(alice, "2024-03-01", "09:00", "checkup")
    repo.add_appointment(alice, "2024-03-02", "10:00", "other")

    out = export_day(repo, "2024-03-01", tmp_path / "out.csv")
    df = pd.read_csv(out)
    assert list(df.columns) == ["time", "patient_id", "patient_name", "purpose"]
    assert df.to_dict("records") == [
        {"time": "09:00", "patient_id": 1, "patient_name": "Alice", "purpose": "checkup"}
    ]

def test_export_empty_day_has_header_only(repo, tmp_path):
    out = export_day(repo, "2024-03-01", tmp_path / "empty.csv")
    assert pd.read_csv(out).empty

def test_export_cli(db_url, tmp_path):
    with ClinicService(db_url, DiagnosticLog(tmp_path / "debug.log")) as clinic:
        pid = clinic.repository.add_patient("O'Brien", 61, "555-0101", "").value
        clinic.repository.add_appointment(pid, "2024-03-01", "08:30", "bloods")

    out = tmp_path / "cli.csv"
    assert main(["--date", "2024-03-01", "--out", str(out), "--database-url", db_url]) == 0
    assert pd.read_csv(out)["patient_name"].tolist() == ["O'Brien"]

def test_unwritable_storage_starts_degraded(tmp_path):
    blocker = tmp_path / "afile"
    blocker.write_text("not a directory")
    log_path = tmp_path / "debug.log"

    service = ClinicService(f"sqlite:///{blocker / 'clinic.db'}", DiagnosticLog(log_path))
    repo = service.start()
    assert service.schema_ready is False

    result = repo.add_patient("Alice", 30, "555-1234", "none")
    assert not result.ok
    assert not repo.get_all_patients().ok
    service.stop()

    text = log_path.read_text(encoding="utf-8")
    assert "Failed to prepare database directory" in text
    assert "Failed to create tables" in text
    assert "Failed to add patient" in text

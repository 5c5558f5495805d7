"""
Export one day's appointment list (joined with patient names) to CSV.
Run with:
    python -m clinic_records.scripts.export_appointments --date 2024-03-01
"""
from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import asdict
from pathlib import Path
import pandas as pd
from clinic_records.core.config import EXPORTS_DIR
from clinic_records.core.logging_setup import setup_logging
from clinic_records.models.entities import DailyAppointment
from clinic_records.repository.clinic import ClinicRepository
from clinic_records.services.clinic import ClinicService

log = logging.getLogger(__name__)

COLUMNS = ["time", "patient_id", "patient_name", "purpose"]

def appointments_frame(rows: list[DailyAppointment]) -> pd.DataFrame:
    return pd.DataFrame([asdict(r) for r in rows], columns=COLUMNS)

def export_day(repo: ClinicRepository, day: str, out: Path | None = None) -> Path | None:
    """Write the day's appointments to ``out`` (default under EXPORTS_DIR). Returns None on failure."""
    result = repo.get_appointments_by_date(day)
    if not result.ok:
        log.error("Export aborted: %s", result.cause)
        return None

    df = appointments_frame(result.value)
    out = Path(out) if out else Path(EXPORTS_DIR) / f"appointments_{day}.csv"
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)
    log.info("Exported %d appointments for %s -> %s", len(df), day, out)
    return out

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--date", required=True, help="day to export, yyyy-MM-dd")
    parser.add_argument("--out", type=Path, default=None, help="output CSV path")
    parser.add_argument("--database-url", default=None)
    args = parser.parse_args(argv)

    setup_logging()
    with ClinicService(args.database_url) as clinic:
        path = export_day(clinic.repository, args.date, args.out)
    return 0 if path else 1

if __name__ == "__main__":
    sys.exit(main())

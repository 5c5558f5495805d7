"""
Create the clinic tables if they are missing.
Run with:
    python -m clinic_records.scripts.init_db
"""
import logging
import sys
from clinic_records.core.db import ensure_schema, get_engine
from clinic_records.core.logging_setup import DiagnosticLog, setup_logging

def main() -> int:
    setup_logging()
    log = logging.getLogger(__name__)

    log.info("Initialising clinic database")
    with DiagnosticLog() as diagnostics:
        ok = ensure_schema(get_engine(), diagnostics)
    if not ok:
        log.error("Schema setup failed; see the diagnostic log")
        return 1
    log.info("Database ready")
    return 0

if __name__ == "__main__":
    sys.exit(main())

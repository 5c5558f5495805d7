
from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

# project paths
BASE_DIR    = Path(__file__).resolve().parent.parent.parent.parent
DATA_DIR    = Path(os.getenv("CLINIC_DATA_DIR", BASE_DIR / "data"))
LOGS_DIR    = DATA_DIR / "logs"
EXPORTS_DIR = DATA_DIR / "exports"

# database
DB_FILE      = DATA_DIR / "clinic.db"
DATABASE_URL = os.getenv("CLINIC_DATABASE_URL", f"sqlite:///{DB_FILE}")

# logging
LOG_LEVEL      = os.getenv("CLINIC_LOG_LEVEL", "INFO")
LOG_FILE       = os.getenv("CLINIC_LOG_FILE", "clinic.log")
DIAGNOSTIC_LOG = os.getenv("CLINIC_DIAGNOSTIC_LOG", "clinic_debug.log")

# stored formats
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
MEDICATION_DELIMITER = ";"

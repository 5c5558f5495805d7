import logging
import logging.handlers
from pathlib import Path
from clinic_records.core.config import LOGS_DIR, LOG_LEVEL, LOG_FILE, DIAGNOSTIC_LOG

DEFAULT_FMT = "%(asctime)s - %(levelname)-5s - %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"
DIAGNOSTIC_LOGGER = "clinic_records.diagnostics"

def setup_logging(level: str = LOG_LEVEL, file_name: str = LOG_FILE) -> None:
    if getattr(setup_logging, "_configured", False):
        return  # prevent double-config
    Path(LOGS_DIR).mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level.upper())

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter(DEFAULT_FMT, datefmt=DATE_FMT))
    root.addHandler(ch)

    # Rotating file
    fh = logging.handlers.RotatingFileHandler(
        Path(LOGS_DIR) / file_name, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    fh.setFormatter(logging.Formatter(DEFAULT_FMT, datefmt=DATE_FMT))
    root.addHandler(fh)

    setup_logging._configured = True


class DiagnosticLog:
    """
    Append-only sink for failed storage operations.

    Owned by whoever starts the process and handed to the repository and the
    schema manager. Records go to a dedicated logger that does not propagate
    (callers log their own console line); ``open()`` attaches an append-mode
    file under ``LOGS_DIR`` and ``close()`` releases it. The first ``append``
    opens the file if nobody did.
    """

    def __init__(self, path: Path | None = None, logger: logging.Logger | None = None):
        self.path = Path(path) if path else Path(LOGS_DIR) / DIAGNOSTIC_LOG
        if logger is None:
            logger = logging.getLogger(DIAGNOSTIC_LOGGER)
            logger.propagate = False
        self.logger = logger
        self._handler: logging.Handler | None = None

    def open(self) -> "DiagnosticLog":
        if self._handler is not None:
            return self
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(self.path, mode="a", encoding="utf-8")
        fh.setFormatter(logging.Formatter(DEFAULT_FMT, datefmt=DATE_FMT))
        self.logger.addHandler(fh)
        self._handler = fh
        return self

    def close(self) -> None:
        if self._handler is None:
            return
        self.logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None

    def __enter__(self) -> "DiagnosticLog":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()

    def append(self, message: str, error: BaseException | None = None) -> None:
        """Record ``message`` plus the engine detail of ``error``. Never raises."""
        try:
            self.open()
            if error is not None:
                self.logger.error("%s: %s", message, error)
            else:
                self.logger.error("%s", message)
        except Exception:
            # best-effort sink
            pass

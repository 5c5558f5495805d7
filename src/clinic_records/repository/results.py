"""
Outcome values returned by every repository call.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, ClassVar
from clinic_records.core.errors import ClinicError

@dataclass(frozen=True)
class Ok:
    """Success. ``rowcount`` is the number of rows a write touched (0 means nothing matched)."""
    value: Any = None
    rowcount: int = 0
    ok: ClassVar[bool] = True

@dataclass(frozen=True)
class Failure:
    """A caught storage failure. ``cause`` is a readable summary; ``error`` keeps the detail."""
    cause: str
    error: ClinicError | None = None
    ok: ClassVar[bool] = False

    def __bool__(self) -> bool:
        return False

Result = Ok | Failure

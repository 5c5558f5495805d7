"""
Plain records handed to callers. No ORM state leaks past the repository.
"""

from __future__ import annotations
from dataclasses import dataclass, field

@dataclass(frozen=True)
class Patient:
    id: int
    name: str
    age: int
    contact: str
    medical_history: str

@dataclass(frozen=True)
class Appointment:
    id: int
    patient_id: int
    date: str
    time: str
    purpose: str
    completed: bool

@dataclass(frozen=True)
class Treatment:
    id: int
    patient_id: int
    appointment_id: int
    notes: str
    medications: list[str] = field(default_factory=list)

@dataclass(frozen=True)
class DailyAppointment:
    """One line of the by-date view: an appointment joined to its patient."""
    time: str
    patient_id: int
    patient_name: str
    purpose: str

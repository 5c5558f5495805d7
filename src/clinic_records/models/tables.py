"""
ORM models for the clinic database.
Column names follow the stored schema; foreign ids are plain integers (no FK constraint).
"""

from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import Column, Integer, Text

class Base(DeclarativeBase):
    pass

class PatientRow(Base):
    __tablename__ = "Patients"
    __table_args__ = {"sqlite_autoincrement": True}

    id              = Column(Integer, primary_key=True, autoincrement=True)
    name            = Column(Text)
    age             = Column(Integer)
    contact         = Column(Text)
    medical_history = Column("medicalHistory", Text)

class AppointmentRow(Base):
    __tablename__ = "Appointments"
    __table_args__ = {"sqlite_autoincrement": True}

    id         = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column("patientId", Integer, index=True)
    date       = Column(Text, index=True)    # yyyy-MM-dd
    time       = Column(Text)                # HH:mm
    purpose    = Column(Text)
    completed  = Column(Integer, default=0)  # 0 | 1

class TreatmentRow(Base):
    __tablename__ = "Treatments"
    __table_args__ = {"sqlite_autoincrement": True}

    id             = Column(Integer, primary_key=True, autoincrement=True)
    patient_id     = Column("patientId", Integer, index=True)
    appointment_id = Column("appointmentId", Integer, index=True)
    notes          = Column(Text)
    medications    = Column(Text)            # "a;b;"

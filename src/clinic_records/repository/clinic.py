"""
Clinic repository: CRUD and query operations over patients, appointments and treatments.

- One engine is injected at construction and held for the process lifetime.
- Each call opens its own Session, which is closed (and rolled back if needed) on every exit path.
- All values are bound parameters; free text never alters statement structure.
- Storage failures are logged to the diagnostic sink and returned as ``Failure``; nothing raises.
"""

from __future__ import annotations
import enum
import logging
from datetime import date as date_type, time as time_type
from typing import Callable, Iterable
from sqlalchemy import delete, func, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from clinic_records.codec.fields import (
    decode_medications,
    encode_medications,
    format_date,
    format_time,
)
from clinic_records.core.errors import PersistenceError, ReferentialIntegrityError
from clinic_records.core.logging_setup import DiagnosticLog
from clinic_records.models.entities import Appointment, DailyAppointment, Patient, Treatment
from clinic_records.models.tables import AppointmentRow, PatientRow, TreatmentRow
from clinic_records.repository.results import Failure, Ok, Result

log = logging.getLogger(__name__)


class DeletePolicy(enum.Enum):
    """What deleting a patient or appointment does to rows that reference it."""
    ORPHAN = "orphan"      # leave dependents in place
    RESTRICT = "restrict"  # refuse while dependents exist
    CASCADE = "cascade"    # delete dependents first


# row -> record
def _patient(row: PatientRow) -> Patient:
    return Patient(
        id=row.id,
        name=row.name,
        age=row.age,
        contact=row.contact,
        medical_history=row.medical_history,
    )

def _appointment(row: AppointmentRow) -> Appointment:
    return Appointment(
        id=row.id,
        patient_id=row.patient_id,
        date=row.date,
        time=row.time,
        purpose=row.purpose,
        completed=bool(row.completed),
    )

def _treatment(row: TreatmentRow) -> Treatment:
    return Treatment(
        id=row.id,
        patient_id=row.patient_id,
        appointment_id=row.appointment_id,
        notes=row.notes,
        medications=decode_medications(row.medications),
    )


class ClinicRepository:
    def __init__(
        self,
        engine: Engine,
        diagnostics: DiagnosticLog | None = None,
        delete_policy: DeletePolicy = DeletePolicy.ORPHAN,
    ):
        self.engine = engine
        self.diagnostics = diagnostics or DiagnosticLog()
        self.delete_policy = delete_policy

    # plumbing
    def _fail(self, operation: str, err: PersistenceError) -> Failure:
        self.diagnostics.append(f"Failed to {operation}", err)
        log.error("%s", err)
        return Failure(str(err), err)

    def _run(self, operation: str, work: Callable[[Session], Result], **ids) -> Result:
        for key, value in ids.items():
            if not isinstance(value, int) or isinstance(value, bool):
                return self._fail(operation, PersistenceError(operation, f"{key} must be an integer, got {value!r}"))
        try:
            with Session(self.engine) as session:
                return work(session)
        except ReferentialIntegrityError as e:
            return self._fail(operation, e)
        except SQLAlchemyError as e:
            detail = str(getattr(e, "orig", None) or e)
            return self._fail(operation, PersistenceError(operation, detail))
        except Exception as e:
            # driver errors SQLAlchemy does not wrap, e.g. OverflowError on ints past int64
            return self._fail(operation, PersistenceError(operation, f"{type(e).__name__}: {e}"))

    @staticmethod
    def _insert(session: Session, row) -> Ok:
        session.add(row)
        session.flush()
        new_id = row.id
        session.commit()
        return Ok(new_id, rowcount=1)

    @staticmethod
    def _write(session: Session, stmt) -> Ok:
        res = session.execute(stmt)
        session.commit()
        return Ok(None, rowcount=res.rowcount)

    @staticmethod
    def _patient_dependents(session: Session, patient_id: int):
        """Appointment ids of the patient and a filter matching their treatments."""
        appt_ids = session.scalars(
            select(AppointmentRow.id).where(AppointmentRow.patient_id == patient_id)
        ).all()
        treatments = TreatmentRow.patient_id == patient_id
        if appt_ids:
            treatments = treatments | TreatmentRow.appointment_id.in_(appt_ids)
        return appt_ids, treatments

    # patients
    def add_patient(self, name: str, age: int, contact: str, medical_history: str) -> Result:
        def work(session: Session) -> Result:
            result = self._insert(session, PatientRow(
                name=name, age=age, contact=contact, medical_history=medical_history,
            ))
            log.info("Added patient %d", result.value)
            return result
        return self._run("add patient", work, age=age)

    def get_all_patients(self) -> Result:
        def work(session: Session) -> Result:
            rows = session.scalars(select(PatientRow).order_by(PatientRow.id)).all()
            return Ok([_patient(r) for r in rows])
        return self._run("fetch patients", work)

    def get_patient(self, patient_id: int) -> Result:
        def work(session: Session) -> Result:
            row = session.get(PatientRow, patient_id)
            return Ok(_patient(row) if row is not None else None)
        return self._run("fetch patient", work, patient_id=patient_id)

    def update_patient(self, patient_id: int, name: str, age: int, contact: str, medical_history: str) -> Result:
        def work(session: Session) -> Result:
            return self._write(session, (
                update(PatientRow)
                .where(PatientRow.id == patient_id)
                .values(name=name, age=age, contact=contact, medical_history=medical_history)
            ))
        return self._run("edit patient", work, patient_id=patient_id, age=age)

    def delete_patient(self, patient_id: int) -> Result:
        def work(session: Session) -> Result:
            if session.get(PatientRow, patient_id) is None:
                return Ok(None, rowcount=0)

            if self.delete_policy is DeletePolicy.RESTRICT:
                appt_ids, dependents = self._patient_dependents(session, patient_id)
                n_treat = session.scalar(select(func.count()).select_from(TreatmentRow).where(dependents))
                if appt_ids or n_treat:
                    raise ReferentialIntegrityError(
                        "delete patient",
                        f"patient {patient_id} has {len(appt_ids)} appointment(s) and {n_treat} treatment(s)",
                    )
            elif self.delete_policy is DeletePolicy.CASCADE:
                _, dependents = self._patient_dependents(session, patient_id)
                n_treat = session.execute(delete(TreatmentRow).where(dependents)).rowcount
                n_appt = session.execute(
                    delete(AppointmentRow).where(AppointmentRow.patient_id == patient_id)
                ).rowcount
                log.info("Cascade from patient %d: appointments=%d, treatments=%d", patient_id, n_appt, n_treat)

            return self._write(session, delete(PatientRow).where(PatientRow.id == patient_id))
        return self._run("delete patient", work, patient_id=patient_id)

    def find_references(self, patient_id: int) -> Result:
        """Count appointments and treatments that point at ``patient_id``."""
        def work(session: Session) -> Result:
            n_appt = session.scalar(
                select(func.count()).select_from(AppointmentRow).where(AppointmentRow.patient_id == patient_id)
            )
            n_treat = session.scalar(
                select(func.count()).select_from(TreatmentRow).where(TreatmentRow.patient_id == patient_id)
            )
            return Ok({"appointments": n_appt, "treatments": n_treat})
        return self._run("count references", work, patient_id=patient_id)

    # appointments
    def add_appointment(
        self,
        patient_id: int,
        date: date_type | str,
        time: time_type | str,
        purpose: str,
        completed: bool = False,
    ) -> Result:
        def work(session: Session) -> Result:
            return self._insert(session, AppointmentRow(
                patient_id=patient_id,
                date=format_date(date),
                time=format_time(time),
                purpose=purpose,
                completed=1 if completed else 0,
            ))
        return self._run("add appointment", work, patient_id=patient_id)

    def update_appointment(
        self,
        appointment_id: int,
        patient_id: int,
        date: date_type | str,
        time: time_type | str,
        purpose: str,
        completed: bool,
    ) -> Result:
        def work(session: Session) -> Result:
            return self._write(session, (
                update(AppointmentRow)
                .where(AppointmentRow.id == appointment_id)
                .values(
                    patient_id=patient_id,
                    date=format_date(date),
                    time=format_time(time),
                    purpose=purpose,
                    completed=1 if completed else 0,
                )
            ))
        return self._run("edit appointment", work, appointment_id=appointment_id, patient_id=patient_id)

    def delete_appointment(self, appointment_id: int) -> Result:
        def work(session: Session) -> Result:
            dependents = TreatmentRow.appointment_id == appointment_id
            if self.delete_policy is DeletePolicy.RESTRICT:
                n_treat = session.scalar(select(func.count()).select_from(TreatmentRow).where(dependents))
                if n_treat and session.get(AppointmentRow, appointment_id) is not None:
                    raise ReferentialIntegrityError(
                        "delete appointment",
                        f"appointment {appointment_id} has {n_treat} treatment(s)",
                    )
            elif self.delete_policy is DeletePolicy.CASCADE:
                if session.get(AppointmentRow, appointment_id) is not None:
                    session.execute(delete(TreatmentRow).where(dependents))
            return self._write(session, delete(AppointmentRow).where(AppointmentRow.id == appointment_id))
        return self._run("delete appointment", work, appointment_id=appointment_id)

    def get_appointments_by_date(self, date: date_type | str) -> Result:
        """
        Appointments on ``date`` joined to their patient, ordered by time.
        Inner join: an appointment whose patient no longer exists is left out.
        """
        def work(session: Session) -> Result:
            stmt = (
                select(AppointmentRow.time, AppointmentRow.patient_id, PatientRow.name, AppointmentRow.purpose)
                .join(PatientRow, AppointmentRow.patient_id == PatientRow.id)
                .where(AppointmentRow.date == format_date(date))
                .order_by(AppointmentRow.time, AppointmentRow.id)
            )
            return Ok([DailyAppointment(*row) for row in session.execute(stmt)])
        return self._run("fetch appointments", work)

    def get_appointments_by_patient(self, patient_id: int) -> Result:
        def work(session: Session) -> Result:
            rows = session.scalars(
                select(AppointmentRow)
                .where(AppointmentRow.patient_id == patient_id)
                .order_by(AppointmentRow.id)
            ).all()
            return Ok([_appointment(r) for r in rows])
        return self._run("fetch appointments", work, patient_id=patient_id)

    def find_orphaned_appointments(self) -> Result:
        """Appointments whose patient row is missing."""
        def work(session: Session) -> Result:
            rows = session.scalars(
                select(AppointmentRow)
                .outerjoin(PatientRow, AppointmentRow.patient_id == PatientRow.id)
                .where(PatientRow.id.is_(None))
                .order_by(AppointmentRow.id)
            ).all()
            return Ok([_appointment(r) for r in rows])
        return self._run("fetch orphaned appointments", work)

    # treatments
    def add_treatment(self, patient_id: int, appointment_id: int, notes: str, medications: Iterable[str] | str) -> Result:
        """``medications`` is a list, or free text like ``"ibuprofen; vitamin-d"``."""
        def work(session: Session) -> Result:
            return self._insert(session, TreatmentRow(
                patient_id=patient_id,
                appointment_id=appointment_id,
                notes=notes,
                medications=encode_medications(medications),
            ))
        return self._run("add treatment", work, patient_id=patient_id, appointment_id=appointment_id)

    def get_treatments_by_patient(self, patient_id: int) -> Result:
        def work(session: Session) -> Result:
            rows = session.scalars(
                select(TreatmentRow)
                .where(TreatmentRow.patient_id == patient_id)
                .order_by(TreatmentRow.id)
            ).all()
            return Ok([_treatment(r) for r in rows])
        return self._run("fetch treatments", work, patient_id=patient_id)

    def update_treatment(self, patient_id: int, appointment_id: int, notes: str, medications: Iterable[str] | str) -> Result:
        """Rewrite notes and medications of EVERY treatment with this (patient, appointment) pair."""
        def work(session: Session) -> Result:
            return self._write(session, (
                update(TreatmentRow)
                .where(TreatmentRow.patient_id == patient_id, TreatmentRow.appointment_id == appointment_id)
                .values(notes=notes, medications=encode_medications(medications))
            ))
        return self._run("edit treatment", work, patient_id=patient_id, appointment_id=appointment_id)

    def delete_treatment(self, patient_id: int, appointment_id: int) -> Result:
        """Delete EVERY treatment with this (patient, appointment) pair."""
        def work(session: Session) -> Result:
            return self._write(session, delete(TreatmentRow).where(
                TreatmentRow.patient_id == patient_id, TreatmentRow.appointment_id == appointment_id
            ))
        return self._run("delete treatment", work, patient_id=patient_id, appointment_id=appointment_id)

    def update_treatment_by_id(self, treatment_id: int, notes: str, medications: Iterable[str] | str) -> Result:
        def work(session: Session) -> Result:
            return self._write(session, (
                update(TreatmentRow)
                .where(TreatmentRow.id == treatment_id)
                .values(notes=notes, medications=encode_medications(medications))
            ))
        return self._run("edit treatment", work, treatment_id=treatment_id)

    def delete_treatment_by_id(self, treatment_id: int) -> Result:
        def work(session: Session) -> Result:
            return self._write(session, delete(TreatmentRow).where(TreatmentRow.id == treatment_id))
        return self._run("delete treatment", work, treatment_id=treatment_id)

from clinic_records.models.tables import Base, PatientRow, AppointmentRow, TreatmentRow
from clinic_records.models.entities import Patient, Appointment, Treatment, DailyAppointment

__all__ = [
    "Base",
    "PatientRow",
    "AppointmentRow",
    "TreatmentRow",
    "Patient",
    "Appointment",
    "Treatment",
    "DailyAppointment",
]

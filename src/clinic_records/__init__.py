"""
Clinic records: persistence layer for patients, appointments and treatments.
"""
from clinic_records.repository import ClinicRepository, DeletePolicy, Failure, Ok
from clinic_records.services.clinic import ClinicService, start_clinic

__all__ = ["ClinicRepository", "ClinicService", "DeletePolicy", "Failure", "Ok", "start_clinic"]
__version__ = "1.0.0"

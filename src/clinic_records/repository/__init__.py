from clinic_records.repository.results import Ok, Failure, Result
from clinic_records.repository.clinic import ClinicRepository, DeletePolicy

__all__ = ["Ok", "Failure", "Result", "ClinicRepository", "DeletePolicy"]

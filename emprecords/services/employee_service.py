# emprecords/services/employee_service.py

from sqlalchemy.orm import Session
from emprecords.models import EmployeeMaster, EmployeeDetail
from emprecords.repositories import EmployeeRepository
from emprecords.schemas import EmployeeWrite, EmployeeRecord, EmployeeCreated
from emprecords.core.exceptions import EmployeeNotFoundError
from emprecords.core import logger


def _to_record(master: EmployeeMaster, detail: EmployeeDetail | None) -> EmployeeRecord:
    record = EmployeeRecord(
        mast_code=master.emp_mast_code,
        user_id=master.emp_user_id,
        emp_id=master.emp_id,
        emp_name=master.emp_name,
        designation=master.emp_designation,
        department=master.emp_department,
        joined_date=master.emp_joined_date,
        salary=master.emp_salary,
    )
    if detail is not None:
        record.emp_detail_id = detail.emd_id
        record.address_line1 = detail.emd_address_line1
        record.address_line2 = detail.emd_address_line2
        record.city = detail.emd_city
        record.state = detail.emd_state
        record.country = detail.emd_country
    return record


def list_employees_service(db: Session, search: str | None = None) -> list[EmployeeRecord]:
    rows = EmployeeRepository(db).list_employees_repository(search.strip() if search else None)
    return [_to_record(master, detail) for master, detail in rows]


def get_employee_service(db: Session, mast_code: int) -> EmployeeRecord:
    row = EmployeeRepository(db).get_employee_repository(mast_code)
    if not row:
        raise EmployeeNotFoundError()
    return _to_record(*row)


def create_employee_service(db: Session, user_id: int, data: EmployeeWrite) -> EmployeeCreated:
    mast_code = EmployeeRepository(db).create_employee_repository(
        user_id, data.master_fields(), data.detail_fields()
    )
    return EmployeeCreated(mast_code=mast_code)


def update_employee_service(db: Session, mast_code: int, data: EmployeeWrite) -> None:
    EmployeeRepository(db).update_employee_repository(mast_code, data.master_fields(), data.detail_fields())


def delete_employee_service(db: Session, mast_code: int) -> None:
    if not EmployeeRepository(db).delete_employee_repository(mast_code):
        logger.info(f"Intento de eliminar un empleado inexistente: {mast_code}")
        raise EmployeeNotFoundError("Employee not found or could not be deleted.")

# emprecords/repositories/employee_repository.py

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from emprecords.models import EmployeeMaster, EmployeeDetail
from emprecords.core import logger
from emprecords.core.logger import log_critical_error
from emprecords.core.exceptions import (
    DuplicateEmpIDError,
    DetailWriteFailedError,
    EmployeeNotFoundError,
    WriteFailedError,
)

EmployeeRow = tuple[EmployeeMaster, EmployeeDetail | None]

class EmployeeRepository:
    """
    Maestro (tbemployeemaster) + detalle 1:1 (tbemployeedetail).
    Cada escritura de varios pasos corre en una sola transacción de la sesión.
    """

    def __init__(self, db: Session):
        self.db = db

    def _record_query(self):
        # LEFT JOIN: un maestro sin detalle se devuelve con el detalle en None
        return (
            self.db.query(EmployeeMaster, EmployeeDetail)
            .outerjoin(EmployeeDetail, EmployeeDetail.emd_mast_code == EmployeeMaster.emp_mast_code)
        )

    def list_employees_repository(self, search: str | None = None) -> list[EmployeeRow]:
        query = self._record_query()

        if search:
            query = query.filter(
                or_(
                    EmployeeMaster.emp_name.icontains(search, autoescape=True),
                    EmployeeMaster.emp_id.icontains(search, autoescape=True),
                    EmployeeMaster.emp_designation.icontains(search, autoescape=True),
                    EmployeeMaster.emp_department.icontains(search, autoescape=True),
                )
            )

        return [tuple(row) for row in query.order_by(EmployeeMaster.emp_mast_code).all()]

    def get_employee_repository(self, mast_code: int) -> EmployeeRow | None:
        row = self._record_query().filter(EmployeeMaster.emp_mast_code == mast_code).first()
        return tuple(row) if row else None

    def get_employee_by_emp_id_repository(self, emp_id: str) -> EmployeeMaster | None:
        return self.db.query(EmployeeMaster).filter(EmployeeMaster.emp_id == emp_id).first()

    def count_employees_repository(self) -> int:
        return self.db.query(EmployeeMaster).count()

    def _insert_detail(self, mast_code: int, detail_fields: dict) -> EmployeeDetail:
        detail = EmployeeDetail(emd_mast_code=mast_code, **detail_fields)
        self.db.add(detail)
        self.db.flush()
        return detail

    def _compensate_master(self, master: EmployeeMaster) -> None:
        """Deshace el alta del maestro cuando el detalle no pudo guardarse."""
        mast_code = master.emp_mast_code
        try:
            self.db.delete(master)
            self.db.commit()
            logger.warning(f"Maestro {mast_code} compensado (eliminado) tras fallo del detalle")
        except SQLAlchemyError as e:
            # Sin commit previo el maestro nunca llegó a ser visible
            self.db.rollback()
            log_critical_error(
                f"Fallo al compensar el maestro {mast_code}, transacción revertida: {e}", level="CRITICAL"
            )

    def _raise_for_master_integrity(self, emp_id: str, error: IntegrityError):
        self.db.rollback()
        if self.get_employee_by_emp_id_repository(emp_id):
            logger.warning(f"Intento de registrar un empID duplicado: {emp_id}")
            raise DuplicateEmpIDError()
        logger.error(f"Violación de integridad en el maestro {emp_id}: {error}")
        raise WriteFailedError()

    def create_employee_repository(self, user_id: int, master_fields: dict, detail_fields: dict) -> int:
        """
        1) inserta el maestro, 2) inserta el detalle en un SAVEPOINT,
        3) si el detalle falla compensa el maestro y reporta el error.
        Nada se confirma hasta que existen ambas filas.
        """
        master = EmployeeMaster(emp_user_id=user_id, **master_fields)

        try:
            self.db.add(master)
            self.db.flush()
        except IntegrityError as e:
            self._raise_for_master_integrity(master_fields["emp_id"], e)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"No se pudo insertar el maestro {master_fields['emp_id']}: {e}")
            raise WriteFailedError("Failed to add employee.")

        mast_code = master.emp_mast_code

        try:
            with self.db.begin_nested():
                self._insert_detail(mast_code, detail_fields)
        except SQLAlchemyError as e:
            logger.error(f"No se pudo insertar el detalle del maestro {mast_code}: {e}")
            self._compensate_master(master)
            raise DetailWriteFailedError()

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"No se pudo confirmar el alta del empleado {master_fields['emp_id']}: {e}")
            raise WriteFailedError("Failed to add employee.")

        logger.info(f"Empleado {mast_code} creado por el usuario {user_id}")
        return mast_code

    def update_employee_repository(self, mast_code: int, master_fields: dict, detail_fields: dict) -> None:
        master = self.db.query(EmployeeMaster).filter(EmployeeMaster.emp_mast_code == mast_code).first()

        if not master:
            logger.info(f"No se encontro empleado con mastCode {mast_code}")
            raise EmployeeNotFoundError()

        try:
            for key, value in master_fields.items():
                setattr(master, key, value)
            self.db.flush()
        except IntegrityError as e:
            self._raise_for_master_integrity(master_fields["emp_id"], e)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"No se pudo actualizar el maestro {mast_code}: {e}")
            raise WriteFailedError("Failed to update employee master data.")

        try:
            updated = (
                self.db.query(EmployeeDetail)
                .filter(EmployeeDetail.emd_mast_code == mast_code)
                .update(detail_fields, synchronize_session=False)
            )
            if updated == 0:
                # El detalle es opcional hasta que se llena por primera vez
                self._insert_detail(mast_code, detail_fields)
                logger.info(f"Detalle creado para el maestro {mast_code} durante la edición")

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"No se pudo actualizar el detalle del maestro {mast_code}: {e}")
            raise WriteFailedError("Failed to update employee details.")

        logger.info(f"Empleado {mast_code} actualizado")

    def delete_employee_repository(self, mast_code: int) -> bool:
        """Borra solo el maestro; el ON DELETE CASCADE se lleva el detalle."""
        try:
            deleted = (
                self.db.query(EmployeeMaster)
                .filter(EmployeeMaster.emp_mast_code == mast_code)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"No se pudo eliminar el empleado {mast_code}: {e}")
            raise WriteFailedError("Failed to delete employee.")

        if deleted:
            logger.info(f"Se elimino al empleado con mastCode {mast_code}")
        return deleted > 0

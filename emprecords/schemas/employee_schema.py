# emprecords/schemas/employee_schema.py

from datetime import date
from pydantic import BaseModel, ConfigDict, Field, field_validator

class EmployeeWrite(BaseModel):
    """Cuerpo de alta y edición: campos del maestro y del detalle juntos."""
    model_config = ConfigDict(populate_by_name=True)

    emp_id: str = Field(min_length=1, max_length=50, alias="empID")
    emp_name: str = Field(min_length=1, max_length=150, alias="empName")
    designation: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    joined_date: date | None = Field(default=None, alias="joinedDate")
    salary: float | None = Field(default=None, ge=0)

    address_line1: str | None = Field(default=None, max_length=255, alias="addressLine1")
    address_line2: str | None = Field(default=None, max_length=255, alias="addressLine2")
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    country: str | None = Field(default=None, max_length=100)

    @field_validator("joined_date", "salary", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        # Los formularios mandan "" cuando el campo queda vacío
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def master_fields(self) -> dict:
        return {
            "emp_id": self.emp_id,
            "emp_name": self.emp_name,
            "emp_designation": self.designation,
            "emp_department": self.department,
            "emp_joined_date": self.joined_date,
            "emp_salary": self.salary,
        }

    def detail_fields(self) -> dict:
        return {
            "emd_address_line1": self.address_line1,
            "emd_address_line2": self.address_line2,
            "emd_city": self.city,
            "emd_state": self.state,
            "emd_country": self.country,
        }

class EmployeeRecord(BaseModel):
    """Registro completo: maestro + detalle (LEFT JOIN, el detalle puede venir en nulos)."""
    model_config = ConfigDict(populate_by_name=True)

    mast_code: int = Field(alias="mastCode")
    user_id: int | None = Field(default=None, alias="userID")
    emp_id: str = Field(alias="empID")
    emp_name: str = Field(alias="empName")
    designation: str | None = None
    department: str | None = None
    joined_date: date | None = Field(default=None, alias="joinedDate")
    salary: float | None = None

    emp_detail_id: int | None = Field(default=None, alias="empDetailID")
    address_line1: str | None = Field(default=None, alias="addressLine1")
    address_line2: str | None = Field(default=None, alias="addressLine2")
    city: str | None = None
    state: str | None = None
    country: str | None = None

class EmployeeCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mast_code: int = Field(alias="mastCode")

# emprecords/routers/employee_router.py

from sqlalchemy.orm import Session
from fastapi import APIRouter, Depends, Query, status

from emprecords.database import get_db
from emprecords.core import TokenData, get_current_user
from emprecords.schemas import ApiResponse, EmployeeWrite, EmployeeRecord, EmployeeCreated
from emprecords.services import (
    list_employees_service,
    get_employee_service,
    create_employee_service,
    update_employee_service,
    delete_employee_service
)

# La verificación del token corre antes que cualquier handler del router
router = APIRouter(prefix="/employees", tags=["Employees"], dependencies=[Depends(get_current_user)])

@router.get("", response_model=ApiResponse[list[EmployeeRecord]])
def list_employees_route(q: str | None = Query(default=None), db: Session = Depends(get_db)):
    return ApiResponse(message="Employees fetched successfully.", data=list_employees_service(db, q))

@router.get("/{mast_code}", response_model=ApiResponse[EmployeeRecord])
def get_employee_route(mast_code: int, db: Session = Depends(get_db)):
    return ApiResponse(message="Employee fetched successfully.", data=get_employee_service(db, mast_code))

@router.post("", response_model=ApiResponse[EmployeeCreated], status_code=status.HTTP_201_CREATED)
def create_employee_route(data: EmployeeWrite, db: Session = Depends(get_db), current_user: TokenData = Depends(get_current_user)):
    created = create_employee_service(db, current_user.user_id, data)
    return ApiResponse(message="Employee added successfully.", data=created)

@router.put("/{mast_code}", response_model=ApiResponse[None])
def update_employee_route(mast_code: int, data: EmployeeWrite, db: Session = Depends(get_db)):
    update_employee_service(db, mast_code, data)
    return ApiResponse(message="Employee updated successfully.")

@router.delete("/{mast_code}", response_model=ApiResponse[None])
def delete_employee_route(mast_code: int, db: Session = Depends(get_db)):
    delete_employee_service(db, mast_code)
    return ApiResponse(message="Employee deleted successfully.")

# emprecords/models/employee.py

from emprecords.database import Base
from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey
from sqlalchemy.orm import relationship

class EmployeeMaster(Base):
    __tablename__ = "tbemployeemaster"

    emp_mast_code =   Column(Integer, primary_key=True, index=True)
    emp_user_id =     Column(Integer, ForeignKey("tbusers.user_id", ondelete="CASCADE"), nullable=True)
    emp_id =          Column(String(50), nullable=False, unique=True)
    emp_name =        Column(String(150), nullable=False)
    emp_designation = Column(String(100))
    emp_department =  Column(String(100))
    emp_joined_date = Column(Date)
    emp_salary =      Column(Float)

    user = relationship("User", back_populates="employees")
    # El detalle lo borra la BD (ON DELETE CASCADE), no el ORM
    detail = relationship("EmployeeDetail", back_populates="master", uselist=False, passive_deletes=True)


class EmployeeDetail(Base):
    __tablename__ = "tbemployeedetail"

    emd_id =            Column(Integer, primary_key=True, index=True)
    emd_mast_code =     Column(Integer, ForeignKey("tbemployeemaster.emp_mast_code", ondelete="CASCADE"), nullable=False, unique=True)
    emd_address_line1 = Column(String(255))
    emd_address_line2 = Column(String(255))
    emd_city =          Column(String(100))
    emd_state =         Column(String(100))
    emd_country =       Column(String(100))

    master = relationship("EmployeeMaster", back_populates="detail")

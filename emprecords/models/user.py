# emprecords/models/user.py

from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from emprecords.database import Base

class User(Base):
    __tablename__ = "tbusers"

    user_id =       Column(Integer, primary_key=True, index=True)
    user_name =     Column(String(100), nullable=False, unique=True)
    user_phone =    Column(String(20), nullable=False)
    user_password = Column(String(255), nullable=False)
    user_created =  Column(TIMESTAMP(timezone=True), server_default=func.now())


    employees = relationship("EmployeeMaster", back_populates="user", passive_deletes=True)
    reset_tokens = relationship("PasswordResetToken", back_populates="user", passive_deletes=True)

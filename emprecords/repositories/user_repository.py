from emprecords.models import User
from emprecords.core.exceptions import DuplicateUsernameError, UsernameTakenError, WriteFailedError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from emprecords.core import logger

class UserRepository:

    def __init__(self,db:Session):
        self.db = db

    def get_user_id_repository(self,user_id:int)-> User | None:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def get_user_by_name_repository(self,user_name:str) -> User | None:
        # Coincidencia exacta, sensible a mayúsculas
        return self.db.query(User).filter(User.user_name == user_name).first()

    def get_user_by_name_and_phone_repository(self,user_name:str,user_phone:str) -> User | None:
        return (
            self.db.query(User)
            .filter(User.user_name == user_name, User.user_phone == user_phone)
            .first()
        )

    def create_user_repository(self,new_user:User)-> User:
        try:
            self.db.add(new_user)
            self.db.commit()
            self.db.refresh(new_user)
            logger.info(f"Usuario {new_user.user_id} creado exitosamente")
            return new_user
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Intento de registrar un nombre de usuario duplicado: {new_user.user_name}")
            raise DuplicateUsernameError()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Usuario no creado en repository: {e}")
            raise WriteFailedError("Server error during registration.")

    def update_user_name_repository(self,user_id:int,new_user_name:str) -> User | None:
        try:
            user = self.get_user_id_repository(user_id)

            if not user:
                logger.debug(f"No se encontro usuario con el id {user_id}")
                return None

            user.user_name = new_user_name

            self.db.commit()
            self.db.refresh(user)
            logger.info(f"Nombre de usuario actualizado para el id {user_id}")
            return user
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Usuario {user_id} intentó tomar un nombre ya usado: {new_user_name}")
            raise UsernameTakenError()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Nombre de usuario no actualizado con id {user_id}: {e}")
            raise WriteFailedError("Failed to update username.")

    def change_password_user_repository(self,user_id:int,password_hashed:str,commit:bool=True)-> bool:
        """
        Cambia el hash guardado. Con commit=False solo hace flush y deja
        la transacción abierta para quien la orquesta (flujo de reseteo).
        """
        user = self.get_user_id_repository(user_id)

        if not user:
            logger.debug(f"No se encontro usuario con el id {user_id}")
            return False

        user.user_password = password_hashed
        self.db.flush()

        if commit:
            self.db.commit()
            logger.info(f"Contraseña actualizada para el usuario {user_id}")
        return True

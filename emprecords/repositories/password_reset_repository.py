from sqlalchemy.orm import Session
from emprecords.models import PasswordResetToken
from emprecords.core import logger
from datetime import datetime

class PasswordResetRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_token(self, user_id: int, token: str, expires_at: datetime) -> PasswordResetToken:
        db_token = PasswordResetToken(prt_user_id=user_id, prt_token=token, prt_expires_at=expires_at)
        self.db.add(db_token)
        self.db.commit()
        self.db.refresh(db_token)
        return db_token

    def get_token(self, token: str) -> PasswordResetToken | None:
        return self.db.query(PasswordResetToken).filter(PasswordResetToken.prt_token == token).first()

    def delete_token(self, token_id: int) -> bool:
        """
        Borra el token sin hacer commit. Devuelve False si otra transacción
        ya lo había borrado (consumo concurrente).
        """
        deleted = (
            self.db.query(PasswordResetToken)
            .filter(PasswordResetToken.prt_id == token_id)
            .delete(synchronize_session=False)
        )
        return deleted == 1

    def delete_expired(self, now: datetime, user_id: int | None = None) -> int:
        query = self.db.query(PasswordResetToken).filter(PasswordResetToken.prt_expires_at <= now)
        if user_id is not None:
            query = query.filter(PasswordResetToken.prt_user_id == user_id)

        deleted = query.delete(synchronize_session=False)
        self.db.commit()
        if deleted:
            logger.info(f"🧹 {deleted} tokens de reseteo expirados eliminados")
        return deleted

import logging
import os
from logging.handlers import RotatingFileHandler

from .settings import settings
from .discord_logger import send_discord_alert

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Por defecto logs/ junto al paquete, fuera del código fuente
LOG_DIR = settings.LOG_DIR or os.path.join(os.path.dirname(__file__), "../../logs")
LOG_FILE = os.path.join(LOG_DIR, "backend.log")


def _configure(app_logger: logging.Logger) -> logging.Logger:
    app_logger.setLevel(settings.LOG_LEVEL.upper())
    if app_logger.hasHandlers():
        return app_logger

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    os.makedirs(LOG_DIR, exist_ok=True)
    rotating = RotatingFileHandler(LOG_FILE, maxBytes=10_000_000, backupCount=5, encoding="utf-8")
    rotating.setFormatter(formatter)
    app_logger.addHandler(rotating)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    app_logger.addHandler(stream)
    return app_logger


logger = _configure(logging.getLogger("emprecords"))


def log_critical_error(msg: str, level: str = "ERROR") -> bool:
    """
    Registra el mensaje con el nivel indicado y lo reenvía a Discord con
    ese mismo nivel. Devuelve si la alerta salió.
    """
    level = level.upper()
    logger.log(logging.getLevelName(level), msg)
    return send_discord_alert(msg, level=level)

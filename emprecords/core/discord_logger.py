import time
import requests
from .settings import settings

# Último envío por nivel, para no inundar el canal
_last_alert_time = {}
FLOOD_INTERVAL = 20  # segundos entre alertas del mismo nivel


def send_discord_alert(message: str, level: str = "INFO") -> bool:
    """
    Envía una alerta ligera a Discord con control de flood.
    Devuelve True solo si el webhook aceptó el mensaje.
    """
    if not settings.DISCORD_WEBHOOK_URL:
        return False

    now = time.time()
    last_time = _last_alert_time.get(level, 0)

    if now - last_time < FLOOD_INTERVAL:
        return False

    _last_alert_time[level] = now

    emoji = {
        "INFO": "ℹ️",
        "WARN": "⚠️",
        "ERROR": "🔥",
        "CRITICAL": "💀"
    }.get(level, "⚡")

    payload = {"content": f"{emoji} **[{level}] EmpRecords:** {message}"}

    try:
        response = requests.post(settings.DISCORD_WEBHOOK_URL, json=payload, timeout=2)
        return response.ok
    except requests.RequestException:
        # Una alerta perdida nunca debe tumbar la petición que la originó
        return False

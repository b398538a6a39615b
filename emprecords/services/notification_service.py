import sib_api_v3_sdk
from sib_api_v3_sdk.rest import ApiException

from emprecords.core import logger, settings
from emprecords.core.exceptions import DeliveryFailedError


def send_reset_token_sms(phone: str, user_name: str, token: str) -> None:
    """
    Entrega el token de reseteo por SMS transaccional de Brevo.

    Args:
        phone: Número registrado del usuario (con prefijo internacional).
        user_name: Nombre del usuario, solo para el saludo.
        token: Valor crudo del token; nunca se escribe en los logs.
    """
    if not settings.BREVO_API_KEY:
        logger.error("RESET_TOKEN_DELIVERY=sms sin BREVO_API_KEY configurada")
        raise DeliveryFailedError()

    configuration = sib_api_v3_sdk.Configuration()
    configuration.api_key['api-key'] = settings.BREVO_API_KEY

    api_instance = sib_api_v3_sdk.TransactionalSMSApi(sib_api_v3_sdk.ApiClient(configuration))

    content = (
        f"Hola {user_name}, tu token para restablecer la contraseña es {token}. "
        "Expira en 10 minutos."
    )
    sms = sib_api_v3_sdk.SendTransacSms(
        sender=settings.BREVO_SMS_SENDER,
        recipient=phone,
        content=content,
        type="transactional",
    )

    try:
        api_response = api_instance.send_transac_sms(sms)
        logger.info(f"SMS de reseteo enviado a ***{phone[-4:]}. Message ID: {api_response.message_id}")
    except ApiException as e:
        logger.error(f"Error al enviar SMS via API de Brevo: {e.status} {e.reason}")
        raise DeliveryFailedError()

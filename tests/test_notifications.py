import logging
from unittest.mock import MagicMock, patch

import pytest
from sib_api_v3_sdk.rest import ApiException

from emprecords.core import settings
from emprecords.core import discord_logger
from emprecords.core.logger import log_critical_error
from emprecords.core.exceptions import DeliveryFailedError
from emprecords.models import PasswordResetToken
from emprecords.services import notification_service, password_reset_service


@pytest.fixture
def sms_mode(monkeypatch):
    monkeypatch.setattr(settings, "RESET_TOKEN_DELIVERY", "sms")
    monkeypatch.setattr(settings, "BREVO_API_KEY", "test-key")


def test_sms_mode_hides_token_from_response(client, alice, sms_mode, monkeypatch, count_rows):
    sent = []
    monkeypatch.setattr(
        password_reset_service,
        "send_reset_token_sms",
        lambda phone, user_name, token: sent.append((phone, user_name, token)),
    )

    response = client.post("/api/forgot-password", json={"userName": "alice", "mobileNumber": "9876543210"})

    assert response.status_code == 200
    assert response.json()["data"] is None
    assert len(sent) == 1
    assert sent[0][0] == "9876543210"
    assert len(sent[0][2]) == 64
    assert count_rows(PasswordResetToken) == 1


def test_send_reset_token_sms_uses_transactional_api(sms_mode):
    api = MagicMock()
    api.send_transac_sms.return_value = MagicMock(message_id=123)

    with patch.object(notification_service.sib_api_v3_sdk, "TransactionalSMSApi", return_value=api):
        notification_service.send_reset_token_sms("+919876543210", "alice", "ab" * 32)

    sms = api.send_transac_sms.call_args.args[0]
    assert sms.recipient == "+919876543210"
    assert "ab" * 32 in sms.content


def test_send_reset_token_sms_failure(sms_mode):
    api = MagicMock()
    api.send_transac_sms.side_effect = ApiException(status=400, reason="Bad Request")

    with patch.object(notification_service.sib_api_v3_sdk, "TransactionalSMSApi", return_value=api):
        with pytest.raises(DeliveryFailedError):
            notification_service.send_reset_token_sms("+919876543210", "alice", "ab" * 32)


def test_send_reset_token_sms_without_api_key(monkeypatch):
    monkeypatch.setattr(settings, "BREVO_API_KEY", "")
    with pytest.raises(DeliveryFailedError):
        notification_service.send_reset_token_sms("+919876543210", "alice", "ab" * 32)


class TestDiscordAlerts:
    def test_disabled_without_webhook(self):
        with patch.object(discord_logger.requests, "post") as post:
            assert discord_logger.send_discord_alert("boom", level="ERROR") is False
        post.assert_not_called()

    def test_flood_control_per_level(self, monkeypatch):
        monkeypatch.setattr(settings, "DISCORD_WEBHOOK_URL", "https://discord.test/webhook")
        monkeypatch.setattr(discord_logger, "_last_alert_time", {})

        with patch.object(discord_logger.requests, "post", return_value=MagicMock(ok=True)) as post:
            assert discord_logger.send_discord_alert("first", level="CRITICAL") is True
            assert discord_logger.send_discord_alert("second", level="CRITICAL") is False
            assert discord_logger.send_discord_alert("other level", level="INFO") is True

        assert post.call_count == 2
        assert "first" in post.call_args_list[0].kwargs["json"]["content"]

    def test_log_critical_error_keeps_level(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "DISCORD_WEBHOOK_URL", "https://discord.test/webhook")
        monkeypatch.setattr(discord_logger, "_last_alert_time", {})

        with patch.object(discord_logger.requests, "post", return_value=MagicMock(ok=True)) as post:
            with caplog.at_level(logging.INFO, logger="emprecords"):
                assert log_critical_error("compensación fallida", level="critical") is True

        assert "[CRITICAL]" in post.call_args.kwargs["json"]["content"]
        assert [r.levelname for r in caplog.records if r.getMessage() == "compensación fallida"] == ["CRITICAL"]

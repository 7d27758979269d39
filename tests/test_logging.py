import logging
import uuid

import pytest

from config.settings import mask_sensitive_data


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_api_requests_carry_the_header(self, api_client_with_correlation):
        api_client, cid = api_client_with_correlation
        response = api_client.get("/api/v1/products/")
        assert response["X-Request-ID"] == cid


class TestSensitiveDataMasking:
    def test_cpf_masked_in_log_output(self):
        event_dict = {"event": "test", "cpf": "123.456.789-00"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "123.456.789-00" not in result["cpf"]
        assert "***MASKED***" in result["cpf"]

    def test_phone_masked_in_log_output(self):
        event_dict = {"event": "test", "note": "ligar para (11) 98765-4321"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "98765-4321" not in result["note"]
        assert "***MASKED***" in result["note"]

    def test_password_masked_in_log_output(self):
        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_in_log_output(self):
        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    @pytest.mark.parametrize(
        "value",
        ["order.created", "Residencial Bela Vista", "112.00", "Casa 12"],
    )
    def test_non_sensitive_data_unchanged(self, value):
        event_dict = {"event": "order.created", "value": value}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["value"] == value
        assert result["event"] == "order.created"

    def test_non_string_values_untouched(self):
        event_dict = {"event": "test", "order_id": 12345678901}
        assert mask_sensitive_data(None, None, event_dict)["order_id"] == 12345678901


class TestRequestLogging:
    def test_api_requests_are_logged(self, api_client, caplog):
        with caplog.at_level(logging.INFO):
            api_client.get("/api/v1/orders/dashboard/")
        messages = [record.getMessage() for record in caplog.records]
        assert any("request.finished" in message for message in messages)

    def test_health_probe_is_not_logged_as_request(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get("/health")
        messages = [record.getMessage() for record in caplog.records]
        assert not any("request.started" in message for message in messages)

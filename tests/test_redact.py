from __future__ import annotations

from fleetmaster._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "x-goog-api-key": "secret",
        "content-type": "application/json",
        "nested": {"apiKey": "secret", "Authorization": "Bearer abc"},
    }

    redacted = redact_for_log(payload)
    assert redacted["x-goog-api-key"] == "<redacted>"
    assert redacted["content-type"] == "application/json"
    assert redacted["nested"]["apiKey"] == "<redacted>"
    assert redacted["nested"]["Authorization"] == "<redacted>"


def test_redact_for_log_shortens_photo_data_urls() -> None:
    photo = "data:image/png;base64," + "A" * 4000
    redacted = redact_for_log([{"id": "v1", "photo": photo}])
    assert redacted[0]["photo"] == f"<data-url:{len(photo)}b>"
    assert redacted[0]["id"] == "v1"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]

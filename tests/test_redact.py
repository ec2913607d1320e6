from __future__ import annotations

from pynexx._redact import redact_for_log
from pynexx.models.device import CommandMetadata


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "IsSuccess": True,
        "Email": "user@example.com",
        "Password": "pw",
        "Result": {"AccessToken": "TOKEN", "ExpiresIn": 3600},
        "Devices": [{"DeviceId": "NX-1", "Authorization": "Bearer TOKEN"}],
    }

    redacted = redact_for_log(payload)
    assert redacted["Email"] == "<redacted>"
    assert redacted["Password"] == "<redacted>"
    assert redacted["Result"]["AccessToken"] == "<redacted>"
    assert redacted["Result"]["ExpiresIn"] == 3600
    assert redacted["Devices"][0]["Authorization"] == "<redacted>"
    assert redacted["Devices"][0]["DeviceId"] == "NX-1"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_masks_bearer_strings() -> None:
    redacted = redact_for_log({"headers": ["Bearer abc.def.ghi"]})
    assert redacted["headers"] == ["Bearer <redacted>"]


def test_redact_for_log_dumps_models() -> None:
    metadata = CommandMetadata(device_type="NexxGarage", product_code="NXG200")
    assert redact_for_log(metadata) == {"DeviceType": "NexxGarage", "ProductCode": "NXG200"}

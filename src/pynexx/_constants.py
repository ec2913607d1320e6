"""Internal constants shared across the library."""

BASE_URL = "https://nexx.azure-api.net"
USER_AGENT = "pynexx/1 (+aiohttp)"
MANUFACTURER = "Nexx"

# Endpoint paths, relative to ``NexxConfig.base_url``.
LOGIN_ENDPOINT = "/api/Account/Login"
DEVICES_ENDPOINT = "/api/Device/GetDevices"
DEVICE_STATE_ENDPOINT = "/api/Device/GetDeviceState"
OPEN_ENDPOINT = "/api/Device/Open"
CLOSE_ENDPOINT = "/api/Device/Close"

SESSION_EXPIRED_STATUS: frozenset[int] = frozenset({401, 403})

# ------------------------------------------------------------------
# Timing
# ------------------------------------------------------------------

#: Seconds between reconciliation polls.
POLL_INTERVAL_SECONDS: float = 60.0
#: Seconds after a successful command before the door is assumed to have arrived.
CONFIRMATION_DELAY_SECONDS: float = 12.0

# ------------------------------------------------------------------
# Device classification
# ------------------------------------------------------------------

GARAGE_DEVICE_TYPE = "NexxGarage"
GATE_DEVICE_TYPE = "NexxGate"
GARAGE_PRODUCT_CODES: frozenset[str] = frozenset({"NXG200", "NXG300"})
GATE_PRODUCT_CODES: frozenset[str] = frozenset({"NXGT1"})

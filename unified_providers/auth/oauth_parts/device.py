"""Device-authorization (RFC 8628) value types."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from ...config.defaults import OAUTH_DEFAULT_POLL_INTERVAL_SECONDS, OAUTH_DEVICE_CODE_DEFAULT_EXPIRES_IN


class DeviceFlowState(str, Enum):
    """States of the device polling loop."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    EXPIRED = "expired"


@dataclass
class DeviceAuthorization:
    """Device code issued by the vendor; the user enters ``user_code`` at ``verification_url``."""

    device_code: str
    user_code: str
    verification_url: str
    interval: int = OAUTH_DEFAULT_POLL_INTERVAL_SECONDS
    expires_in: int = OAUTH_DEVICE_CODE_DEFAULT_EXPIRES_IN
    verification_url_complete: Optional[str] = None

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "DeviceAuthorization":
        return cls(
            device_code=data["device_code"],
            user_code=data["user_code"],
            verification_url=data["verification_uri"],
            interval=int(data.get("interval") or OAUTH_DEFAULT_POLL_INTERVAL_SECONDS),
            expires_in=int(data.get("expires_in") or OAUTH_DEVICE_CODE_DEFAULT_EXPIRES_IN),
            verification_url_complete=data.get("verification_uri_complete"),
        )


__all__ = ["DeviceFlowState", "DeviceAuthorization"]

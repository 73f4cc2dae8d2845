from __future__ import annotations

import string
import time
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from ..constants import DEFAULT_NICK_PREFIX, DEFAULT_QUIT_MESSAGE, DEFAULT_USERNAME
from ..errors.internal import ConfigurationError

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_nick(now: float | None = None) -> str:
    """Build a throwaway nickname from the current time in milliseconds."""
    millis = int((time.time() if now is None else now) * 1000)
    return f"{DEFAULT_NICK_PREFIX}{_to_base36(millis)}"


class ClientConfig(BaseModel):
    """Connection settings for one bridge session.

    Attributes:
        server: Bridge host name (no scheme).
        port: Bridge port.
        nick: Requested nickname; generated when omitted.
        username: IRC username sent in the USER line.
        debug: Log every inbound line.
        secure: Use ``wss://`` instead of ``ws://``.
        quit_message: Text sent with QUIT by ``close()``.
        probe_on_error: Probe the bridge over HTTPS after a transport error.
    """

    server: str
    port: int = Field(ge=1, le=65535)
    nick: str = Field(default_factory=generate_nick)
    username: str = DEFAULT_USERNAME
    debug: bool = False
    secure: bool = False
    quit_message: str = DEFAULT_QUIT_MESSAGE
    probe_on_error: bool = True

    @field_validator("server", mode="before")
    @classmethod
    def validate_server(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("server must be a non-empty string")
        return v.strip()

    @field_validator("nick", "username", mode="before")
    @classmethod
    def validate_identity(cls, v: Any, info: ValidationInfo) -> Any:
        # Blank identity falls back to the defaults rather than failing
        if v is None or (isinstance(v, str) and not v.strip()):
            return generate_nick() if info.field_name == "nick" else DEFAULT_USERNAME
        if isinstance(v, str):
            if any(ch in v for ch in " \r\n"):
                raise ValueError(f"{info.field_name} must not contain spaces or newlines")
            return v.strip()
        return v

    @property
    def scheme(self) -> str:
        return "wss" if self.secure else "ws"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.server}:{self.port}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Create a ClientConfig from a mapping.

        Args:
            data: Mapping with at least ``server`` and ``port``.

        Returns:
            ClientConfig instance.

        Raises:
            ConfigurationError: If the server or port is missing or invalid.
        """
        if not data.get("server") or not data.get("port"):
            raise ConfigurationError(
                "No server or port specified",
                data={"fields": [k for k in ("server", "port") if not data.get(k)]},
            )
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
            raise ConfigurationError(
                f"Invalid client configuration: {', '.join(fields)}",
                data={"fields": fields},
            ) from e

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

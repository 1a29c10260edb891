"""Configuration provider connection details."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, Field

from edgeboot.errors import ConfigurationError

DEFAULT_PROTOCOL = "http"

_URL_HINT = "Expected <type>[.<protocol>]://<host>:<port>, e.g. consul.http://localhost:8500"


class ProviderInfo(BaseModel):
    """Where to reach a configuration or registry provider."""

    type: str = ""
    protocol: str = DEFAULT_PROTOCOL
    host: str = "localhost"
    port: int = Field(default=0, ge=0, le=65535)

    def populate_from_url(self, url: str) -> ProviderInfo:
        """Return a copy filled in from ``<type>[.<protocol>]://<host>:<port>``.

        A scheme without a protocol segment keeps the ``http`` default, for
        services that still pass a bare ``consul://`` URL.

        Raises:
            ConfigurationError: The URL is malformed or has no numeric port.
        """
        try:
            parts = urlsplit(url)
            port = parts.port
        except ValueError as exc:
            raise ConfigurationError(
                f"the format of Provider URL is incorrect ({url}): {exc}", hint=_URL_HINT
            ) from exc
        if port is None:
            raise ConfigurationError(
                f"the port from Provider URL is incorrect ({url})", hint=_URL_HINT
            )

        type_and_protocol = parts.scheme.split(".")
        if len(type_and_protocol) == 1:
            provider_type, protocol = type_and_protocol[0], DEFAULT_PROTOCOL
        elif len(type_and_protocol) == 2:
            provider_type, protocol = type_and_protocol
        else:
            raise ConfigurationError(
                "the Type and Protocol spec from Provider URL is incorrect: "
                f"{parts.scheme}",
                hint=_URL_HINT,
            )

        return self.model_copy(
            update={
                "type": provider_type,
                "protocol": protocol,
                "host": parts.hostname or "",
                "port": port,
            }
        )

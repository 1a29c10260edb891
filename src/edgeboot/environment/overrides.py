"""Environment variable overrides of typed service configuration.

An environment variable overrides the configuration field whose dotted path
matches the variable name with ``_`` read as ``.``. For example
``SERVICE_PORT=9090`` sets ``Service.Port`` in::

    class ServiceInfo(BaseModel):
        Host: str = "localhost"
        Port: UInt16 = 8080

    class Config(BaseModel):
        Service: ServiceInfo = ServiceInfo()

Upper-case variable names match regardless of the field's case; names with
any lower-case letter must spell the path exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any, Literal, overload

from edgeboot.errors import ParseError, UnsupportedTypeError

from .coercion import coerce
from .notify import OverrideNotifier, log_override
from .paths import build_case_index, env_key_to_path, resolve_path
from .snapshot import EnvironmentSnapshot
from .tree import ConfigTree

if TYPE_CHECKING:
    from pydantic import BaseModel

    from .provider import ProviderInfo

logger = logging.getLogger(__name__)

ENV_KEY_CONFIG_URL = "EDGEX_CONFIGURATION_PROVIDER"
ENV_KEY_REGISTRY_URL = "edgex_registry"


@dataclass(frozen=True)
class AppliedOverride:
    """One configuration field replaced from the environment."""

    path: str
    env_key: str
    value: Any


class Variables:
    """Environment snapshot plus the override operations that consume it.

    Args:
        snapshot: Environment to read; captured from the process when omitted.
        notify: Called once per applied override; logs by default.
    """

    def __init__(
        self,
        snapshot: EnvironmentSnapshot | None = None,
        *,
        notify: OverrideNotifier = log_override,
    ) -> None:
        self.snapshot = snapshot if snapshot is not None else EnvironmentSnapshot.capture()
        self._notify = notify

    @overload
    def override_configuration(
        self, config: BaseModel, *, explain: Literal[False] = ...
    ) -> int: ...

    @overload
    def override_configuration(
        self, config: BaseModel, *, explain: Literal[True]
    ) -> tuple[int, list[AppliedOverride]]: ...

    def override_configuration(
        self, config: BaseModel, *, explain: bool = False
    ) -> int | tuple[int, list[AppliedOverride]]:
        """Replace configuration fields that have a matching environment variable.

        ``config`` is updated in place. Variables are applied in name order.
        On any error ``config`` is left exactly as it was.

        Args:
            config: The service configuration model instance.
            explain: Also return the list of applied overrides.

        Returns:
            Number of overrides applied, or ``(count, applied)`` when
            ``explain`` is true.

        Raises:
            SerializationError: ``config`` cannot be dumped to a tree.
            ParseError: A matching variable's value does not fit its field.
            UnsupportedTypeError: A matching field has no coercion rule.
            DeserializationError: The patched tree fails model validation.
        """
        tree = ConfigTree.from_model(config)
        index = build_case_index(tree.paths())
        applied: list[AppliedOverride] = []

        for env_var in sorted(self.snapshot):
            env_value = self.snapshot[env_var]
            path = resolve_path(index, env_key_to_path(env_var))
            if path is None:
                continue

            failure = f"environment value override failed for {env_var}={env_value}"
            try:
                new_value = coerce(tree.get(path), env_value, tree.kind(path))
            except ParseError as exc:
                raise ParseError(
                    f"{failure}: {exc.args[0]}",
                    value=env_value,
                    kind=exc.kind,
                    env_key=env_var,
                    hint=exc.hint,
                ) from exc
            except UnsupportedTypeError as exc:
                raise UnsupportedTypeError(
                    f"{failure}: {exc.args[0]}",
                    type_name=exc.type_name,
                    env_key=env_var,
                ) from exc

            tree.set(path, new_value)
            applied.append(AppliedOverride(path, env_var, new_value))
            self._notify(path, env_var, env_value)

        tree.merge_into(config)
        logger.debug("Applied %d environment overrides", len(applied))
        return (len(applied), applied) if explain else len(applied)

    def use_registry(self) -> bool:
        """Return True when the legacy registry variable is present, even if empty."""
        return ENV_KEY_REGISTRY_URL in self.snapshot

    def override_config_provider_info(self, info: ProviderInfo) -> ProviderInfo:
        """Return ``info`` updated from the configuration provider URL variable.

        ``EDGEX_CONFIGURATION_PROVIDER`` is read first; services started with
        the legacy registry variable use it for the configuration provider too.

        Raises:
            ConfigurationError: The URL is malformed.
        """
        key, url = self.snapshot.lookup(ENV_KEY_CONFIG_URL, ENV_KEY_REGISTRY_URL)
        if not url:
            return info
        self._notify("Configuration Provider Information", key, url)
        return info.populate_from_url(url)

    def get_registry_provider_info_override(self) -> str:
        """Return the legacy registry provider URL, or ``""`` when unset."""
        url = self.snapshot.get(ENV_KEY_REGISTRY_URL, "")
        if url:
            self._notify("Registry Provider Information", ENV_KEY_REGISTRY_URL, url)
        return url

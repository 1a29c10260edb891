"""Unit tests for startup timer resolution."""

from __future__ import annotations

import pytest

from edgeboot.environment import EnvironmentSnapshot, StartupInfo, resolve_startup_info
from tests.helpers import RecordingNotifier

pytestmark = pytest.mark.unit


def _resolve(notifier: RecordingNotifier | None = None, **env: str) -> StartupInfo:
    return resolve_startup_info(
        EnvironmentSnapshot(env), notify=notifier or RecordingNotifier()
    )


def test_defaults_without_environment() -> None:
    assert _resolve() == StartupInfo(duration=60, interval=1)


def test_canonical_keys_are_used() -> None:
    info = _resolve(EDGEX_STARTUP_DURATION="120", EDGEX_STARTUP_INTERVAL="5")
    assert info == StartupInfo(duration=120, interval=5)


def test_legacy_keys_are_used_when_canonical_absent() -> None:
    info = _resolve(startup_duration="30", startup_interval="2")
    assert info == StartupInfo(duration=30, interval=2)


def test_canonical_key_wins_over_legacy() -> None:
    info = _resolve(EDGEX_STARTUP_DURATION="90", startup_duration="30")
    assert info.duration == 90


def test_empty_canonical_falls_back_to_legacy() -> None:
    info = _resolve(EDGEX_STARTUP_DURATION="", startup_duration="30")
    assert info.duration == 30


@pytest.mark.parametrize("raw", ["0", "-5", "abc", "1.5", " 10", "99999999999999999999"])
def test_non_positive_or_malformed_values_keep_default(raw: str) -> None:
    info = _resolve(EDGEX_STARTUP_DURATION=raw, EDGEX_STARTUP_INTERVAL=raw)
    assert info == StartupInfo()


def test_invalid_canonical_value_does_not_fall_back_to_legacy() -> None:
    info = _resolve(EDGEX_STARTUP_DURATION="0", startup_duration="30")
    assert info.duration == 60


def test_fields_resolve_independently() -> None:
    info = _resolve(EDGEX_STARTUP_DURATION="abc", EDGEX_STARTUP_INTERVAL="3")
    assert info == StartupInfo(duration=60, interval=3)


def test_custom_defaults_are_retained() -> None:
    info = resolve_startup_info(
        EnvironmentSnapshot({"EDGEX_STARTUP_INTERVAL": "4"}),
        defaults=StartupInfo(duration=10, interval=2),
        notify=RecordingNotifier(),
    )
    assert info == StartupInfo(duration=10, interval=4)


def test_every_supplied_value_is_notified(notifier: RecordingNotifier) -> None:
    _resolve(notifier, EDGEX_STARTUP_DURATION="0", startup_interval="2")
    assert notifier.calls == [
        ("Startup Duration", "EDGEX_STARTUP_DURATION", "0"),
        ("Startup Interval", "startup_interval", "2"),
    ]


def test_reads_process_environment_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDGEX_STARTUP_DURATION", "45")
    assert resolve_startup_info(notify=RecordingNotifier()).duration == 45


def test_startup_info_is_immutable() -> None:
    info = StartupInfo()
    with pytest.raises(AttributeError):
        info.duration = 5  # type: ignore[misc]

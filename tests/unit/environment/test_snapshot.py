"""Unit tests for environment snapshots."""

from __future__ import annotations

from pathlib import Path

import pytest

from edgeboot.environment import EnvironmentSnapshot

pytestmark = pytest.mark.unit


class TestFromEntries:
    def test_entries_without_separator_are_dropped(self) -> None:
        env = EnvironmentSnapshot.from_entries(["A=1", "MALFORMED", "B=2"])
        assert dict(env) == {"A": "1", "B": "2"}
        assert "MALFORMED" not in env

    def test_split_happens_on_first_separator_only(self) -> None:
        env = EnvironmentSnapshot.from_entries(["URL=consul://h:8500/?a=b"])
        assert env["URL"] == "consul://h:8500/?a=b"

    def test_empty_values_are_kept(self) -> None:
        env = EnvironmentSnapshot.from_entries(["EMPTY="])
        assert env["EMPTY"] == ""


class TestCapture:
    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EDGEX_PROFILE", "docker")
        assert EnvironmentSnapshot.capture()["EDGEX_PROFILE"] == "docker"

    def test_snapshots_are_independent_of_later_changes(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("EDGEX_PROFILE", "docker")
        first = EnvironmentSnapshot.capture()
        monkeypatch.setenv("EDGEX_PROFILE", "native")
        second = EnvironmentSnapshot.capture()

        assert first["EDGEX_PROFILE"] == "docker"
        assert second["EDGEX_PROFILE"] == "native"

    def test_dotenv_is_layered_under_process_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        dotenv = tmp_path / ".env"
        dotenv.write_text(
            "EDGEX_PROFILE=docker\nEDGEX_CONF_DIR=/from/dotenv\nEDGEX_BARE\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("EDGEX_CONF_DIR", "/from/process")

        env = EnvironmentSnapshot.capture(dotenv_path=dotenv)

        assert env["EDGEX_PROFILE"] == "docker"
        assert env["EDGEX_CONF_DIR"] == "/from/process"
        assert "EDGEX_BARE" not in env

    def test_missing_dotenv_file_is_ignored(self, tmp_path: Path) -> None:
        env = EnvironmentSnapshot.capture(dotenv_path=tmp_path / "missing.env")
        assert "EDGEX_PROFILE" not in env


class TestMappingBehaviour:
    def test_snapshot_is_read_only(self) -> None:
        env = EnvironmentSnapshot({"A": "1"})
        with pytest.raises(TypeError):
            env["A"] = "2"  # type: ignore[index]

    def test_source_mapping_is_copied(self) -> None:
        source = {"A": "1"}
        env = EnvironmentSnapshot(source)
        source["A"] = "2"
        assert env["A"] == "1"

    def test_repr_does_not_leak_values(self) -> None:
        env = EnvironmentSnapshot({"EDGEX_SECRET": "hunter2"})
        assert "hunter2" not in repr(env)


class TestLookup:
    def test_primary_key_wins(self) -> None:
        env = EnvironmentSnapshot({"EDGEX_PROFILE": "new", "edgex_profile": "old"})
        assert env.lookup("EDGEX_PROFILE", "edgex_profile") == ("EDGEX_PROFILE", "new")

    def test_empty_primary_falls_back_to_legacy(self) -> None:
        env = EnvironmentSnapshot({"EDGEX_PROFILE": "", "edgex_profile": "old"})
        assert env.lookup("EDGEX_PROFILE", "edgex_profile") == ("edgex_profile", "old")

    def test_neither_set_reports_last_key_tried(self) -> None:
        env = EnvironmentSnapshot()
        assert env.lookup("EDGEX_PROFILE", "edgex_profile") == ("edgex_profile", "")
        assert env.lookup("EDGEX_CONF_DIR") == ("EDGEX_CONF_DIR", "")

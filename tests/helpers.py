"""Test helpers (small, reusable models and doubles).

Keep this file tiny and purpose-built: the models mirror the shape of a
typical service configuration so suites do not grow one-off schemas.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from edgeboot.environment import Float32, Int8, UInt16


class ServiceSection(BaseModel):
    Host: str = "localhost"
    Port: UInt16 = 8080
    Timeout: Float32 = 2.5
    Tags: list[str] = Field(default_factory=list)
    Enabled: bool = True


class WritableSection(BaseModel):
    LogLevel: str = "INFO"
    Retries: Int8 = 3


class ServiceConfig(BaseModel):
    Service: ServiceSection = Field(default_factory=ServiceSection)
    Writable: WritableSection = Field(default_factory=WritableSection)
    Name: str = "core-data"


@dataclass
class RecordingNotifier:
    """Notifier double that captures every override notification."""

    calls: list[tuple[str, str, str]] = field(default_factory=list)

    def __call__(self, name: str, key: str, value: str) -> None:
        self.calls.append((name, key, value))

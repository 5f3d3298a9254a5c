from __future__ import annotations

from dataclasses import dataclass


PHASE_COUNT = 4


class ConfigurationError(ValueError):
    """Raised when a session is started with unusable parameters."""


@dataclass(frozen=True)
class SessionConfig:
    total_breaths: int = 6
    phase_duration_ms: int = 4000
    square_size: float = 300.0
    countdown_from: int = 3
    countdown_step_ms: int = 1000
    countdown_grace_ms: int = 500

    @property
    def breath_duration_ms(self) -> int:
        return self.phase_duration_ms * PHASE_COUNT

    @property
    def session_duration_ms(self) -> int:
        return self.breath_duration_ms * self.total_breaths


def validate_config(config: SessionConfig) -> None:
    if config.phase_duration_ms <= 0:
        raise ConfigurationError(f"phase_duration_ms must be positive, got {config.phase_duration_ms}")
    if config.total_breaths <= 0:
        raise ConfigurationError(f"total_breaths must be positive, got {config.total_breaths}")
    if config.square_size <= 0:
        raise ConfigurationError(f"square_size must be positive, got {config.square_size}")
    if config.countdown_from < 0 or config.countdown_step_ms < 0 or config.countdown_grace_ms < 0:
        raise ConfigurationError("Countdown values must not be negative")

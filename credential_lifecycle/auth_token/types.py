"""Shared types for the auth_token package."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from ..constants import TOKEN_ROTATION_INTERVAL_SECONDS


class RotationOutcome(str, Enum):
    """Enumeration of possible outcomes of one rotation attempt.

    Attributes:
        NOOP: Held token re-validated; nothing changed.
        GENERATED: A freshly issued token was adopted.
        FELL_BACK: A static token passed validation and was adopted.
        NONE_VALID: No source produced a valid token; nothing changed.
        SKIPPED: Another rotation was already in progress.
    """

    NOOP = "noop"
    GENERATED = "generated"
    FELL_BACK = "fell_back"
    NONE_VALID = "none_valid"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RotationResult:
    """Result of the rotation decision tree.

    Attributes:
        outcome: The outcome of the attempt.
        token: The token to adopt for GENERATED / FELL_BACK, else None.
        source: Where the adopted token came from ("generated", "primary", "secondary").
    """

    outcome: RotationOutcome
    token: str | None = None
    source: str | None = None

    @property
    def changes_state(self) -> bool:
        return self.outcome in (RotationOutcome.GENERATED, RotationOutcome.FELL_BACK)

    @classmethod
    def noop(cls) -> RotationResult:
        return cls(RotationOutcome.NOOP)

    @classmethod
    def generated(cls, token: str) -> RotationResult:
        return cls(RotationOutcome.GENERATED, token, "generated")

    @classmethod
    def fell_back(cls, token: str, source: str) -> RotationResult:
        return cls(RotationOutcome.FELL_BACK, token, source)

    @classmethod
    def none_valid(cls) -> RotationResult:
        return cls(RotationOutcome.NONE_VALID)

    @classmethod
    def skipped(cls) -> RotationResult:
        return cls(RotationOutcome.SKIPPED)

    def __repr__(self) -> str:
        # token value intentionally omitted
        return f"RotationResult(outcome={self.outcome.value}, source={self.source})"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class CredentialState:
    """Mutable credential bookkeeping owned by one CredentialManager.

    Attributes:
        current_token: Token collaborators must use; None when unusable.
        last_rotation: When a rotation last established a token.
        rotation_interval: Fixed time between scheduled rotations.
        is_rotating: Reentrancy guard, True while one attempt is in flight.
    """

    current_token: str | None = None
    last_rotation: datetime = field(default_factory=_utcnow)
    rotation_interval: timedelta = field(
        default_factory=lambda: timedelta(seconds=TOKEN_ROTATION_INTERVAL_SECONDS)
    )
    is_rotating: bool = False

    @property
    def next_rotation(self) -> datetime:
        return self.last_rotation + self.rotation_interval

    def adopt(self, token: str) -> None:
        self.current_token = token
        self.last_rotation = _utcnow()

    def __repr__(self) -> str:
        return (
            f"CredentialState(current_token={'set' if self.current_token else 'unset'}, "
            f"last_rotation={self.last_rotation.isoformat()}, is_rotating={self.is_rotating})"
        )


@dataclass(frozen=True)
class CredentialStatus:
    """Point-in-time status snapshot; carries presence flags, never token values."""

    current_token: bool
    primary_token: bool
    secondary_token: bool
    service_token: bool
    client_id: bool
    client_secret: bool
    last_rotation: str
    next_rotation: str
    is_rotating: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class CredentialConfig(BaseModel):
    """Static credential configuration, loaded once at process start.

    Attributes:
        primary_token: Pre-provisioned bearer token used first.
        secondary_token: Pre-provisioned backup bearer token.
        service_token: Service token, reported in status only.
        client_id: Client id for programmatic token issuance.
        client_secret: Client secret for programmatic token issuance.
    """

    model_config = ConfigDict(frozen=True)

    primary_token: str | None = None
    secondary_token: str | None = None
    service_token: str | None = None
    client_id: str | None = None
    client_secret: str | None = None

    @field_validator(
        "primary_token",
        "secondary_token",
        "service_token",
        "client_id",
        "client_secret",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: Any) -> str | None:
        """Treat empty and whitespace-only values as unset."""
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError("credential values must be strings")
        stripped = v.strip()
        return stripped or None

    @property
    def has_client_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def other_static_token(self, current: str | None) -> str | None:
        """Return the static token to fall back to from ``current``.

        Secondary when ``current`` is the primary token, primary otherwise.
        """
        if current is not None and current == self.primary_token:
            return self.secondary_token
        return self.primary_token

    def presence_flags(self) -> dict[str, bool]:
        return {
            "primary_token": self.primary_token is not None,
            "secondary_token": self.secondary_token is not None,
            "service_token": self.service_token is not None,
            "client_id": self.client_id is not None,
            "client_secret": self.client_secret is not None,
        }

    def __repr__(self) -> str:
        flags = ", ".join(f"{k}={'set' if v else 'unset'}" for k, v in self.presence_flags().items())
        return f"CredentialConfig({flags})"

    __str__ = __repr__

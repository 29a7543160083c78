import os
from datetime import timedelta

import pytest

# Keep constant-driven timeouts short under test
os.environ.setdefault("TOKEN_VALIDATION_TIMEOUT_SECONDS", "1")
os.environ.setdefault("TOKEN_ISSUANCE_TIMEOUT_SECONDS", "1")

from credential_lifecycle.auth_token.manager import CredentialManager  # noqa: E402
from credential_lifecycle.config.model import CredentialConfig  # noqa: E402
from tests.fixtures.fakes import FakeGenerator, FakeValidator  # noqa: E402


@pytest.fixture
def full_config() -> CredentialConfig:
    return CredentialConfig(
        primary_token="tok-A",
        secondary_token="tok-B",
        service_token="tok-S",
        client_id="client-id-1234567890",
        client_secret="client-secret",
    )


@pytest.fixture
def make_manager():
    """Factory building a CredentialManager around fake validator / generator."""

    def _make(
        config: CredentialConfig,
        *,
        valid=(),
        generated=(),
        generate_error: Exception | None = None,
        gate=None,
        rotation_interval: timedelta | None = None,
    ) -> tuple[CredentialManager, FakeValidator, FakeGenerator]:
        validator = FakeValidator(valid, gate=gate)
        generator = FakeGenerator(generated, error=generate_error)
        manager = CredentialManager(
            config,
            validator=validator,  # type: ignore[arg-type]
            generator=generator,  # type: ignore[arg-type]
            rotation_interval=rotation_interval,
        )
        return manager, validator, generator

    return _make

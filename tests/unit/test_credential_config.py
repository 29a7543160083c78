"""
Unit tests for CredentialConfig and the environment loader.
"""

import logging

import pytest
from pydantic import ValidationError

from credential_lifecycle.config import ConfigLoader, CredentialConfig, log_config_summary


class TestCredentialConfig:
    """Test class for CredentialConfig behaviour."""

    def test_blank_values_are_absent(self):
        """Empty and whitespace-only values are treated as unset."""
        config = CredentialConfig(primary_token="", secondary_token="   ", client_id=" id ")

        assert config.primary_token is None
        assert config.secondary_token is None
        assert config.client_id == "id"

    def test_config_is_frozen(self):
        """Configuration cannot change after load."""
        config = CredentialConfig(primary_token="tok-A")

        with pytest.raises(ValidationError):
            config.primary_token = "tok-Z"  # type: ignore[misc]

    def test_non_string_value_rejected(self):
        with pytest.raises(ValidationError):
            CredentialConfig(primary_token=123)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("client_id", "client_secret", "expected"),
        [("id", "secret", True), ("id", None, False), (None, "secret", False)],
    )
    def test_has_client_credentials(self, client_id, client_secret, expected):
        config = CredentialConfig(client_id=client_id, client_secret=client_secret)
        assert config.has_client_credentials is expected

    def test_other_static_token_from_primary_is_secondary(self, full_config):
        assert full_config.other_static_token("tok-A") == "tok-B"

    def test_other_static_token_from_anything_else_is_primary(self, full_config):
        assert full_config.other_static_token("tok-B") == "tok-A"
        assert full_config.other_static_token("generated") == "tok-A"
        assert full_config.other_static_token(None) == "tok-A"

    def test_presence_flags(self):
        config = CredentialConfig(primary_token="tok-A", client_secret="s")

        assert config.presence_flags() == {
            "primary_token": True,
            "secondary_token": False,
            "service_token": False,
            "client_id": False,
            "client_secret": True,
        }

    def test_repr_hides_values(self, full_config):
        rendered = repr(full_config)

        assert "tok-A" not in rendered
        assert "client-secret" not in rendered
        assert "primary_token=set" in rendered


class TestConfigLoader:
    """Test class for ConfigLoader."""

    def test_load_canonical_names(self):
        environ = {
            "PRIMARY_TOKEN": "p",
            "SECONDARY_TOKEN": "s",
            "SERVICE_TOKEN": "svc",
            "CLIENT_ID": "cid",
            "CLIENT_SECRET": "csec",
        }

        config = ConfigLoader(environ).load()

        assert config == CredentialConfig(
            primary_token="p",
            secondary_token="s",
            service_token="svc",
            client_id="cid",
            client_secret="csec",
        )

    def test_legacy_aliases_used_when_canonical_unset(self):
        environ = {"PORT_API_TOKEN_PRIMARY": "legacy-p", "PORT_CLIENT_ID": "legacy-id"}

        config = ConfigLoader(environ).load()

        assert config.primary_token == "legacy-p"
        assert config.client_id == "legacy-id"

    def test_canonical_name_wins_over_alias(self):
        environ = {"PRIMARY_TOKEN": "new", "PORT_API_TOKEN_PRIMARY": "old"}

        assert ConfigLoader(environ).load().primary_token == "new"

    def test_blank_canonical_falls_back_to_alias(self):
        environ = {"PRIMARY_TOKEN": "  ", "PORT_API_TOKEN_PRIMARY": "old"}

        assert ConfigLoader(environ).load().primary_token == "old"

    def test_empty_environment(self):
        config = ConfigLoader({}).load()

        assert not any(config.presence_flags().values())


def test_log_config_summary_warns_without_sources(caplog):
    caplog.set_level(logging.INFO)

    log_config_summary(CredentialConfig())

    assert "Primary Token: Not Set" in caplog.text
    assert any(r.levelno == logging.WARNING for r in caplog.records)


def test_log_config_summary_never_logs_values(caplog, full_config):
    caplog.set_level(logging.DEBUG)

    log_config_summary(full_config)

    assert "tok-A" not in caplog.text
    assert "client-secret" not in caplog.text
    assert not any(r.levelno == logging.WARNING for r in caplog.records)

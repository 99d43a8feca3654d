"""Tests for loading configuration from the environment"""

import json

import pytest

from verified_id_verifier.config import create_test_config, load_config_from_env, load_or_create_config

BASE_ENV = {
    "VERIFIER_AUTHORITY": "did:web:verifier.contoso.com",
    "VERIFIER_BASE_URL": "https://verifier.contoso.com/",
    "VC_APP_TENANT_ID": "tenant-1",
    "VC_APP_CLIENT_ID": "client-1",
    "VC_APP_CLIENT_SECRET": "s3cret",
    "PRESENTATION_REQUEST_TYPE": "VerifiedEmployee",
    "PRESENTATION_REQUEST_ACCEPTED_ISSUERS": "did:web:issuer-a.com, did:web:issuer-b.com",
}


@pytest.fixture
def env(monkeypatch):
    for name in list(BASE_ENV) + [
        "VC_APP_CLIENT_ASSERTION_KEY",
        "PRESENTATION_REQUEST_TEMPLATE",
        "PRESENTATION_REQUEST_CALLBACK_API_KEY",
        "SESSION_MAX_AGE_SECONDS",
    ]:
        monkeypatch.delenv(name, raising=False)
    for name, value in BASE_ENV.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


def test_load_from_env(env):
    env.setenv("PRESENTATION_REQUEST_CALLBACK_API_KEY", "cb-key")
    env.setenv("SESSION_MAX_AGE_SECONDS", "600")

    config = load_config_from_env()

    assert config is not None
    assert config.authority == "did:web:verifier.contoso.com"
    assert config.get_callback_url() == "https://verifier.contoso.com/api/verifier/presentation-request-callback"
    assert config.accepted_issuers == ["did:web:issuer-a.com", "did:web:issuer-b.com"]
    assert config.callback_api_key == "cb-key"
    assert config.session_max_age_seconds == 600
    assert config.token.client_secret == "s3cret"


def test_missing_variable_returns_none(env):
    env.delenv("VERIFIER_AUTHORITY")

    assert load_config_from_env() is None


def test_missing_credential_returns_none(env):
    env.delenv("VC_APP_CLIENT_SECRET")

    assert load_config_from_env() is None


def test_template_and_key_files(env, tmp_path):
    template = {
        "includeQRCode": True,
        "authority": "",
        "callback": {"url": "", "state": ""},
        "requestedCredentials": [{"type": "", "acceptedIssuers": []}],
    }
    template_file = tmp_path / "template.json"
    template_file.write_text(json.dumps(template))
    key_file = tmp_path / "key.json"
    key_file.write_text(json.dumps({"kty": "EC", "crv": "P-256", "x": "x", "y": "y", "d": "d"}))
    env.setenv("PRESENTATION_REQUEST_TEMPLATE", str(template_file))
    env.setenv("VC_APP_CLIENT_ASSERTION_KEY", str(key_file))

    config = load_config_from_env()

    assert config.presentation_template["includeQRCode"] is True
    assert config.token.client_assertion_jwk["kty"] == "EC"


def test_missing_template_file(env, tmp_path):
    env.setenv("PRESENTATION_REQUEST_TEMPLATE", str(tmp_path / "missing.json"))

    with pytest.raises(FileNotFoundError, match="Presentation request template"):
        load_config_from_env()


def test_falls_back_to_test_config(env):
    env.delenv("VERIFIER_AUTHORITY")

    assert load_or_create_config() == create_test_config()

import pytest
from pydantic import ValidationError

from contracts_api.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in [
        "DEPLOYMENT_MODE",
        "AWS_ENDPOINT_URL",
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_DEFAULT_REGION",
        "S3_BUCKET_NAME",
        "S3_PUBLIC_BASE_URL",
        "S3_OBJECT_ACL",
    ]:
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.deployment_mode == "local-dev"
    assert not settings.uses_s3
    assert settings.s3_object_acl == "public-read"
    assert settings.s3_base_url == "https://contract-portal-files.s3.us-east-1.amazonaws.com"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DEPLOYMENT_MODE", "aws-prod")
    monkeypatch.setenv("S3_BUCKET_NAME", "prod-contracts")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")

    settings = Settings(_env_file=None)

    assert settings.uses_s3
    assert settings.s3_base_url == "https://prod-contracts.s3.eu-west-1.amazonaws.com"


@pytest.mark.parametrize("legacy, mode", [("local", "local-dev"), ("mock", "aws-mock"), ("cloud", "aws-prod")])
def test_legacy_mode_names(legacy, mode):
    assert Settings(_env_file=None, deployment_mode=legacy).deployment_mode == mode


def test_invalid_mode():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, deployment_mode="staging")


def test_aws_mock_points_at_local_moto_server():
    settings = Settings(_env_file=None, deployment_mode="aws-mock")

    assert settings.aws_endpoint_url == "http://localhost:5000"
    assert settings.aws_access_key_id == "mock"
    assert settings.s3_base_url == "http://localhost:5000/contract-portal-files"


def test_public_base_url_wins(monkeypatch):
    monkeypatch.setenv("S3_PUBLIC_BASE_URL", "https://cdn.example.com/")
    settings = Settings(_env_file=None, deployment_mode="aws-prod")
    assert settings.s3_base_url == "https://cdn.example.com"


def test_empty_acl_disables_it(monkeypatch):
    monkeypatch.setenv("S3_OBJECT_ACL", "")
    assert Settings(_env_file=None).s3_object_acl is None


def test_get_settings_is_cached(monkeypatch):
    get_settings.cache_clear()
    monkeypatch.setenv("S3_BUCKET_NAME", "cached-bucket")
    try:
        first = get_settings()
        monkeypatch.setenv("S3_BUCKET_NAME", "other-bucket")

        assert get_settings() is first
        assert first.s3_bucket_name == "cached-bucket"
    finally:
        get_settings.cache_clear()

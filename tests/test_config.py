"""Tests for configuration management."""

from app.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "S3_BUCKET_NAME", "ENVIRONMENT"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)
        assert settings.app_name == "skillswap-backend"
        assert settings.avatars_bucket == "avatars"
        assert settings.avatar_max_bytes == 2 * 1024 * 1024
        assert settings.s3_configured is False
        assert settings.is_production is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co")
        monkeypatch.setenv("AVATARS_BUCKET", "pictures")
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "key")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret")
        monkeypatch.setenv("S3_BUCKET_NAME", "bucket")
        settings = Settings(_env_file=None)
        assert settings.supabase_url == "https://proj.supabase.co"
        assert settings.avatars_bucket == "pictures"
        assert settings.is_production is True
        assert settings.s3_configured is True

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, ,http://b.test")
        assert settings.get_cors_origins_list() == ["http://a.test", "http://b.test"]

"""Tests for RedisConfig and adapter construction."""

import pytest
from pydantic import ValidationError

from kvadapter import KeyValueAdapter, RedisConfig


class TestRedisConfig:
    """Tests for RedisConfig."""

    def test_defaults(self) -> None:
        config = RedisConfig()

        assert config.address == "localhost"
        assert config.port == 6379
        assert config.password == ""
        assert config.db == 0

    def test_addr_composition(self) -> None:
        """Address and port should compose into host:port."""
        config = RedisConfig(address="cache.internal", port=6380, db=2)

        assert config.addr == "cache.internal:6380"
        assert config.url == "redis://cache.internal:6380/2"

    def test_password_not_in_url(self) -> None:
        config = RedisConfig(password="secret")

        assert "secret" not in config.url

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KV_REDIS_ADDRESS", "redis.example")
        monkeypatch.setenv("KV_REDIS_PORT", "7000")
        monkeypatch.setenv("KV_REDIS_PASSWORD", "hunter2")

        config = RedisConfig()

        assert config.addr == "redis.example:7000"
        assert config.password == "hunter2"

    @pytest.mark.parametrize("port", [0, 70000])
    def test_invalid_port(self, port: int) -> None:
        with pytest.raises(ValidationError):
            RedisConfig(port=port)


class TestConstruction:
    """Tests for building adapters from connection settings."""

    @pytest.mark.parametrize(
        ("password", "expected"),
        [("", None), ("password", "password")],
        ids=["no-auth", "with-password"],
    )
    async def test_connect(self, password: str, expected: str | None) -> None:
        """connect() should target host:port without connecting eagerly."""
        adapter = KeyValueAdapter.connect("localhost", 6379, password)
        try:
            kwargs = adapter.commands.connection_pool.connection_kwargs  # type: ignore[attr-defined]

            assert kwargs["host"] == "localhost"
            assert kwargs["port"] == 6379
            assert kwargs["password"] == expected
            assert kwargs["decode_responses"] is True
        finally:
            await adapter.aclose()

    async def test_from_config(self) -> None:
        config = RedisConfig(address="10.0.0.5", port=6390, db=3)

        adapter = KeyValueAdapter.from_config(config)
        try:
            kwargs = adapter.commands.connection_pool.connection_kwargs  # type: ignore[attr-defined]

            assert (kwargs["host"], kwargs["port"], kwargs["db"]) == ("10.0.0.5", 6390, 3)
        finally:
            await adapter.aclose()

"""Tests for user storage implementations."""

import json
from unittest.mock import MagicMock, patch

import pytest

from src.app.core.errors import (
    DeleteError,
    EncodeError,
    FetchError,
    NotFoundError,
    WriteError,
)
from src.app.core.services import UserManagementService
from src.app.core.storage.user_storage import (
    InMemoryUserRepository,
    RedisUserRepository,
    build_user_repository,
)
from src.app.entities.core.user import User
from src.app.runtime.config.config_data import ConfigData


class TestInMemoryUserRepository:
    """Test in-memory user storage implementation."""

    def setup_method(self):
        self.repository = InMemoryUserRepository()

    def test_persist_and_fetch_one(self):
        user = User(email="ada@example.com", first_name="Ada", last_name="Lovelace")

        self.repository.persist(user)

        assert self.repository.fetch_one("ada@example.com") == user

    def test_fetch_one_missing_returns_absent_user(self):
        result = self.repository.fetch_one("nobody@example.com")

        assert result.is_absent

    def test_persist_overwrites_existing_record(self):
        self.repository.persist(User(email="ada@example.com", first_name="Ada"))
        self.repository.persist(User(email="ada@example.com", first_name="Augusta"))

        assert self.repository.fetch_one("ada@example.com").first_name == "Augusta"
        assert len(self.repository.fetch_all()) == 1

    def test_fetch_all_returns_every_user(self):
        users = [
            User(email="ada@example.com", first_name="Ada"),
            User(email="grace@example.com", first_name="Grace"),
        ]
        for user in users:
            self.repository.persist(user)

        result = self.repository.fetch_all()

        assert sorted(result, key=lambda u: u.email) == users

    def test_fetch_all_empty(self):
        assert self.repository.fetch_all() == []

    def test_delete_removes_record(self):
        self.repository.persist(User(email="ada@example.com"))

        self.repository.delete("ada@example.com")

        assert self.repository.fetch_one("ada@example.com").is_absent

    def test_delete_missing_key_is_not_an_error(self):
        self.repository.delete("nobody@example.com")

    def test_corrupted_record_raises_fetch_error(self):
        self.repository._data["ada@example.com"] = "{not json"

        with pytest.raises(FetchError):
            self.repository.fetch_one("ada@example.com")
        with pytest.raises(FetchError):
            self.repository.fetch_all()

    def test_unserializable_user_raises_encode_error(self):
        user = User(email="ada@example.com")

        with patch.object(User, "model_dump_json", side_effect=TypeError("boom")):
            with pytest.raises(EncodeError) as exc_info:
                self.repository.persist(user)

        assert isinstance(exc_info.value.cause, TypeError)
        assert self.repository.fetch_one("ada@example.com").is_absent

    def test_always_available(self):
        assert self.repository.is_available()


class TestRedisUserRepository:
    """Test Redis user storage implementation."""

    def setup_method(self):
        self.mock_redis = MagicMock()
        self.repository = RedisUserRepository(self.mock_redis, table_name="users")

    def test_persist_writes_json_under_table_key(self):
        user = User(email="ada@example.com", first_name="Ada", last_name="Lovelace")

        self.repository.persist(user)

        self.mock_redis.set.assert_called_once()
        key, payload = self.mock_redis.set.call_args[0]
        assert key == "users:ada@example.com"
        assert json.loads(payload) == {
            "email": "ada@example.com",
            "firstName": "Ada",
            "lastName": "Lovelace",
        }

    def test_fetch_one(self):
        user = User(email="ada@example.com", first_name="Ada")
        self.mock_redis.get.return_value = user.model_dump_json(by_alias=True)

        result = self.repository.fetch_one("ada@example.com")

        assert result == user
        self.mock_redis.get.assert_called_once_with("users:ada@example.com")

    def test_fetch_one_bytes(self):
        user = User(email="ada@example.com", first_name="Ada")
        self.mock_redis.get.return_value = user.model_dump_json(by_alias=True).encode(
            "utf-8"
        )

        assert self.repository.fetch_one("ada@example.com") == user

    def test_fetch_one_missing_returns_absent_user(self):
        self.mock_redis.get.return_value = None

        assert self.repository.fetch_one("nobody@example.com").is_absent

    def test_fetch_one_backend_failure(self):
        self.mock_redis.get.side_effect = ConnectionError("connection refused")

        with pytest.raises(FetchError) as exc_info:
            self.repository.fetch_one("ada@example.com")

        assert isinstance(exc_info.value.cause, ConnectionError)
        assert not self.repository.is_available()

    def test_fetch_one_decode_failure(self):
        self.mock_redis.get.return_value = "{broken"

        with pytest.raises(FetchError):
            self.repository.fetch_one("ada@example.com")

    def test_fetch_one_invalid_utf8_bytes(self):
        self.mock_redis.get.return_value = b"\xff\xfe{not utf8"

        with pytest.raises(FetchError) as exc_info:
            self.repository.fetch_one("ada@example.com")

        assert str(exc_info.value) == "failed to decode record"

    def test_invalid_utf8_record_reported_as_not_found_by_service(self):
        self.mock_redis.get.return_value = b"\xff\xfe{not utf8"
        service = UserManagementService(self.repository)

        with pytest.raises(NotFoundError) as exc_info:
            service.fetch_one("ada@example.com")

        assert isinstance(exc_info.value.cause, FetchError)

    def test_fetch_all_scans_table_namespace(self):
        ada = User(email="ada@example.com", first_name="Ada")
        grace = User(email="grace@example.com", first_name="Grace")
        self.mock_redis.scan_iter.return_value = iter(
            ["users:ada@example.com", "users:grace@example.com", "users:gone@example.com"]
        )
        self.mock_redis.mget.return_value = [
            ada.model_dump_json(by_alias=True),
            grace.model_dump_json(by_alias=True),
            None,
        ]

        result = self.repository.fetch_all()

        assert result == [ada, grace]
        self.mock_redis.scan_iter.assert_called_once_with(match="users:*", count=100)

    def test_fetch_all_empty_table_skips_mget(self):
        self.mock_redis.scan_iter.return_value = iter([])

        assert self.repository.fetch_all() == []
        self.mock_redis.mget.assert_not_called()

    def test_fetch_all_backend_failure(self):
        self.mock_redis.scan_iter.side_effect = ConnectionError("connection refused")

        with pytest.raises(FetchError):
            self.repository.fetch_all()

    def test_persist_backend_failure(self):
        self.mock_redis.set.side_effect = ConnectionError("connection refused")

        with pytest.raises(WriteError):
            self.repository.persist(User(email="ada@example.com"))

    def test_delete(self):
        self.repository.delete("ada@example.com")

        self.mock_redis.delete.assert_called_once_with("users:ada@example.com")

    def test_delete_backend_failure(self):
        self.mock_redis.delete.side_effect = ConnectionError("connection refused")

        with pytest.raises(DeleteError):
            self.repository.delete("ada@example.com")

    def test_ping(self):
        assert self.repository.ping()

        self.mock_redis.ping.side_effect = ConnectionError("down")
        assert not self.repository.ping()
        assert not self.repository.is_available()


class TestBuildUserRepository:
    """Test repository selection from configuration."""

    def _config(self, backend: str, environment: str = "development") -> ConfigData:
        config = ConfigData()
        config.storage.backend = backend
        config.app.environment = environment
        return config

    def test_memory_backend(self):
        repository = build_user_repository(self._config("memory"))

        assert isinstance(repository, InMemoryUserRepository)

    def test_redis_backend(self):
        redis_service = MagicMock()
        redis_service.get_client.return_value = MagicMock()

        repository = build_user_repository(self._config("redis"), redis_service)

        assert isinstance(repository, RedisUserRepository)

    def test_redis_unreachable_falls_back_in_development(self):
        client = MagicMock()
        client.ping.side_effect = ConnectionError("down")
        redis_service = MagicMock()
        redis_service.get_client.return_value = client

        repository = build_user_repository(self._config("redis"), redis_service)

        assert isinstance(repository, InMemoryUserRepository)

    def test_redis_unreachable_raises_in_production(self):
        redis_service = MagicMock()
        redis_service.get_client.return_value = None

        with pytest.raises(RuntimeError):
            build_user_repository(self._config("redis", "production"), redis_service)

    def test_redis_unreachable_raises_without_fallback(self):
        config = self._config("redis")
        config.storage.fallback_to_memory = False

        with pytest.raises(RuntimeError):
            build_user_repository(config, None)

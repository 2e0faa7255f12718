"""Unit tests for EngineConfig."""

import pytest

from keyworker.config.engine_config import (
    DEFAULT_ENGINE_CONFIG,
    TEST_ENGINE_CONFIG,
    EngineConfig,
)
from keyworker.domain.models.policy import AllocationPolicy

_ENV_VARS = (
    "KEYWORKER_DEFAULT_CAPACITY",
    "KEYWORKER_DEFAULT_MAXIMUM_CAPACITY",
    "KEYWORKER_DEFAULT_FREQUENCY_WEEKS",
    "KEYWORKER_DEFAULT_AUTO_ALLOCATION",
    "KEYWORKER_MAX_USERNAME_LENGTH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_default_values(self) -> None:
        config = EngineConfig()
        assert config.default_capacity == 6
        assert config.default_maximum_capacity == 9
        assert config.default_frequency_in_weeks == 1
        assert config.default_allow_auto_allocation is True
        assert config.max_username_length == 64

    def test_presets(self) -> None:
        assert DEFAULT_ENGINE_CONFIG == EngineConfig()
        assert TEST_ENGINE_CONFIG.default_capacity == 2
        assert TEST_ENGINE_CONFIG.default_maximum_capacity == 3

    def test_default_prison_configuration(self) -> None:
        prison = TEST_ENGINE_CONFIG.default_prison_configuration(
            "LEI", AllocationPolicy.PERSONAL_OFFICER
        )
        assert prison.code == "LEI"
        assert prison.policy is AllocationPolicy.PERSONAL_OFFICER
        assert prison.capacity == 2
        assert prison.maximum_capacity == 3
        assert prison.allow_auto_allocation is True


class TestValidation:
    """Tests for __post_init__ validation."""

    def test_negative_capacity(self) -> None:
        with pytest.raises(ValueError, match="default_capacity"):
            EngineConfig(default_capacity=-1)

    def test_maximum_below_capacity(self) -> None:
        with pytest.raises(ValueError, match="default_maximum_capacity"):
            EngineConfig(default_capacity=6, default_maximum_capacity=5)

    def test_zero_frequency(self) -> None:
        with pytest.raises(ValueError, match="default_frequency_in_weeks"):
            EngineConfig(default_frequency_in_weeks=0)

    def test_zero_username_length(self) -> None:
        with pytest.raises(ValueError, match="max_username_length"):
            EngineConfig(max_username_length=0)


class TestFromEnvironment:
    """Tests for EngineConfig.from_environment."""

    def test_no_env_gives_defaults(self) -> None:
        assert EngineConfig.from_environment() == EngineConfig()

    def test_reads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEYWORKER_DEFAULT_CAPACITY", "4")
        monkeypatch.setenv("KEYWORKER_DEFAULT_MAXIMUM_CAPACITY", "7")
        monkeypatch.setenv("KEYWORKER_DEFAULT_FREQUENCY_WEEKS", "2")
        monkeypatch.setenv("KEYWORKER_DEFAULT_AUTO_ALLOCATION", "off")
        monkeypatch.setenv("KEYWORKER_MAX_USERNAME_LENGTH", "32")

        config = EngineConfig.from_environment()

        assert config == EngineConfig(
            default_capacity=4,
            default_maximum_capacity=7,
            default_frequency_in_weeks=2,
            default_allow_auto_allocation=False,
            max_username_length=32,
        )

    def test_unparseable_values_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEYWORKER_DEFAULT_CAPACITY", "lots")
        monkeypatch.setenv("KEYWORKER_DEFAULT_AUTO_ALLOCATION", "maybe")

        config = EngineConfig.from_environment()

        assert config.default_capacity == 6
        assert config.default_allow_auto_allocation is True

    def test_invalid_combination_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KEYWORKER_DEFAULT_CAPACITY", "12")
        with pytest.raises(ValueError):
            EngineConfig.from_environment()

"""Tests for RelevanceConfig -- configuration and settings module.

All tests use real files in temporary directories, real environment variables,
and real JSON config files.  No mocks, no stubs, no fakes.
"""

import json
import logging
import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from ticket_relevance.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CATEGORY_PREFIXES,
    DEFAULT_STOP_WORDS,
    ENV_PREFIX,
    RelevanceConfig,
    _detect_project_root,
    _load_config_file,
    _load_env_overrides,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    """Create a temporary project directory with a .git marker."""
    (tmp_path / ".git").mkdir()
    return tmp_path


@pytest.fixture()
def config_file(project_dir: Path) -> Path:
    """Create a .ticket-relevance.json at the project root."""
    config_path = project_dir / CONFIG_FILE_NAME
    config_path.write_text(
        json.dumps(
            {
                "max_keywords": 5,
                "relevance_threshold": 40,
                "log_level": "DEBUG",
                "category_prefixes": ["feature", "fix"],
            },
            indent=2,
        ),
        encoding="utf-8",
    )
    return config_path


@pytest.fixture(autouse=True)
def clean_env():
    """Remove all TICKET_RELEVANCE_* env vars before and after each test."""
    env_keys = [k for k in os.environ if k.startswith(ENV_PREFIX)]
    saved = {k: os.environ.pop(k) for k in env_keys}
    yield
    for k in list(os.environ.keys()):
        if k.startswith(ENV_PREFIX):
            del os.environ[k]
    os.environ.update(saved)


@pytest.fixture()
def clean_logger():
    """Detach handlers added to the package logger during a test."""
    pkg_logger = logging.getLogger("ticket_relevance")
    saved_handlers = list(pkg_logger.handlers)
    saved_level = pkg_logger.level
    pkg_logger.handlers = []
    yield pkg_logger
    pkg_logger.handlers = saved_handlers
    pkg_logger.setLevel(saved_level)


# ---------------------------------------------------------------------------
# Default construction
# ---------------------------------------------------------------------------


class TestDefaultConstruction:
    """RelevanceConfig with no arguments uses sensible defaults."""

    def test_default_min_keyword_length(self) -> None:
        assert RelevanceConfig().min_keyword_length == 3

    def test_default_max_keywords(self) -> None:
        assert RelevanceConfig().max_keywords == 8

    def test_default_partial_match_length(self) -> None:
        assert RelevanceConfig().partial_match_length == 4

    def test_default_threshold(self) -> None:
        assert RelevanceConfig().relevance_threshold == 30

    def test_default_tiers(self) -> None:
        config = RelevanceConfig()
        assert config.good_threshold == 50
        assert config.excellent_threshold == 70

    def test_default_prefixes(self) -> None:
        assert RelevanceConfig().category_prefixes == DEFAULT_CATEGORY_PREFIXES

    def test_default_stop_words(self) -> None:
        assert RelevanceConfig().stop_words == DEFAULT_STOP_WORDS

    def test_default_log_level(self) -> None:
        assert RelevanceConfig().log_level == "INFO"

    def test_project_root_resolved(self, tmp_path: Path) -> None:
        config = RelevanceConfig(project_root=str(tmp_path))
        assert config.project_root == str(tmp_path.resolve())

    def test_config_is_frozen(self) -> None:
        config = RelevanceConfig()
        with pytest.raises(ValidationError):
            config.max_keywords = 3


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    """Out-of-range values are rejected; list values are normalised."""

    @pytest.mark.parametrize("value", [-1, 101])
    def test_threshold_out_of_range(self, value: int) -> None:
        with pytest.raises(ValidationError):
            RelevanceConfig(relevance_threshold=value)

    def test_max_keywords_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            RelevanceConfig(max_keywords=0)

    def test_partial_match_can_be_disabled(self) -> None:
        assert RelevanceConfig(partial_match_length=0).partial_match_length == 0

    def test_good_above_excellent_rejected(self) -> None:
        with pytest.raises(ValidationError, match="good_threshold"):
            RelevanceConfig(good_threshold=80, excellent_threshold=70)

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError, match="Invalid log_level"):
            RelevanceConfig(log_level="VERBOSE")

    def test_log_level_normalised(self) -> None:
        assert RelevanceConfig(log_level=" debug ").log_level == "DEBUG"

    def test_prefixes_normalised_from_string(self) -> None:
        config = RelevanceConfig(category_prefixes="Feature/, BUGFIX ,feature,,")
        assert config.category_prefixes == ("feature", "bugfix")

    def test_prefixes_normalised_from_list(self) -> None:
        config = RelevanceConfig(category_prefixes=["Hotfix_", "chore-"])
        assert config.category_prefixes == ("hotfix", "chore")

    def test_empty_prefixes_allowed(self) -> None:
        assert RelevanceConfig(category_prefixes=[]).category_prefixes == ()

    def test_extra_stop_words_extend_defaults(self) -> None:
        config = RelevanceConfig(extra_stop_words=["Gift", " cards "])
        assert config.extra_stop_words == frozenset({"gift", "cards"})
        assert "gift" in config.stop_words
        assert "the" in config.stop_words


# ---------------------------------------------------------------------------
# Project root detection
# ---------------------------------------------------------------------------


class TestProjectRootDetection:

    def test_detects_git_marker(self, project_dir: Path) -> None:
        nested = project_dir / "a" / "b"
        nested.mkdir(parents=True)
        assert _detect_project_root(nested) == project_dir.resolve()

    def test_detects_config_file_marker(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("{}", encoding="utf-8")
        assert _detect_project_root(tmp_path) == tmp_path.resolve()

    def test_load_uses_cwd_detection(
        self, project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        nested = project_dir / "src"
        nested.mkdir()
        monkeypatch.chdir(nested)
        config = RelevanceConfig.load()
        assert config.project_root == str(project_dir.resolve())


# ---------------------------------------------------------------------------
# Config file loading
# ---------------------------------------------------------------------------


class TestConfigFile:

    def test_missing_file_returns_empty(self, project_dir: Path) -> None:
        assert _load_config_file(str(project_dir)) == {}

    def test_reads_file(self, project_dir: Path, config_file: Path) -> None:
        data = _load_config_file(str(project_dir))
        assert data["max_keywords"] == 5

    def test_invalid_json_ignored(self, project_dir: Path) -> None:
        (project_dir / CONFIG_FILE_NAME).write_text("{not json", encoding="utf-8")
        assert _load_config_file(str(project_dir)) == {}

    def test_non_object_ignored(self, project_dir: Path) -> None:
        (project_dir / CONFIG_FILE_NAME).write_text("[1, 2]", encoding="utf-8")
        assert _load_config_file(str(project_dir)) == {}

    def test_load_applies_file_values(self, project_dir: Path, config_file: Path) -> None:
        config = RelevanceConfig.load(str(project_dir))
        assert config.max_keywords == 5
        assert config.relevance_threshold == 40
        assert config.log_level == "DEBUG"
        assert config.category_prefixes == ("feature", "fix")
        # Untouched fields keep their defaults.
        assert config.min_keyword_length == 3

    def test_explicit_config_path(self, tmp_path: Path, project_dir: Path) -> None:
        other = tmp_path / "custom.json"
        other.write_text(json.dumps({"partial_match_length": 5}), encoding="utf-8")
        config = RelevanceConfig.load(str(project_dir), config_path=str(other))
        assert config.partial_match_length == 5

    def test_out_of_range_file_value_raises(self, project_dir: Path) -> None:
        (project_dir / CONFIG_FILE_NAME).write_text(
            json.dumps({"relevance_threshold": 150}), encoding="utf-8"
        )
        with pytest.raises(ValidationError):
            RelevanceConfig.load(str(project_dir))


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------


class TestEnvOverrides:

    def test_no_env_returns_empty(self) -> None:
        assert _load_env_overrides() == {}

    def test_integer_overrides(self) -> None:
        os.environ[f"{ENV_PREFIX}MAX_KEYWORDS"] = "4"
        os.environ[f"{ENV_PREFIX}RELEVANCE_THRESHOLD"] = "55"
        overrides = _load_env_overrides()
        assert overrides == {"max_keywords": 4, "relevance_threshold": 55}

    def test_invalid_integer_ignored(self) -> None:
        os.environ[f"{ENV_PREFIX}MAX_KEYWORDS"] = "many"
        assert _load_env_overrides() == {}

    def test_list_overrides(self, project_dir: Path) -> None:
        os.environ[f"{ENV_PREFIX}CATEGORY_PREFIXES"] = "feat,fix"
        os.environ[f"{ENV_PREFIX}EXTRA_STOP_WORDS"] = "shop,app"
        config = RelevanceConfig.load(str(project_dir))
        assert config.category_prefixes == ("feat", "fix")
        assert config.extra_stop_words == frozenset({"shop", "app"})

    def test_env_beats_file(self, project_dir: Path, config_file: Path) -> None:
        os.environ[f"{ENV_PREFIX}MAX_KEYWORDS"] = "6"
        os.environ[f"{ENV_PREFIX}LOG_LEVEL"] = "warning"
        config = RelevanceConfig.load(str(project_dir))
        assert config.max_keywords == 6
        assert config.log_level == "WARNING"
        # File value survives where env is silent.
        assert config.relevance_threshold == 40


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


class TestUtilities:

    def test_to_dict_is_json_serialisable(self) -> None:
        config = RelevanceConfig(extra_stop_words=["b", "a"])
        data = config.to_dict()
        assert data["extra_stop_words"] == ["a", "b"]
        assert data["category_prefixes"] == list(DEFAULT_CATEGORY_PREFIXES)
        json.dumps(data)

    def test_configure_logging_is_idempotent(self, clean_logger) -> None:
        config = RelevanceConfig(log_level="DEBUG")
        config.configure_logging()
        config.configure_logging()
        assert len(clean_logger.handlers) == 1
        assert clean_logger.level == logging.DEBUG

"""Configuration and settings module for ticket relevance scoring.

Provides the :class:`RelevanceConfig` class which centralises every tunable
used by keyword extraction, relevance scoring and assessment.  Configuration
is resolved in priority order:

1. **Environment variables** (highest priority) -- ``TICKET_RELEVANCE_*``
2. **Config file** -- ``<project_root>/.ticket-relevance.json``
3. **Defaults** (lowest priority) -- sensible built-in values

The config object is immutable.  Build it once at startup and pass it
explicitly to the scoring functions or to a
:class:`~ticket_relevance.scoring.scorer.RelevanceScorer`.

Typical usage::

    config = RelevanceConfig.load()                          # auto-detect project root
    config = RelevanceConfig.load("/path/to/project")        # explicit project root
    config = RelevanceConfig(relevance_threshold=50)         # programmatic construction

    print(config.max_keywords)          # 8  (or overridden value)
    print(config.relevance_threshold)   # 30 (or overridden value)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Config file name, placed at the project root.
CONFIG_FILE_NAME = ".ticket-relevance.json"

# Environment variable prefix.  Every config key can be overridden by setting
# ``TICKET_RELEVANCE_<UPPER_KEY>``.  For example,
# ``TICKET_RELEVANCE_RELEVANCE_THRESHOLD=50``.
ENV_PREFIX = "TICKET_RELEVANCE_"

# Sentinel files used to detect a project root directory.  The search walks
# upward from the current working directory until one of these is found.
PROJECT_ROOT_MARKERS = (
    ".git",
    "pyproject.toml",
    "setup.py",
    "setup.cfg",
    "package.json",
    CONFIG_FILE_NAME,
)

# Branch category prefixes stripped from a candidate name before matching.
DEFAULT_CATEGORY_PREFIXES = ("feature", "bugfix", "hotfix", "release", "chore")

# Separators that end a prefix or a ticket ID inside a branch/commit name.
NAME_SEPARATORS = "-_/"

# Words never treated as keywords: articles, prepositions, pronouns,
# auxiliaries, generic verbs and tracker boilerplate.
DEFAULT_STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "nor", "in", "on", "at", "to",
    "for", "of", "with", "by", "from", "into", "onto", "via", "per", "over",
    "under", "about", "after", "before", "between", "through", "during",
    "without", "within", "against", "up", "out", "off", "as", "than",
    "is", "are", "was", "were", "be", "been", "being", "am",
    "have", "has", "had", "having", "do", "does", "did", "doing", "done",
    "will", "would", "could", "should", "may", "might", "must", "shall",
    "can", "cannot", "this", "that", "these", "those", "it", "its",
    "we", "they", "you", "he", "she", "me", "us", "them", "my", "our",
    "your", "their", "his", "her", "not", "no", "yes", "so", "if", "then",
    "else", "when", "while", "where", "which", "who", "whom", "what", "why",
    "how", "all", "any", "each", "every", "both", "few", "more", "most",
    "other", "some", "such", "only", "also", "just", "too", "very", "now",
    "get", "got", "set", "make", "made", "let", "need", "needs", "want",
    "etc", "poc", "wip", "todo", "tbd", "task", "ticket",
    "story", "epic", "subtask",
})

_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class RelevanceConfig(BaseModel):
    """Centralised, immutable configuration for relevance scoring.

    Every field has a sensible default.  Fields can be overridden by a
    ``.ticket-relevance.json`` file or by environment variables (see module
    docstring).

    Attributes
    ----------
    min_keyword_length:
        Shortest token kept as a keyword.
    max_keywords:
        Maximum number of keywords retained from a ticket summary.  The
        first N in source order are kept.
    partial_match_length:
        Length of the keyword prefix accepted as a partial match.  Keywords
        shorter than this only match verbatim.  ``0`` disables partial
        matching.
    relevance_threshold:
        Minimum match percentage for a name to count as relevant.
    good_threshold, excellent_threshold:
        Percentage cut-offs for the ``good`` and ``excellent`` tiers.
    max_suggestions:
        How many missing keywords are offered as suggestions.
    category_prefixes:
        Branch category prefixes removed from candidate names.
    extra_stop_words:
        Project-specific words added to the default stoplist.
    log_level:
        Python logging level name for the ``ticket_relevance`` logger.
    project_root:
        The detected or configured project root path.
    """

    model_config = ConfigDict(frozen=True)

    min_keyword_length: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Shortest token kept as a keyword.",
    )
    max_keywords: int = Field(
        default=8,
        ge=1,
        le=50,
        description="Maximum number of keywords kept per summary.",
    )
    partial_match_length: int = Field(
        default=4,
        ge=0,
        le=20,
        description="Keyword prefix length accepted as a partial match (0 disables).",
    )
    relevance_threshold: int = Field(
        default=30,
        ge=0,
        le=100,
        description="Minimum match percentage for a relevant name.",
    )
    good_threshold: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Minimum match percentage for the 'good' tier.",
    )
    excellent_threshold: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Minimum match percentage for the 'excellent' tier.",
    )
    max_suggestions: int = Field(
        default=3,
        ge=0,
        le=50,
        description="Number of missing keywords offered as suggestions.",
    )
    category_prefixes: tuple[str, ...] = Field(
        default=DEFAULT_CATEGORY_PREFIXES,
        description="Branch category prefixes stripped before matching.",
    )
    extra_stop_words: frozenset[str] = Field(
        default_factory=frozenset,
        description="Additional words excluded from keyword extraction.",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.",
    )
    project_root: Optional[str] = Field(
        default=None,
        description="Detected or configured project root path.",
    )

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("category_prefixes", mode="before")
    @classmethod
    def normalise_prefixes(cls, value: Any) -> tuple[str, ...]:
        """Lower-case prefixes, strip trailing separators, drop duplicates."""
        items = _split_list(value)
        prefixes: list[str] = []
        for item in items:
            prefix = item.strip().lower().rstrip(NAME_SEPARATORS)
            if prefix and prefix not in prefixes:
                prefixes.append(prefix)
        return tuple(prefixes)

    @field_validator("extra_stop_words", mode="before")
    @classmethod
    def normalise_stop_words(cls, value: Any) -> frozenset[str]:
        """Lower-case stop words and drop blanks."""
        return frozenset(
            word.strip().lower() for word in _split_list(value) if word.strip()
        )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise and validate the log level string."""
        normalised = value.upper().strip()
        if normalised not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level '{value}'. "
                f"Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}."
            )
        return normalised

    @field_validator("project_root")
    @classmethod
    def resolve_project_root(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return str(Path(value).resolve())

    @model_validator(mode="after")
    def validate_tiers(self) -> "RelevanceConfig":
        """The ``good`` tier cut-off must not exceed the ``excellent`` one."""
        if self.good_threshold > self.excellent_threshold:
            raise ValueError(
                f"good_threshold ({self.good_threshold}) must not exceed "
                f"excellent_threshold ({self.excellent_threshold})."
            )
        return self

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def stop_words(self) -> frozenset[str]:
        """The effective stoplist: defaults plus :attr:`extra_stop_words`."""
        if not self.extra_stop_words:
            return DEFAULT_STOP_WORDS
        return DEFAULT_STOP_WORDS | self.extra_stop_words

    # ------------------------------------------------------------------
    # Factory: load from file + environment
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        project_root: Optional[str] = None,
        config_path: Optional[str] = None,
    ) -> "RelevanceConfig":
        """Load configuration with full resolution: file -> env -> defaults.

        Parameters
        ----------
        project_root:
            Explicit project root.  When *None*, auto-detection is used.
        config_path:
            Explicit path to a JSON config file.  When *None*, the file is
            looked up at ``<project_root>/.ticket-relevance.json``.

        Returns
        -------
        RelevanceConfig
            Fully resolved configuration object.

        Raises
        ------
        pydantic.ValidationError
            If the merged values are out of range.
        """
        if project_root is not None:
            resolved_root = str(Path(project_root).resolve())
        else:
            detected = _detect_project_root()
            resolved_root = str(detected) if detected is not None else str(Path.cwd())

        file_values = _load_config_file(resolved_root, config_path)
        env_values = _load_env_overrides()

        merged: dict = {}
        if file_values:
            merged.update(file_values)
        if env_values:
            merged.update(env_values)
        merged["project_root"] = resolved_root

        return cls.model_validate(merged)

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------

    def configure_logging(self) -> None:
        """Apply the configured log level to the ``ticket_relevance`` logger.

        Adds a single stream handler the first time it is called; calling
        it again only updates the level.
        """
        pkg_logger = logging.getLogger("ticket_relevance")
        pkg_logger.setLevel(self.log_level)

        if not pkg_logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(self.log_level)
            formatter = logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            handler.setFormatter(formatter)
            pkg_logger.addHandler(handler)

    def to_dict(self) -> dict:
        """Return all configuration values as a JSON-friendly dictionary."""
        data = self.model_dump()
        data["category_prefixes"] = list(self.category_prefixes)
        data["extra_stop_words"] = sorted(self.extra_stop_words)
        return data


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _split_list(value: Any) -> list[str]:
    """Accept a comma-separated string or an iterable of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return value.split(",")
    return [str(item) for item in value]


def _detect_project_root(start_path: Optional[Path] = None) -> Optional[Path]:
    """Walk upward from *start_path* to find the project root.

    The project root is the first directory that contains one of the
    :data:`PROJECT_ROOT_MARKERS`.  Returns *None* when the filesystem root is
    reached without finding one.
    """
    current = (start_path or Path.cwd()).resolve()

    # Safety limit to prevent infinite loops on unusual filesystems.
    max_depth = 50
    for _ in range(max_depth):
        for marker in PROJECT_ROOT_MARKERS:
            if (current / marker).exists():
                return current

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_config_file(
    project_root: str,
    config_path: Optional[str] = None,
) -> dict:
    """Read the JSON config file and return its contents as a dict.

    Returns an empty dict if the file does not exist or is malformed.
    """
    if config_path is not None:
        path = Path(config_path).resolve()
    else:
        path = Path(project_root) / CONFIG_FILE_NAME

    if not path.is_file():
        logger.debug("No config file at %s. Using defaults.", path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as fp:
            data = json.load(fp)
        if not isinstance(data, dict):
            logger.warning(
                "Config file %s does not contain a JSON object. Ignoring.",
                path,
            )
            return {}
        logger.info("Loaded configuration from %s", path)
        return data
    except json.JSONDecodeError:
        logger.warning(
            "Config file %s contains invalid JSON. Ignoring.",
            path,
            exc_info=True,
        )
        return {}
    except OSError:
        logger.warning(
            "Could not read config file %s. Ignoring.",
            path,
            exc_info=True,
        )
        return {}


def _load_env_overrides() -> dict:
    """Read ``TICKET_RELEVANCE_*`` environment variables and return overrides.

    Supported variables:

    - ``TICKET_RELEVANCE_MIN_KEYWORD_LENGTH`` (integer)
    - ``TICKET_RELEVANCE_MAX_KEYWORDS`` (integer)
    - ``TICKET_RELEVANCE_PARTIAL_MATCH_LENGTH`` (integer)
    - ``TICKET_RELEVANCE_RELEVANCE_THRESHOLD`` (integer)
    - ``TICKET_RELEVANCE_GOOD_THRESHOLD`` (integer)
    - ``TICKET_RELEVANCE_EXCELLENT_THRESHOLD`` (integer)
    - ``TICKET_RELEVANCE_MAX_SUGGESTIONS`` (integer)
    - ``TICKET_RELEVANCE_CATEGORY_PREFIXES`` (comma separated)
    - ``TICKET_RELEVANCE_EXTRA_STOP_WORDS`` (comma separated)
    - ``TICKET_RELEVANCE_LOG_LEVEL``

    Returns a dict of field_name -> value for any variables that are set.
    """
    overrides: dict = {}

    _int_keys = {
        "MIN_KEYWORD_LENGTH": "min_keyword_length",
        "MAX_KEYWORDS": "max_keywords",
        "PARTIAL_MATCH_LENGTH": "partial_match_length",
        "RELEVANCE_THRESHOLD": "relevance_threshold",
        "GOOD_THRESHOLD": "good_threshold",
        "EXCELLENT_THRESHOLD": "excellent_threshold",
        "MAX_SUGGESTIONS": "max_suggestions",
    }
    for env_key, field_name in _int_keys.items():
        val = os.environ.get(f"{ENV_PREFIX}{env_key}")
        if val is not None:
            try:
                overrides[field_name] = int(val)
            except ValueError:
                logger.warning(
                    "Invalid %s%s value: %r. Must be an integer. Ignoring.",
                    ENV_PREFIX, env_key, val,
                )

    prefixes = os.environ.get(f"{ENV_PREFIX}CATEGORY_PREFIXES")
    if prefixes is not None:
        overrides["category_prefixes"] = prefixes

    stop_words = os.environ.get(f"{ENV_PREFIX}EXTRA_STOP_WORDS")
    if stop_words is not None:
        overrides["extra_stop_words"] = stop_words

    log_level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level is not None:
        overrides["log_level"] = log_level

    if overrides:
        logger.info(
            "Environment overrides applied: %s",
            ", ".join(overrides.keys()),
        )

    return overrides

"""Configuration loading and management for Defect Insight.

Configuration sources are merged in priority order:
    1. Defaults (defined in DetectorConfig)
    2. Global config (~/.defect-insight.toml)
    3. Project config (./defect-insight.toml)
    4. Explicit config file
    5. Environment variables (DEFECT_INSIGHT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, history_limit=5)
    >>> config.verbosity
    'verbose'
    >>> config.history_limit
    5
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "DEFECT_INSIGHT_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Limits used by the classifier's rule chain.

    Each rule fires when the metric is strictly above (or, for the comment
    ratio, strictly below) its limit:

    Attributes:
        vg_limit: Cyclomatic complexity above this is a defect
        ev_limit: Essential complexity above this is a defect
        effort_limit: Halstead effort above this is a defect
        comment_min_code_lines: lOCode above this enables the comment check
        comment_ratio_min: lOComment / lOCode below this is a defect
        branch_min_loc: loc above this enables the branch density check
        branch_density_max: branchCount / loc above this is a defect
    """

    vg_limit: float = 10
    ev_limit: float = 4
    effort_limit: float = 1000
    comment_min_code_lines: float = 100
    comment_ratio_min: float = 0.1
    branch_min_loc: float = 50
    branch_density_max: float = 0.3

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        for name in (
            "vg_limit",
            "ev_limit",
            "effort_limit",
            "comment_min_code_lines",
            "branch_min_loc",
        ):
            value = getattr(self, name)
            if value < 0:
                raise InvalidConfigError(name, value, "must be non-negative")

        # Ratios only make sense in [0, 1]
        for name in ("comment_ratio_min", "branch_density_max"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(name, value, "must be between 0.0 and 1.0")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class DetectorConfig:
    """Runtime configuration for the CLI, the HTTP server and the store.

    Attributes:
        data_dir: Directory holding the results database
        db_name: SQLite file name inside data_dir
        user: Default user id results are recorded under (None = anonymous)
        history_limit: Default number of history entries to show
        fetch_timeout_seconds: Timeout for downloading CSV files from a URL
        report_dir: Where batch HTML reports are written by default
        verbosity: Logging verbosity level
        log_file: Also append log records to this file (None = stderr only)
        thresholds: Classifier rule limits
    """

    data_dir: str = ".defect-insight"
    db_name: str = "results.db"
    user: Optional[str] = None
    history_limit: int = 20
    fetch_timeout_seconds: int = 30
    report_dir: str = "."
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.history_limit < 1:
            raise InvalidConfigError("history_limit", self.history_limit, "must be at least 1")
        if self.fetch_timeout_seconds < 1:
            raise InvalidConfigError(
                "fetch_timeout_seconds", self.fetch_timeout_seconds, "must be at least 1"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError("verbosity", self.verbosity, "must be quiet, normal or verbose")
        if not self.db_name:
            raise InvalidConfigError("db_name", self.db_name, "must not be empty")

    @property
    def db_path(self) -> Path:
        """Full path of the SQLite results database."""
        return Path(self.data_dir).expanduser() / self.db_name


def load_config(config_file: Optional[Path] = None, **overrides) -> DetectorConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options don't mask file values.

    Returns:
        Validated DetectorConfig instance

    Raises:
        ConfigFileError: If a config file is missing or unparsable
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".defect-insight.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "defect-insight.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Verbosity flags from the CLI come in as booleans
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds = merged.pop("thresholds", None)
    if isinstance(thresholds, dict):
        try:
            merged["thresholds"] = ThresholdConfig(**thresholds)
        except TypeError as e:
            raise InvalidConfigError("thresholds", thresholds, str(e))
    elif isinstance(thresholds, ThresholdConfig):
        merged["thresholds"] = thresholds

    try:
        return DetectorConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise InvalidConfigError("config", sorted(merged), str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DEFECT_INSIGHT_* environment variables.

    Supported environment variables:
        DEFECT_INSIGHT_DATA_DIR: str
        DEFECT_INSIGHT_DB_NAME: str
        DEFECT_INSIGHT_USER: str
        DEFECT_INSIGHT_HISTORY_LIMIT: int
        DEFECT_INSIGHT_FETCH_TIMEOUT_SECONDS: int
        DEFECT_INSIGHT_REPORT_DIR: str
        DEFECT_INSIGHT_VERBOSITY: quiet/normal/verbose
        DEFECT_INSIGHT_LOG_FILE: str
    """
    type_hints = get_type_hints(DetectorConfig)

    result: dict[str, Any] = {}

    for field_name in DetectorConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that can't come from the environment
    (nested dataclasses).
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))

"""Configuration loading and management for Class Insight.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.class-insight.toml)
    3. Project config (./class-insight.toml)
    4. Explicit config file
    5. Environment variables (CLASS_INSIGHT_* and CLASS_INSIGHT_THRESHOLD_*)
    6. Keyword overrides

Example:
    >>> config = load_config(workers=4)
    >>> config.workers
    4
    >>> config.thresholds.cross_package_pair_severity
    'medium'
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_args, get_origin, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_SEVERITIES = ("low", "medium", "high")

_ENV_PREFIX = "CLASS_INSIGHT_"
_THRESHOLD_ENV_PREFIX = "CLASS_INSIGHT_THRESHOLD_"

_BOOL_WORDS = {
    "true": True,
    "1": True,
    "yes": True,
    "on": True,
    "false": False,
    "0": False,
    "no": False,
    "off": False,
}


@dataclass(frozen=True)
class ThresholdConfig:
    """Metric thresholds and tuning parameters.

    Attributes:
        Complexity:
            complex_method_threshold: CC above this marks a method as complex
            very_complex_method_threshold: CC above this marks it very complex

        Suggestions:
            lcom_split_threshold: LCOM above this suggests splitting the class
            lcom_moderate_threshold: LCOM above this suggests a cohesion review
            cbo_suggestion_threshold: CBO above this suggests a facade / DI
            rfc_suggestion_threshold: RFC above this suggests a facade / DI
            dit_suggestion_threshold: DIT above this suggests composition
            max_methods_threshold: Method count above this is "too many"
            priority_complexity_threshold: Average CC that, with high LCOM,
                marks a priority refactoring target

        Risk breaches (escalate risk regardless of the composite score):
            risk_lcom_breach, risk_wmc_breach, risk_cbo_breach, risk_dit_breach

        Cycles:
            cross_package_pair_severity: Severity of a two-class cycle whose
                classes live in different packages
            max_cycle_length: Longest elementary cycle enumerated
            max_cycles: Upper bound on the number of cycles reported
            max_cycle_search_steps: Edge visits allowed per strongly connected
                component while enumerating its cycles

        Patterns and inheritance:
            ddd_min_confidence: Minimum confidence to list a DDD pattern
            max_inheritance_depth: Cap on DIT traversal
    """

    # === Complexity ===
    complex_method_threshold: int = 10
    very_complex_method_threshold: int = 20

    # === Suggestions ===
    lcom_split_threshold: int = 5
    lcom_moderate_threshold: int = 2
    cbo_suggestion_threshold: int = 10
    rfc_suggestion_threshold: int = 50
    dit_suggestion_threshold: int = 4
    max_methods_threshold: int = 20
    priority_complexity_threshold: float = 7.0

    # === Risk breaches ===
    risk_lcom_breach: int = 10
    risk_wmc_breach: int = 50
    risk_cbo_breach: int = 20
    risk_dit_breach: int = 6

    # === Cycles ===
    cross_package_pair_severity: str = "medium"
    max_cycle_length: int = 12
    max_cycles: int = 1000
    max_cycle_search_steps: int = 200_000

    # === Patterns / inheritance ===
    ddd_min_confidence: float = 0.5
    max_inheritance_depth: int = 32

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        if self.complex_method_threshold < 1:
            raise ValueError("complex_method_threshold must be at least 1")
        if self.very_complex_method_threshold < self.complex_method_threshold:
            raise ValueError(
                "very_complex_method_threshold must not be below complex_method_threshold"
            )
        if self.lcom_moderate_threshold > self.lcom_split_threshold:
            raise ValueError("lcom_moderate_threshold must not exceed lcom_split_threshold")

        if self.cross_package_pair_severity.lower() not in _SEVERITIES:
            raise ValueError(
                f"cross_package_pair_severity must be one of {', '.join(_SEVERITIES)}"
            )

        if self.max_cycle_length < 2:
            raise ValueError("max_cycle_length must be at least 2")
        if self.max_cycles < 1:
            raise ValueError("max_cycles must be at least 1")
        if self.max_cycle_search_steps < 1:
            raise ValueError("max_cycle_search_steps must be at least 1")

        if not 0.0 <= self.ddd_min_confidence <= 1.0:
            raise ValueError("ddd_min_confidence must be between 0.0 and 1.0")
        if self.max_inheritance_depth < 1:
            raise ValueError("max_inheritance_depth must be at least 1")

        non_negative = [
            "lcom_split_threshold",
            "lcom_moderate_threshold",
            "cbo_suggestion_threshold",
            "rfc_suggestion_threshold",
            "dit_suggestion_threshold",
            "max_methods_threshold",
            "risk_lcom_breach",
            "risk_wmc_breach",
            "risk_cbo_breach",
            "risk_dit_breach",
        ]
        for field_name in non_negative:
            if getattr(self, field_name) < 0:
                raise ValueError(f"{field_name} must be non-negative")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis execution.

    Attributes:
        workers: Number of phase-A worker threads (None = executor default)
        parallel: Run per-class metrics through a thread pool
        parallel_min_classes: Below this many classes phase A runs inline
        verbosity: Logging verbosity level
        thresholds: Metric thresholds (nested config)
    """

    workers: Optional[int] = None
    parallel: bool = True
    parallel_min_classes: int = 10
    verbosity: Verbosity = "normal"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.parallel_min_classes < 1:
            raise ValueError("parallel_min_classes must be at least 1")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be quiet, normal or verbose")


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    ``[thresholds]`` tables merge key by key across files, so a project
    file can change one threshold without restating the global ones.
    Individual thresholds can also come from ``CLASS_INSIGHT_THRESHOLD_*``
    variables or a ``thresholds=`` override (a dict or a ThresholdConfig).

    Raises:
        ConfigurationError: If a config file is missing or malformed, or a
            value fails validation
    """
    settings: dict[str, Any] = {}
    thresholds: dict[str, Any] = {}

    for label, path in _config_files(config_file):
        data = _read_toml(label, path)
        table = data.pop("thresholds", {})
        if not isinstance(table, dict):
            raise ConfigurationError(f"[thresholds] in {label} config '{path}' must be a table")
        settings.update(data)
        thresholds.update(table)

    settings.update(_env_values(AnalysisConfig, _ENV_PREFIX))
    thresholds.update(_env_values(ThresholdConfig, _THRESHOLD_ENV_PREFIX))

    threshold_override = overrides.pop("thresholds", None)
    if isinstance(threshold_override, ThresholdConfig):
        thresholds.update(asdict(threshold_override))
    elif threshold_override is not None:
        thresholds.update(threshold_override)
    settings.update(overrides)

    try:
        settings["thresholds"] = ThresholdConfig(**thresholds)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid [thresholds] config: {e}") from e

    try:
        return AnalysisConfig(**settings)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _config_files(explicit: Optional[Path]) -> list[tuple[str, Path]]:
    """Config files that apply, lowest priority first."""
    candidates = [
        ("global", Path.home() / ".class-insight.toml"),
        ("project", Path.cwd() / "class-insight.toml"),
    ]
    found = [(label, path) for label, path in candidates if path.exists()]
    if explicit is not None:
        if not explicit.exists():
            raise ConfigurationError(f"Config file not found: {explicit}")
        found.append(("explicit", explicit))
    return found


def _read_toml(label: str, path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid {label} config '{path}': {e}") from e


def _env_values(config_cls: type, prefix: str) -> dict[str, Any]:
    """Typed values for each ``<prefix><FIELD>`` variable that is set."""
    hints = get_type_hints(config_cls)
    values: dict[str, Any] = {}
    for name in config_cls.__dataclass_fields__:
        key = f"{prefix}{name.upper()}"
        raw = os.environ.get(key)
        if raw is None:
            continue
        try:
            values[name] = _coerce(raw, hints[name])
        except ValueError as e:
            raise InvalidConfigError(key, raw, str(e)) from e
    return values


def _coerce(raw: str, hint: Any) -> Any:
    """Convert an environment string to a field's annotated scalar type."""
    if get_origin(hint) is Literal:
        return raw
    # Optional[X]
    non_none = [arg for arg in get_args(hint) if arg is not type(None)]
    if non_none:
        hint = non_none[0]

    if hint is bool:
        try:
            return _BOOL_WORDS[raw.strip().lower()]
        except KeyError:
            raise ValueError(f"expected true/false, got '{raw}'") from None
    if hint is str:
        return raw
    if hint in (int, float):
        return hint(raw.strip())
    raise ValueError("only scalar settings can be set from the environment")

"""Quality score, risk and suggestion models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_COMPONENTS = ("cohesion", "complexity", "coupling", "inheritance", "architecture", "overall")


@dataclass(frozen=True)
class QualityScore:
    """Component scores and their weighted overall, each in [0, 10]."""

    cohesion: float = 0.0
    complexity: float = 0.0
    coupling: float = 0.0
    inheritance: float = 0.0
    architecture: float = 0.0
    overall: float = 0.0

    def __post_init__(self) -> None:
        for name in _COMPONENTS:
            value = getattr(self, name)
            if not 0.0 <= value <= 10.0:
                raise ValueError(f"{name} score must be within [0, 10], got {value}")

    @property
    def quality_level(self) -> str:
        if self.overall >= 8.0:
            return "Excellent"
        if self.overall >= 6.0:
            return "Good"
        if self.overall >= 4.0:
            return "Moderate"
        if self.overall >= 2.0:
            return "Poor"
        return "Critical"

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in _COMPONENTS}


class RiskLevel(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Ordinal, 1 (LOW) to 4 (CRITICAL)."""
        return _RANKS[self]


_RANKS = {
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
    RiskLevel.CRITICAL: 4,
}


@dataclass(frozen=True)
class RiskAssessment:
    level: RiskLevel
    reasons: tuple[str, ...] = ()
    impact: str = ""
    priority: int = 0  # sort key only; higher is worse


@dataclass(frozen=True)
class Suggestion:
    icon: str
    message: str
    tooltip: str

"""Signal candidate: a named set of floating-point features."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Candidate:
    """Feature map of a candidate plus the index of the hit it starts at."""

    hit_id: int = 0
    features: dict[str, float] = field(default_factory=dict)

    def __getitem__(self, key: str) -> float:
        return self.features[key]

    def __contains__(self, key: str) -> bool:
        return key in self.features

    def get(self, key: str, default: float = 0.0) -> float:
        """Value of a feature, or ``default`` when it is not set."""
        return self.features.get(key, default)

    def set(self, key: str, value: float) -> None:
        self.features[key] = float(value)

    def clear(self) -> None:
        self.features.clear()

    @property
    def feature_map(self) -> dict[str, float]:
        """Features ordered by name."""
        return dict(sorted(self.features.items()))

    def format(self) -> str:
        """All features as ``name: value`` pairs in name order."""
        return "".join(f"{key}: {value:g}" for key, value in self.feature_map.items())
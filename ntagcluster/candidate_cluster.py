"""Cluster of signal candidates with per-feature value vectors."""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from .candidate import Candidate
from .cluster import Cluster, TreeOut
from .taggable import TaggableType

_log = logging.getLogger(__name__)

# Upper label value of each category and the symbol shown for it.
_LABEL_SYMBOLS = (
    (0, "-"),  # noise
    (1, "e"),  # decay electron
    (2, "nH"),
    (3, "nGd"),
    (4, "g"),
    (5, "="),  # remnant
    (6, "?"),  # undefined
)


def _label_symbol(value: float) -> str:
    for upper, symbol in _LABEL_SYMBOLS:
        if value <= upper:
            return symbol
    return ""


class CandidateCluster(Cluster[Candidate], TreeOut):
    """Candidates of one event; registered features are gathered into vectors."""

    def __init__(self, name: str = "") -> None:
        TreeOut.__init__(self)
        self.feature_vectors: dict[str, list[float]] = {}
        self.n_candidates = 0
        Cluster.__init__(self, name)

    def register_feature_names(self, keys: Sequence[str]) -> None:
        for key in keys:
            self.register_feature_name(key)

    def register_feature_name(self, key: str) -> None:
        """Register a feature to collect; registering twice keeps its vector."""
        self.feature_vectors.setdefault(key, [])

    def clear(self) -> None:
        """Drop all candidates and empty the feature vectors."""
        super().clear()
        for values in self.feature_vectors.values():
            values.clear()

    def fill_vector_map(self) -> None:
        """Gather every registered feature of every candidate into its vector.

        Raises ValueError on a NaN or infinite feature value, or when the
        candidates do not all carry the registered features.
        """
        if self.elements:
            identical = True
            collected: dict[str, list[float]] = {key: [] for key in self.feature_vectors}
            for index, candidate in enumerate(self.elements):
                features = candidate.feature_map
                for key in self.feature_vectors:
                    if key not in features:
                        _log.error("Registered key %s not found in candidate!", key)
                        identical = False
                        continue
                    value = features[key]
                    if math.isnan(value) or math.isinf(value):
                        kind = "NaN" if math.isnan(value) else "inf"
                        _log.error("Dumping all features:\n%s", self.format_elements())
                        raise ValueError(f"Candidate #{index}: key {key} value is {kind}!")
                    collected[key].append(value)
                for key in features:
                    if key not in self.feature_vectors:
                        _log.error("Candidate key %s not found in registered keys!", key)
                        identical = False

            if not identical:
                _log.error(
                    "Make sure all candidates share the same set of features "
                    "registered with register_feature_names!"
                )
            for key, values in collected.items():
                self.feature_vectors[key][:] = values
            if self.feature_vectors:
                first_key = min(self.feature_vectors)
                if len(self.feature_vectors[first_key]) != len(self):
                    raise ValueError(
                        f"feature {first_key} has {len(self.feature_vectors[first_key])}"
                        f" values for {len(self)} candidates"
                    )
        self.n_candidates = len(self)

    def format_elements(self, keys: Sequence[str] | None = None, tagged_only: bool = False) -> str:
        """Table of candidate features; ``keys`` default to the first candidate's."""
        title = f"{self.name}{' Tagged' if tagged_only else ''} Candidates"
        lines = [title]
        if not self.elements:
            lines.append("No candidate in cluster!")
            return "\n".join(lines) + "\n"

        keys = list(keys) if keys else list(self.elements[0].feature_map)
        header = "\033[4m No. " + "".join(f"{key:>{max(len(key), 6)}} " for key in keys)
        lines.append(header + "\033[0m")

        for number, candidate in enumerate(self.elements, start=1):
            if tagged_only and candidate.get("TagClass") == 0:
                continue
            cells = [f"{number:>4} "]
            for key in keys:
                cells.append(self._format_cell(key, candidate[key], max(len(key), 6)))
            lines.append("".join(cells))
        return "\n".join(lines) + "\n"

    @staticmethod
    def _format_cell(key: str, value: float, width: int) -> str:
        if "Index" in key:
            text = str(int(value + 1)) if value >= 0 else "-"
            return f"{text:>{width}} "
        if "FitT" in key and abs(value) < 10:
            return f"{value:>{width}.2f} "
        if "BSenergy" in key:
            text = f"{value:3.2f}" if value >= 0 else "-"
            return f"{text:>{width}}"
        if key == "Label":
            symbol = _label_symbol(value)
            return (f"{symbol:>{width}}" if symbol else "") + " "
        if key == "TagClass":
            if value == TaggableType.E:
                return f"{'e':>{width}}"
            if value == TaggableType.N:
                return f"{'n':>{width}}"
            return f"{'-':>{width}}"
        if abs(value) < 1 and value != 0:
            return f"{round(value * 100) / 100:>{width}.2f} "
        return f"{int(value + 0.5):>{width}} "

    def make_branches(self) -> None:
        if self.tree is not None:
            self.tree.branch("NCandidates", lambda: self.n_candidates)
            for key in self.feature_vectors:
                self.tree.branch(key, lambda key=key: self.feature_vectors[key])

    def rows(self) -> dict[str, Any]:
        """Candidate count and feature vectors, keyed by branch name."""
        table: dict[str, Any] = {"NCandidates": self.n_candidates}
        table.update({key: list(values) for key, values in self.feature_vectors.items()})
        return table
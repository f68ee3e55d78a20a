"""
Similarity Matrix
=================

Mapping from vertex pair to similarity score. Used as the iteration result
of every algorithm and as the queryable output.

Storage is nested: outer vertex -> inner vertex -> score. For SimRank both
coordinates come from the same vertex set; for the dual-graph algorithms the
outer vertex belongs to graph A and the inner vertex to graph B.
"""

import sys
from typing import Callable, Dict, Hashable, Iterator, List, Optional, Sequence, TextIO, Tuple

import numpy as np
import polars as pl


class SimilarityMatrix:
    """
    Pairwise similarity scores.

    Lookups are order-insensitive: get(a, b) falls back to (b, a) when (a, b)
    is not stored. Absent pairs return None, which is distinct from 0.0.
    """

    def __init__(self):
        self._scores: Dict[Hashable, Dict[Hashable, float]] = {}
        self._frozen = False

    @classmethod
    def from_array(
        cls,
        values: np.ndarray,
        rows: Sequence[Hashable],
        cols: Sequence[Hashable],
    ) -> 'SimilarityMatrix':
        """
        Build from a dense array.

        Args:
            values: len(rows) x len(cols) scores
            rows: Outer vertices, in row order
            cols: Inner vertices, in column order
        """
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (len(rows), len(cols)):
            raise ValueError(
                f"Shape {values.shape} does not match {len(rows)} x {len(cols)} labels"
            )

        matrix = cls()
        for i, a in enumerate(rows):
            matrix._scores[a] = {b: float(values[i, j]) for j, b in enumerate(cols)}
        return matrix

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(self, a: Hashable, b: Hashable, score: float) -> None:
        """Store a score, overwriting any previous value."""
        if self._frozen:
            raise RuntimeError("SimilarityMatrix is read-only once calculated")
        self._scores.setdefault(a, {})[b] = float(score)

    def freeze(self) -> 'SimilarityMatrix':
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, a: Hashable, b: Hashable) -> Optional[float]:
        """
        Score for the pair, trying (a, b) then (b, a).

        Returns:
            The score, or None if neither ordering is stored
        """
        row = self._scores.get(a)
        if row is not None and b in row:
            return row[b]
        row = self._scores.get(b)
        if row is not None and a in row:
            return row[a]
        return None

    def __contains__(self, pair: Tuple[Hashable, Hashable]) -> bool:
        return self.get(*pair) is not None

    def __len__(self) -> int:
        return sum(len(row) for row in self._scores.values())

    def __iter__(self) -> Iterator[Tuple[Hashable, Hashable, float]]:
        for a, row in self._scores.items():
            for b, score in row.items():
                yield a, b, score

    def for_each_pair(self, visitor: Callable[[Hashable, Hashable, float], None]) -> None:
        """Call visitor(a, b, score) for every stored pair."""
        for a, b, score in self:
            visitor(a, b, score)

    def items(self) -> List[Tuple[Hashable, Hashable, float]]:
        """All (a, b, score) triples in insertion order."""
        return list(self)

    def outer_keys(self) -> List[Hashable]:
        return list(self._scores)

    def inner_keys(self) -> List[Hashable]:
        seen = {}
        for row in self._scores.values():
            for b in row:
                seen.setdefault(b, None)
        return list(seen)

    def best_matches(self) -> Dict[Hashable, Tuple[Hashable, float]]:
        """
        Highest-scoring inner vertex for each outer vertex.

        Ties go to the first inner vertex stored.
        """
        best = {}
        for a, row in self._scores.items():
            if not row:
                continue
            b = max(row, key=row.get)
            best[a] = (b, row[b])
        return best

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_numpy(
        self,
        rows: Optional[Sequence[Hashable]] = None,
        cols: Optional[Sequence[Hashable]] = None,
    ) -> np.ndarray:
        """
        Dense array of stored scores; missing pairs are NaN.

        Exact (row, col) lookup only, no order fallback.
        """
        rows = list(rows) if rows is not None else self.outer_keys()
        cols = list(cols) if cols is not None else self.inner_keys()

        out = np.full((len(rows), len(cols)), np.nan)
        for i, a in enumerate(rows):
            row = self._scores.get(a, {})
            for j, b in enumerate(cols):
                if b in row:
                    out[i, j] = row[b]
        return out

    def to_frame(self) -> pl.DataFrame:
        """Scores as a DataFrame with vertex_a, vertex_b, similarity columns."""
        triples = self.items()
        df = pl.DataFrame({
            'vertex_a': [str(a) for a, _, _ in triples],
            'vertex_b': [str(b) for _, b, _ in triples],
            'similarity': [s for _, _, s in triples],
        }, schema={'vertex_a': pl.Utf8, 'vertex_b': pl.Utf8, 'similarity': pl.Float64})
        return df.sort(['vertex_a', 'vertex_b'])

    def show(self, file: Optional[TextIO] = None) -> None:
        """Write one 'a - b : score' line per stored pair."""
        file = file if file is not None else sys.stdout
        for a, b, score in self:
            print(f"{a} - {b} : {score}", file=file)

    def copy(self) -> 'SimilarityMatrix':
        """Unfrozen copy."""
        other = SimilarityMatrix()
        other._scores = {a: dict(row) for a, row in self._scores.items()}
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimilarityMatrix):
            return NotImplemented
        return self._scores == other._scores

    def __repr__(self) -> str:
        return (
            f"SimilarityMatrix({len(self._scores)} x {len(self.inner_keys())}, "
            f"frozen={self._frozen})"
        )

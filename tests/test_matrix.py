"""
Tests for SimilarityMatrix and score normalization.
"""

import io

import numpy as np
import polars as pl
import pytest

from graphsim.core.matrix import SimilarityMatrix
from graphsim.core.normalization import NormMethod, normalize


def _matrix():
    m = SimilarityMatrix()
    m.set('a', 'x', 0.5)
    m.set('a', 'y', 0.0)
    m.set('b', 'x', 0.25)
    return m


class TestLookup:
    """Order-insensitive lookup contract."""

    def test_exact_order(self):
        assert _matrix().get('a', 'x') == 0.5

    def test_reversed_order(self):
        """(b, a) falls back to the stored (a, b)."""
        assert _matrix().get('x', 'b') == 0.25

    def test_absent_vs_zero(self):
        """A stored zero is 0.0; a missing pair is None."""
        m = _matrix()
        assert m.get('a', 'y') == 0.0
        assert m.get('b', 'y') is None
        assert m.get('q', 'r') is None

    def test_overwrite(self):
        """set() overwrites silently."""
        m = _matrix()
        m.set('a', 'x', 0.9)
        assert m.get('a', 'x') == 0.9
        assert len(m) == 3

    def test_contains(self):
        m = _matrix()
        assert ('x', 'a') in m
        assert ('b', 'y') not in m


class TestEnumeration:
    """Pair enumeration and export."""

    def test_for_each_pair(self):
        """Visitor sees every stored triple once."""
        seen = []
        _matrix().for_each_pair(lambda a, b, s: seen.append((a, b, s)))
        assert sorted(seen) == [('a', 'x', 0.5), ('a', 'y', 0.0), ('b', 'x', 0.25)]

    def test_keys(self):
        m = _matrix()
        assert m.outer_keys() == ['a', 'b']
        assert m.inner_keys() == ['x', 'y']

    def test_to_numpy_missing_is_nan(self):
        arr = _matrix().to_numpy()
        assert arr.shape == (2, 2)
        assert arr[0, 0] == 0.5
        assert np.isnan(arr[1, 1])

    def test_to_frame(self):
        df = _matrix().to_frame()
        assert isinstance(df, pl.DataFrame)
        assert df.columns == ['vertex_a', 'vertex_b', 'similarity']
        assert df.height == 3
        assert df['vertex_a'].to_list() == ['a', 'a', 'b']

    def test_show(self):
        """One 'a - b : score' line per pair."""
        out = io.StringIO()
        _matrix().show(out)
        lines = out.getvalue().splitlines()
        assert 'a - x : 0.5' in lines
        assert len(lines) == 3

    def test_best_matches(self):
        best = _matrix().best_matches()
        assert best == {'a': ('x', 0.5), 'b': ('x', 0.25)}


class TestConstruction:
    """from_array, freezing and copies."""

    def test_from_array(self):
        m = SimilarityMatrix.from_array(np.array([[1.0, 2.0]]), ['r'], ['c1', 'c2'])
        assert m.get('r', 'c2') == 2.0
        assert isinstance(m.get('r', 'c1'), float)

    def test_from_array_shape_mismatch(self):
        with pytest.raises(ValueError):
            SimilarityMatrix.from_array(np.zeros((2, 2)), ['a'], ['b', 'c'])

    def test_frozen(self):
        m = _matrix().freeze()
        assert m.frozen
        with pytest.raises(RuntimeError):
            m.set('a', 'x', 1.0)

    def test_copy_is_writable(self):
        m = _matrix().freeze()
        other = m.copy()
        other.set('a', 'x', 1.0)
        assert m.get('a', 'x') == 0.5
        assert other != m


class TestNormalization:
    """Score normalization methods."""

    def test_max(self):
        out = normalize(np.array([[1.0, 4.0], [2.0, 0.0]]), 'max')
        np.testing.assert_allclose(out, [[0.25, 1.0], [0.5, 0.0]])

    def test_frobenius(self):
        out = normalize(np.array([3.0, 4.0]), NormMethod.FROBENIUS)
        np.testing.assert_allclose(out, [0.6, 0.8])

    def test_none(self):
        out = normalize(np.array([3.0, 4.0]), 'none')
        np.testing.assert_array_equal(out, [3.0, 4.0])

    @pytest.mark.parametrize('method', ['max', 'frobenius'])
    def test_zero_matrix_unchanged(self, method):
        """All-zero scores are not divided."""
        out = normalize(np.zeros((2, 3)), method)
        np.testing.assert_array_equal(out, np.zeros((2, 3)))

    def test_empty(self):
        assert normalize(np.zeros(0), 'max').size == 0

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            normalize(np.ones(2), 'l1')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])

"""
Tests for DenseMLRow.
"""

import numpy as np
import pytest

from mlrow import DenseMLRow, MLDouble, MLInt, MLString, RowIndexError, ValueCoercionError


class TestDenseCreation:

    def test_from_seq(self, small_values):
        row = DenseMLRow.from_seq(small_values)
        assert row.length == 5
        assert len(row) == 5
        assert not row.is_sparse

    def test_of(self):
        row = DenseMLRow.of(MLInt(1), MLInt(2))
        assert list(row) == [MLInt(1), MLInt(2)]

    def test_from_generator(self):
        row = DenseMLRow.from_seq(MLInt(i) for i in range(3))
        assert list(row) == [MLInt(0), MLInt(1), MLInt(2)]

    def test_copy_on_construct(self, small_values):
        row = DenseMLRow.from_seq(small_values)
        small_values[2] = MLInt(100)
        small_values.append(MLInt(1))
        assert row[2] == MLInt(5)
        assert len(row) == 5

    def test_empty(self):
        row = DenseMLRow.from_seq([])
        assert len(row) == 0
        assert list(row) == []
        assert list(row.non_zeros()) == []
        assert row.density == 0.0


class TestDenseAccess:

    def test_apply_returns_stored_value(self, small_values):
        row = DenseMLRow.from_seq(small_values)
        for i, value in enumerate(small_values):
            assert row.apply(i) is value

    @pytest.mark.parametrize("index", [5, -1, 100])
    def test_out_of_range(self, small_dense, index):
        with pytest.raises(RowIndexError):
            small_dense.apply(index)
        with pytest.raises(IndexError):
            small_dense[index]

    def test_non_integer_index(self, small_dense):
        with pytest.raises(TypeError):
            small_dense["0"]

    def test_numpy_integer_index(self, small_dense):
        assert small_dense[np.int64(2)] == MLInt(5)

    def test_slice(self, small_dense):
        sub = small_dense[1:4]
        assert isinstance(sub, DenseMLRow)
        assert list(sub) == [MLInt(0), MLInt(5), MLInt(0)]

    def test_reverse_slice(self, small_dense):
        assert list(small_dense[::-1]) == [MLInt(7), MLInt(0), MLInt(5), MLInt(0), MLInt(0)]


class TestDenseNonZeros:

    def test_non_zeros(self, small_dense):
        assert list(small_dense.non_zeros()) == [(2, MLInt(5)), (4, MLInt(7))]
        assert small_dense.nnz == 2
        assert small_dense.density == pytest.approx(0.4)

    def test_negative_values_are_non_zero(self):
        row = DenseMLRow.of(MLDouble(-1.0), MLDouble(0.0))
        assert list(row.non_zeros()) == [(0, MLDouble(-1.0))]

    def test_string_values(self):
        row = DenseMLRow.of(MLString("0"), MLString("2"))
        assert list(row.non_zeros()) == [(1, MLString("2"))]

    def test_coercion_failure_propagates(self):
        row = DenseMLRow.of(MLInt(1), MLString("abc"))
        # Access works, coercion does not
        assert row[1] == MLString("abc")
        with pytest.raises(ValueCoercionError):
            list(row.non_zeros())
        with pytest.raises(ValueCoercionError):
            row.to_vector()


class TestDenseConversion:

    def test_to_vector(self, small_dense):
        assert small_dense.to_vector().tolist() == [0.0, 0.0, 5.0, 0.0, 7.0]

    def test_to_double_array(self, small_dense):
        arr = small_dense.to_double_array()
        assert arr.dtype == np.float64
        np.testing.assert_array_equal(arr, [0.0, 0.0, 5.0, 0.0, 7.0])

    def test_to_numpy(self, small_dense):
        np.testing.assert_array_equal(small_dense.to_numpy(), [0.0, 0.0, 5.0, 0.0, 7.0])

    def test_repr(self, small_dense):
        assert repr(small_dense) == "DenseMLRow(length=5)"

"""
Pytest configuration and shared fixtures for mlrow tests.
"""

import pytest
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import mlrow
from mlrow import DenseMLRow, SparseMLRow, MLDouble, MLInt, ZERO


# Try to import scipy
try:
    import scipy.sparse as sp
    HAS_SCIPY = True
except ImportError:
    HAS_SCIPY = False


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def requires_scipy():
    """Skip test if scipy is not available."""
    if not HAS_SCIPY:
        pytest.skip("scipy not available")


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts and ends with default thresholds."""
    mlrow.reset_thresholds()
    yield
    mlrow.reset_thresholds()


@pytest.fixture
def small_values():
    """Dense input [0, 0, 5, 0, 7] as MLInt values."""
    return [MLInt(0), MLInt(0), MLInt(5), MLInt(0), MLInt(7)]


@pytest.fixture
def small_dense(small_values):
    return DenseMLRow.from_seq(small_values)


@pytest.fixture
def small_sparse(small_values):
    return SparseMLRow.from_numeric_seq(small_values)


@pytest.fixture
def double_values():
    """Mixed zero/non-zero MLDouble values; zeros compare equal to ZERO."""
    return [MLDouble(x) for x in [0.0, 1.5, 0.0, 0.0, -2.0, 0.0, 3.0, 0.0]]


@pytest.fixture(params=["dense", "sparse"])
def any_row(request, double_values):
    """The same logical row in each representation."""
    if request.param == "dense":
        return DenseMLRow.from_seq(double_values)
    return SparseMLRow.from_numeric_seq(double_values)


@pytest.fixture
def long_sparse_values():
    """1000 values, 3 non-zero: selected as sparse by default."""
    values = [ZERO] * 1000
    values[10] = MLDouble(1.0)
    values[500] = MLDouble(2.0)
    values[999] = MLDouble(3.0)
    return values


# =============================================================================
# Helper Functions
# =============================================================================

def numbers_of(row):
    """Numeric coercions of every element, in order."""
    return [v.to_number() for v in row]


def values_with_nnz(length, nnz):
    """MLDouble values of given length with the first ``nnz`` set to 1."""
    return [MLDouble(1.0)] * nnz + [MLDouble(0.0)] * (length - nnz)


class CountingValue(mlrow.MLValue):
    """Value that records how often it was coerced."""

    calls = 0

    def __init__(self, number):
        self.number = number

    def to_number(self) -> float:
        CountingValue.calls += 1
        return float(self.number)

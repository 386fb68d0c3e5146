"""
Shared fixtures for all tests.
"""
import pandas as pd
import pytest

from kd_balancer.data.dataset import WeightedDataset


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def two_class_frame():
    """Two instances of class 'yes' with weight 1, one of class 'no' with weight 2."""
    return pd.DataFrame({
        'color': ['red', 'blue', 'red'],
        'size': [1, 2, 3],
        'label': ['yes', 'yes', 'no'],
        'w': [1.0, 1.0, 2.0]
    })


@pytest.fixture
def two_class_dataset(two_class_frame):
    return WeightedDataset.from_frame(two_class_frame, class_col='label', weight_col='w')


@pytest.fixture
def imbalanced_dataset():
    """30 instances, classes a/b/c with counts 20/7/3 and varying weights."""
    labels = ['a'] * 20 + ['b'] * 7 + ['c'] * 3
    df = pd.DataFrame({
        'feature': [f"v{i % 4}" for i in range(30)],
        'label': labels,
        'weight': [0.5 + (i % 5) * 0.25 for i in range(30)]
    })
    return WeightedDataset.from_frame(df, class_col='label', weight_col='weight')


@pytest.fixture
def rule_frame():
    """Discretized data where 'a' determines 'label' exactly."""
    return pd.DataFrame({
        'a': ['x'] * 5 + ['y'] * 5,
        'b': ['p', 'q'] * 5,
        'label': ['yes'] * 5 + ['no'] * 5
    })


@pytest.fixture
def skewed_rule_dataset():
    """(a=x, yes) x3, (a=x, no) x1, (a=y, no) x1, unit weights."""
    df = pd.DataFrame({
        'a': ['x', 'x', 'x', 'x', 'y'],
        'label': ['yes', 'yes', 'yes', 'no', 'no']
    })
    return WeightedDataset.from_frame(df, class_col='label')

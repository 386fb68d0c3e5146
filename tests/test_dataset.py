"""
Unit tests for the weighted dataset model.
"""
import numpy as np
import pandas as pd
import pytest

from kd_balancer.data.dataset import InvalidSchemaError, WeightedDataset


@pytest.mark.unit
class TestFromFrame:
    """Tests for WeightedDataset.from_frame."""

    def test_default_weights_are_one(self):
        df = pd.DataFrame({'x': [1, 2, 3], 'label': ['a', 'b', 'a']})
        dataset = WeightedDataset.from_frame(df, class_col='label')

        assert dataset.weight_col == 'weight'
        assert dataset.weights.tolist() == [1.0, 1.0, 1.0]
        assert 'weight' not in df.columns

    def test_existing_weight_column_used(self):
        df = pd.DataFrame({'label': ['a', 'b'], 'weight': [2, 3]})
        dataset = WeightedDataset.from_frame(df, class_col='label')

        assert dataset.weights.tolist() == [2.0, 3.0]

    def test_class_values_sorted_by_default(self):
        df = pd.DataFrame({'label': ['b', 'c', 'a', 'b']})
        dataset = WeightedDataset.from_frame(df, class_col='label')

        assert dataset.class_values == ['a', 'b', 'c']
        assert dataset.class_codes.tolist() == [1, 2, 0, 1]

    def test_integer_labels_sorted_numerically(self):
        df = pd.DataFrame({'label': [10, 2, 1]})
        dataset = WeightedDataset.from_frame(df, class_col='label')

        assert dataset.class_values == [1, 2, 10]

    def test_declared_class_values_include_absent_classes(self):
        df = pd.DataFrame({'label': ['a', 'b']})
        dataset = WeightedDataset.from_frame(df, class_col='label', class_values=['a', 'b', 'c'])

        assert dataset.num_classes == 3
        assert dataset.sum_of_weights_per_class().tolist() == [1.0, 1.0, 0.0]

    def test_existing_categorical_keeps_categories(self):
        df = pd.DataFrame({'label': pd.Categorical(['lo', 'hi'], categories=['lo', 'mid', 'hi'])})
        dataset = WeightedDataset.from_frame(df, class_col='label')

        assert dataset.class_values == ['lo', 'mid', 'hi']

    def test_value_outside_declared_enumeration(self):
        df = pd.DataFrame({'label': ['a', 'z']})

        with pytest.raises(InvalidSchemaError, match="z"):
            WeightedDataset.from_frame(df, class_col='label', class_values=['a', 'b'])

    def test_missing_class_column(self):
        df = pd.DataFrame({'x': [1]})

        with pytest.raises(InvalidSchemaError):
            WeightedDataset.from_frame(df, class_col='label')

    def test_numeric_class_column_is_not_nominal(self):
        df = pd.DataFrame({'label': [0.5, 1.5]})

        with pytest.raises(InvalidSchemaError):
            WeightedDataset.from_frame(df, class_col='label')

    def test_integer_labels_with_gap_need_class_values(self):
        df = pd.DataFrame({'label': [0, None, 1]})

        with pytest.raises(InvalidSchemaError, match="class_values"):
            WeightedDataset.from_frame(df, class_col='label')

        dataset = WeightedDataset.from_frame(df, class_col='label', class_values=[0, 1])
        assert dataset.class_codes.tolist() == [0, -1, 1]

    def test_empty_enumeration(self):
        df = pd.DataFrame({'label': ['a']})

        with pytest.raises(InvalidSchemaError):
            WeightedDataset.from_frame(df, class_col='label', class_values=[])

    def test_missing_class_value_has_negative_code(self):
        df = pd.DataFrame({'label': ['a', None, 'b']})
        dataset = WeightedDataset.from_frame(df, class_col='label')

        assert dataset.class_codes.tolist() == [0, -1, 1]
        assert dataset.instance(1).class_is_missing

    def test_negative_weight_rejected(self):
        df = pd.DataFrame({'label': ['a'], 'w': [-1.0]})

        with pytest.raises(ValueError, match="non-negative"):
            WeightedDataset.from_frame(df, class_col='label', weight_col='w')

    def test_nan_weight_rejected(self):
        df = pd.DataFrame({'label': ['a'], 'w': [np.nan]})

        with pytest.raises(ValueError, match="finite"):
            WeightedDataset.from_frame(df, class_col='label', weight_col='w')


@pytest.mark.unit
class TestWeightedDataset:
    """Tests for dataset accessors."""

    def test_constructor_requires_categorical_class(self):
        df = pd.DataFrame({'label': ['a'], 'weight': [1.0]})

        with pytest.raises(InvalidSchemaError):
            WeightedDataset(df, class_col='label')

    def test_instances(self, two_class_dataset):
        inst = two_class_dataset.instance(2)

        assert inst.values == {'color': 'red', 'size': 3}
        assert inst.weight == 2.0
        assert inst.class_value == 'no'
        assert inst.class_index == 0
        assert len(list(two_class_dataset.iter_instances())) == 3

    def test_feature_cols_exclude_class_and_weight(self, two_class_dataset):
        assert two_class_dataset.feature_cols == ['color', 'size']

    def test_with_weights_returns_independent_copy(self, two_class_dataset):
        updated = two_class_dataset.with_weights([3.0, 3.0, 3.0])

        assert updated.weights.tolist() == [3.0, 3.0, 3.0]
        assert two_class_dataset.weights.tolist() == [1.0, 1.0, 2.0]

    def test_with_weights_length_mismatch(self, two_class_dataset):
        with pytest.raises(ValueError):
            two_class_dataset.with_weights([1.0])

    def test_total_weight(self, two_class_dataset):
        assert two_class_dataset.total_weight == 4.0
        assert len(two_class_dataset) == 3

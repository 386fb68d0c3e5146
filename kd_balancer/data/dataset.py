"""
Weighted tabular dataset backed by a pandas DataFrame.

The class column is held as a pandas Categorical: its categories, in order,
form the class enumeration. Classes may be declared without appearing in the
data. Every instance carries a non-negative weight stored in a float column.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence

import numpy as np
import pandas as pd


class InvalidSchemaError(ValueError):
    """Raised when the dataset has no usable nominal class attribute."""


@dataclass(frozen=True)
class Instance:
    values: Dict[str, Any]
    weight: float
    class_value: Any
    class_index: int

    @property
    def class_is_missing(self) -> bool:
        return self.class_index < 0


class WeightedDataset:
    """
    Labeled dataset with per-instance weights.

    Use ``from_frame`` to build one from an arbitrary DataFrame; the
    constructor expects the class column to already be categorical.
    """

    DEFAULT_WEIGHT_COL = 'weight'

    def __init__(self, data: pd.DataFrame, class_col: str, weight_col: str = DEFAULT_WEIGHT_COL):
        if class_col not in data.columns:
            raise InvalidSchemaError(f"Class column '{class_col}' not found in data")
        if not isinstance(data[class_col].dtype, pd.CategoricalDtype):
            raise InvalidSchemaError(f"Class column '{class_col}' is not nominal (categorical)")
        if len(data[class_col].cat.categories) < 1:
            raise InvalidSchemaError(f"Class column '{class_col}' declares no class values")
        if weight_col not in data.columns:
            raise ValueError(f"Weight column '{weight_col}' not found in data")
        if weight_col == class_col:
            raise InvalidSchemaError("Class column and weight column must differ")

        weights = data[weight_col].to_numpy(dtype=float)
        if not np.all(np.isfinite(weights)):
            raise ValueError("Weights must be finite")
        if np.any(weights < 0):
            raise ValueError("Weights must be non-negative")

        self.data = data
        self.class_col = class_col
        self.weight_col = weight_col

    @classmethod
    def from_frame(
            cls,
            df: pd.DataFrame,
            class_col: str,
            weight_col: Optional[str] = None,
            class_values: Sequence[Any] = None
    ) -> 'WeightedDataset':
        """
        Build a dataset from a DataFrame without modifying it.

        Args:
            df: Input data
            class_col: Column holding the class label
            weight_col: Column holding instance weights (default 'weight');
                        if it is absent, a column of ones is added
            class_values: Declared class enumeration (in order). Defaults to
                          the categories of a categorical column, or the sorted
                          distinct non-missing values otherwise. Required
                          for integer labels read from a file with gaps, which
                          pandas loads as float; missing labels then keep
                          code -1.

        Returns:
            WeightedDataset over a copy of df
        """
        if class_col not in df.columns:
            raise InvalidSchemaError(f"Class column '{class_col}' not found in data")

        data = df.copy()
        labels = data[class_col]

        if class_values is not None:
            data[class_col] = pd.Categorical(labels, categories=list(class_values), ordered=True)
            unknown = labels.notna() & data[class_col].isna()
            if unknown.any():
                bad = sorted({str(v) for v in labels[unknown]})
                raise InvalidSchemaError(f"Class values not in declared enumeration: {bad}")
        elif not isinstance(labels.dtype, pd.CategoricalDtype):
            if pd.api.types.is_float_dtype(labels):
                raise InvalidSchemaError(
                    f"Class column '{class_col}' is numeric; pass class_values to treat it as nominal"
                )
            categories = sorted(labels.dropna().unique().tolist(), key=lambda v: (type(v).__name__, v))
            data[class_col] = pd.Categorical(labels, categories=categories, ordered=True)

        weight_col = weight_col or cls.DEFAULT_WEIGHT_COL
        if weight_col not in data.columns:
            data[weight_col] = 1.0
        else:
            data[weight_col] = data[weight_col].astype(float)

        return cls(data.reset_index(drop=True), class_col, weight_col)

    @property
    def num_instances(self) -> int:
        return len(self.data)

    @property
    def num_classes(self) -> int:
        return len(self.data[self.class_col].cat.categories)

    @property
    def class_values(self) -> List[Any]:
        return list(self.data[self.class_col].cat.categories)

    @property
    def feature_cols(self) -> List[str]:
        return [c for c in self.data.columns if c not in (self.class_col, self.weight_col)]

    @property
    def weights(self) -> pd.Series:
        return self.data[self.weight_col]

    @property
    def class_codes(self) -> np.ndarray:
        """Class index per instance, -1 where the class is missing."""
        return self.data[self.class_col].cat.codes.to_numpy(dtype=np.int64)

    @property
    def total_weight(self) -> float:
        return float(self.weights.sum())

    def sum_of_weights_per_class(self) -> np.ndarray:
        codes = self.class_codes
        present = codes >= 0
        return np.bincount(
            codes[present],
            weights=self.weights.to_numpy(dtype=float)[present],
            minlength=self.num_classes
        )

    def instance(self, i: int) -> Instance:
        row = self.data.iloc[i]
        code = int(self.class_codes[i])
        return Instance(
            values={c: row[c] for c in self.feature_cols},
            weight=float(row[self.weight_col]),
            class_value=self.class_values[code] if code >= 0 else None,
            class_index=code
        )

    def iter_instances(self) -> Iterator[Instance]:
        for i in range(self.num_instances):
            yield self.instance(i)

    def copy(self) -> 'WeightedDataset':
        return WeightedDataset(self.data.copy(), self.class_col, self.weight_col)

    def with_weights(self, weights) -> 'WeightedDataset':
        """Return a copy of this dataset with the weight column replaced."""
        weights = np.asarray(weights, dtype=float)
        if weights.shape != (self.num_instances,):
            raise ValueError(
                f"Expected {self.num_instances} weights, got array of shape {weights.shape}"
            )
        data = self.data.copy()
        data[self.weight_col] = weights
        return WeightedDataset(data, self.class_col, self.weight_col)

    def __len__(self):
        return self.num_instances

    def __repr__(self):
        return (f"WeightedDataset(num_instances={self.num_instances}, class_col='{self.class_col}', "
                f"num_classes={self.num_classes}, weight_col='{self.weight_col}')")

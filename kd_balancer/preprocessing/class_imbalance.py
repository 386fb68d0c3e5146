import logging
from typing import Any, Dict, Iterable, List

import numpy as np

from kd_balancer.data.dataset import InvalidSchemaError, WeightedDataset

logger = logging.getLogger(__name__)


class DegenerateClassError(ValueError):
    """Raised when a declared class has zero total weight."""

    def __init__(self, class_values: List[Any]):
        self.class_values = class_values
        super().__init__(f"Classes with zero total weight cannot be rebalanced: {class_values}")


class MissingClassValueError(ValueError):
    """Raised when instances to be rebalanced have no class value."""

    def __init__(self, positions: List[int]):
        self.positions = positions
        super().__init__(f"{len(positions)} instance(s) with missing class value, first at position {positions[0]}")


class ClassBalancer:
    """
    Reweights instances so that each class has the same total weight.

    The total sum of weights across all instances is maintained. Only the
    first batch of data passed to a balancer is reweighted; later batches
    are returned unchanged, so one balancer can sit in front of a learner
    that resubmits its data over several rounds. Use a new balancer for
    every independent data stream.
    """

    def __init__(self):
        self._first_batch_done = False

    @property
    def first_batch_done(self) -> bool:
        return self._first_batch_done

    def rebalance(self, dataset: WeightedDataset) -> WeightedDataset:
        """
        Rebalance class weights of the first batch.

        Args:
            dataset: Labeled dataset with a nominal class column

        Returns:
            New dataset with rescaled weights, or an unchanged copy if the
            first batch has already been processed
        """
        if self._first_batch_done:
            logger.debug("First batch already done, passing %d instances through", dataset.num_instances)
            return dataset.copy()

        num_classes = dataset.num_classes
        if num_classes < 1:
            raise InvalidSchemaError("Class attribute declares no class values")

        codes = dataset.class_codes
        missing = np.flatnonzero(codes < 0)
        if len(missing) > 0:
            raise MissingClassValueError(missing.tolist())

        weights = dataset.weights.to_numpy(dtype=float)
        sum_of_weights_per_class = np.bincount(codes, weights=weights, minlength=num_classes)

        empty = [dataset.class_values[c] for c in np.flatnonzero(sum_of_weights_per_class == 0)]
        if empty:
            raise DegenerateClassError(empty)

        sum_of_weights = sum_of_weights_per_class.sum()
        factor = sum_of_weights / num_classes
        result = dataset.with_weights(factor * weights / sum_of_weights_per_class[codes])

        self._first_batch_done = True
        logger.info(
            "Rebalanced %d instances over %d classes (total weight %.6g, per-class weight %.6g)",
            dataset.num_instances, num_classes, sum_of_weights, factor
        )
        return result

    def process_batches(self, batches: Iterable[WeightedDataset]) -> List[WeightedDataset]:
        return [self.rebalance(batch) for batch in batches]

    def get_config(self) -> Dict[str, Any]:
        return {
            'method': 'reweight',
            'first_batch_done': self._first_batch_done
        }

    def __repr__(self):
        return f"ClassBalancer(first_batch_done={self._first_batch_done})"


def balance_classes(dataset: WeightedDataset) -> WeightedDataset:
    return ClassBalancer().rebalance(dataset)


def get_class_distribution(dataset: WeightedDataset, weighted: bool = False) -> Dict[Any, float]:
    """Instance count (or total weight) per declared class value."""
    if weighted:
        totals = dataset.sum_of_weights_per_class()
        return {value: float(total) for value, total in zip(dataset.class_values, totals)}

    counts = dataset.data[dataset.class_col].value_counts(sort=False)
    return {value: int(counts.get(value, 0)) for value in dataset.class_values}


def calculate_imbalance_ratio(dataset: WeightedDataset, weighted: bool = False) -> float:
    distribution = get_class_distribution(dataset, weighted=weighted)
    counts = list(distribution.values())
    return max(counts) / min(counts) if min(counts) > 0 else float('inf')

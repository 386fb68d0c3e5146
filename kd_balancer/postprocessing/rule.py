from typing import Any, Dict, List

import numpy as np

from kd_balancer.data.dataset import WeightedDataset


def filter_rules(rules, criterion: str, threshold: float):
    """
    Filters rules based on a criterion >= threshold.

    Args:
        rules: List of rule dictionaries
        criterion: The rule metric to filter on (e.g., 'support', 'confidence', 'weighted_confidence')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        List of rules meeting the criterion. Rules without the metric are dropped.
    """
    return [
        rule for rule in rules
        if rule.get(criterion) is not None and rule[criterion] >= threshold
    ]


def _item_key(item: Dict[str, Any]) -> str:
    if item.get('value') is None:
        return str(item['feature']).lower()
    return f"{item['feature']}__{item['value']}".lower()


def filter_rules_by_consequent(rules, targets: list):
    """
    Keep rules whose consequent matches any of the target patterns.

    A pattern matches if it is a case-insensitive substring of the
    consequent's 'feature__value' key, e.g. 'label' or 'label__yes'.
    """
    patterns = [t.lower() for t in targets]
    return [
        rule for rule in rules
        if any(p in _item_key(rule['consequent']) for p in patterns)
    ]


def _item_mask(dataset: WeightedDataset, item: Dict[str, Any]) -> np.ndarray:
    column = dataset.data[item['feature']]
    if item.get('value') is None:
        return column.notna().to_numpy()
    return (column.notna() & (column.astype(str) == str(item['value']))).to_numpy()


def add_weighted_metrics(rules: List[Dict[str, Any]], dataset: WeightedDataset) -> List[Dict[str, Any]]:
    """
    Recompute support and confidence from instance weights.

    Each rule is copied and given 'weighted_support' (weight of instances
    matching antecedents and consequent over the total weight) and
    'weighted_confidence' (the same weight over the weight of instances
    matching the antecedents, 0.0 if that is zero).
    """
    weights = dataset.weights.to_numpy(dtype=float)
    total = weights.sum()
    masks = {}

    def mask_for(item):
        key = _item_key(item)
        if key not in masks:
            masks[key] = _item_mask(dataset, item)
        return masks[key]

    result = []
    for rule in rules:
        ant_mask = np.ones(dataset.num_instances, dtype=bool)
        for item in rule['antecedents']:
            ant_mask &= mask_for(item)
        rule_mask = ant_mask & mask_for(rule['consequent'])

        ant_weight = weights[ant_mask].sum()
        rule_weight = weights[rule_mask].sum()

        weighted = dict(rule)
        weighted['weighted_support'] = float(rule_weight / total) if total > 0 else 0.0
        weighted['weighted_confidence'] = float(rule_weight / ant_weight) if ant_weight > 0 else 0.0
        result.append(weighted)

    return result


def summarize_rules(rules: List[Dict[str, Any]]) -> Dict[str, Any]:
    count = len(rules)
    if count == 0:
        return {
            'num_rules': 0,
            'average_support': 0.0,
            'average_confidence': 0.0,
            'average_zhangs_metric': 0.0
        }

    return {
        'num_rules': count,
        'average_support': round(sum(r['support'] for r in rules) / count, 3),
        'average_confidence': round(sum(r['confidence'] for r in rules) / count, 3),
        'average_zhangs_metric': round(sum(r.get('zhangs_metric', 0.0) for r in rules) / count, 3)
    }

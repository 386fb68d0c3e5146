import logging
from pathlib import Path
from typing import Dict, List, Any, Union

import pandas as pd

from kd_balancer.data.dataset import WeightedDataset

logger = logging.getLogger(__name__)


def _xlsx_path(output_path: Union[str, Path]) -> Path:
    output_path = Path(output_path)
    if output_path.suffix != '.xlsx':
        output_path = output_path.with_name(output_path.name + '.xlsx')
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def _key_value_frame(data: Dict[str, Any], key: str, value: str) -> pd.DataFrame:
    return pd.DataFrame({
        key: list(data.keys()),
        value: [str(v) for v in data.values()]
    })


def class_weight_summary(original: WeightedDataset, balanced: WeightedDataset) -> pd.DataFrame:
    """Per-class instance count and total weight before and after balancing."""
    counts = original.data[original.class_col].value_counts(sort=False)
    return pd.DataFrame({
        'class': [str(v) for v in original.class_values],
        'count': [int(counts.get(v, 0)) for v in original.class_values],
        'original_weight': original.sum_of_weights_per_class(),
        'balanced_weight': balanced.sum_of_weights_per_class()
    })


def save_balancing_results(
    original: WeightedDataset,
    balanced: WeightedDataset,
    output_path: Union[str, Path],
    parameters: Dict[str, Any] = None,
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Save class balancing results to Excel with multiple sheets.

    Sheets:
        - Data: Balanced instances with their new weights
        - Class Weights: Count, original and balanced total weight per class
        - Parameters: Balancer parameters and metadata

    Args:
        original: Dataset before balancing
        balanced: Dataset after balancing
        output_path: Output file path (will add .xlsx if needed)
        parameters: Balancer parameters used
        metadata: Additional metadata (dataset name, timestamp, etc.)
    """
    output_path = _xlsx_path(output_path)

    data = balanced.data.copy()
    data[balanced.class_col] = data[balanced.class_col].astype(object)

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        data.to_excel(writer, sheet_name='Data', index=False)
        class_weight_summary(original, balanced).to_excel(writer, sheet_name='Class Weights', index=False)

        params = dict(parameters or {})
        params.update(metadata or {})
        if params:
            _key_value_frame(params, 'Parameter', 'Value').to_excel(writer, sheet_name='Parameters', index=False)

    logger.info("Balancing results saved to: %s", output_path)
    return output_path


def save_rule_mining_results(
    rules: List[Dict[str, Any]],
    stats: Dict[str, Any],
    output_path: Union[str, Path],
    parameters: Dict[str, Any] = None,
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Save rule mining results to Excel with multiple sheets.

    Sheets:
        - Rules: All mined rules with metrics
        - Summary: Aggregate statistics
        - Parameters: Algorithm parameters used

    Args:
        rules: List of rule dictionaries
        stats: Statistics dictionary from mining
        output_path: Output file path (will add .xlsx if needed)
        parameters: Algorithm parameters used
        metadata: Additional metadata (dataset name, timestamp, etc.)
    """
    output_path = _xlsx_path(output_path)

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        if rules:
            rules_df = pd.DataFrame([format_rule_for_excel(r) for r in rules])
            rules_df.to_excel(writer, sheet_name='Rules', index=False)

        summary = dict(stats)
        summary.update(metadata or {})
        _key_value_frame(summary, 'Metric', 'Value').to_excel(writer, sheet_name='Summary', index=False)

        if parameters:
            _key_value_frame(parameters, 'Parameter', 'Value').to_excel(writer, sheet_name='Parameters', index=False)

    logger.info("Rule mining results saved to: %s", output_path)
    return output_path


def format_rule_for_excel(rule: Dict[str, Any]) -> Dict[str, Any]:
    """
    Format a rule with human-readable antecedents/consequent.

    Items become "feature1=value1 AND feature2=value2", parseable by
    splitting on " AND " then "=".
    """
    formatted = rule.copy()
    if 'antecedents' in formatted:
        formatted['antecedents'] = ' AND '.join(_format_item(i) for i in formatted['antecedents'])
    if 'consequent' in formatted:
        formatted['consequent'] = _format_item(formatted['consequent'])
    return formatted


def _format_item(item: Dict[str, Any]) -> str:
    if item.get('value') is None:
        return str(item['feature'])
    return f"{item['feature']}={item['value']}"

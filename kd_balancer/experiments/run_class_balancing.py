"""
Class Balancing Experiment

Reweights a labeled dataset so every class carries the same total weight,
then mines class rules on the balanced data and compares plain and
weighted rule metrics.

Usage:
    python -m kd_balancer.experiments.run_class_balancing [config.json]
"""
import logging
import sys

from kd_balancer.experiments.config import (
    DataConfig, BalancingConfig, MLxtendConfig, FilterConfig,
    RuleMiningConfig, ExperimentConfig, load_experiment_config
)
from kd_balancer.experiments.base import run_balancing_experiment
from kd_balancer.preprocessing.class_imbalance import get_class_distribution
from kd_balancer.utils.logging_setup import setup_logging

# =============================================================================
# CONFIGURATION
# =============================================================================

DATA_PATH = "../../data/raw/labeled_discretized.csv"
OUTPUT_DIR = "../../out/class_balancing"
CLASS_COL = "label"

MLXTEND_CONFIG = MLxtendConfig(
    algorithm='fpgrowth',
    min_support=0.05,
    min_confidence=0.6,
    max_items=3
)

# Filter thresholds, applied after mining
MIN_WEIGHTED_CONFIDENCE = 0.7


def default_config() -> ExperimentConfig:
    return ExperimentConfig(
        name='class_balancing',
        data=DataConfig(path=DATA_PATH, name='labeled', class_col=CLASS_COL),
        balancing=BalancingConfig(enabled=True),
        rule_mining=RuleMiningConfig(
            miner_type='mlxtend',
            miner_config=MLXTEND_CONFIG,
            target_col=CLASS_COL,
            filters=[FilterConfig(metric='weighted_confidence', threshold=MIN_WEIGHTED_CONFIDENCE)]
        ),
        output_dir=OUTPUT_DIR
    )


# =============================================================================
# EXPERIMENT
# =============================================================================

def run_experiment(config: ExperimentConfig):
    print("=" * 70)
    print("CLASS BALANCING EXPERIMENT")
    print("=" * 70)

    result = run_balancing_experiment(config)
    dataset, balanced = result['dataset'], result['balanced']

    print(f"\n[1] Data: {dataset.num_instances} instances, {dataset.num_classes} classes")
    print(f"  Total weight: {dataset.total_weight:.4f} -> {balanced.total_weight:.4f}")

    print("\n[2] Class weights")
    before = get_class_distribution(dataset, weighted=True)
    for label, weight in result['distribution'].items():
        print(f"  {label}: {before[label]:.4f} -> {weight:.4f}")

    if result['rules'] is not None:
        print(f"\n[3] Rules: {len(result['rules'])}")
        for rule in result['rules'][:10]:
            ant = ' AND '.join(f"{i['feature']}={i['value']}" for i in rule['antecedents'])
            cons = f"{rule['consequent']['feature']}={rule['consequent']['value']}"
            print(f"  {ant} -> {cons}  conf={rule['confidence']:.3f}  "
                  f"weighted_conf={rule['weighted_confidence']:.3f}")

    print(f"\n{'=' * 70}")
    print("EXPERIMENT COMPLETE")
    print("=" * 70)
    for path in result['outputs']:
        print(f"Output: {path}")

    return result


if __name__ == '__main__':
    setup_logging(logging.INFO)
    if len(sys.argv) > 1:
        run_experiment(load_experiment_config(sys.argv[1]))
    else:
        run_experiment(default_config())

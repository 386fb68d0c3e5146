from .config import (
    DataConfig,
    BalancingConfig,
    MLxtendConfig,
    FilterConfig,
    RuleMiningConfig,
    ExperimentConfig,
    load_experiment_config,
    save_experiment_config
)
from .base import (
    load_data,
    load_dataset,
    create_miner,
    apply_filters,
    run_rule_mining,
    run_balancing_experiment
)

__all__ = [
    'DataConfig',
    'BalancingConfig',
    'MLxtendConfig',
    'FilterConfig',
    'RuleMiningConfig',
    'ExperimentConfig',
    'load_experiment_config',
    'save_experiment_config',
    'load_data',
    'load_dataset',
    'create_miner',
    'apply_filters',
    'run_rule_mining',
    'run_balancing_experiment'
]

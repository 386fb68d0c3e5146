import logging
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Any, Tuple, Union

import pandas as pd

from kd_balancer.data.dataset import WeightedDataset
from kd_balancer.postprocessing.rule import filter_rules
from kd_balancer.preprocessing.class_imbalance import (
    ClassBalancer, get_class_distribution, calculate_imbalance_ratio
)
from kd_balancer.rule_mining.base import AssociationRuleMiner
from kd_balancer.rule_mining.mlxtend_miner import MLxtendMiner
from kd_balancer.utils.excel_io import save_balancing_results, save_rule_mining_results

from .config import DataConfig, RuleMiningConfig, FilterConfig, ExperimentConfig

logger = logging.getLogger(__name__)


def load_data(path: Union[str, Path], sep: str = ',') -> pd.DataFrame:
    path = Path(path)
    if path.suffix == '.csv':
        return pd.read_csv(path, sep=sep)
    elif path.suffix in ['.xlsx', '.xls']:
        return pd.read_excel(path)
    elif path.suffix == '.parquet':
        return pd.read_parquet(path)
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")


def load_dataset(config: DataConfig) -> WeightedDataset:
    df = load_data(config.path, sep=config.sep)
    dataset = WeightedDataset.from_frame(
        df,
        class_col=config.class_col,
        weight_col=config.weight_col,
        class_values=config.class_values
    )
    logger.info("Loaded %s: %d instances, %d classes", config.name, dataset.num_instances, dataset.num_classes)
    return dataset


def create_miner(config: RuleMiningConfig) -> AssociationRuleMiner:
    miner_type = config.miner_type.lower()

    if miner_type == 'mlxtend':
        cfg = config.miner_config
        return MLxtendMiner(
            algorithm=cfg.algorithm,
            min_support=cfg.min_support,
            min_confidence=cfg.min_confidence,
            max_items=cfg.max_items,
            target_col=config.target_col
        )

    raise ValueError(f"Unknown miner type: {miner_type}")


def apply_filters(rules: List[Dict], filters: List[FilterConfig]) -> List[Dict]:
    result = rules
    for f in filters:
        result = filter_rules(result, criterion=f.metric, threshold=f.threshold)
    return result


def run_rule_mining(
    data: Union[pd.DataFrame, WeightedDataset],
    config: RuleMiningConfig
) -> Tuple[List[Dict], Dict[str, Any]]:
    miner = create_miner(config)
    rules, stats = miner.mine_rules(data)
    rules = apply_filters(rules, config.filters)
    stats['count'] = len(rules)
    return rules, stats


def generate_output_filename(experiment_name: str, step: str, dataset_name: str) -> str:
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return f"{timestamp}_{experiment_name}_{step}_{dataset_name}"


def run_balancing_experiment(
    config: ExperimentConfig,
    dataset: WeightedDataset = None
) -> Dict[str, Any]:
    """
    Load data, rebalance class weights, optionally mine rules, save results.

    Args:
        config: Experiment configuration
        dataset: Already loaded dataset; loaded from config.data if None

    Returns:
        Dict with 'dataset', 'balanced', 'distribution', 'rules',
        'rule_stats' and 'outputs' (paths of written files)
    """
    if dataset is None:
        dataset = load_dataset(config.data)

    output_path = config.get_output_path()
    outputs = []

    if config.balancing.enabled:
        balancer = ClassBalancer()
        balanced = balancer.rebalance(dataset)
        outputs.append(save_balancing_results(
            dataset,
            balanced,
            output_path / generate_output_filename(config.name, 'balancing', config.data.name),
            parameters=balancer.get_config(),
            metadata={
                'dataset': config.data.name,
                'num_instances': dataset.num_instances,
                'imbalance_ratio_before': calculate_imbalance_ratio(dataset, weighted=True),
                'imbalance_ratio_after': calculate_imbalance_ratio(balanced, weighted=True)
            }
        ))
    else:
        balanced = dataset.copy()

    rules, rule_stats = None, None
    if config.rule_mining is not None:
        rules, rule_stats = run_rule_mining(balanced, config.rule_mining)
        outputs.append(save_rule_mining_results(
            rules,
            rule_stats,
            output_path / generate_output_filename(config.name, 'rules', config.data.name),
            parameters=config.rule_mining.to_dict(),
            metadata={'dataset': config.data.name}
        ))

    return {
        'dataset': dataset,
        'balanced': balanced,
        'distribution': get_class_distribution(balanced, weighted=True),
        'rules': rules,
        'rule_stats': rule_stats,
        'outputs': outputs
    }

import json
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from pathlib import Path


@dataclass
class DataConfig:
    path: str
    name: str
    class_col: str
    weight_col: Optional[str] = None
    class_values: Optional[List[Any]] = None
    sep: str = ','

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'name': self.name,
            'class_col': self.class_col,
            'weight_col': self.weight_col,
            'class_values': self.class_values,
            'sep': self.sep
        }


@dataclass
class BalancingConfig:
    # Only the first batch of a stream is reweighted
    enabled: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {'enabled': self.enabled}


@dataclass
class MLxtendConfig:
    algorithm: str = 'fpgrowth'
    min_support: float = 0.1
    min_confidence: float = 0.5
    max_items: int = 3

    def to_dict(self) -> Dict[str, Any]:
        return {
            'algorithm': self.algorithm,
            'min_support': self.min_support,
            'min_confidence': self.min_confidence,
            'max_items': self.max_items
        }


@dataclass
class FilterConfig:
    metric: str
    threshold: float

    def to_dict(self) -> Dict[str, Any]:
        return {'metric': self.metric, 'threshold': self.threshold}


@dataclass
class RuleMiningConfig:
    miner_type: str = 'mlxtend'
    miner_config: MLxtendConfig = field(default_factory=MLxtendConfig)
    target_col: Optional[str] = None  # restrict consequents to this column
    filters: List[FilterConfig] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'miner_type': self.miner_type,
            'miner_config': self.miner_config.to_dict(),
            'target_col': self.target_col,
            'filters': [f.to_dict() for f in self.filters]
        }


@dataclass
class ExperimentConfig:
    name: str
    data: DataConfig
    balancing: BalancingConfig = field(default_factory=BalancingConfig)
    rule_mining: Optional[RuleMiningConfig] = None
    output_dir: str = "./out"

    def get_output_path(self) -> Path:
        path = Path(self.output_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'data': self.data.to_dict(),
            'balancing': self.balancing.to_dict(),
            'rule_mining': self.rule_mining.to_dict() if self.rule_mining else None,
            'output_dir': self.output_dir
        }

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'ExperimentConfig':
        rule_mining = None
        if config.get('rule_mining'):
            rm = dict(config['rule_mining'])
            rule_mining = RuleMiningConfig(
                miner_type=rm.get('miner_type', 'mlxtend'),
                miner_config=MLxtendConfig(**rm.get('miner_config', {})),
                target_col=rm.get('target_col'),
                filters=[FilterConfig(**f) for f in rm.get('filters', [])]
            )

        return cls(
            name=config['name'],
            data=DataConfig(**config['data']),
            balancing=BalancingConfig(**config.get('balancing', {})),
            rule_mining=rule_mining,
            output_dir=config.get('output_dir', './out')
        )


def load_experiment_config(path: str) -> ExperimentConfig:
    with open(path, 'r') as f:
        return ExperimentConfig.from_dict(json.load(f))


def save_experiment_config(config: ExperimentConfig, path: str):
    with open(path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

"""
Tests for experiment configuration and the balancing experiment runner.
"""
import importlib
import logging

import pytest

from kd_balancer.experiments.base import (
    create_miner,
    load_data,
    load_dataset,
    run_balancing_experiment,
    run_rule_mining
)
from kd_balancer.experiments.config import (
    BalancingConfig,
    DataConfig,
    ExperimentConfig,
    FilterConfig,
    MLxtendConfig,
    RuleMiningConfig,
    load_experiment_config,
    save_experiment_config
)
from kd_balancer.rule_mining.mlxtend_miner import MLxtendMiner


@pytest.fixture
def csv_path(tmp_path, rule_frame):
    df = rule_frame.iloc[:7].copy()  # 5 yes, 2 no
    path = tmp_path / 'data.csv'
    df.to_csv(path, index=False)
    return path


@pytest.fixture
def experiment_config(tmp_path, csv_path):
    return ExperimentConfig(
        name='test',
        data=DataConfig(path=str(csv_path), name='toy', class_col='label'),
        rule_mining=RuleMiningConfig(
            miner_config=MLxtendConfig(min_support=0.2, min_confidence=0.6, max_items=2),
            target_col='label',
            filters=[FilterConfig(metric='weighted_confidence', threshold=0.9)]
        ),
        output_dir=str(tmp_path / 'out')
    )


@pytest.mark.unit
class TestConfig:

    def test_dict_round_trip(self, experiment_config):
        restored = ExperimentConfig.from_dict(experiment_config.to_dict())

        assert restored == experiment_config

    def test_json_file(self, tmp_path, experiment_config):
        path = tmp_path / 'config.json'
        save_experiment_config(experiment_config, str(path))

        assert load_experiment_config(str(path)) == experiment_config

    def test_minimal_dict(self):
        config = ExperimentConfig.from_dict({
            'name': 'minimal',
            'data': {'path': 'data.csv', 'name': 'd', 'class_col': 'y'}
        })

        assert config.balancing == BalancingConfig(enabled=True)
        assert config.rule_mining is None
        assert config.output_dir == './out'


@pytest.mark.unit
class TestFactories:

    def test_create_miner(self):
        miner = create_miner(RuleMiningConfig(miner_config=MLxtendConfig(algorithm='apriori'), target_col='y'))

        assert isinstance(miner, MLxtendMiner)
        assert miner.algorithm == 'apriori'
        assert miner.target_col == 'y'

    def test_unknown_miner_type(self):
        with pytest.raises(ValueError, match="Unknown miner type"):
            create_miner(RuleMiningConfig(miner_type='aerial'))

    def test_unsupported_file_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported file format"):
            load_data(tmp_path / 'data.json')

    def test_run_rule_mining_applies_filters(self, rule_frame):
        config = RuleMiningConfig(
            miner_config=MLxtendConfig(min_support=0.3, min_confidence=0.5),
            filters=[FilterConfig(metric='confidence', threshold=1.0)]
        )

        rules, stats = run_rule_mining(rule_frame, config)

        assert rules
        assert all(r['confidence'] >= 1.0 for r in rules)
        assert stats['count'] == len(rules)


@pytest.mark.integration
class TestBalancingExperiment:

    def test_load_dataset(self, experiment_config):
        dataset = load_dataset(experiment_config.data)

        assert dataset.num_instances == 7
        assert dataset.class_values == ['no', 'yes']

    def test_run(self, experiment_config):
        result = run_balancing_experiment(experiment_config)

        assert result['distribution'] == pytest.approx({'no': 3.5, 'yes': 3.5})
        assert result['balanced'].total_weight == pytest.approx(7.0)
        assert result['rules']
        assert all(r['weighted_confidence'] >= 0.9 for r in result['rules'])
        assert len(result['outputs']) == 2
        assert all(p.exists() for p in result['outputs'])

    def test_run_without_balancing(self, experiment_config):
        experiment_config.balancing = BalancingConfig(enabled=False)
        experiment_config.rule_mining = None

        result = run_balancing_experiment(experiment_config)

        assert result['distribution'] == {'no': 2.0, 'yes': 5.0}
        assert result['rules'] is None
        assert result['outputs'] == []

    def test_script_import_leaves_logging_unconfigured(self):
        package_logger = logging.getLogger('kd_balancer')
        handlers = list(package_logger.handlers)

        importlib.reload(importlib.import_module('kd_balancer.experiments.run_class_balancing'))

        assert package_logger.handlers == handlers

    def test_script_run_experiment(self, experiment_config, capsys):
        from kd_balancer.experiments.run_class_balancing import run_experiment

        run_experiment(experiment_config)

        out = capsys.readouterr().out
        assert "CLASS BALANCING EXPERIMENT" in out
        assert "EXPERIMENT COMPLETE" in out

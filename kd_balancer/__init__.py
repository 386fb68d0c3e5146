"""
Class weight rebalancing and association rule mining for labeled tabular data.
"""
from .data import Instance, InvalidSchemaError, WeightedDataset
from .preprocessing import ClassBalancer, DegenerateClassError, MissingClassValueError, balance_classes
from .rule_mining import AssociationRulesProducer, AssociationRuleMiner, MLxtendMiner

__version__ = '0.1.0'

__all__ = [
    'Instance',
    'InvalidSchemaError',
    'WeightedDataset',
    'ClassBalancer',
    'DegenerateClassError',
    'MissingClassValueError',
    'balance_classes',
    'AssociationRulesProducer',
    'AssociationRuleMiner',
    'MLxtendMiner'
]

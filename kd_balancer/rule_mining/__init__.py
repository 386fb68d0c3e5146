"""
Rule Mining Module

Association rule mining behind the AssociationRulesProducer interface.
"""
from .base import AssociationRulesProducer, AssociationRuleMiner
from .mlxtend_miner import MLxtendMiner

__all__ = [
    'AssociationRulesProducer',
    'AssociationRuleMiner',
    'MLxtendMiner'
]

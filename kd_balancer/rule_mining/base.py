"""
Base interfaces for association rule mining.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple, Any, Optional, Union
import pandas as pd

from kd_balancer.data.dataset import WeightedDataset


class AssociationRulesProducer(ABC):
    """
    Something that can provide a list of association rules.
    """

    @abstractmethod
    def get_association_rules(self) -> Optional[List[Dict[str, Any]]]:
        """
        Gets the list of mined association rules.

        Returns:
            The rules discovered during mining, or None if mining
            hasn't been performed yet.
        """
        pass


class AssociationRuleMiner(AssociationRulesProducer):
    """
    Base class for association rule mining algorithms.

    These algorithms discover rules in the form: antecedent -> consequent
    with quality metrics (support, confidence, etc.). The rules of the
    most recent mine_rules() call are kept and exposed through
    get_association_rules().
    """

    def __init__(self, min_support: float = 0.01, min_confidence: float = 0.5, **kwargs):
        self.min_support = min_support
        self.min_confidence = min_confidence
        self.config = kwargs
        self._rules = None

    def mine_rules(
            self, data: Union[pd.DataFrame, WeightedDataset]
    ) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine association rules from data and remember them.

        Args:
            data: DataFrame with discretized features and labels, or a
                  WeightedDataset

        Returns:
            Tuple of (rules, stats) where:
                rules: List of dicts with keys:
                    - 'antecedents': list of {'feature', 'value'} dicts
                    - 'consequent': {'feature', 'value'} dict
                    - 'support': float
                    - 'confidence': float
                    - Other quality metrics
                stats: Dict with mining statistics
        """
        rules, stats = self._mine_rules(data)
        self._rules = rules
        return rules, stats

    @abstractmethod
    def _mine_rules(
            self, data: Union[pd.DataFrame, WeightedDataset]
    ) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        pass

    def get_association_rules(self) -> Optional[List[Dict[str, Any]]]:
        return self._rules

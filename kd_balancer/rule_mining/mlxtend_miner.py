"""
MLxtend-based association rule mining.

Supports FP-Growth and Apriori for the frequent itemset step.
Accepts plain discretized DataFrames or WeightedDatasets; for the latter,
rules also carry support and confidence computed from instance weights.
"""
import logging
import time
from typing import Dict, List, Tuple, Any, Optional, Union

import pandas as pd
from mlxtend.frequent_patterns import fpgrowth, apriori, association_rules
from mlxtend.preprocessing import TransactionEncoder

from kd_balancer.data.dataset import WeightedDataset
from kd_balancer.postprocessing.rule import add_weighted_metrics, summarize_rules
from kd_balancer.rule_mining.base import AssociationRuleMiner

logger = logging.getLogger(__name__)

ITEM_SEPARATOR = '__'


def _parse_item(item: str) -> Dict[str, Any]:
    if ITEM_SEPARATOR in item:
        feature, value = item.split(ITEM_SEPARATOR, 1)
        return {'feature': feature, 'value': value}
    return {'feature': item, 'value': None}


def _zhangs_metric(confidence: float, cons_support: float) -> float:
    if cons_support <= 0 or cons_support >= 1:
        return 0.0
    if confidence >= cons_support:
        return (confidence - cons_support) / (1 - cons_support)
    return (confidence - cons_support) / cons_support


class MLxtendMiner(AssociationRuleMiner):
    """
    MLxtend rule miner with multiple algorithm support.

    Supports algorithms:
    - 'fpgrowth': FP-Growth (default, fast)
    - 'apriori': Apriori (classic algorithm)
    """

    ALGORITHMS = {
        'fpgrowth': fpgrowth,
        'apriori': apriori
    }

    def __init__(
        self,
        algorithm: str = 'fpgrowth',
        min_support: float = 0.01,
        min_confidence: float = 0.5,
        max_items: int = None,
        metric: str = 'confidence',
        target_col: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize MLxtend miner.

        Args:
            algorithm: Mining algorithm ('fpgrowth', 'apriori')
            min_support: Minimum support threshold
            min_confidence: Minimum threshold for `metric`
            max_items: Maximum number of items in a frequent itemset
            metric: Metric for rule generation ('confidence', 'lift', etc.)
            target_col: If set, keep only rules whose consequent is this column
        """
        super().__init__(min_support, min_confidence, **kwargs)
        self.algorithm = algorithm.lower()
        self.max_items = max_items
        self.metric = metric
        self.target_col = target_col

        if self.algorithm not in self.ALGORITHMS:
            raise ValueError(f"Algorithm must be one of {list(self.ALGORITHMS)}, got '{self.algorithm}'")

    def _prepare_data(self, data: pd.DataFrame) -> pd.DataFrame:
        """One-hot encode rows as 'feature__value' transactions, skipping NaN."""
        transactions = []
        for _, row in data.iterrows():
            transactions.append([
                f"{col}{ITEM_SEPARATOR}{row[col]}" for col in data.columns if pd.notna(row[col])
            ])

        te = TransactionEncoder()
        te_array = te.fit(transactions).transform(transactions)
        return pd.DataFrame(te_array, columns=te.columns_)

    def _mine_rules(
            self, data: Union[pd.DataFrame, WeightedDataset]
    ) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        start_time = time.time()

        dataset = data if isinstance(data, WeightedDataset) else None
        frame = data.data.drop(columns=[data.weight_col]) if dataset is not None else data

        df_encoded = self._prepare_data(frame)
        frequent_itemsets_df = self.ALGORITHMS[self.algorithm](
            df_encoded,
            min_support=self.min_support,
            use_colnames=True,
            max_len=self.max_items
        )

        rules = []
        if len(frequent_itemsets_df) > 0:
            rules_df = association_rules(
                frequent_itemsets_df,
                num_itemsets=len(df_encoded),
                metric=self.metric,
                min_threshold=self.min_confidence
            )
            # Single-consequent rules only
            rules_df = rules_df[rules_df['consequents'].apply(len) == 1]

            itemset_supports = dict(zip(
                frequent_itemsets_df['itemsets'].apply(frozenset),
                frequent_itemsets_df['support']
            ))

            for _, row in rules_df.iterrows():
                consequent = _parse_item(next(iter(row['consequents'])))
                if self.target_col is not None and consequent['feature'] != self.target_col:
                    continue

                support = float(row['support'])
                confidence = float(row['confidence'])
                cons_support = itemset_supports.get(frozenset(row['consequents']), 0.0)

                rules.append({
                    'antecedents': [_parse_item(item) for item in sorted(row['antecedents'])],
                    'consequent': consequent,
                    'support': support,
                    'confidence': confidence,
                    'zhangs_metric': round(_zhangs_metric(confidence, cons_support), 4),
                    'interestingness': round(support * confidence, 4),
                    'lift': float(row['lift']) if 'lift' in row else None,
                    'leverage': float(row['leverage']) if 'leverage' in row else None,
                    'conviction': float(row['conviction']) if 'conviction' in row else None
                })

        if dataset is not None:
            rules = add_weighted_metrics(rules, dataset)

        stats = summarize_rules(rules)
        stats.update({
            'execution_time': time.time() - start_time,
            'algorithm': f'MLxtend_{self.algorithm}',
            'mode': 'rules'
        })
        logger.info("%s mined %d rules in %.2fs", stats['algorithm'], len(rules), stats['execution_time'])

        return rules, stats

    def __repr__(self):
        return (f"MLxtendMiner(algorithm='{self.algorithm}', min_support={self.min_support}, "
                f"min_confidence={self.min_confidence}, max_items={self.max_items})")

from .rule import filter_rules, filter_rules_by_consequent, add_weighted_metrics, summarize_rules

__all__ = [
    'filter_rules',
    'filter_rules_by_consequent',
    'add_weighted_metrics',
    'summarize_rules'
]

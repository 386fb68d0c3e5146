from .excel_io import (
    save_balancing_results,
    save_rule_mining_results,
    format_rule_for_excel,
    class_weight_summary
)
from .logging_setup import setup_logging

__all__ = [
    'save_balancing_results',
    'save_rule_mining_results',
    'format_rule_for_excel',
    'class_weight_summary',
    'setup_logging'
]

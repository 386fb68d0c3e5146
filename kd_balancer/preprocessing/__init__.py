from .class_imbalance import (
    ClassBalancer,
    DegenerateClassError,
    MissingClassValueError,
    balance_classes,
    get_class_distribution,
    calculate_imbalance_ratio
)

__all__ = [
    'ClassBalancer', 'DegenerateClassError', 'MissingClassValueError',
    'balance_classes', 'get_class_distribution', 'calculate_imbalance_ratio'
]

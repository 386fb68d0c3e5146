from .dataset import Instance, InvalidSchemaError, WeightedDataset

__all__ = [
    'Instance',
    'InvalidSchemaError',
    'WeightedDataset'
]

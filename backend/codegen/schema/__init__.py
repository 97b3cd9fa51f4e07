from .model import (
    DataType, DatabaseColumn, DatabaseSchema, DatabaseTable, DatabaseView,
    ForeignKey, PrimaryKey, find_data_type,
)
from .loader import SchemaLoadError, load_schema
from .sqlalchemy_loader import load_metadata

__all__ = [
    'DataType',
    'DatabaseColumn',
    'DatabaseSchema',
    'DatabaseTable',
    'DatabaseView',
    'ForeignKey',
    'PrimaryKey',
    'find_data_type',
    'SchemaLoadError',
    'load_schema',
    'load_metadata',
]

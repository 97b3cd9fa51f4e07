from .mapping_writer import CodeFirstMappingWriter
from .columns import ColumnMapper, type_shape_clause
from .primary_key import PrimaryKeyResolver
from .relationships import RelationshipMapper

__all__ = [
    'CodeFirstMappingWriter',
    'ColumnMapper',
    'PrimaryKeyResolver',
    'RelationshipMapper',
    'type_shape_clause',
]

from .codefirst import CodeFirstMappingWriter
from .mapping_manager import MappingManager, MappingResult, UnknownTableError
from .naming import MappingNamer, SchemaNamer, pluralize
from .schema import SchemaLoadError, load_metadata, load_schema
from .settings import CodeWriterSettings

__all__ = [
    'CodeFirstMappingWriter',
    'CodeWriterSettings',
    'MappingManager', 'MappingResult', 'UnknownTableError',
    'MappingNamer', 'SchemaNamer', 'pluralize',
    'SchemaLoadError', 'load_metadata', 'load_schema',
]

"""
Mapping Manager: runs the Code First mapping writer over a schema.

Each table gets its own writer (and so its own output buffer); with
max_workers > 1 the tables are written on a thread pool. Results always
come back in schema order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List

from .codefirst import CodeFirstMappingWriter
from .naming import MappingNamer
from .schema.model import DatabaseSchema, DatabaseTable
from .settings import CodeWriterSettings

logger = logging.getLogger(__name__)


class UnknownTableError(LookupError):
    """Raised when a requested table is not part of the schema."""
    pass


class MappingResult:
    """Generated mapping class for one table."""

    def __init__(self, table: str, class_name: str, mapping_class_name: str,
                 code: str, issues: List[str] = None):
        self.table = table
        self.class_name = class_name
        self.mapping_class_name = mapping_class_name
        self.code = code
        self.issues = list(issues or [])

    def to_dict(self) -> Dict:
        return {
            'table': self.table,
            'class_name': self.class_name,
            'mapping_class_name': self.mapping_class_name,
            'code': self.code,
            'issues': self.issues,
        }

    def __repr__(self):
        return f"<MappingResult(table='{self.table}', mapping_class_name='{self.mapping_class_name}')>"


class MappingManager:
    """Generates Code First mapping classes for tables of a schema."""

    def __init__(self, settings: CodeWriterSettings = None):
        self.settings = settings or CodeWriterSettings()

    def generate_schema(self, schema: DatabaseSchema) -> List[MappingResult]:
        """Generate a mapping class for every table and view in schema."""
        tables = schema.all_tables
        namer = self._make_namer(schema)

        if self.settings.max_workers > 1 and len(tables) > 1:
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as pool:
                results = list(pool.map(lambda t: self._write(t, namer), tables))
        else:
            results = [self._write(table, namer) for table in tables]

        logger.info("Generated %d mapping classes", len(results))
        return results

    def generate_table(self, schema: DatabaseSchema, table_name: str) -> MappingResult:
        """Generate the mapping class for one table.

        Raises:
            UnknownTableError: If table_name is not in schema.
        """
        table = schema.find_table(table_name)
        if table is None:
            raise UnknownTableError(f"Table '{table_name}' not found in schema")
        return self._write(table, self._make_namer(schema))

    @staticmethod
    def _make_namer(schema: DatabaseSchema) -> MappingNamer:
        # every name is settled here, in schema order, before any writer runs
        return MappingNamer.for_tables(schema.all_tables)

    def _write(self, table: DatabaseTable, namer: MappingNamer) -> MappingResult:
        writer = CodeFirstMappingWriter(table, self.settings, namer)
        code = writer.write()
        return MappingResult(table.name, table.class_name, writer.mapping_class_name,
                             code, writer.issues)

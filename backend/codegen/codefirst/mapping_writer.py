"""
Entity Framework Code First mapping class writer.

Writes one EntityTypeConfiguration<T> class per table: table binding,
primary key, one statement per column in schema order, then one
relationship per foreign key child.
"""

import logging
from typing import List, Optional

from ..base import ClassBuilder, quote
from ..naming import MappingNamer
from ..schema.model import DatabaseColumn, DatabaseTable
from ..settings import CodeWriterSettings
from .columns import ColumnMapper
from .primary_key import PrimaryKeyResolver
from .relationships import RelationshipMapper

logger = logging.getLogger(__name__)


class CodeFirstMappingWriter:
    """Writes the mapping class for a single table.

    A writer owns its ClassBuilder, so writers for different tables of the
    same schema can run side by side.
    """

    def __init__(self, table: DatabaseTable, settings: Optional[CodeWriterSettings],
                 mapping_namer: MappingNamer):
        if table is None:
            raise ValueError('table is required')
        if mapping_namer is None:
            raise ValueError('mapping_namer is required')

        self.table = table
        self.settings = settings or CodeWriterSettings()
        self.mapping_namer = mapping_namer
        self.mapping_class_name: Optional[str] = None
        self.issues: List[str] = []

        self._cb = ClassBuilder()
        self._columns = ColumnMapper(self._cb)
        self._relationships = RelationshipMapper(table, self._cb, self.settings, self.issues)
        self._primary_key = PrimaryKeyResolver(table, self._cb)

    def write(self) -> str:
        """Generate the mapping class source and return it."""
        table = self.table
        logger.debug("Writing Code First mapping for %s", table.name)

        self._cb.append_line('using System.ComponentModel.DataAnnotations;')
        pk_column = table.primary_key_column
        if pk_column is not None and not pk_column.is_identity:
            # DatabaseGeneratedOption lives in DataAnnotations.Schema
            self._cb.append_line('using System.ComponentModel.DataAnnotations.Schema;')
        self._cb.append_line('using System.Data.Entity.ModelConfiguration;')
        self._cb.append_line()

        self.mapping_class_name = self.mapping_namer.name_table(table)
        class_signature = 'public class {0} : EntityTypeConfiguration<{1}>'.format(
            self.mapping_class_name, table.class_name)

        with self._cb.begin_nest('namespace ' + self.settings.namespace + '.Mapping'):
            with self._cb.begin_nest(class_signature, 'Class mapping to ' + table.name + ' table'):
                with self._cb.begin_nest('public ' + self.mapping_class_name + '()', 'Constructor'):
                    self._map_table_name()

                    self._primary_key.write()

                    self._cb.append_line('// Properties')
                    for column in table.columns:
                        self._write_column(column)

                    self._cb.append_line('// Navigation properties')
                    for child in table.foreign_key_children:
                        self._relationships.write_child(child)

        return self._cb.to_string()

    def _map_table_name(self):
        # always explicit: the runtime pluralizes unmapped table names
        table = self.table
        self._cb.append_line('//table')
        owner = table.schema_owner
        if owner and owner != self.settings.default_schema_owner:
            self._cb.append_format('ToTable({0}, {1});', quote(table.name), quote(owner))
        else:
            self._cb.append_format('ToTable({0});', quote(table.name))

    def _write_column(self, column: DatabaseColumn):
        if column.is_foreign_key:
            self._relationships.write_foreign_key(column)
            return
        self._columns.write(column)

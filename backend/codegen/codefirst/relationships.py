"""
Navigation property configuration for Code First mappings.

Outgoing foreign keys become HasOptional/HasRequired(...).WithMany(...)
statements; foreign key children become HasMany(...) collections, with
junction tables mapped as many to many.
"""

import logging
from typing import List

from ..base import ClassBuilder, quote, quote_all
from ..schema.model import DatabaseColumn, DatabaseTable
from ..settings import CodeWriterSettings

logger = logging.getLogger(__name__)


class RelationshipMapper:
    """Writes relationship statements for one table.

    Relationships that can not be resolved are skipped; a description of
    each skip is appended to issues.
    """

    def __init__(self, table: DatabaseTable, builder: ClassBuilder,
                 settings: CodeWriterSettings, issues: List[str] = None):
        self.table = table
        self.builder = builder
        self.settings = settings
        self.issues = issues if issues is not None else []

    def uses_id_mirror(self, column: DatabaseColumn) -> bool:
        """Whether a foreign key column gets a scalar '<Name>Id' property."""
        return column.is_primary_key or self.settings.use_foreign_key_id_properties

    # -----------------------------------------------------------------------
    # Outgoing foreign keys
    # -----------------------------------------------------------------------

    def write_foreign_key(self, column: DatabaseColumn):
        """Write the many-to-one side for a foreign key column of this table."""
        property_name = column.property_name
        parts = [
            'Has{0}(x => x.{1})'.format('Optional' if column.nullable else 'Required',
                                        property_name),
            # inverse collection follows the foreign key children convention
            '.WithMany(c => c.{0})'.format(self.settings.name_collection(self.table.class_name)),
        ]
        if self.uses_id_mirror(column):
            fk_id_name = property_name + 'Id'
            self.builder.append_format('Property(x => x.{0}).HasColumnName({1});',
                                       fk_id_name, quote(column.name))
            parts.append('.HasForeignKey(c => c.{0})'.format(fk_id_name))
        else:
            parts.append('.Map(m => m.MapKey({0}))'.format(quote(column.name)))
        self.builder.append_line(''.join(parts) + ';')

    # -----------------------------------------------------------------------
    # Foreign key children
    # -----------------------------------------------------------------------

    def write_child(self, child: DatabaseTable):
        """Write the collection side for a table referencing this table."""
        if child.is_many_to_many_table():
            self._write_many_to_many(child)
            return

        if not child.foreign_keys_to(self.table.name):
            self._skip('Table %s is listed as a child of %s but has no foreign key to it',
                       child.name, self.table.name)
            return

        self.builder.append_format('//Foreign key to {0} ({1})', child.name, child.class_name)
        self.builder.append_format('HasMany(x => x.{0});',
                                   self.settings.name_collection(child.class_name))

    def _write_many_to_many(self, junction: DatabaseTable):
        other_end = junction.many_to_many_traversal(self.table)
        if other_end is None:
            self._skip('Junction table %s does not link %s to another table in the schema',
                       junction.name, self.table.name)
            return

        self.builder.append_line('// Many to many foreign key to ' + other_end.name)
        self.builder.append_format(
            'HasMany(x => x.{0}).WithMany(z => z.{1})',
            self.settings.name_collection(other_end.class_name),
            self.settings.name_collection(self.table.class_name))

        # left key = HasMany side, right key = WithMany side, each in its
        # foreign key's own column order
        left_columns = junction.foreign_keys_to(self.table.name)[0].columns
        right_columns = junction.foreign_keys_to(other_end.name)[0].columns
        with self.builder.begin_brace('.Map(map =>'):
            self.builder.append_line('map.ToTable(' + quote(junction.name) + ');')
            self.builder.append_line('map.MapLeftKey(' + quote_all(left_columns) + ');')
            self.builder.append_line('map.MapRightKey(' + quote_all(right_columns) + ');')
        self.builder.append_line(');')

    def _skip(self, message: str, *args):
        logger.warning(message, *args)
        self.issues.append(message % args)

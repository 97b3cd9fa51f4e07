"""Primary key declarations (HasKey) for Code First mappings."""

from typing import List

from ..base import ClassBuilder
from ..schema.model import DatabaseColumn, DatabaseTable

MISSING_KEY_MARKER = '//TODO- you MUST add a primary key!'
NULLABLE_VIEW_KEY_WARNING = '// Warning: nullable columns may cause EntityKey errors. Try AsNoTracking()'


def scalar_accessor(column: DatabaseColumn) -> str:
    """Key members must be scalar; a foreign key contributes its Id mirror."""
    name = column.property_name
    return 'x.' + name + ('Id' if column.is_foreign_key else '')


def is_convention_key(table: DatabaseTable, property_name: str) -> bool:
    """'Id' and '<ClassName>Id' keys are discovered by convention."""
    lowered = property_name.lower()
    return lowered == 'id' or lowered == (table.class_name + 'Id').lower()


class PrimaryKeyResolver:
    """Decides whether and how to declare a table's key."""

    def __init__(self, table: DatabaseTable, builder: ClassBuilder):
        self.table = table
        self.builder = builder

    def write(self):
        table = self.table
        if not table.has_primary_key:
            if table.is_view:
                self._write_view_key()
            else:
                self.builder.append_line(MISSING_KEY_MARKER)
            return

        if table.has_composite_key:
            self._write_composite_key()
            return

        column = table.primary_key_column
        name = column.property_name if column is not None else table.primary_key.columns[0]
        if is_convention_key(table, name):
            return

        self.builder.append_line('// Primary key')
        self.builder.append_line('HasKey(x => x.' + name + ');')

    def _write_composite_key(self):
        pk_names = set(self.table.primary_key.columns)
        # schema column order, not key order
        members = [c for c in self.table.columns if c.name in pk_names]
        self.builder.append_line('// Primary key (composite)')
        self._append_anonymous_key(members)

    def _write_view_key(self):
        # nullable keys make the runtime fail building entity keys
        members = [c for c in self.table.columns if not c.nullable]
        if not members:
            members = list(self.table.columns)
            self.builder.append_line(NULLABLE_VIEW_KEY_WARNING)
        self.builder.append_line('// Primary key (composite for view)')
        self._append_anonymous_key(members)

    def _append_anonymous_key(self, members: List[DatabaseColumn]):
        keys = ', '.join(scalar_accessor(c) for c in members)
        self.builder.append_format('HasKey(x => new {{ {0} }});', keys)

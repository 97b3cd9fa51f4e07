"""
In-memory relational schema model.

The model is produced by the loaders in this package and treated as
read-only by the mapping writers. DatabaseSchema.prepare() wires the
derived parts (key flags, foreign key children, net names) once after
loading.
"""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------

class DataType:
    """Classification of a vendor column type."""

    def __init__(self, type_name: str, is_string: bool = False,
                 is_string_clob: bool = False, is_numeric: bool = False,
                 is_int: bool = False, is_float: bool = False):
        self.type_name = type_name
        self.is_string = is_string
        self.is_string_clob = is_string_clob
        self.is_numeric = is_numeric
        self.is_int = is_int
        self.is_float = is_float

    @property
    def is_exact_numeric(self) -> bool:
        return self.is_numeric and not self.is_int and not self.is_float

    def __repr__(self):
        return f"<DataType(type_name='{self.type_name}')>"


def _string(name):
    return DataType(name, is_string=True)


def _clob(name):
    return DataType(name, is_string=True, is_string_clob=True)


def _int(name):
    return DataType(name, is_numeric=True, is_int=True)


def _float(name):
    return DataType(name, is_numeric=True, is_float=True)


def _decimal(name):
    return DataType(name, is_numeric=True)


def _other(name):
    return DataType(name)


# Vendor type names the model can classify (SQL Server names plus common
# ANSI / Oracle / PostgreSQL / MySQL spellings). Anything else is unmapped.
KNOWN_DATA_TYPES: Dict[str, DataType] = {t.type_name: t for t in [
    _string('char'), _string('nchar'), _string('varchar'), _string('nvarchar'),
    _string('varchar2'), _string('nvarchar2'), _string('character varying'),
    _string('character'), _string('string'),
    _clob('text'), _clob('ntext'), _clob('clob'), _clob('nclob'),
    _clob('longtext'), _clob('mediumtext'), _clob('tinytext'),
    _int('int'), _int('integer'), _int('bigint'), _int('smallint'),
    _int('tinyint'), _int('mediumint'), _int('serial'), _int('bigserial'),
    _float('float'), _float('real'), _float('double'),
    _float('double precision'), _float('binary_double'), _float('binary_float'),
    _decimal('decimal'), _decimal('numeric'), _decimal('number'),
    _decimal('money'), _decimal('smallmoney'),
    _other('bit'), _other('boolean'), _other('date'), _other('time'),
    _other('datetime'), _other('datetime2'), _other('smalldatetime'),
    _other('datetimeoffset'), _other('timestamp'), _other('rowversion'),
    _other('uniqueidentifier'), _other('uuid'), _other('binary'),
    _other('varbinary'), _other('image'), _other('blob'), _other('bytea'),
]}


def find_data_type(db_data_type: Optional[str]) -> Optional[DataType]:
    """Look up the DataType for a vendor type name, or None if unmapped.

    Size suffixes are ignored: 'nvarchar(50)' classifies as 'nvarchar'.
    """
    if not db_data_type:
        return None
    key = db_data_type.split('(', 1)[0].strip().lower()
    return KNOWN_DATA_TYPES.get(key)


# ---------------------------------------------------------------------------
# Columns and keys
# ---------------------------------------------------------------------------

class DatabaseColumn:
    """A column owned by exactly one table."""

    def __init__(self, name: str, db_data_type: str = None,
                 nullable: bool = True, length: int = None,
                 precision: int = None, scale: int = None,
                 is_identity: bool = False, net_name: str = None,
                 data_type: DataType = None):
        self.name = name
        self.db_data_type = db_data_type
        self.data_type = data_type if data_type is not None else find_data_type(db_data_type)
        self.nullable = nullable
        self.length = length
        self.precision = precision
        self.scale = scale
        self.is_identity = is_identity
        self.net_name = net_name
        # filled by DatabaseSchema.prepare()
        self.table: Optional['DatabaseTable'] = None
        self.is_primary_key = False
        self.is_foreign_key = False
        self.foreign_key_table_name: Optional[str] = None

    @property
    def property_name(self) -> str:
        """Member name, falling back to the physical name when not derived."""
        return self.net_name or self.name

    def __repr__(self):
        return f"<DatabaseColumn(name='{self.name}', type='{self.db_data_type}')>"


class PrimaryKey:
    """Ordered primary key column names."""

    def __init__(self, columns: List[str], name: str = None):
        self.name = name
        self.columns = list(columns)

    @property
    def is_composite(self) -> bool:
        return len(self.columns) > 1

    def __repr__(self):
        return f"<PrimaryKey(columns={self.columns})>"


class ForeignKey:
    """Ordered child column names referencing another table."""

    def __init__(self, columns: List[str], refers_to_table: str, name: str = None):
        self.name = name
        self.columns = list(columns)
        self.refers_to_table = refers_to_table

    def __repr__(self):
        return f"<ForeignKey(columns={self.columns}, refers_to_table='{self.refers_to_table}')>"


# ---------------------------------------------------------------------------
# Tables and views
# ---------------------------------------------------------------------------

class DatabaseTable:
    """A base table."""

    is_view = False

    def __init__(self, name: str, schema_owner: str = None,
                 columns: List[DatabaseColumn] = None,
                 primary_key: PrimaryKey = None,
                 foreign_keys: List[ForeignKey] = None,
                 net_name: str = None):
        self.name = name
        self.schema_owner = schema_owner
        self.columns: List[DatabaseColumn] = list(columns or [])
        self.primary_key = primary_key
        self.foreign_keys: List[ForeignKey] = list(foreign_keys or [])
        self.net_name = net_name
        # filled by DatabaseSchema.prepare()
        self.foreign_key_children: List['DatabaseTable'] = []
        self.database: Optional['DatabaseSchema'] = None
        for column in self.columns:
            column.table = self

    @property
    def class_name(self) -> str:
        return self.net_name or self.name

    @property
    def has_primary_key(self) -> bool:
        return self.primary_key is not None and bool(self.primary_key.columns)

    @property
    def has_composite_key(self) -> bool:
        return self.has_primary_key and self.primary_key.is_composite

    @property
    def primary_key_column(self) -> Optional[DatabaseColumn]:
        """The key column of a single-column primary key, else None."""
        if not self.has_primary_key or self.has_composite_key:
            return None
        return self.find_column(self.primary_key.columns[0])

    def find_column(self, name: str) -> Optional[DatabaseColumn]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def foreign_keys_to(self, table_name: str) -> List[ForeignKey]:
        """Foreign keys of this table referencing table_name."""
        return [fk for fk in self.foreign_keys if fk.refers_to_table == table_name]

    def is_many_to_many_table(self) -> bool:
        """True when this table only encodes a many-to-many relationship.

        The primary key must be made of exactly the columns of two foreign
        keys, and those foreign keys must reference two different tables.
        """
        if len(self.foreign_keys) != 2 or not self.has_primary_key:
            return False
        first, second = self.foreign_keys
        if first.refers_to_table == second.refers_to_table:
            return False
        fk_columns = first.columns + second.columns
        pk_columns = self.primary_key.columns
        return (len(pk_columns) == len(fk_columns)
                and set(pk_columns) == set(fk_columns))

    def many_to_many_traversal(self, from_table: 'DatabaseTable') -> Optional['DatabaseTable']:
        """Return the table at the other end of this junction table.

        Returns None when from_table is not referenced by exactly one of the
        two foreign keys, or when the other end is not in the schema.
        """
        referencing = self.foreign_keys_to(from_table.name)
        others = [fk for fk in self.foreign_keys if fk.refers_to_table != from_table.name]
        if len(referencing) != 1 or len(others) != 1:
            return None
        if self.database is None:
            return None
        return self.database.find_table(others[0].refers_to_table)

    def __repr__(self):
        return f"<{type(self).__name__}(name='{self.name}', schema_owner='{self.schema_owner}')>"


class DatabaseView(DatabaseTable):
    """A view. Views never declare a primary key."""

    is_view = True

    def __init__(self, name: str, schema_owner: str = None,
                 columns: List[DatabaseColumn] = None, net_name: str = None):
        super().__init__(name, schema_owner=schema_owner, columns=columns,
                         net_name=net_name)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class DatabaseSchema:
    """A snapshot of tables and views."""

    def __init__(self, tables: List[DatabaseTable] = None,
                 views: List[DatabaseView] = None):
        self.tables: List[DatabaseTable] = list(tables or [])
        self.views: List[DatabaseView] = list(views or [])

    @property
    def all_tables(self) -> List[DatabaseTable]:
        return self.tables + self.views

    def find_table(self, name: str) -> Optional[DatabaseTable]:
        for table in self.all_tables:
            if table.name == name:
                return table
        return None

    def prepare(self, namer=None) -> 'DatabaseSchema':
        """Derive key flags, foreign key children and net names.

        Args:
            namer: Object with name_class / name_property / name_navigation
                methods. Defaults to naming.SchemaNamer.

        Returns:
            self, for chaining.
        """
        if namer is None:
            from ..naming import SchemaNamer
            namer = SchemaNamer()

        for table in self.all_tables:
            table.database = self
            table.foreign_key_children = []
            if not table.net_name:
                table.net_name = namer.name_class(table.name)

        for table in self.all_tables:
            self._flag_columns(table)
            for fk in table.foreign_keys:
                parent = self.find_table(fk.refers_to_table)
                if parent is None:
                    logger.warning("Foreign key %s.%s references unknown table %s",
                                   table.name, fk.columns, fk.refers_to_table)
                    continue
                if table not in parent.foreign_key_children:
                    parent.foreign_key_children.append(table)

        for table in self.all_tables:
            for column in table.columns:
                if column.net_name:
                    continue
                if column.is_foreign_key:
                    parent = self.find_table(column.foreign_key_table_name)
                    column.net_name = namer.name_navigation(
                        column.name, parent.class_name if parent else None)
                else:
                    column.net_name = namer.name_property(column.name)

        return self

    @staticmethod
    def _flag_columns(table: DatabaseTable):
        pk_names = set(table.primary_key.columns) if table.has_primary_key else set()
        for column in table.columns:
            column.table = table
            column.is_primary_key = column.name in pk_names
        for fk in table.foreign_keys:
            for name in fk.columns:
                column = table.find_column(name)
                if column is None:
                    logger.warning("Foreign key column %s not found in table %s",
                                   name, table.name)
                    continue
                column.is_foreign_key = True
                column.foreign_key_table_name = fk.refers_to_table

    def __repr__(self):
        return f"<DatabaseSchema(tables={len(self.tables)}, views={len(self.views)})>"

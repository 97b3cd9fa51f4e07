"""
Scalar property configuration (Property(x => x.Name)...) for Code First mappings.

Each non foreign key column produces exactly one statement. Optional
clauses are appended in a fixed order: column name, generated option,
type shape, required.
"""

import logging
from typing import Callable, List, Optional

from ..base import ClassBuilder, quote
from ..schema.model import DatabaseColumn

logger = logging.getLogger(__name__)

# nvarchar(max) is reported as -1 by SQL Server, ntext as 1073741823
MAX_LENGTH_SENTINEL = -1
MAX_LENGTH_THRESHOLD = 1073741823

DEFAULT_PRECISION = 18
DEFAULT_SCALE = 0

IS_MAX_LENGTH = '.IsMaxLength()'
NOT_GENERATED = '.HasDatabaseGeneratedOption(DatabaseGeneratedOption.None)'
TIMESTAMP_CLAUSE = ('.IsConcurrencyToken().HasColumnType("timestamp")'
                    '.HasDatabaseGeneratedOption(DatabaseGeneratedOption.Computed)')


def _column_type(type_name: str) -> str:
    return '.HasColumnType(' + quote(type_name) + ')'


def _vendor_type_is(column: DatabaseColumn, type_name: str) -> bool:
    return (column.data_type.type_name or '').lower() == type_name


# ---------------------------------------------------------------------------
# Type shape rules
#
# Each rule returns None when it does not apply (fall through to the next
# rule), or the clause text, possibly empty, when it does.
# ---------------------------------------------------------------------------

def _unmapped_type(column: DatabaseColumn) -> Optional[str]:
    if column.data_type is not None:
        return None
    if not column.db_data_type:
        logger.warning("Column %s has neither a data type nor a vendor type name",
                       column.name)
    return _column_type(column.db_data_type or '')


def _large_text(column: DatabaseColumn) -> Optional[str]:
    if column.data_type.is_string_clob:
        return IS_MAX_LENGTH
    return None


def _string_length(column: DatabaseColumn) -> Optional[str]:
    if not column.data_type.is_string:
        return None
    length = column.length
    if length is None:
        return ''
    if length == MAX_LENGTH_SENTINEL or length >= MAX_LENGTH_THRESHOLD:
        return IS_MAX_LENGTH
    if length > 0:
        return f'.HasMaxLength({length})'
    return ''


def _money(column: DatabaseColumn) -> Optional[str]:
    if _vendor_type_is(column, 'money'):
        return _column_type('money')
    return None


def _decimal_precision(column: DatabaseColumn) -> Optional[str]:
    if not column.data_type.is_exact_numeric or column.precision is None:
        return None
    scale = column.scale if column.scale is not None else DEFAULT_SCALE
    if column.precision == DEFAULT_PRECISION and scale == DEFAULT_SCALE:
        return None
    return f'.HasPrecision({column.precision}, {scale})'


def _image(column: DatabaseColumn) -> Optional[str]:
    if _vendor_type_is(column, 'image'):
        return _column_type('image')
    return None


def _timestamp(column: DatabaseColumn) -> Optional[str]:
    if _vendor_type_is(column, 'timestamp'):
        return TIMESTAMP_CLAUSE
    return None


TYPE_SHAPE_RULES: List[Callable[[DatabaseColumn], Optional[str]]] = [
    _unmapped_type,
    _large_text,
    _string_length,
    _money,
    _decimal_precision,
    _image,
    _timestamp,
]


def type_shape_clause(column: DatabaseColumn) -> str:
    """Return the type clause of the first matching rule, or ''."""
    for rule in TYPE_SHAPE_RULES:
        clause = rule(column)
        if clause is not None:
            return clause
    return ''


# ---------------------------------------------------------------------------
# Column mapper
# ---------------------------------------------------------------------------

class ColumnMapper:
    """Writes Property(...) statements for scalar columns."""

    def __init__(self, builder: ClassBuilder):
        self.builder = builder

    @staticmethod
    def build_statement(column: DatabaseColumn) -> str:
        """Build the Property(...) statement for a non foreign key column."""
        property_name = column.property_name
        parts = [f'Property(x => x.{property_name})']
        if property_name != column.name:
            parts.append('.HasColumnName(' + quote(column.name) + ')')
        if column.is_primary_key and not column.is_identity:
            # identity is assumed by default
            parts.append(NOT_GENERATED)
        parts.append(type_shape_clause(column))
        if not column.nullable:
            parts.append('.IsRequired()')
        return ''.join(parts) + ';'

    def write(self, column: DatabaseColumn):
        if column.is_primary_key:
            self.builder.append_line(
                '//  ' + column.property_name + ' is primary key'
                + (' (identity)' if column.is_identity else ''))
        self.builder.append_line(self.build_statement(column))

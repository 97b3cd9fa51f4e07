"""
SQLAlchemy metadata loader.

Converts declared SQLAlchemy Table objects (MetaData or declarative Base
metadata) into the schema model. No database connection is opened; the
metadata must already describe the tables.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy import MetaData
from sqlalchemy import types as sqltypes

from .model import (
    DataType, DatabaseColumn, DatabaseSchema, DatabaseTable, DatabaseView,
    ForeignKey, PrimaryKey, find_data_type,
)

logger = logging.getLogger(__name__)


def load_metadata(metadata: MetaData, views: Iterable[str] = (), namer=None) -> DatabaseSchema:
    """Build and prepare a DatabaseSchema from SQLAlchemy metadata.

    Args:
        metadata: MetaData holding the declared tables.
        views: Names of tables in metadata that are mapped database views.
        namer: Optional SchemaNamer used to derive class/property names.
    """
    view_names = set(views)
    schema = DatabaseSchema()

    for sa_table in metadata.tables.values():
        columns = [_convert_column(sa_table, col) for col in sa_table.columns]

        if sa_table.name in view_names:
            schema.views.append(DatabaseView(sa_table.name, schema_owner=sa_table.schema,
                                             columns=columns))
            continue

        pk_names = [col.name for col in sa_table.primary_key.columns]
        foreign_keys = []
        for constraint in sa_table.foreign_key_constraints:
            referred = constraint.referred_table
            foreign_keys.append(ForeignKey(
                [col.name for col in constraint.columns],
                referred.name,
                name=constraint.name,
            ))

        schema.tables.append(DatabaseTable(
            sa_table.name,
            schema_owner=sa_table.schema,
            columns=columns,
            primary_key=PrimaryKey(pk_names) if pk_names else None,
            foreign_keys=foreign_keys,
        ))

    logger.debug("Converted %d SQLAlchemy tables", len(schema.all_tables))
    return schema.prepare(namer)


def _convert_column(sa_table, col) -> DatabaseColumn:
    sa_type = col.type
    type_name = _type_name(sa_type)
    data_type = classify_type(sa_type)

    precision = scale = None
    if isinstance(sa_type, sqltypes.Numeric) and not isinstance(sa_type, sqltypes.Float):
        precision = sa_type.precision
        scale = sa_type.scale

    return DatabaseColumn(
        col.name,
        db_data_type=type_name,
        data_type=data_type,
        nullable=bool(col.nullable),
        length=getattr(sa_type, 'length', None),
        precision=precision,
        scale=scale,
        is_identity=col.identity is not None or col is sa_table.autoincrement_column,
    )


def _type_name(sa_type) -> str:
    return getattr(sa_type, '__visit_name__', type(sa_type).__name__).lower()


def classify_type(sa_type) -> Optional[DataType]:
    """Classify a SQLAlchemy type instance.

    Generic type hierarchies are checked first (Text before String, Float
    before Numeric, since each subclasses the latter); vendor types such as
    mssql MONEY or IMAGE fall back to the vendor type-name table.
    """
    name = _type_name(sa_type)
    if isinstance(sa_type, sqltypes.Text):
        return DataType(name, is_string=True, is_string_clob=True)
    if isinstance(sa_type, sqltypes.String):
        return DataType(name, is_string=True)
    if isinstance(sa_type, sqltypes.Integer):
        return DataType(name, is_numeric=True, is_int=True)
    if isinstance(sa_type, sqltypes.Float):
        return DataType(name, is_numeric=True, is_float=True)
    if isinstance(sa_type, sqltypes.Numeric):
        return DataType(name, is_numeric=True)
    return find_data_type(name)

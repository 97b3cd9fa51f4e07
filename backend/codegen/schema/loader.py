"""
Schema document loader.

Builds a DatabaseSchema from the standardized schema dict used across the
project:

    {
        'tables': [{
            'name': 'Orders', 'schema': 'sales', 'is_view': False,
            'primary_key': ['Id'],
            'columns': [{'name': 'Id', 'type': 'int', 'nullable': False,
                         'primary_key': True, 'identity': True}, ...],
            'foreign_keys': [{'column': 'CustomerId',
                              'references_table': 'Customers'}],
        }],
        'views': [...],
    }

Column facets 'length', 'precision', 'scale' and 'net_name' are optional.
"""

import logging
from typing import Dict

from .model import (
    DatabaseColumn, DatabaseSchema, DatabaseTable, DatabaseView,
    ForeignKey, PrimaryKey,
)

logger = logging.getLogger(__name__)


class SchemaLoadError(ValueError):
    """Raised when a schema document is malformed."""


def load_schema(document: Dict, namer=None) -> DatabaseSchema:
    """Build and prepare a DatabaseSchema from a schema document.

    Args:
        document: Dict with a 'tables' list and an optional 'views' list.
        namer: Optional SchemaNamer used to derive class/property names.

    Returns:
        A prepared DatabaseSchema.

    Raises:
        SchemaLoadError: If the document is not a dict of table dicts or a
            table/column lacks a name.
    """
    if not isinstance(document, dict):
        raise SchemaLoadError('Schema document must be an object')

    tables = document.get('tables') or []
    views = document.get('views') or []
    if not isinstance(tables, list) or not isinstance(views, list):
        raise SchemaLoadError("'tables' and 'views' must be lists")

    schema = DatabaseSchema()
    seen = set()
    entries = [(raw, False) for raw in tables] + [(raw, True) for raw in views]
    for raw, listed_as_view in entries:
        raw = _require_dict(raw, 'table')
        table = _load_table(raw, listed_as_view or bool(raw.get('is_view')))
        if table.name in seen:
            raise SchemaLoadError(f"Duplicate table name '{table.name}'")
        seen.add(table.name)
        if table.is_view:
            schema.views.append(table)
        else:
            schema.tables.append(table)

    logger.debug("Loaded schema with %d tables and %d views",
                 len(schema.tables), len(schema.views))
    return schema.prepare(namer)


def _require_dict(raw, what: str) -> Dict:
    if not isinstance(raw, dict):
        raise SchemaLoadError(f'Each {what} must be an object')
    return raw


def _require_name(raw: Dict, what: str) -> str:
    name = raw.get('name')
    if not name or not isinstance(name, str):
        raise SchemaLoadError(f"Every {what} needs a non-empty 'name'")
    return name


def _load_table(raw: Dict, is_view: bool) -> DatabaseTable:
    name = _require_name(raw, 'table')
    columns = [_load_column(c) for c in raw.get('columns') or []]
    schema_owner = raw.get('schema') or raw.get('schema_owner')
    net_name = raw.get('class_name') or raw.get('net_name')

    if is_view:
        return DatabaseView(name, schema_owner=schema_owner, columns=columns,
                            net_name=net_name)

    pk_names = raw.get('primary_key')
    if pk_names is None:
        pk_names = [c.get('name') for c in raw.get('columns') or [] if c.get('primary_key')]
    elif isinstance(pk_names, str):
        pk_names = [pk_names]
    primary_key = PrimaryKey(pk_names) if pk_names else None

    foreign_keys = [_load_foreign_key(fk, name) for fk in raw.get('foreign_keys') or []]

    return DatabaseTable(name, schema_owner=schema_owner, columns=columns,
                         primary_key=primary_key, foreign_keys=foreign_keys,
                         net_name=net_name)


def _load_column(raw) -> DatabaseColumn:
    raw = _require_dict(raw, 'column')
    return DatabaseColumn(
        _require_name(raw, 'column'),
        db_data_type=raw.get('type') or raw.get('db_type'),
        nullable=raw.get('nullable', True),
        length=_optional_int(raw, 'length'),
        precision=_optional_int(raw, 'precision'),
        scale=_optional_int(raw, 'scale'),
        is_identity=bool(raw.get('identity', False)),
        net_name=raw.get('net_name'),
    )


def _load_foreign_key(raw, table_name: str) -> ForeignKey:
    raw = _require_dict(raw, 'foreign key')
    columns = raw.get('columns')
    if columns is None:
        columns = [raw['column']] if raw.get('column') else []
    elif not isinstance(columns, list):
        raise SchemaLoadError(f"Foreign key 'columns' on '{table_name}' must be a list")
    refers_to = raw.get('references_table')
    if not columns or not refers_to:
        raise SchemaLoadError(
            f"Foreign key on '{table_name}' needs 'column(s)' and 'references_table'")
    return ForeignKey(columns, refers_to, name=raw.get('name'))


def _optional_int(raw: Dict, key: str):
    value = raw.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise SchemaLoadError(f"Column '{raw.get('name')}' has a non-integer {key}: {value!r}")

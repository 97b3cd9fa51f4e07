import pytest

from codegen.base import ClassBuilder
from codegen.codefirst.primary_key import (
    MISSING_KEY_MARKER, NULLABLE_VIEW_KEY_WARNING, PrimaryKeyResolver,
)
from codegen.schema.model import (
    DatabaseColumn, DatabaseSchema, DatabaseTable, DatabaseView, ForeignKey, PrimaryKey,
)


def resolve(table, *others):
    DatabaseSchema(tables=[t for t in (table,) + others if not t.is_view],
                   views=[t for t in (table,) + others if t.is_view]).prepare()
    builder = ClassBuilder()
    PrimaryKeyResolver(table, builder).write()
    return [line.strip() for line in builder.lines]


def keyed_table(name, key_column, *extra):
    columns = [DatabaseColumn(key_column, 'int', nullable=False)] + list(extra)
    return DatabaseTable(name, columns=columns, primary_key=PrimaryKey([key_column]))


class TestSingleColumnKey:

    @pytest.mark.parametrize('key_name', ['Id', 'ID', 'id', 'OrderId', 'ORDERID', 'orderid'])
    def test_convention_keys_are_not_declared(self, key_name):
        table = keyed_table('Orders', key_name)
        table.columns[0].net_name = key_name
        assert resolve(table) == []

    @pytest.mark.parametrize('key_name', ['Code', 'OrderNumber', 'CustomerId'])
    def test_other_keys_are_declared_once(self, key_name):
        lines = resolve(keyed_table('Orders', key_name))
        assert lines == ['// Primary key', f'HasKey(x => x.{key_name});']

    def test_declaration_uses_property_name(self):
        lines = resolve(keyed_table('Orders', 'order_code'))
        assert lines[-1] == 'HasKey(x => x.OrderCode);'


class TestCompositeKey:

    def test_members_in_column_order_with_id_mirrors(self):
        products = keyed_table('Products', 'Id')
        lines_table = DatabaseTable(
            'OrderLines',
            columns=[
                DatabaseColumn('LineNumber', 'int', nullable=False),
                DatabaseColumn('ProductId', 'int', nullable=False),
                DatabaseColumn('Sku', 'nvarchar', nullable=False, length=20),
            ],
            # key order differs from column order
            primary_key=PrimaryKey(['Sku', 'ProductId', 'LineNumber']),
            foreign_keys=[ForeignKey(['ProductId'], 'Products')],
        )
        lines = resolve(lines_table, products)
        assert lines == [
            '// Primary key (composite)',
            'HasKey(x => new { x.LineNumber, x.ProductId, x.Sku });',
        ]

    def test_foreign_key_member_uses_scalar_mirror(self):
        parents = keyed_table('Parents', 'Id')
        table = DatabaseTable(
            'Kids',
            columns=[DatabaseColumn('Parent', 'int', nullable=False),
                     DatabaseColumn('Position', 'int', nullable=False)],
            primary_key=PrimaryKey(['Parent', 'Position']),
            foreign_keys=[ForeignKey(['Parent'], 'Parents')],
        )
        lines = resolve(table, parents)
        # navigation 'Parent' exposes 'ParentId' as its scalar key member
        assert lines[-1] == 'HasKey(x => new { x.ParentId, x.Position });'


class TestMissingKey:

    def test_base_table_gets_marker_only(self):
        table = DatabaseTable('Logs', columns=[DatabaseColumn('Message', 'nvarchar')])
        assert resolve(table) == [MISSING_KEY_MARKER]

    def test_view_uses_non_nullable_columns(self):
        view = DatabaseView('ActiveOrders', columns=[
            DatabaseColumn('OrderId', 'int', nullable=False),
            DatabaseColumn('Note', 'nvarchar', nullable=True),
            DatabaseColumn('Placed', 'datetime', nullable=False),
        ])
        assert resolve(view) == [
            '// Primary key (composite for view)',
            'HasKey(x => new { x.OrderId, x.Placed });',
        ]

    def test_view_with_only_nullable_columns_falls_back_with_caveat(self):
        view = DatabaseView('Report', columns=[
            DatabaseColumn('Label', 'nvarchar'),
            DatabaseColumn('Total', 'decimal'),
        ])
        assert resolve(view) == [
            NULLABLE_VIEW_KEY_WARNING,
            '// Primary key (composite for view)',
            'HasKey(x => new { x.Label, x.Total });',
        ]

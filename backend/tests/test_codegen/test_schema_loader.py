import pytest

from codegen.schema import SchemaLoadError, load_schema


class TestLoadSchema:
    """Schema documents become a prepared schema model"""

    def test_tables_keep_document_order(self, shop_schema):
        assert [t.name for t in shop_schema.tables] == [
            'Customers', 'Orders', 'Products', 'OrderProducts']

    def test_class_and_property_names(self, shop_schema):
        orders = shop_schema.find_table('Orders')
        assert orders.class_name == 'Order'
        assert [c.net_name for c in orders.columns] == ['Id', 'Customer', 'Note']

    def test_key_flags(self, shop_schema):
        orders = shop_schema.find_table('Orders')
        customer = orders.find_column('CustomerId')
        assert orders.find_column('Id').is_primary_key is True
        assert customer.is_foreign_key is True
        assert customer.foreign_key_table_name == 'Customers'

    def test_foreign_key_children(self, shop_schema):
        customers = shop_schema.find_table('Customers')
        orders = shop_schema.find_table('Orders')
        assert customers.foreign_key_children == [orders]
        assert [t.name for t in orders.foreign_key_children] == ['OrderProducts']

    def test_data_types_are_classified(self, shop_schema):
        note = shop_schema.find_table('Orders').find_column('Note')
        assert note.data_type.is_string is True
        assert note.length == 50

    def test_unknown_type_has_no_data_type(self):
        schema = load_schema({'tables': [{
            'name': 'Docs',
            'columns': [{'name': 'Body', 'type': 'xml'}],
        }]})
        body = schema.find_table('Docs').find_column('Body')
        assert body.data_type is None
        assert body.db_data_type == 'xml'

    def test_explicit_primary_key_list(self, shop_schema):
        junction = shop_schema.find_table('OrderProducts')
        assert junction.primary_key.columns == ['OrderId', 'ProductId']
        assert junction.has_composite_key is True

    def test_views_are_loaded_without_keys(self):
        schema = load_schema({'views': [{
            'name': 'ActiveCustomers',
            'columns': [{'name': 'Id', 'type': 'int', 'nullable': False, 'primary_key': True}],
        }]})
        view = schema.find_table('ActiveCustomers')
        assert view.is_view is True
        assert view.primary_key is None

    def test_multi_column_foreign_key(self):
        schema = load_schema({'tables': [
            {'name': 'Parents', 'primary_key': ['A', 'B'],
             'columns': [{'name': 'A', 'type': 'int'}, {'name': 'B', 'type': 'int'}]},
            {'name': 'Kids', 'columns': [{'name': 'ParentA', 'type': 'int'},
                                         {'name': 'ParentB', 'type': 'int'}],
             'foreign_keys': [{'columns': ['ParentA', 'ParentB'], 'references_table': 'Parents'}]},
        ]})
        fk = schema.find_table('Kids').foreign_keys[0]
        assert fk.columns == ['ParentA', 'ParentB']


class TestLoadErrors:

    def test_document_must_be_object(self):
        with pytest.raises(SchemaLoadError):
            load_schema(['not', 'a', 'schema'])

    def test_table_needs_name(self):
        with pytest.raises(SchemaLoadError):
            load_schema({'tables': [{'columns': []}]})

    def test_duplicate_table_names(self):
        with pytest.raises(SchemaLoadError):
            load_schema({'tables': [{'name': 'A'}, {'name': 'A'}]})

    def test_foreign_key_needs_target(self):
        with pytest.raises(SchemaLoadError):
            load_schema({'tables': [{'name': 'A', 'columns': [{'name': 'B'}],
                                     'foreign_keys': [{'column': 'B'}]}]})

    def test_foreign_key_columns_must_be_list(self):
        with pytest.raises(SchemaLoadError, match='must be a list'):
            load_schema({'tables': [
                {'name': 'Customers', 'columns': [{'name': 'Id'}]},
                {'name': 'Orders', 'columns': [{'name': 'CustomerId'}],
                 'foreign_keys': [{'columns': 'CustomerId', 'references_table': 'Customers'}]},
            ]})

    def test_non_integer_length(self):
        with pytest.raises(SchemaLoadError):
            load_schema({'tables': [{'name': 'A', 'columns': [{'name': 'B', 'length': 'wide'}]}]})

    def test_load_error_is_value_error(self):
        assert issubclass(SchemaLoadError, ValueError)


class TestJunctionDetection:
    """A junction table's key is exactly two foreign keys to distinct tables"""

    def test_junction_table(self, shop_schema):
        assert shop_schema.find_table('OrderProducts').is_many_to_many_table() is True

    def test_ordinary_table(self, shop_schema):
        assert shop_schema.find_table('Orders').is_many_to_many_table() is False

    def test_extra_key_column_is_not_junction(self, shop_document):
        junction = shop_document['tables'][3]
        junction['columns'].append({'name': 'Seq', 'type': 'int', 'nullable': False})
        junction['primary_key'] = ['OrderId', 'ProductId', 'Seq']
        schema = load_schema(shop_document)
        assert schema.find_table('OrderProducts').is_many_to_many_table() is False

    def test_both_keys_to_same_table_is_not_junction(self):
        schema = load_schema({'tables': [
            {'name': 'People', 'primary_key': ['Id'], 'columns': [{'name': 'Id', 'type': 'int'}]},
            {'name': 'Friends', 'primary_key': ['PersonId', 'FriendId'],
             'columns': [{'name': 'PersonId', 'type': 'int'}, {'name': 'FriendId', 'type': 'int'}],
             'foreign_keys': [{'column': 'PersonId', 'references_table': 'People'},
                              {'column': 'FriendId', 'references_table': 'People'}]},
        ]})
        assert schema.find_table('Friends').is_many_to_many_table() is False

    def test_traversal_is_symmetric(self, shop_schema):
        junction = shop_schema.find_table('OrderProducts')
        orders = shop_schema.find_table('Orders')
        products = shop_schema.find_table('Products')
        assert junction.many_to_many_traversal(orders) is products
        assert junction.many_to_many_traversal(products) is orders

    def test_traversal_from_unrelated_table(self, shop_schema):
        junction = shop_schema.find_table('OrderProducts')
        customers = shop_schema.find_table('Customers')
        assert junction.many_to_many_traversal(customers) is None

import copy
import pytest

SHOP_SCHEMA = {
    'tables': [
        {
            'name': 'Customers',
            'columns': [
                {'name': 'Id', 'type': 'int', 'nullable': False, 'primary_key': True, 'identity': True},
                {'name': 'Name', 'type': 'nvarchar', 'length': 100, 'nullable': False},
            ],
            'foreign_keys': [],
        },
        {
            'name': 'Orders',
            'columns': [
                {'name': 'Id', 'type': 'int', 'nullable': False, 'primary_key': True, 'identity': True},
                {'name': 'CustomerId', 'type': 'int', 'nullable': True},
                {'name': 'Note', 'type': 'nvarchar', 'length': 50, 'nullable': False},
            ],
            'foreign_keys': [
                {'column': 'CustomerId', 'references_table': 'Customers'},
            ],
        },
        {
            'name': 'Products',
            'schema': 'catalog',
            'columns': [
                {'name': 'ProductId', 'type': 'int', 'nullable': False, 'primary_key': True, 'identity': True},
                {'name': 'Price', 'type': 'money', 'nullable': False},
            ],
            'foreign_keys': [],
        },
        {
            'name': 'OrderProducts',
            'primary_key': ['OrderId', 'ProductId'],
            'columns': [
                {'name': 'OrderId', 'type': 'int', 'nullable': False},
                {'name': 'ProductId', 'type': 'int', 'nullable': False},
            ],
            'foreign_keys': [
                {'column': 'OrderId', 'references_table': 'Orders'},
                {'column': 'ProductId', 'references_table': 'Products'},
            ],
        },
    ],
}


@pytest.fixture
def shop_document():
    """Schema document with a one-to-many and a many-to-many relationship"""
    return copy.deepcopy(SHOP_SCHEMA)


@pytest.fixture
def shop_schema(shop_document):
    """Prepared DatabaseSchema built from shop_document"""
    from codegen.schema import load_schema
    return load_schema(shop_document)


@pytest.fixture
def client():
    """Create test client"""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client

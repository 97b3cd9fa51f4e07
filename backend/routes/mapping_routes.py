import logging
from flask import Blueprint, request, jsonify
from config import Config
from codegen import (
    CodeWriterSettings, MappingManager, SchemaLoadError, UnknownTableError, load_schema,
)

logger = logging.getLogger(__name__)

mappings_bp = Blueprint('mappings', __name__)


def _read_request():
    """Parse the request body into (schema, settings).

    Raises:
        SchemaLoadError: If the body has no usable schema document or an
            option has the wrong type.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'schema' not in data:
        raise SchemaLoadError("Request body must be JSON with a 'schema' object")
    options = data.get('options') or {}
    if not isinstance(options, dict):
        raise SchemaLoadError("'options' must be an object")
    schema = load_schema(data['schema'])
    return schema, CodeWriterSettings.from_config(Config, options)


@mappings_bp.route('/health', methods=['GET'])
def health():
    """Liveness probe"""
    return jsonify({'status': 'ok'}), 200


@mappings_bp.route('', methods=['POST'])
def generate_mappings():
    """
    Generate Code First mapping classes for every table in a schema.

    Request Body:
        {
            "schema": {"tables": [...], "views": [...]},
            "options": {
                "namespace": "Domain",
                "default_schema_owner": "dbo",
                "use_foreign_key_id_properties": false
            }
        }

    Returns:
        {
            "status": "success",
            "mappings": [
                {"table": "...", "class_name": "...", "mapping_class_name": "...",
                 "code": "...", "issues": []}
            ]
        }
    """
    try:
        schema, settings = _read_request()
    except SchemaLoadError as e:
        return jsonify({'status': 'error', 'error': str(e)}), 400

    results = MappingManager(settings).generate_schema(schema)
    return jsonify({
        'status': 'success',
        'mappings': [r.to_dict() for r in results],
    }), 200


@mappings_bp.route('/<table_name>', methods=['POST'])
def generate_table_mapping(table_name):
    """Generate the mapping class for a single table of the posted schema."""
    try:
        schema, settings = _read_request()
    except SchemaLoadError as e:
        return jsonify({'status': 'error', 'error': str(e)}), 400

    try:
        result = MappingManager(settings).generate_table(schema, table_name)
    except UnknownTableError as e:
        logger.info("Mapping requested for unknown table %s", table_name)
        return jsonify({'status': 'error', 'error': str(e)}), 404

    return jsonify({'status': 'success', 'mapping': result.to_dict()}), 200

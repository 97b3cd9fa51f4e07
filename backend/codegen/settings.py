"""Settings consulted while writing mapping classes."""

from typing import Callable, Dict, Optional

from .naming import pluralize
from .schema.loader import SchemaLoadError


class CodeWriterSettings:
    """Options for the Code First mapping writers.

    use_foreign_key_id_properties is read by the relationship mapper
    (RelationshipMapper.uses_id_mirror); it is the only switch for scalar
    foreign key mirrors.
    """

    def __init__(self, namespace: str = 'Domain',
                 default_schema_owner: str = 'dbo',
                 use_foreign_key_id_properties: bool = False,
                 collection_namer: Callable[[str], str] = None,
                 max_workers: int = 1):
        self.namespace = namespace
        self.default_schema_owner = default_schema_owner
        self.use_foreign_key_id_properties = use_foreign_key_id_properties
        self.collection_namer = collection_namer or pluralize
        self.max_workers = max(1, max_workers)

    def name_collection(self, class_name: str) -> str:
        """Name the collection property holding many instances of class_name."""
        return self.collection_namer(class_name)

    @classmethod
    def from_config(cls, config, overrides: Optional[Dict] = None) -> 'CodeWriterSettings':
        """Build settings from a Config object, applying per-request overrides.

        Only namespace, default_schema_owner and use_foreign_key_id_properties
        can be overridden; other keys are ignored. The worker count always
        comes from config.

        Raises:
            SchemaLoadError: If an override has the wrong type.
        """
        overrides = overrides or {}

        namespace = overrides.get('namespace')
        if namespace is not None and not isinstance(namespace, str):
            raise SchemaLoadError("Option 'namespace' must be a string")

        schema_owner = overrides.get('default_schema_owner', config.CODEGEN_DEFAULT_SCHEMA_OWNER)
        if schema_owner is not None and not isinstance(schema_owner, str):
            raise SchemaLoadError("Option 'default_schema_owner' must be a string")

        use_id_properties = overrides.get(
            'use_foreign_key_id_properties', config.CODEGEN_USE_FK_ID_PROPERTIES)
        if not isinstance(use_id_properties, bool):
            raise SchemaLoadError("Option 'use_foreign_key_id_properties' must be true or false")

        return cls(
            namespace=namespace or config.CODEGEN_NAMESPACE,
            default_schema_owner=schema_owner,
            use_foreign_key_id_properties=use_id_properties,
            max_workers=config.CODEGEN_MAX_WORKERS,
        )

    def __repr__(self):
        return (f"<CodeWriterSettings(namespace='{self.namespace}', "
                f"default_schema_owner='{self.default_schema_owner}', "
                f"use_foreign_key_id_properties={self.use_foreign_key_id_properties})>")

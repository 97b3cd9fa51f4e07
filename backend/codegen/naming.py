"""
Naming conventions for generated classes, properties and collections.

Table names become singular PascalCase class names, column names become
PascalCase property names, and child collections use the English plural
of the child class name.
"""

import re
from typing import Dict, Iterable, Optional, Set

_RE_SEPARATORS = re.compile(r'[_\s\-\.]+')
_RE_LAST_WORD = re.compile(r'([A-Z]?[a-z0-9]*)$')
_RE_ID_SUFFIX = re.compile(r'(?:_[iI][dD]|I[dD])$')

_IRREGULAR = {
    'person': 'people',
    'child': 'children',
    'man': 'men',
    'woman': 'women',
    'mouse': 'mice',
    'goose': 'geese',
    'foot': 'feet',
    'tooth': 'teeth',
    'ox': 'oxen',
}
_IRREGULAR_SINGULAR = {plural: single for single, plural in _IRREGULAR.items()}

_UNCOUNTABLE = {
    'equipment', 'information', 'money', 'species', 'series', 'fish',
    'sheep', 'deer', 'news', 'data', 'metadata', 'staff',
}

# (pattern, replacement) pairs, first match wins
_PLURAL_RULES = [
    (re.compile(r'(quiz)$', re.IGNORECASE), r'\1zes'),
    (re.compile(r'(matr|vert|ind)(?:ix|ex)$', re.IGNORECASE), r'\1ices'),
    (re.compile(r'(x|ch|ss|sh|s|z)$', re.IGNORECASE), r'\1es'),
    (re.compile(r'([^aeiouy])y$', re.IGNORECASE), r'\1ies'),
    (re.compile(r'(?:([^f])fe|([lr])f)$', re.IGNORECASE), r'\1\2ves'),
    (re.compile(r'$'), 's'),
]

_SINGULAR_RULES = [
    (re.compile(r'(quiz)zes$', re.IGNORECASE), r'\1'),
    (re.compile(r'(matr|vert|ind)ices$', re.IGNORECASE), r'\1ix'),
    (re.compile(r'(x|ch|ss|sh|z)es$', re.IGNORECASE), r'\1'),
    (re.compile(r'(alias|bus|status)es$', re.IGNORECASE), r'\1'),
    (re.compile(r'([^aeiouy])ies$', re.IGNORECASE), r'\1y'),
    (re.compile(r'([lr])ves$', re.IGNORECASE), r'\1f'),
    (re.compile(r'(ss|us|is)$', re.IGNORECASE), r'\1'),
    (re.compile(r's$', re.IGNORECASE), ''),
]


def _match_case(source: str, word: str) -> str:
    """Copy the capitalisation of source's first letter onto word."""
    if source[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


def _inflect_last_word(name: str, irregular: dict, rules) -> str:
    match = _RE_LAST_WORD.search(name)
    head, word = name[:match.start(1)], match.group(1)
    if not word:
        return name
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return name
    if lower in irregular:
        return head + _match_case(word, irregular[lower])
    for pattern, replacement in rules:
        if pattern.search(word):
            return head + pattern.sub(replacement, word, count=1)
    return name


def pluralize(name: str) -> str:
    """Pluralize the last word of a PascalCase name ('OrderLine' -> 'OrderLines')."""
    if not name:
        return name
    return _inflect_last_word(name, _IRREGULAR, _PLURAL_RULES)


def singularize(name: str) -> str:
    """Singularize the last word of a PascalCase name ('Categories' -> 'Category')."""
    if not name:
        return name
    return _inflect_last_word(name, _IRREGULAR_SINGULAR, _SINGULAR_RULES)


def to_pascal_case(name: str) -> str:
    """Convert a physical database name to PascalCase ('order_line' -> 'OrderLine').

    Names without separators keep their inner casing, so 'OrderLine' is
    returned unchanged.
    """
    parts = [p for p in _RE_SEPARATORS.split(name.strip()) if p]
    if not parts:
        return name
    if len(parts) > 1:
        parts = [p.lower() if p.isupper() else p for p in parts]
    pascal = ''.join(p[:1].upper() + p[1:] for p in parts)
    if pascal[:1].isdigit():
        pascal = '_' + pascal
    return pascal


def strip_id_suffix(name: str) -> str:
    """Drop a trailing 'Id'/'_id' from a column name ('CustomerId' -> 'Customer')."""
    return _RE_ID_SUFFIX.sub('', name)


# ---------------------------------------------------------------------------
# Namers
# ---------------------------------------------------------------------------

class SchemaNamer:
    """Derives class and property names for schema objects."""

    def name_class(self, table_name: str) -> str:
        return singularize(to_pascal_case(table_name))

    def name_property(self, column_name: str) -> str:
        return to_pascal_case(column_name)

    def name_navigation(self, column_name: str, referenced_class: Optional[str]) -> str:
        """Name the navigation property for a foreign key column.

        'CustomerId' becomes 'Customer'. Columns that are nothing but an id
        suffix fall back to the referenced class name.
        """
        stripped = strip_id_suffix(column_name)
        if stripped:
            return to_pascal_case(stripped)
        return referenced_class or to_pascal_case(column_name)


class MappingNamer:
    """Names mapping classes, avoiding clashes with entity class names.

    Names are claimed in call order, so a namer built with for_tables()
    settles every table's name up front, in table order. After that,
    name_table() only looks names up and is safe to call from several
    threads.
    """

    def __init__(self, entity_names: Iterable[str] = ()):
        self.entity_names: Set[str] = set(entity_names)
        self._used: Set[str] = set()
        self._assigned: Dict[str, str] = {}

    @classmethod
    def for_tables(cls, tables) -> 'MappingNamer':
        tables = list(tables)
        namer = cls(t.class_name for t in tables)
        for table in tables:
            namer.name_table(table)
        return namer

    def name_table(self, table) -> str:
        """Mapping class name for table; repeated calls return the same name."""
        name = self._assigned.get(table.name)
        if name is None:
            name = self.name_mapping_class(table.class_name)
            self._assigned[table.name] = name
        return name

    def name_mapping_class(self, class_name: str) -> str:
        name = class_name + 'Mapping'
        if name in self.entity_names:
            name = class_name + 'Map'
        candidate = name
        suffix = 1
        while candidate in self._used or candidate in self.entity_names:
            candidate = f'{name}{suffix}'
            suffix += 1
        self._used.add(candidate)
        return candidate

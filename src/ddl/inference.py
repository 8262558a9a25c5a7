"""Implicit foreign-key inference from ``<table>_id`` column names.

A heuristic, not a validation: the singular form of a table name is a blind
trailing-``s`` strip, so irregular plurals (``people``, ``children``) are never
matched, and ``*_id`` columns without a matching table stay unlinked.
"""

import logging
from typing import Dict, List, Tuple

from schema import ForeignKeyRef, Relationship, Schema

logger = logging.getLogger(__name__)

FK_SUFFIX = "_id"


def singularize(name: str) -> str:
    """Strip one trailing ``s``."""
    return name[:-1] if name.endswith("s") else name


def table_name_variations(name: str) -> Tuple[str, ...]:
    """Names a referencing column stem may use for table ``name``."""
    singular = singularize(name)
    return (name, singular, name + FK_SUFFIX, singular + FK_SUFFIX)


def infer_relationships(schema: Schema) -> List[Relationship]:
    """Link unreferenced ``*_id`` fields to the primary key of a matching table.

    Mutates ``schema`` (appends relationships, sets ``foreign_key``) and returns
    the relationships that were added, in table then field order. Only tables
    with a primary key are candidates; the first matching table in declaration
    order wins.
    """
    primary_keys: Dict[str, str] = {}
    variations: Dict[str, Tuple[str, ...]] = {}
    for table in schema.tables:
        pk = table.primary_key_field()
        if pk is None or table.name in primary_keys:
            continue
        primary_keys[table.name] = pk.name
        variations[table.name] = table_name_variations(table.name)

    added: List[Relationship] = []
    for table in schema.tables:
        for field in table.fields:
            if field.foreign_key is not None or field.primary_key:
                continue
            if not field.name.endswith(FK_SUFFIX):
                continue
            stem = field.name[: -len(FK_SUFFIX)]
            if not stem:
                continue

            accepted = (stem, stem + "s", field.name)
            for target, names in variations.items():
                if not any(variation in accepted for variation in names):
                    continue
                pk_name = primary_keys[target]
                exists = any(
                    rel.from_table == table.name
                    and rel.from_field == field.name
                    and rel.to_table == target
                    for rel in schema.relationships
                )
                if not exists:
                    relationship = Relationship(
                        from_table=table.name,
                        from_field=field.name,
                        to_table=target,
                        to_field=pk_name,
                    )
                    schema.relationships.append(relationship)
                    field.foreign_key = ForeignKeyRef(table=target, column=pk_name)
                    added.append(relationship)
                    logger.debug("Inferred relationship %s", relationship)
                break
    return added

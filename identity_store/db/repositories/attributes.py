"""
Extra attribute storage.

Generic key/value extension of a fixed-schema entity. Rows are namespaced by
an entity kind string (e.g. "user") so one table serves every entity type.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from identity_store.db import models
from identity_store.db.schemas import Attributer

logger = logging.getLogger(__name__)


def _canonical(value: Any) -> str:
    # 1, 1.0 and True compare equal in Python but are distinct JSON values.
    return json.dumps(value, sort_keys=True)


class AttributeStore:
    def __init__(self, entity_kind: str) -> None:
        self.entity_kind = entity_kind

    def _query(self, db: Session, entity_id: str):
        return db.query(models.ExtraAttribute).filter(
            models.ExtraAttribute.entity_kind == self.entity_kind,
            models.ExtraAttribute.entity_id == entity_id,
        )

    def get_attributes(self, db: Session, entity_id: str) -> Dict[str, Any]:
        return {row.name: row.value for row in self._query(db, entity_id).all()}

    def load_attributes(self, db: Session, entity_id: str, target: Attributer) -> None:
        """Fill ``target`` with the stored mapping (empty when nothing is stored)."""
        target.set_attributes(self.get_attributes(db, entity_id))

    def store_attributes(
        self,
        db: Session,
        entity_id: str,
        source: Attributer,
        result: Optional[Attributer] = None,
    ) -> None:
        """Reconcile stored rows with the full mapping carried by ``source``.

        New names are inserted, changed values updated and names missing from
        the mapping deleted. When ``result`` is given it receives the mapping
        as persisted.
        """
        desired = source.get_attributes() or {}
        current = {row.name: row for row in self._query(db, entity_id).all()}

        inserted = updated = removed = 0
        for name, value in desired.items():
            if not isinstance(name, str):
                raise TypeError(f"Attribute names must be strings, got {type(name)!r}")
            row = current.get(name)
            if row is None:
                db.add(
                    models.ExtraAttribute(
                        entity_kind=self.entity_kind,
                        entity_id=entity_id,
                        name=name,
                        value=value,
                    )
                )
                inserted += 1
            elif _canonical(row.value) != _canonical(value):
                row.value = value
                updated += 1
        for name, row in current.items():
            if name not in desired:
                db.delete(row)
                removed += 1
        db.flush()

        logger.debug(
            "Reconciled %s attributes for %s: %d inserted, %d updated, %d removed",
            self.entity_kind,
            entity_id,
            inserted,
            updated,
            removed,
        )

        if result is not None:
            self.load_attributes(db, entity_id, result)

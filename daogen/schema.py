# daogen/schema.py
from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, List, Optional

from daogen import type_mapping
from daogen.entity import Entity
from daogen.errors import DeclarationError, ResolutionStateError
from daogen.property_types import PropertyType
from daogen.views import SchemaView, schema_view

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    DECLARING = "DECLARING"
    RESOLVING = "RESOLVING"
    RESOLVED = "RESOLVED"


class Schema:
    """
    Root registry of entities and driver of the resolution passes.

    Declarations (entities, properties, indexes, builder flags) are only
    accepted outside of resolve(). A declaration made after a completed
    resolution puts the schema back into DECLARING, so derived fields
    cannot be read again until resolve() has run over the whole graph.
    """

    def __init__(self, version: int = 1, default_package: Optional[str] = None) -> None:
        self._version = version
        self._default_package = default_package
        self._entities: Dict[str, Entity] = {}
        self._phase = Phase.DECLARING
        self._resolution_cycle = 0

    @property
    def version(self) -> int:
        return self._version

    @version.setter
    def version(self, version: int) -> None:
        self.touch()
        self._version = version

    @property
    def default_package(self) -> Optional[str]:
        return self._default_package

    @default_package.setter
    def default_package(self, package: Optional[str]) -> None:
        self.touch()
        self._default_package = package

    # ---- registry -------------------------------------------------------------

    def add_entity(self, class_name: str) -> Entity:
        if class_name in self._entities:
            raise DeclarationError(f"Entity {class_name!r} already declared")
        self.touch()
        entity = Entity(self, class_name)
        self._entities[class_name] = entity
        return entity

    def get_entity(self, class_name: str) -> Entity:
        try:
            return self._entities[class_name]
        except KeyError:
            raise KeyError(f"No entity {class_name!r} in schema") from None

    @property
    def entities(self) -> List[Entity]:
        return list(self._entities.values())

    # ---- phases -------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def is_resolved(self) -> bool:
        return self._phase is Phase.RESOLVED

    @property
    def resolution_cycle(self) -> int:
        return self._resolution_cycle

    def touch(self) -> None:
        """Called by every declaration; rejects it mid-resolution, reopens a resolved schema."""
        if self._phase is Phase.RESOLVING:
            raise ResolutionStateError("Cannot declare while the schema is being resolved")
        if self._phase is Phase.RESOLVED:
            logger.debug("Declaration after resolution; schema v%s back to DECLARING", self.version)
            self._phase = Phase.DECLARING

    def require_resolved(self, subject: object = None) -> None:
        if self._phase is Phase.DECLARING:
            what = f" of {subject}" if subject is not None else ""
            raise ResolutionStateError(f"Derived fields{what} are not available before Schema.resolve()")

    def resolve(self) -> "Schema":
        if self._phase is Phase.RESOLVING:
            raise ResolutionStateError("Schema.resolve() is already running")
        self._resolution_cycle += 1
        self._phase = Phase.RESOLVING
        try:
            for entity in self._entities.values():
                entity.init_second_pass()
            for entity in self._entities.values():
                entity.init_third_pass()
        except Exception:
            self._phase = Phase.DECLARING
            logger.error("Resolution of schema v%s aborted", self.version)
            raise
        self._phase = Phase.RESOLVED
        logger.info(
            "Resolved schema v%s: %d entities, %d properties",
            self.version, len(self._entities),
            sum(len(e.properties) for e in self._entities.values()),
        )
        return self

    # ---- type mapping ---------------------------------------------------------

    def map_to_db_type(self, property_type: PropertyType) -> str:
        return type_mapping.map_to_db_type(property_type)

    def map_to_target_type_not_null(self, property_type: PropertyType) -> str:
        return type_mapping.map_to_target_type_not_null(property_type)

    def map_to_target_type_nullable(self, property_type: PropertyType) -> str:
        return type_mapping.map_to_target_type_nullable(property_type)

    # ---- export -------------------------------------------------------------------

    def export(self) -> SchemaView:
        return schema_view(self)

    def __repr__(self) -> str:
        return f"Schema v{self.version} ({self._phase.value})"

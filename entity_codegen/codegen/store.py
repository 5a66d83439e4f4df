"""
Entity store boundary.

The generator reads entity and project records through an ``EntityStore``.
Record management itself lives outside this package; the in-memory store
covers the CLI and tests, where records come from a JSON document.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from ..logging_config import get_logger
from .core.schema import Entity, Project

logger = get_logger(__name__)


class StoreError(Exception):
    """Raised when store contents cannot be built or read."""

    pass


class NotFoundError(StoreError):
    """A requested record does not exist."""

    def __init__(self, kind: str, record_id: Any):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class EntityStore(ABC):
    """Read access to entity and project records."""

    @abstractmethod
    def load_entity(self, entity_id: int) -> Entity:
        """
        Raises:
            NotFoundError: If no entity has this id
        """
        pass

    @abstractmethod
    def load_project(self, project_id: int) -> Project:
        """
        Raises:
            NotFoundError: If no project has this id
        """
        pass

    @abstractmethod
    def list_entities(self, project_id: int) -> List[Entity]:
        """Entities owned by a project, in insertion order."""
        pass


class InMemoryEntityStore(EntityStore):
    """Dictionary-backed store."""

    def __init__(self):
        self._projects: Dict[int, Project] = {}
        self._entities: Dict[int, Entity] = {}

    def add_project(self, project: Project) -> Project:
        """
        Raises:
            StoreError: If a project with the same id is already stored
        """
        if project.id in self._projects:
            raise StoreError(f"Duplicate project id {project.id}")
        self._projects[project.id] = project
        return project

    def add_entity(self, entity: Entity) -> Entity:
        """
        Raises:
            StoreError: If an entity with the same id is already stored
        """
        if entity.id in self._entities:
            raise StoreError(f"Duplicate entity id {entity.id} ('{entity.name}')")
        self._entities[entity.id] = entity
        return entity

    def load_entity(self, entity_id: int) -> Entity:
        try:
            return self._entities[entity_id]
        except KeyError:
            raise NotFoundError("entity", entity_id) from None

    def load_project(self, project_id: int) -> Project:
        try:
            return self._projects[project_id]
        except KeyError:
            raise NotFoundError("project", project_id) from None

    def list_entities(self, project_id: int) -> List[Entity]:
        return [e for e in self._entities.values() if e.project_id == project_id]

    def list_projects(self) -> List[Project]:
        return list(self._projects.values())

    def find_entity(self, name: str, project_id: Optional[int] = None) -> Entity:
        """
        Look up an entity by name (case-insensitive).

        Raises:
            NotFoundError: If no entity has this name
        """
        wanted = name.strip().lower()
        for entity in self._entities.values():
            if project_id is not None and entity.project_id != project_id:
                continue
            if entity.name.lower() == wanted:
                return entity
        raise NotFoundError("entity", name)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "InMemoryEntityStore":
        """
        Build a store from a JSON document.

        Accepted shapes::

            {"project": {...}, "entities": [...]}
            {"projects": [...], "entities": [...]}

        Records without an ``id`` are numbered from 1, skipping ids other
        records already use. Entities without a ``project_id`` belong to the
        document's only project.

        Raises:
            StoreError: If the document shape is not recognized or two
                records share an id
        """
        if not isinstance(document, Mapping):
            raise StoreError(f"Entity document must be an object, got {type(document).__name__}")

        if "project" in document:
            raw_projects = [document["project"]]
        else:
            raw_projects = document.get("projects") or []
        if not isinstance(raw_projects, list) or not raw_projects:
            raise StoreError("Entity document must define 'project' or a non-empty 'projects' list")

        raw_entities = document.get("entities") or []
        if not isinstance(raw_entities, list):
            raise StoreError("'entities' must be a list")

        store = cls()
        project_ids = _assign_ids(raw_projects)
        for position, (raw, project_id) in enumerate(zip(raw_projects, project_ids), start=1):
            store.add_project(_project_from_dict(raw, position, project_id))

        default_project_id = store.list_projects()[0].id if len(raw_projects) == 1 else None

        entity_ids = _assign_ids(raw_entities)
        for position, (raw, entity_id) in enumerate(zip(raw_entities, entity_ids), start=1):
            entity = _entity_from_dict(raw, position, entity_id, default_project_id)
            if entity.project_id not in store._projects:
                raise StoreError(f"Entity '{entity.name}' refers to unknown project {entity.project_id}")
            store.add_entity(entity)

        logger.debug(
            "Loaded %d project(s) and %d entit(ies) from document",
            len(store._projects),
            len(store._entities),
        )
        return store


def _assign_ids(raws: List[Any]) -> List[Any]:
    """Explicit ids as given; missing ones numbered from 1, skipping ids already taken."""
    taken = {raw["id"] for raw in raws if isinstance(raw, Mapping) and raw.get("id") is not None}
    ids = []
    next_id = 1
    for raw in raws:
        if isinstance(raw, Mapping) and raw.get("id") is not None:
            ids.append(raw["id"])
            continue
        while next_id in taken:
            next_id += 1
        ids.append(next_id)
        taken.add(next_id)
    return ids


def _project_from_dict(raw: Any, position: int, project_id: Any) -> Project:
    if not isinstance(raw, Mapping):
        raise StoreError(f"Project #{position} must be an object")
    return Project(
        id=project_id,
        name=raw.get("name", ""),
        description=raw.get("description", ""),
        status=raw.get("status", "active"),
        namespace=raw.get("namespace", ""),
    )


def _entity_from_dict(raw: Any, position: int, entity_id: Any, default_project_id: Optional[int]) -> Entity:
    if not isinstance(raw, Mapping):
        raise StoreError(f"Entity #{position} must be an object")

    project_id = raw.get("project_id", raw.get("projectId", default_project_id))
    if project_id is None:
        raise StoreError(f"Entity #{position} needs a project_id when the document has several projects")

    return Entity(
        id=entity_id,
        project_id=project_id,
        name=raw.get("name", ""),
        table_name=raw.get("table_name", raw.get("tableName", "")),
        fields=raw.get("fields", []),
        description=raw.get("description", ""),
    )

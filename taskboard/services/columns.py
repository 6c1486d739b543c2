"""Column lifecycle: create, delete-if-empty and default seeding."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional

from taskboard.config import Settings, settings as default_settings
from taskboard.errors import ConflictError, NotFoundError, ValidationError
from taskboard.models import TaskColumn
from taskboard.schemas import ColumnCreate
from taskboard.services.placement import PlacementEngine

logger = logging.getLogger(__name__)


class ColumnLifecycleManager:
    def __init__(self, placement: PlacementEngine, settings: Optional[Settings] = None) -> None:
        self.placement = placement
        self.store = placement.store
        self.settings = settings or default_settings
        # Column positions form one board-wide sequence.
        self._ordering_lock = threading.Lock()

    def _clean_name(self, name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Column name is required")
        if len(name) > self.settings.COLUMN_NAME_MAX_LENGTH:
            raise ValidationError(f"Column name must be at most {self.settings.COLUMN_NAME_MAX_LENGTH} characters")
        return name

    def create(self, column_in: ColumnCreate) -> TaskColumn:
        name = self._clean_name(column_in.name)
        with self._ordering_lock:
            with self.store.transaction() as tx:
                column = TaskColumn(name=name, sort_order=tx.get_max_column_sort_order() + 1)
                tx.add(column)
                tx.flush()

        logger.info("Created column %s '%s' at %s", column.id, column.name, column.sort_order)
        return column

    def delete(self, column_id: int) -> None:
        """Delete an empty column; refuse while any task still lives in it."""
        with self.placement.column_scope(column_id) as tx:
            column = tx.get_column(column_id)
            if column is None:
                raise NotFoundError(f"Column {column_id} not found")
            if tx.count_tasks(column_id) > 0:
                raise ConflictError("Cannot delete column with existing tasks")
            tx.delete(column)

        logger.info("Deleted column %s", column_id)

    def seed_defaults(self, names: Optional[Iterable[str]] = None) -> List[TaskColumn]:
        """Create the default columns on an empty board; no-op otherwise."""
        names = list(names if names is not None else self.settings.default_column_names)
        with self.store.snapshot() as tx:
            if tx.get_columns():
                return []
        created = [self.create(ColumnCreate(name=name)) for name in names]
        if created:
            logger.info("Seeded %d default columns", len(created))
        return created

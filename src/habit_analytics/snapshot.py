"""JSON snapshots of habits and stacks exported by the persistence layer."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field, ValidationError as PydanticValidationError

from .exceptions import ErrorCode, SnapshotError
from .models.base import CamelModel
from .models.habit import Habit, HabitStack


logger = logging.getLogger(__name__)


class HabitSnapshot(CamelModel):
    """Every habit (with completions) and stack at one point in time."""

    habits: List[Habit] = Field(default_factory=list)
    stacks: List[HabitStack] = Field(default_factory=list)
    exported_at: Optional[datetime] = None


def load_snapshot(path: Union[str, Path]) -> HabitSnapshot:
    """
    Read a snapshot file.

    Raises:
        SnapshotError: If the file can't be read or doesn't describe
            valid habits and stacks.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(
            f"Cannot read snapshot: {e}",
            path=str(path),
            code=ErrorCode.SNAPSHOT_UNREADABLE,
        ) from e

    try:
        snapshot = HabitSnapshot.model_validate_json(raw)
    except PydanticValidationError as e:
        raise SnapshotError(
            f"Invalid snapshot: {e.error_count()} error(s)",
            path=str(path),
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e

    logger.debug(
        f"Loaded snapshot {path}: {len(snapshot.habits)} habits, {len(snapshot.stacks)} stacks"
    )
    return snapshot

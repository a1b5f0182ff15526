"""Per-user course progress.

A ProgressRecord holds every course a user is enrolled in, each with an
ordered list of steps. Steps only ever go from incomplete to complete.
Course and account percentages are derived and recomputed on every
transition:

    course.progress   = round_half_up(100 * completed_steps / total_steps)
    course.completed  = course.progress == 100
    totalProgress     = round_half_up(100 * len(completedModules) / total_courses)

ProgressStore creates and reads records; ProgressEngine is the only
writer.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

import structlog

from training.config.courses import CourseTemplate
from training.core.errors import (
    CourseNotFoundError,
    ProgressExistsError,
    ProgressNotFoundError,
    StepNotFoundError,
)
from training.db.stores import KeyValueStore
from training.utils.validators import parse_step_id

logger = structlog.get_logger(__name__)

PROGRESS_NAMESPACE = "progress"


def percent(part: int, total: int) -> int:
    """Integer percentage rounded half up. 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * part + total) // (2 * total)


# =============================================================================
# RECORD
# =============================================================================


@dataclass
class Step:
    id: int
    title: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Step:
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class Course:
    """A course inside a user's progress record."""

    title: str
    steps: list[Step] = field(default_factory=list)
    progress: int = 0
    completed: bool = False

    def get_step(self, step_id: int) -> Step | None:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    @property
    def completed_steps(self) -> int:
        return sum(1 for s in self.steps if s.completed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "progress": self.progress,
            "completed": self.completed,
            "steps": [s.to_dict() for s in self.steps],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Course:
        return cls(
            title=data.get("title", ""),
            steps=[Step.from_dict(s) for s in data.get("steps", [])],
            progress=int(data.get("progress", 0)),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class ProgressRecord:
    """All course progress for one user."""

    completed_modules: list[str] = field(default_factory=list)
    current_module: str | None = None
    total_progress: int = 0
    courses: dict[str, Course] = field(default_factory=dict)

    @classmethod
    def from_template(cls, template: list[CourseTemplate]) -> ProgressRecord:
        """Build a fresh record with every step incomplete."""
        return cls(
            courses={
                c.id: Course(
                    title=c.title,
                    steps=[Step(id=s.id, title=s.title) for s in c.steps],
                )
                for c in template
            }
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase JSON shape served by the API."""
        return {
            "completedModules": list(self.completed_modules),
            "currentModule": self.current_module,
            "totalProgress": self.total_progress,
            "courses": {cid: c.to_dict() for cid, c in self.courses.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgressRecord:
        return cls(
            completed_modules=list(data.get("completedModules", [])),
            current_module=data.get("currentModule"),
            total_progress=int(data.get("totalProgress", 0)),
            courses={
                cid: Course.from_dict(c) for cid, c in data.get("courses", {}).items()
            },
        )


# =============================================================================
# STORE
# =============================================================================


class ProgressStore:
    """Creates and reads progress records.

    Reads return detached copies; writes go through ProgressEngine.
    """

    def __init__(self, backend: KeyValueStore, template: list[CourseTemplate]):
        self._backend = backend
        self._template = template

    @property
    def template(self) -> list[CourseTemplate]:
        return self._template

    def create(self, user_id: int) -> ProgressRecord:
        """Initialize a record for a new user.

        Raises:
            ProgressExistsError: If the user already has a record
        """
        record = ProgressRecord.from_template(self._template)
        if not self._backend.insert(PROGRESS_NAMESPACE, str(user_id), record.to_dict()):
            raise ProgressExistsError(user_id)
        logger.debug("progress_created", user_id=user_id, courses=list(record.courses))
        return record

    def get(self, user_id: int) -> ProgressRecord:
        """Get a user's record.

        Raises:
            ProgressNotFoundError: If the user has no record
        """
        data = self._backend.get(PROGRESS_NAMESPACE, str(user_id))
        if data is None:
            raise ProgressNotFoundError(user_id)
        return ProgressRecord.from_dict(data)

    def _write(self, user_id: int, record: ProgressRecord) -> None:
        self._backend.put(PROGRESS_NAMESPACE, str(user_id), record.to_dict())


# =============================================================================
# ENGINE
# =============================================================================


class ProgressEngine:
    """Applies step completions to progress records.

    Each user's read-modify-write runs under that user's lock, so
    concurrent requests for the same user are serialized.
    """

    def __init__(self, store: ProgressStore):
        self._store = store
        self._locks: dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, user_id: int) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = self._locks[user_id] = threading.Lock()
            return lock

    def complete_step(self, user_id: int, course_id: str, step_id: int | str) -> ProgressRecord:
        """Mark a step complete and recompute aggregates.

        Completing an already completed step changes nothing.

        Args:
            user_id: Owner of the progress record
            course_id: Key in the record's course mapping
            step_id: Step id (a string from a URL is parsed as int)

        Returns:
            The updated ProgressRecord

        Raises:
            ProgressNotFoundError: Unknown user
            CourseNotFoundError: Unknown course for this user
            StepNotFoundError: Unknown step in the course
        """
        with self._lock_for(user_id):
            record = self._store.get(user_id)

            course = record.courses.get(course_id)
            if course is None:
                raise CourseNotFoundError(course_id)

            parsed = parse_step_id(step_id)
            step = course.get_step(parsed) if parsed is not None else None
            if step is None:
                raise StepNotFoundError(course_id, step_id)

            was_completed = course.completed
            step.completed = True
            _recompute(record, course_id)
            self._store._write(user_id, record)

        logger.info(
            "step_completed",
            user_id=user_id,
            course_id=course_id,
            step_id=step.id,
            course_progress=course.progress,
            total_progress=record.total_progress,
        )
        if course.completed and not was_completed:
            logger.info("course_completed", user_id=user_id, course_id=course_id)

        return record


def _recompute(record: ProgressRecord, course_id: str) -> None:
    """Refresh derived fields after a step of course_id changed."""
    course = record.courses[course_id]
    course.progress = percent(course.completed_steps, len(course.steps))

    if course.steps and course.progress == 100:
        course.completed = True
        if course_id not in record.completed_modules:
            record.completed_modules.append(course_id)

    record.total_progress = percent(len(record.completed_modules), len(record.courses))

"""Course data loader.

Loads the per-user course template and the module catalog content from
data/config/courses_v1.yaml. The template decides which courses and
steps every new account starts with; the catalog holds the instructional
content shown by the module viewer.

Usage:
    from training.config.courses import load_course_data

    data = load_course_data()
    template = data.template        # list[CourseTemplate]
    content = data.modules          # dict[str, ModuleContent]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
COURSES_FILE = Path("data/config/courses_v1.yaml")


@dataclass
class StepTemplate:
    """A step as it appears in a fresh progress record."""

    id: int
    title: str


@dataclass
class CourseTemplate:
    """A course as it appears in a fresh progress record."""

    id: str
    title: str
    steps: list[StepTemplate] = field(default_factory=list)


@dataclass
class ArContent:
    model: str = ""
    instructions: str = ""


@dataclass
class ModuleStep:
    """Instructional content for one step of a module."""

    id: int
    title: str
    content: str = ""
    video_timestamp: str = ""
    ar_trigger: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "videoTimestamp": self.video_timestamp,
            "arTrigger": self.ar_trigger,
        }


@dataclass
class ModuleContent:
    """Read-only catalog entry for a training module."""

    id: str
    title: str
    description: str = ""
    duration: str = ""
    difficulty: str = ""
    video_url: str = ""
    ar_content: ArContent = field(default_factory=ArContent)
    steps: list[ModuleStep] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape served by the API."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "duration": self.duration,
            "difficulty": self.difficulty,
            "videoUrl": self.video_url,
            "arContent": {
                "model": self.ar_content.model,
                "instructions": self.ar_content.instructions,
            },
            "steps": [s.to_dict() for s in self.steps],
        }


@dataclass
class CourseData:
    """Everything loaded from the courses file."""

    template: list[CourseTemplate]
    modules: dict[str, ModuleContent]


def _get_defaults() -> dict[str, Any]:
    """Get built-in course data when the config file is missing."""
    return {
        "course_template": {
            "welding-101": {
                "title": "Welding 101",
                "steps": [
                    {"id": 1, "title": "Safety Equipment"},
                    {"id": 2, "title": "Basic Techniques"},
                    {"id": 3, "title": "Practice Session"},
                    {"id": 4, "title": "Final Assessment"},
                ],
            },
        },
        "modules": {
            "welding-101": {
                "title": "Welding 101: Fundamentals",
                "description": (
                    "Learn the basics of welding with AI-powered guidance "
                    "and AR visualization"
                ),
                "duration": "2 hours",
                "difficulty": "Beginner",
                "video_url": "/api/videos/welding-101-intro.mp4",
                "ar_content": {
                    "model": "welding-torch-3d",
                    "instructions": (
                        "Point your device at the welding station to see AR overlay"
                    ),
                },
                "steps": [
                    {
                        "id": 1,
                        "title": "Safety Equipment Overview",
                        "content": (
                            "Before starting any welding work, proper safety equipment "
                            "is essential. This includes welding helmets with "
                            "auto-darkening filters, flame-resistant clothing, welding "
                            "gloves, and proper ventilation."
                        ),
                        "video_timestamp": "0:00-2:30",
                        "ar_trigger": "safety-equipment",
                    },
                    {
                        "id": 2,
                        "title": "Basic Welding Techniques",
                        "content": (
                            "Learn the fundamental welding positions and movements. "
                            "Start with the basic bead technique, maintaining "
                            "consistent speed and angle."
                        ),
                        "video_timestamp": "2:30-8:15",
                        "ar_trigger": "welding-technique",
                    },
                    {
                        "id": 3,
                        "title": "Hands-on Practice Session",
                        "content": (
                            "Apply what you've learned in a guided practice session. "
                            "The AI will analyze your technique and provide real-time "
                            "feedback."
                        ),
                        "video_timestamp": "8:15-15:00",
                        "ar_trigger": "practice-session",
                    },
                    {
                        "id": 4,
                        "title": "Final Assessment",
                        "content": (
                            "Complete a welding project to demonstrate your newly "
                            "acquired skills. Your work will be evaluated against "
                            "industry standards."
                        ),
                        "video_timestamp": "15:00-20:00",
                        "ar_trigger": "final-assessment",
                    },
                ],
            },
        },
    }


def _parse_template(data: dict[str, Any]) -> list[CourseTemplate]:
    courses = []
    for cid, cdata in (data or {}).items():
        steps = [
            StepTemplate(id=int(s["id"]), title=s.get("title", ""))
            for s in cdata.get("steps", [])
        ]
        ids = [s.id for s in steps]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate step id in course template '{cid}'")
        courses.append(CourseTemplate(id=cid, title=cdata.get("title", cid), steps=steps))
    return courses


def _parse_modules(data: dict[str, Any]) -> dict[str, ModuleContent]:
    modules = {}
    for mid, mdata in (data or {}).items():
        ar_data = mdata.get("ar_content") or {}
        modules[mid] = ModuleContent(
            id=mdata.get("id", mid),
            title=mdata.get("title", mid),
            description=mdata.get("description", ""),
            duration=mdata.get("duration", ""),
            difficulty=mdata.get("difficulty", ""),
            video_url=mdata.get("video_url", ""),
            ar_content=ArContent(
                model=ar_data.get("model", ""),
                instructions=ar_data.get("instructions", ""),
            ),
            steps=[
                ModuleStep(
                    id=int(s["id"]),
                    title=s.get("title", ""),
                    content=s.get("content", ""),
                    video_timestamp=s.get("video_timestamp", ""),
                    ar_trigger=s.get("ar_trigger", ""),
                )
                for s in mdata.get("steps", [])
            ],
        )
    return modules


def load_course_data(courses_file: Path | None = None) -> CourseData:
    """Load course template and module catalog.

    Args:
        courses_file: YAML file to read. Defaults to data/config/courses_v1.yaml

    Returns:
        CourseData with the template and catalog.

    Raises:
        ValueError: If a course template repeats a step id.
    """
    path = courses_file or COURSES_FILE

    if path.exists():
        logger.debug("loading_course_data", source=str(path))
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        logger.warning("courses_file_not_found", path=str(path))
        data = _get_defaults()

    course_data = CourseData(
        template=_parse_template(data.get("course_template", {})),
        modules=_parse_modules(data.get("modules", {})),
    )
    logger.info(
        "course_data_loaded",
        courses=[c.id for c in course_data.template],
        modules=list(course_data.modules),
    )
    return course_data

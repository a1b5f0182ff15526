"""Configuration package for the training platform."""

from training.config.app_config import (
    AppConfig,
    AuthConfig,
    MediaConfig,
    ServerConfig,
    StorageConfig,
    clear_config_cache,
    load_app_config,
)
from training.config.courses import (
    CourseData,
    CourseTemplate,
    ModuleContent,
    StepTemplate,
    load_course_data,
)

__all__ = [
    "AppConfig",
    "AuthConfig",
    "MediaConfig",
    "ServerConfig",
    "StorageConfig",
    "clear_config_cache",
    "load_app_config",
    "CourseData",
    "CourseTemplate",
    "ModuleContent",
    "StepTemplate",
    "load_course_data",
]

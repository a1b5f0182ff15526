"""Read-only module catalog."""

from __future__ import annotations

from training.config.courses import ModuleContent
from training.core.errors import TrainingModuleNotFoundError


class ModuleCatalog:
    """Static training module content keyed by module id."""

    def __init__(self, modules: dict[str, ModuleContent]):
        self._modules = dict(modules)

    def get(self, module_id: str) -> ModuleContent:
        """Get a module.

        Raises:
            TrainingModuleNotFoundError: Unknown module id
        """
        module = self._modules.get(module_id)
        if module is None:
            raise TrainingModuleNotFoundError(module_id)
        return module

    def list_modules(self) -> list[ModuleContent]:
        return list(self._modules.values())

    def __contains__(self, module_id: str) -> bool:
        return module_id in self._modules

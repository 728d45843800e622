"""Field Module Loader - imports the modules that declare quick edit fields"""

import importlib
from typing import Iterable

from core.logging_config import get_logger
from services.quick_edit_registry import QuickEditRegistry

logger = get_logger(__name__)


def load_field_modules(registry: QuickEditRegistry, module_names: Iterable[str]) -> list[str]:
    """
    Import each module and call its register(registry) function.

    Modules without a register function are skipped with a warning. Import
    and configuration errors propagate so a broken field declaration stops
    the application from starting.
    """
    loaded = []

    for module_name in module_names:
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.error(f"Failed to import quick edit field module '{module_name}': {e}")
            raise

        register = getattr(module, "register", None)
        if not callable(register):
            logger.warning(f"Quick edit field module '{module_name}' has no register(registry) function")
            continue

        register(registry)
        loaded.append(module_name)
        logger.info(f"Loaded quick edit field module: {module_name}")

    return loaded

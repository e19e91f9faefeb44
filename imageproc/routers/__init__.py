import importlib
import logging
import pkgutil
from typing import List

from fastapi import APIRouter, FastAPI

logger = logging.getLogger(__name__)


def register_routers(app: FastAPI) -> List[str]:
    """Include the ``router`` of every plain module in this package, in name order."""
    registered: List[str] = []

    for module_info in sorted(pkgutil.iter_modules(__path__), key=lambda m: m.name):
        if module_info.ispkg or module_info.name.startswith("_"):
            continue

        module = importlib.import_module(f"{__name__}.{module_info.name}")
        router = getattr(module, "router", None)
        if not isinstance(router, APIRouter):
            continue

        app.include_router(router)
        registered.append(module_info.name)

    logger.debug("Registered routers: %s", ", ".join(registered))
    return registered

import pkgutil
from importlib import import_module

from fastapi import APIRouter

import socialnet.api.http as http_package
from socialnet.logging import logger


def collect_subrouters() -> APIRouter:
    """
    Include the ``router`` of every module in ``socialnet.api.http``.

    Modules are visited in name order, so adding an endpoint module is
    enough to expose it; nothing has to be registered by hand.
    """
    main_router = APIRouter()

    for module_info in sorted(
        pkgutil.iter_modules(http_package.__path__), key=lambda m: m.name
    ):
        module = import_module(f"{http_package.__name__}.{module_info.name}")
        main_router.include_router(module.router)
        logger.debug(f'Registered "{module_info.name}" routes')

    return main_router

"""Process-wide tool catalog, loaded once at startup."""

import logging
from enum import Enum
from typing import Any, Optional

from nexflow.adapters.veyrax_client import VeyraXClient, veyrax_client
from nexflow.infra.errors import CatalogLoadError, CatalogNotReady

logger = logging.getLogger(__name__)


class CatalogState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ToolCatalog:
    """Set-once cell holding the tool provider's catalog.

    Starts in LOADING. Moves to READY exactly once when a value is assigned,
    or to FAILED when the load errors. The value is never replaced.
    """

    def __init__(self):
        self._state = CatalogState.LOADING
        self._value: Any = None
        self._error: Optional[str] = None

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state is CatalogState.READY

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def value(self) -> Any:
        """Return the catalog, or raise CatalogNotReady if it was never loaded."""
        if not self.ready:
            raise CatalogNotReady()
        return self._value

    def set(self, value: Any) -> None:
        if self._state is not CatalogState.LOADING:
            raise RuntimeError(f"Tool catalog already {self._state.value}")
        self._value = value
        self._state = CatalogState.READY

    def fail(self, error: str) -> None:
        if self._state is not CatalogState.LOADING:
            raise RuntimeError(f"Tool catalog already {self._state.value}")
        self._error = error
        self._state = CatalogState.FAILED


tool_catalog = ToolCatalog()


async def load_tool_catalog(
    catalog: ToolCatalog = tool_catalog,
    client: VeyraXClient = veyrax_client,
) -> ToolCatalog:
    """
    Fetch the catalog once and store it.

    A failed fetch is logged and leaves the catalog FAILED; it is not retried
    and does not raise.
    """
    try:
        tools = await client.get_tools()
    except Exception as e:
        error = CatalogLoadError(f"Error fetching tools: {e}")
        logger.error(error.message, exc_info=True, extra={"category": error.category.value})
        catalog.fail(error.message)
        return catalog

    catalog.set(tools)
    count = len(tools) if isinstance(tools, (list, dict)) else None
    logger.info("Tool catalog loaded", extra={"entries": count})
    logger.debug("Tool catalog contents", extra={"catalog": tools})
    return catalog

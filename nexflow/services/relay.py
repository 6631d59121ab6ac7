"""Per-request pipeline: select a tool, execute it, explain the result."""

import logging
from typing import Any, Dict

from nexflow.adapters.vendor_adapter_openai import OpenAIChatClient, openai_chat_client
from nexflow.adapters.veyrax_client import VeyraXClient, veyrax_client
from nexflow.infra.errors import RelayError, UpstreamError
from nexflow.services.result_explainer import explain_result
from nexflow.services.tool_catalog import ToolCatalog, tool_catalog
from nexflow.services.tool_selector import select_tool

logger = logging.getLogger(__name__)


class RequestRelay:
    """Runs the three upstream calls of one request, strictly in order.

    The relay holds no per-request state, so one instance serves all
    concurrent requests.
    """

    def __init__(self, llm: OpenAIChatClient, tools: VeyraXClient, catalog: ToolCatalog):
        self.llm = llm
        self.tools = tools
        self.catalog = catalog

    async def process(self, question: str) -> Dict[str, Any]:
        """
        Answer a question through the tool provider.

        Args:
            question: Non-empty user question

        Returns:
            Dict with gpt_response, tool_result, final_response and success

        Raises:
            CatalogNotReady: If the tool catalog was never loaded
            UpstreamError: If any upstream step fails; later steps do not run
        """
        catalog = self.catalog.value

        try:
            selection = await select_tool(self.llm, question, catalog)
            tool_result = await self.tools.call_tool(
                selection.tool,
                selection.method,
                selection.parameters,
            )
            final_response = await explain_result(self.llm, question, tool_result)
        except RelayError as e:
            logger.error(
                f"Relay failed: {e.message}",
                exc_info=True,
                extra={
                    "category": e.category.value,
                    "provider": getattr(e, "provider", None),
                    "upstream_status": getattr(e, "upstream_status", None),
                },
            )
            raise
        except Exception as e:
            logger.error(f"Relay failed: {e}", exc_info=True)
            raise UpstreamError(str(e), provider="relay") from e

        return {
            "gpt_response": selection.model_dump(),
            "tool_result": tool_result,
            "final_response": final_response,
            "success": True,
        }


request_relay = RequestRelay(openai_chat_client, veyrax_client, tool_catalog)


def get_relay() -> RequestRelay:
    """FastAPI dependency returning the process-wide relay."""
    return request_relay

"""VeyraX tool provider client: tool catalog and tool execution."""

import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from nexflow.infra.config import config
from nexflow.infra.errors import UpstreamError, wrap_http_error

logger = logging.getLogger(__name__)

PROVIDER = "veyrax"

DOT_SEGMENTS = (".", "..")


def path_segment(value: str) -> str:
    """Percent-encode a value so it stays one path segment, dots included."""
    segment = quote(str(value), safe="")
    if segment in DOT_SEGMENTS:
        # quote() leaves '.' alone and httpx would resolve the dot segment
        segment = segment.replace(".", "%2E")
    return segment


class VeyraXClient:
    """Client for the VeyraX REST API.

    Every request carries the static API key in a ``VEYRAX_API_KEY`` header.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout

    @property
    def api_key(self) -> str:
        api_key = self._api_key or config.VEYRAX_API_KEY
        if not api_key:
            raise ValueError("VEYRAX_API_KEY not configured")
        return api_key

    @property
    def base_url(self) -> str:
        return (self._base_url or config.VEYRAX_BASE_URL).rstrip("/")

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout if self._timeout is not None else config.UPSTREAM_TIMEOUT

    @property
    def headers(self) -> Dict[str, str]:
        return {"VEYRAX_API_KEY": self.api_key}

    def tool_call_url(self, tool_name: str, method_name: str) -> str:
        """
        Build the tool-call URL for a tool and method.

        Both names come from the language model, so each is encoded as a
        single path segment: '/', '?' and '#' are percent-encoded, and the
        dot segments '.' and '..' become '%2E' and '%2E%2E' so URL
        normalization cannot move the request outside /tool-call/.
        """
        return (
            f"{self.base_url}/tool-call/"
            f"{path_segment(tool_name)}/{path_segment(method_name)}"
        )

    async def get_tools(self) -> Any:
        """
        Fetch the tool catalog.

        Returns:
            Provider-defined JSON describing the available tools

        Raises:
            UpstreamError: On network failure, non-2xx status or invalid JSON
        """
        url = f"{self.base_url}/get-tools"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(url, headers=self.headers)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPError as e:
                raise wrap_http_error(e, PROVIDER) from e
            except ValueError as e:
                raise UpstreamError(f"VeyraX returned invalid JSON: {e}", provider=PROVIDER) from e

    async def call_tool(self, tool_name: str, method_name: str, parameters: Dict[str, Any]) -> Any:
        """
        Execute a tool method with the given parameters.

        The provider's JSON is returned unmodified, including bodies that
        describe a provider-side error under a 2xx status.

        Args:
            tool_name: Tool selected by the language model
            method_name: Method of that tool
            parameters: JSON object sent as the request body

        Returns:
            Raw JSON result

        Raises:
            UpstreamError: On network failure, non-2xx status or invalid JSON
        """
        url = self.tool_call_url(tool_name, method_name)
        start_time = time.time()
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(url, json=parameters, headers=self.headers)
                response.raise_for_status()
                result = response.json()
            except httpx.HTTPError as e:
                logger.warning(
                    "Tool call failed",
                    extra={"tool": tool_name, "method": method_name, "error": str(e)},
                )
                raise wrap_http_error(e, PROVIDER) from e
            except ValueError as e:
                raise UpstreamError(f"VeyraX returned invalid JSON: {e}", provider=PROVIDER) from e

        logger.info(
            "Tool call completed",
            extra={
                "tool": tool_name,
                "method": method_name,
                "latency_ms": int((time.time() - start_time) * 1000),
            },
        )
        return result


veyrax_client = VeyraXClient()

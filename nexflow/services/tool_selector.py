"""First language-model call: pick a tool, method and parameters."""

import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from nexflow.adapters.vendor_adapter_openai import OpenAIChatClient
from nexflow.infra.errors import MalformedToolSelection
from nexflow.models.tool import ToolSelection

logger = logging.getLogger(__name__)

RESPONSE_FORMAT_INSTRUCTION = (
    'Please format your response as JSON with keys: "tool", "method", "parameters".'
)


def build_selection_prompt(catalog: Any) -> str:
    return f"Available tools: {json.dumps(catalog, ensure_ascii=False)}. " + RESPONSE_FORMAT_INSTRUCTION


def parse_tool_selection(content: str) -> ToolSelection:
    """
    Parse and validate the model's JSON answer.

    Raises:
        MalformedToolSelection: If the content is not JSON or lacks a usable
            tool, method or parameters field
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedToolSelection(f"Tool selection is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise MalformedToolSelection(
            f"Tool selection must be a JSON object, got {type(data).__name__}"
        )

    try:
        return ToolSelection.model_validate(data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise MalformedToolSelection(f"Invalid tool selection: {problems}")


async def select_tool(llm: OpenAIChatClient, question: str, catalog: Any) -> ToolSelection:
    """
    Ask the language model which tool to call for a question.

    Args:
        llm: Chat completion client
        question: User's question
        catalog: Tool catalog embedded in the system prompt

    Returns:
        Validated ToolSelection
    """
    messages = [
        {"role": "system", "content": build_selection_prompt(catalog)},
        {"role": "user", "content": question},
    ]
    content = await llm.complete(messages, json_mode=True)
    selection = parse_tool_selection(content)
    logger.info(
        "Tool selected",
        extra={"tool": selection.tool, "method": selection.method},
    )
    return selection

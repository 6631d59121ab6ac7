"""Second language-model call: explain a tool result in prose."""

import json
from typing import Any

from nexflow.adapters.vendor_adapter_openai import OpenAIChatClient

EXPLAINER_SYSTEM_PROMPT = (
    "You are a helpful assistant that explains tool results in a clear and concise way."
)


def build_explanation_prompt(question: str, tool_result: Any) -> str:
    return (
        f"Original question: {question}\n"
        f"Tool execution result: {json.dumps(tool_result, ensure_ascii=False)}\n"
        "Please provide a natural language response explaining the results."
    )


async def explain_result(llm: OpenAIChatClient, question: str, tool_result: Any) -> str:
    messages = [
        {"role": "system", "content": EXPLAINER_SYSTEM_PROMPT},
        {"role": "user", "content": build_explanation_prompt(question, tool_result)},
    ]
    return await llm.complete(messages)

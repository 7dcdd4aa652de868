"""Assistant Agent — chat loop that answers with real simulations via simulate_model."""

from __future__ import annotations

from typing import Any

import anthropic

from odesim.agents.tool import SIMULATION_TOOL, TOOL_NAME, execute_tool, summarize_for_model
from odesim.core.settings import get_settings

MAX_TOOL_ROUNDS = 5

ASSISTANT_SYSTEM_PROMPT = """You are a helpful scientific assistant with access to a numerical simulation tool.

**SIMULATION TOOL (simulate_model):**
- Use it whenever the user asks to simulate, model, or compare scenarios for epidemic spread (SIR), bounded population growth (Logistic) or projectile motion (Projectile).
- It runs an actual RK4 integration and returns real numbers. Never invent simulation results.

After every simulation, write a short paragraph that:
1. Restates the parameters you used.
2. Explains what the result shows, citing the returned metrics (e.g. peak infection and its day, final population, max height and range).
3. Offers to re-run with different parameters."""


def _text_of(response) -> str:
    return "\n".join(block.text for block in response.content if block.type == "text").strip()


def chat(messages: list[dict[str, Any]]) -> tuple[str, list[dict[str, Any]]]:
    """Continue a conversation, running any requested simulations.

    Args:
        messages: Anthropic-format conversation so far (ending with a user turn).

    Returns:
        (reply_text, results) where results holds one simulation result
        payload per tool call, in call order.
    """
    client = anthropic.Anthropic()
    history = list(messages)
    results: list[dict[str, Any]] = []

    for _ in range(MAX_TOOL_ROUNDS):
        response = client.messages.create(
            model=get_settings().model,
            max_tokens=4096,
            system=ASSISTANT_SYSTEM_PROMPT,
            messages=history,
            tools=[SIMULATION_TOOL],
        )

        tool_blocks = [b for b in response.content if b.type == "tool_use"]
        if response.stop_reason != "tool_use" or not tool_blocks:
            return _text_of(response), results

        history.append({"role": "assistant", "content": response.content})
        tool_results = []
        for block in tool_blocks:
            if block.name != TOOL_NAME:
                content, is_error = f"Unknown tool: {block.name}", True
            else:
                envelope = execute_tool(block.input)
                result = envelope["_meta"]["result"]
                results.append(result)
                content, is_error = summarize_for_model(envelope), result["status"] == "error"
            tool_results.append({
                "type": "tool_result",
                "tool_use_id": block.id,
                "content": content,
                "is_error": is_error,
            })
        history.append({"role": "user", "content": tool_results})

    raise RuntimeError(f"No final answer after {MAX_TOOL_ROUNDS} tool rounds")

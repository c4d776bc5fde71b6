"""
In-process tool registry implementing HostContext.

A small reference host: it stores descriptors by name, exposes them in the
OpenAI/LiteLLM function format for an agent loop, and dispatches calls to
their actions. Hosts embedding the dice tool elsewhere implement HostContext
themselves.
"""

from __future__ import annotations

from typing import Any

from aidice.config.logging import get_logger
from aidice.tools.base import HostContext, ToolArguments, ToolDescriptor, ToolRegistrationError

logger = get_logger(__name__)


class LocalToolRegistry(HostContext):
    """
    Registry of function tools keyed by name.

    Args:
        tool_calling_enabled: Answer returned by is_tool_calling_supported()
    """

    def __init__(self, tool_calling_enabled: bool = True):
        self.tool_calling_enabled = tool_calling_enabled
        self._tools: dict[str, ToolDescriptor] = {}

    def is_tool_calling_supported(self) -> bool:
        return self.tool_calling_enabled

    def register_function_tool(self, descriptor: ToolDescriptor) -> None:
        """
        Install a descriptor.

        Raises:
            ToolRegistrationError: On a duplicate name or a non-object parameter schema
        """
        if not descriptor.name:
            raise ToolRegistrationError("Tool name must be non-empty")
        if descriptor.name in self._tools:
            raise ToolRegistrationError(f"Tool '{descriptor.name}' is already registered")
        if descriptor.parameters.get("type") != "object":
            raise ToolRegistrationError(
                f"Tool '{descriptor.name}' parameters must be an object schema"
            )

        self._tools[descriptor.name] = descriptor
        logger.debug(f"Registered tool '{descriptor.name}'")

    def unregister(self, name: str) -> None:
        """Remove a tool. Unknown names are ignored."""
        self._tools.pop(name, None)

    def get(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def list_tools(self) -> list[dict[str, Any]]:
        """List registered tools as function-tool schemas."""
        return [descriptor.to_function_schema() for descriptor in self._tools.values()]

    async def invoke(self, name: str, arguments: ToolArguments) -> str:
        """
        Call a registered tool's action.

        Required fields from the tool's parameter schema are checked first;
        a missing one is reported as a string result, the same channel the
        tool itself uses for errors.

        Raises:
            KeyError: If no tool with that name is registered
        """
        descriptor = self._tools.get(name)
        if descriptor is None:
            raise KeyError(f"Unknown tool: {name}")

        missing = [
            field for field in descriptor.parameters.get("required", [])
            if field not in arguments
        ]
        if missing:
            logger.warning(f"Tool '{name}' called without required arguments: {missing}")
            return f"Error: Missing required argument(s) for '{name}': {', '.join(missing)}"

        return await descriptor.action(arguments)

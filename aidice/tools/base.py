"""
Base classes for function tools.

Provides the host-facing interface a tool registers against, and the
descriptor bundle (metadata + handler) that a host stores in its registry.
"""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

ToolArguments = Mapping[str, Any]
ToolAction = Callable[[ToolArguments], Awaitable[str]]


class ToolRegistrationError(RuntimeError):
    """Raised by a host when it refuses to install a tool descriptor."""


@dataclass(frozen=True)
class ToolDescriptor:
    """
    Static metadata and handler for one function tool.

    Field names follow what the host registry expects:
    name, display_name, description, parameters, action, format_message, stealth.
    """

    name: str
    display_name: str
    description: str
    parameters: dict[str, Any]
    action: ToolAction
    format_message: Callable[..., str]
    stealth: bool = False

    def to_function_schema(self) -> dict[str, Any]:
        """
        Render the descriptor in the OpenAI/LiteLLM tool format.

            {"type": "function", "function": {"name": ..., "description": ..., "parameters": ...}}
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": copy.deepcopy(self.parameters),
            },
        }


class HostContext(ABC):
    """
    Abstract interface of the application hosting the agent.

    A tool needs only two things from its host: whether tool calling is
    enabled at all, and a registry to install its descriptor into.
    """

    @abstractmethod
    def is_tool_calling_supported(self) -> bool:
        """Return True if the host's agent runtime can call function tools."""
        pass

    @abstractmethod
    def register_function_tool(self, descriptor: ToolDescriptor) -> None:
        """
        Install a tool descriptor into the host's registry.

        Raises:
            ToolRegistrationError: If the host rejects the descriptor
                (e.g. duplicate name or unsupported schema)
        """
        pass

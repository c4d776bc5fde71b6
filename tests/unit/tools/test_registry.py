"""
Tests for LocalToolRegistry.

Covers:
- HostContext capability flag
- Installing, rejecting and removing descriptors
- Function-schema listing
- Invocation dispatch and required-argument checks
- Full flow with DiceRollerTool
"""

import json
from unittest.mock import AsyncMock

import pytest

from aidice.tools.base import ToolDescriptor, ToolRegistrationError
from aidice.tools.dice_roller import DiceRollerTool
from aidice.tools.registry import LocalToolRegistry


def _descriptor(name="echo", parameters=None, action=None):
    return ToolDescriptor(
        name=name,
        display_name=name.title(),
        description="Test tool",
        parameters=parameters or {
            "type": "object",
            "properties": {"text": {"type": "string"}},
            "required": ["text"],
        },
        action=action or AsyncMock(return_value="ok"),
        format_message=lambda: "",
    )


class TestRegistration:
    def test_capability_flag(self):
        assert LocalToolRegistry().is_tool_calling_supported() is True
        assert LocalToolRegistry(tool_calling_enabled=False).is_tool_calling_supported() is False

    def test_register_and_get(self):
        registry = LocalToolRegistry()
        descriptor = _descriptor()

        registry.register_function_tool(descriptor)

        assert "echo" in registry
        assert len(registry) == 1
        assert registry.get("echo") is descriptor
        assert registry.get("missing") is None

    def test_duplicate_name_rejected(self):
        registry = LocalToolRegistry()
        registry.register_function_tool(_descriptor())

        with pytest.raises(ToolRegistrationError, match="already registered"):
            registry.register_function_tool(_descriptor())

    def test_non_object_schema_rejected(self):
        registry = LocalToolRegistry()
        with pytest.raises(ToolRegistrationError, match="object schema"):
            registry.register_function_tool(_descriptor(parameters={"type": "string"}))

    def test_empty_name_rejected(self):
        with pytest.raises(ToolRegistrationError):
            LocalToolRegistry().register_function_tool(_descriptor(name=""))

    def test_unregister(self):
        registry = LocalToolRegistry()
        registry.register_function_tool(_descriptor())

        registry.unregister("echo")
        registry.unregister("echo")

        assert "echo" not in registry

    def test_list_tools_function_format(self):
        registry = LocalToolRegistry()
        registry.register_function_tool(_descriptor())

        tools = registry.list_tools()

        assert tools == [
            {
                "type": "function",
                "function": {
                    "name": "echo",
                    "description": "Test tool",
                    "parameters": _descriptor().parameters,
                },
            }
        ]


class TestInvoke:
    @pytest.mark.asyncio
    async def test_dispatches_to_action(self):
        action = AsyncMock(return_value="done")
        registry = LocalToolRegistry()
        registry.register_function_tool(_descriptor(action=action))

        result = await registry.invoke("echo", {"text": "hi"})

        assert result == "done"
        action.assert_awaited_once_with({"text": "hi"})

    @pytest.mark.asyncio
    async def test_missing_required_argument(self):
        action = AsyncMock()
        registry = LocalToolRegistry()
        registry.register_function_tool(_descriptor(action=action))

        result = await registry.invoke("echo", {})

        assert result.startswith("Error: Missing required argument")
        assert "text" in result
        action.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        with pytest.raises(KeyError):
            await LocalToolRegistry().invoke("nope", {})


class TestDiceRollerFlow:
    """DiceRollerTool registered into a real registry and invoked through it."""

    @pytest.mark.asyncio
    async def test_register_and_roll(self):
        registry = LocalToolRegistry()
        assert DiceRollerTool().register(registry) is True

        payload = json.loads(await registry.invoke("roll_dice_formula", {"formula": "2d6+5"}))

        assert len(payload["rolls"]) == 2
        assert payload["total"] == sum(payload["rolls"]) + 5

    @pytest.mark.asyncio
    async def test_invalid_formula_through_registry(self):
        registry = LocalToolRegistry()
        DiceRollerTool().register(registry)

        result = await registry.invoke("roll_dice_formula", {"formula": "invalid"})

        assert result == (
            'Error: Invalid dice formula "invalid". '
            "Please provide a valid formula like '1d20' or '2d6+3'."
        )

    def test_disabled_host_gets_no_tool(self):
        registry = LocalToolRegistry(tool_calling_enabled=False)

        assert DiceRollerTool().register(registry) is False
        assert len(registry) == 0

    def test_second_registration_fails_softly(self):
        registry = LocalToolRegistry()
        assert DiceRollerTool().register(registry) is True
        assert DiceRollerTool().register(registry) is False
        assert len(registry) == 1

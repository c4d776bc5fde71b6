"""
Dice roller function tool.

Wraps FormulaEngine behind a ToolDescriptor that a host registers and later
invokes on the agent's behalf. Results are returned as strings because the
host forwards them verbatim to the agent: a JSON outcome on success, a
readable error message on failure. Nothing raised here reaches the host.
"""

from __future__ import annotations

import copy
import logging

from aidice.config.logging import get_logger
from aidice.config.settings import ToolSettings, get_settings
from aidice.dice.engine import FormulaEngine
from aidice.tools.base import HostContext, ToolArguments, ToolDescriptor

DESCRIPTION = """
Use this function to determine the outcome of a random event or a skill check.
You must provide a valid dice formula such as '1d20', '3d6' or '2d6+3'. The function returns a JSON object with "total" (the sum of all dice plus the modifier) and "rolls" (the individual dice results, in the order they were rolled).
**Advantage and Disadvantage are your responsibility:**
- **Advantage (e.g. on a d20):** call with '2d20', then take the HIGHER value from 'rolls' as the result.
- **Disadvantage (e.g. on a d20):** call with '2d20', then take the LOWER value from 'rolls' as the result.
Example: for an Advantage roll you call with '2d20'. The tool returns {"total":25,"rolls":[17,8]}. The result is 17.
**Batch repeated rolls into one call:**
- When a task needs several rolls (e.g. "roll until you succeed"), do NOT call this tool once per roll.
- Roll a batch in a single call instead (e.g. '10d100').
- Then walk the returned 'rolls' array yourself to find the first success or finish the task.
""".strip()

PARAMETERS_SCHEMA = {
    "$schema": "http://json-schema.org/draft-04/schema#",
    "type": "object",
    "properties": {
        "formula": {
            "type": "string",
            "description": "A standard dice formula, such as '1d100', '3d6', or '1d20+5'.",
        },
    },
    "required": ["formula"],
}

ERROR_TEMPLATE = (
    'Error: Invalid dice formula "{formula}". '
    "Please provide a valid formula like '1d20' or '2d6+3'."
)


def format_error(formula: object) -> str:
    """Build the error message returned to the agent for a rejected formula."""
    if isinstance(formula, str):
        shown = formula
    else:
        try:
            shown = str(formula)
        except Exception:
            shown = f"<{type(formula).__name__}>"
    return ERROR_TEMPLATE.format(formula=shown)


class DiceRollerTool:
    """
    Function tool exposing dice rolls to an LLM agent.

    The tool is stateless between invocations. It holds a FormulaEngine and
    the registration settings; each handle() call is independent.

    Args:
        engine: Formula engine to delegate to (default: FormulaEngine())
        settings: Tool name, display name and stealth flag (default: get_settings().tools)
        logger: Logger for registration and invocation diagnostics
    """

    def __init__(
        self,
        engine: FormulaEngine | None = None,
        settings: ToolSettings | None = None,
        logger: logging.Logger | None = None,
    ):
        self._engine = engine or FormulaEngine()
        self._settings = settings or get_settings().tools
        self._logger = logger or get_logger(__name__)

    @property
    def name(self) -> str:
        return self._settings.name

    def is_available(self, host: HostContext) -> bool:
        """
        Ask the host whether it supports tool calling.

        A host that fails to answer is treated as not supporting it.
        """
        try:
            return bool(host.is_tool_calling_supported())
        except Exception as e:
            self._logger.error(f"Could not query tool-calling support: {e}")
            return False

    def build_descriptor(self) -> ToolDescriptor:
        """Build the descriptor installed into the host registry."""
        return ToolDescriptor(
            name=self._settings.name,
            display_name=self._settings.display_name,
            description=DESCRIPTION,
            parameters=copy.deepcopy(PARAMETERS_SCHEMA),
            action=self._action,
            format_message=_no_transcript_notice,
            stealth=self._settings.stealth,
        )

    def register(self, host: HostContext) -> bool:
        """
        Register the dice tool with the host.

        Skips registration when the host does not support tool calling, and
        logs (without raising) when the host rejects the descriptor.

        Returns:
            True if the descriptor was installed
        """
        if not self.is_available(host):
            self._logger.info(
                "Function calling is not supported or not enabled. "
                "The tool will not be registered."
            )
            return False

        try:
            host.register_function_tool(self.build_descriptor())
        except Exception as e:
            self._logger.error(f"Failed to register the function tool '{self.name}': {e}")
            return False

        self._logger.info(f"Dice rolling function tool '{self.name}' registered successfully")
        return True

    async def handle(self, formula: str) -> str:
        """
        Roll a formula on the agent's behalf.

        Args:
            formula: Dice formula supplied by the agent

        Returns:
            JSON outcome such as '{"total":17,"rolls":[12,5]}', or an error
            message naming the rejected formula
        """
        try:
            outcome = self._engine.roll_safe(formula)
        except Exception as e:
            # Errors go back to the agent as text so the host's loop keeps running
            self._logger.exception(f"Unexpected failure rolling dice formula: {e}")
            return format_error(formula)

        if outcome is None:
            return format_error(formula)
        return outcome.to_json()

    async def _action(self, arguments: ToolArguments) -> str:
        """Host-facing entry point; unpacks the argument mapping."""
        try:
            formula = arguments.get("formula")
        except Exception as e:
            self._logger.error(f"Malformed tool arguments of type {type(arguments).__name__}: {e}")
            return format_error(arguments)
        return await self.handle(formula)


def _no_transcript_notice(*_args, **_kwargs) -> str:
    """Successful rolls produce no user-facing transcript notice."""
    return ""

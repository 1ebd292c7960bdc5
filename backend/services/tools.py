from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from exceptions import ToolProtocolViolation

SEARCH_TOOL_NAME = "getResult"
SEARCH_TOOL_ARGUMENT = "itemName"

GET_RESULT_TOOL = {
    "name": SEARCH_TOOL_NAME,
    "description": "It searches the web for the latest information on a given item.",
    "parameters": {
        "type": "OBJECT",
        "properties": {
            SEARCH_TOOL_ARGUMENT: {"type": "STRING", "description": "It is the text or phrase to search for."},
        },
        "required": [SEARCH_TOOL_ARGUMENT]
    }
}


@dataclass(frozen=True)
class ToolCallRequest:
    """A function call emitted by the model mid-conversation."""
    name: Optional[str]
    args: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_function_call(cls, function_call: Dict[str, Any]) -> "ToolCallRequest":
        args = function_call.get("args")
        return cls(
            name=function_call.get("name"),
            args=args if isinstance(args, dict) else {},
        )


class ToolCatalog:
    """Static declaration of the tools exposed to the model."""

    def __init__(self, tools: Tuple[Dict[str, Any], ...] = (GET_RESULT_TOOL,)):
        self._tools = {tool["name"]: tool for tool in tools}

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def declarations(self) -> List[Dict[str, Any]]:
        return list(self._tools.values())

    def get(self, name: str) -> Optional[Dict[str, Any]]:
        return self._tools.get(name)

    def validate(self, call: ToolCallRequest) -> str:
        """Checks a tool call against its declaration and returns the search query."""
        tool = self._tools.get(call.name) if call.name else None
        if tool is None:
            raise ToolProtocolViolation(f"unknown tool {call.name!r}", call.name)

        for required in tool["parameters"].get("required", []):
            if required not in call.args:
                raise ToolProtocolViolation(f"missing required argument {required!r}", call.name)

        query = call.args[SEARCH_TOOL_ARGUMENT]
        if not isinstance(query, str):
            raise ToolProtocolViolation(
                f"argument {SEARCH_TOOL_ARGUMENT!r} must be a string, got {type(query).__name__}",
                call.name
            )
        return query


DEFAULT_TOOL_CATALOG = ToolCatalog()

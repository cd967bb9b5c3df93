"""Static registry mapping tool names to schemas and local handlers."""

from __future__ import annotations

import inspect
import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Tuple, Union

from ....errors import ToolExecutionError, UnknownToolError
from ....logging_config import logger
from ....models.wire import FunctionDefinition, ToolDefinition


@dataclass(frozen=True)
class ToolSpec:
    """Name, description and JSON schema advertised to the model."""

    name: str
    description: str
    parameters: Dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )

    def as_definition(self) -> ToolDefinition:
        return ToolDefinition(
            function=FunctionDefinition(
                name=self.name,
                description=self.description,
                parameters=self.parameters,
            )
        )


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a tool invocation.

    ``summary_text`` is shown to the user, ``machine_result`` is the JSON text
    returned to the model in the tool-role message.
    """

    summary_text: str
    machine_result: str
    success: bool = True

    @classmethod
    def failure(cls, summary_text: str, error: str) -> "ToolResult":
        return cls(summary_text=summary_text, machine_result=dump_json({"error": error}), success=False)


ToolHandler = Callable[[Mapping[str, Any]], Union[ToolResult, Awaitable[ToolResult]]]


def dump_json(payload: Any) -> str:
    """Serialize payload to JSON, falling back to repr on failure."""
    try:
        return json.dumps(payload, default=str)
    except (TypeError, ValueError):
        return repr(payload)


class ToolRegistry:
    """Registered tools, fixed for the lifetime of the process once wired up."""

    def __init__(self) -> None:
        self._tools: Dict[str, Tuple[ToolSpec, ToolHandler]] = {}

    def register(self, spec: ToolSpec, handler: ToolHandler) -> None:
        if spec.name in self._tools:
            raise ValueError(f"Tool already registered: {spec.name}")
        self._tools[spec.name] = (spec, handler)
        logger.debug("registered tool", extra={"tool": spec.name})

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> List[str]:
        return list(self._tools)

    def schemas(self) -> List[ToolSpec]:
        return [spec for spec, _ in self._tools.values()]

    def tool_definitions(self) -> List[ToolDefinition]:
        return [spec.as_definition() for spec in self.schemas()]

    async def invoke(self, name: str, arguments: Mapping[str, Any]) -> ToolResult:
        """Run the named tool; handler errors become failed results instead of raising."""

        registered = self._tools.get(name)
        if registered is None:
            raise UnknownToolError(name)
        _, handler = registered

        try:
            result = handler(dict(arguments))
            if inspect.isawaitable(result):
                result = await result
        except ToolExecutionError as exc:
            logger.warning(f"Tool '{name}' rejected", extra={"tool": name, "error": str(exc)})
            return ToolResult.failure(str(exc), str(exc))
        except Exception as exc:
            logger.warning(f"Tool '{name}' failed", extra={"tool": name, "error": str(exc)})
            return ToolResult.failure(f"Tool {name} failed: {exc}", str(exc))

        if not isinstance(result, ToolResult):
            logger.warning("Tool did not return ToolResult; coercing", extra={"tool": name})
            rendered = dump_json(result)
            return ToolResult(summary_text=rendered, machine_result=rendered)

        logger.info(f"Tool '{name}' completed", extra={"tool": name, "success": result.success})
        return result


__all__ = ["ToolHandler", "ToolRegistry", "ToolResult", "ToolSpec", "dump_json"]

"""
Domain models for DecCalc.

This module contains the small set of objects that flow through the tool
dispatch layer: the request, its result, the precision setting and the angle
mode used by the trigonometric tools.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from enum import Enum
import json

from .config import DEFAULT_PRECISION, MAX_PRECISION
from .errors import InvalidArgumentError


class AngleMode(str, Enum):
    """Unit of the angles passed to sin, cos and tan."""

    RADIANS = "radians"
    DEGREES = "degrees"


@dataclass
class ToolRequest:
    """Represents one invocation of a named calculator tool."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create a ToolRequest from a dictionary (OpenAI function format)."""
        function = data.get("function", data)
        arguments = function.get("arguments") or {}
        return cls(
            name=function["name"],
            arguments=(
                json.loads(arguments) if isinstance(arguments, str) else arguments
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (OpenAI function format)."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "arguments": json.dumps(self.arguments),
            },
        }


@dataclass
class ToolResult:
    """Represents the result of a tool execution."""

    tool_name: str = ""
    content: str = ""
    success: bool = True
    error_type: Optional[str] = None
    execution_time_ms: float = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "name": self.tool_name,
            "content": self.content,
            "success": self.success,
        }
        if self.error_type:
            result["error_type"] = self.error_type
        return result

    @property
    def is_error(self) -> bool:
        """Check if the result represents an error."""
        return not self.success


@dataclass
class PrecisionSetting:
    """Number of significant digits used by decimal arithmetic."""

    digits: int = DEFAULT_PRECISION

    def update(self, digits: int) -> None:
        """Replace the precision, rejecting values outside 1..MAX_PRECISION."""
        if isinstance(digits, bool) or not isinstance(digits, int) or digits < 1:
            raise InvalidArgumentError("Precision must be a positive integer")
        if digits > MAX_PRECISION:
            raise InvalidArgumentError(
                f"Precision must not exceed {MAX_PRECISION} significant digits"
            )
        self.digits = digits

"""
Tool dispatch layer.

A Calculator owns the precision setting and maps every tool name to a bound
method. Arguments are validated by pydantic against the method signature
before any arithmetic runs. Tool methods raise CalculatorError subclasses
on bad input, which is what the MCP server wants; execute() wraps the same
methods for in-process callers and turns failures into unsuccessful
ToolResults.
"""

import functools
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from pydantic import ConfigDict, ValidationError, validate_call

from .config import DEFAULT_PRECISION
from .domain import AngleMode, PrecisionSetting, ToolRequest, ToolResult
from .errors import CalculatorError, InvalidArgumentError
from . import arithmetic, trigonometry

logger = logging.getLogger(__name__)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        parts.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return "; ".join(parts)


def tool_method(func: Callable[..., str]) -> Callable[..., str]:
    """Validate a tool method's arguments against its signature.

    Validation failures surface as InvalidArgumentError so every caller sees
    the same error type as for the tools' own arity checks.
    """
    validated = validate_call(func, config=ConfigDict(allow_inf_nan=False))

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return validated(*args, **kwargs)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"Invalid arguments for {func.__name__}: {_describe_validation_error(e)}"
            ) from e

    return wrapper


class Calculator:
    """Named calculator tools sharing one precision setting."""

    def __init__(self, precision: int = DEFAULT_PRECISION) -> None:
        self.precision = PrecisionSetting()
        self.precision.update(precision)
        self.registry: Dict[str, Callable[..., str]] = {
            "add": self.add,
            "subtract": self.subtract,
            "multiply": self.multiply,
            "divide": self.divide,
            "sin": self.sin,
            "cos": self.cos,
            "tan": self.tan,
            "asin": self.asin,
            "acos": self.acos,
            "atan": self.atan,
            "sinh": self.sinh,
            "cosh": self.cosh,
            "tanh": self.tanh,
            "asinh": self.asinh,
            "acosh": self.acosh,
            "atanh": self.atanh,
            "set_precision": self.set_precision,
        }

    @property
    def tool_names(self) -> List[str]:
        return list(self.registry)

    def describe(self, tool_name: str) -> str:
        """First docstring line of a tool."""
        doc = self.registry[tool_name].__doc__ or ""
        return doc.strip().splitlines()[0] if doc.strip() else ""

    # --- Arithmetic ---------------------------------------------------------

    @tool_method
    def add(self, numbers: List[float]) -> str:
        """Add an array of numbers."""
        return arithmetic.add(numbers, self.precision.digits)

    @tool_method
    def subtract(self, numbers: List[float]) -> str:
        """Subtract every following number from the first."""
        return arithmetic.subtract(numbers, self.precision.digits)

    @tool_method
    def multiply(self, numbers: List[float]) -> str:
        """Multiply an array of numbers."""
        return arithmetic.multiply(numbers, self.precision.digits)

    @tool_method
    def divide(self, numbers: List[float]) -> str:
        """Divide the first number by each following number in turn."""
        return arithmetic.divide(numbers, self.precision.digits)

    # --- Trigonometry -------------------------------------------------------

    @tool_method
    def sin(self, angles: List[float], mode: AngleMode = AngleMode.RADIANS) -> str:
        """Sine of each angle (radians or degrees)."""
        return trigonometry.sin(angles, mode, self.precision.digits)

    @tool_method
    def cos(self, angles: List[float], mode: AngleMode = AngleMode.RADIANS) -> str:
        """Cosine of each angle (radians or degrees)."""
        return trigonometry.cos(angles, mode, self.precision.digits)

    @tool_method
    def tan(self, angles: List[float], mode: AngleMode = AngleMode.RADIANS) -> str:
        """Tangent of each angle (radians or degrees)."""
        return trigonometry.tan(angles, mode, self.precision.digits)

    @tool_method
    def asin(self, values: List[float]) -> str:
        """Arcsine in radians of each value in [-1, 1]."""
        return trigonometry.asin(values, self.precision.digits)

    @tool_method
    def acos(self, values: List[float]) -> str:
        """Arccosine in radians of each value in [-1, 1]."""
        return trigonometry.acos(values, self.precision.digits)

    @tool_method
    def atan(self, values: List[float]) -> str:
        """Arctangent in radians of each value."""
        return trigonometry.atan(values, self.precision.digits)

    @tool_method
    def sinh(self, values: List[float]) -> str:
        """Hyperbolic sine of each value."""
        return trigonometry.sinh(values, self.precision.digits)

    @tool_method
    def cosh(self, values: List[float]) -> str:
        """Hyperbolic cosine of each value."""
        return trigonometry.cosh(values, self.precision.digits)

    @tool_method
    def tanh(self, values: List[float]) -> str:
        """Hyperbolic tangent of each value."""
        return trigonometry.tanh(values, self.precision.digits)

    @tool_method
    def asinh(self, values: List[float]) -> str:
        """Inverse hyperbolic sine of each value."""
        return trigonometry.asinh(values, self.precision.digits)

    @tool_method
    def acosh(self, values: List[float]) -> str:
        """Inverse hyperbolic cosine of each value >= 1."""
        return trigonometry.acosh(values, self.precision.digits)

    @tool_method
    def atanh(self, values: List[float]) -> str:
        """Inverse hyperbolic tangent of each value in (-1, 1)."""
        return trigonometry.atanh(values, self.precision.digits)

    # --- Settings -----------------------------------------------------------

    @tool_method
    def set_precision(self, precision: int) -> str:
        """Set the number of significant digits used by later calculations."""
        self.precision.update(precision)
        logger.info(
            f"Precision set to {precision}",
            extra={"event_type": "precision_changed", "category": "config", "precision": precision},
        )
        return f"Precision set to {precision} significant digits"

    # --- Dispatch -----------------------------------------------------------

    def execute(self, request: ToolRequest) -> ToolResult:
        """
        Run one tool request.

        Args:
            request: Tool name and its arguments

        Returns:
            ToolResult; unsuccessful when the tool is unknown, the arguments
            do not fit the tool, or the tool raised a CalculatorError
        """
        handler: Optional[Callable[..., Any]] = self.registry.get(request.name)
        if handler is None:
            logger.warning(f"Unknown tool requested: {request.name}")
            return ToolResult(
                tool_name=request.name,
                content=f"Unknown tool: {request.name}",
                success=False,
                error_type="UnknownTool",
            )

        start = time.perf_counter()
        try:
            content = handler(**request.arguments)
            result = ToolResult(tool_name=request.name, content=content)
        except CalculatorError as e:
            result = ToolResult(
                tool_name=request.name,
                content=str(e),
                success=False,
                error_type=type(e).__name__,
            )
        result.execution_time_ms = (time.perf_counter() - start) * 1000

        if result.success:
            logger.debug(f"Tool '{request.name}' returned: {result.content}")
        else:
            logger.warning(f"Tool '{request.name}' failed: {result.content}")
        logger.info(
            f"Executed tool {request.name}",
            extra={
                "event_type": "tool_execution",
                "category": "tool",
                "tool_name": request.name,
                "arguments": request.arguments,
                "success": result.success,
                "execution_time_ms": round(result.execution_time_ms, 3),
            },
        )
        return result

"""
MCP server exposing the calculator tools.

Each tool is a thin FastMCP wrapper around a Calculator method; FastMCP
derives the input schema from the annotations and reports any exception
raised by the method as a tool error carrying its message.
"""

import logging
from typing import Annotated, List, Literal, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from .config import SERVER_NAME
from .dispatch import Calculator

Numbers = Annotated[List[float], Field(description="An array of numbers")]
Angles = Annotated[List[float], Field(description="An array of angles")]
Values = Annotated[List[float], Field(description="An array of input values")]
Mode = Annotated[
    Literal["radians", "degrees"],
    Field(description="Unit of the angles: radians (default) or degrees"),
]


def create_app(calculator: Optional[Calculator] = None) -> FastMCP:
    """
    Build the FastMCP application.

    Args:
        calculator: Calculator whose tools and precision the server uses;
            a fresh one at the default precision when omitted

    Returns:
        FastMCP application with every calculator tool registered
    """
    calculator = calculator or Calculator()
    app = FastMCP(SERVER_NAME)

    @app.tool()
    def add(numbers: Numbers) -> str:
        """Add an array of numbers. An empty array sums to 0."""
        return calculator.add(numbers)

    @app.tool()
    def subtract(numbers: Numbers) -> str:
        """Subtract every following number from the first. Requires at least one number."""
        return calculator.subtract(numbers)

    @app.tool()
    def multiply(numbers: Numbers) -> str:
        """Multiply an array of numbers. An empty array multiplies to 1."""
        return calculator.multiply(numbers)

    @app.tool()
    def divide(numbers: Numbers) -> str:
        """Divide the first number by each following number. Requires at least two numbers.

        Returns "Cannot divide by zero" if any divisor is zero.
        """
        return calculator.divide(numbers)

    @app.tool()
    def sin(angles: Angles, mode: Mode = "radians") -> str:
        """Sine of each angle, rounded to 15 decimal places.

        One angle gives a single value; several give a JSON array of values.
        """
        return calculator.sin(angles, mode)

    @app.tool()
    def cos(angles: Angles, mode: Mode = "radians") -> str:
        """Cosine of each angle, rounded to 15 decimal places.

        One angle gives a single value; several give a JSON array of values.
        """
        return calculator.cos(angles, mode)

    @app.tool()
    def tan(angles: Angles, mode: Mode = "radians") -> str:
        """Tangent of each angle, rounded to 15 decimal places.

        Angles at π/2 + nπ give "Undefined (angle is π/2 + nπ)".
        """
        return calculator.tan(angles, mode)

    @app.tool()
    def asin(values: Values) -> str:
        """Arcsine in radians of each value. Values must lie in [-1, 1]."""
        return calculator.asin(values)

    @app.tool()
    def acos(values: Values) -> str:
        """Arccosine in radians of each value. Values must lie in [-1, 1]."""
        return calculator.acos(values)

    @app.tool()
    def atan(values: Values) -> str:
        """Arctangent in radians of each value."""
        return calculator.atan(values)

    @app.tool()
    def sinh(values: Values) -> str:
        """Hyperbolic sine of each value, rounded to 15 decimal places."""
        return calculator.sinh(values)

    @app.tool()
    def cosh(values: Values) -> str:
        """Hyperbolic cosine of each value, rounded to 15 decimal places."""
        return calculator.cosh(values)

    @app.tool()
    def tanh(values: Values) -> str:
        """Hyperbolic tangent of each value, rounded to 15 decimal places."""
        return calculator.tanh(values)

    @app.tool()
    def asinh(values: Values) -> str:
        """Inverse hyperbolic sine of each value at full precision."""
        return calculator.asinh(values)

    @app.tool()
    def acosh(values: Values) -> str:
        """Inverse hyperbolic cosine of each value. Values must be >= 1."""
        return calculator.acosh(values)

    @app.tool()
    def atanh(values: Values) -> str:
        """Inverse hyperbolic tangent of each value. Values must lie in (-1, 1)."""
        return calculator.atanh(values)

    @app.tool()
    def set_precision(
        precision: Annotated[int, Field(description="Number of significant digits")],
    ) -> str:
        """Set the number of significant digits used by later calculations."""
        return calculator.set_precision(precision)

    logging.debug(f"Registered {len(calculator.tool_names)} calculator tools")
    return app


def run_server(transport: str = "stdio", precision: Optional[int] = None) -> None:
    """Serve the calculator tools until the transport closes."""
    calculator = Calculator() if precision is None else Calculator(precision)
    app = create_app(calculator)
    logging.info(
        f"Starting {SERVER_NAME} server",
        extra={
            "event_type": "server_start",
            "category": "execution_flow",
            "transport": transport,
            "precision": calculator.precision.digits,
        },
    )
    app.run(transport=transport)

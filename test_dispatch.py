import math
import unittest
from unittest.mock import patch

from deccalc import trigonometry
from deccalc.dispatch import Calculator
from deccalc.domain import ToolRequest
from deccalc.errors import InvalidArgumentError


class TestCalculator(unittest.TestCase):
    def setUp(self):
        self.calculator = Calculator()

    def test_registers_every_tool(self):
        self.assertEqual(
            set(self.calculator.tool_names),
            {
                "add", "subtract", "multiply", "divide",
                "sin", "cos", "tan", "asin", "acos", "atan",
                "sinh", "cosh", "tanh", "asinh", "acosh", "atanh",
                "set_precision",
            },
        )

    def test_default_precision(self):
        self.assertEqual(self.calculator.precision.digits, 20)
        self.assertEqual(self.calculator.divide([1, 3]), "0.33333333333333333333")

    def test_set_precision_applies_to_later_calls(self):
        message = self.calculator.set_precision(5)
        self.assertEqual(message, "Precision set to 5 significant digits")
        self.assertEqual(self.calculator.divide([1, 3]), "0.33333")

    def test_precision_is_per_calculator(self):
        other = Calculator()
        self.calculator.set_precision(5)
        self.assertEqual(other.divide([1, 3]), "0.33333333333333333333")

    def test_rejects_non_positive_precision(self):
        for bad in (0, -3):
            with self.assertRaises(InvalidArgumentError) as ctx:
                self.calculator.set_precision(bad)
            self.assertEqual(str(ctx.exception), "Precision must be a positive integer")
        self.assertEqual(self.calculator.precision.digits, 20)

    def test_rejects_precision_above_limit(self):
        self.assertEqual(
            self.calculator.set_precision(1000), "Precision set to 1000 significant digits"
        )
        with self.assertRaises(InvalidArgumentError) as ctx:
            self.calculator.set_precision(1001)
        self.assertEqual(
            str(ctx.exception), "Precision must not exceed 1000 significant digits"
        )
        self.assertEqual(self.calculator.precision.digits, 1000)

    def test_precision_read_once_per_call(self):
        """A precision change during a call only affects later calls."""
        expected = Calculator().sin([1, 2, 3])
        real_to_text = trigonometry._to_text
        seen = []

        def to_text(ctx, value, precision, rounded=True):
            seen.append((precision, ctx.dps))
            if len(seen) == 1:
                self.calculator.set_precision(5)
            return real_to_text(ctx, value, precision, rounded)

        with patch("deccalc.trigonometry._to_text", side_effect=to_text):
            result = self.calculator.sin([1, 2, 3])

        self.assertEqual(seen, [(20, 20)] * 3)
        self.assertEqual(result, expected)
        self.assertEqual(self.calculator.precision.digits, 5)

    def test_arguments_validated_before_computing(self):
        with self.assertRaises(InvalidArgumentError) as ctx:
            self.calculator.add("123")
        self.assertTrue(str(ctx.exception).startswith("Invalid arguments for add: numbers"))

    def test_trig_mode_defaults_to_radians(self):
        self.assertEqual(self.calculator.cos([0]), "1")

    def test_describe(self):
        self.assertEqual(self.calculator.describe("add"), "Add an array of numbers.")


class TestExecute(unittest.TestCase):
    def setUp(self):
        self.calculator = Calculator()

    def test_success(self):
        result = self.calculator.execute(ToolRequest("add", {"numbers": [5, 3, 2]}))
        self.assertTrue(result.success)
        self.assertFalse(result.is_error)
        self.assertEqual(result.content, "10")
        self.assertEqual(result.tool_name, "add")
        self.assertGreaterEqual(result.execution_time_ms, 0)

    def test_sentinel_is_a_success(self):
        result = self.calculator.execute(ToolRequest("divide", {"numbers": [5, 2, 0]}))
        self.assertTrue(result.success)
        self.assertEqual(result.content, "Cannot divide by zero")

    def test_invalid_argument(self):
        result = self.calculator.execute(ToolRequest("subtract", {"numbers": []}))
        self.assertFalse(result.success)
        self.assertEqual(result.content, "Subtraction requires at least one number")
        self.assertEqual(result.error_type, "InvalidArgumentError")

    def test_domain_error(self):
        result = self.calculator.execute(ToolRequest("asin", {"values": [2]}))
        self.assertTrue(result.is_error)
        self.assertEqual(result.content, "Domain error: input value must be between -1 and 1")
        self.assertEqual(result.error_type, "DomainError")

    def test_unknown_tool(self):
        result = self.calculator.execute(ToolRequest("pow", {"numbers": [2, 3]}))
        self.assertFalse(result.success)
        self.assertEqual(result.content, "Unknown tool: pow")

    def test_missing_arguments(self):
        result = self.calculator.execute(ToolRequest("add", {}))
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, "InvalidArgumentError")
        self.assertTrue(result.content.startswith("Invalid arguments for add"))

    def test_string_in_place_of_array(self):
        for name, arguments in (
            ("add", {"numbers": "123"}),
            ("sin", {"angles": "9"}),
            ("atanh", {"values": 0.5}),
        ):
            result = self.calculator.execute(ToolRequest(name, arguments))
            self.assertFalse(result.success, name)
            self.assertEqual(result.error_type, "InvalidArgumentError")
            self.assertTrue(result.content.startswith(f"Invalid arguments for {name}"))

    def test_unexpected_argument(self):
        result = self.calculator.execute(ToolRequest("add", {"numbers": [1], "scale": 2}))
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, "InvalidArgumentError")
        self.assertIn("scale", result.content)

    def test_invalid_mode(self):
        result = self.calculator.execute(ToolRequest("sin", {"angles": [1], "mode": "gradians"}))
        self.assertFalse(result.success)
        self.assertEqual(result.error_type, "InvalidArgumentError")

    def test_non_finite_input(self):
        for value in (math.nan, math.inf):
            result = self.calculator.execute(ToolRequest("asin", {"values": [value]}))
            self.assertFalse(result.success)
            self.assertEqual(result.error_type, "InvalidArgumentError")
            self.assertIn("finite number", result.content)

    def test_precision_limit_request(self):
        result = self.calculator.execute(ToolRequest("set_precision", {"precision": 5000}))
        self.assertFalse(result.success)
        self.assertEqual(result.content, "Precision must not exceed 1000 significant digits")
        self.assertEqual(self.calculator.precision.digits, 20)

    def test_set_precision_request(self):
        self.calculator.execute(ToolRequest("set_precision", {"precision": 5}))
        result = self.calculator.execute(ToolRequest("divide", {"numbers": [1, 3]}))
        self.assertEqual(result.content, "0.33333")

    def test_to_dict(self):
        result = self.calculator.execute(ToolRequest("asin", {"values": [2]}))
        self.assertEqual(
            result.to_dict(),
            {
                "name": "asin",
                "content": "Domain error: input value must be between -1 and 1",
                "success": False,
                "error_type": "DomainError",
            },
        )


class TestToolRequest(unittest.TestCase):
    def test_from_openai_dict_with_string_arguments(self):
        request = ToolRequest.from_dict(
            {
                "id": "call_1",
                "type": "function",
                "function": {"name": "sin", "arguments": '{"angles": [90], "mode": "degrees"}'},
            }
        )
        self.assertEqual(request.name, "sin")
        self.assertEqual(request.arguments, {"angles": [90], "mode": "degrees"})
        self.assertEqual(Calculator().execute(request).content, "1")

    def test_from_plain_dict(self):
        request = ToolRequest.from_dict({"name": "add", "arguments": {"numbers": [1]}})
        self.assertEqual(request, ToolRequest("add", {"numbers": [1]}))

    def test_to_dict_round_trip(self):
        request = ToolRequest("cos", {"angles": [60], "mode": "degrees"})
        self.assertEqual(ToolRequest.from_dict(request.to_dict()), request)


if __name__ == "__main__":
    unittest.main()

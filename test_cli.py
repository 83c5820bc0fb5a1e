import io
import json
import logging
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from deccalc.cli import main
from deccalc.logger import JsonLinesFormatter


def run_cli(*argv):
    stdout, stderr = io.StringIO(), io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        code = main(["--no-log-file", *argv])
    return code, stdout.getvalue(), stderr.getvalue()


class TestCallCommand(unittest.TestCase):
    def tearDown(self):
        logging.getLogger().handlers.clear()

    def test_output_only(self):
        code, out, _ = run_cli("call", "add", "--args", '{"numbers": [1, 2]}', "--output-only")
        self.assertEqual(code, 0)
        self.assertEqual(out, "3\n")

    def test_precision_flag(self):
        code, out, _ = run_cli(
            "call", "divide", "--args", '{"numbers": [1, 3]}', "--precision", "5", "--output-only"
        )
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "0.33333")

    def test_tool_error_exit_code(self):
        code, out, err = run_cli("call", "subtract", "--args", '{"numbers": []}', "--output-only")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Subtraction requires at least one number", err)

    def test_boxed_output(self):
        code, out, _ = run_cli("call", "cos", "--args", '{"angles": [60], "mode": "degrees"}')
        self.assertEqual(code, 0)
        self.assertIn("0.5", out)
        self.assertIn("cos", out)

    def test_invalid_json(self):
        code, _, err = run_cli("call", "add", "--args", "{numbers")
        self.assertEqual(code, 1)
        self.assertIn("Invalid arguments JSON", err)


class TestServeCommand(unittest.TestCase):
    def tearDown(self):
        logging.getLogger().handlers.clear()

    def test_serve_runs_server_with_settings(self):
        with patch("deccalc.cli.run_server") as run_server:
            code, _, _ = run_cli("serve", "--transport", "sse", "--precision", "7")
        self.assertEqual(code, 0)
        run_server.assert_called_once_with(transport="sse", precision=7)


class TestToolsCommand(unittest.TestCase):
    def tearDown(self):
        logging.getLogger().handlers.clear()

    def test_lists_tools(self):
        code, out, _ = run_cli("tools")
        self.assertEqual(code, 0)
        self.assertIn("set_precision", out)
        self.assertIn("atanh", out)


class TestLogFile(unittest.TestCase):
    def tearDown(self):
        for handler in logging.getLogger().handlers:
            handler.close()
        logging.getLogger().handlers.clear()

    def test_writes_json_lines(self):
        with tempfile.TemporaryDirectory() as log_dir:
            with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
                main(["--log-dir", log_dir, "call", "add", "--args", '{"numbers": [1]}'])
            for handler in logging.getLogger().handlers:
                handler.close()
            files = os.listdir(log_dir)
            self.assertEqual(len(files), 1)
            with open(os.path.join(log_dir, files[0])) as f:
                entries = [json.loads(line) for line in f]
            executions = [e for e in entries if e.get("event_type") == "tool_execution"]
            self.assertEqual(len(executions), 1)
            self.assertEqual(executions[0]["tool_name"], "add")
            self.assertTrue(executions[0]["success"])

    def test_formatter_includes_extra_fields(self):
        record = logging.LogRecord("deccalc", logging.INFO, __file__, 1, "hello", (), None)
        record.event_type = "test"
        entry = json.loads(JsonLinesFormatter().format(record))
        self.assertEqual(entry["message"], "hello")
        self.assertEqual(entry["event_type"], "test")
        self.assertEqual(entry["level"], "INFO")


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import sys
import unittest
from unittest import mock

from fastapi.testclient import TestClient

from tapebf.webui import create_app
from tapebf.webui.__main__ import main as webui_main
from tapebf.webui.app import MAX_STEP_BUDGET


class WebUIApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())

    def test_lex_returns_symbols(self) -> None:
        response = self.client.post("/api/lex", json={"code": "x+ [-]y"})
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual(payload["tokens"], ["+", "[", "-", "]"])
        self.assertEqual(payload["count"], 4)

    def test_parse_returns_tree(self) -> None:
        response = self.client.post("/api/parse", json={"code": "+[>[-]<]"})
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual(payload["program"], ["+", [">", ["-"], "<"]])
        self.assertEqual(payload["instruction_count"], 6)
        self.assertEqual(payload["depth"], 2)

    def test_parse_error_is_unprocessable(self) -> None:
        response = self.client.post("/api/parse", json={"code": "[[]"})
        self.assertEqual(response.status_code, 422, response.text)
        detail = response.json()["detail"]
        self.assertEqual(detail["kind"], "unmatched loop begin")
        self.assertEqual(detail["position"], 0)

    def test_run_returns_output_and_tape(self) -> None:
        response = self.client.post(
            "/api/run",
            json={"code": ",.+.", "input": "A", "tape_window": 1},
        )
        self.assertEqual(response.status_code, 200, response.text)
        payload = response.json()
        self.assertEqual(payload["output"], "AB")
        self.assertEqual(payload["pointer"], 512)
        self.assertEqual(payload["tape_start"], 511)
        self.assertEqual(payload["tape"], [0, 66, 0])
        self.assertEqual(payload["steps"], 4)

    def test_run_with_small_tape(self) -> None:
        response = self.client.post(
            "/api/run",
            json={"code": ">>", "tape_length": 2, "start_pointer": 0},
        )
        self.assertEqual(response.status_code, 400, response.text)
        self.assertEqual(response.json()["detail"]["kind"], "bounds error")

    def test_run_input_exhausted(self) -> None:
        response = self.client.post("/api/run", json={"code": ","})
        self.assertEqual(response.status_code, 400, response.text)
        self.assertEqual(response.json()["detail"]["kind"], "input exhausted")

    def test_run_step_limit_conflict(self) -> None:
        response = self.client.post("/api/run", json={"code": "+[]", "max_steps": 50})
        self.assertEqual(response.status_code, 409, response.text)
        self.assertIn("detail", response.json())

    def test_parse_too_deep_is_unprocessable(self) -> None:
        depth = sys.getrecursionlimit() + 200
        response = self.client.post("/api/parse", json={"code": "[" * depth + "]" * depth})
        self.assertEqual(response.status_code, 422, response.text)
        detail = response.json()["detail"]
        self.assertEqual(detail["kind"], "nesting too deep")
        self.assertEqual(detail["position"], depth - 1)

    def test_run_rejects_step_budget_above_cap(self) -> None:
        response = self.client.post(
            "/api/run",
            json={"code": "+", "max_steps": MAX_STEP_BUDGET + 1},
        )
        self.assertEqual(response.status_code, 422, response.text)

    def test_run_rejects_start_outside_tape(self) -> None:
        response = self.client.post(
            "/api/run",
            json={"code": "+", "tape_length": 4, "start_pointer": 4},
        )
        self.assertEqual(response.status_code, 422, response.text)


class ServerLimitsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app(max_steps=20, max_tape_length=64))

    def test_server_budget_applies_by_default(self) -> None:
        response = self.client.post("/api/run", json={"code": "+[]"})
        self.assertEqual(response.status_code, 409, response.text)

    def test_request_budget_cannot_exceed_server_budget(self) -> None:
        response = self.client.post("/api/run", json={"code": "+", "max_steps": 21})
        self.assertEqual(response.status_code, 422, response.text)

    def test_request_tape_cannot_exceed_server_cap(self) -> None:
        response = self.client.post(
            "/api/run",
            json={"code": "+", "tape_length": 65, "start_pointer": 0},
        )
        self.assertEqual(response.status_code, 422, response.text)

    def test_small_program_within_limits(self) -> None:
        response = self.client.post(
            "/api/run",
            json={"code": "++.", "tape_length": 64, "start_pointer": 0},
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["steps"], 3)


class LauncherTests(unittest.TestCase):
    def test_passes_limits_to_app(self) -> None:
        with mock.patch("tapebf.webui.__main__.create_app") as factory, mock.patch(
            "tapebf.webui.__main__.uvicorn.run"
        ) as run:
            exit_code = webui_main(["--port", "9000", "--max-steps", "500", "--max-tape-length", "128"])
        self.assertEqual(exit_code, 0)
        factory.assert_called_once_with(max_steps=500, max_tape_length=128)
        run.assert_called_once_with(factory.return_value, host="127.0.0.1", port=9000)


if __name__ == "__main__":
    unittest.main()

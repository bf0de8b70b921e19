"""
Judge adapter tests: message parsing, history replay, keep-alive sessions and
the stdin/stdout bot loop.
"""

import io
import json
import unittest

import bot
from env import create_random_setup
from env.core import Action, Side
from judge import (
    KEEP_RUNNING_MARKER,
    BotSession,
    JudgeInput,
    JudgeProtocolError,
    SetupRequest,
    joint_action,
    parse_message,
)

OPPONENT_STAYS = [int(Action.STAY), int(Action.STAY)]


class TestParseMessage(unittest.TestCase):
    def test_full_history(self) -> None:
        message = parse_message(json.dumps({
            "requests": [{"field": [1, 0, 4], "mySide": 1}, [0, -1]],
            "responses": [[-1, 5]],
            "data": "saved",
        }))
        self.assertIsInstance(message, JudgeInput)
        setup = message.requests[0]
        self.assertIsInstance(setup, SetupRequest)
        self.assertEqual(setup.my_side, Side.RED)
        self.assertEqual(setup.field, [1, 0, 4])
        self.assertEqual(message.requests[1], [Action.UP, Action.STAY])
        self.assertEqual(message.responses[0], [Action.STAY, Action.RIGHT_SHOOT])
        self.assertEqual(message.data, "saved")
        self.assertEqual(message.globaldata, "")

    def test_single_requests(self) -> None:
        self.assertIsInstance(parse_message('{"field": [0, 0, 0], "mySide": 0}'), SetupRequest)
        self.assertEqual(parse_message("[7, 2]"), [Action.LEFT_SHOOT, Action.DOWN])

    def test_malformed_input(self) -> None:
        for raw in ("not json", "[1]", "[1, 2, 3]", "[9, 0]", '{"field": [0, 0]}', '"text"'):
            with self.subTest(raw=raw):
                with self.assertRaises(JudgeProtocolError):
                    parse_message(raw)

    def test_joint_action_orders_sides(self) -> None:
        actions = joint_action(Side.RED, [Action.UP, Action.STAY], [Action.DOWN, Action.LEFT])
        self.assertEqual(actions[(Side.RED, 0)], Action.UP)
        self.assertEqual(actions[(Side.BLUE, 1)], Action.LEFT)


class TestBotSession(unittest.TestCase):
    def setUp(self) -> None:
        self.setup_request = create_random_setup(seed=3).to_request()

    def play_keep_alive(self, turns: int):
        session = BotSession()
        responses = []
        response = session.handle(parse_message({"requests": [self.setup_request], "responses": []}))
        responses.append([int(a) for a in response.response])
        for _ in range(turns):
            response = session.handle(parse_message(list(OPPONENT_STAYS)))
            responses.append([int(a) for a in response.response])
        return session, responses

    def test_stateless_replay_matches_keep_alive(self) -> None:
        turns = 6
        live, responses = self.play_keep_alive(turns)

        replayed = BotSession()
        final = replayed.handle(parse_message({
            "requests": [self.setup_request] + [list(OPPONENT_STAYS)] * turns,
            "responses": responses[:turns],
        }))

        self.assertEqual(replayed.world.snapshot(), live.world.snapshot())
        self.assertEqual([int(a) for a in final.response], responses[turns])

    def test_setup_only_message(self) -> None:
        session = BotSession(agent_type="random", agent_params={"seed": 1})
        response = session.handle(parse_message(self.setup_request))
        self.assertEqual(session.world.turn, 1)
        self.assertEqual(session.my_side, Side.BLUE)
        self.assertEqual(len(response.response), 2)
        self.assertEqual(session.pending, list(response.response))

    def test_data_is_passed_through(self) -> None:
        session = BotSession(debug=True)
        response = session.handle(parse_message({
            "requests": [self.setup_request],
            "responses": [],
            "data": "memo",
            "globaldata": "",
        }))
        payload = json.loads(response.to_json())
        self.assertEqual(payload["data"], "memo")
        self.assertNotIn("globaldata", payload)
        self.assertIn("reasons", json.loads(payload["debug"]))

    def test_protocol_errors(self) -> None:
        with self.assertRaises(JudgeProtocolError):
            BotSession().handle(parse_message({"requests": [[0, 0]], "responses": []}))
        with self.assertRaises(JudgeProtocolError):
            BotSession().handle(parse_message([0, 0]))
        with self.assertRaises(JudgeProtocolError):
            BotSession().handle(parse_message({
                "requests": [self.setup_request, [0, 0], [0, 0]],
                "responses": [[-1, -1]],
            }))

    def test_rejected_turn_keeps_state(self) -> None:
        session = BotSession()
        session.handle(parse_message(self.setup_request))
        before = session.world.snapshot()
        # RED tank 0 at (6, 8) cannot move down off the board.
        session.handle(parse_message([int(Action.DOWN), int(Action.STAY)]))
        self.assertEqual(session.world.snapshot(), before)


class TestBotMain(unittest.TestCase):
    def setUp(self) -> None:
        self.setup_request = create_random_setup(seed=8).to_request()

    def test_once_answers_and_exits(self) -> None:
        stdin = io.StringIO(json.dumps({"requests": [self.setup_request], "responses": []}) + "\n")
        stdout = io.StringIO()
        code = bot.main(["--once"], stdin=stdin, stdout=stdout)

        self.assertEqual(code, 0)
        lines = stdout.getvalue().splitlines()
        self.assertEqual(len(lines), 1)
        self.assertEqual(len(json.loads(lines[0])["response"]), 2)

    def test_keep_running_loop(self) -> None:
        stdin = io.StringIO(
            json.dumps({"requests": [self.setup_request], "responses": []})
            + "\n\n"
            + json.dumps(OPPONENT_STAYS)
            + "\n"
        )
        stdout = io.StringIO()
        code = bot.main([], stdin=stdin, stdout=stdout)

        self.assertEqual(code, 0)
        lines = stdout.getvalue().splitlines()
        self.assertEqual(lines[1], KEEP_RUNNING_MARKER)
        self.assertEqual(lines[3], KEEP_RUNNING_MARKER)
        self.assertIn("response", json.loads(lines[2]))

    def test_multi_line_input(self) -> None:
        document = json.dumps({"requests": [self.setup_request], "responses": []}, indent=2)
        message = bot.read_message(io.StringIO(document + "\n"))
        self.assertEqual(json.loads(message)["requests"][0], self.setup_request)

    def test_bad_message_exits_with_error(self) -> None:
        code = bot.main(["--once"], stdin=io.StringIO("{oops\n}\n"), stdout=io.StringIO())
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()

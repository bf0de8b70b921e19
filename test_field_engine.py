"""
Rules engine tests: validation, move/fire resolution, rollback and victory.

Run with ``python -m unittest test_field_engine`` (or pytest).
"""

import unittest
from typing import Dict, Optional

from agents.random_agent import RandomAgent
from env import FieldEnv, Setup, create_empty_setup, create_random_setup
from env.core import Action, GameResult, Item, Side, TankKey
from env.mechanics import VictoryConditions
from env.world import FieldState

BLUE0: TankKey = (Side.BLUE, 0)
BLUE1: TankKey = (Side.BLUE, 1)
RED0: TankKey = (Side.RED, 0)
RED1: TankKey = (Side.RED, 1)


def joint(**overrides: Action) -> Dict[TankKey, Action]:
    """All four tanks STAY unless overridden, e.g. joint(blue0=Action.DOWN)."""
    keys = {"blue0": BLUE0, "blue1": BLUE1, "red0": RED0, "red1": RED1}
    actions = {key: Action.STAY for key in keys.values()}
    for name, action in overrides.items():
        actions[keys[name]] = action
    return actions


class FieldEngineTestCase(unittest.TestCase):
    def make_env(self, setup: Optional[Setup] = None) -> FieldEnv:
        env = FieldEnv()
        env.reset(setup or create_empty_setup())
        return env

    def assert_step_applied(self, env: FieldEnv, actions: Dict[TankKey, Action]) -> None:
        _state, _done, info = env.step(actions)
        self.assertTrue(info.applied, info.validation.message)


class TestInitialLayout(FieldEngineTestCase):
    def test_landmarks_and_tanks(self) -> None:
        world = self.make_env().world
        grid = world.grid
        self.assertEqual(world.turn, 1)
        self.assertEqual(grid.items_at((4, 0)), Item.BASE)
        self.assertEqual(grid.items_at((4, 8)), Item.BASE)
        self.assertEqual(grid.items_at((4, 1)), Item.STEEL)
        self.assertEqual(grid.items_at((4, 7)), Item.STEEL)
        self.assertEqual(world.get_tank(Side.BLUE, 0).pos, (2, 0))
        self.assertEqual(world.get_tank(Side.BLUE, 1).pos, (6, 0))
        self.assertEqual(world.get_tank(Side.RED, 0).pos, (6, 8))
        self.assertEqual(world.get_tank(Side.RED, 1).pos, (2, 8))
        self.assertEqual(grid.items_at((2, 0)), Item.BLUE0)
        self.assertEqual(grid.items_at((2, 8)), Item.RED1)

    def test_bricks_from_setup(self) -> None:
        world = self.make_env(Setup.from_bricks([(0, 4), (8, 4)])).world
        self.assertTrue(world.grid.cell((0, 4)).has_brick)
        self.assertTrue(world.grid.cell((8, 4)).has_brick)
        self.assertTrue(world.grid.cell((1, 4)).is_empty)


class TestValidation(FieldEngineTestCase):
    def test_validity_is_pure(self) -> None:
        env = self.make_env()
        before = env.world.snapshot()
        for action in Action:
            env.action_is_valid(Side.BLUE, 0, action)
        self.assertEqual(env.world.snapshot(), before)

    def test_move_rules(self) -> None:
        env = self.make_env()
        self.assertFalse(env.action_is_valid(Side.BLUE, 0, Action.UP))
        self.assertTrue(env.action_is_valid(Side.BLUE, 0, Action.DOWN))
        self.assertTrue(env.action_is_valid(Side.BLUE, 0, Action.STAY))
        self.assertFalse(env.action_is_valid(Side.BLUE, 0, Action.INVALID))

    def test_rejected_step_leaves_world_untouched(self) -> None:
        env = self.make_env()
        before = env.world.snapshot()
        _state, done, info = env.step(joint(blue0=Action.UP))
        self.assertFalse(info.applied)
        self.assertFalse(done)
        self.assertEqual(info.validation.code, "OUT_OF_BOUNDS")
        self.assertEqual(env.world.snapshot(), before)

    def test_missing_action_for_alive_tank_is_rejected(self) -> None:
        env = self.make_env()
        actions = joint()
        del actions[RED0]
        self.assertFalse(env.apply(actions))
        self.assertEqual(env.world.turn, 1)

    def test_consecutive_fire(self) -> None:
        env = self.make_env()
        self.assert_step_applied(env, joint(blue0=Action.LEFT_SHOOT))
        self.assertFalse(env.action_is_valid(Side.BLUE, 0, Action.LEFT_SHOOT))
        self.assertTrue(env.action_is_valid(Side.BLUE, 0, Action.DOWN))

        _state, _done, info = env.step(joint(blue0=Action.UP_SHOOT))
        self.assertFalse(info.applied)
        self.assertEqual(info.validation.code, "CONSECUTIVE_FIRE")

        self.assert_step_applied(env, joint())
        self.assertTrue(env.action_is_valid(Side.BLUE, 0, Action.LEFT_SHOOT))


class TestResolution(FieldEngineTestCase):
    def test_move_updates_grid_and_tank(self) -> None:
        env = self.make_env()
        self.assert_step_applied(env, joint(blue0=Action.DOWN))
        world = env.world
        self.assertEqual(world.turn, 2)
        self.assertEqual(world.get_tank(Side.BLUE, 0).pos, (2, 1))
        self.assertTrue(world.grid.cell((2, 0)).is_empty)
        self.assertEqual(world.grid.items_at((2, 1)), Item.BLUE0)
        self.assertEqual(world.previous_action(BLUE0), Action.DOWN)

    def test_shot_destroys_first_occupied_cell(self) -> None:
        env = self.make_env()
        _state, done, info = env.step(joint(blue0=Action.DOWN_SHOOT))
        self.assertFalse(done)
        red1 = env.world.get_tank(Side.RED, 1)
        self.assertFalse(red1.alive)
        self.assertIsNone(red1.pos)
        self.assertTrue(env.world.grid.cell((2, 8)).is_empty)
        self.assertEqual([entry.item for entry in info.combat.destroyed], [Item.RED1])

    def test_opposite_fire_cancels(self) -> None:
        env = self.make_env()
        _state, _done, info = env.step(joint(blue0=Action.DOWN_SHOOT, red1=Action.UP_SHOOT))
        self.assertTrue(info.applied)
        self.assertTrue(env.world.get_tank(Side.BLUE, 0).alive)
        self.assertTrue(env.world.get_tank(Side.RED, 1).alive)
        self.assertTrue(all(shot.cancelled for shot in info.combat.shots))
        self.assertEqual(info.combat.destroyed, [])

    def test_non_opposite_fire_does_not_cancel(self) -> None:
        env = self.make_env()
        env.step(joint(blue0=Action.DOWN_SHOOT, red1=Action.LEFT_SHOOT))
        self.assertTrue(env.world.get_tank(Side.BLUE, 0).alive)
        self.assertFalse(env.world.get_tank(Side.RED, 1).alive)

    def test_steel_is_immune(self) -> None:
        env = self.make_env()
        self.assert_step_applied(env, joint(blue0=Action.DOWN))
        log_size = len(env.world.log)
        self.assert_step_applied(env, joint(blue0=Action.RIGHT_SHOOT))
        self.assertEqual(env.world.grid.items_at((4, 1)), Item.STEEL)
        self.assertEqual(len(env.world.log), log_size)

    def test_brick_absorbs_shot(self) -> None:
        env = self.make_env(Setup.from_bricks([(2, 4), (6, 4)]))
        env.step(joint(blue0=Action.DOWN_SHOOT))
        self.assertTrue(env.world.grid.cell((2, 4)).is_empty)
        self.assertTrue(env.world.get_tank(Side.RED, 1).alive)
        self.assertTrue(env.world.grid.cell((6, 4)).has_brick)

    def test_simultaneous_moves_can_stack(self) -> None:
        env = self.make_env()
        self.assert_step_applied(env, joint(blue0=Action.DOWN, blue1=Action.DOWN))
        self.assert_step_applied(env, joint(blue0=Action.DOWN, blue1=Action.DOWN))
        self.assert_step_applied(env, joint(blue0=Action.RIGHT, blue1=Action.LEFT))
        self.assert_step_applied(env, joint(blue0=Action.RIGHT, blue1=Action.LEFT))

        cell = env.world.grid.cell((4, 2))
        self.assertTrue(cell.is_stacked)
        self.assertEqual(cell.symbol(), "@")

        self.assertTrue(env.revert())
        self.assertEqual(env.world.get_tank(Side.BLUE, 0).pos, (3, 2))
        self.assertEqual(env.world.get_tank(Side.BLUE, 1).pos, (5, 2))

    def test_cell_hit_twice_is_destroyed_once(self) -> None:
        env = self.make_env(Setup.from_bricks([(2, 4)]))
        log_size = len(env.world.log)
        _state, _done, info = env.step(joint(blue0=Action.DOWN_SHOOT, red1=Action.UP_SHOOT))

        self.assertTrue(info.applied)
        self.assertEqual([entry.item for entry in info.combat.destroyed], [Item.BRICK])
        self.assertEqual(len(env.world.log), log_size + 1)
        self.assertTrue(env.world.get_tank(Side.BLUE, 0).alive)
        self.assertTrue(env.world.get_tank(Side.RED, 1).alive)

        self.assertTrue(env.revert())
        self.assertTrue(env.world.grid.cell((2, 4)).has_brick)
        self.assertEqual(len(env.world.log), log_size)

    def test_stacked_cells_never_cancel_fire(self) -> None:
        env = self.make_env()
        self.assert_step_applied(env, joint(blue0=Action.DOWN, blue1=Action.DOWN))
        self.assert_step_applied(env, joint(blue0=Action.DOWN, blue1=Action.DOWN))
        self.assert_step_applied(env, joint(blue0=Action.RIGHT, blue1=Action.LEFT))
        self.assert_step_applied(env, joint(blue0=Action.RIGHT, blue1=Action.LEFT))
        for _ in range(6):
            self.assert_step_applied(env, joint(red1=Action.UP))
        self.assert_step_applied(env, joint(red1=Action.RIGHT))
        self.assertEqual(env.world.get_tank(Side.RED, 1).pos, (3, 2))
        before = env.world.snapshot()

        _state, done, info = env.step(
            joint(blue0=Action.LEFT_SHOOT, blue1=Action.LEFT_SHOOT, red1=Action.RIGHT_SHOOT)
        )
        self.assertTrue(info.applied)
        self.assertFalse(any(shot.cancelled for shot in info.combat.shots))
        # RED1 is hit by both blue shots but destroyed once.
        self.assertEqual(
            [(entry.pos, entry.item) for entry in info.combat.destroyed],
            [((3, 2), Item.RED1), ((4, 2), Item.BLUE0), ((4, 2), Item.BLUE1)],
        )
        self.assertTrue(done)
        self.assertEqual(env.result, GameResult.RED_WINS)

        self.assertTrue(env.revert())
        self.assertEqual(env.world.snapshot(), before)
        self.assertTrue(env.world.grid.cell((4, 2)).is_stacked)
        self.assertEqual(env.world.get_tank(Side.BLUE, 0).pos, (4, 2))
        self.assertEqual(env.world.get_tank(Side.BLUE, 1).pos, (4, 2))
        self.assertEqual(env.world.get_tank(Side.RED, 1).pos, (3, 2))


class TestVictory(FieldEngineTestCase):
    def test_base_destruction_wins_and_reverts(self) -> None:
        env = self.make_env()
        self.assert_step_applied(env, joint(blue0=Action.DOWN_SHOOT))
        for _ in range(8):
            self.assert_step_applied(env, joint(blue0=Action.DOWN, red1=Action.INVALID))
        self.assertEqual(env.world.get_tank(Side.BLUE, 0).pos, (2, 8))

        _state, done, info = env.step(joint(blue0=Action.RIGHT_SHOOT, red1=Action.INVALID))
        self.assertTrue(done)
        self.assertEqual(env.result, GameResult.BLUE_WINS)
        self.assertEqual(env.winner, Side.BLUE)
        self.assertEqual(info.victory.reason, "RED base destroyed")

        self.assertTrue(env.revert())
        self.assertTrue(env.world.bases[Side.RED].alive)
        self.assertEqual(env.world.grid.items_at((4, 8)), Item.BASE)
        self.assertEqual(env.result, GameResult.NOT_FINISHED)

    def test_turn_limit_is_a_draw(self) -> None:
        env = self.make_env()
        for _ in range(99):
            _state, done, _info = env.step(joint())
            self.assertFalse(done)
        _state, done, info = env.step(joint())
        self.assertTrue(done)
        self.assertEqual(env.world.turn, 101)
        self.assertEqual(info.victory.result, GameResult.DRAW)
        self.assertIsNone(env.winner)

    def test_both_sides_failing_is_a_draw(self) -> None:
        world = FieldState()
        world.bases[Side.BLUE].alive = False
        world.bases[Side.RED].alive = False
        self.assertEqual(VictoryConditions().check(world).result, GameResult.DRAW)

    def test_losing_both_tanks_loses(self) -> None:
        world = FieldState()
        for tank in world.get_side_tanks(Side.RED):
            tank.destroy()
        self.assertEqual(VictoryConditions().check(world).result, GameResult.BLUE_WINS)


class TestRollback(FieldEngineTestCase):
    def test_revert_at_first_turn_is_a_no_op(self) -> None:
        env = self.make_env()
        before = env.world.snapshot()
        self.assertFalse(env.revert())
        self.assertEqual(env.world.snapshot(), before)

    def test_apply_then_revert_is_identity(self) -> None:
        env = self.make_env(create_random_setup(seed=11))
        blue = RandomAgent(Side.BLUE, seed=1)
        red = RandomAgent(Side.RED, seed=2)

        snapshots = [env.world.snapshot()]
        done = False
        while not done and env.world.turn <= 40:
            state = {"world": env.world}
            blue_actions, _ = blue.get_actions(state)
            red_actions, _ = red.get_actions(state)
            _state, done, info = env.step({**blue_actions, **red_actions})
            self.assertTrue(info.applied, info.validation.message)
            snapshots.append(env.world.snapshot())

        for expected in reversed(snapshots[:-1]):
            self.assertTrue(env.revert())
            self.assertEqual(env.world.snapshot(), expected)
        self.assertFalse(env.revert())

    def test_replay_is_deterministic(self) -> None:
        setup = create_random_setup(seed=5)
        results = []
        for _ in range(2):
            env = self.make_env(setup)
            blue = RandomAgent(Side.BLUE, seed=3)
            red = RandomAgent(Side.RED, seed=4)
            for _turn in range(30):
                state = {"world": env.world}
                blue_actions, _ = blue.get_actions(state)
                red_actions, _ = red.get_actions(state)
                _state, done, _info = env.step({**blue_actions, **red_actions})
                if done:
                    break
            results.append(env.world.snapshot())
        self.assertEqual(results[0], results[1])


class TestEnvLifecycle(unittest.TestCase):
    def test_step_before_reset_raises(self) -> None:
        with self.assertRaises(RuntimeError):
            FieldEnv().step(joint())


if __name__ == "__main__":
    unittest.main()

"""
Simple battle - greedy agent against the random baseline.

Plays one game with the board printed every turn, then a batch of seeded
games for win statistics.
"""

import argparse

from agents import AgentSpec
from env import create_random_setup
from env.core.types import GameResult, Side
from env.setup import Setup
from game_runner import GameRunner


def create_simple_battle(seed: int) -> Setup:
    """Random symmetric field, greedy BLUE against random RED."""
    setup = create_random_setup(seed=seed)
    setup.agents = [
        AgentSpec(side=Side.BLUE, type="greedy", name="Blue Greedy"),
        AgentSpec(side=Side.RED, type="random", name="Red Random", init_params={"seed": seed}),
    ]
    return setup


def play_verbose(seed: int) -> None:
    runner = GameRunner(create_simple_battle(seed))
    print(runner.world.to_ascii())
    while not runner.done:
        frame = runner.step()
        labels = ", ".join(f"{side.name}{index}:{action}" for (side, index), action in sorted(frame.actions.items()))
        print(f"\nTurn {frame.world.turn}: {labels}")
        for line in frame.step_info.combat.death_logs:
            print(f"  {line}")
        print(runner.world.to_ascii())
    print(f"\nResult: {runner.result.name}")


def main():
    parser = argparse.ArgumentParser(description="Greedy vs random demo matches.")
    parser.add_argument("--seed", type=int, default=1, help="Seed of the verbose game (default: 1)")
    parser.add_argument("--games", type=int, default=20, help="Games for the statistics run (default: 20)")
    args = parser.parse_args()

    print("=" * 60)
    print("SIMPLE BATTLE - greedy vs random")
    print("=" * 60)
    play_verbose(args.seed)

    outcomes = {result: 0 for result in (GameResult.BLUE_WINS, GameResult.RED_WINS, GameResult.DRAW)}
    total_turns = 0
    for seed in range(args.games):
        runner = GameRunner(create_simple_battle(seed))
        runner.run()
        outcomes[runner.result] += 1
        total_turns += runner.turn - 1

    print("\n" + "=" * 60)
    print(f"RESULTS SUMMARY ({args.games} games)")
    print("=" * 60)
    for result, count in outcomes.items():
        print(f"  {result.name:<10} {count:3d} ({count / max(args.games, 1) * 100:5.1f}%)")
    print(f"  Average turns: {total_turns / max(args.games, 1):.1f}")


if __name__ == "__main__":
    main()

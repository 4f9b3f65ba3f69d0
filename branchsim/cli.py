"""
CLI entry point for branchsim.
"""

import argparse
import logging


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="branchsim - Drive branching turn-based simulations"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every resolution"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Demo command
    demo_parser = subparsers.add_parser(
        "demo", help="Run random playouts of the single battle start"
    )
    demo_parser.add_argument(
        "-n", "--n-playouts",
        type=int,
        default=100,
        help="Number of playouts to run (default: 100)"
    )
    demo_parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Base seed (default: 42)"
    )

    # Play command
    play_parser = subparsers.add_parser("play", help="Run and print one playout")
    play_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random players"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "demo":
        run_demo(args)

    elif args.command == "play":
        run_play(args)

    else:
        parser.print_help()


def _random_policies(seed):
    from branchsim.examples.single_battle import Player
    from branchsim.policies.base import RandomPolicy

    return {
        Player.PLAYER_1: RandomPolicy(seed=seed),
        Player.PLAYER_2: RandomPolicy(seed=None if seed is None else seed + 1),
    }


def _start_battle(seed=None):
    from branchsim.examples.single_battle import SingleBattle, default_teams

    return SingleBattle.start(*default_teams())


def _matchup(result):
    from branchsim.examples.single_battle import matchup

    return matchup(result.final_state)


def run_demo(args):
    """Run many random playouts and summarize them."""
    from branchsim.examples.single_battle import CHOOSE_ACTIVE
    from branchsim.swarm.executor import SwarmExecutor, SwarmConfig
    from branchsim.swarm.collector import OutcomeCollector

    print(f"Running {args.n_playouts} playouts...")

    executor = SwarmExecutor(
        node_factory=_start_battle,
        policy_factory=_random_policies,
        config=SwarmConfig(
            n_playouts=args.n_playouts,
            base_seed=args.seed,
            show_progress=False,
        ),
        outcome_fn=_matchup,
    )

    swarm_result = executor.run_sequential()
    collector = OutcomeCollector(swarm_result)

    print()
    print(collector.get_outcome_summary().describe())
    print()
    print(f"Starting choices ('{CHOOSE_ACTIVE}'):")
    freqs = collector.get_choice_frequencies(CHOOSE_ACTIVE)
    for label, count in sorted(freqs.items(), key=lambda kv: -kv[1]):
        print(f"  {label:<20} {count:>6}")

    if swarm_result.errors:
        print(f"\n{swarm_result.failed_runs} playouts failed")


def run_play(args):
    """Run one random playout and print it."""
    from branchsim.engine.driver import Driver

    driver = Driver(_random_policies(args.seed))
    result = driver.run(_start_battle(args.seed), seed=args.seed)

    for record in result.trajectory:
        who = record.player if record.player is not None else "Chance"
        print(f"[{record.step}] {who} - {record.name}: {record.label}")

    print()
    for line in result.final_state.log:
        print(line)
    print(f"\nOutcome: {result.outcome} after {result.total_steps} steps")


if __name__ == "__main__":
    main()

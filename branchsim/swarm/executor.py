"""
Many-playout executor.

Runs the same simulation with the same policies across many seeds to
turn single playouts into outcome distributions. Every playout builds its
own root Node, since continuations are one-shot.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, TYPE_CHECKING
import logging
import pickle
import time

from branchsim.engine.driver import Driver, DriverConfig

if TYPE_CHECKING:
    from branchsim.engine.driver import PlayoutResult
    from branchsim.engine.node import Node
    from branchsim.policies.base import Policy

logger = logging.getLogger(__name__)


@dataclass
class SwarmConfig:
    """
    Configuration for swarm execution.

    Attributes:
        n_playouts: Number of playouts to run
        max_workers: Maximum parallel workers (None = executor default)
        executor_type: "thread" or "process"
        base_seed: Starting seed (playout i uses base_seed + i)
        show_progress: Whether to print progress updates
    """
    n_playouts: int = 100
    max_workers: Optional[int] = None
    executor_type: str = "thread"
    base_seed: int = 42
    show_progress: bool = True

    def __post_init__(self):
        if self.n_playouts < 1:
            raise ValueError("n_playouts must be at least 1")
        if self.executor_type not in ["thread", "process"]:
            raise ValueError("executor_type must be 'thread' or 'process'")


@dataclass
class SwarmResult:
    """
    Result of running a swarm.

    Attributes:
        results: Individual playout results
        config: Configuration used
        total_time_seconds: Total execution time
        errors: One entry per seed whose playout raised
    """
    results: List["PlayoutResult"]
    config: SwarmConfig
    total_time_seconds: float
    errors: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def successful_runs(self) -> int:
        return len(self.results)

    @property
    def failed_runs(self) -> int:
        return len(self.errors)

    @property
    def outcomes(self) -> List[str]:
        """Outcome label of every playout."""
        return [r.metadata.get("outcome", r.outcome) for r in self.results]

    @property
    def completion_rate(self) -> float:
        """Proportion of playouts that reached End."""
        if not self.results:
            return 0.0
        return sum(1 for r in self.results if r.completed) / len(self.results)

    def filter_by_outcome(self, outcome: str) -> List["PlayoutResult"]:
        return [
            r for r, o in zip(self.results, self.outcomes) if o == outcome
        ]


def _run_playout(
    node_factory: Callable[[int], "Node"],
    policy_factory: Callable[[int], Mapping[Any, "Policy"]],
    outcome_fn: Optional[Callable[["PlayoutResult"], str]],
    driver_config: DriverConfig,
    seed: int,
) -> "PlayoutResult":
    driver = Driver(policy_factory(seed), config=driver_config)
    result = driver.run(node_factory(seed), seed=seed)
    if outcome_fn is not None:
        result.metadata["outcome"] = outcome_fn(result)
    logger.debug("seed %d finished in %d steps", seed, result.total_steps)
    return result


class SwarmExecutor:
    """
    Drives a freshly built simulation once per seed.

    With executor_type="process" the factories and outcome_fn are pickled
    into the workers, so they must be module-level functions.

    Example:
        def start(seed):
            return SingleBattle.start(*default_teams())

        def players(seed):
            return {
                Player.PLAYER_1: RandomPolicy(seed),
                Player.PLAYER_2: RandomPolicy(seed + 1),
            }

        executor = SwarmExecutor(
            node_factory=start,
            policy_factory=players,
            config=SwarmConfig(n_playouts=1000, executor_type="process"),
        )
        swarm_result = executor.run()
    """

    def __init__(
        self,
        node_factory: Callable[[int], "Node"],
        policy_factory: Callable[[int], Mapping[Any, "Policy"]],
        config: Optional[SwarmConfig] = None,
        outcome_fn: Optional[Callable[["PlayoutResult"], str]] = None,
        driver_config: Optional[DriverConfig] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ):
        """
        Initialize swarm executor.

        Args:
            node_factory: Builds the root Node for a seed
            policy_factory: Builds the per-player policies for a seed
            config: Swarm configuration
            outcome_fn: Labels a finished playout (defaults to its outcome)
            driver_config: Settings passed to every Driver
            progress_callback: Called with (completed, total) during execution
        """
        self.node_factory = node_factory
        self.policy_factory = policy_factory
        self.config = config or SwarmConfig()
        self.outcome_fn = outcome_fn
        self.driver_config = driver_config or DriverConfig()
        self.progress_callback = progress_callback

    def _run_single(self, seed: int) -> "PlayoutResult":
        return _run_playout(
            self.node_factory,
            self.policy_factory,
            self.outcome_fn,
            self.driver_config,
            seed,
        )

    def _check_picklable(self) -> None:
        """Process workers receive the factories by pickling them."""
        for attr in ("node_factory", "policy_factory", "outcome_fn"):
            try:
                pickle.dumps(getattr(self, attr))
            except (pickle.PicklingError, AttributeError, TypeError) as e:
                raise ValueError(
                    f"executor_type='process' needs a picklable {attr} "
                    f"(use a module-level function): {e}"
                ) from e

    def _seeds(self) -> List[int]:
        return [self.config.base_seed + i for i in range(self.config.n_playouts)]

    def _record_error(self, errors: List[Dict[str, Any]], seed: int, e: Exception) -> None:
        logger.warning("Playout for seed %d failed: %s", seed, e)
        errors.append({
            "seed": seed,
            "error": str(e),
            "error_type": type(e).__name__,
        })

    def _report_progress(self, completed: int) -> None:
        total = self.config.n_playouts
        if self.progress_callback:
            self.progress_callback(completed, total)
        if self.config.show_progress and completed % max(1, total // 10) == 0:
            pct = completed / total * 100
            print(f"Progress: {completed}/{total} ({pct:.0f}%)")

    def run(self) -> SwarmResult:
        """
        Run every playout on a worker pool.

        Returns:
            SwarmResult with results ordered by seed

        Raises:
            ValueError: If a process pool is requested with factories that
                cannot be pickled
        """
        start_time = time.time()
        by_seed: Dict[int, "PlayoutResult"] = {}
        errors: List[Dict[str, Any]] = []

        if self.config.executor_type == "process":
            self._check_picklable()
            ExecutorClass = ProcessPoolExecutor
        else:
            ExecutorClass = ThreadPoolExecutor

        completed = 0

        with ExecutorClass(max_workers=self.config.max_workers) as executor:
            future_to_seed = {
                executor.submit(
                    _run_playout,
                    self.node_factory,
                    self.policy_factory,
                    self.outcome_fn,
                    self.driver_config,
                    seed,
                ): seed
                for seed in self._seeds()
            }

            for future in as_completed(future_to_seed):
                seed = future_to_seed[future]
                completed += 1

                try:
                    by_seed[seed] = future.result()
                except Exception as e:
                    self._record_error(errors, seed, e)

                self._report_progress(completed)

        return SwarmResult(
            results=[by_seed[s] for s in sorted(by_seed)],
            config=self.config,
            total_time_seconds=time.time() - start_time,
            errors=sorted(errors, key=lambda e: e["seed"]),
        )

    def run_sequential(self) -> SwarmResult:
        """
        Run playouts one after another (for debugging).

        Returns:
            SwarmResult with results ordered by seed
        """
        start_time = time.time()
        results: List["PlayoutResult"] = []
        errors: List[Dict[str, Any]] = []

        for i, seed in enumerate(self._seeds()):
            try:
                results.append(self._run_single(seed))
            except Exception as e:
                self._record_error(errors, seed, e)

            self._report_progress(i + 1)

        return SwarmResult(
            results=results,
            config=self.config,
            total_time_seconds=time.time() - start_time,
            errors=errors,
        )

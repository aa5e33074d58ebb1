"""
Target graph: named build targets, their "runs-after" edges, and execution.

Every target is registered once and exposed twice: the chained target, which
runs its prerequisites first, and a ``<name>_single`` variant that runs the
same action on its own with interactive confirmation skipped.

Targets become invoke tasks; prerequisites become invoke pre-tasks, so the
invoke executor handles ordering and deduplication.
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from invoke import Collection, Config, Executor, Task

from .config.exceptions import (
    DuplicateTargetException,
    UnknownTargetException,
    CyclicDependencyException,
)

logger = logging.getLogger(__name__)

SINGLE_SUFFIX = "_single"

TargetAction = Callable[[bool], None]


@dataclass
class Target:
    """A named unit of build automation."""
    name: str
    action: TargetAction
    single: bool = False
    description: str = ""
    prerequisites: List[str] = field(default_factory=list)

    def run(self) -> None:
        self.action(self.single)


def single_name(name: str) -> str:
    return f"{name}{SINGLE_SUFFIX}"


class TargetGraph:
    """Registry of targets and the edges between them."""

    def __init__(self, default: str = "All"):
        self.default = default
        self.targets: Dict[str, Target] = {}
        self.time_report: List[Tuple[str, float]] = []

    def __contains__(self, name: str) -> bool:
        return name in self.targets

    def __getitem__(self, name: str) -> Target:
        if name not in self.targets:
            raise UnknownTargetException(name)
        return self.targets[name]

    def _add(self, target: Target) -> None:
        if target.name in self.targets:
            raise DuplicateTargetException(target.name)
        self.targets[target.name] = target

    def target(self, name: str, action: TargetAction, description: str = "") -> Target:
        """
        Register a target and its standalone ``_single`` variant.

        Args:
            name: Unique target name
            action: Called with ``single`` (True when confirmations are skipped)
            description: Help text shown by ``--list``

        Returns:
            The chained target
        """
        chained = Target(name, action, single=False, description=description)
        standalone = Target(single_name(name), action, single=True,
                            description=f"{description} (this target only, no prompts)".strip())
        self._add(chained)
        self._add(standalone)
        return chained

    def depends(self, before: str, after: str) -> None:
        """Make ``after`` run after ``before`` whenever ``after`` is requested."""
        prerequisite = self[before]
        dependent = self[after]
        if prerequisite.name not in dependent.prerequisites:
            dependent.prerequisites.append(prerequisite.name)

    def chain(self, *names: str) -> None:
        """``chain(a, b, c)`` wires a ==> b ==> c."""
        for before, after in zip(names, names[1:]):
            self.depends(before, after)

    def validate(self) -> None:
        """
        Check that every edge names a known target and that there are no cycles.

        Raises:
            UnknownTargetException: If a prerequisite is not registered
            CyclicDependencyException: If the edges form a cycle
        """
        visiting: List[str] = []
        done = set()

        def visit(name: str) -> None:
            if name in done:
                return
            if name in visiting:
                raise CyclicDependencyException(visiting[visiting.index(name):] + [name])
            visiting.append(name)
            for prerequisite in self[name].prerequisites:
                visit(prerequisite)
            visiting.pop()
            done.add(name)

        for name in self.targets:
            visit(name)

    def execution_order(self, name: Optional[str] = None) -> List[str]:
        """Targets run for ``name``: prerequisites depth-first, first occurrence wins."""
        order: List[str] = []

        def expand(current: str) -> None:
            for prerequisite in self[current].prerequisites:
                expand(prerequisite)
            if current not in order:
                order.append(current)

        self.validate()
        expand(name or self.default)
        return order

    def _run_target(self, target: Target) -> None:
        logger.info(f"Starting Target: {target.name}")
        started = time.monotonic()
        try:
            target.run()
        except Exception:
            logger.error(f"Running target {target.name} failed")
            raise
        finally:
            self.time_report.append((target.name, time.monotonic() - started))
        logger.info(f"Finished Target: {target.name}")

    def _make_task(self, target: Target, tasks: Dict[str, Task]) -> Task:
        if target.name in tasks:
            return tasks[target.name]
        pre = [self._make_task(self[name], tasks) for name in target.prerequisites]

        def body(c):
            self._run_target(target)

        body.__doc__ = target.description
        tasks[target.name] = Task(body, name=target.name, pre=pre)
        return tasks[target.name]

    def to_collection(self) -> Collection:
        """Validate the graph and expose every target as an invoke task."""
        self.validate()
        namespace = Collection(auto_dash_names=False)
        tasks: Dict[str, Task] = {}
        for target in self.targets.values():
            namespace.add_task(self._make_task(target, tasks), name=target.name,
                               default=target.name == self.default)
        return namespace

    def run(self, name: Optional[str] = None, config: Optional[Config] = None) -> None:
        """Run ``name`` (default target when omitted) and everything it depends on."""
        name = name or self.default
        if name not in self.targets:
            raise UnknownTargetException(name)
        logger.debug(f"Execution order for {name}: {' ==> '.join(self.execution_order(name))}")
        Executor(self.to_collection(), config=config).execute(name)

    def log_time_report(self) -> None:
        if not self.time_report:
            return
        logger.info("---------------------------------------------------------------------")
        logger.info("Build Time Report")
        logger.info("---------------------------------------------------------------------")
        width = max(len(name) for name, _ in self.time_report)
        for name, seconds in self.time_report:
            logger.info(f"{name.ljust(width)}   {seconds:8.2f}s")
        total = sum(seconds for _, seconds in self.time_report)
        logger.info(f"{'Total:'.ljust(width)}   {total:8.2f}s")

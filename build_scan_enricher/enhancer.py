"""Adds a standard set of tags, links and custom values to a build scan.

The enhancer works in two phases driven by the host build tool:

1. ``run_immediate()`` at configuration time: operating system, CI or local,
   CI metadata read from environment variables. Git metadata collection is
   handed to the sink's background executor.
2. ``run_after_project_ready(project)`` once the project graph is
   evaluated: IDE detection and CI metadata read from project properties
   (TeamCity).

Test parallelism is recorded per test task right before the task runs.

Nothing here ever fails the build. Every capture step logs and swallows
its own errors.

Usage:
    sink = RecordingSink(server="https://scans.example.com")
    enhancer = configure_build_scan(sink, Environment.current())
    enhancer.run_after_project_ready(project)
    enhancer.capture_test_parallelization(test_tasks)
"""

from typing import Callable, Iterable, Optional, Set

from ._ci import ProviderRegistry, create_default_registry
from .config import EnricherConfig
from .environment import Environment
from .facts import BuildScanSink, FactSink
from .git_metadata import capture_git_metadata
from .host import Project, TestTask
from .ide import capture_ide
from .logging_config import logger
from .process import ProcessRunner


def max_parallel_forks_hook(sink: FactSink) -> Callable[[TestTask], None]:
    """
    Build the pre-execution action that records a test task's fork count.

    The action reads everything from the task it is invoked with, so the
    same action holds no reference to any particular task.
    """

    def record_max_parallel_forks(task: TestTask) -> None:
        try:
            sink.value(f"{task.identity_path}#maxParallelForks", str(task.max_parallel_forks))
        except Exception as e:
            logger.warning(f"Could not record maxParallelForks: {e}")

    return record_max_parallel_forks


class BuildScanEnhancer:
    """
    Orchestrates the detectors and writes their facts to the sink.

    Args:
        sink: Build scan sink receiving the facts
        environment: Environment snapshot to detect from
        registry: CI provider registry, the default one if None
        runner: ProcessRunner for git commands, built from config if None
        config: Enhancer settings, defaults if None
    """

    def __init__(
        self,
        sink: BuildScanSink,
        environment: Environment,
        registry: Optional[ProviderRegistry] = None,
        runner: Optional[ProcessRunner] = None,
        config: Optional[EnricherConfig] = None,
    ) -> None:
        self._sink = sink
        self._env = environment
        self._registry = registry or create_default_registry()
        self._config = config or EnricherConfig()
        self._runner = runner or ProcessRunner(timeout=self._config.command_timeout)
        self._project_ready = False
        self._parallelism_tasks: Set[str] = set()

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def is_ci(self) -> bool:
        return self._registry.is_ci(self._env)

    def run_immediate(self) -> None:
        """Run the configuration-time detectors and schedule git collection."""
        self._run_step("OS", self.capture_os)
        self._run_step("CI or local", self.capture_ci_or_local)
        self._run_step("CI metadata", self.capture_ci_metadata)
        if self._config.git_metadata:
            self._run_step("git metadata", self.schedule_git_metadata)
        else:
            logger.debug("Git metadata disabled, not scheduling collection")

    def run_after_project_ready(self, project: Project) -> None:
        """
        Run the detectors that need the evaluated root project.

        The host calls this once; later calls are ignored.

        Args:
            project: Evaluated root project
        """
        if self._project_ready:
            logger.warning("Project-ready phase already ran, ignoring repeated call")
            return
        self._project_ready = True

        self._run_step("IDE", lambda: capture_ide(self._env, project, self._sink, self.is_ci))
        self._run_step(
            "deferred CI metadata",
            lambda: self._registry.capture_deferred(self._env, project, self._sink),
        )

    def capture_os(self) -> None:
        os_name = self._env.system_property("os.name")
        if os_name:
            self._sink.tag(os_name)

    def capture_ci_or_local(self) -> None:
        self._sink.tag("CI" if self.is_ci else "LOCAL")

    def capture_ci_metadata(self) -> None:
        captured = self._registry.capture_immediate(self._env, self._sink)
        if captured:
            logger.info(f"Detected CI providers: {', '.join(captured)}")

    def schedule_git_metadata(self) -> None:
        """Collect git metadata on the sink's background executor."""
        runner = self._runner

        def collect(api: FactSink) -> None:
            try:
                capture_git_metadata(api, runner)
            except Exception as e:
                logger.warning(f"Error capturing git metadata: {e}")

        self._sink.background(collect)

    def capture_test_parallelization(self, tasks: Iterable[TestTask]) -> int:
        """
        Register the fork count hook on each test task.

        A task is registered at most once, however often it is passed in.

        Args:
            tasks: Test tasks of all projects

        Returns:
            Number of newly registered tasks
        """
        hook = max_parallel_forks_hook(self._sink)
        registered = 0
        for task in tasks:
            if task.identity_path in self._parallelism_tasks:
                continue
            task.do_first(hook)
            self._parallelism_tasks.add(task.identity_path)
            registered += 1
        return registered

    def _run_step(self, name: str, step: Callable[[], object]) -> None:
        try:
            step()
        except Exception as e:
            logger.warning(f"Error capturing {name}: {e}")


def configure_build_scan(
    sink: BuildScanSink,
    environment: Optional[Environment] = None,
    registry: Optional[ProviderRegistry] = None,
    runner: Optional[ProcessRunner] = None,
    config: Optional[EnricherConfig] = None,
) -> BuildScanEnhancer:
    """
    Create an enhancer and run its immediate phase.

    Args:
        sink: Build scan sink receiving the facts
        environment: Environment snapshot, the current process if None
        registry: CI provider registry, the default one if None
        runner: ProcessRunner for git commands
        config: Enhancer settings

    Returns:
        The enhancer, ready for ``run_after_project_ready``
    """
    enhancer = BuildScanEnhancer(
        sink,
        environment or Environment.current(),
        registry=registry,
        runner=runner,
        config=config,
    )
    enhancer.run_immediate()
    return enhancer

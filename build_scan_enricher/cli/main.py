import json
import sys
from typing import Dict, Optional, Tuple

import click

from .. import __version__
from ..config import EnricherConfig, load_config
from ..console import print_facts_table
from ..enhancer import configure_build_scan
from ..environment import Environment
from ..exceptions import ConfigurationError
from ..facts import RecordingSink
from ..host import StaticProject, StaticTestTask
from ..logging_config import logger, setup_logging
from ..process import ProcessRunner
from ..tool_checks import is_git_installed, log_tool_status

# Seconds to wait for background git collection before reporting
BACKGROUND_WAIT_TIMEOUT = 60


def parse_key_values(pairs: Tuple[str, ...], option: str) -> Dict[str, str]:
    """
    Parse ``key=value`` option values.

    Raises:
        click.BadParameter: If an entry has no ``=`` or an empty key
    """
    result: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected key=value, got '{pair}'", param_hint=option)
        result[key.strip()] = value
    return result


def build_config(
    server: Optional[str],
    timeout: Optional[float],
    git: Optional[bool],
    log_level: Optional[str],
) -> EnricherConfig:
    """
    Build the configuration from CLI options, falling back to environment variables.

    Raises:
        ConfigurationError: If the resulting configuration is invalid
    """
    config = load_config()
    if server is not None:
        config.server_url = server
    if timeout is not None:
        config.command_timeout = timeout
    if git is not None:
        config.git_metadata = git
    if log_level is not None:
        config.log_level = log_level.upper()
    config.validate()
    return config


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--server", help="Build scan server URL, enables search links. [env: BUILD_SCAN_SERVER]")
@click.option(
    "-P",
    "--project-property",
    "project_properties",
    multiple=True,
    metavar="KEY=VALUE",
    help="Root project property, as the host build tool would report it.",
)
@click.option(
    "-D",
    "--system-property",
    "system_properties",
    multiple=True,
    metavar="KEY=VALUE",
    help="System property such as idea.version or eclipse.buildId.",
)
@click.option(
    "--test-task",
    "test_tasks",
    multiple=True,
    metavar="PATH=FORKS",
    help="Test task identity path and its maxParallelForks.",
)
@click.option("--git/--no-git", default=None, help="Collect git metadata. [env: DISABLE_GIT_METADATA]")
@click.option("--timeout", type=float, help="Seconds per git command. [env: ENRICHER_COMMAND_TIMEOUT]")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level. [env: LOG_LEVEL]",
)
@click.option("--json", "as_json", is_flag=True, help="Print facts as JSON instead of a table.")
@click.version_option(version=__version__, prog_name="build-scan-enricher")
def cli(
    server: Optional[str],
    project_properties: Tuple[str, ...],
    system_properties: Tuple[str, ...],
    test_tasks: Tuple[str, ...],
    git: Optional[bool],
    timeout: Optional[float],
    log_level: Optional[str],
    as_json: bool,
) -> None:
    """Show the tags, values and links a build scan would receive from this environment."""
    try:
        config = build_config(server, timeout, git, log_level)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(config.log_level)

    project = StaticProject(parse_key_values(project_properties, "--project-property"))
    properties = parse_key_values(system_properties, "--system-property")
    tasks = []
    for path, forks in parse_key_values(test_tasks, "--test-task").items():
        try:
            tasks.append(StaticTestTask(identity_path=path, max_parallel_forks=int(forks)))
        except ValueError:
            raise click.BadParameter(f"maxParallelForks must be an integer, got '{forks}'", param_hint="--test-task")

    runner = ProcessRunner(timeout=config.command_timeout)
    if config.git_metadata and not is_git_installed(runner):
        log_tool_status(runner, verbose=True)

    sink = RecordingSink(server=config.server_url)
    try:
        enhancer = configure_build_scan(sink, Environment.current(properties), runner=runner, config=config)
        enhancer.run_after_project_ready(project)
        enhancer.capture_test_parallelization(tasks)
        for task in tasks:
            task.execute()

        if not sink.wait(timeout=BACKGROUND_WAIT_TIMEOUT):
            logger.warning("Background collection did not finish, its facts are missing")
    finally:
        sink.close(wait=False)

    if as_json:
        click.echo(json.dumps([fact.to_dict() for fact in sink.facts], indent=2))
    else:
        print_facts_table(sink.facts)


def main() -> None:
    """Entry point for the console script."""
    cli()

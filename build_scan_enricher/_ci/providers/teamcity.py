"""TeamCity provider.

TeamCity passes build parameters to the build tool as project properties
rather than environment variables, so this provider captures only once the
root project has been evaluated.

Inputs used:
- TEAMCITY_VERSION (environment): Detection
- teamcity.configuration.properties.file (project): Path to the build
  configuration properties file, which holds ``teamcity.serverUrl``
- build.number (project): Build number
- teamcity.buildType.id (project): Build configuration id
- agent.name (project): Build agent name
"""

from pathlib import Path
from typing import Mapping, Optional

from jproperties import ParseError, Properties

from ...environment import Environment
from ...exceptions import PropertiesFileError
from ...facts import FactSink, add_custom_value_and_search_link, append_if_missing
from ...host import Project
from ...logging_config import logger


def read_properties_file(path: str) -> Mapping[str, str]:
    """
    Read a Java properties file.

    Escapes such as ``http\\://`` and ``\\uXXXX`` are decoded.

    Args:
        path: Path to the properties file

    Returns:
        Mapping of property names to values

    Raises:
        PropertiesFileError: If the file cannot be read or parsed
    """
    properties = Properties()
    try:
        with open(Path(path), "rb") as f:
            properties.load(f, "utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PropertiesFileError(f"Could not read properties file {path}: {e}")
    except ParseError as e:
        raise PropertiesFileError(f"Could not parse properties file {path}: {e}")
    return {key: entry.data for key, entry in properties.items()}


class TeamCityProvider:
    """Provider for TeamCity builds."""

    name: str = "teamcity"
    requires_project: bool = True

    def detect(self, env: Environment) -> bool:
        return env.has_env("TEAMCITY_VERSION")

    def capture(self, env: Environment, sink: FactSink, project: Optional[Project] = None) -> None:
        if project is None:
            logger.debug("TeamCity detected but no project available, skipping")
            return

        config_file = project.find_property("teamcity.configuration.properties.file")
        build_number = project.find_property("build.number")
        build_type_id = project.find_property("teamcity.buildType.id")
        agent_name = project.find_property("agent.name")

        if config_file is not None and build_number is not None and build_type_id is not None:
            server_url = self._server_url(config_file)
            if server_url is not None:
                build_url = (
                    f"{append_if_missing(server_url, '/')}viewLog.html"
                    f"?buildNumber={build_number}&buildTypeId={build_type_id}"
                )
                sink.link("TeamCity build", build_url)

        if build_number is not None:
            sink.value("CI build number", build_number)
        if agent_name is not None:
            add_custom_value_and_search_link(sink, "CI agent", agent_name)

    def _server_url(self, config_file: str) -> Optional[str]:
        try:
            properties = read_properties_file(config_file)
        except PropertiesFileError as e:
            logger.warning(str(e))
            return None
        server_url = properties.get("teamcity.serverUrl")
        if server_url is None:
            logger.debug(f"teamcity.serverUrl not found in {config_file}")
        return server_url

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"

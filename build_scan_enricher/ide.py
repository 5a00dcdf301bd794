"""Detect the client that invoked the build.

IDEs that embed the build tool announce themselves through project or
system properties. The first match wins; a build with no IDE marker counts
as a command line build unless it runs on CI.
"""

from typing import Optional

from .environment import Environment
from .facts import FactSink
from .host import Project
from .logging_config import logger

ANDROID_STUDIO_INVOKED_PROPERTY = "android.injected.invoked.from.ide"
ANDROID_STUDIO_VERSION_PROPERTY = "android.injected.studio.version"
INTELLIJ_VERSION_PROPERTY = "idea.version"
ECLIPSE_BUILD_ID_PROPERTY = "eclipse.buildId"


def detect_ide(env: Environment, project: Project, is_ci: bool) -> Optional[str]:
    """
    Classify the invoking client.

    Args:
        env: Environment snapshot (system properties are consulted)
        project: Evaluated root project (Android Studio properties)
        is_ci: Whether any CI provider detected the build

    Returns:
        "Android Studio", "IntelliJ IDEA", "Eclipse", "Cmd Line", or None
        for a CI build without an IDE marker
    """
    if project.find_property(ANDROID_STUDIO_INVOKED_PROPERTY) is not None:
        return "Android Studio"
    if env.has_system_property(INTELLIJ_VERSION_PROPERTY) or env.has_system_property_prefix(
        INTELLIJ_VERSION_PROPERTY
    ):
        return "IntelliJ IDEA"
    if env.has_system_property(ECLIPSE_BUILD_ID_PROPERTY):
        return "Eclipse"
    if not is_ci:
        return "Cmd Line"
    return None


def capture_ide(env: Environment, project: Project, sink: FactSink, is_ci: bool) -> Optional[str]:
    """Write the IDE tag, and the Android Studio version when known."""
    ide = detect_ide(env, project, is_ci)
    if ide is None:
        logger.debug("CI build without IDE marker, no client tag")
        return None

    sink.tag(ide)
    if ide == "Android Studio":
        version = project.find_property(ANDROID_STUDIO_VERSION_PROPERTY)
        if version is not None:
            sink.value("Android Studio version", version)
    return ide

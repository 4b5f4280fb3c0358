"""Metadata about the running application and operating system."""

import dataclasses
import functools
import importlib.metadata
import logging
import os
import platform
import re
import sys

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

_os_names = {
    "Darwin": "macOS",
    "Linux": "Linux",
    "Windows": "Windows",
}
_os_version_re = re.compile(r"^(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?")


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class HostInfo:
    bundle_id: str = UNKNOWN
    executable_name: str = UNKNOWN
    app_version: str = UNKNOWN
    app_build: str = UNKNOWN
    os_name: str = UNKNOWN
    os_version: str = UNKNOWN

    @property
    def os_name_identifier(self) -> str:
        return f"{self.os_name} {self.os_version}"

    @staticmethod
    def from_distribution(name: str | None) -> "HostInfo":
        """Snapshot of the host with application fields read from distribution metadata.

        A version like ``1.2.3+456`` is split into version ``1.2.3`` and build ``456``.
        """
        bundle_id, app_version, app_build = UNKNOWN, UNKNOWN, UNKNOWN
        if name:
            try:
                metadata = importlib.metadata.metadata(name)
            except importlib.metadata.PackageNotFoundError:
                logger.debug("Distribution %s is not installed", name)
            else:
                bundle_id = metadata.get("Name") or name
                version, _, build = (metadata.get("Version") or "").partition("+")
                app_version = version or UNKNOWN
                app_build = build or UNKNOWN

        return HostInfo(
            bundle_id=bundle_id,
            executable_name=executable_name(),
            app_version=app_version,
            app_build=app_build,
            os_name=os_name(),
            os_version=os_version(),
        )


def executable_name() -> str:
    if not sys.argv or not sys.argv[0]:
        return UNKNOWN
    return os.path.basename(sys.argv[0]) or UNKNOWN


def os_name() -> str:
    system = platform.system()
    return _os_names.get(system, system or UNKNOWN)


def os_version() -> str:
    system = platform.system()
    if system == "Darwin":
        release = platform.mac_ver()[0]
    elif system == "Windows":
        release = platform.version()
    else:
        release = platform.release()

    match = _os_version_re.match(release or "")
    if match is None:
        return UNKNOWN
    return f"{match.group('major')}.{match.group('minor') or 0}.{match.group('patch') or 0}"


def main_distribution() -> str | None:
    """Name of the distribution providing the ``__main__`` package, if any."""
    main_spec = getattr(sys.modules.get("__main__"), "__spec__", None)
    if main_spec is None or not main_spec.name:
        return None

    top_level = main_spec.name.partition(".")[0]
    distributions = importlib.metadata.packages_distributions().get(top_level)
    if not distributions:
        logger.debug("No distribution provides %s", top_level)
        return None
    return distributions[0]


@functools.cache
def get_host_info() -> HostInfo:
    return HostInfo.from_distribution(main_distribution())


def default_user_agent(host_info: HostInfo | None = None) -> str:
    from . import __version__

    info = host_info or get_host_info()
    return (
        f"{info.executable_name}/{info.app_version} "
        f"({info.bundle_id}; build:{info.app_build}; {info.os_name_identifier}) "
        f"http-decodable/{__version__}"
    )

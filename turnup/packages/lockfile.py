"""
Lockfile generation.

Regenerates a lockfile for an updated package.json by running the
repository's package manager in a scratch directory. Nothing is installed
into the caller's working tree.

Two strategies share one signature:

- ``create``: resolve the manifest as written (single-package updates)
- ``update``: additionally move every dependency to the newest version its
  range allows (bulk updates)
"""

import asyncio
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from turnup.exceptions import LockfileGenerationError
from turnup.logging import get_logger

logger = get_logger("lockfile")

# Maximum seconds a package manager run may take
DEFAULT_TIMEOUT_SECONDS = 300


@dataclass(frozen=True)
class PackageManager:
    """How to regenerate one package manager's lockfile."""

    name: str
    lockfile: str
    create_command: tuple[str, ...]
    update_command: tuple[str, ...]


PACKAGE_MANAGERS: dict[str, PackageManager] = {
    "npm": PackageManager(
        name="npm",
        lockfile="package-lock.json",
        create_command=(
            "npm", "install", "--package-lock-only", "--ignore-scripts", "--no-audit", "--no-fund",
        ),
        update_command=(
            "npm", "update", "--package-lock-only", "--ignore-scripts", "--no-audit", "--no-fund",
        ),
    ),
    "yarn": PackageManager(
        name="yarn",
        lockfile="yarn.lock",
        create_command=("yarn", "install", "--ignore-scripts", "--ignore-engines", "--non-interactive"),
        update_command=("yarn", "upgrade", "--ignore-scripts", "--ignore-engines", "--non-interactive"),
    ),
}


def get_package_manager(package_manager: str) -> PackageManager:
    """
    Look up a supported package manager.

    Raises:
        LockfileGenerationError: If the package manager is not supported
    """
    try:
        return PACKAGE_MANAGERS[package_manager]
    except KeyError:
        raise LockfileGenerationError(
            package_manager,
            f"unsupported package manager (expected one of {sorted(PACKAGE_MANAGERS)})",
        ) from None


def build_command(command: tuple[str, ...], registry: str | None = None) -> list[str]:
    """Append the registry flag to a package manager command."""
    cmd = list(command)
    if registry:
        cmd.extend(["--registry", registry])
    return cmd


def _run(cmd: list[str], cwd: Path, timeout: int) -> subprocess.CompletedProcess:
    """Run a package manager command without inheriting stdin."""
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except FileNotFoundError as e:
        raise LockfileGenerationError(cmd[0], f"executable not found: {e}") from e
    except subprocess.TimeoutExpired as e:
        raise LockfileGenerationError(cmd[0], f"timed out after {timeout}s") from e


def _generate(
    manifest_text: str,
    manager: PackageManager,
    command: tuple[str, ...],
    registry: str | None,
    current_lockfile: str | None,
    timeout: int,
) -> str:
    with tempfile.TemporaryDirectory(prefix="turnup-") as tmp:
        workdir = Path(tmp)
        (workdir / "package.json").write_text(manifest_text, encoding="utf-8")
        if current_lockfile:
            (workdir / manager.lockfile).write_text(current_lockfile, encoding="utf-8")

        cmd = build_command(command, registry)
        result = _run(cmd, workdir, timeout)

        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()[:500]
            raise LockfileGenerationError(
                manager.name,
                f"{' '.join(cmd)} exited with {result.returncode}: {detail}",
            )

        lockfile_path = workdir / manager.lockfile
        if not lockfile_path.exists():
            raise LockfileGenerationError(manager.name, f"{manager.lockfile} was not produced")

        return lockfile_path.read_text(encoding="utf-8")


async def create(
    manifest_text: str,
    package_manager: str,
    registry: str | None = None,
    *,
    current_lockfile: str | None = None,
    timeout: int = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """
    Produce the lockfile for a manifest as written.

    Args:
        manifest_text: Formatted package.json text
        package_manager: "npm" or "yarn"
        registry: Optional registry URL passed to the package manager
        current_lockfile: Existing lockfile used as the starting point
        timeout: Maximum seconds for the package manager run

    Returns:
        New lockfile text

    Raises:
        LockfileGenerationError: If the package manager is unknown or fails
    """
    manager = get_package_manager(package_manager)
    logger.info("Generating %s with %s", manager.lockfile, manager.name)
    return await asyncio.to_thread(
        _generate, manifest_text, manager, manager.create_command, registry, current_lockfile, timeout
    )


async def update(
    manifest_text: str,
    package_manager: str,
    registry: str | None = None,
    *,
    current_lockfile: str | None = None,
    timeout: int = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """
    Produce a lockfile with every dependency moved to the newest allowed version.

    Arguments and errors are the same as :func:`create`.
    """
    manager = get_package_manager(package_manager)
    logger.info("Updating %s with %s", manager.lockfile, manager.name)
    return await asyncio.to_thread(
        _generate, manifest_text, manager, manager.update_command, registry, current_lockfile, timeout
    )


__all__ = [
    "PACKAGE_MANAGERS",
    "PackageManager",
    "build_command",
    "create",
    "get_package_manager",
    "update",
]

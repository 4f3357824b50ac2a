# imagebuild\builder.py
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

import structlog

from imagebuild.descriptor import ImageBuildDescriptor
from imagebuild.dockerfile import render_dockerfile
from imagebuild.errors import BuildCommandError

logger = structlog.get_logger()

DOCKERFILE_NAME = "Dockerfile"


def build_command(
    descriptor: ImageBuildDescriptor,
    dockerfile: Union[str, Path],
    context: Union[str, Path],
) -> List[str]:
    """
    Argv for building the image with the configured container client.

    All platforms go into a single ``--platform`` flag; every tag gets its
    own ``-t``.
    """
    command = [
        descriptor.docker_client.executable,
        "build",
        "--platform",
        ",".join(descriptor.platform_specs()),
        "-f",
        str(dockerfile),
    ]
    for reference in descriptor.image_references():
        command += ["-t", reference]
    command.append(str(context))
    return command


def run_cmd(command: List[str], cwd: Union[str, Path]) -> subprocess.CompletedProcess:
    """Runs the client, turning every failure into BuildCommandError."""
    try:
        return subprocess.run(
            command,
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=True,
        )
    except FileNotFoundError as e:
        raise BuildCommandError(command, f"executable not found: {command[0]}") from e
    except subprocess.CalledProcessError as e:
        details = (e.stderr or e.stdout or "").strip() or f"exit status {e.returncode}"
        raise BuildCommandError(command, details, e.returncode) from e


def build_image(
    descriptor: ImageBuildDescriptor,
    context: Union[str, Path] = ".",
    dry_run: bool = False,
    now: Optional[datetime] = None,
) -> List[str]:
    """
    Writes the Dockerfile into ``context`` and builds the image.

    With ``dry_run`` nothing is written or executed; the command is only
    returned.

    Returns:
        The build command argv.

    Raises:
        BuildCommandError: If the Dockerfile cannot be written, or the client
            is missing or exits non-zero.
    """
    # Absolute, since the client also runs with cwd=context
    context = Path(context).resolve()
    dockerfile = context / DOCKERFILE_NAME
    command = build_command(descriptor, dockerfile, context)

    if dry_run:
        logger.info("build_dry_run", command=command)
        return command

    try:
        dockerfile.write_text(render_dockerfile(descriptor, now=now), encoding="utf-8")
    except OSError as e:
        raise BuildCommandError(command, f"cannot write {dockerfile}: {e.strerror or e}") from e
    logger.info("build_started", images=descriptor.image_references(), platforms=descriptor.platform_specs())

    result = run_cmd(command, cwd=context)
    logger.info("build_finished", images=descriptor.image_references(), output_lines=len(result.stdout.splitlines()))
    return command

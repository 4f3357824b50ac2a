# imagebuild\dockerfile.py
import json
from datetime import datetime
from typing import Dict, List, Optional

import structlog

from imagebuild.descriptor import ImageBuildDescriptor

logger = structlog.get_logger()


def _quote(value: str) -> str:
    # JSON escaping matches Dockerfile double quotes; \$ keeps values literal
    return json.dumps(value).replace("$", "\\$")


def _key_values(instruction: str, values: Dict[str, str]) -> List[str]:
    if not values:
        return []
    pairs = [f"{key}={_quote(values[key])}" for key in sorted(values)]
    return [f"{instruction} " + " \\\n    ".join(pairs)]


def render_dockerfile(descriptor: ImageBuildDescriptor, now: Optional[datetime] = None) -> str:
    """
    Renders the descriptor as a Dockerfile.

    The output is deterministic for a fixed ``now``; only a
    ``USE_CURRENT_TIMESTAMP`` creation time depends on it.
    """
    container = descriptor.container
    lines: List[str] = [
        "# Generated by imagebuild. Do not edit by hand.",
        f"FROM {descriptor.from_.image}",
        "",
    ]

    lines += _key_values("LABEL", descriptor.resolved_labels(now))
    lines += _key_values("ENV", container.environment)
    lines.append("")

    for directory in descriptor.extra_directories:
        lines.append(f"COPY {json.dumps([directory.source, directory.into])}")
    lines.append(f"COPY {json.dumps([container.artifact, container.jar_path])}")
    lines.append("")

    lines.append(f"WORKDIR {container.app_root}")
    lines.append(f"USER {container.user}")
    for port in container.ports:
        lines.append(f"EXPOSE {port}")
    lines.append("")

    lines.append(f"ENTRYPOINT {json.dumps(container.entrypoint())}")

    dockerfile = "\n".join(lines) + "\n"
    logger.info(
        "dockerfile_rendered",
        base=descriptor.from_.image,
        image=descriptor.to.image,
        ports=container.ports,
    )
    return dockerfile

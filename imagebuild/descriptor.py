# imagebuild\descriptor.py
"""
Image build descriptor.

Declarative description of one container image for the Spring Boot service:
base image and target platforms, image name and tags, JVM flags, exposed
ports, injected environment, labels, creation time and the runtime user.

The defaults reproduce the project's reference build, so an empty JSON
document (``{}``) describes exactly that image::

    {
      "from": {"image": "eclipse-temurin:21-jre-alpine",
               "platforms": [{"architecture": "arm64", "os": "linux"}]},
      "to": {"image": "jib-gradle-app"},
      "container": {"ports": ["8080"], "user": "1000:1000"}
    }

Any section may be overridden partially; unspecified fields keep their
defaults.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from imagebuild.errors import DescriptorError

logger = structlog.get_logger()

DEFAULT_VERSION = "0.0.1-SNAPSHOT"
DEFAULT_BASE_IMAGE = "eclipse-temurin:21-jre-alpine"
DEFAULT_TARGET_IMAGE = "jib-gradle-app"
DEFAULT_JVM_FLAGS = [
    "-server",
    "-Xms512m",
    "-Xmx1024m",
    "-XX:+UseG1GC",
    "-XX:+UseContainerSupport",
]
DEFAULT_DESCRIPTION = "Spring Boot application built with Jib"

USE_CURRENT_TIMESTAMP = "USE_CURRENT_TIMESTAMP"
EPOCH = "EPOCH"
EPOCH_TIME = datetime(1970, 1, 1, tzinfo=timezone.utc)
CREATED_LABEL = "org.opencontainers.image.created"

_PORT_RE = re.compile(r"^(\d+)(?:-(\d+))?(?:/(tcp|udp))?$")
_USER_RE = re.compile(r"^([A-Za-z0-9_][A-Za-z0-9_.-]*)(?::([A-Za-z0-9_][A-Za-z0-9_.-]*))?$")
_ENV_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# --- Sections ---

class Platform(BaseModel):
    """One os/architecture pair the image is built for."""
    architecture: str = "arm64"
    os: str = "linux"

    @field_validator("architecture", "os")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("platform architecture and os must not be empty")
        return value

    @property
    def spec(self) -> str:
        """Platform in ``os/architecture`` form, e.g. ``linux/arm64``."""
        return f"{self.os}/{self.architecture}"


class BaseImage(BaseModel):
    image: str = DEFAULT_BASE_IMAGE
    platforms: List[Platform] = Field(default_factory=lambda: [Platform()])

    @field_validator("platforms")
    @classmethod
    def _at_least_one(cls, value: List[Platform]) -> List[Platform]:
        if not value:
            raise ValueError("at least one platform is required")
        return value


def _check_tag(tag: str) -> str:
    if not tag or ":" in tag or any(c.isspace() for c in tag):
        raise ValueError(f"invalid tag {tag!r}")
    return tag


class TargetImage(BaseModel):
    image: str = DEFAULT_TARGET_IMAGE
    # None means ["latest", <version>], filled in by the descriptor
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def _valid_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        if not value:
            raise ValueError("at least one tag is required")
        return [_check_tag(tag) for tag in value]


class ContainerSettings(BaseModel):
    jvm_flags: List[str] = Field(default_factory=lambda: list(DEFAULT_JVM_FLAGS))
    ports: List[str] = Field(default_factory=lambda: ["8080"])
    environment: Dict[str, str] = Field(default_factory=lambda: {"SPRING_PROFILES_ACTIVE": "prod"})
    # None means maintainer/version/description defaults, filled in by the descriptor
    labels: Optional[Dict[str, str]] = None
    creation_time: str = USE_CURRENT_TIMESTAMP
    user: str = "1000:1000"
    app_root: str = "/app"
    artifact: str = "build/libs/app.jar"
    jar_name: str = "app.jar"

    @field_validator("ports")
    @classmethod
    def _valid_ports(cls, value: List[str]) -> List[str]:
        for port in value:
            match = _PORT_RE.match(str(port).strip())
            if not match:
                raise ValueError(f"invalid port {port!r}")
            low = int(match.group(1))
            high = int(match.group(2) or low)
            if not (1 <= low <= 65535 and 1 <= high <= 65535) or low > high:
                raise ValueError(f"port out of range {port!r}")
        return [str(p).strip() for p in value]

    @field_validator("environment")
    @classmethod
    def _valid_env_keys(cls, value: Dict[str, str]) -> Dict[str, str]:
        for key in value:
            if not _ENV_KEY_RE.match(key):
                raise ValueError(f"invalid environment variable name {key!r}")
        return value

    @field_validator("user")
    @classmethod
    def _non_root_user(cls, value: str) -> str:
        value = value.strip()
        match = _USER_RE.match(value)
        if not match:
            raise ValueError(f"invalid user {value!r}; expected 'user' or 'user:group'")
        user = match.group(1)
        if user == "root" or (user.isdigit() and int(user) == 0):
            raise ValueError("the image must not run as root")
        return value

    @field_validator("creation_time")
    @classmethod
    def _valid_creation_time(cls, value: str) -> str:
        if value in (USE_CURRENT_TIMESTAMP, EPOCH):
            return value
        try:
            _parse_timestamp(value)
        except ValueError:
            raise ValueError(
                f"creation_time must be {USE_CURRENT_TIMESTAMP}, {EPOCH} or an ISO-8601 timestamp, got {value!r}"
            ) from None
        return value

    @field_validator("app_root")
    @classmethod
    def _absolute_app_root(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"app_root must be absolute, got {value!r}")
        return value.rstrip("/") or "/"

    @property
    def jar_path(self) -> str:
        return f"{self.app_root.rstrip('/')}/{self.jar_name}"

    def entrypoint(self) -> List[str]:
        """Exec-form entrypoint: ``java <jvm flags> -jar <app_root>/<jar_name>``."""
        return ["java", *self.jvm_flags, "-jar", self.jar_path]


class ExtraDirectory(BaseModel):
    """A directory copied verbatim into the image."""
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(..., alias="from")
    into: str

    @field_validator("into")
    @classmethod
    def _absolute_into(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"extra directory target must be absolute, got {value!r}")
        return value


class DockerClient(BaseModel):
    executable: str = "podman"


# --- Descriptor ---

class ImageBuildDescriptor(BaseModel):
    """
    Complete description of one image build.
    """
    model_config = ConfigDict(populate_by_name=True)

    version: str = DEFAULT_VERSION
    from_: BaseImage = Field(default_factory=BaseImage, alias="from")
    to: TargetImage = Field(default_factory=TargetImage)
    container: ContainerSettings = Field(default_factory=ContainerSettings)
    docker_client: DockerClient = Field(default_factory=DockerClient)
    extra_directories: List[ExtraDirectory] = Field(
        default_factory=lambda: [ExtraDirectory(source="src/main/jib", into="/app")]
    )

    @field_validator("version")
    @classmethod
    def _version_is_tag(cls, value: str) -> str:
        # Becomes the second default tag
        try:
            return _check_tag(value)
        except ValueError:
            raise ValueError(f"version {value!r} is not a valid image tag") from None

    @model_validator(mode="after")
    def _fill_version_defaults(self) -> "ImageBuildDescriptor":
        if self.to.tags is None:
            self.to.tags = ["latest", self.version]
        if self.container.labels is None:
            self.container.labels = {
                "maintainer": "otus-hw",
                "version": self.version,
                "description": DEFAULT_DESCRIPTION,
            }
        return self

    def image_references(self) -> List[str]:
        """Every ``image:tag`` the build produces."""
        return [f"{self.to.image}:{tag}" for tag in self.to.tags or []]

    def platform_specs(self) -> List[str]:
        return [p.spec for p in self.from_.platforms]

    def resolve_creation_time(self, now: Optional[datetime] = None) -> datetime:
        """
        Resolves ``container.creation_time`` to a concrete UTC datetime.

        ``USE_CURRENT_TIMESTAMP`` uses ``now`` (defaults to the current time).
        """
        value = self.container.creation_time
        if value == USE_CURRENT_TIMESTAMP:
            current = now or datetime.now(timezone.utc)
            if current.tzinfo is None:
                current = current.replace(tzinfo=timezone.utc)
            return current.astimezone(timezone.utc)
        if value == EPOCH:
            return EPOCH_TIME
        return _parse_timestamp(value).astimezone(timezone.utc)

    def resolved_labels(self, now: Optional[datetime] = None) -> Dict[str, str]:
        labels = dict(self.container.labels or {})
        created = self.resolve_creation_time(now)
        labels[CREATED_LABEL] = created.isoformat().replace("+00:00", "Z")
        return labels

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


# --- Loading ---

def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts)


def parse_descriptor(data: Dict[str, Any], source: str = "<dict>") -> ImageBuildDescriptor:
    """
    Validates a descriptor mapping (partial overrides allowed).

    Raises:
        DescriptorError: If the data violates any descriptor constraint.
    """
    if not isinstance(data, dict):
        raise DescriptorError("top-level value must be a JSON object", source)
    try:
        return ImageBuildDescriptor.model_validate(data)
    except ValidationError as e:
        raise DescriptorError(_format_validation_error(e), source) from e


def load_descriptor(path: Optional[Union[str, Path]] = None) -> ImageBuildDescriptor:
    """
    Loads a descriptor from a JSON file, or returns the defaults when
    ``path`` is None.

    Raises:
        DescriptorError: If the file is missing, not JSON, or invalid.
    """
    if path is None:
        return ImageBuildDescriptor()

    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorError(f"cannot read file: {e.strerror or e}", str(path)) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DescriptorError(f"not valid JSON: {e.msg} (line {e.lineno})", str(path)) from e

    descriptor = parse_descriptor(data, str(path))
    logger.debug("descriptor_loaded", path=str(path), image=descriptor.to.image)
    return descriptor

# imagebuild\__init__.py
"""
Container image build descriptor.

Declarative configuration for packaging the Spring Boot service as a
lightweight image, plus the tooling that renders it to a Dockerfile and
drives the container client. Independent from ``userdemo``.
"""

from .builder import build_command, build_image
from .descriptor import ImageBuildDescriptor, load_descriptor, parse_descriptor
from .dockerfile import render_dockerfile
from .errors import BuildCommandError, DescriptorError, ImageBuildError

__version__ = "0.0.1"

__all__ = [
    "ImageBuildDescriptor",
    "load_descriptor",
    "parse_descriptor",
    "render_dockerfile",
    "build_command",
    "build_image",
    "ImageBuildError",
    "DescriptorError",
    "BuildCommandError",
]

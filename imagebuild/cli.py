# imagebuild\cli.py
"""
Command line for the image build descriptor.

Usage:
    imagebuild show                      # Resolved descriptor as JSON
    imagebuild render [-o Dockerfile]    # Dockerfile to stdout or a file
    imagebuild build [--context DIR] [--dry-run]
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from imagebuild.builder import build_image
from imagebuild.config import get_settings
from imagebuild.descriptor import load_descriptor
from imagebuild.dockerfile import render_dockerfile
from imagebuild.errors import DescriptorError, ImageBuildError
from imagebuild.logging_config import configure_logging

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_BUILD_FAILED = 1
EXIT_BAD_DESCRIPTOR = 2


def cmd_show(args, descriptor) -> int:
    print(descriptor.to_json())
    return EXIT_OK


def cmd_render(args, descriptor) -> int:
    dockerfile = render_dockerfile(descriptor)
    if args.output:
        try:
            Path(args.output).write_text(dockerfile, encoding="utf-8")
        except OSError as e:
            raise ImageBuildError(f"cannot write {args.output}: {e.strerror or e}") from e
        logger.info("dockerfile_written", path=args.output)
    else:
        sys.stdout.write(dockerfile)
    return EXIT_OK


def cmd_build(args, descriptor) -> int:
    command = build_image(descriptor, context=args.context, dry_run=args.dry_run)
    if args.dry_run:
        print(" ".join(command))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imagebuild",
        description="Render and build the service container image from a declarative descriptor.",
    )
    parser.add_argument(
        "--descriptor",
        help="JSON descriptor file (defaults to $IMAGEBUILD_DESCRIPTOR, then built-in defaults)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Print the resolved descriptor")
    show.set_defaults(handler=cmd_show)

    render = subparsers.add_parser("render", help="Render the Dockerfile")
    render.add_argument("-o", "--output", help="Write to this file instead of stdout")
    render.set_defaults(handler=cmd_render)

    build = subparsers.add_parser("build", help="Build the image with the configured client")
    build.add_argument("--context", default=".", help="Build context directory")
    build.add_argument("--dry-run", action="store_true", help="Only print the build command")
    build.set_defaults(handler=cmd_build)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    args = build_parser().parse_args(argv)
    descriptor_path = args.descriptor or settings.DESCRIPTOR

    try:
        descriptor = load_descriptor(descriptor_path)
        return args.handler(args, descriptor)
    except DescriptorError as e:
        logger.error("descriptor_invalid", error=e.message)
        return EXIT_BAD_DESCRIPTOR
    except ImageBuildError as e:
        logger.error("build_failed", error=e.message)
        return EXIT_BUILD_FAILED


if __name__ == "__main__":
    sys.exit(main())

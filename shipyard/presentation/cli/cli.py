"""
CLI Module

Architectural Intent:
- Command-line interface for shipyard
- Drives one lifecycle operation for one container on one target
- Delegates to the ContainerOrchestrator via the composition root
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import logging
import sys
import traceback
from shipyard.composition_root import create_container
from shipyard.domain.entities.container import (
    ContainerDefinition,
    ContainerInstance,
    DefinitionSpecific,
    InstanceSpecific,
    System,
)
from shipyard.domain.errors import ShipyardError
from shipyard.domain.value_objects.mode import Mode
from shipyard.domain.value_objects.target import Target
from shipyard.infrastructure.config import load_config
from shipyard.infrastructure.logging import LOG_FORMATS, configure_logging
from shipyard.infrastructure.output import ConsoleOutputSink


def _add_container_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--target", "-t", default=None, help="Target address (omit for this machine)"
    )
    parser.add_argument("--binary", "-b", help="Path of the container binary")
    parser.add_argument("--namespace", "-n", help="System namespace")
    parser.add_argument(
        "--preview", action="store_true", help="Show what would run without running it"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Shipyard: container deployment to local and remote hosts"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output with tracebacks"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to shipyard.json"
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Log line format (default: log_format from config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    build_parser = subparsers.add_parser("build", help="Build and export a container image")
    build_parser.add_argument("--name", required=True, help="Container name")
    build_parser.add_argument("--path", default=".", help="Build context directory")
    build_parser.add_argument("--namespace", "-n", help="System namespace")
    build_parser.add_argument(
        "--preview", action="store_true", help="Show what would run without running it"
    )

    deploy_parser = subparsers.add_parser(
        "deploy", help="Copy and import a container binary on a target"
    )
    _add_container_arguments(deploy_parser)

    undeploy_parser = subparsers.add_parser(
        "undeploy", help="Clean up exited containers and untagged images"
    )
    _add_container_arguments(undeploy_parser)

    start_parser = subparsers.add_parser("start", help="Run a container on a target")
    _add_container_arguments(start_parser)
    start_parser.add_argument(
        "--arguments", "-a", help="docker run arguments (__TARGETNAME__ is the image)"
    )

    stop_parser = subparsers.add_parser("stop", help="Kill a running container")
    _add_container_arguments(stop_parser)
    stop_parser.add_argument("--container-id", help="Runtime container id")

    return parser


async def async_main():
    parser = _build_parser()
    args = parser.parse_args()
    config = load_config(args.config)

    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = getattr(logging, config.log_level.upper(), logging.WARNING)
    configure_logging(level=level, log_format=args.log_format or config.log_format)

    verbose = args.verbose or args.debug

    if args.command is None:
        parser.print_help()
        return

    container = create_container(config)
    orchestrator = container.orchestrator
    out = ConsoleOutputSink(show_preview=verbose or args.preview)
    mode = Mode.PREVIEW if args.preview else Mode.NORMAL
    system = System(namespace=args.namespace or config.deploy.namespace)

    try:
        if args.command == "build":
            container_def = ContainerDefinition(name=args.name, path=args.path)
            result = await orchestrator.build(mode, system, container_def, out)
            print(f"[+] Built {result.container_binary}")
            if result.docker_image_id:
                print(f"[+] Image id: {result.docker_image_id}")
            return

        target = Target(private_ip_address=args.target)
        container_def = ContainerDefinition(
            name=(args.binary or "").split("/")[-1],
            specific=DefinitionSpecific(
                binary=args.binary, arguments=getattr(args, "arguments", None)
            ),
        )
        instance = ContainerInstance(
            specific=InstanceSpecific(
                container_binary=args.binary,
                docker_container_id=getattr(args, "container_id", None),
            )
        )

        operation = getattr(orchestrator, args.command)
        print(f"[*] {args.command} on {target}...")
        await operation(mode, target, system, container_def, instance, out)
        print(f"[+] {args.command.capitalize()} Successful.")
        if args.command == "start" and instance.specific.docker_container_id:
            print(f"[+] Container id: {instance.specific.docker_container_id}")
    except (ShipyardError, ValueError) as e:
        print(f"[-] {args.command.capitalize()} Failed: {e}")
        if verbose:
            traceback.print_exc()
        sys.exit(1)


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()

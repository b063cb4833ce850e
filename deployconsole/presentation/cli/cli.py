"""
CLI Module

Architectural Intent:
- Command-line interface for the deployment console
- `console` launches the interactive TUI; the other commands issue one API
  call each and report the outcome
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import Optional

from deployconsole.application.dtos.deployment_dtos import DeploymentForm
from deployconsole.application.notifications.notification_center import (
    InMemoryNotificationSurface,
)
from deployconsole.composition_root import ConsoleContainer, create_container
from deployconsole.domain.value_objects.outcome import Failure
from deployconsole.infrastructure.config import ConsoleConfig, load_config
from deployconsole.infrastructure.logging import configure_logging, resolve_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Deployment Console: manage deployments in one namespace"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--config", "-c", help="Path to JSON config file")
    parser.add_argument("--namespace", "-n", help="Namespace to manage")
    parser.add_argument("--api-base", help="Orchestration API base URL")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("console", help="Launch the interactive console")
    subparsers.add_parser("list", help="List deployments")

    get_parser = subparsers.add_parser("get", help="Show one deployment document")
    get_parser.add_argument("name", help="Deployment name")

    create_parser = subparsers.add_parser("create", help="Create a deployment")
    create_parser.add_argument("--name", required=True, help="Deployment name")
    create_parser.add_argument("--image", required=True, help="Container image")
    create_parser.add_argument("--replicas", default="1", help="Replica count")
    create_parser.add_argument("--cpu", default="250m", help="CPU request and limit")
    create_parser.add_argument(
        "--memory", default="128Mi", help="Memory request and limit"
    )

    scale_parser = subparsers.add_parser("scale", help="Set a deployment's replicas")
    scale_parser.add_argument("name", help="Deployment name")
    scale_parser.add_argument("replicas", type=int, help="Target replica count")

    subparsers.add_parser("pods", help="List pods in the namespace")

    delete_parser = subparsers.add_parser("delete", help="Delete a deployment")
    delete_parser.add_argument("name", help="Deployment name")
    delete_parser.add_argument(
        "--yes", "-y", action="store_true", help="Skip the confirmation prompt"
    )

    return parser


def _resolve_config(args: argparse.Namespace) -> ConsoleConfig:
    config = load_config(path=args.config)
    overrides = {}
    if args.namespace:
        overrides["namespace"] = args.namespace
    if args.api_base:
        overrides["base_url"] = args.api_base
    if overrides:
        config = dataclasses.replace(
            config, api=dataclasses.replace(config.api, **overrides)
        )
    return config


def _fail(outcome: Failure) -> None:
    print(f"[-] {outcome.reason}")
    sys.exit(1)


async def _run_console(container: ConsoleContainer) -> None:
    from deployconsole.presentation.tui.console import DeploymentConsoleApp

    app = DeploymentConsoleApp(
        container.client,
        container.notifications,
        container.namespace,
        exit_seconds=container.config.notifications.exit_seconds,
    )
    await app.run_async()
    # Lifecycles still in flight finish against a headless surface.
    container.notifications.set_surface(InMemoryNotificationSurface())


async def _run_command(args: argparse.Namespace, container: ConsoleContainer) -> None:
    client = container.client
    namespace = container.namespace

    if args.command == "console":
        await _run_console(container)
        return

    if args.command == "list":
        outcome = await client.list_deployments(namespace)
        if isinstance(outcome, Failure):
            _fail(outcome)
        if not outcome.payload:
            print(f"[*] No deployments in namespace {namespace}.")
            return
        width = max(len("NAME"), *(len(d.name) for d in outcome.payload))
        print(f"{'NAME'.ljust(width)}  REPLICAS")
        for deployment in outcome.payload:
            print(f"{deployment.name.ljust(width)}  {deployment.replicas}")
        return

    if args.command == "get":
        outcome = await client.get_deployment(namespace, args.name)
        if isinstance(outcome, Failure):
            _fail(outcome)
        print(json.dumps(outcome.payload, indent=2))
        return

    if args.command == "create":
        form = DeploymentForm(
            name=args.name,
            image=args.image,
            replicas=args.replicas,
            cpu_request=args.cpu,
            memory_request=args.memory,
        )
        try:
            spec = form.to_spec()
        except ValueError as e:
            print(f"[-] Invalid deployment: {e}")
            sys.exit(1)
        outcome = await client.create_deployment(namespace, spec)
        if isinstance(outcome, Failure):
            _fail(outcome)
        print("[+] Deployment created successfully")
        return

    if args.command == "scale":
        outcome = await client.scale_deployment(namespace, args.name, args.replicas)
        if isinstance(outcome, Failure):
            _fail(outcome)
        print(f"[+] Scaled deployment {args.name} to {args.replicas} replicas")
        return

    if args.command == "pods":
        outcome = await client.list_pods(namespace)
        if isinstance(outcome, Failure):
            _fail(outcome)
        if not outcome.payload:
            print(f"[*] No pods in namespace {namespace}.")
            return
        width = max(len("NAME"), *(len(p.name) for p in outcome.payload))
        print(f"{'NAME'.ljust(width)}  {'PHASE'.ljust(9)}  RESTARTS  NODE")
        for pod in outcome.payload:
            print(
                f"{pod.name.ljust(width)}  {pod.phase.ljust(9)}  "
                f"{str(pod.restarts).ljust(8)}  {pod.node_name or '-'}"
            )
        return

    if args.command == "delete":
        if not args.yes:
            answer = await asyncio.to_thread(
                input, f"Are you sure you want to delete deployment {args.name}? [y/N] "
            )
            if answer.strip().lower() not in ("y", "yes"):
                print("[*] Delete cancelled.")
                return
        outcome = await client.delete_deployment(namespace, args.name)
        if isinstance(outcome, Failure):
            _fail(outcome)
        print(f"[+] Deleted deployment {args.name}")
        return


async def async_main(container: Optional[ConsoleContainer] = None) -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    config = container.config if container else _resolve_config(args)

    # Configure logging based on flags
    if args.debug:
        configure_logging(level=logging.DEBUG)
    elif args.verbose:
        configure_logging(level=logging.INFO)
    else:
        configure_logging(level=resolve_level(config.log_level))

    container = container or create_container(config)
    try:
        await _run_command(args, container)
    finally:
        await container.aclose()


def main():
    asyncio.run(async_main())


if __name__ == "__main__":
    main()

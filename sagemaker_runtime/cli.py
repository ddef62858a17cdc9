#!/usr/bin/env python3
"""
Invoke a SageMaker endpoint from the command line, or check the local setup.

    sagemaker-runtime-invoke my-endpoint --body '{"x": 1}' --content-type application/json
    sagemaker-runtime-invoke --check
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sagemaker_runtime.core.client import Client
from sagemaker_runtime.core.credentials import ChainProvider, DefaultCredentialsProvider
from sagemaker_runtime.core.dispatch import HttpClient
from sagemaker_runtime.core.errors import ParseRegionError, SageMakerRuntimeError
from sagemaker_runtime.core.region import Region
from sagemaker_runtime.core.tls import resolve_tls_backend
from sagemaker_runtime.services.sagemaker_runtime import InvokeEndpointInput, SageMakerRuntimeClient
from sagemaker_runtime.utils import config
from sagemaker_runtime.utils.logger import setup_logger


def check_region(name: str | None) -> tuple[bool, str]:
    """Resolve the region from the argument or environment."""
    try:
        region = Region.from_name(name) if name else Region.default()
    except ParseRegionError as e:
        return False, f"[X] {e}"
    if region.is_custom:
        return True, f"[OK] Region {region.name} (custom endpoint {region.endpoint})"
    return True, f"[OK] Region {region.name}"


def check_tls_backend(name: str | None) -> tuple[bool, str]:
    try:
        backend = resolve_tls_backend(name)
    except ValueError as e:
        return False, f"[X] {e}"
    return True, f"[OK] TLS backend {backend}"


def check_credentials() -> tuple[bool, str]:
    chain = ChainProvider()
    for provider in chain.providers:
        try:
            creds = provider.credentials()
        except SageMakerRuntimeError:
            continue
        return True, f"[OK] Credentials from {type(provider).__name__}: {creds.access_key_id[:4]}..."
    return False, "[X] No AWS credentials found in environment or credentials file"


def run_checks(args: argparse.Namespace) -> int:
    print("Checking SageMaker Runtime client setup\n")
    all_ok = True
    for ok, msg in (
        check_region(args.region),
        check_tls_backend(args.tls_backend),
        check_credentials(),
    ):
        print(f"   {msg}")
        all_ok = all_ok and ok
    if all_ok:
        print("\n[OK] All checks passed")
        return 0
    print("\n[X] Some checks failed. Please fix the issues above.")
    return 1


def _read_body(args: argparse.Namespace) -> bytes:
    if args.body_file:
        if args.body_file == "-":
            return sys.stdin.buffer.read()
        return Path(args.body_file).read_bytes()
    return (args.body or "").encode("utf-8")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sagemaker-runtime-invoke", description=__doc__.split("\n\n")[0].strip())
    p.add_argument("endpoint", nargs="?", help="Endpoint name")
    body = p.add_mutually_exclusive_group()
    body.add_argument("--body", help="Request body as text")
    body.add_argument("--body-file", help="Read request body from file ('-' for stdin)")
    p.add_argument("--content-type", default=None)
    p.add_argument("--accept", default=None)
    p.add_argument("--custom-attributes", default=None)
    p.add_argument("--target-model", default=None)
    p.add_argument("--region", default=None)
    p.add_argument("--tls-backend", default=None, help="native-tls or bundled-tls")
    p.add_argument("--timeout", type=float, default=None)
    p.add_argument("--check", action="store_true", help="Only check configuration")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level="DEBUG" if args.verbose else config.log_level())

    if args.check:
        return run_checks(args)
    if not args.endpoint:
        print("[X] Endpoint name is required (or pass --check)", file=sys.stderr)
        return 1

    try:
        region = Region.from_name(args.region) if args.region else Region.default()
        client = Client.shared() if args.tls_backend is None else Client(
            DefaultCredentialsProvider(), HttpClient(args.tls_backend)
        )
        runtime = SageMakerRuntimeClient(region, client)
        output = runtime.invoke_endpoint(
            InvokeEndpointInput(
                endpoint_name=args.endpoint,
                body=_read_body(args),
                content_type=args.content_type,
                accept=args.accept,
                custom_attributes=args.custom_attributes,
                target_model=args.target_model,
            ),
            timeout=args.timeout,
        )
    except (SageMakerRuntimeError, ValueError, OSError) as e:
        print(f"[X] {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    sys.stdout.buffer.write(output.body)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())

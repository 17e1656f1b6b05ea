# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""healthprobe CLI: run one HTTP endpoint probe and report the verdict."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import ProbeSettings, load_probe_settings
from ..errors import HealthProbeError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models.verdict import HealthState, Verdict
from ..resolver import EndpointResolver, EnvironmentEndpointResolver, StaticEndpointResolver
from ..runtime import HealthProbes

CHECK_NAME = "cli"
EXIT_CODES = {
    HealthState.HEALTHY: 0,
    HealthState.DEGRADED: 1,
    HealthState.UNHEALTHY: 2,
}
EXIT_CONFIGURATION_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Probe a local HTTP endpoint and report its health")
    parser.add_argument("endpoint", help="Logical endpoint name (resolved from the environment unless --port is given)")
    parser.add_argument("path", help="Relative path to request, e.g. /health")
    parser.add_argument("--port", type=int, help="Use this port instead of resolving the endpoint name")
    parser.add_argument("--method", default=None, help="HTTP method (default: GET)")
    parser.add_argument("--scheme", default=None, help="URI scheme (default: http)")
    parser.add_argument(
        "--header",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Request header; repeat for multiple values",
    )
    parser.add_argument("--expect", type=int, default=None, help="Status code considered healthy (default: 200)")
    parser.add_argument(
        "--annotate",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Diagnostic annotation attached to the verdict",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--insecure", action="store_true", help="Skip TLS verification")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of a one-line summary")
    parser.add_argument("--log-level", default=None, help="Logging level (default: HEALTHPROBE_LOG_LEVEL or WARNING)")
    return parser


def _parse_headers(raw_headers: list[str]) -> list[tuple[str, list[str]]]:
    grouped: dict[str, list[str]] = {}
    for raw in raw_headers:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise HealthProbeError(f"Malformed header {raw!r}, expected 'Name: value'")
        grouped.setdefault(name.strip(), []).append(value.strip())
    return list(grouped.items())


def _parse_annotations(raw_annotations: list[str]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for raw in raw_annotations:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise HealthProbeError(f"Malformed annotation {raw!r}, expected KEY=VALUE")
        pairs.append((key.strip(), value))
    return pairs


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True, default=str)
    sys.stdout.write("\n")


def _pretty_print(verdict: Verdict) -> None:
    print(f"[healthprobe] {verdict.state.value}: {verdict.description}")
    for key, value in verdict.data.items():
        print(f"  {key}: {value}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: ProbeSettings = load_probe_settings()
    if args.insecure:
        settings.verify_ssl = False
    if args.timeout is not None:
        settings.timeout = args.timeout

    resolver: EndpointResolver
    if args.port is not None:
        resolver = StaticEndpointResolver({args.endpoint: args.port})
    else:
        resolver = EnvironmentEndpointResolver(settings.endpoint_env_prefix)

    http_client = create_default_http_client(settings)
    with HealthProbes(http_client=http_client, resolver=resolver, settings=settings) as probes:
        try:
            probes.add_http_endpoint_check(
                CHECK_NAME,
                args.endpoint,
                args.path,
                *_parse_annotations(args.annotate),
                method=args.method,
                scheme=args.scheme,
                headers=_parse_headers(args.header),
                expected_status=args.expect,
            )
        except HealthProbeError as exc:
            print(f"healthprobe: {exc}", file=sys.stderr)
            return EXIT_CONFIGURATION_ERROR
        verdict = probes.run(CHECK_NAME)

    if args.json:
        _print_json(verdict)
    else:
        _pretty_print(verdict)

    return EXIT_CODES[verdict.state]


if __name__ == "__main__":
    raise SystemExit(main())

"""Minimal diagnostics for environment-driven bootstrap settings."""

from __future__ import annotations

import argparse
from dataclasses import asdict
import json
import logging
import sys

from edgeboot.environment import (
    EnvironmentSnapshot,
    get_conf_dir,
    get_config_file_name,
    get_profile_dir,
    resolve_startup_info,
)
from edgeboot.environment.notify import REDACTED, is_sensitive_key

# Legacy lower-case names still honoured alongside the EDGEX_* prefix
_LEGACY_KEYS = ("edgex_registry", "edgex_profile", "startup_duration", "startup_interval")


def recognized_environment(env: EnvironmentSnapshot) -> dict[str, str]:
    """Return EDGEX_* and legacy bootstrap variables, secrets redacted."""
    out: dict[str, str] = {}
    for key, value in env.items():
        if not (key.startswith("EDGEX_") or key in _LEGACY_KEYS):
            continue
        out[key] = REDACTED if is_sensitive_key(key) else value
    return out


def main(argv: list[str] | None = None) -> int:  # noqa: D103
    parser = argparse.ArgumentParser("edgeboot-env")
    parser.add_argument("--dotenv", help="Optional .env file layered under the environment")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log each applied override to stderr"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)
    sub.add_parser("startup")
    locations = sub.add_parser("locations")
    locations.add_argument("--confdir", default="")
    locations.add_argument("--profile", default="")
    locations.add_argument("--file", default="")
    sub.add_parser("env")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    env = EnvironmentSnapshot.capture(dotenv_path=args.dotenv)

    if args.cmd == "startup":
        info = resolve_startup_info(env)
        sys.stdout.write(json.dumps(asdict(info), indent=2) + "\n")
    elif args.cmd == "locations":
        resolved = {
            "confdir": get_conf_dir(args.confdir, env),
            "profile": get_profile_dir(args.profile, env),
            "file": get_config_file_name(args.file, env),
        }
        sys.stdout.write(json.dumps(resolved, indent=2) + "\n")
    elif args.cmd == "env":
        for key, value in sorted(recognized_environment(env).items()):
            sys.stdout.write(f"{key}={value}\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

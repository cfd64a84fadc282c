"""
Configuration management for Pod Redeployer
"""

import argparse
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from pod_redeployer.retry import Backoff

MATCH_SUBSTRING = "database"
RESTARTED_AT_ANNOTATION = "kubectl.kubernetes.io/restartedAt"


def home_dir(environ: Mapping[str, str] = os.environ) -> str:
    """Return the invoking user's home directory, or "" if unknown"""
    return environ.get("HOME") or environ.get("USERPROFILE") or ""


def default_kubeconfig_path(environ: Mapping[str, str] = os.environ) -> str:
    """Default kubeconfig location; empty means in-cluster defaults"""
    home = home_dir(environ)
    if not home:
        return ""
    return os.path.join(home, ".kube", "config")


def parse_args(argv: Optional[Sequence[str]] = None,
               environ: Mapping[str, str] = os.environ) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pod-redeployer",
        description=f"Restart every pod whose name contains '{MATCH_SUBSTRING}'",
    )
    default_path = default_kubeconfig_path(environ)
    parser.add_argument(
        "-kubeconfig", "--kubeconfig",
        dest="kubeconfig",
        default=default_path,
        help="path to the kube config file" + (f" (default: {default_path})" if default_path else ""),
    )
    return parser.parse_args(argv)


@dataclass
class Config:
    """Configuration class for Pod Redeployer"""

    # Kubernetes configuration
    kubeconfig_path: str = ""

    # Selection and restart annotation
    match_substring: str = MATCH_SUBSTRING
    annotation_key: str = RESTARTED_AT_ANNOTATION

    # Conflict retry policy
    backoff: Backoff = field(default_factory=Backoff)

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "console"

    @classmethod
    def from_args(cls, args: argparse.Namespace,
                  environ: Mapping[str, str] = os.environ) -> "Config":
        """Build the run configuration once from parsed flags and environment"""
        log_format = environ.get("LOG_FORMAT", cls.log_format).lower()
        if log_format not in ("console", "json"):
            raise ValueError(f"Unsupported LOG_FORMAT: {log_format}")

        return cls(
            kubeconfig_path=args.kubeconfig or "",
            log_level=environ.get("LOG_LEVEL", cls.log_level).upper(),
            log_format=log_format,
        )

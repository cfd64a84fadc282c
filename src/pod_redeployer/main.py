#!/usr/bin/env python3
"""
Kubernetes Pod Redeployer - Main Application
"""

import sys

from dotenv import load_dotenv

from pod_redeployer.config import Config, parse_args
from pod_redeployer.exceptions import RedeployError
from pod_redeployer.kubernetes_client import KubernetesClient
from pod_redeployer.logger import get_logger, setup_logging
from pod_redeployer.redeployer import PodRedeployer
from pod_redeployer.reporter import StatusReporter


def main(argv=None):
    """Main application entry point"""
    load_dotenv()

    args = parse_args(argv)
    try:
        config = Config.from_args(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(config)
    logger = get_logger("main")

    try:
        k8s_client = KubernetesClient(config.kubeconfig_path)
        reporter = StatusReporter(match_substring=config.match_substring)
        PodRedeployer(k8s_client, config, reporter).run()
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down...")
        return 130
    except RedeployError as e:
        logger.error("Pod Redeployer failed", error=str(e), error_type=type(e).__name__)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

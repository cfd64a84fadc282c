import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from pod_redeployer.config import Config
from pod_redeployer.exceptions import PodFetchError
from pod_redeployer.kubernetes_client import KubernetesClient
from pod_redeployer.logger import get_logger
from pod_redeployer.reporter import StatusReporter
from pod_redeployer.retry import retry_on_conflict

logger = get_logger(__name__)


def format_rfc3339(moment: datetime) -> str:
    """RFC 3339 with second precision; UTC is written as "Z" """
    if moment.utcoffset() == timedelta(0):
        return moment.strftime("%Y-%m-%dT%H:%M:%SZ")
    return moment.replace(microsecond=0).isoformat()


def rfc3339_now() -> str:
    """Current local time as RFC 3339"""
    return format_rfc3339(datetime.now().astimezone())


@dataclass
class PodOutcome:
    namespace: str
    name: str
    matched: bool
    restarted: bool = False
    error: Optional[str] = None


class PodRedeployer:
    """Single pass over the cluster's pods, restarting the matching ones"""

    def __init__(self, k8s_client: KubernetesClient, config: Config,
                 reporter: Optional[StatusReporter] = None,
                 now: Callable[[], str] = rfc3339_now,
                 sleep: Callable[[float], None] = time.sleep):
        self.k8s_client = k8s_client
        self.config = config
        self.reporter = reporter or StatusReporter(match_substring=config.match_substring)
        self.now = now
        self.sleep = sleep

    def matches(self, pod) -> bool:
        """Literal, case-sensitive substring test on the pod name"""
        return self.config.match_substring in (pod.metadata.name or "")

    def restart_pod(self, namespace: str, name: str):
        """
        Stamp the restart annotation on a pod with read-modify-write.

        The pod is re-read on every attempt and the whole cycle is retried
        when the update hits a write conflict. Fetch failures are not retried.
        """
        attempts = 0

        def stamp():
            nonlocal attempts
            attempts += 1

            try:
                current = self.k8s_client.get_pod(namespace, name)
            except Exception as e:
                raise PodFetchError(f"failed to get pod {name}: {e}") from e

            annotations = current.metadata.annotations
            if annotations is None:
                annotations = {}
            annotations[self.config.annotation_key] = self.now()
            current.metadata.annotations = annotations

            return self.k8s_client.update_pod(current)

        try:
            return retry_on_conflict(self.config.backoff, stamp, sleep=self.sleep)
        finally:
            logger.debug("Restart annotation attempts", namespace=namespace, pod=name, attempts=attempts)

    def run(self) -> List[PodOutcome]:
        """Run one pass; enumeration failures propagate, per-pod failures do not"""
        self.reporter.listing()
        pods = self.k8s_client.list_all_pods()
        logger.info("Listed pods", count=len(pods))

        outcomes = []
        for pod in pods:
            namespace = pod.metadata.namespace
            name = pod.metadata.name

            if not self.matches(pod):
                logger.debug("Pod skipped", namespace=namespace, pod_name=name)
                self.reporter.no_match(namespace)
                outcomes.append(PodOutcome(namespace, name, matched=False))
                continue

            self.reporter.redeploying(namespace, name)
            try:
                self.restart_pod(namespace, name)
            except Exception as e:
                logger.error(
                    "Pod redeploy failed",
                    namespace=namespace,
                    pod_name=name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                self.reporter.failed(namespace, name, e)
                outcomes.append(PodOutcome(namespace, name, matched=True, error=str(e)))
                continue

            logger.info("Pod redeployed", namespace=namespace, pod_name=name)
            self.reporter.redeployed(namespace, name)
            outcomes.append(PodOutcome(namespace, name, matched=True, restarted=True))

        return outcomes

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from pod_redeployer.exceptions import ClusterConnectionError, PodListError
from pod_redeployer.logger import get_logger

logger = get_logger(__name__)


class KubernetesClient:
    """Authenticated session against the cluster's CoreV1 API"""

    def __init__(self, kubeconfig_path=""):
        self.kubeconfig_path = kubeconfig_path

        try:
            self._load_config(kubeconfig_path)
        except Exception as e:
            raise ClusterConnectionError(
                f"Could not load Kubernetes configuration from "
                f"{kubeconfig_path or 'in-cluster defaults'}: {e}"
            ) from e

        try:
            self.v1 = client.CoreV1Api()
        except Exception as e:
            raise ClusterConnectionError(f"Failed to create Kubernetes client: {e}") from e

        logger.debug("Kubernetes client initialized", kubeconfig=self.kubeconfig_path or None)

    @staticmethod
    def _load_config(kubeconfig_path):
        if kubeconfig_path:
            logger.debug("Loading kubeconfig", path=kubeconfig_path)
            config.load_kube_config(config_file=kubeconfig_path)
            return

        # No path: in-cluster first, then the library's default loading rules
        try:
            config.load_incluster_config()
            logger.debug("Loaded in-cluster Kubernetes configuration")
        except ConfigException:
            config.load_kube_config()
            logger.debug("Loaded kubeconfig from default location")

    def list_all_pods(self):
        """List all pods from all namespaces"""
        try:
            pods = self.v1.list_pod_for_all_namespaces(watch=False)
        except ApiException as e:
            raise PodListError(f"Failed to list pods: {e.status} {e.reason}") from e
        except Exception as e:
            raise PodListError(f"Failed to list pods: {e}") from e
        return pods.items or []

    def get_pod(self, namespace, name):
        """Read the latest version of a pod"""
        return self.v1.read_namespaced_pod(name=name, namespace=namespace)

    def update_pod(self, pod):
        """Replace a pod with the given object; stale resourceVersions get a 409"""
        return self.v1.replace_namespaced_pod(
            name=pod.metadata.name,
            namespace=pod.metadata.namespace,
            body=pod,
        )

"""
Errors raised by Pod Redeployer
"""


class RedeployError(Exception):
    """Base class for Pod Redeployer errors"""


class ClusterConnectionError(RedeployError):
    """Credentials could not be loaded or the API client could not be built"""


class PodListError(RedeployError):
    """The control plane refused or failed the all-namespaces pod list"""


class PodFetchError(RedeployError):
    """A matched pod could not be re-read before updating it"""

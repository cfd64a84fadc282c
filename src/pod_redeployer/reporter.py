"""
Plain-text status lines, one per pod
"""

import sys


class StatusReporter:
    def __init__(self, stream=None, match_substring="database"):
        self.stream = stream if stream is not None else sys.stdout
        self.match_substring = match_substring

    def _emit(self, line):
        print(line, file=self.stream, flush=True)

    def listing(self):
        self._emit("Get all pods in the cluster...")

    def redeploying(self, namespace, name):
        self._emit(f"Redeploying pod {name} in namespace {namespace}")

    def redeployed(self, namespace, name):
        self._emit(f"Pod {name} in namespace {namespace} redeployed successfully")

    def failed(self, namespace, name, error):
        # ApiException renders over several lines
        reason = " ".join(str(error).split())
        self._emit(f"Failed to redeploy pod {name} in namespace {namespace}: {reason}")

    def no_match(self, namespace):
        # Keyed by namespace only, so it repeats once per non-matching pod
        self._emit(f"No Pod in namespace {namespace} contains '{self.match_substring}' in its name")

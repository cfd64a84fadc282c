"""
Pod Redeployer - Kubernetes database pod restarter

A Python command-line tool that lists every pod in a cluster and stamps a
restart annotation on the pods whose name contains "database".
"""

__version__ = "1.0.0"
__author__ = "Pod Redeployer Team"

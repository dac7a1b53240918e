"""Run kubectl read commands against every kubeconfig context at once."""

__version__ = "0.1.0"

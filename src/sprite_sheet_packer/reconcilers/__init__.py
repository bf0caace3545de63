"""Reconcilers that merge a packed sheet into the build output.

Two operating modes exist: BuildAssetsReconciler mutates a host's
in-flight asset set, StandaloneReconciler writes files to disk.
"""

from .base import Done, Reconciler
from .build import BuildAssetsReconciler
from .standalone import StandaloneReconciler

__all__ = ["BuildAssetsReconciler", "Done", "Reconciler", "StandaloneReconciler"]

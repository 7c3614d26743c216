"""
Services - bootstrap runner and step state tracking.
"""
from mongo_bootstrap.services.bootstrap_service import BootstrapRunner, ConflictPolicy
from mongo_bootstrap.services.step_state import StepTracker

__all__ = ["BootstrapRunner", "ConflictPolicy", "StepTracker"]

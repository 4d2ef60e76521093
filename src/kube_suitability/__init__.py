"""Kubernetes suitability assessment service.

Questionnaire-driven diagnostic for deciding whether an application is ready
to run on Kubernetes. Provides weighted scoring, threshold-based
recommendations and risks, and an ordered modernization plan.
"""

__version__ = "0.1.0"

"""
Domain Layer - Static Data Models

Defines the immutable troubleshooting tree: Steps, Options, Outcomes and the
free-text keyword rules.
"""

from smarthome_support.domain.models import (
    ESCALATE,
    RESOLVE,
    FreeTextRule,
    Option,
    Outcome,
    Step,
)

__all__ = [
    "ESCALATE",
    "RESOLVE",
    "FreeTextRule",
    "Option",
    "Outcome",
    "Step",
]

"""
Domain Layer - Static Data Models

This module defines the static structure of the troubleshooting decision tree:
Steps, the Options attached to them, and the keyword rules used when the user
types free text instead of picking an Option.
"""

from dataclasses import dataclass, field
from typing import Literal, Tuple, Union

"""
Outcome is the result of choosing an Option:
- int: id of the next Step to show
- resolve: the issue is fixed, loop back to the root menu
- escalate: hand the chat off to human support
"""
RESOLVE = "resolve"
ESCALATE = "escalate"

Outcome = Union[int, Literal["resolve", "escalate"]]


@dataclass(frozen=True)
class Option:
    """
    A selectable answer attached to a Step.

    Attributes:
        text: Label shown to the user (e.g., "Hub is unresponsive").
        outcome: Step id to move to, or one of the RESOLVE / ESCALATE sentinels.
    """
    text: str
    outcome: Outcome


@dataclass(frozen=True)
class Step:
    """
    One node of the troubleshooting decision tree.

    Attributes:
        id: Positive integer, unique within the catalog.
        text: Prompt shown by the agent when the step becomes active.
        options: Mutually exclusive answers, presented in this order.
    """
    id: int
    text: str
    options: Tuple[Option, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FreeTextRule:
    """
    Canned response for free text containing one of the keywords.

    Rules are evaluated in table order and the first match wins.

    Attributes:
        keywords: Lower-case fragments searched for in the user's text.
        response: Agent reply when the rule matches.
        options: Contextual options offered with the reply.
        anchor_step_id: Step the chat pointer moves to after the reply.
    """
    keywords: Tuple[str, ...]
    response: str
    options: Tuple[Option, ...]
    anchor_step_id: int

    def matches(self, text: str) -> bool:
        folded = text.casefold()
        return any(keyword in folded for keyword in self.keywords)

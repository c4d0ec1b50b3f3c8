"""Linear integration backed by the linearis CLI."""

from dovetail.integrations.linear.abc import Linear
from dovetail.integrations.linear.fake import FakeLinear
from dovetail.integrations.linear.profile import LINEAR_PROFILE
from dovetail.integrations.linear.real import RealLinear
from dovetail.integrations.linear.types import IssueDraft, IssueUpdate, LinearIssue

__all__ = [
    "LINEAR_PROFILE",
    "FakeLinear",
    "IssueDraft",
    "IssueUpdate",
    "Linear",
    "LinearIssue",
    "RealLinear",
]

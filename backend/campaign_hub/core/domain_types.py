"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - CampaignId, InfluencerId, ApplicationId wrap UUIDs - never use bare UUID in domain logic
    - PhaseNumber is a positive int, unique within one campaign (not contiguous)
    - All valid states encoded as Enums - no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CampaignId = NewType("CampaignId", UUID)
InfluencerId = NewType("InfluencerId", UUID)
ApplicationId = NewType("ApplicationId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

PhaseNumber = NewType("PhaseNumber", int)       # >= 1
BudgetAmount = NewType("BudgetAmount", float)   # >= 0.0


# ─── Enums ───────────────────────────────────────────────────────

class CampaignStatus(str, Enum):
    """Campaign lifecycle states - only ACTIVE accepts applications."""
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class ApplicationStatus(str, Enum):
    """Application states - APPROVED and REJECTED are terminal."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ApplicationStatus.PENDING


class UserType(str, Enum):
    """Participant kinds for messages and notifications."""
    ADMIN = "admin"
    INFLUENCER = "influencer"


class NotificationType(str, Enum):
    """Notification kinds raised by the shell on state changes."""
    NEW_INFLUENCER = "new_influencer"
    NEW_APPLICATION = "new_application"
    APPLICATION_STATUS = "application_status"
    NEW_MESSAGE = "new_message"


class BudgetRule(str, Enum):
    """Which rule of the budget priority chain produced the visible figure.

    Declaration order is the precedence order (first match wins).
    """
    APPLIED = "applied"
    CUSTOM_OFFER = "custom_offer"
    ASSIGNED_PHASE = "assigned_phase"
    HIGHEST_ACTIVE_PHASE = "highest_active_phase"
    NO_BUDGET = "no_budget"

"""Snapshots - immutable, IO-free views of the rows the core decides over.

Invariants:
    - Every snapshot is a frozen dataclass; core functions never mutate them
    - Optional fields are explicit None, never a magic value
    - categories are tuples (hashable, immutable); None means "not provided"

Design Decisions:
    - Separate from ORM models: the core must run without SQLAlchemy loaded
    - from_* constructors live in the shell (services/snapshot_repository.py),
      keeping this module free of persistence imports
"""

from dataclasses import dataclass

from campaign_hub.core.domain_types import (
    ApplicationId, ApplicationStatus, CampaignId, CampaignStatus, InfluencerId,
)


@dataclass(frozen=True)
class CampaignSnapshot:
    """Campaign targeting criteria and lifecycle status."""
    id: CampaignId
    status: CampaignStatus
    min_followers: int | None = None
    city: str | None = None
    categories: tuple[str, ...] = ()
    title: str = ""
    description: str = ""


@dataclass(frozen=True)
class ApplicantProfile:
    """Influencer profile fields relevant to eligibility."""
    db_id: InfluencerId
    follower_count: int | None = None
    city: str | None = None
    categories: tuple[str, ...] | None = None
    name: str = ""
    instagram: str | None = None


@dataclass(frozen=True)
class ApplicationSnapshot:
    """One applicant's application to one campaign, budget frozen at apply time."""
    id: ApplicationId
    campaign_id: CampaignId
    influencer_id: InfluencerId
    status: ApplicationStatus = ApplicationStatus.PENDING
    budget_applied_for: float | None = None
    is_negotiated: bool = False
    final_offer_amount: float | None = None


@dataclass(frozen=True)
class PhaseSnapshot:
    """A numbered, independently activatable budget tier of a campaign."""
    campaign_id: CampaignId
    phase_number: int
    budget_amount: float
    is_active: bool = False


@dataclass(frozen=True)
class VisibilitySnapshot:
    """Per-(campaign, influencer) override of the default budget and negotiation rules."""
    campaign_id: CampaignId
    influencer_id: InfluencerId
    assigned_phase: int | None = None
    negotiation_visible: bool = False
    custom_offer_amount: float | None = None

"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell - dependency arrows point inward only
    - Snapshot sources return immutable snapshots, loaded as one consistent read
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the eligibility and budget
      functions that consume the snapshots are never async themselves
"""

from typing import Protocol

from campaign_hub.core.domain_types import CampaignId, CampaignStatus, InfluencerId
from campaign_hub.core.snapshots import (
    ApplicantProfile,
    ApplicationSnapshot,
    CampaignSnapshot,
    PhaseSnapshot,
    VisibilitySnapshot,
)


class CampaignSnapshotSource(Protocol):
    """Read-only contract for everything the resolvers decide over."""
    async def get_campaign(self, campaign_id: CampaignId) -> CampaignSnapshot | None: ...
    async def list_campaigns(
        self, status: CampaignStatus | None = None,
    ) -> list[CampaignSnapshot]: ...
    async def get_applicant(
        self, influencer_id: InfluencerId,
    ) -> ApplicantProfile | None: ...
    async def list_applicants(self) -> list[ApplicantProfile]: ...
    async def list_phases(
        self, campaign_id: CampaignId | None = None,
    ) -> list[PhaseSnapshot]: ...
    async def list_visibility(
        self,
        campaign_id: CampaignId | None = None,
        influencer_id: InfluencerId | None = None,
    ) -> list[VisibilitySnapshot]: ...
    async def list_applications(
        self,
        campaign_id: CampaignId | None = None,
        influencer_id: InfluencerId | None = None,
    ) -> list[ApplicationSnapshot]: ...

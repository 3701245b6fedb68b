"""Eligibility Filter - decides whether an influencer may apply to a campaign.

Invariants:
    - Only ACTIVE campaigns have eligible applicants
    - Missing data on either side never disqualifies (unknown passes)
    - min_followers == 0 and follower_count == 0 are treated as unset
    - City comparison is exact and case-sensitive; no normalization
    - Batch forms preserve input order and never deduplicate

Design Decisions:
    - One predicate per criterion: each "unset passes" rule is stated once and testable alone
    - Applications lookup (has_applied) lives here because every eligibility listing
      also shows the applied badge
"""

from collections.abc import Iterable

from campaign_hub.core.domain_types import CampaignId, CampaignStatus, InfluencerId
from campaign_hub.core.snapshots import (
    ApplicantProfile, ApplicationSnapshot, CampaignSnapshot,
)


def meets_follower_minimum(
    min_followers: int | None, follower_count: int | None,
) -> bool:
    if not min_followers or not follower_count:
        return True
    return follower_count >= min_followers


def matches_city(campaign_city: str | None, applicant_city: str | None) -> bool:
    if not campaign_city or not applicant_city:
        return True
    return campaign_city == applicant_city


def shares_category(
    campaign_categories: Iterable[str] | None,
    applicant_categories: Iterable[str] | None,
) -> bool:
    wanted = set(campaign_categories or ())
    offered = set(applicant_categories or ())
    if not wanted or not offered:
        return True
    return not wanted.isdisjoint(offered)


def is_eligible(campaign: CampaignSnapshot, applicant: ApplicantProfile) -> bool:
    """True when the applicant satisfies every criterion of an active campaign."""
    if campaign.status != CampaignStatus.ACTIVE:
        return False
    return (
        meets_follower_minimum(campaign.min_followers, applicant.follower_count)
        and matches_city(campaign.city, applicant.city)
        and shares_category(campaign.categories, applicant.categories)
    )


def eligible_applicants(
    campaign: CampaignSnapshot, applicants: Iterable[ApplicantProfile],
) -> list[ApplicantProfile]:
    """Applicants eligible for one campaign, in input order."""
    return [a for a in applicants if is_eligible(campaign, a)]


def eligible_campaigns(
    campaigns: Iterable[CampaignSnapshot], applicant: ApplicantProfile,
) -> list[CampaignSnapshot]:
    """Campaigns one applicant is eligible for, in input order."""
    return [c for c in campaigns if is_eligible(c, applicant)]


def find_application(
    applications: Iterable[ApplicationSnapshot],
    campaign_id: CampaignId,
    influencer_id: InfluencerId,
) -> ApplicationSnapshot | None:
    for application in applications:
        if (
            application.campaign_id == campaign_id
            and application.influencer_id == influencer_id
        ):
            return application
    return None


def has_applied(
    applications: Iterable[ApplicationSnapshot],
    campaign_id: CampaignId,
    influencer_id: InfluencerId,
) -> bool:
    return find_application(applications, campaign_id, influencer_id) is not None

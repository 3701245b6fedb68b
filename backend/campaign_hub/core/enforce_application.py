"""Application Enforcement - pure checks run before an application is written or decided.

Invariants:
    - check_new_application is PURE: returns an error descriptor or None, never raises
    - Checks run in order: campaign open -> applicant eligible -> not already applied
    - Status transitions: pending -> approved | rejected; approved/rejected are terminal

Design Decisions:
    - Error descriptors instead of exceptions: the shell maps error_code to the
      CampaignHubError subclass and the HTTP status
"""

from collections.abc import Iterable

from campaign_hub.core.domain_types import ApplicationStatus, CampaignStatus
from campaign_hub.core.eligibility import has_applied, is_eligible
from campaign_hub.core.snapshots import (
    ApplicantProfile, ApplicationSnapshot, CampaignSnapshot,
)


ALLOWED_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset(
        {ApplicationStatus.APPROVED, ApplicationStatus.REJECTED},
    ),
    ApplicationStatus.APPROVED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
}


def check_new_application(
    campaign: CampaignSnapshot,
    applicant: ApplicantProfile,
    applications: Iterable[ApplicationSnapshot],
) -> dict | None:
    """None when the applicant may apply, else {"error_code", "message"}."""
    if campaign.status != CampaignStatus.ACTIVE:
        return {
            "error_code": "CAMPAIGN_NOT_OPEN",
            "message": f"Campaign status is {campaign.status.value}",
        }
    if not is_eligible(campaign, applicant):
        return {
            "error_code": "NOT_ELIGIBLE",
            "message": "Applicant does not meet the campaign criteria",
        }
    if has_applied(applications, campaign.id, applicant.db_id):
        return {
            "error_code": "DUPLICATE_APPLICATION",
            "message": "Applicant has already applied",
        }
    return None


def can_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]

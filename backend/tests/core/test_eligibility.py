"""Eligibility Filter - tests for pure campaign/applicant matching.

Tests cover:
    - each criterion passes when either side is unset
    - non-active campaigns have no eligible applicants
    - city comparison is exact and case-sensitive
    - batch forms preserve order and never deduplicate
    - has_applied / find_application lookups
"""

from uuid import uuid4

from campaign_hub.core.domain_types import CampaignStatus
from campaign_hub.core.eligibility import (
    eligible_applicants,
    eligible_campaigns,
    find_application,
    has_applied,
    is_eligible,
    matches_city,
    meets_follower_minimum,
    shares_category,
)
from campaign_hub.core.snapshots import (
    ApplicantProfile, ApplicationSnapshot, CampaignSnapshot,
)


def _campaign(**overrides) -> CampaignSnapshot:
    fields = {
        "id": uuid4(),
        "status": CampaignStatus.ACTIVE,
        "min_followers": 5000,
        "city": "Austin",
        "categories": ("fashion",),
    }
    fields.update(overrides)
    return CampaignSnapshot(**fields)


def _applicant(**overrides) -> ApplicantProfile:
    fields = {
        "db_id": uuid4(),
        "follower_count": 10000,
        "city": "Austin",
        "categories": ("fashion", "travel"),
    }
    fields.update(overrides)
    return ApplicantProfile(**fields)


# ─── Criterion predicates ────────────────────────────────────────

def test_follower_minimum_unset_on_either_side_passes():
    assert meets_follower_minimum(None, 10)
    assert meets_follower_minimum(5000, None)
    assert meets_follower_minimum(0, 10)
    assert meets_follower_minimum(5000, 0)


def test_follower_minimum_is_inclusive():
    assert meets_follower_minimum(5000, 5000)
    assert not meets_follower_minimum(5000, 4999)


def test_city_unset_or_empty_passes():
    assert matches_city(None, "Austin")
    assert matches_city("", "Austin")
    assert matches_city("Austin", None)
    assert matches_city("Austin", "")


def test_city_is_case_sensitive():
    assert matches_city("Austin", "Austin")
    assert not matches_city("Austin", "austin")


def test_categories_need_one_shared_tag():
    assert shares_category(("fashion", "food"), ("food",))
    assert not shares_category(("fashion",), ("travel",))


def test_empty_categories_never_restrict():
    assert shares_category((), ("travel",))
    assert shares_category(("fashion",), None)
    assert shares_category(("fashion",), ())


# ─── is_eligible ─────────────────────────────────────────────────

def test_matching_applicant_is_eligible():
    assert is_eligible(_campaign(), _applicant())


def test_low_follower_count_is_not_eligible():
    applicant = _applicant(follower_count=3000, categories=("fashion",))
    assert not is_eligible(_campaign(), applicant)


def test_unknown_follower_count_passes():
    assert is_eligible(_campaign(), _applicant(follower_count=None))


def test_city_mismatch_is_not_eligible():
    assert not is_eligible(_campaign(), _applicant(city="Dallas"))


def test_no_shared_category_is_not_eligible():
    assert not is_eligible(_campaign(), _applicant(categories=("gaming",)))


def test_unrestricted_campaign_accepts_bare_profile():
    campaign = _campaign(min_followers=None, city=None, categories=())
    applicant = ApplicantProfile(db_id=uuid4())
    assert is_eligible(campaign, applicant)


def test_non_active_statuses_are_never_eligible():
    for status in (
        CampaignStatus.DRAFT, CampaignStatus.COMPLETED, CampaignStatus.ARCHIVED,
    ):
        assert not is_eligible(_campaign(status=status), _applicant())


def test_is_eligible_is_idempotent():
    campaign, applicant = _campaign(), _applicant()
    assert is_eligible(campaign, applicant) == is_eligible(campaign, applicant)


# ─── Batch forms ─────────────────────────────────────────────────

def test_eligible_applicants_preserves_order_and_duplicates():
    good = _applicant()
    bad = _applicant(city="Dallas")
    other = _applicant(follower_count=None)
    result = eligible_applicants(_campaign(), [good, bad, other, good])
    assert result == [good, other, good]


def test_eligible_applicants_empty_for_draft_campaign():
    applicants = [_applicant(), _applicant()]
    assert eligible_applicants(_campaign(status=CampaignStatus.DRAFT), applicants) == []


def test_eligible_applicants_matches_single_form():
    campaign = _campaign()
    applicants = [_applicant(), _applicant(city="Dallas"), _applicant(categories=None)]
    assert eligible_applicants(campaign, applicants) == [
        a for a in applicants if is_eligible(campaign, a)
    ]


def test_eligible_campaigns_filters_by_applicant():
    applicant = _applicant()
    open_match = _campaign()
    draft = _campaign(status=CampaignStatus.DRAFT)
    elsewhere = _campaign(city="Dallas")
    assert eligible_campaigns([open_match, draft, elsewhere], applicant) == [open_match]


# ─── Application lookups ─────────────────────────────────────────

def test_has_applied_matches_campaign_and_influencer():
    campaign_id, influencer_id = uuid4(), uuid4()
    application = ApplicationSnapshot(
        id=uuid4(), campaign_id=campaign_id, influencer_id=influencer_id,
    )
    assert has_applied([application], campaign_id, influencer_id)
    assert not has_applied([application], campaign_id, uuid4())
    assert not has_applied([application], uuid4(), influencer_id)


def test_find_application_returns_none_when_absent():
    assert find_application([], uuid4(), uuid4()) is None

"""Budget Visibility Resolver - tests for the budget priority chain.

Tests cover:
    - applied budget wins over every other rule, even when it is None
    - custom offer beats phases; zero custom offer falls through
    - assigned phase beats highest active; inactive assigned phase still counts
    - orphaned assignment falls back and is reported stale
    - no active phase yields None
    - rows from other campaigns are ignored
    - negotiation flag, budget_overview, campaign_budget_table
"""

from uuid import uuid4

from campaign_hub.core.budget_visibility import (
    RULE_PRECEDENCE,
    budget_overview,
    campaign_budget_table,
    find_phase,
    highest_active_phase,
    negotiation_enabled,
    resolve_budget,
    visible_budget,
)
from campaign_hub.core.domain_types import (
    ApplicationStatus, BudgetRule, CampaignStatus,
)
from campaign_hub.core.snapshots import (
    ApplicantProfile,
    ApplicationSnapshot,
    CampaignSnapshot,
    PhaseSnapshot,
    VisibilitySnapshot,
)


CAMPAIGN = CampaignSnapshot(id=uuid4(), status=CampaignStatus.ACTIVE)
INFLUENCER = uuid4()


def _phase(number, amount, active=True, campaign=CAMPAIGN):
    return PhaseSnapshot(
        campaign_id=campaign.id, phase_number=number,
        budget_amount=amount, is_active=active,
    )


def _visibility(**fields):
    return VisibilitySnapshot(
        campaign_id=CAMPAIGN.id, influencer_id=INFLUENCER, **fields,
    )


def _application(budget, status=ApplicationStatus.PENDING):
    return ApplicationSnapshot(
        id=uuid4(), campaign_id=CAMPAIGN.id, influencer_id=INFLUENCER,
        status=status, budget_applied_for=budget,
    )


PHASES = [_phase(1, 1000.0), _phase(2, 2000.0)]


# ─── Priority chain ──────────────────────────────────────────────

def test_precedence_order():
    assert RULE_PRECEDENCE == (
        BudgetRule.APPLIED,
        BudgetRule.CUSTOM_OFFER,
        BudgetRule.ASSIGNED_PHASE,
        BudgetRule.HIGHEST_ACTIVE_PHASE,
    )


def test_applied_budget_wins_over_everything():
    visibility = [_visibility(custom_offer_amount=5000.0, assigned_phase=1)]
    result = resolve_budget(
        CAMPAIGN, PHASES, visibility, [_application(2000.0)], INFLUENCER,
    )
    assert result.rule is BudgetRule.APPLIED
    assert result.amount == 2000.0


def test_applied_budget_none_is_returned_verbatim():
    result = resolve_budget(CAMPAIGN, PHASES, [], [_application(None)], INFLUENCER)
    assert result.rule is BudgetRule.APPLIED
    assert result.amount is None


def test_custom_offer_beats_phases():
    visibility = [_visibility(custom_offer_amount=5000.0, assigned_phase=1)]
    assert visible_budget(CAMPAIGN, PHASES, visibility, [], INFLUENCER) == 5000.0


def test_zero_custom_offer_falls_through():
    visibility = [_visibility(custom_offer_amount=0.0)]
    result = resolve_budget(CAMPAIGN, PHASES, visibility, [], INFLUENCER)
    assert result.rule is BudgetRule.HIGHEST_ACTIVE_PHASE
    assert result.amount == 2000.0


def test_assigned_phase_beats_highest_active():
    visibility = [_visibility(assigned_phase=1)]
    result = resolve_budget(CAMPAIGN, PHASES, visibility, [], INFLUENCER)
    assert result.rule is BudgetRule.ASSIGNED_PHASE
    assert result.amount == 1000.0
    assert result.assigned_phase == 1
    assert not result.stale_assignment


def test_inactive_assigned_phase_still_applies():
    phases = [_phase(1, 1000.0, active=False), _phase(2, 2000.0)]
    visibility = [_visibility(assigned_phase=1)]
    assert visible_budget(CAMPAIGN, phases, visibility, [], INFLUENCER) == 1000.0


def test_orphaned_assignment_falls_back_to_highest_active():
    visibility = [_visibility(assigned_phase=3)]
    result = resolve_budget(CAMPAIGN, PHASES, visibility, [], INFLUENCER)
    assert result.rule is BudgetRule.HIGHEST_ACTIVE_PHASE
    assert result.amount == 2000.0
    assert result.stale_assignment


def test_orphaned_assignment_without_active_phase_is_no_budget():
    phases = [_phase(1, 1000.0, active=False)]
    visibility = [_visibility(assigned_phase=3)]
    result = resolve_budget(CAMPAIGN, phases, visibility, [], INFLUENCER)
    assert result.rule is BudgetRule.NO_BUDGET
    assert result.amount is None
    assert result.stale_assignment


def test_highest_active_uses_phase_number_not_amount():
    phases = [_phase(1, 9000.0), _phase(4, 500.0), _phase(7, 100.0, active=False)]
    assert visible_budget(CAMPAIGN, phases, [], [], INFLUENCER) == 500.0


def test_no_active_phase_is_none():
    phases = [_phase(1, 1000.0, active=False)]
    result = resolve_budget(CAMPAIGN, phases, [], [], INFLUENCER)
    assert result.rule is BudgetRule.NO_BUDGET
    assert result.amount is None
    assert not result.stale_assignment


def test_phase_activation_is_rederived_each_call():
    phases = [_phase(1, 1000.0), _phase(2, 2000.0, active=False)]
    assert visible_budget(CAMPAIGN, phases, [], [], INFLUENCER) == 1000.0
    phases = [_phase(1, 1000.0), _phase(2, 2000.0)]
    assert visible_budget(CAMPAIGN, phases, [], [], INFLUENCER) == 2000.0


def test_rows_for_other_campaigns_are_ignored():
    other = CampaignSnapshot(id=uuid4(), status=CampaignStatus.ACTIVE)
    phases = [_phase(9, 9999.0, campaign=other), _phase(1, 1000.0)]
    visibility = [VisibilitySnapshot(
        campaign_id=other.id, influencer_id=INFLUENCER, custom_offer_amount=7777.0,
    )]
    applications = [ApplicationSnapshot(
        id=uuid4(), campaign_id=other.id, influencer_id=INFLUENCER,
        budget_applied_for=42.0,
    )]
    result = resolve_budget(CAMPAIGN, phases, visibility, applications, INFLUENCER)
    assert result.rule is BudgetRule.HIGHEST_ACTIVE_PHASE
    assert result.amount == 1000.0


def test_assigned_phase_of_other_campaign_is_orphaned():
    other = CampaignSnapshot(id=uuid4(), status=CampaignStatus.ACTIVE)
    phases = [_phase(3, 3000.0, campaign=other), _phase(1, 1000.0)]
    visibility = [_visibility(assigned_phase=3)]
    result = resolve_budget(CAMPAIGN, phases, visibility, [], INFLUENCER)
    assert result.amount == 1000.0
    assert result.stale_assignment


def test_inputs_are_not_mutated():
    phases = list(PHASES)
    visibility = [_visibility(assigned_phase=3)]
    resolve_budget(CAMPAIGN, phases, visibility, [], INFLUENCER)
    assert phases == PHASES
    assert visibility == [_visibility(assigned_phase=3)]


def test_highest_active_phase_none_when_all_inactive():
    assert highest_active_phase([_phase(1, 10.0, active=False)], CAMPAIGN.id) is None


def test_highest_active_phase_picks_largest_number_regardless_of_order():
    phases = [_phase(3, 300.0), _phase(7, 700.0), _phase(5, 500.0)]
    assert highest_active_phase(phases, CAMPAIGN.id).phase_number == 7


def test_chain_uses_highest_active_phase_for_unsorted_phases():
    phases = [_phase(2, 2000.0), _phase(4, 4000.0, active=False), _phase(1, 1000.0)]
    resolution = resolve_budget(CAMPAIGN, phases, [], [], INFLUENCER)
    assert resolution.rule is BudgetRule.HIGHEST_ACTIVE_PHASE
    assert resolution.amount == 2000.0


def test_find_phase_scoped_to_campaign():
    other = CampaignSnapshot(id=uuid4(), status=CampaignStatus.ACTIVE)
    phases = [_phase(1, 50.0, campaign=other), _phase(1, 1000.0)]
    assert find_phase(phases, CAMPAIGN.id, 1).budget_amount == 1000.0
    assert find_phase(phases, CAMPAIGN.id, 2) is None


# ─── Reference scenarios ─────────────────────────────────────────

def test_scenario_applied_budget_is_frozen():
    visibility = [_visibility(assigned_phase=2)]
    budget = visible_budget(
        CAMPAIGN, PHASES, visibility, [_application(2000.0)], INFLUENCER,
    )
    assert budget == 2000.0


def test_scenario_custom_offer_ignores_phases():
    visibility = [_visibility(custom_offer_amount=5000.0)]
    assert visible_budget(CAMPAIGN, PHASES, visibility, [], INFLUENCER) == 5000.0


def test_scenario_deleted_assigned_phase():
    visibility = [_visibility(assigned_phase=3)]
    assert visible_budget(CAMPAIGN, PHASES, visibility, [], INFLUENCER) == 2000.0


def test_scenario_no_active_phase():
    phases = [_phase(1, 1000.0, active=False)]
    assert visible_budget(CAMPAIGN, phases, [], [], INFLUENCER) is None


# ─── Negotiation ─────────────────────────────────────────────────

def test_negotiation_defaults_to_false():
    assert not negotiation_enabled(CAMPAIGN, [], INFLUENCER)


def test_negotiation_follows_row_flag():
    assert negotiation_enabled(
        CAMPAIGN, [_visibility(negotiation_visible=True)], INFLUENCER,
    )
    assert not negotiation_enabled(
        CAMPAIGN, [_visibility(negotiation_visible=False)], INFLUENCER,
    )


def test_negotiation_ignores_other_influencers():
    row = VisibilitySnapshot(
        campaign_id=CAMPAIGN.id, influencer_id=uuid4(), negotiation_visible=True,
    )
    assert not negotiation_enabled(CAMPAIGN, [row], INFLUENCER)


# ─── Batch views ─────────────────────────────────────────────────

def test_budget_overview_covers_every_campaign():
    second = CampaignSnapshot(id=uuid4(), status=CampaignStatus.ACTIVE)
    phases = PHASES + [_phase(1, 300.0, active=False, campaign=second)]
    visibility = [_visibility(negotiation_visible=True)]
    overview = budget_overview(
        [CAMPAIGN, second], phases, visibility, [_application(1500.0)], INFLUENCER,
    )
    assert set(overview) == {CAMPAIGN.id, second.id}

    first_view = overview[CAMPAIGN.id]
    assert first_view.budget == 1500.0
    assert first_view.rule is BudgetRule.APPLIED
    assert first_view.has_applied
    assert first_view.negotiation_enabled

    second_view = overview[second.id]
    assert second_view.budget is None
    assert second_view.rule is BudgetRule.NO_BUDGET
    assert not second_view.has_applied
    assert not second_view.negotiation_enabled


def test_campaign_budget_table_one_row_per_applicant():
    applied = ApplicantProfile(db_id=INFLUENCER)
    fresh = ApplicantProfile(db_id=uuid4())
    rows = campaign_budget_table(
        CAMPAIGN,
        PHASES,
        [_visibility(assigned_phase=1, negotiation_visible=True)],
        [_application(800.0, status=ApplicationStatus.APPROVED)],
        [applied, fresh],
    )
    assert [r.influencer_id for r in rows] == [INFLUENCER, fresh.db_id]

    assert rows[0].resolution.rule is BudgetRule.APPLIED
    assert rows[0].resolution.amount == 800.0
    assert rows[0].resolution.assigned_phase == 1
    assert rows[0].negotiation_enabled
    assert rows[0].application_status is ApplicationStatus.APPROVED

    assert rows[1].resolution.rule is BudgetRule.HIGHEST_ACTIVE_PHASE
    assert rows[1].resolution.amount == 2000.0
    assert not rows[1].negotiation_enabled
    assert rows[1].application_status is None

"""Budget Visibility Resolver - which budget figure one influencer sees for one campaign.

Invariants:
    - Strict priority chain, first match wins (never a merge):
      APPLIED > CUSTOM_OFFER > ASSIGNED_PHASE > HIGHEST_ACTIVE_PHASE > NO_BUDGET
    - APPLIED returns budget_applied_for verbatim, even when it is None
    - custom_offer_amount of None or 0 is not an override
    - An assigned phase that no longer exists falls through (stale_assignment=True)
    - "Nothing to show" is always None, never 0
    - Highest active phase is re-derived on every call (phase activation is mutable)
    - Rows belonging to other campaigns are ignored; inputs are never mutated

Design Decisions:
    - resolve_budget returns a BudgetResolution tagged with the winning BudgetRule so
      the chain is auditable step-by-step; visible_budget is the thin public projection
    - Orphaned assignments are reported, not logged: the shell decides how to surface them
    - negotiation_enabled does not special-case "already applied" (caller policy)
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from campaign_hub.core.domain_types import (
    ApplicationStatus, BudgetRule, CampaignId, InfluencerId,
)
from campaign_hub.core.eligibility import find_application
from campaign_hub.core.snapshots import (
    ApplicantProfile,
    ApplicationSnapshot,
    CampaignSnapshot,
    PhaseSnapshot,
    VisibilitySnapshot,
)


# Evaluated in this order; NO_BUDGET is the fallback outside the chain.
RULE_PRECEDENCE: tuple[BudgetRule, ...] = (
    BudgetRule.APPLIED,
    BudgetRule.CUSTOM_OFFER,
    BudgetRule.ASSIGNED_PHASE,
    BudgetRule.HIGHEST_ACTIVE_PHASE,
)


@dataclass(frozen=True)
class BudgetResolution:
    """Outcome of the priority chain for one (campaign, influencer) pair."""
    rule: BudgetRule
    amount: float | None
    assigned_phase: int | None = None
    stale_assignment: bool = False


@dataclass(frozen=True)
class CampaignBudgetView:
    """What one influencer sees for one campaign."""
    campaign_id: CampaignId
    budget: float | None
    rule: BudgetRule
    negotiation_enabled: bool
    has_applied: bool


@dataclass(frozen=True)
class InfluencerBudgetRow:
    """Admin-side row: the budget one influencer would see, and why."""
    influencer_id: InfluencerId
    resolution: BudgetResolution
    negotiation_enabled: bool
    application_status: ApplicationStatus | None


@dataclass(frozen=True)
class _ResolutionInputs:
    campaign_id: CampaignId
    application: ApplicationSnapshot | None
    setting: VisibilitySnapshot | None
    phases: tuple[PhaseSnapshot, ...]


# ─── Lookups ─────────────────────────────────────────────────────

def find_visibility(
    visibility_settings: Iterable[VisibilitySnapshot],
    campaign_id: CampaignId,
    influencer_id: InfluencerId,
) -> VisibilitySnapshot | None:
    for setting in visibility_settings:
        if (
            setting.campaign_id == campaign_id
            and setting.influencer_id == influencer_id
        ):
            return setting
    return None


def find_phase(
    phases: Iterable[PhaseSnapshot], campaign_id: CampaignId, phase_number: int,
) -> PhaseSnapshot | None:
    for phase in phases:
        if phase.campaign_id == campaign_id and phase.phase_number == phase_number:
            return phase
    return None


def highest_active_phase(
    phases: Iterable[PhaseSnapshot], campaign_id: CampaignId,
) -> PhaseSnapshot | None:
    """Active phase with the largest phase_number for the campaign, if any."""
    active = sorted(
        (p for p in phases if p.campaign_id == campaign_id and p.is_active),
        key=lambda p: p.phase_number,
        reverse=True,
    )
    return active[0] if active else None


# ─── Priority chain ──────────────────────────────────────────────

def _assignment_orphaned(inputs: _ResolutionInputs) -> bool:
    if inputs.setting is None or inputs.setting.assigned_phase is None:
        return False
    return find_phase(
        inputs.phases, inputs.campaign_id, inputs.setting.assigned_phase,
    ) is None


def _apply_rule(
    rule: BudgetRule, inputs: _ResolutionInputs,
) -> BudgetResolution | None:
    """Return a resolution when `rule` matches, None to fall through."""
    setting = inputs.setting
    assigned = setting.assigned_phase if setting else None

    match rule:
        case BudgetRule.APPLIED:
            if inputs.application is None:
                return None
            return BudgetResolution(
                rule, inputs.application.budget_applied_for, assigned,
            )
        case BudgetRule.CUSTOM_OFFER:
            if setting is None or not setting.custom_offer_amount:
                return None
            return BudgetResolution(rule, setting.custom_offer_amount, assigned)
        case BudgetRule.ASSIGNED_PHASE:
            if assigned is None:
                return None
            phase = find_phase(inputs.phases, inputs.campaign_id, assigned)
            if phase is None:
                return None
            return BudgetResolution(rule, phase.budget_amount, assigned)
        case BudgetRule.HIGHEST_ACTIVE_PHASE:
            top = highest_active_phase(inputs.phases, inputs.campaign_id)
            if top is None:
                return None
            return BudgetResolution(
                rule, top.budget_amount, assigned, _assignment_orphaned(inputs),
            )
    return None


def resolve_budget(
    campaign: CampaignSnapshot,
    phases: Iterable[PhaseSnapshot],
    visibility_settings: Iterable[VisibilitySnapshot],
    applications: Iterable[ApplicationSnapshot],
    applicant_id: InfluencerId,
) -> BudgetResolution:
    """Walk the priority chain for one influencer and return the winning rule."""
    inputs = _ResolutionInputs(
        campaign_id=campaign.id,
        application=find_application(applications, campaign.id, applicant_id),
        setting=find_visibility(visibility_settings, campaign.id, applicant_id),
        phases=tuple(p for p in phases if p.campaign_id == campaign.id),
    )
    for rule in RULE_PRECEDENCE:
        resolution = _apply_rule(rule, inputs)
        if resolution is not None:
            return resolution
    return BudgetResolution(
        BudgetRule.NO_BUDGET,
        None,
        inputs.setting.assigned_phase if inputs.setting else None,
        _assignment_orphaned(inputs),
    )


def visible_budget(
    campaign: CampaignSnapshot,
    phases: Iterable[PhaseSnapshot],
    visibility_settings: Iterable[VisibilitySnapshot],
    applications: Iterable[ApplicationSnapshot],
    applicant_id: InfluencerId,
) -> float | None:
    """Budget figure shown to the applicant, or None when nothing is visible."""
    return resolve_budget(
        campaign, phases, visibility_settings, applications, applicant_id,
    ).amount


def negotiation_enabled(
    campaign: CampaignSnapshot,
    visibility_settings: Iterable[VisibilitySnapshot],
    applicant_id: InfluencerId,
) -> bool:
    setting = find_visibility(visibility_settings, campaign.id, applicant_id)
    return setting.negotiation_visible if setting else False


# ─── Batch views ─────────────────────────────────────────────────

def budget_overview(
    campaigns: Iterable[CampaignSnapshot],
    phases: Sequence[PhaseSnapshot],
    visibility_settings: Sequence[VisibilitySnapshot],
    applications: Sequence[ApplicationSnapshot],
    applicant_id: InfluencerId,
) -> dict[CampaignId, CampaignBudgetView]:
    """Budget and negotiation flag for every campaign, from one influencer's side."""
    overview: dict[CampaignId, CampaignBudgetView] = {}
    for campaign in campaigns:
        resolution = resolve_budget(
            campaign, phases, visibility_settings, applications, applicant_id,
        )
        overview[campaign.id] = CampaignBudgetView(
            campaign_id=campaign.id,
            budget=resolution.amount,
            rule=resolution.rule,
            negotiation_enabled=negotiation_enabled(
                campaign, visibility_settings, applicant_id,
            ),
            has_applied=resolution.rule is BudgetRule.APPLIED,
        )
    return overview


def campaign_budget_table(
    campaign: CampaignSnapshot,
    phases: Sequence[PhaseSnapshot],
    visibility_settings: Sequence[VisibilitySnapshot],
    applications: Sequence[ApplicationSnapshot],
    applicants: Iterable[ApplicantProfile],
) -> list[InfluencerBudgetRow]:
    """One row per applicant (input order) with the budget they would see."""
    rows = []
    for applicant in applicants:
        application = find_application(applications, campaign.id, applicant.db_id)
        rows.append(InfluencerBudgetRow(
            influencer_id=applicant.db_id,
            resolution=resolve_budget(
                campaign, phases, visibility_settings, applications,
                applicant.db_id,
            ),
            negotiation_enabled=negotiation_enabled(
                campaign, visibility_settings, applicant.db_id,
            ),
            application_status=application.status if application else None,
        ))
    return rows

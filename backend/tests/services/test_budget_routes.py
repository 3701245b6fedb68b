"""Budget routes - phases, visibility upserts and the admin budget table.

Invariants:
    - Phase numbers are unique per campaign (409 on collision)
    - Visibility PUT is an upsert that writes only the fields sent, and an
      insert that loses a race updates the row that won
    - Budget table shows the resolver's figure and rule per eligible influencer
    - Deleting an assigned phase leaves the assignment stale, not repaired
"""

from uuid import uuid4

from sqlalchemy import select

from campaign_hub.models.application import Application
from campaign_hub.models.influencer import Influencer
from campaign_hub.models.influencer_visibility import InfluencerVisibility
from campaign_hub.schemas.campaign import VisibilityUpdate
from campaign_hub.services import budget_admin


def _base(campaign):
    return f"/api/v1/campaigns/{campaign.id}"


# ─── Phases ──────────────────────────────────────────────────────

async def test_create_and_list_phases_in_number_order(client, seed_campaign):
    base = _base(seed_campaign)
    for number, amount in ((5, 500), (2, 200)):
        res = await client.post(
            f"{base}/phases",
            json={"phase_number": number, "budget_amount": amount, "is_active": True},
        )
        assert res.status_code == 201
    res = await client.get(f"{base}/phases")
    assert [p["phase_number"] for p in res.json()] == [2, 5]


async def test_duplicate_phase_number_returns_409(client, seed_campaign, seed_phases):
    res = await client.post(
        f"{_base(seed_campaign)}/phases",
        json={"phase_number": 1, "budget_amount": 10},
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_PHASE"


async def test_renumbering_onto_existing_phase_returns_409(
    client, seed_campaign, seed_phases,
):
    res = await client.patch(
        f"{_base(seed_campaign)}/phases/{seed_phases[0].id}",
        json={"phase_number": 2},
    )
    assert res.status_code == 409


async def test_toggle_phase_activation(client, seed_campaign, seed_phases):
    res = await client.patch(
        f"{_base(seed_campaign)}/phases/{seed_phases[1].id}",
        json={"is_active": False},
    )
    assert res.status_code == 200
    assert res.json()["is_active"] is False
    assert res.json()["budget_amount"] == 2000


async def test_phase_of_other_campaign_is_404(client, seed_campaign, seed_phases):
    res = await client.delete(
        f"/api/v1/campaigns/{uuid4()}/phases/{seed_phases[0].id}",
    )
    assert res.status_code == 404


# ─── Visibility ──────────────────────────────────────────────────

async def test_visibility_upsert_keeps_single_row(
    client, seed_campaign, seed_influencer,
):
    url = f"{_base(seed_campaign)}/visibility/{seed_influencer.id}"
    first = await client.put(url, json={"assigned_phase": 1})
    assert first.status_code == 200
    assert first.json()["negotiation_visible"] is False

    second = await client.put(url, json={"negotiation_visible": True})
    data = second.json()
    assert data["id"] == first.json()["id"]
    assert data["assigned_phase"] == 1
    assert data["negotiation_visible"] is True

    listing = await client.get(f"{_base(seed_campaign)}/visibility")
    assert len(listing.json()) == 1


async def test_visibility_upsert_updates_row_inserted_concurrently(
    test_db, seed_campaign, seed_influencer, monkeypatch,
):
    campaign_id, influencer_id = seed_campaign.id, seed_influencer.id
    test_db.add(InfluencerVisibility(
        campaign_id=campaign_id, influencer_id=influencer_id, assigned_phase=1,
    ))
    await test_db.commit()

    find = budget_admin._find_visibility
    reads = []

    async def stale_first_read(db, campaign_id, influencer_id):
        reads.append(campaign_id)
        if len(reads) == 1:
            return None
        return await find(db, campaign_id, influencer_id)

    monkeypatch.setattr(budget_admin, "_find_visibility", stale_first_read)
    setting = await budget_admin.upsert_visibility(
        test_db, campaign_id, influencer_id,
        VisibilityUpdate(custom_offer_amount=750),
    )
    assert len(reads) == 2
    assert setting.custom_offer_amount == 750
    assert setting.assigned_phase == 1

    rows = await test_db.execute(
        select(InfluencerVisibility).where(
            InfluencerVisibility.campaign_id == campaign_id,
        ),
    )
    assert len(rows.scalars().all()) == 1


async def test_visibility_explicit_null_clears_field(
    client, seed_campaign, seed_influencer,
):
    url = f"{_base(seed_campaign)}/visibility/{seed_influencer.id}"
    await client.put(url, json={"custom_offer_amount": 4000})
    res = await client.put(url, json={"custom_offer_amount": None})
    assert res.json()["custom_offer_amount"] is None


async def test_visibility_for_unknown_influencer_is_404(client, seed_campaign):
    res = await client.put(
        f"{_base(seed_campaign)}/visibility/{uuid4()}", json={"assigned_phase": 1},
    )
    assert res.status_code == 404


# ─── Budget table ────────────────────────────────────────────────

async def test_budget_table_defaults_to_highest_active_phase(
    client, seed_campaign, seed_influencer, seed_phases,
):
    res = await client.get(f"{_base(seed_campaign)}/budget-table")
    assert res.status_code == 200
    rows = res.json()
    assert len(rows) == 1
    assert rows[0]["influencer_id"] == str(seed_influencer.id)
    assert rows[0]["budget"] == 2000
    assert rows[0]["budget_rule"] == "highest_active_phase"
    assert rows[0]["application_status"] is None


async def test_budget_table_follows_assigned_phase(
    client, seed_campaign, seed_influencer, seed_phases,
):
    await client.put(
        f"{_base(seed_campaign)}/visibility/{seed_influencer.id}",
        json={"assigned_phase": 1, "negotiation_visible": True},
    )
    row = (await client.get(f"{_base(seed_campaign)}/budget-table")).json()[0]
    assert row["budget"] == 1000
    assert row["budget_rule"] == "assigned_phase"
    assert row["assigned_phase"] == 1
    assert row["negotiation_enabled"] is True


async def test_deleted_assigned_phase_goes_stale(
    client, seed_campaign, seed_influencer, seed_phases,
):
    base = _base(seed_campaign)
    await client.put(
        f"{base}/visibility/{seed_influencer.id}", json={"assigned_phase": 2},
    )
    res = await client.delete(f"{base}/phases/{seed_phases[1].id}")
    assert res.status_code == 204

    row = (await client.get(f"{base}/budget-table")).json()[0]
    assert row["budget"] == 1000
    assert row["budget_rule"] == "highest_active_phase"
    assert row["assigned_phase"] == 2
    assert row["stale_assignment"] is True


async def test_budget_table_shows_frozen_application_budget(
    client, test_db, seed_campaign, seed_influencer, seed_phases,
):
    test_db.add(Application(
        campaign_id=seed_campaign.id, influencer_id=seed_influencer.id,
        status="approved", budget_applied_for=1500,
    ))
    await test_db.commit()
    row = (await client.get(f"{_base(seed_campaign)}/budget-table")).json()[0]
    assert row["budget"] == 1500
    assert row["budget_rule"] == "applied"
    assert row["application_status"] == "approved"


async def test_budget_table_skips_ineligible_influencers(
    client, test_db, seed_campaign, seed_influencer, seed_phases,
):
    test_db.add(Influencer(email="far@creators.test", name="Far", city="Denver"))
    await test_db.commit()
    rows = (await client.get(f"{_base(seed_campaign)}/budget-table")).json()
    assert [r["name"] for r in rows] == ["Ana"]

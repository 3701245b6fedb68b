"""ORM Models - SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Campaign is the aggregate root for phases, applications and visibility rows

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from campaign_hub.models.admin import Admin  # noqa: F401
from campaign_hub.models.influencer import Influencer  # noqa: F401
from campaign_hub.models.campaign import Campaign  # noqa: F401
from campaign_hub.models.campaign_phase import CampaignPhase  # noqa: F401
from campaign_hub.models.application import Application  # noqa: F401
from campaign_hub.models.influencer_visibility import InfluencerVisibility  # noqa: F401
from campaign_hub.models.message import Message  # noqa: F401
from campaign_hub.models.notification import Notification  # noqa: F401

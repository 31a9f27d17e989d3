"""ORM Models — SQLAlchemy declarative models for the federated social graph.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every per-viewer row carries the owner's uid; uid 0 is reserved for
      public contacts

Design Decisions:
    - One file per entity for locality (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from gateway.models.user import User  # noqa: F401
from gateway.models.profile import Profile  # noqa: F401
from gateway.models.contact import Contact  # noqa: F401
from gateway.models.item import Item  # noqa: F401
from gateway.models.mail import Mail  # noqa: F401
from gateway.models.notification import Notification  # noqa: F401
from gateway.models.saved_search import SavedSearch  # noqa: F401

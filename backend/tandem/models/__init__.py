"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns its outgoing FriendLink edges

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from tandem.models.user import User  # noqa: F401
from tandem.models.friend_link import FriendLink  # noqa: F401
from tandem.models.connection_request import ConnectionRequest  # noqa: F401

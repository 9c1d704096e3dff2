"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Team is the aggregate root for roster members and redeemed tokens

Design Decisions:
    - One file per entity family for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from teamgate.models.team import Team, TeamMember  # noqa: F401
from teamgate.models.registration_token import RegistrationToken  # noqa: F401
from teamgate.models.logo import Logo  # noqa: F401
from teamgate.models.configuration import ConfigurationSetting, PasswordType  # noqa: F401
from teamgate.models.team_session import TeamSession  # noqa: F401

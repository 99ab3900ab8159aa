"""SQLAlchemy ORM models for the UCP backend.

All models are exported from this module for convenient imports:
    from ucp.models import Account, OneTimeCode, Character, ...

Models are organized by domain:
- account.py: Account, ApplicationStatus
- one_time_code.py: OneTimeCode, CodePurpose
- character.py: Character, Faction, AdminWarn, InventoryItem
- news.py: News
- ban.py: Ban
- quiz.py: QuizType, Quiz, QuizAnswer
- application.py: UserApplication
- asset.py: Vehicle, Property
"""

from ucp.models.account import Account, ApplicationStatus
from ucp.models.application import UserApplication
from ucp.models.asset import Property, Vehicle
from ucp.models.ban import Ban
from ucp.models.base import AuthorMixin, Base, TimestampMixin
from ucp.models.character import AdminWarn, Character, Faction, InventoryItem
from ucp.models.news import News
from ucp.models.one_time_code import CodePurpose, OneTimeCode
from ucp.models.quiz import Quiz, QuizAnswer, QuizType

__all__ = [
    "Account",
    "AdminWarn",
    "ApplicationStatus",
    "AuthorMixin",
    "Ban",
    "Base",
    "Character",
    "CodePurpose",
    "Faction",
    "InventoryItem",
    "News",
    "OneTimeCode",
    "Property",
    "Quiz",
    "QuizAnswer",
    "QuizType",
    "TimestampMixin",
    "UserApplication",
    "Vehicle",
]

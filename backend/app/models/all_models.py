# Importing this module registers every table on Base.metadata
from backend.app.models.user_model import PlayerProfile
from backend.app.models.catalog_model import GameCategory, FeaturedBanner
from backend.app.models.tournament_model import Tournament, MatchResult, RegistrationLog
from backend.app.models.team_model import UserTeam
from backend.app.models.wallet_model import Transaction, WithdrawMethod, WithdrawRequest, PendingPrize
from backend.app.models.notification_model import AppNotification
from backend.app.models.setting_model import Setting

__all__ = [
    "PlayerProfile",
    "GameCategory",
    "FeaturedBanner",
    "Tournament",
    "MatchResult",
    "RegistrationLog",
    "UserTeam",
    "Transaction",
    "WithdrawMethod",
    "WithdrawRequest",
    "PendingPrize",
    "AppNotification",
    "Setting",
]

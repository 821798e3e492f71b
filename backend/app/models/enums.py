from enum import StrEnum

class TournamentStatus(StrEnum):
    UPCOMING = "upcoming"
    LIVE = "live"
    COMPLETED = "completed"

class MatchStatus(StrEnum):
    PENDING = "pending"
    LIVE = "live"
    COMPLETED = "completed"

class SubmissionStatus(StrEnum):
    PENDING = "pending"
    SUBMITTED = "submitted"

class TeamType(StrEnum):
    SOLO = "SOLO"
    DUO = "DUO"
    SQUAD = "SQUAD"

class UserRole(StrEnum):
    PLAYER = "Player"
    ADMIN = "Admin"

class UserStatus(StrEnum):
    ACTIVE = "active"
    BANNED = "banned"

class TransactionType(StrEnum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    PRIZE = "prize"
    FEE = "fee"
    ADMIN_ADJUSTMENT = "admin_adjustment"

class ReviewStatus(StrEnum):
    """Lifecycle shared by withdraw requests, match results and prizes."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class MethodStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"

class NotificationType(StrEnum):
    GENERAL = "general"
    TEAM_INVITE = "team_invite"
    INVITE_RESPONSE = "invite_response"

class InviteStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

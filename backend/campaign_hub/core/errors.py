"""Error Hierarchy - typed, categorized exceptions for all Campaign Hub failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - The eligibility and budget resolvers never raise these: they are total

Design Decisions:
    - Single hierarchy with CampaignHubError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    campaign_id: str | None = None
    influencer_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class CampaignHubError(Exception):
    """Base exception for all Campaign Hub errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "campaign_id": self.context.campaign_id,
                    "influencer_id": self.context.influencer_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(CampaignHubError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class DuplicateApplicationError(CampaignHubError):
    """An application already exists for this (campaign, influencer) pair."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Influencer has already applied to this campaign",
            "DUPLICATE_APPLICATION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class DuplicatePhaseError(CampaignHubError):
    """Phase number already used within the campaign."""
    def __init__(self, phase_number: int, context: ErrorContext | None = None):
        super().__init__(
            f"Phase {phase_number} already exists for this campaign",
            "DUPLICATE_PHASE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.phase_number = phase_number


class DuplicateParticipantError(CampaignHubError):
    """Email already registered for this participant type."""
    def __init__(self, user_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"An {user_type} with this email already exists",
            "DUPLICATE_PARTICIPANT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class CampaignNotOpenError(CampaignHubError):
    """Application attempted on a campaign that is not active."""
    def __init__(self, status: str, context: ErrorContext | None = None):
        super().__init__(
            f"Campaign is not accepting applications (status: {status})",
            "CAMPAIGN_NOT_OPEN", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class NotEligibleError(CampaignHubError):
    """Influencer does not meet the campaign's targeting criteria."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Influencer does not meet this campaign's requirements",
            "NOT_ELIGIBLE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class ApplicationAlreadyDecidedError(CampaignHubError):
    """Status change attempted on an approved or rejected application."""
    def __init__(self, status: str, context: ErrorContext | None = None):
        super().__init__(
            f"Application is already {status}",
            "APPLICATION_ALREADY_DECIDED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class InvalidStatusTransitionError(CampaignHubError):
    """Requested status is not a valid target."""
    def __init__(self, target: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot transition application to '{target}'",
            "INVALID_STATUS_TRANSITION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CampaignHubError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation

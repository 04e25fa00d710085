"""
Result types produced by service principal creation
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from spn_scripts.errors import AssignmentError

REDACTED = "********"


@dataclass(frozen=True)
class PasswordWindow:
    """Validity window of a password credential"""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class PasswordCredentialRequest:
    """A password credential to be attached to a newly created principal"""

    key_id: UUID
    display_name: str
    window: PasswordWindow


@dataclass
class CreatedPrincipal:
    display_name: str
    app_id: str
    object_id: str
    application_object_id: Optional[str] = None
    secret: Optional[str] = field(default=None, repr=False)
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def redacted_secret(self) -> str:
        """Loggable stand-in for the secret, never the secret itself"""
        return REDACTED if self.secret else "<none>"


@dataclass
class CreationFailure:
    display_name: str
    message: str
    code: Optional[str] = None


@dataclass
class BatchOutcome:
    """
    Accumulated result of one batch run.
    created keeps creation order, failures keep attempt order.
    """

    created: List[CreatedPrincipal] = field(default_factory=list)
    failures: List[CreationFailure] = field(default_factory=list)
    success_count: int = 0
    assignment_error: Optional[AssignmentError] = None

    def record_created(self, principal: CreatedPrincipal):
        self.created.append(principal)
        self.success_count += 1

    def record_failure(self, failure: CreationFailure):
        self.failures.append(failure)

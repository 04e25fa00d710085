"""
Batch creation of service principals.

Names are processed one at a time in input order. A failure for one name is
recorded and logged, and the batch moves on; the successful principals are
handed to the role assigner in a single call at the end.
"""

import asyncio
import logging
from typing import Callable, Optional, Sequence

from spn_scripts.create.create_client_secret import new_password_credential
from spn_scripts.errors import AssignmentError, EmptyInputError, InputFileError, ProviderError
from spn_scripts.models import BatchOutcome, CreationFailure, PasswordWindow

logger = logging.getLogger(__name__)


def read_principal_names(path: str) -> list:
    """
    Read display names from a text file, one per line.
    Blank lines are skipped; duplicates are kept.
    """

    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"Cannot read input file '{path}': {e}") from e

    names = [line.strip() for line in lines if line.strip()]
    if not names:
        raise EmptyInputError(f"Input file '{path}' contains no display names")
    return names


def summarize(outcome: BatchOutcome) -> str:
    if outcome.success_count == 0:
        return "No service principal objects created"
    if outcome.success_count == 1:
        return "1 service principal object created"
    return f"{outcome.success_count} service principal objects created"


class BatchPrincipalCreator:
    """
    Creates one service principal per display name and assigns the default role to the batch.

    identity_provider needs an async create_principal(display_name, password_credential);
    role_assigner needs an async assign_default_role(principals).
    """

    def __init__(
        self,
        identity_provider,
        role_assigner,
        window_factory: Callable[[], PasswordWindow],
        secret_name: str = "spn-secret",
        create_timeout: Optional[float] = None,
        logger_: Optional[logging.Logger] = None,
    ):
        self.identity_provider = identity_provider
        self.role_assigner = role_assigner
        self.window_factory = window_factory
        self.secret_name = secret_name
        self.create_timeout = create_timeout
        self.logger = logger_ or logger

    async def _create_one(self, display_name: str):
        credential = new_password_credential(self.secret_name, self.window_factory())
        call = self.identity_provider.create_principal(display_name, credential)
        if self.create_timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self.create_timeout)
        except asyncio.TimeoutError as e:
            raise ProviderError(
                f"Creation did not complete within {self.create_timeout} seconds",
                code="Timeout",
            ) from e

    async def create_batch(self, names: Sequence[str]) -> BatchOutcome:
        if not names:
            raise EmptyInputError("No display names supplied")

        outcome = BatchOutcome()

        for display_name in names:
            try:
                principal = await self._create_one(display_name)
            except ProviderError as e:
                outcome.record_failure(CreationFailure(display_name=display_name, message=e.message, code=e.code))
                self.logger.warning(
                    "Failed to create service principal %s: %s",
                    display_name,
                    e.message,
                    extra={"display_name": display_name, "error_code": e.code},
                )
                continue

            outcome.record_created(principal)
            self.logger.info(
                "Created service principal %s (app ID %s, password %s)",
                display_name,
                principal.app_id,
                principal.redacted_secret,
                extra={"display_name": display_name, "app_id": principal.app_id},
            )

        if outcome.success_count > 0:
            try:
                await self.role_assigner.assign_default_role(list(outcome.created))
            except AssignmentError as e:
                outcome.assignment_error = e
                self.logger.error("Default role assignment failed: %s", e, extra={"failed_names": e.failed_names})

        return outcome

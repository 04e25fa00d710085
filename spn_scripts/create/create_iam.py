"""
Azure IAM role assignment using Azure SDK
"""

import asyncio
import logging
from typing import Sequence
from uuid import uuid4

from azure.mgmt.authorization import AuthorizationManagementClient
from azure.mgmt.authorization.models import RoleAssignmentCreateParameters

from spn_scripts.errors import AssignmentError
from spn_scripts.models import CreatedPrincipal

logger = logging.getLogger(__name__)


class IamRoleAssigner:
    """
    Attaches one default role at one scope to batches of newly created service principals
    """

    def __init__(self, credential, az_subscription: str, role: str, scope: str, auth_client=None):
        self.role = role
        self.scope = scope
        self.auth_client = auth_client or AuthorizationManagementClient(credential, az_subscription)

    def _role_definition_id(self):
        logger.debug("Looking up role definition for '%s' at scope '%s'", self.role, self.scope)
        role_definitions = list(self.auth_client.role_definitions.list(
            self.scope,
            filter=f"roleName eq '{self.role}'"
        ))

        if not role_definitions:
            return None
        return role_definitions[0].id

    def _existing_principals(self, role_definition_id: str) -> set:
        existing = set()
        for assignment in self.auth_client.role_assignments.list_for_scope(self.scope):
            if assignment.role_definition_id == role_definition_id:
                existing.add(assignment.principal_id)
        return existing

    async def assign_default_role(self, principals: Sequence[CreatedPrincipal]):
        """
        Assign the default role to every principal in the batch.
        All principals are attempted; failures are raised together afterwards.
        The authorization client is synchronous, so the work runs in a worker thread.
        """
        await asyncio.to_thread(self._assign_all, list(principals))

    def _assign_all(self, principals: Sequence[CreatedPrincipal]):
        all_names = [p.display_name for p in principals]
        try:
            role_definition_id = self._role_definition_id()
            already_assigned = self._existing_principals(role_definition_id) if role_definition_id else set()
        except Exception as e:
            raise AssignmentError(f"Failed to prepare '{self.role}' assignment: {e}", failed_names=all_names) from e

        if role_definition_id is None:
            raise AssignmentError(f"Role '{self.role}' not found in scope '{self.scope}'", failed_names=all_names)

        failed = []
        for principal in principals:
            if principal.object_id in already_assigned:
                logger.info("Role '%s' already assigned to %s", self.role, principal.display_name)
                continue

            try:
                role_assignment_params = RoleAssignmentCreateParameters(
                    role_definition_id=role_definition_id,
                    principal_id=principal.object_id,
                    principal_type="ServicePrincipal"
                )
                role_assignment = self.auth_client.role_assignments.create(
                    self.scope,
                    str(uuid4()),
                    role_assignment_params
                )
                logger.info(
                    "Assigned role '%s' to %s at %s",
                    self.role,
                    principal.display_name,
                    self.scope,
                    extra={"display_name": principal.display_name, "assignment_id": role_assignment.id},
                )
            except Exception as e:
                logger.warning(
                    "Failed to assign role '%s' to %s: %s",
                    self.role,
                    principal.display_name,
                    e,
                    extra={"display_name": principal.display_name},
                )
                failed.append(principal.display_name)

        if failed:
            raise AssignmentError(
                f"Role '{self.role}' could not be assigned to {len(failed)} of {len(principals)} principal(s): {', '.join(failed)}",
                failed_names=failed,
            )

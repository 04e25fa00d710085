"""
Identity provider backed by Microsoft Graph.

A "principal" here is the pair the portal creates for you: an app registration
plus its service principal, optionally with a password credential on the app.
"""

import logging
from typing import List, Optional

from msgraph.generated.models.service_principal import ServicePrincipal

from spn_scripts.create import create_app_registration, create_client_secret, create_service_principal
from spn_scripts.get import get_service_principal
from spn_scripts.models import CreatedPrincipal, PasswordCredentialRequest

logger = logging.getLogger(__name__)


class GraphIdentityProvider:

    def __init__(self, graph_client):
        self.graph_client = graph_client

    async def create_principal(self, display_name: str, password_credential: Optional[PasswordCredentialRequest] = None) -> CreatedPrincipal:
        """
        Register an application, create its service principal and, when a credential
        is given, add the password to the application.
        Raises ProviderError on the first failing Graph call.
        """

        app = await create_app_registration.create_app_registration_async(self.graph_client, display_name)
        sp = await create_service_principal.create_service_principal_async(self.graph_client, app.app_id)

        principal = CreatedPrincipal(
            display_name=display_name,
            app_id=app.app_id,
            object_id=sp.id,
            application_object_id=app.id,
        )

        if password_credential is not None:
            secret = await create_client_secret.create_client_secret_async(self.graph_client, app.id, password_credential)
            principal.secret = secret.secret_text
            principal.start = secret.start_date_time or password_credential.window.start
            principal.end = secret.end_date_time or password_credential.window.end

        return principal

    async def lookup_by_name(self, display_name: str) -> List[ServicePrincipal]:
        return await get_service_principal.get_service_principals_by_name_async(self.graph_client, display_name)

    async def lookup_by_app_id(self, app_id: str) -> Optional[ServicePrincipal]:
        return await get_service_principal.get_service_principal_by_app_id_async(self.graph_client, app_id)

    async def lookup_by_wildcard(self, pattern: str) -> List[ServicePrincipal]:
        return await get_service_principal.get_service_principals_by_wildcard_async(self.graph_client, pattern)

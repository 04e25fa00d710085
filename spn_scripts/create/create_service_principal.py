"""
Azure Service Principal creation using Microsoft Graph SDK
"""

import logging

from msgraph.generated.models.service_principal import ServicePrincipal

from spn_scripts.errors import ProviderError

logger = logging.getLogger(__name__)


async def create_service_principal_async(graph_client, app_id: str) -> ServicePrincipal:
    """
    Create a service principal linked to an app registration using Microsoft Graph SDK
    Returns the created service principal
    """

    try:
        logger.debug("Preparing service principal object for app ID: %s", app_id)
        service_principal = ServicePrincipal()
        service_principal.app_id = app_id
        service_principal.account_enabled = True

        logger.debug("Submitting service principal creation to Microsoft Graph...")
        created_sp = await graph_client.service_principals.post(service_principal)

        logger.debug("Service principal created - Object ID: %s, Display Name: %s", created_sp.id, created_sp.display_name)
        return created_sp

    except Exception as e:
        logger.debug("Failed to create service principal for app ID '%s': %s (%s)", app_id, e, type(e).__name__)
        raise ProviderError.from_exception(e) from e

"""
Azure App Registration creation using Microsoft Graph SDK
"""

import logging

from msgraph.generated.models.application import Application

from spn_scripts.errors import ProviderError

logger = logging.getLogger(__name__)


async def create_app_registration_async(graph_client, display_name: str) -> Application:
    """
    Register a new Azure AD application using Microsoft Graph SDK.
    Display names are not unique in the directory, so every call registers a new application.
    Returns the created application (app_id and object id populated)
    """

    try:
        logger.debug("Preparing application object with display name: %s", display_name)
        application = Application()
        application.display_name = display_name
        application.sign_in_audience = "AzureADMyOrg"

        logger.debug("Submitting app registration to Microsoft Graph...")
        created_app = await graph_client.applications.post(application)

        logger.debug("App registration created - App ID: %s, Object ID: %s", created_app.app_id, created_app.id)
        return created_app

    except Exception as e:
        logger.debug("Failed to create app registration '%s': %s (%s)", display_name, e, type(e).__name__)
        raise ProviderError.from_exception(e) from e

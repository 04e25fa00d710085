"""
Azure client secret creation using Microsoft Graph SDK
"""

import logging
from uuid import uuid4

from msgraph.generated.applications.item.add_password.add_password_post_request_body import AddPasswordPostRequestBody
from msgraph.generated.models.password_credential import PasswordCredential

from spn_scripts.errors import ProviderError
from spn_scripts.models import PasswordCredentialRequest, PasswordWindow

logger = logging.getLogger(__name__)


def new_password_credential(secret_name: str, window: PasswordWindow) -> PasswordCredentialRequest:
    """Fresh credential request with a random key id"""
    return PasswordCredentialRequest(key_id=uuid4(), display_name=secret_name, window=window)


async def create_client_secret_async(graph_client, app_object_id: str, credential: PasswordCredentialRequest) -> PasswordCredential:
    """
    Add a password credential to an app registration using Microsoft Graph SDK

    Args:
        graph_client: Microsoft Graph client instance
        app_object_id: Object ID of the app registration (not the app ID)
        credential: Key id, display name and validity window of the secret

    Returns:
        The created password credential; secret_text holds the only copy of the secret value
    """

    try:
        logger.debug(
            "Preparing password credential '%s' valid %s to %s",
            credential.display_name,
            credential.window.start.isoformat(),
            credential.window.end.isoformat(),
        )

        password_credential = PasswordCredential()
        password_credential.key_id = credential.key_id
        password_credential.display_name = credential.display_name
        password_credential.start_date_time = credential.window.start
        password_credential.end_date_time = credential.window.end

        request_body = AddPasswordPostRequestBody()
        request_body.password_credential = password_credential

        logger.debug("Submitting client secret creation to Microsoft Graph...")
        created_secret = await graph_client.applications.by_application_id(app_object_id).add_password.post(request_body)

        logger.debug("Client secret created - Secret ID: %s", created_secret.key_id)
        return created_secret

    except Exception as e:
        logger.debug("Failed to create client secret for application '%s': %s (%s)", app_object_id, e, type(e).__name__)
        raise ProviderError.from_exception(e) from e

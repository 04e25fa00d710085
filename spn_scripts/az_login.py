"""
Azure authentication using interactive browser login
"""

import logging

from azure.core.exceptions import ClientAuthenticationError
from azure.identity import InteractiveBrowserCredential

logger = logging.getLogger(__name__)


def azure_login(az_tenant_id: str):
    """
    Authenticate to Azure using interactive browser.
    Returns credential for use with Microsoft Graph and the authorization client.
    """

    try:
        credential = InteractiveBrowserCredential(tenant_id=az_tenant_id)

        logger.info("Interactive browser credential created for tenant %s", az_tenant_id)
        return credential
    except ClientAuthenticationError as e:
        logger.error("Authentication failed: %s", e)
        raise

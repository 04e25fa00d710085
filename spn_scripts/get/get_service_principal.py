"""
Azure Service Principal lookup using Microsoft Graph SDK
"""

import fnmatch
import logging
from typing import List, Optional

from kiota_abstractions.base_request_configuration import RequestConfiguration
from msgraph.generated.models.service_principal import ServicePrincipal
from msgraph.generated.service_principals.service_principals_request_builder import ServicePrincipalsRequestBuilder

from spn_scripts.errors import ProviderError

logger = logging.getLogger(__name__)


def _odata_literal(value: str) -> str:
    """Quote a string for an OData $filter expression"""
    return "'" + value.replace("'", "''") + "'"


def filter_configuration(odata_filter: str) -> RequestConfiguration:
    query_params = ServicePrincipalsRequestBuilder.ServicePrincipalsRequestBuilderGetQueryParameters(
        filter=odata_filter,
    )
    return RequestConfiguration(query_parameters=query_params)


async def list_service_principals_async(graph_client, odata_filter: str = None) -> List[ServicePrincipal]:
    """
    Fetch service principals, optionally narrowed by an OData $filter, following @odata.nextLink pages
    """

    try:
        if odata_filter:
            page = await graph_client.service_principals.get(request_configuration=filter_configuration(odata_filter))
        else:
            page = await graph_client.service_principals.get()

        service_principals = []
        while page is not None:
            service_principals.extend(page.value or [])
            if not page.odata_next_link:
                break
            page = await graph_client.service_principals.with_url(page.odata_next_link).get()

        logger.debug("Found %d service principals (filter: %s)", len(service_principals), odata_filter or "none")
        return service_principals

    except Exception as e:
        raise ProviderError.from_exception(e) from e


async def get_service_principals_by_name_async(graph_client, display_name: str) -> List[ServicePrincipal]:
    """
    All service principals whose display name equals display_name
    """

    logger.debug("Searching for service principals with name: %s", display_name)
    return await list_service_principals_async(graph_client, f"displayName eq {_odata_literal(display_name)}")


async def get_service_principal_by_app_id_async(graph_client, app_id: str) -> Optional[ServicePrincipal]:
    """
    The service principal of an application, or None
    """

    logger.debug("Searching for service principal with app ID: %s", app_id)
    service_principals = await list_service_principals_async(graph_client, f"appId eq {_odata_literal(app_id)}")
    return service_principals[0] if service_principals else None


async def get_service_principals_by_wildcard_async(graph_client, pattern: str) -> List[ServicePrincipal]:
    """
    Service principals whose display name matches a shell-style wildcard (e.g. 'ci-*'), ignoring case.
    $filter has no general wildcard operator, so this one lists the tenant and matches locally.
    """

    logger.debug("Searching for service principals matching: %s", pattern)
    pattern = pattern.lower()
    return [
        sp for sp in await list_service_principals_async(graph_client)
        if sp.display_name and fnmatch.fnmatchcase(sp.display_name.lower(), pattern)
    ]

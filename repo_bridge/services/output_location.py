"""
Output location checks for scheduled content.
"""
import logging
from typing import Callable, Optional

import httpx

from .environment import NO_CACHE_HEADERS, get_scheduler_plugin_context_url, open_client
from .paths import encode_path_segment, get_parent_path


log = logging.getLogger("repo_bridge.output_location")

Callback = Optional[Callable[[], None]]


def output_location_url(output_location: str, context_url: Optional[str] = None) -> str:
    return (
        get_scheduler_plugin_context_url(context_url)
        + "api/generic-files/folders/"
        + encode_path_segment(output_location)
    )


async def validate_output_location(
    output_location: Optional[str],
    success_callback: Callback = None,
    error_callback: Callback = None,
    context_url: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> None:
    """
    Check that the output folder exists.

    Calls ``success_callback`` when the folder endpoint answers 204 and
    ``error_callback`` on any other status or a transport error. An empty
    location does nothing at all.
    """
    if not output_location:
        return

    url = output_location_url(output_location, context_url)
    async with open_client(client) as http:
        try:
            response = await http.head(url, headers=NO_CACHE_HEADERS)
        except httpx.HTTPError as e:
            log.warning("Output location check for %s failed: %s", output_location, e)
            if error_callback is not None:
                error_callback()
            return

    if response.status_code == 204:
        if success_callback is not None:
            success_callback()
    else:
        log.info("Output location %s rejected with %s", output_location, response.status_code)
        if error_callback is not None:
            error_callback()


def get_previous_location_path(path: Optional[str]) -> Optional[str]:
    return get_parent_path(path)

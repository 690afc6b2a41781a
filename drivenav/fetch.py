# fetch.py
import logging
import time
from typing import List, Optional, Sequence

import requests

from .config import get_settings
from .exceptions import TransientIOError
from .utils import build_query_params


def _request(session, url: str, options: dict) -> requests.Response:
    options = dict(options)
    method = options.pop("method", "GET")
    options.setdefault("timeout", get_settings().HTTP_TIMEOUT_SECONDS)
    try:
        return session.request(method, url, **options)
    except requests.RequestException as e:
        logging.error(f"Request to {url} failed: {e}")
        raise TransientIOError(f"Request to {url} failed: {e}") from e


def fetch(
    url: str,
    options: Optional[dict] = None,
    response_type: str = "text",
    params: Optional[dict] = None,
):
    """
    General purpose HTTP request.

    :param options: Extra keyword arguments for requests (method, headers, ...).
    :param response_type: "text" or "json"; how to parse a 200 response.
    :param params: Query parameters appended to the URL; list values repeat the key.
    :return: The parsed body, None for an empty body, or the raw response
        for any status other than 200.
    """
    if params:
        url += build_query_params(params)
    response = _request(requests, url, options or {})

    if response.status_code != 200:
        logging.warning(f"{url} Status: {response.status_code}")
        return response

    if not response.text:
        return None
    if response_type == "json":
        return response.json()
    return response.text


def fetch_pdfs(urls: Sequence[str], rate_limit: Sequence[int] = ()) -> List[requests.Response]:
    """
    Fetches a list of PDF URLs in order.

    :param rate_limit: Optional (requests, wait_ms) pair; after every `requests`
        fetches the loop sleeps for `wait_ms` milliseconds.
    :return: The responses, one per non-empty URL.
    """
    resources = []
    count = 0

    with requests.Session() as session:
        for url in urls:
            if rate_limit and count == rate_limit[0]:
                count = 0
                time.sleep(rate_limit[1] / 1000)

            if url:
                logging.info(f"Fetching PDF: {url}")
                resources.append(_request(session, url, {}))

            if rate_limit:
                count += 1

    return resources

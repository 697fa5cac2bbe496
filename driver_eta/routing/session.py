"""HTTP session factory for routing provider calls."""

from __future__ import annotations

import requests
from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import HTTP_POOL_CONNECTIONS, HTTP_POOL_MAXSIZE, ROUTING_USER_AGENT

__all__ = ["create_session"]


def _build_retry() -> Retry:
    # One attempt per provider; the chain moves on instead of retrying.
    return Retry(total=0, read=False, raise_on_status=False)


def create_session(user_agent: str = ROUTING_USER_AGENT) -> Session:
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=HTTP_POOL_CONNECTIONS,
        pool_maxsize=HTTP_POOL_MAXSIZE,
        max_retries=_build_retry(),
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "Accept-Encoding": "gzip, deflate",
            "Accept": "application/json",
            "User-Agent": user_agent,
        }
    )
    return session

"""
sheets.py – read-only Google Sheets v4 range client.

Uses urllib only.  Returns the decoded JSON body; callers decide what an
absent ``values`` key means.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request

import config

logger = logging.getLogger(__name__)


class SheetsError(Exception):
    """Transport, HTTP or decode failure talking to the Sheets API."""


def values_url(source: str,
               sheet_id: str | None = None,
               api_key: str | None = None) -> str:
    sheet_id = sheet_id or config.SHEET_ID
    api_key  = config.API_KEY if api_key is None else api_key
    url = (f"{config.SHEETS_BASE_URL}/{urllib.parse.quote(sheet_id, safe='')}"
           f"/values/{urllib.parse.quote(source, safe='!:')}")
    if api_key:
        url += "?" + urllib.parse.urlencode({"key": api_key})
    return url


def fetch_values(source: str, timeout: float | None = None) -> dict:
    """
    GET the range *source* and return the parsed JSON object.

    Raises:
        SheetsError on HTTP errors, network errors or a non-JSON body.
    """
    url = values_url(source)
    timeout = config.FETCH_TIMEOUT_SEC if timeout is None else timeout
    req = urllib.request.Request(url, headers={"User-Agent": "ScoreboardKiosk/1.0"})
    logger.debug("GET %s", source)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read().decode("utf-8")
    except urllib.error.HTTPError as e:
        detail = e.read().decode("utf-8", errors="replace")[:300]
        raise SheetsError(f"HTTP {e.code} for {source}: {detail}") from e
    except urllib.error.URLError as e:
        raise SheetsError(f"URL error for {source}: {e.reason}") from e
    except OSError as e:
        raise SheetsError(f"request for {source} failed: {e}") from e

    try:
        data = json.loads(body)
    except ValueError as e:
        raise SheetsError(f"invalid JSON for {source}") from e
    if not isinstance(data, dict):
        raise SheetsError(f"unexpected payload type for {source}: {type(data).__name__}")
    return data

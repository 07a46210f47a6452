"""HTTP helpers shared by the promotion resolvers, loaders and repository code.

Two flavours of GET are offered: ``safe_get`` for single-shot requests where a
transport failure should stop the program (artifact downloads), and
``robust_get``/``get_json`` for index lookups that retry and report failures
through the status code instead.

Nothing is cached here; promotion indexes are re-read on every call so a
build always sees the current upstream state.
"""
from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants, ExitCodes
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def _trace(message: str, **fields: Any) -> None:
    """Emit a structured DEBUG record for the HTTP layer."""
    if is_debug_enabled(logger):
        logger.debug(message, extra=extra_context(component="http_client", **fields))


def safe_get(url: str, *, context: str, fatal: bool = True, **kwargs: Any) -> Optional[requests.Response]:
    """GET ``url`` once with the global timeout.

    Args:
        url: Target URL.
        context: Tag used in log lines (loader family or artifact name).
        fatal: Exit with ``ExitCodes.CONNECTION_ERROR`` on transport errors;
            when False, return None instead.
        **kwargs: Passed through to requests.get.
    """
    target = safe_url(url)
    _trace("HTTP request", event="http_request", action="GET", target=target, loader=context)
    with Timer() as t:
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
        except requests.Timeout:
            logger.error("%s request timed out after %s seconds", context, Constants.REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            logger.error("%s connection error: %s", context, exc)
        else:
            _trace(
                "HTTP response",
                event="http_response",
                action="GET",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=target,
                loader=context,
            )
            return res
    if fatal:
        sys.exit(ExitCodes.CONNECTION_ERROR.value)
    return None


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """GET with retries and exponential backoff; 5xx answers are retried too.

    Returns:
        ``(status_code, headers, text)``. ``status_code`` is 0 when no attempt
        got a usable answer, and ``text`` then describes the last failure.
    """
    target = safe_url(url)
    failure = None

    for attempt in range(1, Constants.HTTP_RETRY_MAX + 1):
        if attempt > 1:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 2)))
        _trace("HTTP request", event="http_request", action="GET", target=target, attempt=attempt)
        with Timer() as t:
            try:
                response = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
            except requests.Timeout:
                failure = "timeout"
            except requests.RequestException as exc:
                failure = str(exc)
            else:
                if response.status_code < 500:
                    _trace(
                        "HTTP response",
                        event="http_response",
                        action="GET",
                        status_code=response.status_code,
                        duration_ms=t.duration_ms(),
                        target=target,
                        attempt=attempt,
                    )
                    return response.status_code, dict(response.headers), response.text
                failure = f"HTTP {response.status_code}"
        _trace("HTTP attempt failed", event="http_exception", action="GET", outcome=failure,
               target=target, attempt=attempt)

    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {failure}"


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """``robust_get`` followed by JSON decoding.

    Returns:
        ``(status_code, headers, data)`` where ``data`` is None unless the
        answer was a 200 with a valid JSON body.
    """
    status_code, response_headers, text = robust_get(url, headers=headers, **kwargs)
    if status_code != 200 or not text:
        return status_code, response_headers, None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Response from %s is not valid JSON", safe_url(url))
        return status_code, response_headers, None
    _trace("Parsed JSON", event="parse", action="get_json", status_code=status_code, target=safe_url(url))
    return status_code, response_headers, data


def download_file(url: str, destination: str, *, context: str) -> bool:
    """Stream ``url`` into ``destination``, creating parent directories.

    The body goes to ``<destination>.part`` first and is moved into place once
    complete, so an interrupted download never leaves a truncated artifact.

    Returns:
        True on success, False when the server answered with a non-200 status.
    """
    res = safe_get(url, context=context, stream=True)
    with res:
        if res.status_code != 200:
            logger.error("%s download failed with HTTP %s: %s", context, res.status_code, safe_url(url))
            return False

        os.makedirs(os.path.dirname(destination), exist_ok=True)
        partial = destination + ".part"
        with Timer() as t:
            try:
                with open(partial, "wb") as fh:
                    for chunk in res.iter_content(chunk_size=Constants.DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            fh.write(chunk)
                os.replace(partial, destination)
            except BaseException:
                if os.path.exists(partial):
                    os.remove(partial)
                raise

    _trace("Download complete", event="download", action="download_file", duration_ms=t.duration_ms(),
           target=safe_url(url), loader=context)
    return True

"""Download the canonical Unity ignore template."""

from __future__ import annotations

import codecs
import urllib.error
import urllib.request

from .core import logger
from .errors import HTTPStatusError, NetworkError

UNITY_GITIGNORE_URL = "https://raw.githubusercontent.com/github/gitignore/master/Unity.gitignore"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "unity-git"


class _NoRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Surface 3xx responses as HTTPError instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def _open(req: urllib.request.Request, timeout: float):
    opener = urllib.request.build_opener(_NoRedirectHandler)
    return opener.open(req, timeout=timeout)


def fetch_template(url: str = UNITY_GITIGNORE_URL, timeout: float = DEFAULT_TIMEOUT) -> str:
    """GET *url* and return the body as text.

    Only status 200 counts as success.  Any other status raises
    :class:`HTTPStatusError`; connection, DNS and timeout failures,
    and URLs urllib cannot open, raise :class:`NetworkError`.
    Nothing is retried.
    """
    logger.debug(f"GET {url} (timeout {timeout}s)")
    try:
        req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        with _open(req, timeout) as resp:
            status = resp.status
            charset = resp.headers.get_content_charset() or "utf-8"
            body = resp.read()
    except urllib.error.HTTPError as exc:
        exc.close()
        raise HTTPStatusError(exc.code, url) from exc
    except urllib.error.URLError as exc:
        raise NetworkError(str(exc.reason)) from exc
    except OSError as exc:
        # Socket timeouts and resets raised mid-read are not wrapped in URLError.
        raise NetworkError(str(exc) or type(exc).__name__) from exc
    except ValueError as exc:
        # Malformed URL or unsupported scheme.
        raise NetworkError(str(exc)) from exc

    if status != 200:
        raise HTTPStatusError(status, url)

    try:
        codecs.lookup(charset)
    except LookupError:
        logger.debug(f"Unknown charset {charset!r} in response, decoding as utf-8")
        charset = "utf-8"
    return body.decode(charset, errors="replace")

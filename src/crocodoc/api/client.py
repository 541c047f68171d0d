"""A small client that wraps the Crocodoc API.

Example:
    from crocodoc import CrocodocAPI, CrocodocConfig

    api = CrocodocAPI(CrocodocConfig(token="<token>"))
    api.status_one("<uuid>")
    # => {"uuid": "<uuid>", "status": "DONE", "viewable": True}
"""

import json
import logging
import os
from typing import Callable, Iterable, Optional, Union
from urllib.parse import urlencode, urlparse

import requests

from ..config.schemas import CrocodocConfig
from .exceptions import (
    CrocodocError,
    CrocodocHTTPError,
    TransportError,
    UnsupportedOperationError,
)
from .types import (
    DocumentStatus,
    HttpMethod,
    Params,
    SessionResult,
    StatusList,
    UploadResult,
    coerce_params,
)

logger = logging.getLogger(__name__)


class CrocodocAPI:
    """Client for the Crocodoc document conversion API.

    Every endpoint method funnels through :meth:`api_call`, which adds the
    API token to the parameters, sends one request and raises
    :class:`CrocodocHTTPError` for any status other than 200.
    """

    def __init__(self, config: CrocodocConfig, http: Optional[requests.Session] = None):
        """Initialize a client.

        Args:
            config: Client configuration holding the API token
            http: Transport to send requests with (default: a new requests.Session)
        """
        self.config = config
        self.url = urlparse(config.base_url)
        self.http = http if http is not None else requests.Session()

        self._formatters: dict[HttpMethod, Callable[[str, dict[str, str]], requests.PreparedRequest]] = {
            HttpMethod.GET: self._format_get,
            HttpMethod.POST: self._format_post,
        }

    def close(self) -> None:
        """Release the underlying transport."""
        self.http.close()

    def __enter__(self) -> "CrocodocAPI":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- Documents --

    def upload(self, source) -> UploadResult:
        """Upload a document by URL. Uploading is asynchronous on the server.

            POST https://crocodoc.com/api/v2/document/upload

        Args:
            source: URL of the document to convert

        Returns:
            The parsed response, holding the document uuid and possibly an
            ``error`` explaining why the upload failed

        Raises:
            UnsupportedOperationError: If a file object, bytes or a filesystem
                path is given instead of a URL
        """
        if hasattr(source, "read") or isinstance(source, (bytes, bytearray, os.PathLike)):
            raise UnsupportedOperationError(
                "Uploading raw files is not supported, pass a URL instead",
                details={"source_type": type(source).__name__},
            )

        raw_body = self.api_call(HttpMethod.POST, "document/upload", {"url": str(source)})
        return self._parse_json(raw_body)

    def status_one(self, uuid: str) -> DocumentStatus:
        """Get the status of a single document.

            GET https://crocodoc.com/api/v2/document/status

        An unknown uuid is not raised: the returned entry carries an
        ``error`` field instead.

        Raises:
            CrocodocError: If the server returns no entry at all
        """
        entries = self._fetch_status([uuid])
        if not entries:
            raise CrocodocError(
                f"No status returned for document {uuid}", details={"uuid": uuid, "response": entries}
            )
        return entries[0]

    def status_many(self, uuids: Union[str, Iterable[str]]) -> StatusList:
        """Get the status of several documents in a single request.

        A plain string is treated as a single uuid.
        """
        if isinstance(uuids, str):
            uuids = [uuids]
        return self._fetch_status(list(uuids))

    def status(self, uuids: Union[str, Iterable[str]]) -> Union[DocumentStatus, StatusList]:
        """Get the status of one document or a set of documents.

        Args:
            uuids: A single uuid or a sequence of uuids

        Returns:
            A single status dict for a string argument, otherwise a list of them
        """
        if isinstance(uuids, str):
            return self.status_one(uuids)
        return self.status_many(uuids)

    def _fetch_status(self, uuids: list[str]) -> StatusList:
        raw_body = self.api_call(HttpMethod.GET, "document/status", {"uuids": ",".join(uuids)})
        return self._parse_json(raw_body)

    def delete(self, uuid: str) -> bool:
        """Delete a document.

            POST https://crocodoc.com/api/v2/document/delete

        Returns:
            True if the server confirmed the deletion
        """
        raw_body = self.api_call(HttpMethod.POST, "document/delete", {"uuid": uuid})
        return raw_body == "true"

    # -- Sessions --

    def session(self, uuid: str, opts: Optional[Params] = None) -> SessionResult:
        """Create a viewing session for a document.

        Sessions expire 60 minutes after they are created.

            POST https://crocodoc.com/api/v2/session/create

        Args:
            uuid: The uuid of the document
            opts: Session options, sent as given:
                - editable: allow annotations and comments (default: false)
                - user: user id and name joined with a comma, e.g. ``1337,Peter``;
                  required if editable is true
                - filter: whose annotations are shown: ``all``, ``none`` or a
                  comma-separated list of user ids (default: all)
                - admin: allow modifying other users' annotations (default: false)
                - downloadable: allow downloading the original (default: false)
                - copyprotected: prevent text selection (default: false)
                - demo: do not persist annotation changes (default: false)

        Returns:
            A dict with the ``session`` id
        """
        params = dict(opts or {})
        params["uuid"] = uuid
        raw_body = self.api_call(HttpMethod.POST, "session/create", params)
        return self._parse_json(raw_body)

    def view(self, session_id: str) -> str:
        """Return the viewer URL for a session (see :meth:`session`)."""
        return f"{self.config.view_url}/{session_id}"

    # -- Downloads --

    def download(self, uuid: str, opts: Optional[Params] = None) -> str:
        """Build the URL to download a document. No request is made.

            GET https://crocodoc.com/api/v2/download/document

        Args:
            uuid: The uuid of the document
            opts: Download options:
                - pdf: download the PDF version instead of the original
                - filename: filename for the Content-Disposition header
                - annotated: include annotations (the download will be a PDF)
                - filter: whose annotations are included, as for sessions
        """
        return self._download_url("download/document", uuid, opts)

    def thumbnail(self, uuid: str, opts: Optional[Params] = None) -> str:
        """Build the URL of a document thumbnail. No request is made.

            GET https://crocodoc.com/api/v2/download/thumbnail

        Args:
            uuid: The uuid of the document
            opts: Thumbnail options:
                - size: maximum dimensions as ``{width}x{height}``, at most
                  300x300 (default: 100x100)
        """
        return self._download_url("download/thumbnail", uuid, opts)

    def text(self, uuid: str) -> str:
        """Get the text of a document.

            GET https://crocodoc.com/api/v2/download/text

        Only available when text extraction is enabled for the account.

        Returns:
            The raw UTF-8 text, pages separated by a form feed (U+000C)
        """
        return self.api_call(HttpMethod.GET, "download/text", {"uuid": uuid})

    def _download_url(self, endpoint: str, uuid: str, opts: Optional[Params]) -> str:
        params = dict(opts or {})
        params[self.config.resolve_param_name()] = self.config.token
        params["uuid"] = uuid
        return f"{self.config.base_url}/{endpoint}?{urlencode(coerce_params(params))}"

    # -- API glue --

    def api_call(self, method: HttpMethod, endpoint: str, params: Optional[Params] = None) -> str:
        """Send one request to the API and return the raw response body.

        Args:
            method: The HTTP verb to use
            endpoint: The part after ``/api/v2/``, without a leading slash
            params: Query parameters (GET) or form fields (POST). The API
                token is added automatically.

        Returns:
            The response body as text

        Raises:
            CrocodocHTTPError: If the response status is not 200
            TransportError: If no response was received
        """
        merged = dict(params or {})
        merged[self.config.resolve_param_name()] = self.config.token

        path = f"{self.url.path}/{endpoint}"
        request = self._formatters[method](path, coerce_params(merged))
        logger.debug(f"{method.value} {path}")

        try:
            response = self.http.send(request, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise TransportError(
                f"Request to {path} failed: {e}",
                details={"method": method.value, "endpoint": endpoint},
            ) from e

        body = response.content.decode("utf-8", errors="replace")

        # 400 bad parameters, 401 bad token, 404 unknown method,
        # 405 wrong verb, 5xx server failure
        if response.status_code != 200:
            logger.warning(f"{method.value} {path} returned HTTP {response.status_code}")
            raise CrocodocHTTPError(
                response.status_code,
                body,
                details={"method": method.value, "endpoint": endpoint},
            )
        return body

    def _absolute_url(self, path: str) -> str:
        return f"{self.url.scheme}://{self.url.netloc}{path}"

    def _format_get(self, path: str, params: dict[str, str]) -> requests.PreparedRequest:
        """Build a GET request with the parameters in the query string."""
        url = f"{self._absolute_url(path)}?{urlencode(params)}"
        return requests.Request("GET", url).prepare()

    def _format_post(self, path: str, params: dict[str, str]) -> requests.PreparedRequest:
        """Build a POST request with form-encoded parameters."""
        return requests.Request("POST", self._absolute_url(path), data=params).prepare()

    @staticmethod
    def _parse_json(raw_body: str):
        try:
            return json.loads(raw_body)
        except ValueError as e:
            raise CrocodocError(
                "Response body is not valid JSON", details={"body": raw_body}
            ) from e

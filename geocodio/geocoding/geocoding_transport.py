"""
HTTP transport for the geocoding client.

Executes RequestDescriptions with a requests session against
https://{hostname}/{api_version}/{path}, returns parsed JSON (or streams
downloads to disk) and converts every requests failure into the client's
error types.
"""

from contextlib import ExitStack
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import requests

from ..config.logger_module import log_debug, log_error, log_info
from .geocoding_config import ClientConfiguration, timeout_seconds
from .geocoding_errors import RequestError, TransportError
from .geocoding_formatter import RequestDescription


SDK_VERSION = "2.6.0"
USER_AGENT = f"geocodio-library-python/{SDK_VERSION}"

# Downloads are written in chunks of this many bytes
DOWNLOAD_CHUNK_SIZE = 8192


class GeocodioTransport:
    """
    Sends requests to the Geocodio API.

    One request per call, no retries: failures are raised to the caller
    immediately as RequestError (the API answered with an error) or
    TransportError (no usable response).
    """

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize the transport.

        Args:
            session: requests session to use (a new one is created if None)
        """
        self._session = session or requests.Session()

    def build_url(self, description: RequestDescription, config: ClientConfiguration) -> str:
        """Return the absolute URL for a request, including any raw query string."""
        url = f"{config.base_url()}/{description.path}"
        if description.raw_query:
            url = f"{url}?{description.raw_query}"
        return url

    def build_headers(self,
                      config: ClientConfiguration,
                      headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Merge the default headers with caller-supplied ones.

        Caller values win on conflict.
        """
        merged = {
            "Authorization": f"Bearer {config.api_key}",
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
        merged.update(headers or {})
        return merged

    def send(self, description: RequestDescription, config: ClientConfiguration) -> Any:
        """
        Execute a request and return the decoded JSON body.

        Raises:
            RequestError: If the API answered with an HTTP error
            TransportError: On network failures, timeouts or a non-JSON body
        """
        response = self._execute(description, config)
        try:
            return response.json()
        except ValueError as e:
            log_error(f"Non-JSON response from {description.method} {description.path}: {e}")
            raise TransportError(
                f"Invalid JSON in response from {description.path}: {str(e)}", cause=e
            ) from e
        finally:
            response.close()

    def download(self,
                 description: RequestDescription,
                 config: ClientConfiguration,
                 destination: Union[str, Path]) -> Path:
        """
        Execute a request and stream the body into a file.

        The destination is overwritten. The file handle and the response
        are released even when the stream breaks partway through.

        Returns:
            Path of the written file

        Raises:
            RequestError: If the API answered with an HTTP error
            TransportError: On network failures or a broken stream
        """
        destination = Path(destination)
        response = self._execute(description, config, stream=True)

        written = 0
        try:
            with open(destination, "wb") as fh:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
                        written += len(chunk)
        except requests.exceptions.RequestException as e:
            log_error(f"Download of {description.path} interrupted: {e}")
            raise TransportError(str(e), cause=e) from e
        finally:
            response.close()

        log_info(f"Downloaded {written} bytes from {description.path} to {destination}")
        return destination

    def _execute(self,
                 description: RequestDescription,
                 config: ClientConfiguration,
                 stream: bool = False) -> requests.Response:
        """Issue the HTTP call and map failures to client errors."""
        url = self.build_url(description, config)

        log_debug(
            f"{description.method} {url} "
            f"(timeout={timeout_seconds(description.timeout_ms)}s)"
        )

        try:
            with ExitStack() as stack:
                files = self._build_files(description, stack)
                response = self._session.request(
                    description.method,
                    url,
                    params=description.query or None,
                    json=description.json,
                    files=files,
                    headers=self.build_headers(config, description.headers),
                    timeout=timeout_seconds(description.timeout_ms),
                    stream=stream or description.stream,
                )
            response.raise_for_status()
            return response

        except requests.exceptions.HTTPError as e:
            if e.response is None:
                log_error(f"HTTP error without response for {description.path}: {e}")
                raise TransportError(str(e), cause=e) from e

            error = self._parse_error(e.response)
            e.response.close()
            log_error(
                f"HTTP {e.response.status_code} from {description.method} "
                f"{description.path}: {error}"
            )
            raise RequestError(error, status_code=e.response.status_code, cause=e) from e

        except requests.exceptions.RequestException as e:
            log_error(f"Request to {description.path} failed: {e}")
            raise TransportError(str(e), cause=e) from e

    @staticmethod
    def _build_files(description: RequestDescription,
                     stack: ExitStack) -> Optional[List[Tuple[str, Tuple[Optional[str], Any]]]]:
        """Convert multipart parts to requests' files list, opening files on disk."""
        if not description.multipart:
            return None

        files = []
        for part in description.multipart:
            contents = part.contents
            if isinstance(contents, Path):
                contents = stack.enter_context(open(contents, "rb"))
            files.append((part.name, (part.filename, contents)))
        return files

    @staticmethod
    def _parse_error(response: requests.Response) -> str:
        """Extract the "error" message from an error response body."""
        try:
            body = response.json()
        except ValueError:
            return "unknown error"

        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return "unknown error"

"""
Geocodio API client.

The public surface of the package: forward and reverse geocoding,
distance calculations, asynchronous distance matrix jobs and list
management. Each call builds a RequestDescription, sends exactly one
HTTP request and returns the decoded response.
"""

from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import requests

from ..config.logger_module import log_info, log_warning
from .geocoding_config import ClientConfiguration
from .geocoding_enums import (
    DistanceMode,
    DistanceOrderBy,
    DistanceSortOrder,
    DistanceUnits,
    GeocodeDirection,
)
from .geocoding_errors import UploadFileNotFoundError
from .geocoding_formatter import (
    DistanceFilters,
    RequestDescription,
    build_distance_job_request,
    build_distance_matrix_request,
    build_distance_request,
    build_geocode_request,
    build_list_upload_request,
    build_resource_request,
    build_reverse_request,
)
from .geocoding_transport import GeocodioTransport


class Geocodio:
    """
    Client for the Geocodio API.

    Configuration is loaded once when the client is created, either from
    the arguments or from GEOCODIO_* environment variables, and can be
    adjusted afterwards with the chainable set_* methods:

        client = Geocodio().set_api_key("...").set_single_timeout_ms(2500)
        client.geocode("1109 N Highland St, Arlington VA")

    Each setter swaps in an updated copy of the configuration, so a
    configuration value handed out earlier never changes underneath
    its holder. Setters are meant to be called before issuing requests,
    not concurrently with them.
    """

    def __init__(self,
                 api_key: Optional[str] = None,
                 hostname: Optional[str] = None,
                 api_version: Optional[str] = None,
                 config: Optional[ClientConfiguration] = None,
                 transport: Optional[GeocodioTransport] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            api_key: Geocodio API key (overrides config / GEOCODIO_API_KEY)
            hostname: API hostname (overrides config / GEOCODIO_HOSTNAME)
            api_version: API version (overrides config / GEOCODIO_API_VERSION)
            config: Explicit configuration; read from the environment if None
            transport: Transport to send requests with
            session: requests session for the default transport
        """
        config = config or ClientConfiguration.from_env()

        overrides: Dict[str, Any] = {}
        if api_key is not None:
            overrides["api_key"] = api_key
        if hostname is not None:
            overrides["hostname"] = hostname
        if api_version is not None:
            overrides["api_version"] = api_version

        self.config = replace(config, **overrides) if overrides else config
        self._transport = transport or GeocodioTransport(session=session)

        log_info(
            f"Geocodio client initialized ({self.config.hostname}, {self.config.api_version})"
        )
        if not self.config.api_key:
            log_warning("No API key configured; set GEOCODIO_API_KEY or call set_api_key()")

    # ==================== CONFIGURATION ====================

    def _configure(self, **changes: Any) -> "Geocodio":
        self.config = replace(self.config, **changes)
        return self

    def set_api_key(self, api_key: str) -> "Geocodio":
        return self._configure(api_key=api_key)

    def set_hostname(self, hostname: str) -> "Geocodio":
        """Point the client at another host (Geocodio+HIPAA, on-premise)."""
        return self._configure(hostname=hostname)

    def set_api_version(self, api_version: str) -> "Geocodio":
        return self._configure(api_version=api_version)

    def api_version(self) -> str:
        return self.config.api_version

    def set_single_timeout_ms(self, timeout_ms: int) -> "Geocodio":
        return self._configure(single_timeout_ms=timeout_ms)

    def set_batch_timeout_ms(self, timeout_ms: int) -> "Geocodio":
        return self._configure(batch_timeout_ms=timeout_ms)

    def set_lists_timeout_ms(self, timeout_ms: int) -> "Geocodio":
        return self._configure(lists_timeout_ms=timeout_ms)

    def set_distance_timeout_ms(self, timeout_ms: int) -> "Geocodio":
        return self._configure(distance_timeout_ms=timeout_ms)

    def set_list_download_timeout_ms(self, timeout_ms: int) -> "Geocodio":
        return self._configure(list_download_timeout_ms=timeout_ms)

    # ==================== GEOCODING ====================

    def geocode(self,
                query: Union[str, Dict[str, Any], Sequence[Any]],
                fields: Optional[Sequence[str]] = None,
                limit: Optional[int] = None,
                response_format: Optional[str] = None,
                destinations: Optional[Sequence[Any]] = None,
                distance_mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                distance_units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                distance_max_results: Optional[int] = None,
                distance_max_distance: Optional[float] = None,
                distance_max_duration: Optional[int] = None,
                distance_min_distance: Optional[float] = None,
                distance_min_duration: Optional[int] = None,
                distance_order_by: Union[DistanceOrderBy, str] = DistanceOrderBy.DISTANCE,
                distance_sort_order: Union[DistanceSortOrder, str] = DistanceSortOrder.ASC) -> Any:
        """
        Forward geocode one address or a batch of addresses.

        Args:
            query: An address string, a mapping of address components
                   (street, city, state, postal_code, country), or a list
                   (or id-keyed mapping) of those for batch geocoding
            fields: Data fields to append (e.g. ["cd", "timezone"])
            limit: Maximum number of results per query
            response_format: Response format (e.g. "simple")
            destinations: Coordinates or addresses to measure distance to
            distance_mode: driving, straightline, or haversine (sent as straightline)
            distance_units: miles or kilometers
            distance_max_results .. distance_min_duration: Optional filters
            distance_order_by: Sort key, only sent when a filter is set
            distance_sort_order: Sort direction, only sent when a filter is set

        Returns:
            Decoded JSON response

        Raises:
            ValidationError: On malformed destinations or enum values
            RequestError: If the API rejects the request
            TransportError: On network failure or timeout
        """
        description = build_geocode_request(
            query,
            self.config,
            fields=fields,
            limit=limit,
            response_format=response_format,
            destinations=destinations,
            distance_mode=distance_mode,
            distance_units=distance_units,
            filters=DistanceFilters(
                max_results=distance_max_results,
                max_distance=distance_max_distance,
                max_duration=distance_max_duration,
                min_distance=distance_min_distance,
                min_duration=distance_min_duration,
                order_by=distance_order_by,
                sort_order=distance_sort_order,
            ),
        )
        return self._send(description)

    def reverse(self,
                query: Union[str, Sequence[Any], Dict[str, Any]],
                fields: Optional[Sequence[str]] = None,
                limit: Optional[int] = None,
                response_format: Optional[str] = None,
                destinations: Optional[Sequence[Any]] = None,
                distance_mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                distance_units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                distance_max_results: Optional[int] = None,
                distance_max_distance: Optional[float] = None,
                distance_max_duration: Optional[int] = None,
                distance_min_distance: Optional[float] = None,
                distance_min_duration: Optional[int] = None,
                distance_order_by: Union[DistanceOrderBy, str] = DistanceOrderBy.DISTANCE,
                distance_sort_order: Union[DistanceSortOrder, str] = DistanceSortOrder.ASC) -> Any:
        """
        Reverse geocode one coordinate or a batch of coordinates.

        Args:
            query: "lat,lng", [lat, lng], a Coordinate, or a list of those
                   for batch reverse geocoding

        The remaining arguments behave as in geocode().
        """
        description = build_reverse_request(
            query,
            self.config,
            fields=fields,
            limit=limit,
            response_format=response_format,
            destinations=destinations,
            distance_mode=distance_mode,
            distance_units=distance_units,
            filters=DistanceFilters(
                max_results=distance_max_results,
                max_distance=distance_max_distance,
                max_duration=distance_max_duration,
                min_distance=distance_min_distance,
                min_duration=distance_min_duration,
                order_by=distance_order_by,
                sort_order=distance_sort_order,
            ),
        )
        return self._send(description)

    # ==================== DISTANCE ====================

    def distance(self,
                 origin: Any,
                 destinations: Sequence[Any],
                 mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                 units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                 max_results: Optional[int] = None,
                 max_distance: Optional[float] = None,
                 max_duration: Optional[int] = None,
                 min_distance: Optional[float] = None,
                 min_duration: Optional[int] = None,
                 order_by: Union[DistanceOrderBy, str] = DistanceOrderBy.DISTANCE,
                 sort_order: Union[DistanceSortOrder, str] = DistanceSortOrder.ASC) -> Any:
        """
        Calculate distances from one origin to many destinations.

        Args:
            origin: Coordinate, "lat,lng[,id]", [lat, lng[, id]] or an address
            destinations: Locations in any of the origin's forms
            mode: driving, straightline, or haversine (sent as straightline)
            units: miles or kilometers
            max_results .. min_duration: Optional filters
            order_by: Sort key, only sent when a filter is set
            sort_order: Sort direction, only sent when a filter is set
        """
        description = build_distance_request(
            origin,
            destinations,
            self.config.distance_timeout_ms,
            mode=mode,
            units=units,
            filters=DistanceFilters(
                max_results, max_distance, max_duration, min_distance, min_duration,
                order_by, sort_order,
            ),
        )
        return self._send(description)

    def distance_matrix(self,
                        origins: Sequence[Any],
                        destinations: Sequence[Any],
                        mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                        units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                        max_results: Optional[int] = None,
                        max_distance: Optional[float] = None,
                        max_duration: Optional[int] = None,
                        min_distance: Optional[float] = None,
                        min_duration: Optional[int] = None,
                        order_by: Union[DistanceOrderBy, str] = DistanceOrderBy.DISTANCE,
                        sort_order: Union[DistanceSortOrder, str] = DistanceSortOrder.ASC) -> Any:
        """Calculate a distance matrix between every origin and destination."""
        description = build_distance_matrix_request(
            origins,
            destinations,
            self.config.distance_timeout_ms,
            mode=mode,
            units=units,
            filters=DistanceFilters(
                max_results, max_distance, max_duration, min_distance, min_duration,
                order_by, sort_order,
            ),
        )
        return self._send(description)

    def create_distance_matrix_job(self,
                                   name: str,
                                   origins: Union[int, Sequence[Any]],
                                   destinations: Union[int, Sequence[Any]],
                                   mode: Union[DistanceMode, str] = DistanceMode.STRAIGHTLINE,
                                   units: Union[DistanceUnits, str] = DistanceUnits.MILES,
                                   max_results: Optional[int] = None,
                                   max_distance: Optional[float] = None,
                                   max_duration: Optional[int] = None,
                                   min_distance: Optional[float] = None,
                                   min_duration: Optional[int] = None,
                                   order_by: Union[DistanceOrderBy, str] = DistanceOrderBy.DISTANCE,
                                   sort_order: Union[DistanceSortOrder, str] = DistanceSortOrder.ASC,
                                   callback_url: Optional[str] = None) -> Any:
        """
        Create an asynchronous distance matrix job.

        Args:
            name: Job name
            origins: Uploaded list id, or a sequence of locations
            destinations: Uploaded list id, or a sequence of locations
            callback_url: Optional webhook called when the job completes

        The remaining arguments behave as in distance_matrix().
        """
        description = build_distance_job_request(
            name,
            origins,
            destinations,
            self.config.lists_timeout_ms,
            mode=mode,
            units=units,
            filters=DistanceFilters(
                max_results, max_distance, max_duration, min_distance, min_duration,
                order_by, sort_order,
            ),
            callback_url=callback_url,
        )
        return self._send(description)

    def distance_matrix_job_status(self, identifier: Union[str, int]) -> Any:
        return self._send(build_resource_request(
            "GET", f"distance-jobs/{identifier}", self.config.lists_timeout_ms
        ))

    def distance_matrix_jobs(self, page: Optional[int] = None) -> Any:
        """List distance matrix jobs, optionally a specific page."""
        query = {"page": page} if page is not None else None
        return self._send(build_resource_request(
            "GET", "distance-jobs", self.config.lists_timeout_ms, query=query
        ))

    def download_distance_matrix_job(self,
                                     identifier: Union[str, int],
                                     file_path: Union[str, Path]) -> Path:
        """Stream the results of a completed job into file_path (overwritten)."""
        description = build_resource_request(
            "GET",
            f"distance-jobs/{identifier}/download",
            self.config.lists_timeout_ms,
            stream=True,
        )
        return self._transport.download(description, self.config, file_path)

    def get_distance_matrix_job_results(self, identifier: Union[str, int]) -> Any:
        """Return the results of a completed job, in the distance_matrix format."""
        return self._send(build_resource_request(
            "GET", f"distance-jobs/{identifier}/download", self.config.lists_timeout_ms
        ))

    def delete_distance_matrix_job(self, identifier: Union[str, int]) -> Any:
        return self._send(build_resource_request(
            "DELETE", f"distance-jobs/{identifier}", self.config.lists_timeout_ms
        ))

    # ==================== LISTS ====================

    def upload_list(self,
                    file: Union[str, Path],
                    direction: Union[GeocodeDirection, str],
                    format_template: str,
                    callback_url: Optional[str] = None,
                    fields: Optional[Sequence[str]] = None) -> Any:
        """
        Upload a spreadsheet from disk for asynchronous geocoding.

        Args:
            file: Path of the CSV/spreadsheet to upload
            direction: forward or reverse
            format_template: Column template, e.g. "{{B}} {{C}} {{D}} {{E}}"
            callback_url: Optional webhook called when processing completes
            fields: Optional data fields to append

        Raises:
            UploadFileNotFoundError: If the file does not exist (no request is sent)
        """
        path = Path(file)
        if not path.is_file():
            raise UploadFileNotFoundError(str(file))

        description = build_list_upload_request(
            path,
            direction,
            format_template,
            self.config.lists_timeout_ms,
            callback_url=callback_url,
            fields=fields,
        )
        return self._send(description)

    def upload_inline_list(self,
                           data: Union[str, bytes],
                           filename: str,
                           direction: Union[GeocodeDirection, str],
                           format_template: str,
                           callback_url: Optional[str] = None,
                           fields: Optional[Sequence[str]] = None) -> Any:
        """Upload spreadsheet contents held in memory under the given filename."""
        description = build_list_upload_request(
            data,
            direction,
            format_template,
            self.config.lists_timeout_ms,
            callback_url=callback_url,
            fields=fields,
            filename=filename,
        )
        return self._send(description)

    def list_status(self, list_id: int) -> Any:
        return self._send(build_resource_request(
            "GET", f"lists/{list_id}", self.config.lists_timeout_ms
        ))

    def lists(self) -> Any:
        return self._send(build_resource_request(
            "GET", "lists", self.config.lists_timeout_ms
        ))

    def download_list(self, list_id: int, file_path: Union[str, Path]) -> Path:
        """Stream a processed list into file_path (overwritten)."""
        description = build_resource_request(
            "GET",
            f"lists/{list_id}/download",
            self.config.list_download_timeout_ms,
            stream=True,
        )
        return self._transport.download(description, self.config, file_path)

    def delete_list(self, list_id: int) -> Any:
        return self._send(build_resource_request(
            "DELETE", f"lists/{list_id}", self.config.lists_timeout_ms
        ))

    def _send(self, description: RequestDescription) -> Any:
        return self._transport.send(description, self.config)

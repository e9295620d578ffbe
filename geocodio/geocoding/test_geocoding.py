"""
Test suite for coordinates, enums and request formatting.

Everything here is pure: no session, no network. Transport and client
behaviour is covered in test_client.py.

To run tests:
- Command line: python -m pytest geocodio/geocoding/test_geocoding.py -v
"""

from dataclasses import FrozenInstanceError

import pytest

from geocodio.geocoding.geocoding_config import ClientConfiguration
from geocodio.geocoding.geocoding_coordinate import Coordinate, looks_like_coordinate
from geocodio.geocoding.geocoding_enums import (
    DistanceMode,
    DistanceOrderBy,
    DistanceSortOrder,
    DistanceUnits,
    GeocodeDirection,
    coerce_enum,
)
from geocodio.geocoding.geocoding_errors import (
    GeocodioError,
    RequestError,
    TransportError,
    UploadFileNotFoundError,
    ValidationError,
)
from geocodio.geocoding.geocoding_formatter import (
    Address,
    BatchQuery,
    Components,
    DistanceFilters,
    build_distance_job_request,
    build_distance_matrix_request,
    build_distance_request,
    build_geocode_request,
    build_list_upload_request,
    build_query_string,
    build_resource_request,
    build_reverse_request,
    classify_geocode_query,
    classify_location,
    format_location_as_object,
    format_location_as_string,
    format_reverse_query,
    is_single_query,
    is_single_reverse_query,
    normalize_distance_mode,
)


# ==================== FIXTURES ====================

@pytest.fixture
def config():
    """Configuration with an API key and default budgets."""
    return ClientConfiguration(api_key="test-key")


# ==================== TEST CLASSES ====================

class TestErrors:
    """Test the error hierarchy."""

    def test_all_errors_share_a_base(self):
        """Every client error is a GeocodioError."""
        for error in (
            ValidationError("bad"),
            RequestError("bad"),
            TransportError("bad"),
            UploadFileNotFoundError("/tmp/missing.csv"),
        ):
            assert isinstance(error, GeocodioError)

    def test_upload_file_not_found_is_file_not_found(self):
        """Missing upload files can be caught as FileNotFoundError."""
        error = UploadFileNotFoundError("/tmp/missing.csv")
        assert isinstance(error, FileNotFoundError)
        assert str(error) == "File (/tmp/missing.csv) not found"
        assert error.path == "/tmp/missing.csv"

    def test_request_error_keeps_message_and_cause(self):
        """RequestError surfaces the server message verbatim."""
        cause = RuntimeError("HTTP 422")
        error = RequestError("Could not geocode address", status_code=422, cause=cause)
        assert str(error) == "Could not geocode address"
        assert error.message == "Could not geocode address"
        assert error.status_code == 422
        assert error.cause is cause


class TestCoordinate:
    """Test the Coordinate value object."""

    @pytest.mark.parametrize("text", [
        "37.7749,-122.4194",
        "38.8977,-77.0365",
        "-33.8688,151.2093",
        "0,0",
        "90,-180",
        "0.00001,-77.0365",
        "-0.000123,0.5",
    ])
    def test_string_round_trip(self, text):
        """from_string(s).to_query_string() == s for canonical strings."""
        assert Coordinate.from_string(text).to_query_string() == text

    def test_string_round_trip_with_id(self):
        """Identifiers survive the round trip."""
        text = "37.7849,-122.4094,dest1"
        coordinate = Coordinate.from_string(text)
        assert coordinate.id == "dest1"
        assert coordinate.to_query_string() == text
        assert str(coordinate) == text

    def test_from_string_trims_whitespace(self):
        """Spaces around parts are ignored."""
        coordinate = Coordinate.from_string(" 38.9 , -77.04 , home ")
        assert coordinate == Coordinate(38.9, -77.04, "home")

    def test_sequence_and_string_agree(self):
        """[lat, lng] and "lat,lng" build the same coordinate."""
        from_list = Coordinate.from_value([37.7749, -122.4194])
        from_text = Coordinate.from_value("37.7749,-122.4194")
        assert from_list.lat == from_text.lat
        assert from_list.lng == from_text.lng

    def test_from_value_returns_coordinate_unchanged(self):
        """A Coordinate passes through from_value."""
        coordinate = Coordinate(1.5, 2.5)
        assert Coordinate.from_value(coordinate) is coordinate

    def test_from_value_rejects_unknown_types(self):
        """Unsupported input types fail with ValidationError."""
        with pytest.raises(ValidationError):
            Coordinate.from_value(42)

    def test_out_of_range_latitude(self):
        """Latitude above 90 is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Coordinate(91, 0)
        assert "Latitude" in str(exc_info.value)

    def test_out_of_range_longitude(self):
        """Longitude above 180 is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Coordinate(0, 181)
        assert "Longitude" in str(exc_info.value)

    def test_from_string_needs_two_parts(self):
        """A single value is not a coordinate."""
        with pytest.raises(ValidationError) as exc_info:
            Coordinate.from_string("38.9")
        assert "Expected 'lat,lng'" in str(exc_info.value)

    def test_from_string_needs_numbers(self):
        """Non-numeric lat/lng are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Coordinate.from_string("north,west")
        assert "must be numeric" in str(exc_info.value)

    def test_from_string_range_checked(self):
        """Parsed values still go through range validation."""
        with pytest.raises(ValidationError):
            Coordinate.from_string("120,10")

    def test_from_sequence_coerces_numeric_id(self):
        """Numeric identifiers become strings."""
        assert Coordinate.from_sequence([38.9, -77.04, 42]).id == "42"

    def test_from_sequence_accepts_numeric_strings(self):
        """Numeric strings count as numbers."""
        assert Coordinate.from_sequence(["38.9", "-77.04"]) == Coordinate(38.9, -77.04)

    def test_from_sequence_rejects_bad_values(self):
        """Short sequences, booleans and odd ids are rejected."""
        with pytest.raises(ValidationError):
            Coordinate.from_sequence([38.9])
        with pytest.raises(ValidationError):
            Coordinate.from_sequence([True, -77.04])
        with pytest.raises(ValidationError):
            Coordinate.from_sequence([38.9, -77.04, {"id": 1}])

    def test_to_object(self):
        """The object form omits the id when absent."""
        assert Coordinate(38.9, -77.04).to_object() == {"lat": 38.9, "lng": -77.04}
        assert Coordinate(38.9, -77.04, "a").to_object() == {"lat": 38.9, "lng": -77.04, "id": "a"}

    def test_id_with_commas(self):
        """Everything after the second comma belongs to the id."""
        coordinate = Coordinate.from_string("37.7849,-122.4094,store,7")
        assert coordinate.id == "store,7"
        assert coordinate.to_query_string() == "37.7849,-122.4094,store,7"

    def test_small_values_render_without_exponent(self):
        """Floats never go out in scientific notation."""
        assert Coordinate(1e-05, -1e-07).to_query_string() == "0.00001,-0.0000001"

    @pytest.mark.parametrize("lat, lng", [
        ("a", 1),
        ("38.9", -77.04),
        (1, None),
        (True, 0),
        (float("nan"), 0),
        (0, float("inf")),
    ])
    def test_non_numeric_values_rejected(self, lat, lng):
        """Direct construction with non-numbers fails with ValidationError."""
        with pytest.raises(ValidationError):
            Coordinate(lat, lng)

    def test_integral_values_render_without_decimals(self):
        """38.0 renders as "38"."""
        assert Coordinate(38.0, -77.0).to_query_string() == "38,-77"

    def test_is_frozen(self):
        """Coordinates are immutable."""
        coordinate = Coordinate(38.9, -77.04)
        with pytest.raises(FrozenInstanceError):
            coordinate.lat = 40.0

    @pytest.mark.parametrize("text, expected", [
        ("38.9,-77.04", True),
        ("38.9,-77.04,office", True),
        (" 38.9 , -77.04 ", True),
        ("1109 N Highland St, Arlington VA", False),
        ("Arlington, 22201", False),
        ("95,10", False),
        ("10,200", False),
        ("1_0,20", False),
        ("nan,10", False),
        ("10,inf", False),
        ("38.9", False),
    ])
    def test_looks_like_coordinate(self, text, expected):
        """Only numeric, in-range pairs look like coordinates."""
        assert looks_like_coordinate(text) is expected


class TestEnums:
    """Test enum coercion."""

    def test_values(self):
        """Enum values match the API's strings."""
        assert DistanceMode.STRAIGHTLINE.value == "straightline"
        assert DistanceUnits.KILOMETERS.value == "kilometers"
        assert DistanceOrderBy.DURATION.value == "duration"
        assert DistanceSortOrder.DESC.value == "desc"
        assert GeocodeDirection.REVERSE.value == "reverse"

    def test_coerce_accepts_members_and_strings(self):
        """Members and (case-insensitive) strings both resolve."""
        assert coerce_enum(DistanceMode, DistanceMode.DRIVING) is DistanceMode.DRIVING
        assert coerce_enum(DistanceMode, "Driving") is DistanceMode.DRIVING
        assert coerce_enum(DistanceSortOrder, "DESC") is DistanceSortOrder.DESC

    def test_km_alias(self):
        """"km" is accepted for kilometers."""
        assert coerce_enum(DistanceUnits, "km") is DistanceUnits.KILOMETERS

    def test_unknown_value(self):
        """Unknown values fail with ValidationError listing the choices."""
        with pytest.raises(ValidationError) as exc_info:
            coerce_enum(DistanceUnits, "furlongs")
        assert "miles, kilometers" in str(exc_info.value)

    def test_haversine_normalized(self):
        """The haversine alias is sent as straightline."""
        assert normalize_distance_mode("haversine") == "straightline"
        assert normalize_distance_mode(DistanceMode.HAVERSINE) == "straightline"
        assert normalize_distance_mode("driving") == "driving"


class TestQueryClassification:
    """Test the single-vs-batch decision and location classification."""

    def test_component_mapping_is_single(self):
        """A mapping with address components is one query."""
        assert is_single_query({"street": "1109 N Highland St", "postal_code": "22201"}) is True

    def test_large_component_mapping_is_single(self):
        """Extra keys do not turn a component query into a batch."""
        query = {"city": "Arlington", **{f"extra_{i}": i for i in range(50)}}
        assert is_single_query(query) is True

    def test_list_is_batch(self):
        assert is_single_query(["addr1", "addr2"]) is False

    def test_string_is_single(self):
        assert is_single_query("addr1") is True

    def test_keyed_mapping_is_batch(self):
        """A mapping without component keys is an id-keyed batch."""
        assert is_single_query({"1": "addr1", "2": "addr2"}) is False

    def test_classify_geocode_query(self):
        """Queries classify into tagged variants."""
        assert classify_geocode_query("addr") == Address("addr")
        assert classify_geocode_query({"city": "Arlington"}) == Components({"city": "Arlington"})
        assert classify_geocode_query(("a", "b")) == BatchQuery(["a", "b"])

    def test_classify_geocode_query_rejects_bad_input(self):
        """Empty batches and unsupported types fail fast."""
        with pytest.raises(ValidationError):
            classify_geocode_query([])
        with pytest.raises(ValidationError):
            classify_geocode_query(12345)

    def test_reverse_single_and_batch(self):
        """A numeric pair is one reverse query; a list of pairs is a batch."""
        assert is_single_reverse_query("38.9,-77.04") is True
        assert is_single_reverse_query([38.9, -77.04]) is True
        assert is_single_reverse_query(Coordinate(38.9, -77.04)) is True
        assert is_single_reverse_query([[38.9, -77.04], [40.7, -74.01]]) is False
        assert is_single_reverse_query(["38.9,-77.04", "40.7,-74.01"]) is False

    def test_format_reverse_query(self):
        """Numeric pairs are joined; other values pass through."""
        assert format_reverse_query([38.9, -77.04]) == "38.9,-77.04"
        assert format_reverse_query(Coordinate(38.9, -77.04, "x")) == "38.9,-77.04,x"
        assert format_reverse_query("38.9,-77.04") == "38.9,-77.04"
        assert format_reverse_query(["north", "west"]) == ["north", "west"]

    def test_classify_location(self):
        """Coordinate-looking strings become Coordinates, others Addresses."""
        assert classify_location("38.9,-77.04,a") == Coordinate(38.9, -77.04, "a")
        assert classify_location("Arlington, VA") == Address("Arlington, VA")
        assert classify_location([38.9, -77.04]) == Coordinate(38.9, -77.04)

    def test_classify_location_rejects_bad_input(self):
        with pytest.raises(ValidationError):
            classify_location([91, 0])
        with pytest.raises(ValidationError):
            classify_location(None)

    def test_coordinate_strings_pass_through(self):
        """Coordinate strings are validated but never rewritten."""
        assert format_location_as_string("40.7128000,-74.0060000") == "40.7128000,-74.0060000"
        assert format_location_as_string("0.00001,-77.0365") == "0.00001,-77.0365"
        assert format_location_as_string("37.7849,-122.4094,store,7") == "37.7849,-122.4094,store,7"
        with pytest.raises(ValidationError):
            format_location_as_string([91, 0])

    def test_location_formats(self):
        """Locations render as strings for queries and objects for bodies."""
        assert format_location_as_string([38.9, -77.04, 7]) == "38.9,-77.04,7"
        assert format_location_as_string("Arlington, VA") == "Arlington, VA"
        assert format_location_as_object("38.9,-77.04") == {"lat": 38.9, "lng": -77.04}
        assert format_location_as_object("Arlington, VA") == "Arlington, VA"


class TestDistanceFilters:
    """Test conditional filter and sort parameters."""

    def test_inactive_filters_emit_nothing(self):
        """Sort parameters are omitted without a filter."""
        filters = DistanceFilters(order_by="duration", sort_order="desc")
        assert filters.is_active() is False
        assert filters.to_params() == []

    @pytest.mark.parametrize("field_name", [
        "max_results", "max_distance", "max_duration", "min_distance", "min_duration",
    ])
    def test_any_filter_activates_sorting(self, field_name):
        """Each filter on its own brings order_by and sort_order along."""
        filters = DistanceFilters(**{field_name: 5})
        assert filters.to_params() == [
            (field_name, 5),
            ("order_by", "distance"),
            ("sort_order", "asc"),
        ]

    def test_prefix(self):
        """geocode/reverse parameters use the distance_ prefix."""
        filters = DistanceFilters(max_results=3, sort_order=DistanceSortOrder.DESC)
        assert dict(filters.to_params(prefix="distance_")) == {
            "distance_max_results": 3,
            "distance_order_by": "distance",
            "distance_sort_order": "desc",
        }


class TestQueryString:
    """Test the hand-built query string."""

    def test_raw_keys_keep_commas(self):
        """destinations[] stays literal and keeps its commas."""
        query = build_query_string([
            ("origin", "37.7749,-122.4194"),
            ("destinations[]", "37.7849,-122.4094,dest1"),
            ("destinations[]", "37.7949,-122.3994,dest2"),
        ])
        assert query == (
            "origin=37.7749%2C-122.4194"
            "&destinations[]=37.7849,-122.4094,dest1"
            "&destinations[]=37.7949,-122.3994,dest2"
        )

    def test_raw_values_still_encoded(self):
        """Other characters in raw values are form encoded."""
        query = build_query_string([("destinations[]", "1600 Pennsylvania Ave, DC&co")])
        assert query == "destinations[]=1600+Pennsylvania+Ave,+DC%26co"

    def test_none_values_skipped(self):
        assert build_query_string([("a", "x y"), ("b", None), ("c", 2)]) == "a=x+y&c=2"


class TestGeocodeRequests:
    """Test forward and reverse geocoding request construction."""

    def test_single_address(self, config):
        """A string is sent as GET geocode?q=..."""
        request = build_geocode_request("1109 N Highland St, Arlington VA", config)
        assert request.method == "GET"
        assert request.path == "geocode"
        assert request.query == {"q": "1109 N Highland St, Arlington VA"}
        assert request.json is None
        assert request.timeout_ms == config.single_timeout_ms

    def test_component_query(self, config):
        """Components become individual query parameters."""
        request = build_geocode_request(
            {"street": "1109 N Highland St", "postal_code": "22201"},
            config,
            fields=["cd", "timezone"],
            limit=1,
        )
        assert request.method == "GET"
        assert request.query == {
            "street": "1109 N Highland St",
            "postal_code": "22201",
            "fields": "cd,timezone",
            "limit": 1,
        }

    def test_batch(self, config):
        """A list is sent as POST geocode with a JSON array."""
        request = build_geocode_request(["addr1", {"city": "Arlington"}], config)
        assert request.method == "POST"
        assert request.json == ["addr1", {"city": "Arlington"}]
        assert request.query == {}
        assert request.timeout_ms == config.batch_timeout_ms

    def test_keyed_batch(self, config):
        """An id-keyed mapping is sent as a JSON object."""
        request = build_geocode_request({"home": "addr1", "work": "addr2"}, config)
        assert request.method == "POST"
        assert request.json == {"home": "addr1", "work": "addr2"}

    def test_destinations(self, config):
        """Destinations add distance parameters, haversine sent as straightline."""
        request = build_geocode_request(
            "addr",
            config,
            destinations=["38.9,-77.04,dest1", [40.7, -74.01], "Arlington, VA"],
            distance_mode="haversine",
            distance_units="km",
        )
        assert request.query["destinations[]"] == [
            "38.9,-77.04,dest1",
            "40.7,-74.01",
            "Arlington, VA",
        ]
        assert request.query["distance_mode"] == "straightline"
        assert request.query["distance_units"] == "kilometers"
        assert "distance_order_by" not in request.query
        assert "distance_sort_order" not in request.query

    def test_destinations_with_filter(self, config):
        """A filter brings the distance sort parameters."""
        request = build_geocode_request(
            "addr",
            config,
            destinations=["38.9,-77.04"],
            filters=DistanceFilters(max_distance=10.5, order_by="duration"),
        )
        assert request.query["distance_max_distance"] == 10.5
        assert request.query["distance_order_by"] == "duration"
        assert request.query["distance_sort_order"] == "asc"

    def test_no_destinations_no_distance_params(self, config):
        """Distance parameters need destinations."""
        request = build_geocode_request("addr", config, filters=DistanceFilters(max_results=1))
        assert request.query == {"q": "addr"}

    def test_invalid_destination_fails_fast(self, config):
        with pytest.raises(ValidationError):
            build_geocode_request("addr", config, destinations=[[91, 0]])

    def test_reverse_single(self, config):
        """A numeric pair is sent as GET reverse?q=lat,lng."""
        request = build_reverse_request([38.9, -77.04], config, fields=["timezone"])
        assert request.method == "GET"
        assert request.path == "reverse"
        assert request.query == {"q": "38.9,-77.04", "fields": "timezone"}
        assert request.timeout_ms == config.single_timeout_ms

    def test_reverse_batch(self, config):
        """Each batch element is normalized."""
        request = build_reverse_request(
            [[38.9, -77.04], "40.7,-74.01", Coordinate(35.5, -80.25)], config
        )
        assert request.method == "POST"
        assert request.json == ["38.9,-77.04", "40.7,-74.01", "35.5,-80.25"]
        assert "q" not in request.query
        assert request.timeout_ms == config.batch_timeout_ms

    def test_reverse_with_destinations(self, config):
        request = build_reverse_request(
            "38.9,-77.04",
            config,
            destinations=[Coordinate(38.95, -77.1)],
            distance_mode=DistanceMode.DRIVING,
            filters=DistanceFilters(min_duration=60),
        )
        assert request.query["destinations[]"] == ["38.95,-77.1"]
        assert request.query["distance_mode"] == "driving"
        assert request.query["distance_min_duration"] == 60
        assert request.query["distance_order_by"] == "distance"


class TestDistanceRequests:
    """Test distance, matrix and job request construction."""

    def test_distance_query_string(self):
        """GET distance uses repeated destinations[] keys with literal commas."""
        request = build_distance_request(
            "37.7749,-122.4194",
            ["37.7849,-122.4094,dest1"],
            10000,
        )
        assert request.method == "GET"
        assert request.path == "distance"
        assert request.query == {}
        assert "destinations[]=37.7849,-122.4094,dest1" in request.raw_query
        assert "destinations%5B0%5D" not in request.raw_query
        assert request.raw_query == (
            "origin=37.7749%2C-122.4194&mode=straightline&units=miles"
            "&destinations[]=37.7849,-122.4094,dest1"
        )

    def test_distance_haversine_and_filters(self):
        """haversine becomes straightline; filters bring sort parameters."""
        request = build_distance_request(
            [37.7749, -122.4194],
            [[37.7849, -122.4094], [37.7949, -122.3994]],
            10000,
            mode="haversine",
            units=DistanceUnits.KILOMETERS,
            filters=DistanceFilters(max_results=1, sort_order="desc"),
        )
        assert request.raw_query == (
            "origin=37.7749%2C-122.4194&mode=straightline&units=kilometers"
            "&max_results=1&order_by=distance&sort_order=desc"
            "&destinations[]=37.7849,-122.4094"
            "&destinations[]=37.7949,-122.3994"
        )

    def test_distance_keeps_caller_strings(self):
        """Destination strings reach the query string unchanged."""
        request = build_distance_request(
            "38.8977,-77.0365",
            ["0.00001,-77.0365", "37.7849,-122.4094,store,7"],
            10000,
        )
        assert request.raw_query.endswith(
            "&destinations[]=0.00001,-77.0365"
            "&destinations[]=37.7849,-122.4094,store,7"
        )

    def test_distance_without_filters_has_no_sorting(self):
        request = build_distance_request("37.7749,-122.4194", ["37.7849,-122.4094"], 10000)
        assert "order_by" not in request.raw_query
        assert "sort_order" not in request.raw_query

    def test_distance_matrix_payload(self):
        """Coordinates become objects, addresses stay strings."""
        request = build_distance_matrix_request(
            ["37.7749,-122.4194,o1", "San Francisco, CA"],
            [[37.7849, -122.4094, "d1"]],
            10000,
            mode="haversine",
        )
        assert request.method == "POST"
        assert request.path == "distance-matrix"
        assert request.json == {
            "origins": [{"lat": 37.7749, "lng": -122.4194, "id": "o1"}, "San Francisco, CA"],
            "destinations": [{"lat": 37.7849, "lng": -122.4094, "id": "d1"}],
            "mode": "straightline",
            "units": "miles",
        }

    def test_distance_matrix_with_filters(self):
        request = build_distance_matrix_request(
            ["37.7749,-122.4194"],
            ["37.7849,-122.4094"],
            10000,
            filters=DistanceFilters(min_distance=1.0, max_distance=5.0),
        )
        assert request.json["min_distance"] == 1.0
        assert request.json["max_distance"] == 5.0
        assert request.json["order_by"] == "distance"
        assert request.json["sort_order"] == "asc"

    def test_distance_matrix_rejects_list_ids(self):
        with pytest.raises(ValidationError):
            build_distance_matrix_request(123, ["37.7849,-122.4094"], 10000)

    def test_distance_job_with_list_ids(self):
        """Jobs pass list ids through unchanged."""
        request = build_distance_job_request(
            "Stores to customers",
            11,
            [Coordinate(37.7849, -122.4094)],
            60000,
            callback_url="https://example.com/hook",
        )
        assert request.path == "distance-jobs"
        assert request.json == {
            "name": "Stores to customers",
            "origins": 11,
            "destinations": [{"lat": 37.7849, "lng": -122.4094}],
            "mode": "straightline",
            "units": "miles",
            "callback": "https://example.com/hook",
        }
        assert request.timeout_ms == 60000

    def test_distance_job_without_callback(self):
        request = build_distance_job_request("job", 1, 2, 60000)
        assert "callback" not in request.json


class TestListRequests:
    """Test list upload and resource request construction."""

    def test_upload_from_path(self, tmp_path):
        """The filename defaults to the source's base name; empty parts are dropped."""
        source = tmp_path / "simple.csv"
        source.write_text("address\n1109 N Highland St\n")

        request = build_list_upload_request(
            source, GeocodeDirection.FORWARD, "{{A}}", 60000
        )
        assert request.method == "POST"
        assert request.path == "lists"
        assert [part.name for part in request.multipart] == ["file", "direction", "format"]
        assert request.multipart[0].contents == source
        assert request.multipart[0].filename == "simple.csv"
        assert request.multipart[1].contents == "forward"

    def test_upload_inline_with_options(self):
        """Inline data keeps its filename; fields and callback are included when set."""
        request = build_list_upload_request(
            "name,lat,lng\nOffice,38.9,-77.04\n",
            "reverse",
            "{{B}},{{C}}",
            60000,
            callback_url="https://example.com/hook",
            fields=["cd", "timezone"],
            filename="offices.csv",
        )
        parts = {part.name: part for part in request.multipart}
        assert parts["file"].filename == "offices.csv"
        assert parts["direction"].contents == "reverse"
        assert parts["fields"].contents == "cd,timezone"
        assert parts["callback"].contents == "https://example.com/hook"

    def test_upload_inline_requires_filename(self):
        with pytest.raises(ValidationError):
            build_list_upload_request("a,b\n", "forward", "{{A}}", 60000)

    def test_upload_rejects_unknown_direction(self):
        with pytest.raises(ValidationError):
            build_list_upload_request("a,b\n", "sideways", "{{A}}", 60000, filename="a.csv")

    def test_resource_request(self):
        request = build_resource_request("GET", "lists/42/download", 1800000, stream=True)
        assert request.method == "GET"
        assert request.path == "lists/42/download"
        assert request.stream is True
        assert request.query == {}

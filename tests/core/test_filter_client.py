import asyncio

import pytest

from core.domain.models import FilterOptions, HttpMethod
from core.domain.share_scope import ShareScope
from core.errors import FilterRequestError, JiraRequestError
from core.services.filter_client import (
    COLUMNS_RESET,
    COLUMNS_UPDATED,
    FilterClient,
    join_list_parameter,
)


def test_join_list_parameter_round_trips_without_empty_segments():
    values = ["summary", "status", "assignee"]

    joined = join_list_parameter("fields", values)

    assert joined == "summary,status,assignee"
    assert joined.split(",") == values


def test_join_list_parameter_single_value_has_no_trailing_comma():
    assert join_list_parameter("expand", ["sharedUsers"]) == "sharedUsers"


@pytest.mark.parametrize("bad", ["summary,status", 42, None, ["ok", ""], ["ok", 3]])
def test_join_list_parameter_rejects_malformed_lists(bad):
    with pytest.raises(FilterRequestError):
        join_list_parameter("fields", bad)


def test_join_list_parameter_rejects_empty_list():
    with pytest.raises(FilterRequestError):
        join_list_parameter("expand", [])


def test_get_filter_builds_get_descriptor(recording_transport):
    recording_transport.response = {"id": "42", "name": "My filter"}
    client = FilterClient(recording_transport)

    result = asyncio.run(client.get_filter({"filter_id": 42}))

    descriptor = recording_transport.last_descriptor
    assert result == {"id": "42", "name": "My filter"}
    assert descriptor.endpoint_uri.endswith("/filter/42")
    assert descriptor.http_method is HttpMethod.GET
    assert descriptor.body == {}
    assert descriptor.follow_redirects is True
    assert descriptor.content_type == "application/json"


def test_get_filter_omits_fields_and_expand_when_not_given(recording_transport):
    client = FilterClient(recording_transport)

    asyncio.run(client.get_filter(FilterOptions(filter_id=42)))

    query = recording_transport.last_descriptor.query_parameters
    assert "fields" not in query
    assert "expand" not in query


def test_get_filter_joins_fields_and_expand(recording_transport):
    client = FilterClient(recording_transport)

    asyncio.run(
        client.get_filter(
            FilterOptions(filter_id="10000", fields=["name", "jql"], expand=["sharePermissions", "subscriptions"])
        )
    )

    query = recording_transport.last_descriptor.query_parameters
    assert query == {"fields": "name,jql", "expand": "sharePermissions,subscriptions"}


def test_create_filter_posts_body_and_trims_expand(recording_transport):
    recording_transport.response = {"id": "1", "name": "f"}
    client = FilterClient(recording_transport)

    result = asyncio.run(client.create_filter({"filter": {"name": "f"}, "expand": ["sharedUsers"]}))

    descriptor = recording_transport.last_descriptor
    assert result == {"id": "1", "name": "f"}
    assert descriptor.http_method is HttpMethod.POST
    assert descriptor.endpoint_uri == "https://jira.example.com/rest/api/2/filter"
    assert descriptor.body == {"name": "f"}
    assert descriptor.query_parameters == {"expand": "sharedUsers"}


def test_create_filter_without_expand_has_empty_query(recording_transport):
    client = FilterClient(recording_transport)

    asyncio.run(client.create_filter({"filter": {"name": "f", "jql": "project = ABC"}}))

    assert recording_transport.last_descriptor.query_parameters == {}


def test_create_filter_requires_filter_body(recording_transport):
    client = FilterClient(recording_transport)

    with pytest.raises(FilterRequestError, match="'filter' is required"):
        asyncio.run(client.create_filter({"expand": ["sharedUsers"]}))
    assert recording_transport.calls == []


def test_update_filter_puts_body(recording_transport):
    client = FilterClient(recording_transport)

    asyncio.run(client.update_filter({"filter_id": 42, "filter": {"jql": "assignee = currentUser()"}}))

    descriptor = recording_transport.last_descriptor
    assert descriptor.http_method is HttpMethod.PUT
    assert descriptor.endpoint_uri.endswith("/filter/42")
    assert descriptor.body == {"jql": "assignee = currentUser()"}


def test_update_filter_rejects_non_object_body(recording_transport):
    client = FilterClient(recording_transport)

    with pytest.raises(FilterRequestError):
        asyncio.run(client.update_filter({"filter_id": 42, "filter": ["not", "an", "object"]}))


@pytest.mark.parametrize("filter_id", [None, "", "   "])
def test_operations_require_filter_id(recording_transport, filter_id):
    client = FilterClient(recording_transport)

    with pytest.raises(FilterRequestError, match="filter_id"):
        asyncio.run(client.get_filter({"filter_id": filter_id}))
    with pytest.raises(FilterRequestError, match="filter_id"):
        asyncio.run(client.reset_filter_columns({"filter_id": filter_id}))
    assert recording_transport.calls == []


def test_get_filter_columns_targets_columns_path(recording_transport):
    recording_transport.response = [{"label": "Key", "value": "issuekey"}]
    client = FilterClient(recording_transport)

    result = asyncio.run(client.get_filter_columns({"filter_id": 7}))

    descriptor = recording_transport.last_descriptor
    assert result == [{"label": "Key", "value": "issuekey"}]
    assert descriptor.http_method is HttpMethod.GET
    assert descriptor.endpoint_uri.endswith("/filter/7/columns")


def test_set_filter_columns_puts_columns_and_returns_confirmation(recording_transport):
    client = FilterClient(recording_transport)

    result = asyncio.run(client.set_filter_columns({"filter_id": 7, "columns": ["a", "b"]}))

    descriptor, success_message = recording_transport.calls[-1]
    assert result == "Columns Updated"
    assert success_message == COLUMNS_UPDATED
    assert descriptor.http_method is HttpMethod.PUT
    assert descriptor.endpoint_uri.endswith("/filter/7/columns")
    assert descriptor.body == {"columns": ["a", "b"]}


def test_set_filter_columns_requires_columns(recording_transport):
    client = FilterClient(recording_transport)

    with pytest.raises(FilterRequestError, match="columns"):
        asyncio.run(client.set_filter_columns({"filter_id": 7}))
    with pytest.raises(FilterRequestError, match="columns"):
        asyncio.run(client.set_filter_columns({"filter_id": 7, "columns": "a,b"}))


def test_reset_filter_columns_deletes_and_returns_confirmation(recording_transport):
    client = FilterClient(recording_transport)

    result = asyncio.run(client.reset_filter_columns({"filter_id": 7}))

    descriptor, success_message = recording_transport.calls[-1]
    assert result == "Columns Reset"
    assert success_message == COLUMNS_RESET
    assert descriptor.http_method is HttpMethod.DELETE
    assert descriptor.endpoint_uri.endswith("/filter/7/columns")


def test_get_default_share_scope_ignores_options(recording_transport):
    recording_transport.response = {"scope": "PRIVATE"}
    client = FilterClient(recording_transport)

    result = asyncio.run(client.get_default_share_scope({"filter_id": 99, "fields": ["x"]}))

    descriptor = recording_transport.last_descriptor
    assert result == {"scope": "PRIVATE"}
    assert descriptor.http_method is HttpMethod.GET
    assert descriptor.endpoint_uri.endswith("/filter/defaultShareScope")
    assert descriptor.query_parameters == {}


@pytest.mark.parametrize("scope", ["GLOBAL", ShareScope.GLOBAL])
def test_set_default_share_scope_puts_scope(recording_transport, scope):
    client = FilterClient(recording_transport)

    asyncio.run(client.set_default_share_scope({"scope": scope}))

    descriptor = recording_transport.last_descriptor
    assert descriptor.http_method is HttpMethod.PUT
    assert descriptor.endpoint_uri.endswith("/filter/defaultShareScope")
    assert descriptor.body == {"scope": "GLOBAL"}


@pytest.mark.parametrize("scope", [None, "global", "PUBLIC"])
def test_set_default_share_scope_rejects_invalid_scope(recording_transport, scope):
    client = FilterClient(recording_transport)

    with pytest.raises(FilterRequestError, match="scope"):
        asyncio.run(client.set_default_share_scope({"scope": scope}))
    assert recording_transport.calls == []


def test_transport_errors_propagate_unchanged(make_recording_transport):
    error = JiraRequestError(404, error_messages=["A filter with id '1' does not exist."])
    transport = make_recording_transport(error=error)
    client = FilterClient(transport)

    with pytest.raises(JiraRequestError) as excinfo:
        asyncio.run(client.get_filter({"filter_id": 1}))

    assert excinfo.value is error
    assert len(transport.calls) == 1


def test_concurrent_calls_build_independent_descriptors(recording_transport):
    client = FilterClient(recording_transport)

    async def _run_all():
        await asyncio.gather(
            client.get_filter({"filter_id": 1, "fields": ["name"]}),
            client.get_filter({"filter_id": 2}),
            client.reset_filter_columns({"filter_id": 3}),
        )

    asyncio.run(_run_all())

    uris = sorted(call[0].endpoint_uri.rsplit("/filter/", 1)[1] for call in recording_transport.calls)
    assert uris == ["1", "2", "3/columns"]
    queries = [call[0].query_parameters for call in recording_transport.calls]
    assert queries.count({}) == 2


@pytest.mark.parametrize(
    "call, options",
    [
        ("set_default_share_scope", {"scope": 1}),
        ("set_default_share_scope", {"scope": ["GLOBAL"]}),
        ("get_filter", {"filter_id": {"id": 1}}),
    ],
)
def test_wrongly_typed_options_raise_filter_request_error(recording_transport, call, options):
    client = FilterClient(recording_transport)

    with pytest.raises(FilterRequestError, match="invalid options"):
        asyncio.run(getattr(client, call)(options))
    assert recording_transport.calls == []


@pytest.mark.parametrize("options", [{"filterId": 42}, {"filter_id": 42, "expnd": ["sharedUsers"]}])
def test_unknown_option_keys_are_rejected(recording_transport, options):
    client = FilterClient(recording_transport)

    with pytest.raises(FilterRequestError) as excinfo:
        asyncio.run(client.get_filter(options))

    unknown = next(key for key in options if key not in ("filter_id",))
    assert unknown in str(excinfo.value)
    assert recording_transport.calls == []

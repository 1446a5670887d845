"""Tests for tool handlers: request shaping and response unwrapping."""
import asyncio

import httpx
import pytest

from productboard_core.errors import ProductboardApiError, ValidationError
from productboard_mcp import handlers


def ok(data=None, status=200, **extra):
    return lambda request: httpx.Response(status, json={"data": data, **extra})


class TestFeatureHandlers:
    """Test feature list/create/update request shaping."""

    def test_create_under_parent_feature_defaults_to_subfeature(self, fake_api):
        api, client = fake_api(ok({"id": "f-new"}, status=201))

        result = asyncio.run(handlers.handle_feature_create({
            "name": "Dark mode",
            "description": "<p>Night owls</p>",
            "status_name": "New idea",
            "parent_feature_id": "f1",
            "owner_email": "pm@example.com",
            "timeframe": {"start": "2024-01-01"},
        }, client))

        assert result == {"id": "f-new"}
        request = api.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/features"
        assert api.body() == {"data": {
            "name": "Dark mode",
            "description": "<p>Night owls</p>",
            "type": "subfeature",
            "status": {"name": "New idea"},
            "parent": {"feature": {"id": "f1"}},
            "owner": {"email": "pm@example.com"},
            "timeframe": {"start": "2024-01-01"},
        }}

    def test_create_under_product_is_a_feature(self, fake_api):
        api, client = fake_api(ok({"id": "f-new"}, status=201))

        asyncio.run(handlers.handle_feature_create({
            "name": "Export",
            "description": "CSV export",
            "status": {"id": "s1"},
            "product": {"id": "p1"},
            "archived": "false",
        }, client))

        body = api.body()["data"]
        assert body["type"] == "feature"
        assert body["parent"] == {"product": {"id": "p1"}}
        assert body["status"] == {"id": "s1"}
        assert body["archived"] is False

    def test_numeric_ids_are_sent_as_strings(self, fake_api):
        api, client = fake_api(ok({"id": "f-new"}, status=201))

        asyncio.run(handlers.handle_feature_create({
            "name": "Export",
            "description": "CSV export",
            "status_id": 7,
            "product_id": 42,
        }, client))

        body = api.body()["data"]
        assert body["parent"] == {"product": {"id": "42"}}
        assert body["status"] == {"id": "7"}

    @pytest.mark.parametrize("arguments,fragment", [
        ({"description": "d", "status_name": "New", "product_id": "p1"}, "name"),
        ({"name": "n", "description": "d", "product_id": "p1"}, "Missing required status"),
        ({"name": "n", "description": "d", "status_name": "New"}, "Missing feature parent"),
        ({"name": "n", "description": "d", "status_name": "New", "product_id": "p1", "component_id": "c1"},
         "only one parent type"),
    ])
    def test_create_validation_never_reaches_api(self, fake_api, arguments, fragment):
        api, client = fake_api(ok({}))

        with pytest.raises(ValidationError, match=fragment):
            asyncio.run(handlers.handle_feature_create(arguments, client))

        assert api.requests == []

    def test_update_sends_only_present_fields(self, fake_api):
        api, client = fake_api(ok({"id": "f1"}))

        asyncio.run(handlers.handle_feature_update({"id": "f1", "description": ""}, client))

        assert api.requests[0].method == "PATCH"
        assert api.requests[0].url.path == "/features/f1"
        assert api.body() == {"data": {"description": ""}}

    def test_update_clears_owner_with_empty_email(self, fake_api):
        api, client = fake_api(ok({"id": "f1"}))

        asyncio.run(handlers.handle_feature_update({"id": "f1", "owner_email": ""}, client))

        assert api.body() == {"data": {"owner": None}}

    def test_update_omits_owner_when_absent(self, fake_api):
        api, client = fake_api(ok({"id": "f1"}))

        asyncio.run(handlers.handle_feature_update({"id": "f1", "name": "Renamed"}, client))

        assert api.body() == {"data": {"name": "Renamed"}}

    def test_update_without_fields(self, fake_api):
        api, client = fake_api(ok({}))

        with pytest.raises(ValidationError, match="No update fields provided"):
            asyncio.run(handlers.handle_feature_update({"id": "f1", "unknown": 1}, client))

        assert api.requests == []

    def test_update_requires_id(self, fake_api):
        api, client = fake_api(ok({}))

        with pytest.raises(ValidationError, match="Missing required parameter: id"):
            asyncio.run(handlers.handle_feature_update({"name": "x"}, client))

    def test_get_encodes_id(self, fake_api):
        api, client = fake_api(ok({"id": "a/b"}))

        result = asyncio.run(handlers.handle_feature_get({"id": "a/b"}, client))

        assert result == {"id": "a/b"}
        assert api.requests[0].url.raw_path == b"/features/a%2Fb"

    def test_list_named_filters_override_free_form(self, fake_api):
        api, client = fake_api(lambda request: httpx.Response(200, json={"data": [{"id": "f1"}], "links": {}}))

        result = asyncio.run(handlers.handle_features_list({
            "limit": 10,
            "status_name": "Done",
            "product_id": "p1",
            "filters": {"status": {"name": "Ignored"}, "owner": {"email": "pm@example.com"}},
        }, client))

        params = api.requests[0].url.params
        assert params["status.name"] == "Done"
        assert params["parent.id"] == "p1"
        assert params["owner.email"] == "pm@example.com"
        assert result == {"endpoint": "/features", "items": [{"id": "f1"}], "count": 1,
                          "has_more": False, "next": None}


class TestNoteHandlers:
    """Test note listing and creation."""

    def test_create_splits_comma_tags(self, fake_api):
        api, client = fake_api(ok({"id": "n1"}, status=201, links={"html": "https://pb/notes/n1"}))

        result = asyncio.run(handlers.handle_note_create({
            "title": "Feedback",
            "content": "Customers want SSO",
            "tags": "a, b ,,c",
            "user_email": "cs@example.com",
        }, client))

        assert result == {"id": "n1", "links": {"html": "https://pb/notes/n1"}}
        assert api.body() == {
            "title": "Feedback",
            "content": "Customers want SSO",
            "tags": ["a", "b", "c"],
            "user": {"email": "cs@example.com"},
        }

    def test_list_uses_cursor_pagination(self, fake_api):
        api, client = fake_api(lambda request: httpx.Response(200, json={"data": [{"id": "n1"}]}))

        result = asyncio.run(handlers.handle_notes_list({"term": "sso", "anyTag": ["a", "b"], "limit": 5}, client))

        params = api.requests[0].url.params
        assert params["term"] == "sso"
        assert params["anyTag"] == "a,b"
        assert params["pageLimit"] == "5"
        assert "pageCursor" not in params
        assert result["endpoint"] == "/notes"
        assert result["next_cursor"] is None


class TestStrategyHandlers:
    """Test objectives, key results and release date ranges."""

    def test_key_result_progress_and_timeframe(self, fake_api):
        api, client = fake_api(ok({"id": "kr1"}, status=201))

        asyncio.run(handlers.handle_key_result_create({
            "name": "Reduce churn",
            "objective_id": "o1",
            "start_value": "10",
            "target_value": 5,
            "progress": 20,
            "timeframe": {"startDate": "2024-01-01", "endDate": "2024-03-31"},
        }, client))

        assert api.body() == {"data": {
            "name": "Reduce churn",
            "parent": {"objective": {"id": "o1"}},
            "timeframe": {"startDate": "2024-01-01", "endDate": "2024-03-31"},
            "progress": {"startValue": 10, "targetValue": 5, "progress": 20},
        }}

    def test_key_result_without_progress_omits_it(self, fake_api):
        api, client = fake_api(ok({"id": "kr1"}, status=201))

        asyncio.run(handlers.handle_key_result_create({"name": "NPS", "objective": {"id": "o1"}}, client))

        assert "progress" not in api.body()["data"]

    def test_key_result_bad_number(self, fake_api):
        api, client = fake_api(ok({}))

        with pytest.raises(ValidationError, match="currentValue"):
            asyncio.run(handlers.handle_key_result_update({"id": "kr1", "current_value": "n/a"}, client))

        assert api.requests == []

    def test_objective_granularity_only(self, fake_api):
        api, client = fake_api(ok({"id": "o1"}, status=201))

        asyncio.run(handlers.handle_objective_create({"name": "Grow", "granularity": "month"}, client))

        assert api.body() == {"data": {"name": "Grow", "timeframe": {"granularity": "month"}}}

    def test_release_half_timeframe_rejected(self, fake_api):
        api, client = fake_api(ok({}))

        with pytest.raises(ValidationError, match="startDate and endDate"):
            asyncio.run(handlers.handle_release_create({
                "name": "Q1", "description": "d", "release_group_id": "g1", "start_date": "2024-01-01",
            }, client))

        assert api.requests == []

    def test_assignment_flag(self, fake_api):
        api, client = fake_api(ok({"assigned": True}))

        asyncio.run(handlers.handle_feature_release_assignment_update(
            {"feature_id": "f1", "release_id": "r1", "assigned": "1"}, client
        ))

        request = api.requests[0]
        assert request.method == "PUT"
        assert request.url.params["feature.id"] == "f1"
        assert request.url.params["release.id"] == "r1"
        assert api.body() == {"data": {"assigned": True}}

    def test_assignment_flag_rejects_other_values(self, fake_api):
        api, client = fake_api(ok({}))

        with pytest.raises(ValidationError, match="assigned"):
            asyncio.run(handlers.handle_feature_release_assignment_update(
                {"feature_id": "f1", "release_id": "r1", "assigned": "yes"}, client
            ))

    def test_unsupported_entity_link(self, fake_api):
        api, client = fake_api(ok({}))

        with pytest.raises(ValidationError, match="Unsupported link"):
            asyncio.run(handlers.handle_entity_link_create({
                "entity_type": "features", "entity_id": "f1", "target_type": "objectives", "target_id": "o1",
            }, client))


class TestUserCurrent:
    """Test the /user -> /users fallback."""

    def test_returns_current_user(self, fake_api):
        api, client = fake_api(ok({"email": "me@example.com"}))

        assert asyncio.run(handlers.handle_user_current({}, client)) == {"email": "me@example.com"}

    def test_falls_back_to_users_on_404(self, fake_api):
        def responder(request):
            if request.url.path == "/user":
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json={"data": [{"email": "a@example.com"}, {"email": "b@example.com"}]})

        api, client = fake_api(responder)

        result = asyncio.run(handlers.handle_user_current({}, client))

        assert [r.url.path for r in api.requests] == ["/user", "/users"]
        assert result["users_count"] == 2
        assert result["first_user"] == {"email": "a@example.com"}
        assert "warning" in result

    def test_other_errors_are_not_masked(self, fake_api):
        api, client = fake_api(lambda request: httpx.Response(403, json={}))

        with pytest.raises(ProductboardApiError) as exc_info:
            asyncio.run(handlers.handle_user_current({}, client))

        assert exc_info.value.status == 403
        assert len(api.requests) == 1


class TestRegistry:
    """Test that the handler registry and tool catalog agree."""

    def test_every_tool_has_a_handler(self):
        from productboard_mcp.tools import get_tools

        names = [tool.name for tool in get_tools()]
        assert len(names) == len(set(names))
        assert set(names) == set(handlers.HANDLERS)

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            handlers.HANDLERS["pb_new"] = handlers.handle_feature_get

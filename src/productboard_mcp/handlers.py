"""MCP tool handlers for the Productboard connector.

All handlers follow a consistent pattern:
- Accept: arguments dict and a ProductboardClient
- Normalize arguments first, so a validation failure never reaches the API
- Return: plain data (dict/list) that the server wraps in a JSON envelope
- Raise ProductboardApiError (or a subclass) on failure

Dispatch and error conversion are handled by the caller (server.dispatch).
"""
import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional

from productboard_core.client import ProductboardClient, data_of, encode_segment
from productboard_core.errors import ProductboardApiError, ValidationError
from productboard_core.normalizers import (
    MISSING,
    OBJECTIVE_PARENT_KINDS,
    build_timeframe,
    coerce_bool,
    ensure_update_fields,
    first_present,
    is_blank,
    merge_filters,
    normalize_tags,
    owner_from_email,
    pick_present,
    require,
    resolve_date_range,
    resolve_parent,
    resolve_parent_kind,
    resolve_progress,
    resolve_status,
    to_mapping,
)
from productboard_core.pagination import page_items, walk_cursor, walk_links
from productboard_core.schemas import (
    AssignmentData,
    CustomFieldValueData,
    FeatureData,
    InitiativeData,
    KeyResultData,
    NoteData,
    ObjectiveData,
    ReleaseData,
    build,
    to_body,
)

logger = logging.getLogger("productboard-mcp.handlers")

Handler = Callable[[dict, ProductboardClient], Awaitable[Any]]

# (entity_type, target_type) pairs exposed under /{entity}/{id}/links/{target}
ENTITY_LINKS = frozenset({
    ("objectives", "features"),
    ("initiatives", "objectives"),
    ("initiatives", "features"),
})


# ============================================================================
# Shared helpers
# ============================================================================

async def _list_links(
    path: str,
    args: Mapping[str, Any],
    client: ProductboardClient,
    named: Optional[Mapping[str, Any]] = None,
    page_size_param: Optional[str] = None,
) -> dict:
    query = merge_filters(named or {}, args.get("filters"))
    page = await walk_links(client, path, query=query, limit=args.get("limit"), page_size_param=page_size_param)
    logger.info(f"Listed {page.count} items from {path} (has_more={page.has_more})")
    return {"endpoint": path, **page.model_dump()}


async def _get_by_id(resource: str, args: Mapping[str, Any], client: ProductboardClient) -> Any:
    require(args, "id")
    data = await client.get_data(f"/{resource}/{encode_segment(args['id'])}")
    logger.info(f"Retrieved {resource} {args['id']}")
    return data


def _optional_bool(args: Mapping[str, Any], key: str) -> Optional[bool]:
    value = args.get(key)
    return None if value is None else coerce_bool(value, key)


def _owner(args: Mapping[str, Any], fields: dict, clearable: bool) -> None:
    """Set ``fields["owner"]`` from owner_email.

    On create a blank email is simply omitted; on update it clears the owner.
    """
    owner = owner_from_email(args)
    if owner is MISSING or (owner is None and not clearable):
        return
    fields["owner"] = owner


# ============================================================================
# User Handlers
# ============================================================================

async def handle_user_current(arguments: dict, client: ProductboardClient) -> Any:
    """Verify the connection by fetching the current user.

    Some API versions do not serve GET /user; on a 404 there (and only there)
    the first user from GET /users stands in as a connectivity check.
    """
    try:
        payload = await client.get("/user")
    except ProductboardApiError as e:
        if e.status != 404:
            raise
        logger.warning("GET /user returned 404, falling back to GET /users")
        users = page_items(await client.get("/users"))
        return {
            "warning": "GET /user is unavailable in this Productboard API version; "
                       "using GET /users for connectivity check.",
            "users_count": len(users),
            "first_user": users[0] if users else None,
        }
    data = data_of(payload)
    return data if data is not None else payload


async def handle_users_list(arguments: dict, client: ProductboardClient) -> Any:
    """List workspace users."""
    args = to_mapping(arguments)
    return await _list_links("/users", args, client)


# ============================================================================
# Feature Handlers
# ============================================================================

async def handle_features_list(arguments: dict, client: ProductboardClient) -> Any:
    """List features.

    Named filters (status_id, status_name, parent_id, owner_email, note_id,
    archived) override anything with the same key inside ``filters``.
    product_id is accepted as a convenience for the parent.id filter.
    """
    args = to_mapping(arguments)
    named = {
        "status.id": args.get("status_id"),
        "status.name": args.get("status_name"),
        "parent.id": args.get("parent_id"),
        "owner.email": args.get("owner_email"),
        "note.id": args.get("note_id"),
        "archived": _optional_bool(args, "archived"),
    }
    product_id = resolve_parent_kind(args, "product", ("product_id",))
    if product_id is not None:
        named["parent.id"] = product_id

    return await _list_links("/features", args, client, named)


async def handle_feature_get(arguments: dict, client: ProductboardClient) -> Any:
    """Get a feature by ID."""
    return await _get_by_id("features", to_mapping(arguments), client)


async def handle_feature_create(arguments: dict, client: ProductboardClient) -> Any:
    """Create a feature under a product, component or parent feature.

    The type defaults to "subfeature" when the parent is a feature.
    """
    args = to_mapping(arguments)
    require(args, "name", "description")

    status = resolve_status(args)
    if status is None:
        raise ValidationError(
            "Missing required status. Provide status.name, status.id, status_name, or status_id."
        )
    parent = resolve_parent(
        args,
        required=True,
        missing_message="Missing feature parent. Provide product.id, component.id, or parent_feature_id.",
    )

    fields: dict[str, Any] = {
        "name": args["name"],
        "description": args["description"],
        "type": first_present(args.get("type")) or ("subfeature" if "feature" in parent else "feature"),
        "status": status,
        "parent": parent,
    }
    archived = _optional_bool(args, "archived")
    if archived is not None:
        fields["archived"] = archived
    _owner(args, fields, clearable=False)
    timeframe = build_timeframe(args.get("timeframe"))
    if timeframe:
        fields["timeframe"] = timeframe

    data = to_body(build(FeatureData, **fields))
    payload = await client.post("/features", {"data": data})
    created = data_of(payload)
    logger.info(f"Created feature: {data['name']} (ID: {(created or {}).get('id')})")
    return created


async def handle_feature_update(arguments: dict, client: ProductboardClient) -> Any:
    """Update a feature. Only the fields present in the arguments are sent.

    owner_email="" clears the owner.
    """
    args = to_mapping(arguments)
    require(args, "id")

    fields = pick_present(args, {"name": "name", "description": "description"})
    archived = _optional_bool(args, "archived")
    if archived is not None:
        fields["archived"] = archived
    status = resolve_status(args)
    if status is not None:
        fields["status"] = status
    parent = resolve_parent(args)
    if parent is not None:
        fields["parent"] = parent
    _owner(args, fields, clearable=True)
    timeframe = build_timeframe(args.get("timeframe"))
    if timeframe:
        fields["timeframe"] = timeframe

    ensure_update_fields(fields)
    data = to_body(build(FeatureData, **fields))
    payload = await client.patch(f"/features/{encode_segment(args['id'])}", {"data": data})
    logger.info(f"Updated feature {args['id']}: {sorted(data)}")
    return data_of(payload)


async def handle_feature_statuses_list(arguments: dict, client: ProductboardClient) -> Any:
    """List the feature statuses configured in the workspace."""
    return await _list_links("/feature-statuses", to_mapping(arguments), client)


# ============================================================================
# Note Handlers
# ============================================================================

NOTE_QUERY_KEYS = (
    "term", "featureId", "companyId", "ownerEmail", "source",
    "dateFrom", "dateTo", "createdFrom", "createdTo", "updatedFrom", "updatedTo",
    "last", "pageCursor",
)


async def handle_notes_list(arguments: dict, client: ProductboardClient) -> Any:
    """List notes (cursor-paginated).

    anyTag/allTags accept a list or a comma-separated string.
    """
    args = to_mapping(arguments)
    named = {key: args.get(key) for key in NOTE_QUERY_KEYS}
    for key in ("anyTag", "allTags"):
        tags = normalize_tags(args.get(key))
        if tags:
            named[key] = ",".join(tags)

    query = merge_filters(named, args.get("filters"))
    page = await walk_cursor(client, "/notes", query=query, limit=args.get("limit"))
    logger.info(f"Listed {page.count} notes (has_more={page.has_more})")
    return {"endpoint": "/notes", **page.model_dump()}


async def handle_note_create(arguments: dict, client: ProductboardClient) -> Any:
    """Create a note. Returns the new note's id and links."""
    args = to_mapping(arguments)
    require(args, "title", "content")

    fields: dict[str, Any] = {"title": args["title"], "content": args["content"]}
    tags = normalize_tags(args.get("tags"))
    if tags is not None:
        fields["tags"] = tags
    if not is_blank(args.get("user_email")):
        fields["user"] = {"email": args["user_email"]}
    if not is_blank(args.get("customer_email")):
        fields["customer_email"] = args["customer_email"]
    if not is_blank(args.get("company_domain")):
        fields["company"] = {"domain": args["company_domain"]}
    if not is_blank(args.get("display_url")):
        fields["display_url"] = args["display_url"]

    payload = await client.post("/notes", to_body(build(NoteData, **fields)))
    data = to_mapping(data_of(payload))
    logger.info(f"Created note: {args['title']} (ID: {data.get('id')})")
    return {
        "id": data.get("id"),
        "links": payload.get("links") if isinstance(payload, dict) else None,
    }


# ============================================================================
# Product and Component Handlers
# ============================================================================

async def handle_products_list(arguments: dict, client: ProductboardClient) -> Any:
    return await _list_links("/products", to_mapping(arguments), client)


async def handle_product_get(arguments: dict, client: ProductboardClient) -> Any:
    return await _get_by_id("products", to_mapping(arguments), client)


async def handle_components_list(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    named = {"parent.id": args.get("parent_id")}
    return await _list_links("/components", args, client, named)


async def handle_component_get(arguments: dict, client: ProductboardClient) -> Any:
    return await _get_by_id("components", to_mapping(arguments), client)


# ============================================================================
# Release Handlers
# ============================================================================

def _release_group_id(args: Mapping[str, Any]) -> Any:
    return resolve_parent_kind(args, "releaseGroup", ("release_group_id",))


async def handle_releases_list(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    named = {"releaseGroup.id": _release_group_id(args)}
    return await _list_links("/releases", args, client, named)


async def handle_release_get(arguments: dict, client: ProductboardClient) -> Any:
    return await _get_by_id("releases", to_mapping(arguments), client)


async def handle_release_create(arguments: dict, client: ProductboardClient) -> Any:
    """Create a release inside a release group."""
    args = to_mapping(arguments)
    require(args, "name", "description")
    group_id = _release_group_id(args)
    if group_id is None:
        raise ValidationError("Missing release group. Provide release_group_id or releaseGroup.id.")

    fields: dict[str, Any] = {
        "name": args["name"],
        "description": args["description"],
        "releaseGroup": {"id": group_id},
    }
    if not is_blank(args.get("state")):
        fields["state"] = args["state"]
    timeframe = resolve_date_range(args)
    if timeframe:
        fields["timeframe"] = timeframe

    payload = await client.post("/releases", {"data": to_body(build(ReleaseData, **fields))})
    created = data_of(payload)
    logger.info(f"Created release: {args['name']} (ID: {(created or {}).get('id')})")
    return created


async def handle_release_update(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    require(args, "id")

    fields = pick_present(args, {"name": "name", "description": "description", "state": "state"})
    group_id = _release_group_id(args)
    if group_id is not None:
        fields["releaseGroup"] = {"id": group_id}
    timeframe = resolve_date_range(args)
    if timeframe:
        fields["timeframe"] = timeframe

    ensure_update_fields(fields)
    data = to_body(build(ReleaseData, **fields))
    payload = await client.patch(f"/releases/{encode_segment(args['id'])}", {"data": data})
    logger.info(f"Updated release {args['id']}: {sorted(data)}")
    return data_of(payload)


async def handle_release_groups_list(arguments: dict, client: ProductboardClient) -> Any:
    return await _list_links("/release-groups", to_mapping(arguments), client)


async def handle_release_group_get(arguments: dict, client: ProductboardClient) -> Any:
    return await _get_by_id("release-groups", to_mapping(arguments), client)


async def handle_feature_release_assignments_list(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    named = {
        "feature.id": args.get("feature_id"),
        "release.id": args.get("release_id"),
        "release.state": args.get("release_state"),
    }
    return await _list_links("/feature-release-assignments", args, client, named)


async def handle_feature_release_assignment_update(arguments: dict, client: ProductboardClient) -> Any:
    """Assign a feature to a release, or unassign it.

    ``assigned`` accepts true/false, 1/0 and their string forms.
    """
    args = to_mapping(arguments)
    require(args, "feature_id", "release_id", "assigned")
    assigned = coerce_bool(args["assigned"], "assigned")

    body = {"data": to_body(build(AssignmentData, assigned=assigned))}
    query = {"feature.id": args["feature_id"], "release.id": args["release_id"]}
    payload = await client.put("/feature-release-assignments/assignment", body, query=query)
    logger.info(f"Set feature {args['feature_id']} assigned={assigned} on release {args['release_id']}")
    return data_of(payload)


# ============================================================================
# Objective, Initiative and Key Result Handlers
# ============================================================================

def _strategy_list_filters(args: Mapping[str, Any]) -> dict:
    return {
        "status.id": args.get("status_id"),
        "status.name": args.get("status_name"),
        "owner.email": args.get("owner_email"),
        "parent.id": args.get("parent_id"),
        "archived": _optional_bool(args, "archived"),
    }


def _strategy_fields(args: Mapping[str, Any], creating: bool) -> dict:
    """Fields shared by objectives, initiatives and key results."""
    if creating:
        fields = {"name": args["name"]}
        if not is_blank(args.get("description")):
            fields["description"] = args["description"]
    else:
        fields = pick_present(args, {"name": "name", "description": "description"})
    _owner(args, fields, clearable=not creating)
    timeframe = resolve_date_range(args)
    if timeframe:
        fields["timeframe"] = timeframe
    return fields


async def handle_objectives_list(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    return await _list_links("/objectives", args, client, _strategy_list_filters(args))


async def handle_objective_get(arguments: dict, client: ProductboardClient) -> Any:
    return await _get_by_id("objectives", to_mapping(arguments), client)


async def handle_objective_create(arguments: dict, client: ProductboardClient) -> Any:
    """Create an objective, optionally nested under a parent objective."""
    args = to_mapping(arguments)
    require(args, "name")
    fields = _strategy_fields(args, creating=True)
    status = resolve_status(args)
    if status is not None:
        fields["status"] = status
    parent = resolve_parent(args, kinds=OBJECTIVE_PARENT_KINDS)
    if parent is not None:
        fields["parent"] = parent

    payload = await client.post("/objectives", {"data": to_body(build(ObjectiveData, **fields))})
    created = data_of(payload)
    logger.info(f"Created objective: {args['name']} (ID: {(created or {}).get('id')})")
    return created


async def handle_objective_update(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    require(args, "id")
    fields = _strategy_fields(args, creating=False)
    status = resolve_status(args)
    if status is not None:
        fields["status"] = status
    parent = resolve_parent(args, kinds=OBJECTIVE_PARENT_KINDS)
    if parent is not None:
        fields["parent"] = parent

    ensure_update_fields(fields)
    data = to_body(build(ObjectiveData, **fields))
    payload = await client.patch(f"/objectives/{encode_segment(args['id'])}", {"data": data})
    logger.info(f"Updated objective {args['id']}: {sorted(data)}")
    return data_of(payload)


async def handle_initiatives_list(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    named = _strategy_list_filters(args)
    named.pop("parent.id")
    return await _list_links("/initiatives", args, client, named)


async def handle_initiative_get(arguments: dict, client: ProductboardClient) -> Any:
    return await _get_by_id("initiatives", to_mapping(arguments), client)


async def handle_initiative_create(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    require(args, "name")
    fields = _strategy_fields(args, creating=True)
    status = resolve_status(args)
    if status is not None:
        fields["status"] = status

    payload = await client.post("/initiatives", {"data": to_body(build(InitiativeData, **fields))})
    created = data_of(payload)
    logger.info(f"Created initiative: {args['name']} (ID: {(created or {}).get('id')})")
    return created


async def handle_initiative_update(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    require(args, "id")
    fields = _strategy_fields(args, creating=False)
    status = resolve_status(args)
    if status is not None:
        fields["status"] = status

    ensure_update_fields(fields)
    data = to_body(build(InitiativeData, **fields))
    payload = await client.patch(f"/initiatives/{encode_segment(args['id'])}", {"data": data})
    logger.info(f"Updated initiative {args['id']}: {sorted(data)}")
    return data_of(payload)


async def handle_key_results_list(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    named = _strategy_list_filters(args)
    objective_id = resolve_parent_kind(args, "objective", OBJECTIVE_PARENT_KINDS["objective"])
    if objective_id is not None:
        named["parent.id"] = objective_id
    return await _list_links("/key-results", args, client, named)


async def handle_key_result_get(arguments: dict, client: ProductboardClient) -> Any:
    return await _get_by_id("key-results", to_mapping(arguments), client)


async def handle_key_result_create(arguments: dict, client: ProductboardClient) -> Any:
    """Create a key result under an objective.

    Progress values (start/target/current/progress) are optional; the
    progress object is omitted entirely when none is given.
    """
    args = to_mapping(arguments)
    require(args, "name")
    parent = resolve_parent(
        args,
        kinds=OBJECTIVE_PARENT_KINDS,
        required=True,
        missing_message="Missing key result parent. Provide objective.id or objective_id.",
    )
    progress = resolve_progress(args)
    fields = _strategy_fields(args, creating=True)
    fields["parent"] = parent
    if progress is not None:
        fields["progress"] = progress

    payload = await client.post("/key-results", {"data": to_body(build(KeyResultData, **fields))})
    created = data_of(payload)
    logger.info(f"Created key result: {args['name']} (ID: {(created or {}).get('id')})")
    return created


async def handle_key_result_update(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    require(args, "id")
    parent = resolve_parent(args, kinds=OBJECTIVE_PARENT_KINDS)
    progress = resolve_progress(args)
    fields = _strategy_fields(args, creating=False)
    if parent is not None:
        fields["parent"] = parent
    if progress is not None:
        fields["progress"] = progress

    ensure_update_fields(fields)
    data = to_body(build(KeyResultData, **fields))
    payload = await client.patch(f"/key-results/{encode_segment(args['id'])}", {"data": data})
    logger.info(f"Updated key result {args['id']}: {sorted(data)}")
    return data_of(payload)


# ============================================================================
# Company Handlers
# ============================================================================

async def handle_companies_list(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    named = {
        "term": args.get("term"),
        "hasNotes": args.get("hasNotes"),
        "featureId": args.get("featureId"),
        "pageCursor": args.get("pageCursor"),
    }
    return await _list_links("/companies", args, client, named, page_size_param="pageLimit")


async def handle_company_get(arguments: dict, client: ProductboardClient) -> Any:
    return await _get_by_id("companies", to_mapping(arguments), client)


# ============================================================================
# Custom Field Handlers
# ============================================================================

def _joined(value: Any) -> Optional[str]:
    items = normalize_tags(value)
    return ",".join(items) if items else None


async def handle_custom_fields_list(arguments: dict, client: ProductboardClient) -> Any:
    """List custom field definitions, optionally restricted by type."""
    args = to_mapping(arguments)
    named = {"type": _joined(args.get("type"))}
    return await _list_links("/hierarchy-entities/custom-fields", args, client, named)


async def handle_custom_field_values_list(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    named = {
        "type": _joined(args.get("type")),
        "customField.id": args.get("custom_field_id"),
        "hierarchyEntity.id": args.get("entity_id"),
    }
    return await _list_links("/hierarchy-entities/custom-fields-values", args, client, named)


async def handle_custom_field_value_set(arguments: dict, client: ProductboardClient) -> Any:
    """Set a custom field value on a feature, component or product."""
    args = to_mapping(arguments)
    require(args, "custom_field_id", "entity_id", "type")
    if "value" not in args:
        raise ValidationError("Missing required parameter: value")

    body = {"data": to_body(build(CustomFieldValueData, type=args["type"], value=args["value"]))}
    query = {"customField.id": args["custom_field_id"], "hierarchyEntity.id": args["entity_id"]}
    payload = await client.put("/hierarchy-entities/custom-fields-values/value", body, query=query)
    logger.info(f"Set custom field {args['custom_field_id']} on {args['entity_id']}")
    return data_of(payload)


# ============================================================================
# Entity Link Handlers
# ============================================================================

def _link_path(args: Mapping[str, Any], with_target: bool) -> str:
    required = ["entity_type", "entity_id", "target_type"]
    if with_target:
        required.append("target_id")
    require(args, *required)

    pair = (args["entity_type"], args["target_type"])
    if pair not in ENTITY_LINKS:
        supported = ", ".join(f"{e}->{t}" for e, t in sorted(ENTITY_LINKS))
        raise ValidationError(f"Unsupported link {pair[0]}->{pair[1]}. Supported: {supported}.")

    path = f"/{pair[0]}/{encode_segment(args['entity_id'])}/links/{pair[1]}"
    if with_target:
        path += f"/{encode_segment(args['target_id'])}"
    return path


async def handle_entity_links_list(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    return await _list_links(_link_path(args, with_target=False), args, client)


async def handle_entity_link_create(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    path = _link_path(args, with_target=True)
    payload = await client.post(path)
    logger.info(f"Linked {path}")
    return {"linked": True, "path": path, "data": data_of(payload)}


async def handle_entity_link_delete(arguments: dict, client: ProductboardClient) -> Any:
    args = to_mapping(arguments)
    path = _link_path(args, with_target=True)
    await client.delete(path)
    logger.info(f"Unlinked {path}")
    return {"linked": False, "path": path}


# ============================================================================
# Handler registry
# ============================================================================

HANDLERS: Mapping[str, Handler] = MappingProxyType({
    # Users
    "pb_user_current": handle_user_current,
    "pb_users_list": handle_users_list,
    # Features
    "pb_features_list": handle_features_list,
    "pb_feature_get": handle_feature_get,
    "pb_feature_create": handle_feature_create,
    "pb_feature_update": handle_feature_update,
    "pb_feature_statuses_list": handle_feature_statuses_list,
    # Notes
    "pb_notes_list": handle_notes_list,
    "pb_note_create": handle_note_create,
    # Products and components
    "pb_products_list": handle_products_list,
    "pb_product_get": handle_product_get,
    "pb_components_list": handle_components_list,
    "pb_component_get": handle_component_get,
    # Releases
    "pb_releases_list": handle_releases_list,
    "pb_release_get": handle_release_get,
    "pb_release_create": handle_release_create,
    "pb_release_update": handle_release_update,
    "pb_release_groups_list": handle_release_groups_list,
    "pb_release_group_get": handle_release_group_get,
    "pb_feature_release_assignments_list": handle_feature_release_assignments_list,
    "pb_feature_release_assignment_update": handle_feature_release_assignment_update,
    # Objectives, initiatives, key results
    "pb_objectives_list": handle_objectives_list,
    "pb_objective_get": handle_objective_get,
    "pb_objective_create": handle_objective_create,
    "pb_objective_update": handle_objective_update,
    "pb_initiatives_list": handle_initiatives_list,
    "pb_initiative_get": handle_initiative_get,
    "pb_initiative_create": handle_initiative_create,
    "pb_initiative_update": handle_initiative_update,
    "pb_key_results_list": handle_key_results_list,
    "pb_key_result_get": handle_key_result_get,
    "pb_key_result_create": handle_key_result_create,
    "pb_key_result_update": handle_key_result_update,
    # Companies
    "pb_companies_list": handle_companies_list,
    "pb_company_get": handle_company_get,
    # Custom fields
    "pb_custom_fields_list": handle_custom_fields_list,
    "pb_custom_field_values_list": handle_custom_field_values_list,
    "pb_custom_field_value_set": handle_custom_field_value_set,
    # Entity links
    "pb_entity_links_list": handle_entity_links_list,
    "pb_entity_link_create": handle_entity_link_create,
    "pb_entity_link_delete": handle_entity_link_delete,
})

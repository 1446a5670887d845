"""MCP tool definitions for the Productboard connector.

This module provides the definitive list of tools exposed to the host. Every
name here has a handler in handlers.HANDLERS.
"""
from typing import Optional

from mcp.types import Tool

# ============================================================================
# Shared schema fragments
# ============================================================================

LIMIT = {
    "type": "number",
    "minimum": 1,
    "maximum": 1000,
    "description": "Maximum number of items to return across pages (default: 100, max: 1000)",
}

FILTERS = {
    "type": "object",
    "additionalProperties": True,
    "description": "Extra filters; nested objects become dotted query keys "
                   "(e.g. {\"owner\": {\"email\": \"a@b.c\"}} -> owner.email). "
                   "Named filters take precedence.",
}

ID = {"type": "string", "description": "Entity ID"}

STATUS = {
    "oneOf": [
        {"type": "string", "description": "Status name"},
        {
            "type": "object",
            "properties": {
                "id": {"type": "string"},
                "name": {"type": "string"},
            },
            "additionalProperties": False,
        },
    ],
    "description": "Status as a name or {id} / {name} object. Do not combine with status_id/status_name.",
}

STATUS_FIELDS = {
    "status": STATUS,
    "status_id": {"type": "string", "description": "Status ID (alternative to status)"},
    "status_name": {"type": "string", "description": "Status name (alternative to status)"},
}

SIMPLE_TIMEFRAME = {
    "type": "object",
    "properties": {
        "start": {"type": "string"},
        "end": {"type": "string"},
    },
    "additionalProperties": False,
}

DATE_RANGE_FIELDS = {
    "timeframe": {
        "type": "object",
        "properties": {
            "startDate": {"type": "string", "description": "YYYY-MM-DD"},
            "endDate": {"type": "string", "description": "YYYY-MM-DD"},
            "granularity": {"type": "string", "enum": ["year", "quarter", "month", "day"]},
        },
        "additionalProperties": False,
        "description": "startDate and endDate must be given together; granularity may be given alone.",
    },
    "start_date": {"type": "string", "description": "Alias for timeframe.startDate"},
    "end_date": {"type": "string", "description": "Alias for timeframe.endDate"},
    "granularity": {"type": "string", "description": "Alias for timeframe.granularity"},
}

OWNER_EMAIL = {"type": "string", "description": "Owner email (on update, an empty string clears the owner)"}

BOOLEANISH = {
    "oneOf": [
        {"type": "boolean"},
        {"type": "integer", "enum": [0, 1]},
        {"type": "string", "enum": ["0", "1", "true", "false"]},
    ],
}

TAGS = {
    "oneOf": [
        {"type": "string", "description": "Comma-separated tags"},
        {"type": "array", "items": {"type": "string"}},
    ],
}


def _schema(properties: dict, required: Optional[list[str]] = None, additional: bool = True) -> dict:
    schema = {
        "type": "object",
        "properties": properties,
        "additionalProperties": additional,
    }
    if required:
        schema["required"] = required
    return schema


def _list_tool(name: str, description: str, properties: Optional[dict] = None) -> Tool:
    return Tool(
        name=name,
        description=description,
        inputSchema=_schema({"limit": LIMIT, **(properties or {}), "filters": FILTERS}),
    )


def _get_tool(name: str, description: str) -> Tool:
    return Tool(
        name=name,
        description=description,
        inputSchema=_schema({"id": ID}, required=["id"], additional=False),
    )


def get_tools() -> list[Tool]:
    """Get the list of all Productboard MCP tools."""
    return [
        # ============================================================================
        # User Tools
        # ============================================================================
        Tool(
            name="pb_user_current",
            description="Verify the Productboard connection by fetching the current user. "
                       "Falls back to listing users when the API version has no /user endpoint.",
            inputSchema=_schema({}, additional=False),
        ),
        _list_tool("pb_users_list", "List Productboard workspace users."),
        # ============================================================================
        # Feature Tools
        # ============================================================================
        _list_tool(
            "pb_features_list",
            "List Productboard features with optional filters and pagination.",
            {
                "status_id": {"type": "string"},
                "status_name": {"type": "string"},
                "parent_id": {"type": "string", "description": "Parent product/component/feature ID"},
                "product_id": {"type": "string", "description": "Convenience alias for parent_id"},
                "owner_email": {"type": "string"},
                "note_id": {"type": "string"},
                "archived": BOOLEANISH,
            },
        ),
        _get_tool("pb_feature_get", "Get details for a Productboard feature by ID."),
        Tool(
            name="pb_feature_create",
            description="Create a Productboard feature. Requires name, description, a status, "
                       "and exactly one parent: product_id, component_id, or parent_feature_id. "
                       "Type defaults to 'subfeature' under a feature parent.",
            inputSchema=_schema(
                {
                    "name": {"type": "string"},
                    "description": {"type": "string", "description": "HTML description"},
                    "type": {"type": "string", "enum": ["feature", "subfeature"]},
                    **STATUS_FIELDS,
                    "product_id": {"type": "string"},
                    "component_id": {"type": "string"},
                    "parent_feature_id": {"type": "string"},
                    "owner_email": {"type": "string"},
                    "archived": BOOLEANISH,
                    "timeframe": SIMPLE_TIMEFRAME,
                },
                required=["name", "description"],
            ),
        ),
        Tool(
            name="pb_feature_update",
            description="Update a Productboard feature by ID. Only provided fields are changed; "
                       "at least one field is required.",
            inputSchema=_schema(
                {
                    "id": ID,
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    **STATUS_FIELDS,
                    "product_id": {"type": "string"},
                    "component_id": {"type": "string"},
                    "parent_feature_id": {"type": "string"},
                    "owner_email": OWNER_EMAIL,
                    "archived": BOOLEANISH,
                    "timeframe": SIMPLE_TIMEFRAME,
                },
                required=["id"],
            ),
        ),
        _list_tool("pb_feature_statuses_list", "List the feature statuses defined in the workspace."),
        # ============================================================================
        # Note Tools
        # ============================================================================
        _list_tool(
            "pb_notes_list",
            "List Productboard notes with optional filters and cursor pagination.",
            {
                "term": {"type": "string"},
                "featureId": {"type": "string"},
                "companyId": {"type": "string"},
                "ownerEmail": {"type": "string"},
                "source": {"type": "string"},
                "anyTag": TAGS,
                "allTags": TAGS,
                "dateFrom": {"type": "string"},
                "dateTo": {"type": "string"},
                "createdFrom": {"type": "string"},
                "createdTo": {"type": "string"},
                "updatedFrom": {"type": "string"},
                "updatedTo": {"type": "string"},
                "last": {"type": "string", "description": "Relative window, e.g. '7d'"},
                "pageCursor": {"type": "string", "description": "Resume from a previous next_cursor"},
            },
        ),
        Tool(
            name="pb_note_create",
            description="Create a Productboard note.",
            inputSchema=_schema(
                {
                    "title": {"type": "string"},
                    "content": {"type": "string"},
                    "tags": TAGS,
                    "user_email": {"type": "string"},
                    "customer_email": {"type": "string"},
                    "company_domain": {"type": "string"},
                    "display_url": {"type": "string"},
                },
                required=["title", "content"],
            ),
        ),
        # ============================================================================
        # Product and Component Tools
        # ============================================================================
        _list_tool("pb_products_list", "List Productboard products."),
        _get_tool("pb_product_get", "Get a Productboard product by ID."),
        _list_tool(
            "pb_components_list",
            "List Productboard components.",
            {"parent_id": {"type": "string", "description": "Parent product/component ID"}},
        ),
        _get_tool("pb_component_get", "Get a Productboard component by ID."),
        # ============================================================================
        # Release Tools
        # ============================================================================
        _list_tool(
            "pb_releases_list",
            "List Productboard releases.",
            {"release_group_id": {"type": "string"}},
        ),
        _get_tool("pb_release_get", "Get details for a Productboard release by ID."),
        Tool(
            name="pb_release_create",
            description="Create a release in a release group.",
            inputSchema=_schema(
                {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "release_group_id": {"type": "string"},
                    "state": {"type": "string", "enum": ["upcoming", "in-progress", "completed"]},
                    **DATE_RANGE_FIELDS,
                },
                required=["name", "description"],
            ),
        ),
        Tool(
            name="pb_release_update",
            description="Update a release by ID. Only provided fields are changed.",
            inputSchema=_schema(
                {
                    "id": ID,
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "release_group_id": {"type": "string"},
                    "state": {"type": "string", "enum": ["upcoming", "in-progress", "completed"]},
                    **DATE_RANGE_FIELDS,
                },
                required=["id"],
            ),
        ),
        _list_tool("pb_release_groups_list", "List release groups."),
        _get_tool("pb_release_group_get", "Get a release group by ID."),
        _list_tool(
            "pb_feature_release_assignments_list",
            "List feature/release assignments.",
            {
                "feature_id": {"type": "string"},
                "release_id": {"type": "string"},
                "release_state": {"type": "string"},
            },
        ),
        Tool(
            name="pb_feature_release_assignment_update",
            description="Assign a feature to a release (assigned=true) or remove it (assigned=false).",
            inputSchema=_schema(
                {
                    "feature_id": {"type": "string"},
                    "release_id": {"type": "string"},
                    "assigned": BOOLEANISH,
                },
                required=["feature_id", "release_id", "assigned"],
            ),
        ),
        # ============================================================================
        # Objective Tools
        # ============================================================================
        _list_tool(
            "pb_objectives_list",
            "List objectives.",
            {
                "status_id": {"type": "string"},
                "status_name": {"type": "string"},
                "owner_email": {"type": "string"},
                "parent_id": {"type": "string"},
                "archived": BOOLEANISH,
            },
        ),
        _get_tool("pb_objective_get", "Get an objective by ID."),
        Tool(
            name="pb_objective_create",
            description="Create an objective, optionally under a parent objective.",
            inputSchema=_schema(
                {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    **STATUS_FIELDS,
                    "owner_email": {"type": "string"},
                    "parent_objective_id": {"type": "string"},
                    **DATE_RANGE_FIELDS,
                },
                required=["name"],
            ),
        ),
        Tool(
            name="pb_objective_update",
            description="Update an objective by ID. Only provided fields are changed.",
            inputSchema=_schema(
                {
                    "id": ID,
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    **STATUS_FIELDS,
                    "owner_email": OWNER_EMAIL,
                    "parent_objective_id": {"type": "string"},
                    **DATE_RANGE_FIELDS,
                },
                required=["id"],
            ),
        ),
        # ============================================================================
        # Initiative Tools
        # ============================================================================
        _list_tool(
            "pb_initiatives_list",
            "List initiatives.",
            {
                "status_id": {"type": "string"},
                "status_name": {"type": "string"},
                "owner_email": {"type": "string"},
                "archived": BOOLEANISH,
            },
        ),
        _get_tool("pb_initiative_get", "Get an initiative by ID."),
        Tool(
            name="pb_initiative_create",
            description="Create an initiative.",
            inputSchema=_schema(
                {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    **STATUS_FIELDS,
                    "owner_email": {"type": "string"},
                    **DATE_RANGE_FIELDS,
                },
                required=["name"],
            ),
        ),
        Tool(
            name="pb_initiative_update",
            description="Update an initiative by ID. Only provided fields are changed.",
            inputSchema=_schema(
                {
                    "id": ID,
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    **STATUS_FIELDS,
                    "owner_email": OWNER_EMAIL,
                    **DATE_RANGE_FIELDS,
                },
                required=["id"],
            ),
        ),
        # ============================================================================
        # Key Result Tools
        # ============================================================================
        _list_tool(
            "pb_key_results_list",
            "List key results.",
            {
                "objective_id": {"type": "string", "description": "Only key results of this objective"},
                "owner_email": {"type": "string"},
            },
        ),
        _get_tool("pb_key_result_get", "Get a key result by ID."),
        Tool(
            name="pb_key_result_create",
            description="Create a key result under an objective. Progress values are optional.",
            inputSchema=_schema(
                {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "objective_id": {"type": "string"},
                    "owner_email": {"type": "string"},
                    "start_value": {"type": "number"},
                    "target_value": {"type": "number"},
                    "current_value": {"type": "number"},
                    "progress": {
                        "description": "Percentage, or {startValue, targetValue, currentValue, progress}",
                        "oneOf": [{"type": "number"}, {"type": "object"}],
                    },
                    **DATE_RANGE_FIELDS,
                },
                required=["name"],
            ),
        ),
        Tool(
            name="pb_key_result_update",
            description="Update a key result by ID. Only provided fields are changed.",
            inputSchema=_schema(
                {
                    "id": ID,
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "objective_id": {"type": "string"},
                    "owner_email": OWNER_EMAIL,
                    "start_value": {"type": "number"},
                    "target_value": {"type": "number"},
                    "current_value": {"type": "number"},
                    "progress": {
                        "description": "Percentage, or {startValue, targetValue, currentValue, progress}",
                        "oneOf": [{"type": "number"}, {"type": "object"}],
                    },
                    **DATE_RANGE_FIELDS,
                },
                required=["id"],
            ),
        ),
        # ============================================================================
        # Company Tools
        # ============================================================================
        _list_tool(
            "pb_companies_list",
            "List Productboard companies.",
            {
                "term": {"type": "string"},
                "hasNotes": {"type": "string"},
                "featureId": {"type": "string"},
                "pageCursor": {"type": "string"},
            },
        ),
        _get_tool("pb_company_get", "Get a company by ID."),
        # ============================================================================
        # Custom Field Tools
        # ============================================================================
        _list_tool(
            "pb_custom_fields_list",
            "List custom field definitions.",
            {"type": {**TAGS, "description": "Field type(s), e.g. 'text,number'"}},
        ),
        _list_tool(
            "pb_custom_field_values_list",
            "List custom field values.",
            {
                "type": {**TAGS, "description": "Field type(s)"},
                "custom_field_id": {"type": "string"},
                "entity_id": {"type": "string", "description": "Feature/component/product ID"},
            },
        ),
        Tool(
            name="pb_custom_field_value_set",
            description="Set the value of a custom field on a hierarchy entity.",
            inputSchema=_schema(
                {
                    "custom_field_id": {"type": "string"},
                    "entity_id": {"type": "string"},
                    "type": {"type": "string", "description": "Custom field type, e.g. 'text'"},
                    "value": {"description": "New value (shape depends on type)"},
                },
                required=["custom_field_id", "entity_id", "type", "value"],
            ),
        ),
        # ============================================================================
        # Entity Link Tools
        # ============================================================================
        _list_tool(
            "pb_entity_links_list",
            "List entities linked to an objective or initiative.",
            {
                "entity_type": {"type": "string", "enum": ["objectives", "initiatives"]},
                "entity_id": {"type": "string"},
                "target_type": {"type": "string", "enum": ["features", "objectives"]},
            },
        ),
        Tool(
            name="pb_entity_link_create",
            description="Link a feature or objective to an objective or initiative.",
            inputSchema=_schema(
                {
                    "entity_type": {"type": "string", "enum": ["objectives", "initiatives"]},
                    "entity_id": {"type": "string"},
                    "target_type": {"type": "string", "enum": ["features", "objectives"]},
                    "target_id": {"type": "string"},
                },
                required=["entity_type", "entity_id", "target_type", "target_id"],
                additional=False,
            ),
        ),
        Tool(
            name="pb_entity_link_delete",
            description="Remove a link between an objective/initiative and a feature/objective.",
            inputSchema=_schema(
                {
                    "entity_type": {"type": "string", "enum": ["objectives", "initiatives"]},
                    "entity_id": {"type": "string"},
                    "target_type": {"type": "string", "enum": ["features", "objectives"]},
                    "target_id": {"type": "string"},
                },
                required=["entity_type", "entity_id", "target_type", "target_id"],
                additional=False,
            ),
        ),
    ]

"""Tests for argument normalization rules."""
import pytest

from productboard_core.errors import ValidationError
from productboard_core.normalizers import (
    OBJECTIVE_PARENT_KINDS,
    build_timeframe,
    coerce_bool,
    coerce_number,
    ensure_update_fields,
    flatten_filters,
    merge_filters,
    normalize_limit,
    normalize_tags,
    owner_from_email,
    MISSING,
    pick_present,
    require,
    resolve_date_range,
    resolve_parent,
    resolve_progress,
    resolve_status,
)


class TestNormalizeLimit:
    """Test requested-maximum clamping."""

    @pytest.mark.parametrize("value", [None, 0, -5, "abc", "", float("nan"), float("inf"), True, {}])
    def test_invalid_values_fall_back_to_default(self, value):
        assert normalize_limit(value) == 100

    def test_valid_values_are_floored_and_clamped(self):
        assert normalize_limit(250) == 250
        assert normalize_limit("42") == 42
        assert normalize_limit(7.9) == 7
        assert normalize_limit(5000) == 1000
        assert normalize_limit(1) == 1

    def test_fractions_below_one_clamp_to_one(self):
        assert normalize_limit(0.5) == 1


class TestFlattenFilters:
    """Test nested filter flattening."""

    def test_nested_objects_become_dotted_keys(self):
        assert flatten_filters({"a": {"b": 1, "c": [2, 3]}, "d": None}) == {"a.b": 1, "a.c": "2,3"}

    def test_deep_nesting(self):
        assert flatten_filters({"release": {"timeframe": {"endDate": {"from": "2024-01-01"}}}}) == {
            "release.timeframe.endDate.from": "2024-01-01"
        }

    def test_non_mapping_input_is_empty(self):
        assert flatten_filters(None) == {}
        assert flatten_filters("status=done") == {}
        assert flatten_filters([1, 2]) == {}

    def test_booleans_in_lists_render_lowercase(self):
        assert flatten_filters({"flags": [True, False]}) == {"flags": "true,false"}

    def test_named_filters_override_flattened_ones(self):
        merged = merge_filters(
            {"status.id": "s-named", "owner.email": None},
            {"status": {"id": "s-raw"}, "owner": {"email": "raw@example.com"}},
        )
        assert merged == {"status.id": "s-named", "owner.email": "raw@example.com"}


class TestResolveStatus:
    """Test the status reconciliation rules."""

    def test_status_name_only(self):
        assert resolve_status({"status_name": "Done"}) == {"name": "Done"}

    def test_status_id_only(self):
        assert resolve_status({"status_id": "s1"}) == {"id": "s1"}

    def test_bare_string_is_a_name(self):
        assert resolve_status({"status": "In progress"}) == {"name": "In progress"}

    def test_object_form(self):
        assert resolve_status({"status": {"id": "s1"}}) == {"id": "s1"}
        assert resolve_status({"status": {"name": "Done"}}) == {"name": "Done"}

    def test_absent(self):
        assert resolve_status({}) is None
        assert resolve_status({"status": {}}) is None

    def test_both_separate_fields_is_ambiguous(self):
        with pytest.raises(ValidationError, match="status_id or status_name"):
            resolve_status({"status_id": "s1", "status_name": "Done"})

    def test_inline_and_separate_fields_is_ambiguous(self):
        with pytest.raises(ValidationError, match="Ambiguous status"):
            resolve_status({"status": "Done", "status_id": "s1"})

    def test_object_with_id_and_name_is_rejected(self):
        with pytest.raises(ValidationError, match="status.id or status.name"):
            resolve_status({"status": {"id": "s1", "name": "Done"}})

    def test_validation_error_is_status_400(self):
        with pytest.raises(ValidationError) as exc_info:
            resolve_status({"status_id": "s1", "status_name": "Done"})
        assert exc_info.value.status == 400


class TestResolveParent:
    """Test hierarchy parent reconciliation."""

    def test_flat_feature_alias(self):
        assert resolve_parent({"parent_feature_id": "f1"}) == {"feature": {"id": "f1"}}

    def test_nested_and_dotted_forms(self):
        assert resolve_parent({"parent": {"component": {"id": "c1"}}}) == {"component": {"id": "c1"}}
        assert resolve_parent({"product": {"id": "p1"}}) == {"product": {"id": "p1"}}
        assert resolve_parent({"product.id": "p1"}) == {"product": {"id": "p1"}}

    def test_same_kind_through_several_spellings_is_fine(self):
        assert resolve_parent({"product_id": "p1", "product.id": "p1"}) == {"product": {"id": "p1"}}

    def test_two_kinds_is_an_error(self):
        with pytest.raises(ValidationError, match="only one parent type"):
            resolve_parent({"product_id": "p1", "component_id": "c1"})

    def test_missing_when_required(self):
        with pytest.raises(ValidationError, match="Missing feature parent"):
            resolve_parent({}, required=True, missing_message="Missing feature parent.")

    def test_missing_when_optional(self):
        assert resolve_parent({}) is None

    def test_objective_parent(self):
        assert resolve_parent({"objective_id": "o1"}, kinds=OBJECTIVE_PARENT_KINDS) == {"objective": {"id": "o1"}}


class TestTimeframes:
    """Test simple and date-range timeframes."""

    def test_simple_timeframe_passthrough(self):
        assert build_timeframe({"start": "2024-01-01"}) == {"start": "2024-01-01"}
        assert build_timeframe({}) is None
        assert build_timeframe("2024") is None

    def test_start_without_end_is_an_error(self):
        with pytest.raises(ValidationError, match="both startDate and endDate"):
            resolve_date_range({"start_date": "2024-01-01"})

    def test_end_without_start_is_an_error(self):
        with pytest.raises(ValidationError):
            resolve_date_range({"timeframe": {"endDate": "2024-03-31"}})

    def test_granularity_alone(self):
        assert resolve_date_range({"granularity": "month"}) == {"granularity": "month"}

    def test_mixed_nested_and_flat(self):
        assert resolve_date_range({
            "timeframe": {"startDate": "2024-01-01"},
            "end_date": "2024-03-31",
            "granularity": "quarter",
        }) == {"startDate": "2024-01-01", "endDate": "2024-03-31", "granularity": "quarter"}

    def test_nothing_supplied(self):
        assert resolve_date_range({}) is None


class TestResolveProgress:
    """Test key result progress resolution."""

    def test_absent(self):
        assert resolve_progress({}) is None

    def test_flat_aliases_and_top_level_percentage(self):
        assert resolve_progress({"start_value": 0, "target_value": "100", "progress": 40}) == {
            "startValue": 0,
            "targetValue": 100,
            "progress": 40,
        }

    def test_nested_object(self):
        assert resolve_progress({"progress": {"currentValue": 2.5}}) == {"currentValue": 2.5}

    def test_non_numeric_value_names_the_field(self):
        with pytest.raises(ValidationError, match="targetValue"):
            resolve_progress({"target_value": "lots"})

    def test_boolean_is_not_numeric(self):
        with pytest.raises(ValidationError, match="currentValue"):
            coerce_number(True, "currentValue")


class TestScalars:
    """Test tags, booleans and presence helpers."""

    def test_comma_separated_tags(self):
        assert normalize_tags("a, b ,,c") == ["a", "b", "c"]

    def test_tag_list_keeps_order_and_duplicates(self):
        assert normalize_tags(["b", "a", "b"]) == ["b", "a", "b"]

    def test_tags_absent(self):
        assert normalize_tags(None) is None

    @pytest.mark.parametrize("value", [True, 1, "1", "true"])
    def test_truthy_booleans(self, value):
        assert coerce_bool(value, "assigned") is True

    @pytest.mark.parametrize("value", [False, 0, "0", "false"])
    def test_falsy_booleans(self, value):
        assert coerce_bool(value, "assigned") is False

    @pytest.mark.parametrize("value", ["yes", 2, None, "TRUE"])
    def test_other_values_are_rejected(self, value):
        with pytest.raises(ValidationError, match="assigned"):
            coerce_bool(value, "assigned")

    def test_require_names_missing_fields(self):
        with pytest.raises(ValidationError, match="name, description"):
            require({"name": ""}, "name", "description")
        require({"id": "f1"}, "id")

    def test_pick_present_uses_presence_not_truthiness(self):
        assert pick_present({"name": "", "other": 1}, {"name": "name", "description": "description"}) == {"name": ""}

    def test_owner_presence(self):
        assert owner_from_email({}) is MISSING
        assert owner_from_email({"owner_email": ""}) is None
        assert owner_from_email({"owner_email": "a@b.c"}) == {"email": "a@b.c"}

    def test_empty_update(self):
        with pytest.raises(ValidationError, match="No update fields provided"):
            ensure_update_fields({})

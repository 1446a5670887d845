"""Argument normalization for Productboard tools.

Callers describe the same filter or reference in several equivalent ways
(nested objects, dotted keys, flat aliases). Each function here resolves one
logical field from a loosely-typed argument mapping:

- returns the canonical value, or None when the field was not supplied
- raises ValidationError when the supplied spellings conflict or are malformed

Nothing in this module performs I/O, so every rule is testable on its own.
"""
import math
from typing import Any, Iterable, Mapping, Optional

from .errors import ValidationError

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000

# Parent kind -> flat alias(es), in resolution order
FEATURE_PARENT_KINDS: dict[str, tuple[str, ...]] = {
    "product": ("product_id",),
    "component": ("component_id",),
    "feature": ("parent_feature_id",),
}
OBJECTIVE_PARENT_KINDS: dict[str, tuple[str, ...]] = {
    "objective": ("objective_id", "parent_objective_id"),
}

TRUE_VALUES = (1, "1", "true")
FALSE_VALUES = (0, "0", "false")

MISSING = object()


def to_mapping(value: Any) -> dict:
    """Return value if it is a mapping, otherwise an empty dict."""
    return dict(value) if isinstance(value, Mapping) else {}


def is_blank(value: Any) -> bool:
    """True for values a caller did not meaningfully supply (None or empty string)."""
    return value is None or (isinstance(value, str) and value == "")


def first_present(*candidates: Any) -> Any:
    """Return the first candidate that is not blank, or None."""
    for candidate in candidates:
        if not is_blank(candidate):
            return candidate
    return None


def normalize_limit(value: Any, fallback: int = DEFAULT_LIMIT) -> int:
    """Clamp a requested item count into [1, MAX_LIMIT].

    None, booleans, non-numeric, non-finite and non-positive values fall back
    to ``fallback``. Fractions are floored.
    """
    if value is None or isinstance(value, bool):
        return fallback
    try:
        limit = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(limit) or limit <= 0:
        return fallback
    return max(1, min(math.floor(limit), MAX_LIMIT))


def _join_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_filters(value: Any, prefix: str = "") -> dict[str, Any]:
    """Flatten a nested filter object into dotted-path query keys.

    ``{"a": {"b": 1, "c": [2, 3]}, "d": None}`` -> ``{"a.b": 1, "a.c": "2,3"}``
    """
    out: dict[str, Any] = {}
    for key, raw in to_mapping(value).items():
        next_key = f"{prefix}.{key}" if prefix else str(key)
        if raw is None:
            continue
        if isinstance(raw, (list, tuple)):
            out[next_key] = ",".join(_join_value(item) for item in raw)
        elif isinstance(raw, Mapping):
            out.update(flatten_filters(raw, next_key))
        else:
            out[next_key] = raw
    return out


def merge_filters(named: Mapping[str, Any], raw_filters: Any) -> dict[str, Any]:
    """Combine free-form filters with named convenience filters; named ones win."""
    merged = flatten_filters(raw_filters)
    merged.update({k: v for k, v in named.items() if not is_blank(v)})
    return merged


# ============================================================================
# Status
# ============================================================================

def normalize_status_input(raw_status: Any) -> Optional[dict]:
    """Normalize an inline status given as a string (name) or {id, name} object."""
    if is_blank(raw_status):
        return None

    if isinstance(raw_status, str):
        return {"name": raw_status}

    status = to_mapping(raw_status)
    status_id = first_present(status.get("id"))
    status_name = first_present(status.get("name"))
    if status_id is not None and status_name is not None:
        raise ValidationError("Provide either status.id or status.name, not both.")
    if status_id is not None:
        return {"id": status_id}
    if status_name is not None:
        return {"name": status_name}
    return None


def resolve_status(args: Mapping[str, Any]) -> Optional[dict]:
    """Resolve status from ``status`` or from ``status_id``/``status_name``."""
    inline = normalize_status_input(args.get("status"))
    status_id = first_present(args.get("status_id"))
    status_name = first_present(args.get("status_name"))

    if inline is not None and (status_id is not None or status_name is not None):
        raise ValidationError(
            "Ambiguous status: provide status either as status object/string "
            "OR as status_id/status_name fields."
        )
    if status_id is not None and status_name is not None:
        raise ValidationError("Ambiguous status: provide either status_id or status_name, not both.")

    if inline is not None:
        return inline
    if status_id is not None:
        return {"id": status_id}
    if status_name is not None:
        return {"name": status_name}
    return None


# ============================================================================
# Hierarchy parent
# ============================================================================

def _nested_id(container: Mapping[str, Any], kind: str) -> Any:
    return to_mapping(container.get(kind)).get("id")


def resolve_parent_kind(args: Mapping[str, Any], kind: str, aliases: Iterable[str]) -> Any:
    """Resolve one parent kind's id from its nested, dotted or flat spellings."""
    explicit_parent = to_mapping(args.get("parent"))
    return first_present(
        _nested_id(explicit_parent, kind),
        _nested_id(args, kind),
        args.get(f"{kind}.id"),
        *(args.get(alias) for alias in aliases),
    )


def resolve_parent(
    args: Mapping[str, Any],
    kinds: Mapping[str, tuple[str, ...]] = FEATURE_PARENT_KINDS,
    required: bool = False,
    missing_message: Optional[str] = None,
) -> Optional[dict]:
    """Resolve a hierarchy parent as ``{kind: {"id": ...}}``.

    At most one kind may resolve. When ``required`` is set, none resolving is
    an error too.
    """
    candidates = []
    for kind, aliases in kinds.items():
        parent_id = resolve_parent_kind(args, kind, aliases)
        if parent_id is not None:
            candidates.append({kind: {"id": parent_id}})

    if len(candidates) > 1:
        raise ValidationError(
            "Provide only one parent type: " + ", ".join(kinds) + "."
        )
    if candidates:
        return candidates[0]
    if required:
        raise ValidationError(missing_message or "Missing parent. Provide one of: " + ", ".join(kinds) + ".")
    return None


# ============================================================================
# Timeframes
# ============================================================================

def build_timeframe(value: Any) -> Optional[dict]:
    """Pass through a simple ``{start, end}`` timeframe if either is present."""
    timeframe = to_mapping(value)
    result = {key: timeframe[key] for key in ("start", "end") if timeframe.get(key) is not None}
    return result or None


def resolve_date_range(args: Mapping[str, Any]) -> Optional[dict]:
    """Resolve ``{startDate, endDate, granularity}`` from ``timeframe`` or flat aliases.

    A start date requires an end date and vice versa; granularity may stand alone.
    """
    nested = to_mapping(args.get("timeframe"))
    start_date = first_present(nested.get("startDate"), args.get("start_date"))
    end_date = first_present(nested.get("endDate"), args.get("end_date"))
    granularity = first_present(nested.get("granularity"), args.get("granularity"))

    if (start_date is None) != (end_date is None):
        raise ValidationError(
            "Timeframe requires both startDate and endDate (start_date/end_date) when either is provided."
        )

    result = {}
    if start_date is not None:
        result["startDate"] = start_date
        result["endDate"] = end_date
    if granularity is not None:
        result["granularity"] = granularity
    return result or None


# ============================================================================
# Progress
# ============================================================================

PROGRESS_FIELDS: dict[str, str] = {
    "startValue": "start_value",
    "targetValue": "target_value",
    "currentValue": "current_value",
    "progress": "progress_value",
}


def coerce_number(value: Any, field: str) -> Any:
    """Coerce value to int/float, naming ``field`` when it is not numeric."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number.")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValidationError(f"{field} must be a finite number.")
        return value
    if isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            raise ValidationError(f"{field} must be a number.") from None
        if not math.isfinite(number):
            raise ValidationError(f"{field} must be a finite number.")
        return int(number) if number.is_integer() else number
    raise ValidationError(f"{field} must be a number.")


def resolve_progress(args: Mapping[str, Any]) -> Optional[dict]:
    """Resolve key result progress values; None when nothing was supplied."""
    raw_progress = args.get("progress")
    nested = to_mapping(raw_progress)
    top_level_percent = None if isinstance(raw_progress, Mapping) else raw_progress

    result = {}
    for field, alias in PROGRESS_FIELDS.items():
        candidates = [nested.get(field), args.get(alias)]
        if field == "progress":
            candidates.append(top_level_percent)
        value = first_present(*candidates)
        if value is not None:
            result[field] = coerce_number(value, field)
    return result or None


# ============================================================================
# Scalars and lists
# ============================================================================

def normalize_tags(value: Any) -> Optional[list[str]]:
    """Accept a list of tags or a comma-separated string."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return None


def coerce_bool(value: Any, field: str) -> bool:
    """Accept booleans and 1/"1"/"true" or 0/"0"/"false"."""
    if isinstance(value, bool):
        return value
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValidationError(f"{field} must be a boolean (true/false, 1/0).")


def require(args: Mapping[str, Any], *fields: str) -> None:
    """Raise ValidationError naming every required field that is blank or absent."""
    missing = [field for field in fields if is_blank(args.get(field))]
    if len(missing) == 1:
        raise ValidationError(f"Missing required parameter: {missing[0]}")
    if missing:
        raise ValidationError(f"Missing required parameters: {', '.join(missing)}.")


def pick_present(args: Mapping[str, Any], fields: Mapping[str, str]) -> dict[str, Any]:
    """Copy ``args[arg_name]`` to ``out[body_name]`` for every key the caller included.

    Presence, not truthiness: an explicit empty value is kept.
    """
    return {body_name: args[arg_name] for arg_name, body_name in fields.items() if arg_name in args}


def owner_from_email(args: Mapping[str, Any], key: str = "owner_email") -> Any:
    """Resolve an owner reference with presence semantics.

    Returns MISSING when the key is absent, None when it is present but blank
    (clear the owner), otherwise ``{"email": ...}``.
    """
    if key not in args:
        return MISSING
    email = args.get(key)
    return None if is_blank(email) else {"email": email}


def ensure_update_fields(data: Mapping[str, Any]) -> None:
    """Reject updates that would send no fields."""
    if not data:
        raise ValidationError("No update fields provided.")

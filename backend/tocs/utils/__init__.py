from tocs.utils.ids import generate_id
from tocs.utils.json_helpers import dumps_or_none, parse_json_or_text, safe_parse_json, safe_parse_json_list
from tocs.utils.slugs import slugify
from tocs.utils.time import utc_now_iso, utc_now_millis
from tocs.utils.variables import extract_variables, has_variables, interpolate_value, interpolate_variables

__all__ = [
    "dumps_or_none",
    "extract_variables",
    "generate_id",
    "has_variables",
    "interpolate_value",
    "interpolate_variables",
    "parse_json_or_text",
    "safe_parse_json",
    "safe_parse_json_list",
    "slugify",
    "utc_now_iso",
    "utc_now_millis",
]

from .parsing import strip_code_fence, parse_json_object, truncate_snippet, title_from_url

__all__ = [
    "strip_code_fence",
    "parse_json_object",
    "truncate_snippet",
    "title_from_url",
]

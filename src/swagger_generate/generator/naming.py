"""Human-readable tags and summaries from controller and method names.

Pattern:
  - tag     -> plural resource name in title case
  - summary -> "{action} {resource}", resource pluralized for index

Examples:
  UserController@index      -> tag "Users",       summary "list of users"
  OrderItemController@store -> tag "Order Items", summary "create order item"
  CategoryController@show   -> tag "Categories",  summary "get category"
  ReportController@export   -> tag "Reports",     summary "export report"
"""

import re

# Handler method name -> summary verb
_ACTIONS: dict[str, str] = {
    "store": "create",
    "update": "update",
    "destroy": "delete",
    "index": "list of",
    "show": "get",
}

_IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "media": "media",
    "data": "data",
    "news": "news",
    "information": "information",
    "equipment": "equipment",
}


def _pluralize_word(word: str) -> str:
    lower = word.lower()
    if lower in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower]
        return plural.capitalize() if word[:1].isupper() else plural
    if re.search(r"[^aeiou]y$", lower):
        return word[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", lower):
        return word + "es"
    return word + "s"


def pluralize(phrase: str) -> str:
    """Pluralize the last word of a phrase: ``order item`` -> ``order items``."""
    if not phrase:
        return phrase
    head, _, last = phrase.rpartition(" ")
    plural = _pluralize_word(last)
    return f"{head} {plural}" if head else plural


def words(name: str) -> str:
    """Convert PascalCase/camelCase to lower-case space-separated words."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", name)
    s2 = re.sub(r"([a-z\d])([A-Z])", r"\1 \2", s1)
    return re.sub(r"[_\-\s]+", " ", s2).strip().lower()


def build_tag(resource_name: str) -> str:
    return pluralize(words(resource_name)).title()


def build_summary(resource_name: str, method: str) -> str:
    resource = words(resource_name)
    if method == "index":
        resource = pluralize(resource)
    action = _ACTIONS.get(method, method)
    return f"{action} {resource}"

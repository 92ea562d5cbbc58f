"""IDs for custom form elements (fields, tabs, sublists, ...).

Every ID is ``custpage_<kind>_<slug>``. Slugs are lowercase letters, digits
and underscores only.
"""

import re

from services.errors import WrongTypeError

_SLUG_RE = re.compile(r"^[a-z0-9_]+$")


def _validate_slug(slug: str) -> str:
    if not isinstance(slug, str) or not _SLUG_RE.match(slug):
        raise WrongTypeError(
            "slug",
            slug,
            "A custom form element ID can only consist of lowercase letters, numbers and underscores.",
        )
    return slug


def _custom_id(kind: str, slug: str) -> str:
    return f"custpage_{kind}_{_validate_slug(slug)}"


def field_id(slug: str) -> str:
    return _custom_id("fld", slug)


def tab_id(slug: str) -> str:
    return _custom_id("tab", slug)


def field_group_id(slug: str) -> str:
    return _custom_id("grp", slug)


def assistant_step_id(slug: str) -> str:
    return _custom_id("stp", slug)


def sublist_id(slug: str) -> str:
    return _custom_id("lst", slug)


def button_id(slug: str) -> str:
    return _custom_id("but", slug)


def page_link_id(slug: str) -> str:
    return _custom_id("lnk", slug)

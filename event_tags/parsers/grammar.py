"""Tag grammar: pure interpretation of single tag occurrences.

A *tag* here is the text of one bracketed token, with or without its
brackets: "[STAGE]", "STAGE", "[CLUB: Trégueux]". Every function is total and
side-effect free; unknown input maps to a neutral default (None / False).
"""

from typing import List, Optional, Tuple

from ..config.loader import TagCatalog, default_catalog
from ..models import EventType
from ..utils.text import fold_token, slugify
from .patterns import ANY_TAG, KEY_FAMILIES


def split_tag(tag: str) -> Tuple[Optional[str], str]:
    """Return (family, value) for a keyed tag or (None, token) for a bare one.

    Unknown keys give ("", value) so callers can tell them apart from bare
    tokens.
    """
    if not isinstance(tag, str):
        return None, ""
    text = tag.strip()
    if not (text.startswith("[") and text.endswith("]")):
        text = f"[{text}]"
    match = ANY_TAG.fullmatch(text)
    if not match:
        return None, ""
    if match.group("key") is not None:
        family = KEY_FAMILIES.get(fold_token(match.group("key")), "")
        return family, match.group("value").strip()
    return None, match.group("token")


def _catalog(catalog: Optional[TagCatalog]) -> TagCatalog:
    return catalog if catalog is not None else default_catalog()


def get_event_type_from_tag(
    tag: str, catalog: Optional[TagCatalog] = None
) -> Optional[EventType]:
    family, value = split_tag(tag)
    if family is None:
        return _catalog(catalog).event_types.get(fold_token(value))
    if family != "event_type":
        return None
    folded = fold_token(value)
    known = _catalog(catalog).event_types.get(folded)
    if known is not None:
        return known
    try:
        return EventType(folded.lower())
    except ValueError:
        return None


def resolve_club_name(name: str, catalog: Optional[TagCatalog] = None) -> Optional[str]:
    """Club slug for a name written inside [CLUB: ...]; catalog aliases first."""
    folded = fold_token(name)
    if not folded or folded in _catalog(catalog).all_clubs:
        return None
    return _catalog(catalog).clubs.get(folded) or slugify(name) or None


def get_club_slugs_from_tag(tag: str, catalog: Optional[TagCatalog] = None) -> List[str]:
    """All club slugs a tag routes to; [CLUBS: a, b] names several."""
    family, value = split_tag(tag)
    if family is None:
        slug = _catalog(catalog).clubs.get(fold_token(value))
        return [slug] if slug else []
    if family != "club":
        return []
    slugs: List[str] = []
    for name in value.replace(";", ",").split(","):
        slug = resolve_club_name(name, catalog)
        if slug and slug not in slugs:
            slugs.append(slug)
    return slugs


def get_club_slug_from_tag(tag: str, catalog: Optional[TagCatalog] = None) -> Optional[str]:
    slugs = get_club_slugs_from_tag(tag, catalog)
    return slugs[0] if slugs else None


def is_all_clubs_tag(tag: str, catalog: Optional[TagCatalog] = None) -> bool:
    family, value = split_tag(tag)
    if family is None or family == "club":
        return fold_token(value) in _catalog(catalog).all_clubs
    return False


def _bare_tokens(content: str) -> List[str]:
    if not isinstance(content, str):
        return []
    return [
        fold_token(m.group("token"))
        for m in ANY_TAG.finditer(content)
        if m.group("token") is not None
    ]


def should_publish_to_site(content: str, catalog: Optional[TagCatalog] = None) -> bool:
    """Publishing is opt-out: True unless a do-not-publish tag is present."""
    opt_out = _catalog(catalog).no_publish
    return not any(token in opt_out for token in _bare_tokens(content))


def is_free_event(content: str, catalog: Optional[TagCatalog] = None) -> bool:
    free = _catalog(catalog).free
    return any(token in free for token in _bare_tokens(content))


def is_unlimited_capacity(content: str, catalog: Optional[TagCatalog] = None) -> bool:
    unlimited = _catalog(catalog).unlimited
    return any(token in unlimited for token in _bare_tokens(content))

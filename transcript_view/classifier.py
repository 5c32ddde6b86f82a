"""Map conversation items to their visual template."""

from typing import Any

from .models import MalformedItemError, TemplateTag

# Maps item kind tags to the template that renders them. Adding a variant means
# extending this registry and the builders in assembler.py together.
TEMPLATE_REGISTRY: dict[str, TemplateTag] = {
    "message": TemplateTag.MESSAGE,
    "reasoning": TemplateTag.REASONING,
    "diff": TemplateTag.DIFF,
    "tool": TemplateTag.TOOL,
}


def classify(item: Any) -> TemplateTag:
    """Return the template tag for an item, decided by its kind alone.

    Raises:
        MalformedItemError: If the item has no kind or an unknown one.
    """
    kind = getattr(item, "kind", None)
    template = TEMPLATE_REGISTRY.get(kind) if isinstance(kind, str) else None
    if template is None:
        item_id = getattr(item, "id", None)
        raise MalformedItemError(f"Unknown item kind {kind!r} (item id: {item_id!r})")
    return template

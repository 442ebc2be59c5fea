"""
Hole/shaft class equivalence.

When the selected category changes, pick a sensible class in the new
category from the previously selected label. Hole labels are uppercase and
shaft labels lowercase, but the two tables do not carry the same classes, so
the mapping is best-effort:

1. the case-flipped label, if the target table has it;
2. otherwise the first target label sharing the leading letter;
3. otherwise the first target label.

"First" means the table's own key order (see ``HOLE_FIT_DATA`` /
``SHAFT_FIT_DATA``), not the sorted display order. Step 3 is a last resort
and carries no engineering meaning.
"""

import logging
from typing import Union

from .fits import FitCategory, get_fit_table, parse_fit_category

logger = logging.getLogger(__name__)


def remap_fit_class(previous_label: str, target_category: Union[FitCategory, str]) -> str:
    """
    Choose the class to select after switching to ``target_category``.

    Always returns a label present in the target table.

    Example:
        >>> remap_fit_class("h6", "hole")
        'H6'
        >>> remap_fit_class("js6", "hole")
        'JS7'
    """
    category = parse_fit_category(target_category)
    labels = list(get_fit_table(category))

    label = (previous_label or "").strip()
    candidate = label.upper() if category is FitCategory.HOLE else label.lower()

    if candidate in labels:
        return candidate

    first_char = candidate[:1].upper()
    if first_char:
        for key in labels:
            if key.upper().startswith(first_char):
                logger.debug("Remapped %r to %r by leading letter", previous_label, key)
                return key

    logger.debug("No %s class like %r, falling back to %r", category.value, previous_label, labels[0])
    return labels[0]


__all__ = ["remap_fit_class"]

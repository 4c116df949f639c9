from __future__ import annotations

import re
from typing import Iterable, Mapping, Optional, Tuple

from ..core.constants import PATTERN_ATTRIBUTE_DESCRIPTIONS


class AttributeDescriber:
    """Produce the informational description stored with a new attribute.

    Lookup order: exact name in ``descriptions``, then the first matching
    ``(regex, text)`` pattern, then ``fallback_template`` formatted with the
    name's words (underscores become spaces).
    """

    def __init__(
        self,
        descriptions: Optional[Mapping[str, str]] = None,
        *,
        patterns: Iterable[Tuple[str, str]] = PATTERN_ATTRIBUTE_DESCRIPTIONS,
        fallback_template: str = "Attribute: {words}",
    ):
        self._descriptions = dict(descriptions or {})
        self._patterns = tuple(patterns)
        self._compiled = [(re.compile(rx), text) for rx, text in self._patterns]
        self._fallback_template = fallback_template

    def extend(self, descriptions: Mapping[str, str]) -> "AttributeDescriber":
        merged = dict(self._descriptions)
        merged.update(descriptions)
        return AttributeDescriber(merged, patterns=self._patterns, fallback_template=self._fallback_template)

    def describe(self, attribute_name: str) -> str:
        known = self._descriptions.get(attribute_name)
        if known:
            return known

        for rx, text in self._compiled:
            if rx.match(attribute_name):
                return text

        return self._fallback_template.format(name=attribute_name, words=attribute_name.replace("_", " "))

# /healthlens/flows/safety.py

import copy
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from healthlens.config.strings import DEFAULT_LANGUAGE

# Keyword-based safety checks. When any keyword appears in one of the watched
# input fields, the flow returns a fixed, pre-approved fallback output instead
# of whatever the model would produce.


class SafetyMode(str, Enum):
    PREEMPT = "preempt"    # return the fallback without calling the model
    OVERRIDE = "override"  # call the model, then replace its validated output


class SafetyCheck:
    """
    A case-insensitive substring check over selected input fields.

    `fallback` may be a single output mapping, or a mapping of language code to
    output when `language_field` names the input field that selects it. Unknown
    or missing languages use the DEFAULT_LANGUAGE entry.
    """

    def __init__(
        self,
        name: str,
        keywords: Iterable[str],
        fields: Sequence[str],
        fallback: Mapping[str, Any],
        mode: SafetyMode = SafetyMode.PREEMPT,
        language_field: Optional[str] = None,
    ):
        self.name = name
        self.keywords = [k.lower() for k in keywords if k]
        self.fields = list(fields)
        self.mode = SafetyMode(mode)
        self.language_field = language_field
        if not self.keywords:
            raise ValueError(f"Safety check '{name}' needs at least one keyword")
        if language_field and DEFAULT_LANGUAGE not in fallback:
            raise ValueError(f"Localized safety check '{name}' needs a '{DEFAULT_LANGUAGE}' fallback")
        self._fallback = copy.deepcopy(dict(fallback))

    def _texts(self, request: Mapping[str, Any]) -> List[str]:
        texts = []
        for field_name in self.fields:
            value = request.get(field_name)
            if isinstance(value, str):
                texts.append(value)
            elif isinstance(value, (list, tuple)):
                texts.extend(v for v in value if isinstance(v, str))
        return texts

    def matched_keyword(self, request: Mapping[str, Any]) -> Optional[str]:
        for text in self._texts(request):
            lowered = text.lower()
            for keyword in self.keywords:
                if keyword in lowered:
                    return keyword
        return None

    def matches(self, request: Mapping[str, Any]) -> bool:
        return self.matched_keyword(request) is not None

    def fallback_for(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        if not self.language_field:
            return copy.deepcopy(self._fallback)
        language = str(request.get(self.language_field) or DEFAULT_LANGUAGE).lower()
        language = language.split("-")[0]
        selected = self._fallback.get(language, self._fallback[DEFAULT_LANGUAGE])
        return copy.deepcopy(selected)

    def all_fallbacks(self) -> List[Dict[str, Any]]:
        """Every fallback output this check can produce."""
        if not self.language_field:
            return [copy.deepcopy(self._fallback)]
        return [copy.deepcopy(v) for v in self._fallback.values()]

    def __repr__(self) -> str:
        return f"SafetyCheck({self.name!r}, mode={self.mode.value})"

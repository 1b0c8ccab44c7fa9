"""Labels used to phrase remaining time."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict


class RelativeTimeLabels(BaseModel):
    """Unit labels for the coarse remaining-time tokens."""

    model_config = ConfigDict(frozen=True)

    now: str = "now"
    minute: str = "minute"
    minutes: str = "minutes"
    hour: str = "hour"
    hours: str = "hours"

    @classmethod
    def for_language(cls, language: str) -> RelativeTimeLabels:
        """Return the preset for a language code, falling back to English."""
        return _PRESETS.get(re.split(r"[-_:.]", language.lower())[0], _PRESETS["en"])


_PRESETS: dict[str, RelativeTimeLabels] = {
    "en": RelativeTimeLabels(),
    "de": RelativeTimeLabels(
        now="jetzt", minute="Minute", minutes="Minuten", hour="Stunde", hours="Stunden"
    ),
}

"""
Action verb enhancement for experience bullets.

Weak phrases ("responsible for", "worked on", ...) are replaced everywhere
in a bullet, case-insensitively. A bullet with no weak phrase that opens
with a gerund or present-tense verb ("Managing", "Builds") gets a strong
verb instead, unless it already opens with a strong or past-tense verb.
"""

import random
import re
import zlib
from typing import Optional

OPENING_VERB = re.compile(r"^([A-Z][a-z]+ing|[A-Z][a-z]+s)\b")
PAST_TENSE_OPENING = re.compile(r"^[A-Z][a-z]+ed\b")


class VerbEnhancer:
    """
    Rewrites bullet openings with strong action verbs.

    Args:
        weak_phrases: Weak phrase -> replacement, applied in insertion order
        strong_verbs: Candidate verbs for openings
        rng: Random source for verb choice. Without one the verb is chosen
             from a CRC32 of the bullet, so results are reproducible.

    Example:
        >>> enhancer = VerbEnhancer({"worked on": "Developed"}, ["Led"])
        >>> enhancer.enhance("Worked on the billing service")
        'Developed the billing service'
    """

    def __init__(self, weak_phrases: dict, strong_verbs: list[str], rng: Optional[random.Random] = None):
        self.weak_phrases = [
            (re.compile(re.escape(weak), re.IGNORECASE), strong) for weak, strong in weak_phrases.items()
        ]
        self.strong_verbs = list(strong_verbs)
        self.rng = rng

    def choose_verb(self, bullet: str) -> str:
        if self.rng is not None:
            return self.rng.choice(self.strong_verbs)
        return self.strong_verbs[zlib.crc32(bullet.encode("utf-8")) % len(self.strong_verbs)]

    def starts_strong(self, bullet: str) -> bool:
        lowered = bullet.lower()
        if any(lowered.startswith(verb.lower()) for verb in self.strong_verbs):
            return True
        return bool(PAST_TENSE_OPENING.match(bullet))

    def enhance(self, bullet: str) -> str:
        """
        Return the enhanced bullet (unchanged if no rule applies).

        Weak phrase replacement takes precedence over opening-verb replacement.
        """
        enhanced = bullet
        for pattern, strong in self.weak_phrases:
            enhanced = pattern.sub(strong, enhanced)
        if enhanced != bullet:
            return enhanced

        if not self.strong_verbs or self.starts_strong(bullet):
            return bullet

        opening = OPENING_VERB.match(bullet)
        if opening:
            return self.choose_verb(bullet) + bullet[opening.end():]
        return bullet

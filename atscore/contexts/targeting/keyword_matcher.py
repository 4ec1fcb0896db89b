"""
Keyword extraction and matching for the Targeting context.

Keywords are canonicalized through the tables in config/keyword_tables.yaml
(canonical name -> alternate regex fragments). Matching logic is generic
over the tables: swapping the YAML changes vocabulary, not code.

Matching tiers, tried in order per job keyword (first success wins):
    1. exact    equality of match keys                  confidence 100
    2. synonym  job keyword's synonyms vs résumé keywords confidence 90
    3. partial  substring containment either direction    confidence 75
                (whole word for keys under 4 characters)
    4. fuzzy    Levenshtein similarity > 0.80             confidence round(sim * 100)

Tiers 3 and 4 are skipped for one-character keys ("R").
"""

import re
from dataclasses import dataclass
from typing import Optional

from atscore.contexts.targeting.logger import log_match_result
from atscore.contexts.targeting.results import (
    KEYWORD_CATEGORIES,
    KeywordMatchResult,
    KeywordSet,
    MatchDetail,
)
from atscore.utils.config import get_config
from atscore.utils.text_processing import (
    calculate_similarity,
    normalize_keyword,
    normalize_text,
    round_half_up,
    whole_word,
)

EXACT_CONFIDENCE = 100
SYNONYM_CONFIDENCE = 90
PARTIAL_CONFIDENCE = 75
FUZZY_THRESHOLD = 0.80

# Keys shorter than this never take the partial or fuzzy tier;
# keys shorter than WHOLE_WORD_PARTIAL_LENGTH must be contained as a whole word.
MIN_LOOSE_MATCH_LENGTH = 2
WHOLE_WORD_PARTIAL_LENGTH = 4


@dataclass(frozen=True)
class CanonicalTerm:
    """One canonical keyword and the compiled alternates that detect it."""

    canonical: str
    patterns: tuple


def compile_table(table: dict) -> list[CanonicalTerm]:
    """
    Compile a config table into CanonicalTerms.

    Args:
        table: {'whole_word': bool, 'entries': [{'canonical': str, 'patterns': [str]}]}
    """
    wrap = whole_word if table.get("whole_word", True) else (lambda fragment: fragment)
    return [
        CanonicalTerm(
            canonical=str(entry["canonical"]),
            patterns=tuple(re.compile(wrap(p), re.IGNORECASE) for p in entry["patterns"]),
        )
        for entry in table.get("entries", [])
    ]


def title_case(phrase: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in phrase.split(" "))


def match_key(keyword: str) -> str:
    """
    Comparison key for a keyword.

    The normalized form, except where normalizing strips the characters that
    identify the term: "C++" and "C#" both normalize to "c", so they keep
    their lower-cased label instead.

    Example:
        >>> match_key("Node.js"), match_key("C++")
        ('node js', 'c++')
    """
    normalized = normalize_keyword(keyword)
    if len(normalized) < MIN_LOOSE_MATCH_LENGTH:
        return keyword.strip().lower()
    return normalized


def contains_key(shorter: str, longer: str) -> bool:
    if len(shorter) < WHOLE_WORD_PARTIAL_LENGTH:
        return re.search(whole_word(re.escape(shorter)), longer) is not None
    return shorter in longer


class KeywordMatcher:
    """
    Stateless keyword canonicalizer and matcher.

    Construct once and share; the compiled tables are read-only.

    Args:
        tables: Parsed keyword_tables config. Defaults to the packaged YAML.

    Example:
        >>> matcher = KeywordMatcher()
        >>> matcher.extract_keywords("Built services in NodeJS on k8s").technical
        ['Node.js', 'Kubernetes']
    """

    def __init__(self, tables: Optional[dict] = None):
        config = tables if tables is not None else get_config("keyword_tables")

        self.tables: dict[str, list[CanonicalTerm]] = {
            name: compile_table(config["tables"].get(name, {}))
            for name in ("technical", "soft", "tools", "certifications")
        }
        self.phrases: list[tuple[str, re.Pattern]] = [
            (title_case(phrase), re.compile(whole_word(re.escape(phrase)), re.IGNORECASE))
            for phrase in config.get("phrases", [])
        ]

        self.synonyms: dict[str, list[str]] = {}
        for entry in config.get("synonyms", []):
            key = match_key(str(entry["keyword"]))
            values = [match_key(str(s)) for s in entry["synonyms"]]
            self.synonyms.setdefault(key, []).extend(values)

        self.default_priority: int = int(config.get("default_priority", 50))
        self.priorities: dict[str, int] = {
            str(entry["keyword"]).lower(): int(entry["priority"])
            for entry in config.get("priorities", [])
        }

    # =========================================================================
    # EXTRACTION
    # =========================================================================

    def priority(self, keyword: str) -> int:
        return self.priorities.get(keyword.lower(), self.default_priority)

    def sort_by_priority(self, keywords: list[str]) -> list[str]:
        """Deduplicate and order by priority, highest first; ties keep input order."""
        unique = list(dict.fromkeys(keywords))
        return sorted(unique, key=lambda kw: -self.priority(kw))

    def _scan_table(self, text: str, terms: list[CanonicalTerm]) -> list[str]:
        found = []
        for term in terms:
            if any(pattern.search(text) for pattern in term.patterns):
                found.append(term.canonical)
        return found

    def extract_keywords(self, text: str) -> KeywordSet:
        """
        Extract canonical keywords per category from free text.

        Non-string or empty input yields an empty KeywordSet.
        """
        if not isinstance(text, str) or not text.strip():
            return KeywordSet()

        normalized = normalize_text(text)
        keywords = KeywordSet(
            **{name: self._scan_table(normalized, terms) for name, terms in self.tables.items()},
            phrases=[label for label, pattern in self.phrases if pattern.search(normalized)],
        )

        for name in KEYWORD_CATEGORIES:
            setattr(keywords, name, self.sort_by_priority(getattr(keywords, name)))

        return keywords

    # =========================================================================
    # MATCHING
    # =========================================================================

    def get_synonyms(self, keyword: str) -> list[str]:
        return self.synonyms.get(match_key(keyword), [])

    def _best_match(
        self, job_keyword: str, resume_pairs: list[tuple[str, str]]
    ) -> Optional[MatchDetail]:
        normalized_job = match_key(job_keyword)

        for original, normalized in resume_pairs:
            if normalized == normalized_job:
                return MatchDetail(job_keyword, original, "exact", EXACT_CONFIDENCE)

        for synonym in self.synonyms.get(normalized_job, []):
            for original, normalized in resume_pairs:
                if synonym == normalized:
                    return MatchDetail(job_keyword, original, "synonym", SYNONYM_CONFIDENCE)

        if len(normalized_job) < MIN_LOOSE_MATCH_LENGTH:
            return None
        loose_pairs = [
            (original, normalized)
            for original, normalized in resume_pairs
            if len(normalized) >= MIN_LOOSE_MATCH_LENGTH
        ]

        for original, normalized in loose_pairs:
            if contains_key(normalized_job, normalized) or contains_key(normalized, normalized_job):
                return MatchDetail(job_keyword, original, "partial", PARTIAL_CONFIDENCE)

        for original, normalized in loose_pairs:
            similarity = calculate_similarity(normalized_job, normalized)
            if similarity > FUZZY_THRESHOLD:
                return MatchDetail(job_keyword, original, "fuzzy", round_half_up(similarity * 100))

        return None

    def find_best_match(self, job_keyword: str, resume_keywords: list[str]) -> Optional[MatchDetail]:
        """
        Match one job keyword against résumé keywords using the four tiers.

        Returns:
            MatchDetail for the first tier that succeeds, or None
        """
        pairs = [(kw, match_key(kw)) for kw in resume_keywords]
        return self._best_match(job_keyword, pairs)

    def match_keyword_sets(self, resume_keywords: KeywordSet, job_keywords: KeywordSet) -> KeywordMatchResult:
        """Match already-extracted keyword sets."""
        all_job = job_keywords.all()
        pairs = [(kw, match_key(kw)) for kw in resume_keywords.all()]

        matched, missing, details = [], [], []
        for job_keyword in all_job:
            detail = self._best_match(job_keyword, pairs)
            if detail is None:
                missing.append(job_keyword)
            else:
                matched.append(job_keyword)
                details.append(detail)

        matched = self.sort_by_priority(matched)
        missing = self.sort_by_priority(missing)
        confidence = round_half_up(100 * len(matched) / len(all_job)) if all_job else 0

        return KeywordMatchResult(
            matched=matched,
            missing=missing,
            matched_skills=list(matched),
            missing_skills=list(missing),
            confidence=confidence,
            details=details,
        )

    def match_keywords(self, resume_text: str, job_text: str) -> KeywordMatchResult:
        """
        Extract keywords from both texts and match them.

        Args:
            resume_text: Raw résumé text
            job_text: Raw job posting text

        Returns:
            KeywordMatchResult with priority-ordered matched/missing lists
        """
        result = self.match_keyword_sets(
            self.extract_keywords(resume_text), self.extract_keywords(job_text)
        )
        log_match_result(result)
        return result

"""
ResumeOptimizer: rewrites a résumé toward a job posting and re-scores it.

Two modes:

    structured      parse -> integrate keywords -> reorder -> enhance verbs
                    -> advisory section changes -> render through the template
    mutation_only   integrate keywords into bullets, then substitute each
                    changed bullet literally in the original text; layout,
                    order and every other character are preserved

Either way the result is analyzed again; the score is not guaranteed to rise.
"""

import copy
import math
import re
from typing import Optional

from atscore.contexts.intake.exceptions import InvalidInputError
from atscore.contexts.intake.resume_data_structure import ParsedResume
from atscore.contexts.intake.validator import validate_text
from atscore.contexts.tailoring.changes import (
    AGGRESSIVENESS_LEVELS,
    Change,
    OptimizationPreferences,
    OptimizationResult,
)
from atscore.contexts.tailoring.logger import _log_debug, log_change, log_optimization_result
from atscore.contexts.tailoring.resume_writer import ResumeWriter
from atscore.contexts.tailoring.verb_enhancer import VerbEnhancer
from atscore.contexts.targeting.analyzer import ResumeAnalyzer
from atscore.contexts.targeting.results import AnalysisResult
from atscore.utils.text_processing import word_count

# Anchors after which a keyword reads naturally, tried in order:
# "using React" -> "using React, GraphQL". The phrase runs to the first
# comma, semicolon or sentence-ending period; dots inside tokens (Node.js) are kept.
INSERTION_ANCHORS = (
    re.compile(r"(\busing\b\s+)((?:[^.,;]|\.(?=\w))+)", re.IGNORECASE),
    re.compile(r"(\bwith\b\s+)((?:[^.,;]|\.(?=\w))+)", re.IGNORECASE),
    re.compile(r"(\bin\b\s+)((?:[^.,;]|\.(?=\w))+)", re.IGNORECASE),
)


def insert_keyword(bullet: str, keyword: str) -> str:
    """
    Append a keyword to the first 'using X' / 'with X' / 'in X' phrase.

    Returns the bullet unchanged when no anchor phrase is present.

    Example:
        >>> insert_keyword("Built the storefront using React.", "GraphQL")
        'Built the storefront using React, GraphQL.'
    """
    for anchor in INSERTION_ANCHORS:
        if anchor.search(bullet):
            return anchor.sub(lambda m: f"{m.group(1)}{m.group(2)}, {keyword}", bullet, count=1)
    return bullet


def relevance_order(texts: list[str], keywords: list[str]) -> list[int]:
    """
    Indices of texts sorted by descending keyword hit count.

    Ties keep their original relative order.
    """
    counts = [sum(1 for kw in keywords if kw in text.lower()) for text in texts]
    return sorted(range(len(texts)), key=lambda i: -counts[i])


class ResumeOptimizer:
    """
    Applies keyword, ordering and wording changes to a résumé.

    Args:
        analyzer: ResumeAnalyzer used for the prior analysis (when none is
                  given) and for re-scoring the result
        writer: ResumeWriter for structured mode
        config: Parsed scoring config (optimizer section, weak phrases, strong verbs).
                Defaults to the analyzer's scorer config.
    """

    def __init__(
        self,
        analyzer: Optional[ResumeAnalyzer] = None,
        writer: Optional[ResumeWriter] = None,
        config: Optional[dict] = None,
    ):
        self.analyzer = analyzer or ResumeAnalyzer()
        self.writer = writer or ResumeWriter()
        self.config = config if config is not None else self.analyzer.scorer.config
        self.settings = self.config["optimizer"]

    # =========================================================================
    # MUTATION RULES
    # =========================================================================

    def add_skills(self, resume: ParsedResume, keywords: list[str]) -> list[Change]:
        """Append keywords the skills list doesn't already mention."""
        changes = []
        for keyword in keywords:
            needle = keyword.lower()
            if any(needle in skill.lower() for skill in resume.skills):
                continue
            resume.skills.append(keyword)
            changes.append(
                Change(
                    type="keyword_added",
                    location="skills",
                    original="",
                    modified=keyword,
                    reason=f'Added missing keyword "{keyword}" from the job posting',
                    impact="high",
                )
            )
        return changes

    def integrate_keywords(self, resume: ParsedResume, keywords: list[str]) -> list[Change]:
        """
        Work keyword i into the first bullet of experience entry i.

        Only the first max_bullet_insertions keywords are tried. An insertion
        is kept only if the keyword stays under the density limit and the
        bullet grows by at most max_bullet_growth.
        """
        changes = []
        keywords = keywords[: self.settings["max_bullet_insertions"]]

        for i, (keyword, entry) in enumerate(zip(keywords, resume.experience)):
            if not entry.bullets:
                continue

            original = entry.bullets[0]
            if keyword.lower() in original.lower():
                continue

            original_words = word_count(original)
            if word_count(keyword) / original_words >= self.settings["max_keyword_density"]:
                _log_debug(f"Skipped '{keyword}' for experience[{i}]: density limit")
                continue

            enhanced = insert_keyword(original, keyword)
            if enhanced == original:
                continue
            if word_count(enhanced) > math.floor(original_words * self.settings["max_bullet_growth"]):
                _log_debug(f"Skipped '{keyword}' for experience[{i}]: growth limit")
                continue

            entry.bullets[0] = enhanced
            changes.append(
                Change(
                    type="keyword_added",
                    location=f"experience[{i}].bullets[0]",
                    original=original,
                    modified=enhanced,
                    reason=f'Integrated "{keyword}" into an experience bullet',
                    impact="high",
                )
            )
        return changes

    def reorder_content(self, resume: ParsedResume, analysis: AnalysisResult) -> list[Change]:
        """Stable sort of jobs and of each job's bullets by matched-keyword hits."""
        keywords = list(dict.fromkeys(kw.lower() for kw in analysis.matched_keywords + analysis.matched_skills))
        changes = []

        order = relevance_order([entry.searchable_text() for entry in resume.experience], keywords)
        if order != list(range(len(order))):
            before = ", ".join(entry.title for entry in resume.experience)
            resume.experience = [resume.experience[i] for i in order]
            changes.append(
                Change(
                    type="content_reordered",
                    location="experience",
                    original=before,
                    modified=", ".join(entry.title for entry in resume.experience),
                    reason="Moved the most relevant positions first",
                    impact="medium",
                )
            )

        for i, entry in enumerate(resume.experience):
            order = relevance_order(entry.bullets, keywords)
            if order == list(range(len(order))):
                continue
            entry.bullets = [entry.bullets[j] for j in order]
            changes.append(
                Change(
                    type="content_reordered",
                    location=f"experience[{i}].bullets",
                    original="Original bullet order",
                    modified="Bullets with job keywords first",
                    reason="Moved bullets mentioning job keywords to the top",
                    impact="medium",
                )
            )
        return changes

    def enhance_verbs(self, resume: ParsedResume, enhancer: VerbEnhancer) -> list[Change]:
        changes = []
        for i, entry in enumerate(resume.experience):
            for j, bullet in enumerate(entry.bullets):
                enhanced = enhancer.enhance(bullet)
                if enhanced == bullet:
                    continue
                entry.bullets[j] = enhanced
                changes.append(
                    Change(
                        type="verb_enhanced",
                        location=f"experience[{i}].bullets[{j}]",
                        original=bullet,
                        modified=enhanced,
                        reason="Opened the bullet with a strong action verb",
                        impact="medium",
                    )
                )
        return changes

    def advise_sections(self, resume: ParsedResume, analysis: AnalysisResult) -> list[Change]:
        """Advisory-only changes; the résumé itself is not modified."""
        changes = []

        wanted = analysis.job_data.keywords.certifications
        if wanted and not resume.certifications:
            changes.append(
                Change(
                    type="section_added",
                    location="certifications",
                    original="",
                    modified="Certifications section recommended",
                    reason=f"The posting asks for certifications: {', '.join(wanted[:2])}",
                    impact="low",
                )
            )

        if len(resume.skills) < self.settings["min_skills"]:
            changes.append(
                Change(
                    type="section_optimization",
                    location="skills",
                    original=f"{len(resume.skills)} skills",
                    modified="Recommend adding more skills",
                    reason=f"A skills section should list at least {self.settings['min_skills']} relevant skills",
                    impact="medium",
                )
            )
        return changes

    # =========================================================================
    # ENTRY POINT
    # =========================================================================

    @staticmethod
    def apply_literal_changes(text: str, changes: list[Change]) -> tuple[str, list[Change]]:
        """
        Substitute each change's original bullet with its modified form.

        Only the first verbatim occurrence is replaced; a change whose
        original text is not present is dropped.

        Returns:
            (new_text, applied_changes)
        """
        applied = []
        for change in changes:
            if not change.original or change.original not in text:
                _log_debug(f"Dropped {change.location}: original text not found verbatim")
                continue
            text = text.replace(change.original, change.modified, 1)
            applied.append(change)
        return text, applied

    def optimize(
        self,
        resume_text: str,
        job_text: str,
        prior_analysis: Optional[AnalysisResult] = None,
        preferences: Optional[OptimizationPreferences] = None,
    ) -> OptimizationResult:
        """
        Optimize a résumé for a job posting.

        Args:
            resume_text: Raw résumé text
            job_text: Raw job posting text
            prior_analysis: Analysis of resume_text against job_text; computed when None
            preferences: Aggressiveness, mode and random source

        Returns:
            OptimizationResult with the new text, ordered Changes and both scores

        Raises:
            InvalidInputError: On empty texts or an unknown aggressiveness level
        """
        validate_text(resume_text, "resume_text")
        validate_text(job_text, "job_description")
        preferences = preferences or OptimizationPreferences()

        if preferences.aggressiveness not in AGGRESSIVENESS_LEVELS:
            raise InvalidInputError(
                f"aggressiveness must be one of {', '.join(AGGRESSIVENESS_LEVELS)}",
                field_name="aggressiveness",
                value=preferences.aggressiveness,
            )

        analysis = prior_analysis or self.analyzer.analyze(resume_text, job_text)
        cap = self.settings["keyword_caps"][preferences.aggressiveness]
        keywords = analysis.missing_keywords[:cap]

        resume = copy.deepcopy(analysis.resume_data)

        if preferences.mutation_only:
            bullet_changes = self.integrate_keywords(resume, keywords)
            optimized_text, changes = self.apply_literal_changes(resume_text, bullet_changes)
        else:
            enhancer = VerbEnhancer(self.config["weak_phrases"], self.config["strong_verbs"], preferences.rng)
            changes = self.add_skills(resume, keywords)
            changes += self.integrate_keywords(resume, keywords)
            changes += self.reorder_content(resume, analysis)
            changes += self.enhance_verbs(resume, enhancer)
            changes += self.advise_sections(resume, analysis)
            optimized_text = self.writer.render(resume)

        for change in changes:
            log_change(change)

        optimized = self.analyzer.analyze(optimized_text, job_text)
        result = OptimizationResult(
            optimized_text=optimized_text,
            changes=changes,
            original_score=analysis.ats_score,
            optimized_score=optimized.ats_score,
            score_improvement=optimized.ats_score - analysis.ats_score,
            optimized_data=resume,
        )
        log_optimization_result(result)
        return result

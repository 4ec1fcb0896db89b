"""
AtsService: the entry points an outer layer (HTTP API, CLI) calls.

One service owns one job-description cache and one compiled keyword
matcher; everything else is stateless, so a single instance may be shared
by concurrent requests.

    service = AtsService()
    with service:                        # starts / stops the cache sweeper
        result = service.analyze(resume_text, job_text)
        optimized = service.optimize(resume_text, job_text, prior_analysis=result)
"""

from typing import Optional

from atscore.contexts.intake.job_parser import JobDescriptionParser
from atscore.contexts.rendering.improve import DEFAULT_MAX_WORDS_ADDED, ImproveResult, improve_in_place
from atscore.contexts.tailoring.changes import OptimizationPreferences, OptimizationResult
from atscore.contexts.tailoring.optimizer import ResumeOptimizer
from atscore.contexts.targeting.analyzer import ResumeAnalyzer
from atscore.contexts.targeting.keyword_matcher import KeywordMatcher
from atscore.contexts.targeting.results import AnalysisResult, VersionComparison
from atscore.contexts.targeting.scorer import AtsScorer
from atscore.utils.cache import DEFAULT_SWEEP_SECONDS, DEFAULT_TTL_SECONDS, ResultCache


class AtsService:
    """
    Facade over the analysis, optimization and in-place editing pipelines.

    Args:
        cache: Job-description cache (get/set). Defaults to a new ResultCache;
               pass NullCache() to disable caching.
        ttl: Lifetime of cached job descriptions in seconds
    """

    def __init__(self, cache=None, ttl: float = DEFAULT_TTL_SECONDS):
        self.cache = cache if cache is not None else ResultCache(ttl=ttl)
        self.analyzer = ResumeAnalyzer(
            matcher=KeywordMatcher(),
            scorer=AtsScorer(),
            job_parser=JobDescriptionParser(cache=self.cache, ttl=ttl),
        )
        self.optimizer = ResumeOptimizer(analyzer=self.analyzer)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self, sweep_interval: float = DEFAULT_SWEEP_SECONDS) -> None:
        """Start periodic eviction of expired cache entries (if the cache supports it)."""
        if hasattr(self.cache, "start_sweeper"):
            self.cache.start_sweeper(sweep_interval)

    def stop(self) -> None:
        if hasattr(self.cache, "stop_sweeper"):
            self.cache.stop_sweeper()

    def __enter__(self) -> "AtsService":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    def analyze(self, resume_text: str, job_text: str) -> AnalysisResult:
        return self.analyzer.analyze(resume_text, job_text)

    def optimize(
        self,
        resume_text: str,
        job_text: str,
        prior_analysis: Optional[AnalysisResult] = None,
        preferences: Optional[OptimizationPreferences] = None,
    ) -> OptimizationResult:
        return self.optimizer.optimize(resume_text, job_text, prior_analysis, preferences)

    def extract_keywords(self, job_text: str) -> dict:
        return self.analyzer.extract_keywords(job_text)

    def compare_versions(self, original_text: str, optimized_text: str, job_text: str) -> VersionComparison:
        return self.analyzer.compare_versions(original_text, optimized_text, job_text)

    def improve_in_place(
        self,
        file_bytes: bytes,
        optimized_text: str,
        filename: Optional[str] = None,
        mimetype: Optional[str] = None,
        max_words_added_per_line: int = DEFAULT_MAX_WORDS_ADDED,
        allow_shrink_font: bool = True,
    ) -> ImproveResult:
        return improve_in_place(
            file_bytes,
            optimized_text,
            filename=filename,
            mimetype=mimetype,
            max_words_added_per_line=max_words_added_per_line,
            allow_shrink_font=allow_shrink_font,
        )

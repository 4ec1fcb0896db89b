"""
Optimizer inputs and outputs.

Change is the audit record of one mutation. An ordered list of Changes is,
together with the optimized text, the primary output of an optimization.
"""

import random
from dataclasses import asdict, dataclass, field
from typing import Optional

from atscore.contexts.intake.resume_data_structure import ParsedResume

AGGRESSIVENESS_LEVELS = ("conservative", "moderate", "aggressive")
CHANGE_TYPES = (
    "keyword_added",
    "content_reordered",
    "verb_enhanced",
    "section_added",
    "section_optimization",
)
IMPACT_LEVELS = ("low", "medium", "high")


@dataclass
class Change:
    """
    One optimizer mutation (or advisory recommendation).

    Attributes:
        type: One of CHANGE_TYPES
        location: Where it applies, e.g. 'skills' or 'experience[0].bullets[0]'
        original: Text before the change ('' for additions)
        modified: Text after the change
        reason: Human-readable justification
        impact: 'low', 'medium' or 'high'
    """

    type: str
    location: str
    original: str
    modified: str
    reason: str
    impact: str


@dataclass
class OptimizationPreferences:
    """
    Knobs for ResumeOptimizer.optimize().

    Attributes:
        aggressiveness: How many missing keywords to consider (3/5/8)
        mutation_only: Edit only literal bullet text inside the original
                       résumé instead of re-rendering it
        rng: Random source for strong-verb choice; None picks deterministically
    """

    aggressiveness: str = "moderate"
    mutation_only: bool = False
    rng: Optional[random.Random] = None


@dataclass
class OptimizationResult:
    optimized_text: str
    changes: list[Change] = field(default_factory=list)
    original_score: int = 0
    optimized_score: int = 0
    score_improvement: int = 0
    optimized_data: Optional[ParsedResume] = None

    def to_dict(self) -> dict:
        return {
            "optimized_text": self.optimized_text,
            "changes": [asdict(change) for change in self.changes],
            "original_score": self.original_score,
            "optimized_score": self.optimized_score,
            "score_improvement": self.score_improvement,
            "optimized_data": self.optimized_data.to_dict() if self.optimized_data else None,
        }

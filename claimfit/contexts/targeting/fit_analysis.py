"""
Role fit analysis.

Summarizes how a candidate's claims cover a role: ranked matches bucketed into
strong / loose / stretch tiers, plus which must-have requirements are covered by
at least one claim and which are gaps.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from claimfit.contexts.targeting.claim_data_structure import Claim, Requirement, RoleIntent
from claimfit.contexts.targeting.logger import _log_debug
from claimfit.contexts.targeting.match_engine import (
    DEFAULT_MIN_SCORE,
    MatchResult,
    rank_claims,
    resolve_role_type,
)
from claimfit.contexts.targeting.scoring_tables import FIT_TIER_THRESHOLDS

FIT_TIERS = ("strong", "loose", "stretch")


def fit_tier(total_score: float) -> Optional[str]:
    """
    Bucket a total score into a fit tier.

    Returns:
        "strong" (>= 0.7), "loose" (>= 0.5), "stretch" (>= 0.3), or None below that
    """
    for tier in FIT_TIERS:
        if total_score >= FIT_TIER_THRESHOLDS[tier]:
            return tier
    return None


@dataclass
class FitAnalysis:
    """
    Fit of a claim set against one role.

    Attributes:
        role_type: Scoring profile used
        strong_fit: Results in the strong tier, best first
        loose_fit: Results in the loose tier, best first
        stretch: Results in the stretch tier, best first
        must_haves: Every must-have requirement of the role
        covered_must_haves: Must-haves matched by at least one tiered claim (role order)
        missing_must_haves: Must-haves no tiered claim matches (role order)
    """

    role_type: str
    strong_fit: list[MatchResult] = field(default_factory=list)
    loose_fit: list[MatchResult] = field(default_factory=list)
    stretch: list[MatchResult] = field(default_factory=list)
    must_haves: list[Requirement] = field(default_factory=list)
    covered_must_haves: list[Requirement] = field(default_factory=list)
    missing_must_haves: list[Requirement] = field(default_factory=list)

    @property
    def matches(self) -> list[MatchResult]:
        """All tiered results, best first."""
        return self.strong_fit + self.loose_fit + self.stretch

    @property
    def coverage_ratio(self) -> float:
        if not self.must_haves:
            return 1.0
        return len(self.covered_must_haves) / len(self.must_haves)

    @property
    def strong_claim_ids(self) -> list[str]:
        """Claim ids pre-selected for resume generation."""
        return [result.claim_id for result in self.strong_fit]

    def tier_counts(self) -> dict[str, int]:
        return {
            "strong": len(self.strong_fit),
            "loose": len(self.loose_fit),
            "stretch": len(self.stretch),
        }


def analyze_fit(
    claims: Iterable[Claim],
    role: RoleIntent,
    role_type: Optional[str] = None,
    min_score: float = DEFAULT_MIN_SCORE,
) -> FitAnalysis:
    """
    Rank claims against a role and summarize tiers and must-have coverage.

    Args:
        claims: Candidate claims
        role: Target role requirements
        role_type: Scoring profile for claim type relevance
        min_score: Results below this are left out of tiers and coverage

    Returns:
        FitAnalysis for the role
    """
    resolved_role_type = resolve_role_type(role, role_type)
    analysis = FitAnalysis(role_type=resolved_role_type, must_haves=list(role.must_haves))

    tiers = {"strong": analysis.strong_fit, "loose": analysis.loose_fit, "stretch": analysis.stretch}
    for result in rank_claims(claims, role, resolved_role_type):
        if result.total_score < min_score:
            continue
        tier = fit_tier(result.total_score)
        if tier is not None:
            tiers[tier].append(result)

    covered_labels = {label for result in analysis.matches for label in result.matched_requirements}
    for requirement in role.must_haves:
        if requirement.skill in covered_labels:
            analysis.covered_must_haves.append(requirement)
        else:
            analysis.missing_must_haves.append(requirement)

    _log_debug(
        f"Fit for '{role.label}': {analysis.tier_counts()}, "
        f"{len(analysis.covered_must_haves)}/{len(analysis.must_haves)} must-haves covered"
    )
    return analysis

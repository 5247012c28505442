"""
Claim-to-Role Match Engine

Deterministic scoring of how well a claim supports a target role, built from
four weighted components:
1. Skill match (claim skills against must-have and nice-to-have requirements)
2. Evidence strength (better supported claims score higher)
3. Claim type relevance (which claim types persuade for this kind of role)
4. Confidence (trust estimate produced by the extraction step)

All functions are pure: no I/O, no logging, no shared state. Unrecognized
vocabulary degrades to the documented default scores instead of raising.

Examples:
    >>> results = recommend_claims(claims, role, "manager", max_claims=5)
    >>> [r.claim_id for r in results]
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from claimfit.contexts.targeting.claim_data_structure import Claim, Requirement, RoleIntent
from claimfit.contexts.targeting.scoring_tables import (
    DEFAULT_ROLE_TYPE,
    NICE_TO_HAVE_WEIGHT,
    SCORE_WEIGHTS,
    UNCONSTRAINED_SKILL_MATCH_SCORE,
    evidence_score,
    type_relevance_score,
)

MATCH_TYPES = ("must_have", "nice_to_have", "general")
MUST_HAVE, NICE_TO_HAVE, GENERAL = MATCH_TYPES

# Beyond this, floats carry no cents and Decimal quantize runs out of precision
MAX_ROUNDABLE_SCORE = 1e15

DEFAULT_MAX_CLAIMS = 10
DEFAULT_MIN_SCORE = 0.3


@dataclass(frozen=True)
class MatchResult:
    """
    Score of a single claim against a role.

    Attributes:
        claim_id: Id of the scored claim
        total_score: Weighted sum of the component scores
        skill_match_score: Requirement coverage score
        evidence_score: Score for the claim's evidence strength
        type_relevance_score: Score for the claim type under the role type
        confidence_score: Claim confidence, as used in the total
        matched_requirements: Matched requirement labels, must-haves first
        match_type: Strongest requirement tier matched ("must_have", "nice_to_have", "general")
    """

    claim_id: str
    total_score: float
    skill_match_score: float
    evidence_score: float
    type_relevance_score: float
    confidence_score: float
    matched_requirements: tuple[str, ...]
    match_type: str

    def to_dict(self) -> dict:
        """Plain-container form for JSON output."""
        return {
            "claim_id": self.claim_id,
            "total_score": self.total_score,
            "skill_match_score": self.skill_match_score,
            "evidence_score": self.evidence_score,
            "type_relevance_score": self.type_relevance_score,
            "confidence_score": self.confidence_score,
            "matched_requirements": list(self.matched_requirements),
            "match_type": self.match_type,
        }


@dataclass(frozen=True)
class SkillMatch:
    """Intermediate result of matching claim skills against role requirements."""

    score: float
    matched_must_haves: tuple[str, ...]
    matched_nice_to_haves: tuple[str, ...]

    @property
    def matched_requirements(self) -> tuple[str, ...]:
        # A label listed in both tiers is reported once
        return tuple(dict.fromkeys(self.matched_must_haves + self.matched_nice_to_haves))

    @property
    def match_type(self) -> str:
        if self.matched_must_haves:
            return MUST_HAVE
        if self.matched_nice_to_haves:
            return NICE_TO_HAVE
        return GENERAL


def round_score(value: float) -> float:
    """Round half-up to two decimal places (0.745 -> 0.75, unlike built-in round)."""
    if not math.isfinite(value) or abs(value) >= MAX_ROUNDABLE_SCORE:
        return float(value)
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def skills_overlap(claim_skill: str, requirement_skill: str) -> bool:
    """
    Case-insensitive containment in either direction.

    "Python" matches "Python programming" and vice versa. Blank strings never match.
    """
    a = claim_skill.strip().lower()
    b = requirement_skill.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def _matched_labels(claim_skills: Sequence[str], requirements: Iterable[Requirement]) -> tuple:
    labels = []
    for requirement in requirements:
        if requirement.skill in labels:
            continue
        if any(skills_overlap(skill, requirement.skill) for skill in claim_skills):
            labels.append(requirement.skill)
    return tuple(labels)


def match_skills(claim_skills: Sequence[str], role: RoleIntent) -> SkillMatch:
    """
    Match claim skills against the role's must-have and nice-to-have requirements.

    Must-haves count 1.0 each and nice-to-haves 0.5 each, for both the matched
    total and the role's weighted requirement count. A role with no requirements
    scores a neutral 0.5 so claims still pass through ungated roles.

    Args:
        claim_skills: Skill names from the claim
        role: Target role

    Returns:
        SkillMatch with score in [0, 1] and the matched labels per tier
    """
    weighted_requirement_count = len(role.must_haves) + NICE_TO_HAVE_WEIGHT * len(
        role.nice_to_haves
    )
    if weighted_requirement_count == 0:
        return SkillMatch(UNCONSTRAINED_SKILL_MATCH_SCORE, (), ())

    matched_must = _matched_labels(claim_skills, role.must_haves)
    matched_nice = _matched_labels(claim_skills, role.nice_to_haves)

    raw = len(matched_must) + NICE_TO_HAVE_WEIGHT * len(matched_nice)
    return SkillMatch(min(raw / weighted_requirement_count, 1.0), matched_must, matched_nice)


def resolve_role_type(role: RoleIntent, role_type: Optional[str] = None) -> str:
    """Explicit role type wins, then the role's own role_type, then individual_contributor."""
    return role_type or role.role_type or DEFAULT_ROLE_TYPE


def score_claim_against_role(
    claim: Claim, role: RoleIntent, role_type: Optional[str] = None
) -> MatchResult:
    """
    Calculate the match score for one claim against a role.

    Args:
        claim: Claim to score
        role: Target role requirements
        role_type: Scoring profile for claim type relevance (see resolve_role_type)

    Returns:
        MatchResult with every score rounded to two decimals
    """
    role_type = resolve_role_type(role, role_type)

    skill_match = match_skills(claim.skills, role)
    evidence = evidence_score(claim.evidence_strength)
    relevance = type_relevance_score(role_type, claim.claim_type)
    # Used verbatim; range checks belong to the caller
    confidence = claim.confidence_score

    total = (
        skill_match.score * SCORE_WEIGHTS["skill_match"]
        + evidence * SCORE_WEIGHTS["evidence"]
        + relevance * SCORE_WEIGHTS["type_relevance"]
        + confidence * SCORE_WEIGHTS["confidence"]
    )

    return MatchResult(
        claim_id=claim.id,
        total_score=round_score(total),
        skill_match_score=round_score(skill_match.score),
        evidence_score=round_score(evidence),
        type_relevance_score=round_score(relevance),
        confidence_score=round_score(confidence),
        matched_requirements=skill_match.matched_requirements,
        match_type=skill_match.match_type,
    )


def rank_claims(
    claims: Iterable[Claim], role: RoleIntent, role_type: Optional[str] = None
) -> list[MatchResult]:
    """
    Score every claim and sort best first.

    Sorted by total_score, then skill_match_score, both descending. The sort is
    stable, so exact ties keep input order.
    """
    results = [score_claim_against_role(claim, role, role_type) for claim in claims]
    return sorted(results, key=lambda r: (r.total_score, r.skill_match_score), reverse=True)


def recommend_claims(
    claims: Iterable[Claim],
    role: RoleIntent,
    role_type: Optional[str] = None,
    max_claims: int = DEFAULT_MAX_CLAIMS,
    min_score: float = DEFAULT_MIN_SCORE,
) -> list[MatchResult]:
    """
    Get the top claims for a role above a minimum score.

    Args:
        claims: Candidate claims
        role: Target role requirements
        role_type: Scoring profile for claim type relevance
        max_claims: Maximum number of results
        min_score: Results scoring below this are dropped

    Returns:
        At most max_claims results, ranked, each with total_score >= min_score

    Raises:
        ValueError: If max_claims is negative
    """
    if max_claims < 0:
        raise ValueError(f"max_claims must be >= 0, got: {max_claims}")

    ranked = rank_claims(claims, role, role_type)
    return [result for result in ranked if result.total_score >= min_score][:max_claims]

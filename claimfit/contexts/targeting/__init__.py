"""
Targeting Context

Responsibilities:
- Scores how well each career claim supports a target role's requirements
- Ranks claims and recommends a filtered shortlist for resume composition
- Summarizes role fit (strong / loose / stretch tiers, covered and missing must-haves)
- Validates claim and role records at the boundary with the extraction step

Owns: Scoring tables, match scoring, ranking and recommendation, fit analysis
Never: Calls language models, parses documents, or persists results
"""

from claimfit.contexts.targeting.claim_data_structure import Claim, Requirement, RoleIntent
from claimfit.contexts.targeting.exceptions import (
    InvalidClaimStructureError,
    InvalidRecordStructureError,
    InvalidRoleStructureError,
)
from claimfit.contexts.targeting.fit_analysis import FitAnalysis, analyze_fit, fit_tier
from claimfit.contexts.targeting.match_engine import (
    MatchResult,
    rank_claims,
    recommend_claims,
    score_claim_against_role,
)

__all__ = [
    # Input records
    "Claim",
    "Requirement",
    "RoleIntent",
    # Scoring, ranking and recommendation
    "MatchResult",
    "score_claim_against_role",
    "rank_claims",
    "recommend_claims",
    # Fit analysis
    "FitAnalysis",
    "analyze_fit",
    "fit_tier",
    # Errors
    "InvalidRecordStructureError",
    "InvalidClaimStructureError",
    "InvalidRoleStructureError",
]

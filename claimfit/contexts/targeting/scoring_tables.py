"""
Compiled-in scoring tables for claim-to-role matching.

These are the only tunable parameters of the match engine. They are read-only
module constants so that a given claim/role pair always scores the same.
"""

from types import MappingProxyType
from typing import Mapping

CLAIM_TYPES = ("achievement", "responsibility", "skill", "credential", "context")
EVIDENCE_STRENGTHS = ("strong", "medium", "weak")
ROLE_TYPES = ("individual_contributor", "tech_lead", "manager", "director", "executive")

DEFAULT_ROLE_TYPE = "individual_contributor"

# Score for any unrecognized evidence strength, role type or claim type
DEFAULT_COMPONENT_SCORE = 0.5

# Sums to 1.0
SCORE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "skill_match": 0.50,
        "evidence": 0.25,
        "type_relevance": 0.15,
        "confidence": 0.10,
    }
)

EVIDENCE_SCORES: Mapping[str, float] = MappingProxyType(
    {
        "strong": 1.0,
        "medium": 0.6,
        "weak": 0.3,
    }
)

# role type -> claim type -> relevance
TYPE_RELEVANCE: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {
        "individual_contributor": MappingProxyType(
            {
                "achievement": 1.0,
                "skill": 0.9,
                "responsibility": 0.7,
                "credential": 0.5,
                "context": 0.3,
            }
        ),
        "tech_lead": MappingProxyType(
            {
                "achievement": 1.0,
                "responsibility": 0.9,
                "skill": 0.8,
                "credential": 0.5,
                "context": 0.4,
            }
        ),
        "manager": MappingProxyType(
            {
                "responsibility": 1.0,
                "achievement": 0.9,
                "skill": 0.6,
                "credential": 0.5,
                "context": 0.4,
            }
        ),
        "director": MappingProxyType(
            {
                "achievement": 1.0,
                "responsibility": 0.9,
                "context": 0.5,
                "credential": 0.6,
                "skill": 0.5,
            }
        ),
        "executive": MappingProxyType(
            {
                "achievement": 1.0,
                "responsibility": 0.8,
                "credential": 0.7,
                "context": 0.6,
                "skill": 0.4,
            }
        ),
    }
)

# Nice-to-have requirements count half as much as must-haves
NICE_TO_HAVE_WEIGHT = 0.5

# Skill-match score when the role lists no requirements at all
UNCONSTRAINED_SKILL_MATCH_SCORE = 0.5

# Lower bounds of the fit tiers used by fit analysis
FIT_TIER_THRESHOLDS: Mapping[str, float] = MappingProxyType(
    {
        "strong": 0.7,
        "loose": 0.5,
        "stretch": 0.3,
    }
)


def evidence_score(evidence_strength) -> float:
    """Look up the evidence score, defaulting for missing or unknown strengths."""
    return EVIDENCE_SCORES.get(evidence_strength, DEFAULT_COMPONENT_SCORE)


def type_relevance_score(role_type, claim_type) -> float:
    """Look up claim-type relevance for a role type, defaulting when either key is unknown."""
    row = TYPE_RELEVANCE.get(role_type)
    if row is None:
        return DEFAULT_COMPONENT_SCORE
    return row.get(claim_type, DEFAULT_COMPONENT_SCORE)

"""
Unit tests for the claim-to-role match engine.

Tests scoring, ranking and recommendation in claimfit.contexts.targeting.match_engine.
"""

import itertools
import math

import pytest

from claimfit.contexts.targeting import (
    Claim,
    Requirement,
    RoleIntent,
    rank_claims,
    recommend_claims,
    score_claim_against_role,
)
from claimfit.contexts.targeting.match_engine import (
    MATCH_TYPES,
    match_skills,
    resolve_role_type,
    round_score,
    skills_overlap,
)
from claimfit.contexts.targeting.scoring_tables import SCORE_WEIGHTS


def _role(must=(), nice=(), **kwargs):
    return RoleIntent(
        must_haves=tuple(Requirement(skill) for skill in must),
        nice_to_haves=tuple(Requirement(skill) for skill in nice),
        **kwargs,
    )


class TestScoreClaimAgainstRole:
    """Tests for score_claim_against_role."""

    def test_must_have_only_role_full_match(self, make_claim):
        """Matching the only must-have gives a perfect skill score."""
        result = score_claim_against_role(make_claim(), _role(must=["Python"]))

        assert result.claim_id == "c1"
        assert result.skill_match_score == 1.0
        assert result.evidence_score == 1.0
        assert result.type_relevance_score == 1.0
        assert result.confidence_score == 0.9
        assert result.total_score == 0.99
        assert result.match_type == "must_have"
        assert result.matched_requirements == ("Python",)

    def test_unmatched_nice_to_have_counts_half(self, make_claim, python_role):
        """An unmatched nice-to-have still weighs 0.5 in the requirement count."""
        result = score_claim_against_role(make_claim(), python_role, "individual_contributor")

        # 1 / (1 + 0.5)
        assert result.skill_match_score == 0.67
        assert result.total_score == 0.82
        assert result.match_type == "must_have"
        assert result.matched_requirements == ("Python",)

    def test_empty_role_is_neutral(self, make_claim, empty_role):
        result = score_claim_against_role(make_claim(), empty_role, "individual_contributor")

        assert result.skill_match_score == 0.5
        assert result.total_score == 0.74
        assert result.match_type == "general"
        assert result.matched_requirements == ()

    def test_nice_to_have_only_match(self, make_claim, python_role):
        result = score_claim_against_role(make_claim(skills=["SQL"]), python_role)

        assert result.skill_match_score == 0.33
        assert result.match_type == "nice_to_have"
        assert result.matched_requirements == ("SQL",)
        assert result.total_score == 0.66

    def test_must_haves_listed_before_nice_to_haves(self, make_claim, python_role):
        result = score_claim_against_role(make_claim(skills=["sql", "python"]), python_role)

        assert result.matched_requirements == ("Python", "SQL")
        assert result.skill_match_score == 1.0

    def test_must_have_dominates_nice_to_have(self, make_claim, python_role):
        must = score_claim_against_role(make_claim("a", skills=["Python"]), python_role)
        nice = score_claim_against_role(make_claim("b", skills=["SQL"]), python_role)

        assert must.match_type == "must_have"
        assert nice.match_type == "nice_to_have"
        assert must.skill_match_score > nice.skill_match_score

    def test_no_skills_against_constrained_role(self, make_claim, python_role):
        result = score_claim_against_role(make_claim(skills=[]), python_role)

        assert result.skill_match_score == 0.0
        assert result.match_type == "general"
        assert result.matched_requirements == ()

    def test_duplicate_requirement_label_matched_once(self, make_claim):
        role = _role(must=["Python", "Python"])
        result = score_claim_against_role(make_claim(), role)

        assert result.matched_requirements == ("Python",)
        # Both entries still count towards the requirement total
        assert result.skill_match_score == 0.5

    def test_label_in_both_tiers_reported_once(self, make_claim):
        role = _role(must=["Python"], nice=["Python"])
        result = score_claim_against_role(make_claim(), role)

        assert result.matched_requirements == ("Python",)
        assert result.skill_match_score == 1.0
        assert result.match_type == "must_have"

    @pytest.mark.parametrize(
        "strength, expected",
        [("strong", 1.0), ("medium", 0.6), ("weak", 0.3), (None, 0.5), ("anecdotal", 0.5)],
    )
    def test_evidence_scores(self, make_claim, empty_role, strength, expected):
        result = score_claim_against_role(make_claim(evidence_strength=strength), empty_role)
        assert result.evidence_score == expected

    @pytest.mark.parametrize(
        "role_type, claim_type, expected",
        [
            ("individual_contributor", "achievement", 1.0),
            ("individual_contributor", "context", 0.3),
            ("tech_lead", "skill", 0.8),
            ("manager", "responsibility", 1.0),
            ("manager", "achievement", 0.9),
            ("director", "credential", 0.6),
            ("executive", "skill", 0.4),
            ("astronaut", "achievement", 0.5),
            ("manager", "hobby", 0.5),
        ],
    )
    def test_type_relevance(self, make_claim, empty_role, role_type, claim_type, expected):
        result = score_claim_against_role(make_claim(claim_type=claim_type), empty_role, role_type)
        assert result.type_relevance_score == expected

    def test_out_of_range_confidence_used_verbatim(self, make_claim, empty_role):
        result = score_claim_against_role(make_claim(confidence_score=1.5), empty_role)

        assert result.confidence_score == 1.5
        # 0.25 + 0.25 + 0.15 + 0.15
        assert result.total_score == 0.8

    @pytest.mark.parametrize("confidence", [1e30, -1e30, math.inf])
    def test_huge_confidence_does_not_raise(self, make_claim, python_role, confidence):
        result = score_claim_against_role(make_claim(confidence_score=confidence), python_role)

        assert result.confidence_score == confidence
        assert result.skill_match_score == 0.67
        assert math.copysign(1, result.total_score) == math.copysign(1, confidence)
        assert abs(result.total_score) >= 1e28

    def test_infinite_confidence_from_record_ranks(self, python_role):
        claim = Claim.from_dict(
            {
                "id": "inf",
                "canonical_text": "Unbounded confidence",
                "claim_type": "skill",
                "confidence_score": math.inf,
            }
        )

        ranked = rank_claims([claim], python_role)

        assert ranked[0].total_score == math.inf
        assert recommend_claims([claim], python_role)[0].claim_id == "inf"

    def test_deterministic(self, make_claim, python_role):
        claim = make_claim(skills=["Python programming", "SQL Server"])
        first = score_claim_against_role(claim, python_role, "tech_lead")
        second = score_claim_against_role(claim, python_role, "tech_lead")

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_does_not_mutate_inputs(self, make_claim, python_role):
        claim = make_claim()
        before = (claim, python_role)
        score_claim_against_role(claim, python_role)
        assert (claim, python_role) == before

    def test_to_dict(self, make_claim, python_role):
        data = score_claim_against_role(make_claim(), python_role).to_dict()

        assert data["claim_id"] == "c1"
        assert data["matched_requirements"] == ["Python"]
        assert data["match_type"] == "must_have"
        assert set(data) == {
            "claim_id",
            "total_score",
            "skill_match_score",
            "evidence_score",
            "type_relevance_score",
            "confidence_score",
            "matched_requirements",
            "match_type",
        }


@pytest.mark.unit
def test_total_is_weighted_sum_of_components(make_claim):
    """Total stays within rounding tolerance of the weighted component sum."""
    roles = [
        _role(),
        _role(must=["Python"], nice=["SQL"]),
        _role(must=["Kubernetes", "Go", "Terraform"], nice=["AWS", "GCP"]),
        _role(nice=["Communication"]),
    ]
    skill_sets = [[], ["Python"], ["go", "aws"], ["SQL", "Kubernetes", "Terraform", "GCP"]]
    claim_types = ["achievement", "responsibility", "skill", "credential", "context"]
    strengths = ["strong", "medium", "weak", None]
    role_types = ["individual_contributor", "manager", "executive", "unknown"]

    for role, skills, claim_type, strength, role_type in itertools.product(
        roles, skill_sets, claim_types, strengths, role_types
    ):
        claim = make_claim(
            skills=skills, claim_type=claim_type, evidence_strength=strength, confidence_score=0.73
        )
        result = score_claim_against_role(claim, role, role_type)

        expected = (
            SCORE_WEIGHTS["skill_match"] * result.skill_match_score
            + SCORE_WEIGHTS["evidence"] * result.evidence_score
            + SCORE_WEIGHTS["type_relevance"] * result.type_relevance_score
            + SCORE_WEIGHTS["confidence"] * result.confidence_score
        )
        assert abs(result.total_score - expected) <= 0.01
        for score in (
            result.total_score,
            result.skill_match_score,
            result.evidence_score,
            result.type_relevance_score,
        ):
            assert 0.0 <= score <= 1.0
        assert (result.matched_requirements == ()) == (result.match_type == "general")
        assert result.match_type in MATCH_TYPES


@pytest.mark.unit
def test_weights_sum_to_one():
    assert sum(SCORE_WEIGHTS.values()) == pytest.approx(1.0)


@pytest.mark.unit
def test_scoring_tables_are_read_only():
    with pytest.raises(TypeError):
        SCORE_WEIGHTS["skill_match"] = 1.0


class TestSkillMatching:
    """Tests for the permissive substring skill match."""

    @pytest.mark.parametrize(
        "claim_skill, requirement_skill",
        [
            ("Python", "python"),
            ("Python programming", "Python"),
            ("SQL", "PostgreSQL"),
            ("R", "HR"),
        ],
    )
    def test_overlap(self, claim_skill, requirement_skill):
        assert skills_overlap(claim_skill, requirement_skill)
        assert skills_overlap(requirement_skill, claim_skill)

    @pytest.mark.parametrize(
        "claim_skill, requirement_skill",
        [("Java", "Python"), ("", "Python"), ("   ", "Python"), ("Python", "")],
    )
    def test_no_overlap(self, claim_skill, requirement_skill):
        assert not skills_overlap(claim_skill, requirement_skill)

    def test_blank_claim_skill_matches_nothing(self, python_role):
        match = match_skills(["", "  "], python_role)
        assert match.score == 0.0
        assert match.match_type == "general"

    def test_score_capped_at_one(self):
        role = _role(must=["Python"], nice=["Python"])
        assert match_skills(["Python"], role).score == 1.0


class TestRoundScore:
    """Tests for half-up rounding."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.745, 0.75),
            (0.125, 0.13),
            (0.9900000000000001, 0.99),
            (0.6666666666666666, 0.67),
            (1, 1.0),
            (0.0, 0.0),
        ],
    )
    def test_round_half_up(self, value, expected):
        assert round_score(value) == expected

    @pytest.mark.parametrize("value", [math.inf, -math.inf, 1e30, 1e15])
    def test_unroundable_values_returned_unchanged(self, value):
        assert round_score(value) == value

    def test_nan_returned_unchanged(self):
        assert math.isnan(round_score(math.nan))


class TestResolveRoleType:
    """Tests for role type resolution."""

    def test_default(self, empty_role):
        assert resolve_role_type(empty_role) == "individual_contributor"

    def test_role_type_from_role(self, make_claim):
        role = _role(role_type="manager")
        assert resolve_role_type(role) == "manager"

        result = score_claim_against_role(make_claim(claim_type="responsibility"), role)
        assert result.type_relevance_score == 1.0

    def test_explicit_argument_wins(self, make_claim):
        role = _role(role_type="manager")
        result = score_claim_against_role(
            make_claim(claim_type="responsibility"), role, "individual_contributor"
        )
        assert result.type_relevance_score == 0.7


def _scored_claims(make_claim):
    """Claims scoring 0.99, 0.74 and 0.3 against must-haves Python and Go."""
    role = _role(must=["Python", "Go"])
    claims = [
        make_claim("partial", skills=["Python"]),
        make_claim(
            "floor",
            skills=["Excel"],
            claim_type="credential",
            evidence_strength=None,
            confidence_score=1.0,
        ),
        make_claim("full", skills=["Python", "Go"]),
    ]
    return claims, role


class TestRankClaims:
    """Tests for rank_claims."""

    def test_sorted_by_total_score(self, make_claim):
        claims, role = _scored_claims(make_claim)
        ranked = rank_claims(claims, role)

        assert [r.claim_id for r in ranked] == ["full", "partial", "floor"]
        assert [r.total_score for r in ranked] == [0.99, 0.74, 0.3]

    def test_tie_broken_by_skill_match(self, make_claim):
        role = _role(must=["Python", "Go"])
        # 0 + 0.25 + 0.15 + 0.1
        no_skills = make_claim("no_skills", skills=[], confidence_score=1.0)
        # 0.25 + 0.075 + 0.075 + 0.1
        half_skills = make_claim(
            "half_skills",
            skills=["Python"],
            claim_type="credential",
            evidence_strength="weak",
            confidence_score=1.0,
        )

        ranked = rank_claims([no_skills, half_skills], role)

        assert ranked[0].total_score == ranked[1].total_score == 0.5
        assert [r.claim_id for r in ranked] == ["half_skills", "no_skills"]

    def test_exact_ties_keep_input_order(self, make_claim, python_role):
        claims = [make_claim(f"c{i}") for i in range(5)]

        assert [r.claim_id for r in rank_claims(claims, python_role)] == [
            "c0",
            "c1",
            "c2",
            "c3",
            "c4",
        ]
        assert [r.claim_id for r in rank_claims(list(reversed(claims)), python_role)] == [
            "c4",
            "c3",
            "c2",
            "c1",
            "c0",
        ]

    def test_non_increasing(self, make_claim, python_role):
        claims = [
            make_claim(f"c{i}", skills=skills, claim_type=claim_type, evidence_strength=strength)
            for i, (skills, claim_type, strength) in enumerate(
                itertools.product(
                    [[], ["SQL"], ["Python"], ["Python", "SQL"]],
                    ["achievement", "context", "skill"],
                    ["strong", "weak"],
                )
            )
        ]
        ranked = rank_claims(claims, python_role)

        for first, second in zip(ranked, ranked[1:]):
            assert first.total_score >= second.total_score
            if first.total_score == second.total_score:
                assert first.skill_match_score >= second.skill_match_score

    def test_empty(self, python_role):
        assert rank_claims([], python_role) == []


class TestRecommendClaims:
    """Tests for recommend_claims."""

    def test_min_score_filter(self, make_claim):
        claims, role = _scored_claims(make_claim)
        results = recommend_claims(claims, role, min_score=0.8)

        assert [r.claim_id for r in results] == ["full"]

    def test_min_score_is_inclusive(self, make_claim):
        claims, role = _scored_claims(make_claim)
        results = recommend_claims(claims, role)

        assert [r.claim_id for r in results] == ["full", "partial", "floor"]

    def test_truncates_after_filtering(self, make_claim):
        claims, role = _scored_claims(make_claim)
        results = recommend_claims(claims, role, max_claims=2, min_score=0.0)

        assert [r.claim_id for r in results] == ["full", "partial"]

    def test_default_max_claims(self, make_claim, python_role):
        claims = [make_claim(f"c{i}") for i in range(15)]
        assert len(recommend_claims(claims, python_role)) == 10

    def test_zero_max_claims(self, make_claim, python_role):
        assert recommend_claims([make_claim()], python_role, max_claims=0) == []

    def test_negative_max_claims_rejected(self, make_claim, python_role):
        with pytest.raises(ValueError, match="max_claims"):
            recommend_claims([make_claim()], python_role, max_claims=-1)

    def test_bounds_hold(self, make_claim, python_role):
        claims = [
            make_claim(f"c{i}", skills=skills, evidence_strength=strength)
            for i, (skills, strength) in enumerate(
                itertools.product([[], ["SQL"], ["Python"]], ["strong", "medium", "weak"])
            )
        ]
        for max_claims, min_score in itertools.product([0, 1, 3, 20], [0.0, 0.5, 0.7, 1.0]):
            results = recommend_claims(
                claims, python_role, max_claims=max_claims, min_score=min_score
            )
            assert len(results) <= max_claims
            assert all(r.total_score >= min_score for r in results)

    def test_empty(self, python_role):
        assert recommend_claims([], python_role) == []

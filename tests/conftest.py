"""Shared fixtures for ClaimFit tests."""

import pytest
from loguru import logger

from claimfit.contexts.targeting import Claim, Requirement, RoleIntent


@pytest.fixture(autouse=True)
def reset_loguru():
    """Drop sinks added by CLI runs so they don't outlive the captured streams."""
    yield
    logger.remove()


@pytest.fixture
def make_claim():
    """Factory for claims with sensible defaults."""

    def _make_claim(claim_id="c1", **overrides):
        fields = {
            "id": claim_id,
            "canonical_text": f"Claim {claim_id}",
            "claim_type": "achievement",
            "evidence_strength": "strong",
            "confidence_score": 0.9,
            "skills": ("Python", "Leadership"),
        }
        fields.update(overrides)
        fields["skills"] = tuple(fields["skills"])
        return Claim(**fields)

    return _make_claim


@pytest.fixture
def python_role():
    """Role with one must-have (Python) and one nice-to-have (SQL)."""
    return RoleIntent(
        must_haves=(Requirement("Python"),),
        nice_to_haves=(Requirement("SQL"),),
        seniority_level="senior",
        domain="engineering",
    )


@pytest.fixture
def empty_role():
    return RoleIntent()

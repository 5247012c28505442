"""
ClaimFit - deterministic claim-to-role matching for tailored resumes

Turns verified career claims (atomic, evidence-backed statements extracted from a
candidate's documents) into a ranked shortlist for a target role.

Architecture:
- Targeting Context: Claim scoring, ranking, recommendation and fit analysis
"""

__version__ = "0.1.0"

"""Bounded contexts for ClaimFit."""

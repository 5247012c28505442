"""
Claim and role data structures for the Targeting context.

Provides the read-only records consumed by the match engine:
- Claim: atomic, evidence-backed statement about a candidate's experience
- Requirement: one skill line item from a role's requirement list
- RoleIntent: structured requirements of a target role

Records arrive from an upstream extraction step as loosely-shaped JSON. The
factory methods here are the validation boundary: structural problems raise,
vocabulary problems are logged and kept so scoring falls back to its defaults.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from yaml import YAMLError

from claimfit.contexts.targeting.exceptions import (
    InvalidClaimStructureError,
    InvalidRecordStructureError,
    InvalidRoleStructureError,
)
from claimfit.contexts.targeting.logger import _log_debug, _log_warning
from claimfit.contexts.targeting.scoring_tables import (
    CLAIM_TYPES,
    EVIDENCE_STRENGTHS,
    ROLE_TYPES,
)


def _load_container(file_path: Path) -> Any:
    """
    Load a YAML or JSON file into plain Python containers.

    Text is taken literally: "${...}" in upstream claims is not an interpolation.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidRecordStructureError: If the file is not valid YAML or JSON
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    try:
        return OmegaConf.to_container(OmegaConf.load(file_path), resolve=False)
    except (YAMLError, OmegaConfBaseException) as e:
        raise InvalidRecordStructureError(f"Could not parse {file_path}: {e}") from e


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _string_tuple(value: Any, field_name: str, error_cls, record_id=None) -> tuple:
    """Coerce an optional list of strings into a tuple, rejecting other containers."""
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise error_cls(
            f"'{field_name}' must be a list", field_name=field_name, record_id=record_id, value=value
        )
    return tuple(str(item) for item in value if item is not None)


@dataclass(frozen=True)
class Claim:
    """
    An atomic statement about the candidate's experience.

    The match engine only reads claim_type, evidence_strength, confidence_score
    and skills. The remaining fields are carried for display.
    """

    id: str
    canonical_text: str
    claim_type: str
    evidence_strength: Optional[str] = None
    confidence_score: float = 0.0
    skills: tuple[str, ...] = ()

    # Upstream extraction details (informational)
    source_text: Optional[str] = None
    metrics: tuple[dict, ...] = ()
    risk_flags: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "Claim":
        """
        Build a Claim from an upstream record.

        Args:
            data: Mapping with at least id, canonical_text and claim_type

        Returns:
            Claim instance

        Raises:
            InvalidClaimStructureError: If required fields are missing or values have the wrong type
        """
        if not isinstance(data, dict):
            raise InvalidClaimStructureError("Claim record must be a mapping", value=data)

        record_id = data.get("id")
        for key in ("id", "canonical_text", "claim_type"):
            if data.get(key) is None:
                raise InvalidClaimStructureError(
                    f"Claim is missing required field '{key}'",
                    field_name=key,
                    record_id=record_id,
                )
        record_id = str(record_id)

        confidence = data.get("confidence_score", 0.0)
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            raise InvalidClaimStructureError(
                "'confidence_score' must be a number",
                field_name="confidence_score",
                record_id=record_id,
                value=confidence,
            )

        metrics = data.get("metrics") or []
        if not isinstance(metrics, list) or not all(isinstance(m, dict) for m in metrics):
            raise InvalidClaimStructureError(
                "'metrics' must be a list of mappings",
                field_name="metrics",
                record_id=record_id,
                value=metrics,
            )

        claim = cls(
            id=record_id,
            canonical_text=str(data["canonical_text"]),
            claim_type=str(data["claim_type"]),
            evidence_strength=_optional_text(data.get("evidence_strength")),
            confidence_score=float(confidence),
            skills=_string_tuple(data.get("skills"), "skills", InvalidClaimStructureError, record_id),
            source_text=_optional_text(data.get("source_text")),
            metrics=tuple(metrics),
            risk_flags=_string_tuple(
                data.get("risk_flags"), "risk_flags", InvalidClaimStructureError, record_id
            ),
        )
        claim.check_vocabulary()
        return claim

    @classmethod
    def from_file(cls, file_path: Path) -> "Claim":
        """Load a single claim from a YAML or JSON file."""
        return cls.from_dict(_load_container(file_path))

    @classmethod
    def load_many(cls, file_path: Path) -> list["Claim"]:
        """
        Load a list of claims from a YAML or JSON file.

        The file holds either a top-level list of claim records or a mapping with
        a 'claims' list (the shape returned by the extraction step).

        Raises:
            InvalidClaimStructureError: If the file shape is wrong, a record is invalid,
                or two claims share an id
        """
        data = _load_container(file_path)
        if isinstance(data, dict):
            if "claims" not in data:
                raise InvalidClaimStructureError(
                    f"Claims file must be a list or contain a 'claims' key: {file_path}"
                )
            data = data["claims"]

        if not isinstance(data, list):
            raise InvalidClaimStructureError(
                f"Claims must be a list: {file_path}", field_name="claims", value=data
            )

        claims = [cls.from_dict(record) for record in data]

        seen = set()
        for claim in claims:
            if claim.id in seen:
                raise InvalidClaimStructureError(
                    "Duplicate claim id", field_name="id", record_id=claim.id
                )
            seen.add(claim.id)

        _log_debug(f"Loaded {len(claims)} claim(s) from {file_path}")
        return claims

    def check_vocabulary(self) -> list[str]:
        """
        Warn about values outside the recognized vocabulary.

        Nothing is rejected: unknown types and strengths score at the default,
        and confidence is used verbatim.

        Returns:
            List of warning messages (empty when the claim is clean)
        """
        problems = []
        if self.claim_type not in CLAIM_TYPES:
            problems.append(f"unrecognized claim_type '{self.claim_type}'")
        if self.evidence_strength is not None and self.evidence_strength not in EVIDENCE_STRENGTHS:
            problems.append(f"unrecognized evidence_strength '{self.evidence_strength}'")
        if not 0.0 <= self.confidence_score <= 1.0:
            problems.append(f"confidence_score {self.confidence_score} outside [0, 1]")

        for problem in problems:
            _log_warning(f"Claim {self.id}: {problem}")
        return problems


@dataclass(frozen=True)
class Requirement:
    """One line item from a role's requirement list. Only skill is scored."""

    skill: str
    experience_level: Optional[str] = None
    context: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Requirement":
        """
        Build a Requirement from a mapping with a 'skill' key, or from a bare string.

        Raises:
            InvalidRoleStructureError: If the skill label is missing or blank
        """
        if isinstance(data, str):
            data = {"skill": data}
        if not isinstance(data, dict):
            raise InvalidRoleStructureError(
                "Requirement must be a mapping or a string", field_name="skill", value=data
            )

        skill = data.get("skill")
        if skill is None or not str(skill).strip():
            raise InvalidRoleStructureError(
                "Requirement is missing a skill label", field_name="skill", value=data
            )

        return cls(
            skill=str(skill),
            experience_level=_optional_text(data.get("experience_level")),
            context=_optional_text(data.get("context")),
        )


@dataclass(frozen=True)
class RoleIntent:
    """
    Structured requirements of a target role.

    Requirement order is preserved for display but does not affect scoring.
    seniority_level and domain are informational.
    """

    must_haves: tuple[Requirement, ...] = ()
    nice_to_haves: tuple[Requirement, ...] = ()
    seniority_level: Optional[str] = None
    domain: Optional[str] = None

    # Upstream extraction details
    role_type: Optional[str] = None
    role_title: Optional[str] = None
    company_name: Optional[str] = None
    responsibilities: tuple[str, ...] = field(default_factory=tuple)
    summary: Optional[str] = None

    @property
    def label(self) -> str:
        """Human-readable name for logs and reports."""
        if self.role_title and self.company_name:
            return f"{self.role_title} at {self.company_name}"
        return self.role_title or self.domain or "untitled role"

    @classmethod
    def from_dict(cls, data: dict) -> "RoleIntent":
        """
        Build a RoleIntent from an upstream record.

        Missing requirement lists are treated as empty.

        Raises:
            InvalidRoleStructureError: If requirement lists or requirements are malformed
        """
        if not isinstance(data, dict):
            raise InvalidRoleStructureError("Role record must be a mapping", value=data)

        requirement_lists = {}
        for key in ("must_haves", "nice_to_haves"):
            value = data.get(key) or []
            if not isinstance(value, list):
                raise InvalidRoleStructureError(
                    f"'{key}' must be a list", field_name=key, value=value
                )
            requirement_lists[key] = tuple(Requirement.from_dict(item) for item in value)

        role_type = _optional_text(data.get("role_type"))
        if role_type is not None and role_type not in ROLE_TYPES:
            _log_warning(f"Role: unrecognized role_type '{role_type}', type relevance will default")

        return cls(
            must_haves=requirement_lists["must_haves"],
            nice_to_haves=requirement_lists["nice_to_haves"],
            seniority_level=_optional_text(data.get("seniority_level")),
            domain=_optional_text(data.get("domain")),
            role_type=role_type,
            role_title=_optional_text(data.get("role_title")),
            company_name=_optional_text(data.get("company_name")),
            responsibilities=_string_tuple(
                data.get("responsibilities"), "responsibilities", InvalidRoleStructureError
            ),
            summary=_optional_text(data.get("summary")),
        )

    @classmethod
    def from_file(cls, file_path: Path) -> "RoleIntent":
        """Load a role intent from a YAML or JSON file."""
        return cls.from_dict(_load_container(file_path))

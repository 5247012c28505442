#!/usr/bin/env python3
"""
Claim Matching CLI

Scores a candidate's claims against a target role using the targeting context.

Commands:
    rank      - Rank every claim against the role
    recommend - Top claims above a minimum score (table or JSON)
    fit       - Strong / loose / stretch tiers and must-have coverage

Input files are YAML or JSON. The claims file is a list of claim records (or a
mapping with a 'claims' list); the role file is a single role intent record.

Examples:\n

    match_claims.py rank claims.yaml role.yaml                          # Full ranking

    match_claims.py recommend claims.yaml role.yaml --max-claims 5      # Shortlist

    match_claims.py recommend claims.json role.json --json --quiet      # Machine-readable

    match_claims.py fit claims.yaml role.yaml --role-type manager       # Fit summary
"""

import json
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from claimfit.contexts.targeting import (
    Claim,
    InvalidRecordStructureError,
    MatchResult,
    RoleIntent,
    analyze_fit,
    rank_claims,
    recommend_claims,
)
from claimfit.contexts.targeting.logger import (
    _log_error,
    log_inputs_loaded,
    log_ranking_result,
    setup_targeting_logger,
)
from claimfit.contexts.targeting.match_engine import (
    DEFAULT_MAX_CLAIMS,
    DEFAULT_MIN_SCORE,
    resolve_role_type,
)
from claimfit.utils.report_formatter import Column, TableFormatter, format_percentage

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Score career claims against a target role's requirements",
    add_completion=False,
    invoke_without_command=True,
)

ClaimsFileArg = Annotated[Path, typer.Argument(help="YAML/JSON file with claim records")]
RoleFileArg = Annotated[Path, typer.Argument(help="YAML/JSON file with the role intent")]
RoleTypeOption = Annotated[
    Optional[str],
    typer.Option(
        "--role-type",
        "-r",
        help="Scoring profile (individual_contributor, tech_lead, manager, director, executive)",
    ),
]
MinScoreOption = Annotated[
    float, typer.Option("--min-score", help="Drop claims scoring below this")
]
QuietOption = Annotated[
    bool, typer.Option("--quiet", "-q", help="Log to file only, not the console")
]

RESULT_COLUMNS = [
    Column("#", 3, ">"),
    Column("Claim", 42),
    Column("Total", 6, ">", precision=2),
    Column("Skill", 6, ">", precision=2),
    Column("Evid.", 6, ">", precision=2),
    Column("Type", 6, ">", precision=2),
    Column("Match", 13),
    Column("Requirements", 30),
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _start_session(command: str, quiet: bool) -> Path:
    """Configure the targeting logger for one CLI invocation."""
    log_dir = LOGS_PATH / f"match_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    return setup_targeting_logger(log_dir, command=command, console=not quiet)


def _load_inputs(claims_file: Path, role_file: Path) -> tuple[list[Claim], RoleIntent]:
    """Load claims and role, exiting with code 1 on bad input."""
    try:
        claims = Claim.load_many(claims_file)
        role = RoleIntent.from_file(role_file)
    except (FileNotFoundError, InvalidRecordStructureError) as e:
        _log_error(str(e).splitlines()[0])
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    return claims, role


def _results_table(title: str, results: list[MatchResult], claims: list[Claim]) -> str:
    """Render match results as an aligned text table."""
    texts = {claim.id: claim.canonical_text for claim in claims}
    table = TableFormatter(RESULT_COLUMNS).add_section_header(title).add_table_header()

    for rank, result in enumerate(results, start=1):
        table.add_row(
            [
                rank,
                texts.get(result.claim_id, result.claim_id),
                result.total_score,
                result.skill_match_score,
                result.evidence_score,
                result.type_relevance_score,
                result.match_type,
                ", ".join(result.matched_requirements) or "-",
            ]
        )

    if not results:
        table.add_text("(no claims)")
    return table.render()


@app.command("rank")
def rank_command(
    claims_file: ClaimsFileArg,
    role_file: RoleFileArg,
    role_type: RoleTypeOption = None,
    quiet: QuietOption = False,
):
    """
    Rank every claim against the role, best first.

    Examples:\n

        $ match_claims.py rank claims.yaml role.yaml

        $ match_claims.py rank claims.yaml role.yaml --role-type tech_lead
    """
    _start_session("rank", quiet)
    claims, role = _load_inputs(claims_file, role_file)
    resolved = resolve_role_type(role, role_type)
    log_inputs_loaded(len(claims), role.label, resolved)

    start = time.time()
    results = rank_claims(claims, role, resolved)
    log_ranking_result("rank", len(results), len(claims), time.time() - start)

    typer.echo(_results_table(f"Ranking for {role.label} ({resolved})", results, claims))


@app.command("recommend")
def recommend_command(
    claims_file: ClaimsFileArg,
    role_file: RoleFileArg,
    role_type: RoleTypeOption = None,
    max_claims: Annotated[
        int, typer.Option("--max-claims", "-n", min=0, help="Maximum claims to return")
    ] = DEFAULT_MAX_CLAIMS,
    min_score: MinScoreOption = DEFAULT_MIN_SCORE,
    as_json: Annotated[bool, typer.Option("--json", help="Print results as JSON")] = False,
    quiet: QuietOption = False,
):
    """
    Recommend the top claims for the role.

    Examples:\n

        $ match_claims.py recommend claims.yaml role.yaml --max-claims 5 --min-score 0.5

        $ match_claims.py recommend claims.yaml role.yaml --json --quiet > picks.json
    """
    _start_session("recommend", quiet)
    claims, role = _load_inputs(claims_file, role_file)
    resolved = resolve_role_type(role, role_type)
    log_inputs_loaded(len(claims), role.label, resolved)

    start = time.time()
    results = recommend_claims(
        claims, role, resolved, max_claims=max_claims, min_score=min_score
    )
    log_ranking_result("recommend", len(results), len(claims), time.time() - start)

    if as_json:
        typer.echo(json.dumps([result.to_dict() for result in results], indent=2))
        return

    title = f"Recommended claims for {role.label} ({resolved}, min score {min_score:.2f})"
    typer.echo(_results_table(title, results, claims))


@app.command("fit")
def fit_command(
    claims_file: ClaimsFileArg,
    role_file: RoleFileArg,
    role_type: RoleTypeOption = None,
    min_score: MinScoreOption = DEFAULT_MIN_SCORE,
    quiet: QuietOption = False,
):
    """
    Summarize how the claims fit the role.

    Lists strong (>= 0.7), loose (>= 0.5) and stretch (>= 0.3) matches, then the
    must-have requirements that are covered and the gaps.

    Examples:\n

        $ match_claims.py fit claims.yaml role.yaml
    """
    _start_session("fit", quiet)
    claims, role = _load_inputs(claims_file, role_file)
    resolved = resolve_role_type(role, role_type)
    log_inputs_loaded(len(claims), role.label, resolved)

    analysis = analyze_fit(claims, role, resolved, min_score=min_score)
    texts = {claim.id: claim.canonical_text for claim in claims}

    typer.secho(f"\nHow you fit {role.label} ({resolved})", fg=typer.colors.BLUE, bold=True)

    for label, tier in (
        ("Strong fit", analysis.strong_fit),
        ("Loose fit", analysis.loose_fit),
        ("Stretch", analysis.stretch),
    ):
        typer.echo(f"\n{label} ({len(tier)})")
        for result in tier:
            typer.echo(f"  {result.total_score:.2f}  {texts.get(result.claim_id, result.claim_id)}")

    covered = len(analysis.covered_must_haves)
    total = len(analysis.must_haves)
    if total:
        typer.echo(
            f"\nMust-haves covered: {covered}/{total} ({format_percentage(covered, total)})"
        )
    else:
        typer.echo("\nMust-haves covered: role lists no must-haves")
    for requirement in analysis.missing_must_haves:
        detail = f" ({requirement.experience_level})" if requirement.experience_level else ""
        typer.secho(f"  Gap: {requirement.skill}{detail}", fg=typer.colors.RED)

    if analysis.strong_claim_ids:
        typer.echo(f"\nStrong claim ids: {','.join(analysis.strong_claim_ids)}")


if __name__ == "__main__":
    app()

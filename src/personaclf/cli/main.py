"""Typer CLI entrypoint and command definitions for personaclf."""

import json
from pathlib import Path
from typing import List, Optional

import typer

app = typer.Typer()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Classify questionnaire answers into personality archetypes."""
    from personaclf.core.logging import configure_logging

    configure_logging(verbose)


def _load_model_or_exit(model_path: Optional[str]):
    """Return the model at *model_path* (or the reference model), exiting 1 on failure."""
    from personaclf.core.errors import ConfigurationError
    from personaclf.core.model_io import load_model
    from personaclf.core.reference import reference_model

    if model_path is None:
        return reference_model()
    path = Path(model_path)
    if not path.exists():
        typer.echo(f"Model file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        return load_model(path)
    except ConfigurationError as exc:
        typer.echo(f"Invalid model {path}: {exc}", err=True)
        raise typer.Exit(code=1)


# -- features -----------------------------------------------------------------
features_app = typer.Typer()
app.add_typer(features_app, name="features")


@features_app.command("list")
def features_list_cmd(
    category: Optional[str] = typer.Option(None, help="Only show one category (social, cognitive, behavioral, lifestyle)"),
) -> None:
    """List the questionnaire features in canonical order."""
    from personaclf.core.defaults import SCORE_MAX, SCORE_MIN
    from personaclf.core.schema import FEATURE_SPECS_V1, FeatureSchemaV1, features_by_category
    from personaclf.core.types import CATEGORY_TITLES, FeatureCategory

    if category is not None and category not in set(FeatureCategory):
        typer.echo(f"Unknown category {category!r}; expected one of {[c.value for c in FeatureCategory]}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Feature schema {FeatureSchemaV1.VERSION} ({FeatureSchemaV1.SCHEMA_HASH})")
    typer.echo(f"Answers are scores from {SCORE_MIN:g} to {SCORE_MAX:g}; unanswered features count as 0.")
    for cat, specs in features_by_category().items():
        if category is not None and cat != category:
            continue
        typer.echo(f"\n{CATEGORY_TITLES[cat]} [{cat.value}]")
        for spec in specs:
            idx = FEATURE_SPECS_V1.index(spec)
            typer.echo(f"  {idx:>2}  {spec.id:<26} {spec.label}")


# -- model --------------------------------------------------------------------
model_app = typer.Typer()
app.add_typer(model_app, name="model")


@model_app.command("show")
def model_show_cmd(
    model_path: Optional[str] = typer.Option(None, "--model", help="Model document (JSON/YAML); defaults to the reference model"),
) -> None:
    """Print a summary of a model."""
    model = _load_model_or_exit(model_path)
    typer.echo(f"Fingerprint: {model.fingerprint}")
    typer.echo(f"Features:    {model.n_features}")
    typer.echo(f"Classes:     {model.n_classes}")
    for label, intercept in zip(model.classes, model.intercepts):
        typer.echo(f"  {label}  (intercept {intercept:+.3f})")


@model_app.command("export")
def model_export_cmd(
    out: str = typer.Option(..., "--out", help="Destination .json/.yaml path"),
) -> None:
    """Write the reference model as a model document."""
    from personaclf.core.errors import ConfigurationError
    from personaclf.core.model_io import save_model
    from personaclf.core.reference import reference_model

    model = reference_model()
    try:
        path = save_model(model, Path(out))
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Reference model {model.fingerprint} written to {path}")


@model_app.command("validate")
def model_validate_cmd(
    path: str = typer.Argument(..., help="Model document to validate"),
) -> None:
    """Check that a model document loads and satisfies every invariant."""
    model = _load_model_or_exit(path)
    typer.echo(f"OK: {model.n_classes} classes, {model.n_features} features, fingerprint {model.fingerprint}")


# -- predict ------------------------------------------------------------------


def _parse_assignments(assignments: List[str]) -> dict[str, float | str]:
    parsed: dict[str, float | str] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected FEATURE=VALUE, got {item!r}", param_hint="--set")
        try:
            parsed[key.strip()] = float(value)
        except ValueError:
            parsed[key.strip()] = value.strip()
    return parsed


@app.command("predict")
def predict_cmd(
    answers: Optional[str] = typer.Option(None, "--answers", help="JSON/YAML mapping of feature id to score"),
    assignments: Optional[List[str]] = typer.Option(None, "--set", help="Override one answer, e.g. --set social_energy=8"),
    model_path: Optional[str] = typer.Option(None, "--model", help="Model document (JSON/YAML); defaults to the reference model"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    out: Optional[str] = typer.Option(None, "--out", help="Also export the result to this JSON file"),
    include_answers: bool = typer.Option(False, "--include-answers", help="Embed the answers in the exported JSON"),
) -> None:
    """Classify one answer sheet.  Unanswered features count as 0."""
    from personaclf.core.errors import ConfigurationError, DimensionMismatch
    from personaclf.core.model_io import read_document
    from personaclf.core.schema import FeatureSchemaV1
    from personaclf.infer.predictor import predict
    from personaclf.report.export import (
        behavioral_note,
        export_result_json,
        format_breakdown,
        result_payload,
    )

    raw_input: dict = {}
    if answers is not None:
        answers_path = Path(answers)
        if not answers_path.exists():
            typer.echo(f"Answers file not found: {answers_path}", err=True)
            raise typer.Exit(code=1)
        try:
            doc = read_document(answers_path)
        except ConfigurationError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1)
        if not isinstance(doc, dict):
            typer.echo(f"Answers file {answers_path} must contain a mapping", err=True)
            raise typer.Exit(code=1)
        raw_input.update(doc)
    raw_input.update(_parse_assignments(assignments or []))

    unknown = sorted(str(k) for k in raw_input if k not in FeatureSchemaV1.FEATURE_IDS)
    if unknown:
        typer.echo(f"Ignoring unknown features: {', '.join(unknown)}", err=True)

    model = _load_model_or_exit(model_path)
    try:
        result = predict(raw_input, model)
    except DimensionMismatch as exc:
        typer.echo(f"Analysis unavailable: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result_payload(result, model), indent=2))
    else:
        typer.echo(f"The {result.label}")
        for line in format_breakdown(result):
            typer.echo(line)
        typer.echo(behavioral_note(result))

    if out is not None:
        path = export_result_json(
            result, model, Path(out), raw_input if include_answers else None,
        )
        typer.echo(f"Result written to {path}", err=as_json)


# -- infer --------------------------------------------------------------------
infer_app = typer.Typer()
app.add_typer(infer_app, name="infer")


@infer_app.command("batch")
def infer_batch_cmd(
    input_path: str = typer.Option(..., "--input", help="CSV/Parquet table, one answer sheet per row"),
    out: str = typer.Option(..., "--out", help="Destination CSV/Parquet path"),
    model_path: Optional[str] = typer.Option(None, "--model", help="Model document (JSON/YAML); defaults to the reference model"),
) -> None:
    """Classify every row of a table of answer sheets."""
    from personaclf.infer.batch import run_batch_file

    in_path = Path(input_path)
    if not in_path.exists():
        typer.echo(f"Input file not found: {in_path}", err=True)
        raise typer.Exit(code=1)

    model = _load_model_or_exit(model_path)
    try:
        out_path = run_batch_file(in_path, Path(out), model)
    except ValueError as exc:
        typer.echo(f"Analysis unavailable: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Predictions written to {out_path}")


if __name__ == "__main__":
    app()

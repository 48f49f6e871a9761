"""Command-line entrypoints for SimpBalancer."""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Annotated, Any, Dict

import typer

from simpbalancer.balancer import BalancerConfiguration, balance_chemical_equation
from simpbalancer.errors import ChemBalanceError
from simpbalancer.models import ChemistryResult, ChemistryStep
from simpbalancer.stoichiometry import (
    analyze_molecule,
    calculate_concentration,
    calculate_stoichiometry,
)

app = typer.Typer(add_completion=False)


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log solver details.")] = False,
) -> None:
    """Balance chemical equations and run stoichiometry calculations."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


def _parse_configuration(data: Dict[str, Any]) -> BalancerConfiguration:
    known = {field.name for field in dataclasses.fields(BalancerConfiguration)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
    return BalancerConfiguration(**data)


def _emit(payload: Dict[str, Any], output: Path | None = None) -> None:
    json_output = json.dumps(payload, indent=2, ensure_ascii=False)
    typer.echo(json_output)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(json_output)


def _error_payload(subject: str, error: Exception) -> Dict[str, Any]:
    if isinstance(error, ChemBalanceError):
        code, message = error.code, error.message
    else:
        code, message = "INVALID_INPUT", str(error)
    result = ChemistryResult(
        equation=subject,
        result="Error",
        steps=(ChemistryStep("Error", message),),
        error=message,
    ).to_dict()
    result["code"] = code
    return result


@app.command()
def balance(
    equation: Annotated[str, typer.Argument(help='Equation such as "H2 + O2 -> H2O".')],
    strict: Annotated[bool, typer.Option(help="Reject unrecognized characters.")] = False,
    config: Annotated[
        Path | None, typer.Option(help="JSON file with balancer settings.")
    ] = None,
    output: Annotated[
        Path | None, typer.Option(help="Path to save output JSON.")
    ] = None,
) -> None:
    """Balance a chemical equation."""
    settings: Dict[str, Any] = {}
    if config is not None:
        with open(config, "r", encoding="utf-8") as f:
            settings = json.load(f)
    if strict:
        settings["strict"] = True
    configuration = _parse_configuration(settings)

    result = balance_chemical_equation(equation, configuration)
    _emit(result.to_dict(), output)
    if result.result == "Error":
        raise typer.Exit(code=1)


@app.command("molar-mass")
def molar_mass(
    formula: Annotated[str, typer.Argument(help="Formula such as Ca(OH)2.")],
) -> None:
    """Molar mass, empirical formula and composition of a compound."""
    try:
        result = analyze_molecule(formula)
    except ChemBalanceError as error:
        _emit(_error_payload(formula, error))
        raise typer.Exit(code=1)
    _emit(result.to_dict())


@app.command()
def stoichiometry(
    equation: Annotated[str, typer.Argument(help="Reaction equation.")],
    amount: Annotated[float, typer.Option(help="Known amount.")],
    known: Annotated[str, typer.Option(help="Formula of the known compound.")],
    target: Annotated[str, typer.Option(help="Formula of the target compound.")],
    unit: Annotated[str, typer.Option(help="g, mol or molecules.")] = "g",
) -> None:
    """Convert an amount of one compound into the amount of another."""
    try:
        result = calculate_stoichiometry(equation, amount, known, target, unit)
    except (ChemBalanceError, ValueError) as error:
        _emit(_error_payload(equation, error))
        raise typer.Exit(code=1)
    _emit(result.to_dict())
    if result.result == "Error":
        raise typer.Exit(code=1)


@app.command()
def concentration(
    solute: Annotated[str, typer.Argument(help="Formula of the solute.")],
    mass: Annotated[float, typer.Option(help="Solute mass (g).")],
    volume: Annotated[float, typer.Option(help="Solution volume (L).")],
    unit: Annotated[str, typer.Option(help="M, m or %.")] = "M",
) -> None:
    """Concentration of a solute dissolved in water."""
    try:
        result = calculate_concentration(solute, mass, volume, unit)
    except (ChemBalanceError, ValueError) as error:
        _emit(_error_payload(solute, error))
        raise typer.Exit(code=1)
    _emit(result.to_dict())

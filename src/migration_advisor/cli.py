"""CLI for the Migration Advisor.

Provides command-line interface for analyzing application inventories and
asking follow-up questions about the resulting recommendation.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .app_logging import setup_logging
from .config import AdvisorConfig, find_config_file, get_config, load_config
from .engine import MigrationAdvisor, validate_inventory
from .narrative import OpenAINarrativeGenerator, answer_question, summarize_recommendation
from .schema import MigrationRecommendation

console = Console()


def _resolve_config(config_path: Optional[str]) -> AdvisorConfig:
    """Load an explicit config file, or the first one found on the search path."""
    if config_path:
        return load_config(Path(config_path))
    found = find_config_file()
    if found:
        return load_config(found)
    return get_config()


@click.group()
@click.version_option(version="1.0.0", prog_name="migration-advisor")
def main():
    """Azure Migration Advisor.

    Sizes, prices and rates the migration of an on-premises application
    to Azure from its server inventory.
    """
    pass


@main.command("analyze")
@click.option(
    "--input", "-i",
    "input_file",
    required=True,
    type=click.Path(exists=True),
    help="Path to application inventory JSON (appdata.json)"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results"
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True),
    help="Path to advisor configuration YAML"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug logging"
)
def analyze_cmd(
    input_file: str,
    out: Optional[str],
    config_path: Optional[str],
    json_output: bool,
    verbose: bool,
):
    """Analyze an application inventory and recommend Azure targets.

    Examples:
        migration-advisor analyze -i appdata.json
        migration-advisor analyze -i appdata.json -o analysis.json
        migration-advisor analyze -i appdata.json -j
    """
    if verbose:
        setup_logging("DEBUG", dev_mode=True)

    try:
        advisor = MigrationAdvisor(_resolve_config(config_path))
        inventory = advisor.load_inventory(input_file)

        if not json_output:
            console.print("\n[bold blue]Azure Migration Advisor[/bold blue]")
            console.print(
                f"Loaded application: {inventory.application_name} ({inventory.application_acronym})"
            )
            console.print()

        result = advisor.analyze(inventory)

        if json_output:
            output_json(result, out)
        else:
            display_result(result)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("validate")
@click.option(
    "--input", "-i",
    "input_file",
    required=True,
    type=click.Path(),
    help="Path to application inventory JSON (appdata.json)"
)
def validate_cmd(input_file: str):
    """Validate an application inventory file.

    Fields that cannot be parsed are listed; they count as zero during analysis.
    """
    is_valid, issues = validate_inventory(input_file)
    if is_valid:
        console.print(f"[green]✓ Inventory valid: {input_file}[/green]")
    else:
        console.print(f"[red]✗ Inventory invalid: {input_file}[/red]")

    for issue in issues:
        console.print(f"  - {issue}")

    sys.exit(0 if is_valid else 1)


@main.command("ask")
@click.option(
    "--input", "-i",
    "input_file",
    required=True,
    type=click.Path(exists=True),
    help="Path to application inventory JSON (appdata.json)"
)
@click.option(
    "--question", "-q",
    required=True,
    help="Follow-up question about the recommendation"
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True),
    help="Path to advisor configuration YAML"
)
def ask_cmd(input_file: str, question: str, config_path: Optional[str]):
    """Ask a follow-up question about an application's recommendation.

    Requires OPENAI_API_KEY, or AZURE_OPENAI_ENDPOINT and AZURE_OPENAI_API_KEY.

    Example:
        migration-advisor ask -i appdata.json -q "Can you break down the costs?"
    """
    try:
        config = _resolve_config(config_path)
        advisor = MigrationAdvisor(config)
        result = advisor.analyze_file(input_file)

        console.print(Panel(summarize_recommendation(result), title=result.application_name))

        generator = OpenAINarrativeGenerator(config.narrative)
        with console.status("Asking the migration architect..."):
            answer = answer_question(generator, result, question)

        console.print(Panel(answer, title=question))

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def display_result(result: MigrationRecommendation):
    """Display a recommendation in formatted text."""
    current = result.current_state
    target = result.target_state
    costs = result.estimated_costs

    console.print(Panel(
        f"[bold]{result.application_name}[/bold]\n\n"
        f"Region: [bold cyan]{target.region}[/bold cyan]\n"
        f"Complexity: [bold]{result.complexity.overall_complexity}[/bold] "
        f"({result.complexity.estimated_timeframe})\n"
        f"Monthly Cost: [bold green]${costs.total_monthly_cost:.2f}[/bold green]",
        title="Azure Migration Analysis",
    ))

    # Current state
    console.print("\n[bold]Current State:[/bold]")
    console.print(f"  • Total Servers: {current.total_servers}")
    console.print(
        f"  • Production: {current.production_servers} | "
        f"Non-Production: {current.non_production_servers}"
    )
    console.print(f"  • Hosting Model: {current.hosting_model}")
    console.print(f"  • Technologies: {', '.join(current.technologies)}")
    console.print(f"  • Business Criticality: {current.business_criticality}")

    if current.server_specifications:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Server", style="cyan", no_wrap=True)
        table.add_column("Environment")
        table.add_column("Cores", justify="right")
        table.add_column("Memory (GB)", justify="right")
        table.add_column("Disk (GB)", justify="right")
        table.add_column("Location")
        for server in current.server_specifications:
            table.add_row(
                server.server_name,
                server.environment,
                str(server.cores),
                str(server.memory_mb // 1024),
                str(server.disk_gb),
                server.location,
            )
        console.print(table)

    # Target state
    console.print("\n[bold]Recommended Azure Services:[/bold]\n")
    for service in target.recommended_services:
        console.print(f"  [bold cyan]{service.service_name}[/bold cyan] ({service.sku})")
        console.print(f"     Size: {service.size}")
        console.print(
            f"     Resources: {service.recommended_cores} vCPUs, "
            f"{service.recommended_memory_gb}GB RAM, {service.recommended_storage_gb}GB storage"
        )
        console.print(f"     Estimated Cost: ${service.estimated_monthly_cost:.2f}/month")
        console.print(f"     [dim]{service.justification}[/dim]")
        console.print()

    console.print("[bold]Key Recommendations:[/bold]")
    for item in result.key_recommendations:
        console.print(f"  [green]•[/green] {item}")

    console.print("\n[bold]Migration Complexity:[/bold]")
    for factor in result.complexity.complexity_factors:
        console.print(f"  • {factor}")
    console.print("  [bold]Prerequisites:[/bold]")
    for prereq in result.complexity.prerequisites:
        console.print(f"    • {prereq}")

    cost_table = Table(show_header=True, header_style="bold", title="Cost Estimates (USD)")
    cost_table.add_column("Item")
    cost_table.add_column("Amount", justify="right")
    cost_table.add_row("Monthly Compute", f"${costs.monthly_compute_cost:.2f}")
    cost_table.add_row("Monthly Storage", f"${costs.monthly_storage_cost:.2f}")
    cost_table.add_row("Monthly Networking", f"${costs.monthly_networking_cost:.2f}")
    cost_table.add_row("[bold]Total Monthly[/bold]", f"[bold]${costs.total_monthly_cost:.2f}[/bold]")
    cost_table.add_row("Annual", f"${costs.annual_cost:.2f}")
    cost_table.add_row("Migration (one-time)", f"${costs.migration_cost:.2f}")
    console.print()
    console.print(cost_table)
    console.print(f"  [dim]Tips: {costs.cost_optimization_tips}[/dim]")

    security = target.security
    console.print("\n[bold]Security Recommendations:[/bold]")
    for heading, items in (
        ("Identity & Access", security.identity_and_access),
        ("Network Security", security.network_security),
        ("Data Protection", security.data_protection),
    ):
        if items:
            console.print(f"  {heading}:")
            for item in items:
                console.print(f"    • {item}")

    console.print("\n[bold]Risks and Considerations:[/bold]")
    for risk in result.risks_and_considerations:
        console.print(f"  [yellow]•[/yellow] {risk}")

    if result.processing_warnings:
        console.print("\n[dim]Warnings:[/dim]")
        for warning in result.processing_warnings:
            console.print(f"  [dim]• {warning}[/dim]")


def output_json(result: MigrationRecommendation, out_path: Optional[str]):
    """Output result as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="advisor-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default advisor configuration file.

    Example:
        migration-advisor init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • compute_tiers / default_tier - VM sizing bands and their monthly cost")
        console.print("  • managed_platform - App Service option for managed-runtime languages")
        console.print("  • costs - Storage, networking and one-time migration cost")
        console.print("  • regions - City to Azure region mapping")
        console.print("  • complexity - Complexity rating and timeframe")
        console.print("  • narrative - Language model settings for follow-up questions")
        console.print("\nThe advisor will look for config in this order:")
        console.print("  1. MIGRATION_ADVISOR_CONFIG environment variable")
        console.print("  2. ./advisor-config.yaml (current directory)")
        console.print("  3. ./advisor-config.yml (current directory)")
        console.print("  4. ~/.config/migration-advisor/config.yaml")
    except OSError as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""
Cascade Simulation CLI

Runs failure scenarios, interactive kills and website dependency analysis
against the internet-infrastructure dependency graph.

Usage Examples:
    # Run a preset scenario
    netcascade scenario dns-collapse

    # Same scenario on a partially decentralized graph
    netcascade scenario aws-outage -d 70

    # Kill nodes one after another on the live snapshot
    netcascade kill aws cloudflare-cdn

    # Analyze a website, then see it fall with the DNS root
    netcascade site shopify.com --scenario dns-collapse

    # Structural insights as JSON
    netcascade insights --json

    # List scenarios
    netcascade scenarios
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from netcascade.analysis import InsightAnalyzer
from netcascade.cli.display import ConsoleDisplay
from netcascade.config import Container, Settings
from netcascade.domain.config import SCENARIO_IDS, scenario_table

logger = logging.getLogger(__name__)


# =============================================================================
# Argument Parsing
# =============================================================================

def build_parser(settings: Optional[Settings] = None) -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommands."""
    settings = settings or Settings()

    # Parent parser for common arguments
    common_parser = argparse.ArgumentParser(add_help=False)

    graph_group = common_parser.add_argument_group("Graph")
    graph_group.add_argument(
        "--decentralization", "-d", type=int, default=settings.decentralization,
        metavar="LEVEL", help="Decentralization level 0-100 (adds failover edges)",
    )
    graph_group.add_argument(
        "--seed", type=int, default=settings.seed,
        help="Seed for narrative timestamp jitter",
    )

    output_group = common_parser.add_argument_group("Output")
    output_group.add_argument("--output", "-o", metavar="FILE", help="Export results to JSON")
    output_group.add_argument("--json", action="store_true", help="Print JSON to stdout")
    output_group.add_argument(
        "--no-color", action="store_true", default=settings.no_color, help="Disable ANSI colors",
    )
    output_group.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    output_group.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    # Main parser
    parser = argparse.ArgumentParser(
        prog="netcascade",
        description="Cascading failure simulation over internet infrastructure dependencies.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Scenarios: " + ", ".join(SCENARIO_IDS),
    )

    # --- Subcommands ---
    subs = parser.add_subparsers(dest="command", help="Simulation command")

    sc = subs.add_parser("scenario", help="Run a preset failure scenario", parents=[common_parser])
    sc.add_argument("scenario_id", choices=SCENARIO_IDS, help="Scenario id")

    kl = subs.add_parser("kill", help="Kill nodes one after another", parents=[common_parser])
    kl.add_argument("node_ids", nargs="+", metavar="NODE_ID", help="Node ids to take offline")

    st = subs.add_parser("site", help="Analyze a website's infrastructure", parents=[common_parser])
    st.add_argument("url", help="Website URL or bare domain")
    st.add_argument("--scenario", "-s", choices=SCENARIO_IDS, help="Run a scenario with the site merged in")

    subs.add_parser("insights", help="Structural risk insights for the graph", parents=[common_parser])
    subs.add_parser("scenarios", help="List preset scenarios", parents=[common_parser])

    return parser


# =============================================================================
# Command Handlers
# =============================================================================

def handle_scenario(args, sim, display) -> dict:
    """Handle the 'scenario' subcommand."""
    if display:
        display.print_header(f"Scenario: {args.scenario_id} ({sim.decentralization}% decentralized)")
    run = sim.run_scenario(args.scenario_id)
    if display:
        display.display_insights(run.insights)
    return run.to_dict()


def handle_kill(args, sim, display) -> dict:
    """Handle the 'kill' subcommand."""
    runs = []
    skipped = []
    for node_id in args.node_ids:
        if display:
            display.print_header(f"Manual Kill: {node_id}")
        run = sim.kill_node(node_id)
        if run is None:
            skipped.append(node_id)
            if display:
                print(display.colored(f"  Skipped {node_id}: unknown or already down", display.Colors.GRAY))
            continue
        runs.append(run)

    if display and runs:
        display.display_insights(runs[-1].insights)
    return {
        "killed_ids": sim.killed_ids,
        "skipped_ids": skipped,
        "runs": [r.to_dict() for r in runs],
        "metrics": sim.metrics.to_dict(),
    }


def handle_site(args, sim, display) -> dict:
    """Handle the 'site' subcommand."""
    analysis = sim.analyze_site(args.url)
    if display:
        display.display_site_analysis(analysis)
        display.display_narrative(sim.narrative_log)

    result = {"analysis": analysis.to_dict(), "run": None}
    if args.scenario:
        if display:
            display.print_header(f"Scenario: {args.scenario} with {analysis.domain}")
        run = sim.run_scenario(args.scenario)
        node_status = sim.status_map[analysis.node.id]
        if display:
            color = {"down": display.Colors.RED, "degraded": display.Colors.YELLOW}.get(
                node_status.value, display.Colors.GREEN
            )
            print(f"\n  {analysis.domain}: {display.colored(node_status.value.upper(), color, bold=True)}")
        result["run"] = run.to_dict()
        result["site_status"] = node_status.value
    return result


def handle_insights(args, sim, display) -> dict:
    """Handle the 'insights' subcommand."""
    analyzer = InsightAnalyzer(sim.nodes, sim.edges)
    insights = analyzer.analyze()
    degrees = analyzer.out_degrees()
    if display:
        display.print_header(f"Insights ({sim.decentralization}% decentralized, {len(sim.edges)} edges)")
        display.display_insights(insights, degrees)
    return {
        "decentralization": sim.decentralization,
        "insights": [i.to_dict() for i in insights],
        "out_degrees": degrees,
    }


def handle_scenarios(args, sim, display) -> list:
    """Handle the 'scenarios' subcommand."""
    table = scenario_table()
    if display:
        display.display_scenarios(table)
    return table


# =============================================================================
# Main Entry Point
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(ConsoleDisplay(use_color=sys.stderr.isatty()).display_error(str(e)), file=sys.stderr)
        return 1

    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Logging
    log_level = (
        logging.WARNING if args.quiet
        else logging.DEBUG if args.verbose
        else getattr(logging, settings.log_level, logging.INFO)
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    container = Container(
        decentralization=args.decentralization,
        use_color=not args.no_color,
        seed=args.seed,
    )
    console = container.display_service()
    display = None if (args.quiet or args.json) else console

    try:
        sim = container.simulation_service()
        if display:
            sim.add_observer(display)

        handlers = {
            "scenario": handle_scenario,
            "kill": handle_kill,
            "site": handle_site,
            "insights": handle_insights,
            "scenarios": handle_scenarios,
        }
        handler = handlers[args.command]
        result_data = handler(args, sim, display)

        # JSON stdout
        if args.json:
            print(json.dumps(result_data, indent=2))

        # File export
        if args.output:
            with open(args.output, "w") as f:
                json.dump(result_data, f, indent=2)
            if display:
                print(f"\n{display.colored(f'Results saved to: {args.output}', display.Colors.GREEN)}")

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted.")
        return 130
    except (ValueError, OSError) as e:
        print(console.display_error(str(e)), file=sys.stderr)
        if args.verbose:
            logger.exception("Simulation failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())

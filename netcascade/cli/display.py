"""
Console Display

Terminal formatting and colorized output for cascade runs, site analyses
and structural insights. Also serves as a live observer of the simulation
service, printing each wave as it is applied.
"""

from typing import Dict, List, Optional, Sequence

from netcascade.application.ports import ICascadeObserver
from netcascade.domain.models import (
    CascadeRun,
    Insight,
    MessageType,
    Metrics,
    NarrativeMessage,
    NodeStatus,
    Severity,
    SiteAnalysis,
    Wave,
)


# =============================================================================
# Terminal Colors
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: str, bold: bool = False) -> str:
    """Apply color to text."""
    style = Colors.BOLD if bold else ""
    return f"{style}{color}{text}{Colors.RESET}"


SEVERITY_COLORS: Dict[Severity, str] = {
    Severity.CRITICAL: Colors.RED,
    Severity.HIGH: Colors.YELLOW,
    Severity.MEDIUM: Colors.BLUE,
}

STATUS_COLORS: Dict[NodeStatus, str] = {
    NodeStatus.DOWN: Colors.RED,
    NodeStatus.DEGRADED: Colors.YELLOW,
    NodeStatus.HEALTHY: Colors.GREEN,
}

MESSAGE_COLORS: Dict[MessageType, str] = {
    MessageType.ERROR: Colors.RED,
    MessageType.WARNING: Colors.YELLOW,
    MessageType.SUCCESS: Colors.GREEN,
    MessageType.ANALYSIS: Colors.MAGENTA,
    MessageType.INFO: Colors.WHITE,
}


class ConsoleDisplay(ICascadeObserver):
    """
    Prints simulation output to stdout.

    Args:
        use_color: Emit ANSI escape codes (disable for pipes and files)
    """
    Colors = Colors

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def colored(self, text: str, color: str, bold: bool = False) -> str:
        if not self.use_color:
            return text
        return colored(text, color, bold)

    @staticmethod
    def severity_color(severity: Severity) -> str:
        """Get color for an insight severity; unknown levels fall back to yellow."""
        return SEVERITY_COLORS.get(severity, Colors.YELLOW)

    def print_header(self, title: str, char: str = "=", width: int = 78) -> None:
        """Print a formatted header."""
        print(f"\n{self.colored(char * width, Colors.CYAN)}")
        print(f"{self.colored(f' {title} '.center(width), Colors.CYAN, bold=True)}")
        print(f"{self.colored(char * width, Colors.CYAN)}")

    def print_subheader(self, title: str, char: str = "-", width: int = 78) -> None:
        """Print a formatted subheader."""
        print(f"\n{self.colored(f' {title} ', Colors.WHITE, bold=True)}")
        print(f"{self.colored(char * width, Colors.GRAY)}")

    def display_error(self, message: str) -> str:
        return self.colored(f"Error: {message}", Colors.RED)

    # =========================================================================
    # Observer callbacks
    # =========================================================================

    def on_wave_applied(self, wave_index: int, wave: Wave, metrics: Metrics) -> None:
        title = "Wave 0 (direct kill)" if wave_index == 0 else f"Wave {wave_index}"
        self.print_subheader(f"{title}: {len(wave)} changes")
        for change in wave:
            color = STATUS_COLORS.get(change.new_status, Colors.RESET)
            status = self.colored(f"{change.new_status.value.upper():<9}", color)
            print(f"  {change.node_id:<18} {status} {change.reason}")
        print(f"  {'Operational:':<18} {metrics.percent_operational}%")

    def on_run_complete(self, run: CascadeRun) -> None:
        self.display_narrative(run.narrative)
        self.display_metrics(run.metrics, run.comparison_metrics)

    # =========================================================================
    # Sections
    # =========================================================================

    def display_narrative(self, messages: Sequence[NarrativeMessage]) -> None:
        self.print_subheader("Narrative")
        for msg in messages:
            color = MESSAGE_COLORS.get(msg.type, Colors.RESET)
            print(f"  {self.colored(msg.timestamp, Colors.GRAY)}  {self.colored(msg.text, color)}")

    def display_metrics(self, metrics: Metrics, comparison: Optional[Metrics] = None) -> None:
        self.print_subheader("Impact Metrics")
        pct = metrics.percent_operational
        pct_color = Colors.RED if pct < 50 else Colors.YELLOW if pct < 80 else Colors.GREEN
        print(f"\n  {'Operational:':<22} {self.colored(f'{pct}%', pct_color, bold=True)}")
        print(f"  {'Affected users:':<22} {metrics.affected_users}M")
        print(f"  {'Financial impact:':<22} ${metrics.financial_impact}M/hr")
        print(f"  {'Services down:':<22} {self.colored(str(metrics.services_down), Colors.RED)}")
        print(f"  {'Services degraded:':<22} {self.colored(str(metrics.services_degraded), Colors.YELLOW)}")
        print(f"  {'Services healthy:':<22} {self.colored(str(metrics.services_healthy), Colors.GREEN)}")

        if comparison is not None:
            delta = comparison.percent_operational - pct
            print(
                f"\n  {'Fully decentralized:':<22} {comparison.percent_operational}% "
                f"({'+' if delta >= 0 else ''}{delta} pts)"
            )

    def display_insights(self, insights: Sequence[Insight], out_degrees: Optional[Dict[str, int]] = None) -> None:
        self.print_subheader("Structural Insights")
        for insight in insights:
            color = self.severity_color(insight.severity)
            level = self.colored(f"[{insight.severity.value.upper()}]", color)
            print(f"  {level:<10} {insight.label}: {insight.value}")

        if out_degrees:
            self.print_subheader("Out-degree by Source")
            ranked = sorted(out_degrees.items(), key=lambda x: x[1], reverse=True)
            for node_id, degree in ranked:
                print(f"  {node_id:<20} {'█' * degree} {degree}")

    def display_site_analysis(self, analysis: SiteAnalysis) -> None:
        self.print_header(f"Site Analysis: {analysis.domain}")
        print(f"\n  {'URL:':<16} {analysis.normalized_url}")
        print(f"  {'Node:':<16} {analysis.node.glyph} {analysis.node.id} ({analysis.node.type.value})")
        print(f"  {'Matched rule:':<16} {analysis.matched_rule}")
        print(f"  {'Dependencies:':<16} {', '.join(analysis.dependency_ids)}")

        self.print_subheader("Inferred Edges")
        for edge in analysis.edges:
            flag = self.colored("critical", Colors.RED) if edge.critical else self.colored("optional", Colors.GRAY)
            print(f"  {edge.source:<18} -> {edge.target:<28} {flag}")

        self.print_subheader("Summary")
        for line in analysis.summary.splitlines():
            print(f"  {line}")

    def display_scenarios(self, table: List[Dict[str, object]]) -> None:
        self.print_header("Failure Scenarios")
        print(f"\n  {'ID':<16} {'Label':<16} {'Kills':<40}")
        print(f"  {'-' * 72}")
        for row in table:
            kills = ", ".join(row["kill_nodes"])
            print(f"  {row['id']:<16} {row['label']:<16} {kills:<40}")
            print(f"  {'':<16} {self.colored(str(row['description']), Colors.GRAY)}")

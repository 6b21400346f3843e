"""
Narrative Generator

Renders waves, metrics, insights and site analyses into ordered,
human-readable log lines.

Timestamps come from a simulated clock: wave N starts 3 seconds after the
generator's reference time and every line advances it by a small jitter.
Only their ordering matters (non-decreasing within one call); absolute
values are cosmetic. The ordering holds on the underlying datetimes; the
rendered HH:MM:SS strings wrap at midnight. Pass a fixed clock and a
seeded ``random.Random`` for reproducible output.
"""

from __future__ import annotations
import random
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence

from ..domain.models import (
    InfraNode,
    InfraType,
    Insight,
    Metrics,
    MessageType,
    NarrativeMessage,
    NodeStatus,
    Scenario,
    Severity,
    SiteAnalysis,
    Wave,
    index_nodes,
)

TIME_FORMAT = "%H:%M:%S"
WAVE_SPACING = timedelta(seconds=3)
JITTER_MS = (200, 999)
ANALYSIS_STEP = timedelta(milliseconds=500)

NODE_TYPE_LABELS: Dict[InfraType, str] = {
    InfraType.DNS: "DNS provider",
    InfraType.CDN: "CDN service",
    InfraType.CLOUD: "cloud provider",
    InfraType.SAAS: "SaaS platform",
    InfraType.FINANCE: "financial service",
    InfraType.SOCIAL: "social media platform",
    InfraType.GOVERNMENT: "government service",
    InfraType.USER: "end user segment",
}

SEVERITY_ICONS: Dict[Severity, str] = {
    Severity.CRITICAL: "🔴",
    Severity.HIGH: "🟠",
}
DEFAULT_SEVERITY_ICON = "🟡"

CONCLUSION = "Conclusion: Modern internet infrastructure is optimized for efficiency, not resilience."


class _Ticker:
    """Monotonic simulated clock for one generation call."""

    def __init__(self, start: datetime, step: Callable[[], timedelta]):
        self.now = start
        self.step = step

    def __call__(self) -> str:
        self.now += self.step()
        return self.now.strftime(TIME_FORMAT)


class NarrativeGenerator:
    """
    Deterministic text synthesis for the cascade log.

    Args:
        clock: Returns the reference time (defaults to datetime.now)
        rng: Jitter source (defaults to an unseeded random.Random)
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.clock = clock or datetime.now
        self.rng = rng or random.Random()

    def _jitter(self) -> timedelta:
        return timedelta(milliseconds=self.rng.randint(*JITTER_MS))

    def _ticker(self, offset: timedelta = timedelta(0), step=None) -> _Ticker:
        return _Ticker(self.clock() + offset, step or self._jitter)

    # -------------------------------------------------------------------------
    # Waves
    # -------------------------------------------------------------------------

    def for_wave(
        self,
        wave_index: int,
        wave: Wave,
        nodes: Sequence[InfraNode],
        total_waves: int,
    ) -> List[NarrativeMessage]:
        ts = self._ticker(WAVE_SPACING * wave_index)
        node_index = index_nodes(nodes)
        messages: List[NarrativeMessage] = []

        def say(text: str, kind: MessageType) -> None:
            messages.append(NarrativeMessage(ts(), text, kind))

        if wave_index == 0:
            say("🦞 OpenClaw Chaos Agent initializing resilience scan...", MessageType.INFO)

        for change in wave:
            node = node_index.get(change.node_id)
            if node is None:
                continue

            if wave_index == 0:
                type_label = NODE_TYPE_LABELS.get(node.type, "service")
                say(f"Attempting to reach {node.label} ({type_label})...", MessageType.INFO)
                say(f"Connection refused. {node.label} is OFFLINE.", MessageType.ERROR)
                say("Retrying via alternative endpoint...", MessageType.WARNING)
                say("Timeout after 2000ms. No fallback available.", MessageType.ERROR)
            elif change.new_status == NodeStatus.DOWN:
                say(f"Attempting to access {node.label}...", MessageType.INFO)
                say(change.reason, MessageType.ERROR)
                say(
                    f"{node.label}: STATUS DOWN. {_fmt(node.user_count)}M users affected.",
                    MessageType.ERROR,
                )
            else:
                say(f"{node.label} responding slowly... {change.reason}", MessageType.WARNING)
                say(
                    f"{node.label}: STATUS DEGRADED. Partial functionality available.",
                    MessageType.WARNING,
                )

        if wave_index == total_waves - 1:
            say("Cascade propagation complete. Analyzing systemic impact...", MessageType.ANALYSIS)

        return messages

    # -------------------------------------------------------------------------
    # Final analysis
    # -------------------------------------------------------------------------

    def final_analysis(self, metrics: Metrics, insights: Sequence[Insight]) -> List[NarrativeMessage]:
        ts = self._ticker(step=lambda: ANALYSIS_STEP)
        messages = [
            NarrativeMessage(ts(), "━━━ RESILIENCE ANALYSIS REPORT ━━━", MessageType.ANALYSIS),
            NarrativeMessage(
                ts(),
                f"Internet operational: {metrics.percent_operational}%  |  "
                f"Affected users: {metrics.affected_users}M  |  "
                f"Financial impact: ${metrics.financial_impact}M/hr",
                MessageType.ERROR if metrics.percent_operational < 50 else MessageType.WARNING,
            ),
            NarrativeMessage(
                ts(),
                f"Services down: {metrics.services_down}  |  "
                f"Degraded: {metrics.services_degraded}  |  "
                f"Healthy: {metrics.services_healthy}",
                MessageType.INFO,
            ),
        ]

        for insight in insights:
            icon = SEVERITY_ICONS.get(insight.severity, DEFAULT_SEVERITY_ICON)
            messages.append(NarrativeMessage(
                ts(),
                f"{icon} {insight.label}: {insight.value}",
                MessageType.ERROR if insight.severity == Severity.CRITICAL else MessageType.WARNING,
            ))

        messages.append(NarrativeMessage(ts(), CONCLUSION, MessageType.ANALYSIS))
        return messages

    # -------------------------------------------------------------------------
    # Headers
    # -------------------------------------------------------------------------

    def scenario_header(self, scenario: Scenario) -> List[NarrativeMessage]:
        stamp = self.clock().strftime(TIME_FORMAT)
        return [
            NarrativeMessage(stamp, f"━━━ SCENARIO: {scenario.label.upper()} ━━━", MessageType.ANALYSIS),
            NarrativeMessage(stamp, scenario.description, MessageType.INFO),
        ]

    def manual_kill_header(self, node: InfraNode) -> List[NarrativeMessage]:
        stamp = self.clock().strftime(TIME_FORMAT)
        return [
            NarrativeMessage(stamp, f"━━━ MANUAL KILL: {node.label.upper()} ━━━", MessageType.ANALYSIS),
            NarrativeMessage(
                stamp,
                f"Operator manually terminated {node.label}. Analyzing cascade...",
                MessageType.WARNING,
            ),
        ]

    # -------------------------------------------------------------------------
    # Site scan
    # -------------------------------------------------------------------------

    def site_scan(self, analysis: SiteAnalysis) -> List[NarrativeMessage]:
        stamp = self.clock().strftime(TIME_FORMAT)
        profile = analysis.profile
        messages: List[NarrativeMessage] = []

        def say(text: str, kind: MessageType) -> None:
            messages.append(NarrativeMessage(stamp, text, kind))

        say(f"━━━ SITE ANALYSIS: {analysis.domain.upper()} ━━━", MessageType.ANALYSIS)
        say(f"🦞 OpenClaw scanning {analysis.normalized_url}...", MessageType.INFO)
        say(f"Resolving DNS for {analysis.domain}...", MessageType.INFO)
        say("Infrastructure detected, mapping dependencies...", MessageType.INFO)

        by_source = {e.source: e for e in analysis.edges}
        for dns in profile.dns:
            critical = by_source[dns].critical
            say(
                f"DNS → {dns} ({'CRITICAL' if critical else 'non-critical'})",
                MessageType.WARNING if critical else MessageType.INFO,
            )
        for cloud in profile.cloud:
            critical = by_source[cloud].critical
            say(
                f"Cloud → {cloud} ({'CRITICAL' if critical else 'failover available'})",
                MessageType.WARNING if critical else MessageType.SUCCESS,
            )
        for cdn in profile.cdn:
            say(f"CDN → {cdn} (performance layer)", MessageType.INFO)

        if len(profile.cloud) == 1:
            say("⚠️  SINGLE CLOUD PROVIDER: no failover detected!", MessageType.ERROR)
        if "dns-root" in profile.dns:
            say("⚠️  Relies on root DNS, vulnerable to DNS-level attacks", MessageType.WARNING)

        say(
            f"{analysis.domain} added to dependency graph. Run a scenario to see impact.",
            MessageType.SUCCESS,
        )
        return messages


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


# =============================================================================
# Module-level convenience functions
# =============================================================================

_default_generator = NarrativeGenerator()


def generate_narrative_for_wave(
    wave_index: int,
    wave: Wave,
    nodes: Sequence[InfraNode],
    total_waves: int,
) -> List[NarrativeMessage]:
    return _default_generator.for_wave(wave_index, wave, nodes, total_waves)


def generate_final_analysis(metrics: Metrics, insights: Sequence[Insight]) -> List[NarrativeMessage]:
    return _default_generator.final_analysis(metrics, insights)


def generate_site_narrative(analysis: SiteAnalysis) -> List[NarrativeMessage]:
    return _default_generator.site_scan(analysis)


def generate_scenario_header(scenario: Scenario) -> List[NarrativeMessage]:
    return _default_generator.scenario_header(scenario)


def generate_manual_kill_header(node: InfraNode) -> List[NarrativeMessage]:
    return _default_generator.manual_kill_header(node)

"""
Site Analyzer

Maps an arbitrary URL onto a synthetic graph node and the infrastructure
edges it most likely depends on.

Profile resolution is an ordered rule list; the first rule that returns a
profile wins:
    1. ExactDomainRule   - known-domain table
    2. TldSuffixRule     - longest matching TLD suffix
    3. DefaultProfileRule - generic fallback (always matches)

New rules can be inserted into SiteAnalyzer.rules without touching the
analysis flow. The analyzer never raises for any input string, and it never
merges its output into a shared graph; that is the caller's job.

Usage:
    analysis = analyze_site("https://www.netflix.com/browse")
    print(analysis.summary)
"""

from __future__ import annotations
import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple
from urllib.parse import urlsplit

from ..domain.config.domain_profiles import (
    KNOWN_DOMAINS,
    TLD_PROFILES,
    DEFAULT_PROFILE,
    CUSTOM_NODE_PREFIX,
)
from ..domain.config.seed_data import USERS_NODE_ID
from ..domain.models import InfraNode, InfraEdge, DomainProfile, SiteAnalysis

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


# =============================================================================
# Profile rules
# =============================================================================

class ProfileRule:
    """Base class for domain -> profile rules."""
    name = "rule"

    def match(self, domain: str) -> Optional[DomainProfile]:
        raise NotImplementedError


class ExactDomainRule(ProfileRule):
    name = "exact"

    def __init__(self, table: Optional[Dict[str, DomainProfile]] = None):
        self.table = KNOWN_DOMAINS if table is None else table

    def match(self, domain: str) -> Optional[DomainProfile]:
        return self.table.get(domain)


class TldSuffixRule(ProfileRule):
    name = "tld"

    def __init__(self, table: Optional[Dict[str, DomainProfile]] = None):
        table = TLD_PROFILES if table is None else table
        # Longest suffix first so ".co.uk"-style entries beat ".uk"
        self._suffixes: List[Tuple[str, DomainProfile]] = sorted(
            table.items(), key=lambda item: len(item[0]), reverse=True
        )

    def match(self, domain: str) -> Optional[DomainProfile]:
        for suffix, profile in self._suffixes:
            if domain.endswith(suffix):
                return profile
        return None


class DefaultProfileRule(ProfileRule):
    name = "default"

    def __init__(self, profile: DomainProfile = DEFAULT_PROFILE):
        self.profile = profile

    def match(self, domain: str) -> Optional[DomainProfile]:
        return self.profile


# =============================================================================
# Analyzer
# =============================================================================

class SiteAnalyzer:
    """
    Infers the upstream dependencies of a website.

    Example:
        >>> analyzer = SiteAnalyzer()
        >>> result = analyzer.analyze("unknown-startup.io")
        >>> result.matched_rule
        'tld'
    """

    def __init__(self, rules: Optional[Sequence[ProfileRule]] = None):
        self.rules: List[ProfileRule] = list(rules) if rules is not None else [
            ExactDomainRule(),
            TldSuffixRule(),
            DefaultProfileRule(),
        ]
        self.logger = logging.getLogger(__name__)

    def analyze(self, raw_url: str) -> SiteAnalysis:
        url = (raw_url or "").strip()
        normalized_url, domain = normalize_url(url)
        profile, rule_name = self.resolve_profile(domain)
        self.logger.info(f"Site '{domain}' resolved via {rule_name} rule")

        node_id = site_node_id(domain)
        node = InfraNode(
            id=node_id,
            label=domain,
            type=profile.type,
            glyph=profile.glyph,
            user_count=profile.user_count,
            financial_impact_per_hour=profile.financial_impact,
        )
        edges = build_site_edges(node_id, profile)
        dependency_ids = _unique([*profile.dns, *profile.cloud, *profile.cdn, *profile.extra_deps])

        return SiteAnalysis(
            url=url,
            normalized_url=normalized_url,
            domain=domain,
            node=node,
            edges=edges,
            dependency_ids=dependency_ids,
            summary=summarize_profile(domain, profile),
            profile=profile,
            matched_rule=rule_name,
        )

    def resolve_profile(self, domain: str) -> Tuple[DomainProfile, str]:
        for rule in self.rules:
            profile = rule.match(domain)
            if profile is not None:
                return profile, rule.name
        return DEFAULT_PROFILE, DefaultProfileRule.name


# =============================================================================
# Helpers
# =============================================================================

def normalize_url(url: str) -> Tuple[str, str]:
    """
    Return (scheme-prefixed url, bare domain).

    Structured parsing first; a tolerant string strip when that fails or
    yields no hostname.
    """
    if not _SCHEME_RE.match(url):
        url = f"https://{url}"

    try:
        hostname = urlsplit(url).hostname
    except ValueError:
        hostname = None

    if not hostname:
        hostname = _SCHEME_RE.sub("", url)
        hostname = re.sub(r"[/?#].*$", "", hostname)

    return url, re.sub(r"^www\.", "", hostname)


def site_node_id(domain: str) -> str:
    return f"{CUSTOM_NODE_PREFIX}{domain.replace('.', '-')}"


def build_site_edges(node_id: str, profile: DomainProfile) -> List[InfraEdge]:
    """DNS is always critical, a sole cloud host is critical, CDNs never are."""
    edges = [InfraEdge(dns, node_id, True) for dns in profile.dns]
    sole_cloud = len(profile.cloud) == 1
    edges.extend(InfraEdge(cloud, node_id, sole_cloud) for cloud in profile.cloud)
    edges.extend(InfraEdge(cdn, node_id, False) for cdn in profile.cdn)
    edges.append(InfraEdge(node_id, USERS_NODE_ID, False))
    return edges


def detect_vulnerabilities(profile: DomainProfile) -> List[str]:
    vulnerabilities = []
    if len(profile.cloud) == 1:
        vulnerabilities.append(f"single cloud provider ({profile.cloud[0]})")
    if "dns-root" in profile.dns:
        vulnerabilities.append("depends on root DNS")
    if not profile.cdn:
        vulnerabilities.append("no CDN detected")
    if not profile.cloud:
        vulnerabilities.append("unknown hosting")
    return vulnerabilities


def summarize_profile(domain: str, profile: DomainProfile) -> str:
    cloud_names = ", ".join(profile.cloud) if profile.cloud else "unknown"
    cdn_names = ", ".join(profile.cdn) if profile.cdn else "none detected"
    vulnerabilities = detect_vulnerabilities(profile)

    lines = [
        f"Analysis of {domain}:",
        f"  Cloud: {cloud_names}",
        f"  CDN: {cdn_names}",
        f"  DNS: {', '.join(profile.dns)}",
        f"  Est. users: {_fmt_number(profile.user_count)}M",
    ]
    if vulnerabilities:
        lines.append(f"  Vulnerabilities: {'; '.join(vulnerabilities)}")
    else:
        lines.append("  No major single-point vulnerabilities detected.")
    return "\n".join(lines)


def _unique(ids: Sequence[str]) -> List[str]:
    return list(dict.fromkeys(ids))


def _fmt_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


_default_analyzer = SiteAnalyzer()


def analyze_site(raw_url: str) -> SiteAnalysis:
    """Analyze a URL with the default rule list."""
    return _default_analyzer.analyze(raw_url)

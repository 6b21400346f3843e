"""
Website Infrastructure Profiles

Lookup tables used by the site analyzer:
    - KNOWN_DOMAINS: exact domain -> inferred infrastructure footprint
    - TLD_PROFILES:  TLD suffix -> likely footprint for unknown domains
    - DEFAULT_PROFILE: fallback when nothing matches
"""

from __future__ import annotations
from typing import Dict

from ..models.enums import InfraType
from ..models.results import DomainProfile


def _profile(cloud, cdn, dns, extra, type, glyph, users, impact) -> DomainProfile:
    return DomainProfile(
        cloud=tuple(cloud), cdn=tuple(cdn), dns=tuple(dns), extra_deps=tuple(extra),
        type=type, glyph=glyph, user_count=users, financial_impact=impact,
    )


SAAS = InfraType.SAAS
SOCIAL = InfraType.SOCIAL
FINANCE = InfraType.FINANCE
CLOUD = InfraType.CLOUD
GOV = InfraType.GOVERNMENT


KNOWN_DOMAINS: Dict[str, DomainProfile] = {
    # Big tech
    "google.com":        _profile(["gcp"], [], ["google-dns"], [], SAAS, "🔍", 4000, 200),
    "youtube.com":       _profile(["gcp"], ["cloudflare-cdn"], ["google-dns"], [], SAAS, "📺", 2500, 80),
    "gmail.com":         _profile(["gcp"], [], ["google-dns"], ["gmail"], SAAS, "📧", 1800, 15),
    "facebook.com":      _profile(["aws"], ["akamai-cdn"], ["dns-root"], [], SOCIAL, "📘", 3000, 60),
    "instagram.com":     _profile(["aws"], ["cloudflare-cdn", "akamai-cdn"], ["dns-root"], [], SOCIAL, "📸", 2000, 40),
    "twitter.com":       _profile(["aws"], ["fastly-cdn"], ["dns-root"], ["twitter"], SOCIAL, "🐦", 400, 5),
    "x.com":             _profile(["aws"], ["fastly-cdn"], ["dns-root"], ["twitter"], SOCIAL, "🐦", 400, 5),
    "reddit.com":        _profile(["aws"], ["fastly-cdn", "cloudflare-cdn"], ["cloudflare-dns"], [], SOCIAL, "🤖", 800, 5),
    "tiktok.com":        _profile(["aws", "gcp"], ["akamai-cdn", "cloudflare-cdn"], ["cloudflare-dns"], [], SOCIAL, "🎵", 1500, 30),
    "linkedin.com":      _profile(["azure"], ["akamai-cdn"], ["dns-root"], [], SAAS, "💼", 900, 15),
    "whatsapp.com":      _profile(["aws"], ["cloudflare-cdn"], ["dns-root"], [], SOCIAL, "💬", 2000, 10),

    # Development
    "github.com":        _profile(["azure"], ["fastly-cdn"], ["dns-root"], ["github"], SAAS, "💻", 100, 10),
    "gitlab.com":        _profile(["gcp"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "🦊", 30, 5),
    "stackoverflow.com": _profile(["aws"], ["fastly-cdn"], ["cloudflare-dns"], [], SAAS, "📚", 100, 2),
    "npmjs.com":         _profile(["aws"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "📦", 20, 8),
    "vercel.com":        _profile(["aws"], ["cloudflare-cdn"], ["cloudflare-dns"], [], CLOUD, "▲", 10, 3),
    "netlify.com":       _profile(["aws"], ["cloudflare-cdn"], ["dns-root"], [], CLOUD, "🌐", 5, 2),

    # E-commerce and finance
    "amazon.com":        _profile(["aws"], ["cloudflare-cdn", "akamai-cdn"], ["dns-root"], ["stripe"], SAAS, "📦", 2000, 400),
    "shopify.com":       _profile(["gcp"], ["cloudflare-cdn"], ["cloudflare-dns"], ["shopify", "stripe"], SAAS, "🛒", 50, 20),
    "stripe.com":        _profile(["aws"], ["cloudflare-cdn"], ["dns-root"], ["stripe"], FINANCE, "💳", 100, 100),
    "paypal.com":        _profile(["gcp", "aws"], ["akamai-cdn"], ["dns-root"], [], FINANCE, "💰", 400, 150),
    "ebay.com":          _profile(["gcp"], ["akamai-cdn"], ["dns-root"], ["stripe"], SAAS, "🏷️", 150, 30),

    # Streaming and entertainment
    "netflix.com":       _profile(["aws"], ["cloudflare-cdn"], ["dns-root"], ["netflix"], SAAS, "🎬", 250, 30),
    "spotify.com":       _profile(["gcp"], ["fastly-cdn", "cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "🎵", 500, 15),
    "twitch.tv":         _profile(["aws"], ["cloudflare-cdn"], ["dns-root"], [], SAAS, "🎮", 140, 5),
    "disney.com":        _profile(["aws"], ["akamai-cdn"], ["dns-root"], [], SAAS, "🏰", 200, 20),

    # Cloud and SaaS
    "zoom.us":           _profile(["aws", "azure"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "📹", 300, 25),
    "slack.com":         _profile(["aws"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "💬", 30, 15),
    "notion.so":         _profile(["aws"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "📝", 30, 3),
    "figma.com":         _profile(["aws"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "🎨", 10, 5),
    "openai.com":        _profile(["azure"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "🤖", 200, 20),
    "chatgpt.com":       _profile(["azure"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "🤖", 200, 20),

    # News and media
    "nytimes.com":       _profile(["gcp"], ["fastly-cdn"], ["dns-root"], [], SAAS, "📰", 100, 2),
    "bbc.com":           _profile(["aws"], ["akamai-cdn"], ["dns-root"], [], SAAS, "📰", 400, 3),
    "cnn.com":           _profile(["aws"], ["fastly-cdn", "akamai-cdn"], ["dns-root"], [], SAAS, "📰", 200, 2),
    "wikipedia.org":     _profile([], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "📖", 1500, 0),

    # Government
    "irs.gov":           _profile(["aws"], ["akamai-cdn"], ["dns-root"], ["gov-services"], GOV, "🏛️", 50, 100),
    "usa.gov":           _profile(["aws"], ["akamai-cdn"], ["dns-root"], ["gov-services"], GOV, "🏛️", 30, 20),
    "gov.uk":            _profile(["aws"], ["cloudflare-cdn"], ["dns-root"], ["gov-services"], GOV, "🏛️", 60, 30),
}


# Unknown domains inherit the default user count and financial impact.
DEFAULT_USER_COUNT = 10
DEFAULT_FINANCIAL_IMPACT = 1


TLD_PROFILES: Dict[str, DomainProfile] = {
    ".gov": _profile(["aws"], ["akamai-cdn"], ["dns-root"], [], GOV, "🏛️", DEFAULT_USER_COUNT, DEFAULT_FINANCIAL_IMPACT),
    ".edu": _profile(["aws"], ["cloudflare-cdn"], ["dns-root"], [], SAAS, "🎓", DEFAULT_USER_COUNT, DEFAULT_FINANCIAL_IMPACT),
    ".org": _profile(["aws"], ["cloudflare-cdn"], ["dns-root"], [], SAAS, "🌍", DEFAULT_USER_COUNT, DEFAULT_FINANCIAL_IMPACT),
    ".io":  _profile(["aws"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "💻", DEFAULT_USER_COUNT, DEFAULT_FINANCIAL_IMPACT),
    ".dev": _profile(["gcp"], ["cloudflare-cdn"], ["google-dns"], [], SAAS, "🔧", DEFAULT_USER_COUNT, DEFAULT_FINANCIAL_IMPACT),
    ".app": _profile(["gcp"], ["cloudflare-cdn"], ["google-dns"], [], SAAS, "📱", DEFAULT_USER_COUNT, DEFAULT_FINANCIAL_IMPACT),
    ".co":  _profile(["aws"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "🏢", DEFAULT_USER_COUNT, DEFAULT_FINANCIAL_IMPACT),
    ".ai":  _profile(["aws", "gcp"], ["cloudflare-cdn"], ["cloudflare-dns"], [], SAAS, "🤖", DEFAULT_USER_COUNT, DEFAULT_FINANCIAL_IMPACT),
}


DEFAULT_PROFILE = _profile(
    ["aws"], ["cloudflare-cdn"], ["dns-root"], [], SAAS, "🌐",
    DEFAULT_USER_COUNT, DEFAULT_FINANCIAL_IMPACT,
)

# Synthesized site nodes are prefixed with this marker.
CUSTOM_NODE_PREFIX = "custom-"

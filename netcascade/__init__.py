"""
netcascade

Cascading failure simulation over a directed dependency graph of internet
infrastructure: DNS, CDNs, clouds and the services that depend on them.

Layout:
    domain/       models and static seed data
    core/         decentralization transform and website analysis
    simulation/   propagation engine and narrative generation
    analysis/     weighted metrics and structural insights
    application/  stateful orchestration service
    config/       settings and dependency container
    cli/          argparse front end and console display
"""

__version__ = "1.0.0"

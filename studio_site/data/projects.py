"""Static catalog of studio work shown on the landing page."""

from studio_site.domain.schemas import Project, ProjectKind

PROJECTS = [
    Project(
        title="SRCERER.IO",
        tag="Data Sources • Web",
        kind=ProjectKind.WEBSITE,
        site_url="https://www.srcerer.io/",
        description=(
            "A data source integration platform connecting apps to verified databases "
            "and APIs with secure access and community ratings."
        ),
    ),
    Project(
        title="PAJU",
        tag="Restaurant • Web",
        kind=ProjectKind.WEBSITE,
        site_url="https://www.pajurestaurant.com/",
        description=(
            "Contemporary Korean cuisine in Seattle—philosophy, menu, hours, and "
            "reservations in a clean, modern experience."
        ),
    ),
    Project(
        title="CivicStream",
        tag="Plan Compliance • Web",
        kind=ProjectKind.WEBSITE,
        site_url="https://civicstream.ai/",
        description=(
            "An AI-powered plan review workspace that turns plan uploads into code-aware "
            "findings, reviewer-ready summaries, and smart routing."
        ),
    ),
    Project(
        title="James Mongrain Glass",
        tag="Artist Portfolio • Web",
        kind=ProjectKind.WEBSITE,
        site_url="https://jamesmongrainglass.com/",
        description=(
            "A focused portfolio showcasing glasswork series with simple navigation, "
            "high-impact imagery, and clear contact paths."
        ),
    ),
    Project(
        title="Faster Production",
        tag="AI Ops • Web",
        kind=ProjectKind.WEBSITE,
        site_url="https://www.fasterproduction.com/",
        description=(
            "An AI layer for ERP workflows—turning questions into one-click actions, "
            "suggested tasks, and composable dashboard blocks."
        ),
    ),
    Project(
        title="iSushi Issaquah",
        tag="Menu • Web",
        kind=ProjectKind.WEBSITE,
        site_url="https://www.issaquahisushi.com/",
        description=(
            "A straightforward restaurant site with a full menu, specials, ordering "
            "info, and clear hours/location details."
        ),
    ),
]

"""
Insight generator: single Claude call that reverse-engineers a PRD from
the scraped site. Any failure (no key, API error, unparseable or
schema-invalid output) falls back to generate_mock_insights().
"""

import json
import os
import re

import anthropic
from pydantic import ValidationError

from sitelens.config import get_settings
from sitelens.models import (
    DesignSystem,
    DetailedPrd,
    Insights,
    LayoutSummary,
    PrdStructure,
    ScrapedData,
)


_client = None

JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

SYSTEM_PROMPT = "You are a pragmatic, experienced software architect. Output only JSON."

RESPONSE_SCHEMA = """{
  "summary": "Brief strategic overview",
  "designPatterns": ["pattern1", "pattern2"],
  "strengths": ["strength1", "strength2"],
  "suggestions": ["suggestion1", "suggestion2"],
  "styleDescription": "Short style descriptor",
  "detailedPrd": {
    "technicalPrdOverview": "Detailed technical PRD overview describing the system architecture, core technologies, and high-level design choices.",
    "userStories": [
      { "role": "User", "goal": "action", "benefit": "outcome", "acceptanceCriteria": ["criterion1"] }
    ],
    "functionalRequirements": [
      { "id": "FR-01", "category": "Auth", "description": "requirement details", "priority": "Critical" }
    ],
    "dataModel": [
      { "name": "User", "description": "User entity", "fields": [{ "name": "id", "type": "UUID", "description": "PK" }] }
    ],
    "apiEndpoints": [
      { "method": "GET", "path": "/api/resource", "summary": "Fetch resources" }
    ]
  },
  "prdStructure": {
    "userStories": ["Simple story 1"],
    "functionalRequirements": ["Simple req 1"],
    "proposedStack": ["Tech 1", "Tech 2"]
  }
}"""


class InsightParseError(ValueError):
    """Model output did not contain a valid insights object."""


def _get_client():
    global _client
    if _client is None:
        api_key = os.getenv("ANTHROPIC_API_KEY") or get_settings().anthropic_api_key
        _client = anthropic.AsyncAnthropic(api_key=api_key)
    return _client


def _has_api_key() -> bool:
    return bool(os.getenv("ANTHROPIC_API_KEY") or get_settings().anthropic_api_key)


def build_prompt(data: ScrapedData, ds: DesignSystem, layout: LayoutSummary) -> str:
    subpages = "\n\n".join(
        f"--- PAGE {i + 1}/{len(data.subpages_content)}: {p.url} ---\n"
        f"TITLE: {p.title}\n"
        f"CONTENT: {p.text[:5000]}..."
        for i, p in enumerate(data.subpages_content)
    ) or "No subpage content available."

    links = "\n".join(data.links[:50])
    primary = ", ".join(c.hex for c in ds.colors.primary) or "None detected"
    heading_font = ds.typography.headings.h1.family if ds.typography.headings.h1 else "unknown"
    body_font = ds.typography.body.family if ds.typography.body else "unknown"
    grid = f"{layout.grid_columns} col grid" if layout.grid_columns else "Fluid"
    tech = ", ".join(data.tech_stack) or "None detected"

    return f"""
You are an expert Senior Product Manager and System Architect.
Analyze the following website data and generate a comprehensive Product Requirements Document (PRD).

Website URL: {data.url}
Title: {data.metadata.title}
Description: {data.metadata.description}

Key Subpages Found (Context for Scope):
{links}

All Crawled Subpage Content (Full Analysis):
{subpages}

Visual Context:
- Primary Colors: {primary}
- Typography: {heading_font} (Headings), {body_font} (Body)
- Layout: {grid}

Tech Stack Signals (Detected in Client):
{tech}

Based on this, reverse-engineer the likely requirements and architecture.
Return strictly valid JSON matching this structure:
{RESPONSE_SCHEMA}
"""


def parse_insights(text: str) -> Insights:
    """Extract the JSON object from model output and validate it."""
    match = JSON_OBJECT_RE.search(text or "")
    if not match:
        raise InsightParseError("No JSON object in model response")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise InsightParseError(f"Invalid JSON: {e}") from e
    try:
        insights = Insights.model_validate(payload)
    except ValidationError as e:
        raise InsightParseError(f"Schema mismatch: {e.error_count()} errors") from e
    return insights.model_copy(update={"is_mock": False})


async def generate_insights(data: ScrapedData, ds: DesignSystem, layout: LayoutSummary) -> Insights:
    """
    Ask Claude for strategic insights and a PRD.
    Falls back to generate_mock_insights() if the call fails.
    """
    if not _has_api_key():
        print("  [insights] Missing ANTHROPIC_API_KEY, using mock data")
        return generate_mock_insights(data, ds, layout)

    try:
        client = _get_client()
        msg = await client.messages.create(
            model=get_settings().insights_model,
            max_tokens=4000,
            temperature=0.2,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": build_prompt(data, ds, layout)}],
        )
        text = "".join(block.text for block in msg.content if getattr(block, "type", None) == "text")
        insights = parse_insights(text)
        print(f"  [insights] Generated insights: {len(insights.design_patterns)} patterns")
        return insights

    except Exception as e:
        print(f"  [insights] Claude call failed: {e}, using mock")
        return generate_mock_insights(data, ds, layout)


def generate_mock_insights(data: ScrapedData, ds: DesignSystem, layout: LayoutSummary) -> Insights:
    """Deterministic, clearly labeled stand-in built from the analysis itself."""
    primary_color = ds.colors.primary[0].hex if ds.colors.primary else "#000000"
    layout_kind = "structured grid" if layout.has_grid else "flexible fluid"

    return Insights(
        summary=(
            f"[MOCK] Strategic Analysis: The platform currently utilizes a {layout_kind} layout system "
            f"reinforced by a {primary_color} primary brand identity."
        ),
        design_patterns=["Card-based information architecture", "Semantic HTML structure"],
        strengths=["High contrast ratios", "Consistent typographic scale"],
        suggestions=["Implement dark mode", "Standardize border-radius"],
        style_description="Corporate Professional",
        detailed_prd=DetailedPrd(
            technical_prd_overview=(
                "This is a MOCK Technical PRD Overview because the API key was missing or the call failed. "
                "Set ANTHROPIC_API_KEY in .env to generate real insights."
            ),
        ),
        prd_structure=PrdStructure(
            user_stories=["MOCK As a user, I want to see real AI insights."],
            functional_requirements=["System must have API key configured."],
            proposed_stack=list(data.tech_stack) or ["Next.js", "Tailwind"],
        ),
        is_mock=True,
    )

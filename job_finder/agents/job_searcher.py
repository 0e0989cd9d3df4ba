"""
Job Searcher.

Builds a search prompt from the confirmed profile and preferences and runs
it with Google Search grounding enabled. Returns the generated markdown and
the web citations the answer was grounded on.
"""

import logging

from google.genai import types

from job_finder.config import settings
from job_finder.errors import SearchError
from job_finder.models import GroundingSource, ParsedResumeData, SearchResult

logger = logging.getLogger(__name__)

DEFAULT_INTERESTS = "relevant positions"
NO_RESULTS_TEXT = "No results found."

SEARCH_LAYOUTS = ("grouped", "flat")

PRIORITY_PLATFORMS = "LinkedIn, Indeed, Naukri, Glassdoor, Monster, ZipRecruiter, and Google Jobs"

GROUPED_SEARCH_PROMPT = """Role: You are an expert AI Recruitment Researcher performing an exhaustive "Deep Web" search.

Candidate Profile:
- Role: {job_name}
- Experience: {experience_years}
- Skills: {skills}
- Certifications: {certifications}
- Target Location: {location}
- Specific Interests: {interests}

Task: Conduct a comprehensive search across the entire internet to find every relevant active job listing. Do not limit yourself to one platform.

Search Scope:
1. **Major Aggregators**: Scan {platforms}.
2. **Startup & Tech Hubs**: Search Wellfound (AngelList), Y Combinator (Work at a Startup), BuiltIn, and Product Hunt.
3. **Direct Company Career Pages**: Identify companies in {location} matching the profile and find direct links to their ATS (Lever, Greenhouse, Ashby, Workday, etc.).
4. **Niche Communities**: Search specialized boards (e.g., GitHub/StackOverflow for devs, Behance/Dribbble for creative, ProBlogger for writing).

Directives:
- **Maximize Coverage**: Find as many high-quality, distinct listings as possible.
- **Deep Matching**: Look for roles that specifically mention the candidate's key skills ({skills}).
- **Freshness**: Prioritize jobs posted within the last 14 days.

Structure your response using the following Markdown format exactly:

# Group: [Descriptive Category Name, e.g., "Top Corporate Roles", "High-Growth Startups", "Remote Opportunities"]
**Summary**: [Brief market insight about this specific category]
*   [Job Title] at [Company] - [Location] ([Apply](https://link-to-posting))
*   [Job Title] at [Company] - [Location] ([Apply](https://link-to-posting))

# Group: [Another Category]
**Summary**: [Insight]
*   [Job Title] at [Company] - [Location] ([Apply](https://link-to-posting))

(Continue for up to 5-6 distinct groups to organize the large volume of results)

Rules:
- Ensure every job has a direct URL. If a direct link is unavailable, link to the company's career page.
- Do not hallucinate links.
"""

# Legacy contract: one flat list, strict platform order
FLAT_SEARCH_PROMPT = """Role: You are an expert AI Recruitment Researcher.

Candidate Profile:
- Role: {job_name}
- Experience: {experience_years}
- Skills: {skills}
- Certifications: {certifications}
- Target Location: {location}
- Specific Interests: {interests}

Task: Find active job listings matching this profile in {location}.

Search the platforms strictly in this priority order: {platforms}. Only fall back to company career pages when those platforms have no matching listings.

Return a single Markdown bullet list, one job per line:
*   [Job Title] at [Company] - [Location] ([Apply](https://link-to-posting))

Rules:
- Every job must have a direct URL to the posting.
- Do not hallucinate links. Leave a job out rather than invent its URL.
"""


def build_search_prompt(
    profile: ParsedResumeData,
    location: str,
    interests: str = "",
    layout: str = "grouped",
) -> str:
    """Fill the search prompt for a profile and the user's preferences."""
    if layout not in SEARCH_LAYOUTS:
        raise ValueError(f"Unknown search layout: {layout}")

    template = GROUPED_SEARCH_PROMPT if layout == "grouped" else FLAT_SEARCH_PROMPT
    return template.format(
        job_name=profile.job_name,
        experience_years=profile.experience_years,
        skills=profile.skills,
        certifications=profile.certifications,
        location=location.strip(),
        interests=interests.strip() or DEFAULT_INTERESTS,
        platforms=PRIORITY_PLATFORMS,
    )


def extract_sources(response) -> list[GroundingSource]:
    """Collect web citations from the first candidate's grounding metadata, in order."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    sources = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if not uri:
            continue
        sources.append(GroundingSource(uri=uri, title=getattr(web, "title", None) or ""))
    return sources


class JobSearcher:
    """Runs one grounded search per call."""

    def __init__(self, client, model: str | None = None, layout: str | None = None):
        self.client = client
        self.model = model or settings.gemini_model
        self.layout = layout or settings.search_layout
        if self.layout not in SEARCH_LAYOUTS:
            raise ValueError(f"Unknown search layout: {self.layout}")

    async def search(self, profile: ParsedResumeData, location: str, interests: str = "") -> SearchResult:
        """
        Search for jobs matching a profile.

        Args:
            profile: Confirmed profile fields
            location: Target location (must be non-empty)
            interests: Free text interests, defaults to "relevant positions"

        Returns:
            SearchResult with the generated text and its grounding sources

        Raises:
            SearchError: On any transport or service failure
        """
        prompt = build_search_prompt(profile, location, interests, self.layout)
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                ),
            )
            text = response.text
        except Exception as e:
            logger.error(f"Error searching for jobs: {e}")
            raise SearchError(f"Job search request failed: {e}") from e

        sources = extract_sources(response)
        logger.info(f"Search returned {len(text or '')} chars and {len(sources)} sources")
        return SearchResult(text=text or NO_RESULTS_TEXT, sources=sources)

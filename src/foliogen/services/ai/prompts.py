"""Prompt text and response schemas for each generation operation."""

from typing import Any

from foliogen.schemas.feedback import FeedbackCategory

# Character budgets applied to user text before it is sent
KEYWORD_INPUT_LIMIT = 5000
FEEDBACK_INPUT_LIMIT = 2000
PROFILE_INPUT_LIMIT = 10000
LINKEDIN_INPUT_LIMIT = 15000

MAX_KEYWORDS = 10
MAX_REPLY_WORDS = 100

CLASSIFIABLE_CATEGORIES = [c.value for c in FeedbackCategory if c is not FeedbackCategory.UNCATEGORIZED]


def keyword_prompt(text: str) -> str:
    return f'''
Extract the top {MAX_KEYWORDS} technical skills, tools, or frameworks from this text.

Prioritize:
1. Specific, modern, hard skills (e.g., "Next.js", "Kubernetes", "Figma", "Rust")
2. Technical frameworks and libraries
3. Programming languages
4. Professional tools and platforms

Avoid:
- Generic terms (e.g., "Development", "Leadership", "Teamwork")
- Soft skills
- Vague descriptions

Return ONLY valid JSON in this exact format:
{{"keywords": ["keyword1", "keyword2", "keyword3"]}}

Text:
"""{text[:KEYWORD_INPUT_LIMIT]}"""
'''


def feedback_prompt(text: str) -> str:
    return f'''
Analyze the following feedback message for a professional portfolio.

Classify it into ONE category:
- "Work Opportunity": Job offers, collaboration requests, project proposals
- "Praise": Compliments, positive feedback, appreciation
- "Question": Inquiries about experience, skills, or availability
- "Bug Report": Technical issues, errors, or problems with the site
- "Other": Anything else

Determine sentiment:
- "Positive": Encouraging, complimentary, enthusiastic
- "Neutral": Factual, informational, neither positive nor negative
- "Negative": Critical, complaining, disappointed

Return ONLY valid JSON:
{{"category": "string", "sentiment": "string"}}

Message:
"""{text[:FEEDBACK_INPUT_LIMIT]}"""
'''


def reply_prompt(
    owner_name: str,
    sender_name: str | None,
    sender_email: str | None,
    category: str | None,
    sentiment: str | None,
    message: str,
) -> str:
    return f'''
You are {owner_name}, responding to feedback on your professional portfolio.

Sender: {sender_name or "Unknown"}
Email: {sender_email or "Not provided"}
Category: {category or "General"}
Sentiment: {sentiment or "Neutral"}

Message:
"""{message[:FEEDBACK_INPUT_LIMIT]}"""

Draft a professional, concise, and warm email reply.

Guidelines:
- Be authentic and personable, not robotic
- Keep it under {MAX_REPLY_WORDS} words
- Match the tone to the sentiment (enthusiastic for positive, professional for neutral)
- Include a clear next step or call to action if appropriate
- Sign off naturally

Write ONLY the email body, no subject line.
'''


PROFILE_SYSTEM_INSTRUCTION = """
You are a professional luxury brand copywriter specializing in portfolio content.

Brand Voice Guidelines:
- Minimalist, confident, sophisticated
- Strong action verbs, concrete achievements
- Clear and direct language
- Avoid: "passionate", "ninja", "guru", "rockstar", buzzwords
- Focus on impact and results

Create authentic, compelling content that showcases expertise without overselling.
"""


def profile_prompt(
    name: str,
    role: str,
    raw_text: str,
    linkedin_url: str | None,
    github_url: str | None,
) -> str:
    return f'''
Create a structured portfolio for:

Name: {name}
Role: {role}

Background Information:
"""{raw_text[:PROFILE_INPUT_LIMIT]}"""

The user has provided these links (context only, do not scrape):
LinkedIn: {linkedin_url or "Not provided"}
GitHub: {github_url or "Not provided"}

Generate:
1. A concise bio (2-3 sentences) highlighting key expertise and unique value
2. Top 8-12 relevant skills (specific technologies, tools, methodologies)
3. 3-5 notable projects with clear descriptions and tech stacks. Use the user's background info to infer these.

Ensure all content is professional, specific, and results-oriented.
'''


PROFILE_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "bio": {"type": "STRING", "description": "2-3 sentence professional bio"},
        "skills": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of 8-12 technical skills and tools",
        },
        "projects": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING", "description": "Clear, descriptive project name"},
                    "description": {
                        "type": "STRING",
                        "description": "2-3 sentence description focusing on impact and results",
                    },
                    "technologies": {
                        "type": "ARRAY",
                        "items": {"type": "STRING"},
                        "description": "List of technologies used",
                    },
                    "link": {"type": "STRING", "description": "Project link, if one is known", "nullable": True},
                },
                "required": ["title", "description", "technologies"],
            },
            "description": "List of 3-5 notable projects",
        },
    },
    "required": ["bio", "skills", "projects"],
}


LINKEDIN_SYSTEM_INSTRUCTION = """
You are a professional data extraction assistant specializing in parsing LinkedIn profile content.

Extract structured information from copy-pasted LinkedIn profile text.
Be precise and only extract information that is explicitly present.
If a field is not found, use null or empty array as appropriate.
"""


def linkedin_prompt(url: str, text: str | None) -> str:
    if text:
        source = f'Profile Text:\n"""{text[:LINKEDIN_INPUT_LIMIT]}"""'
    else:
        source = "No profile text provided - extract information from the URL context only."

    return f"""
Parse the following LinkedIn profile information and extract structured data.

LinkedIn URL: {url}

{source}

Extract:
1. Basic Info: name, headline, current role/company, location
2. Education: institution, degree, field of study, years (if available)
3. Skills: list of professional skills mentioned
4. Recent Posts: any post content snippets with dates (if present)

Be accurate and only include information explicitly stated in the available text.
"""


def _nullable_string(description: str) -> dict[str, Any]:
    return {"type": "STRING", "description": description, "nullable": True}


LINKEDIN_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "name": _nullable_string("Full name of the person"),
        "headline": _nullable_string("Professional headline or tagline"),
        "currentRole": _nullable_string("Current job title"),
        "currentCompany": _nullable_string("Current employer/company"),
        "location": _nullable_string("Geographic location"),
        "education": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "institution": {"type": "STRING", "description": "School or university name"},
                    "degree": _nullable_string("Degree earned"),
                    "fieldOfStudy": _nullable_string("Major or field of study"),
                    "startYear": {"type": "INTEGER", "description": "Start year", "nullable": True},
                    "endYear": {"type": "INTEGER", "description": "End year", "nullable": True},
                },
                "required": ["institution"],
            },
            "description": "List of education entries",
        },
        "skills": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "List of professional skills",
        },
        "posts": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": _nullable_string("Post title if available"),
                    "contentSnippet": {"type": "STRING", "description": "Brief snippet of post content"},
                    "url": _nullable_string("Post URL if available"),
                    "createdAt": _nullable_string("Post date in ISO format if available"),
                },
                "required": ["contentSnippet"],
            },
            "description": "List of recent posts",
        },
    },
    "required": [
        "name",
        "headline",
        "currentRole",
        "currentCompany",
        "location",
        "education",
        "skills",
        "posts",
    ],
}

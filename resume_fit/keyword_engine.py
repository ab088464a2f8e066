"""
Keyword Engine.

Holds the curated technology taxonomy used to detect skills in resumes and
job postings, and the keyword extraction used for fuzzy requirement matching.
"""

# * Curated technology taxonomy, grouped for readability
TECH_TAXONOMY = {
    "languages": [
        "javascript", "typescript", "python", "java", "c++", "c#",
        "ruby", "php", "go", "rust", "swift", "kotlin",
    ],
    "frontend": [
        "react", "vue", "angular", "html", "css", "sass",
        "tailwind", "bootstrap", "webpack", "vite",
    ],
    "backend": [
        "node.js", "express", "fastify", "django", "flask",
        "spring", "rails", ".net",
    ],
    "databases": [
        "sql", "mysql", "postgresql", "mongodb", "redis",
        "elasticsearch", "sqlite",
    ],
    "cloud_devops": [
        "aws", "azure", "gcp", "docker", "kubernetes",
        "jenkins", "github actions", "ci/cd",
    ],
    "tools": [
        "git", "jira", "postman", "figma", "graphql",
        "rest api", "microservices",
    ],
}

# * Flatten taxonomy for lookup, keeping dictionary order
SKILL_DICTIONARY: tuple[str, ...] = tuple(
    keyword for keywords in TECH_TAXONOMY.values() for keyword in keywords
)

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "is", "are", "was", "were", "be", "been", "have",
    "has", "had",
})

MAX_REQUIREMENT_KEYWORDS = 10


def detect_skills(text: str, dictionary: tuple[str, ...] = SKILL_DICTIONARY) -> list[str]:
    """
    Find every dictionary term that occurs anywhere in the text.

    Matching is plain substring containment on the lowercased text, so
    "java" is also detected inside "javascript".

    Args:
        text: Text to scan.
        dictionary: Lowercase terms to look for.

    Returns:
        Detected terms in dictionary order.
    """
    text_lower = text.lower()
    return [skill for skill in dictionary if skill in text_lower]


def categorize_skills(skills) -> dict[str, list[str]]:
    """
    Group skills by taxonomy category.

    Args:
        skills: Skill names (any case).

    Returns:
        Dictionary mapping category name to skills, with unknown skills
        under "other". Empty categories are omitted.
    """
    clustered: dict[str, list[str]] = {category: [] for category in TECH_TAXONOMY}
    clustered["other"] = []

    for skill in skills:
        skill_lower = skill.lower()
        category = next(
            (name for name, keywords in TECH_TAXONOMY.items() if skill_lower in keywords),
            "other",
        )
        if skill not in clustered[category]:
            clustered[category].append(skill)

    return {category: items for category, items in clustered.items() if items}


def extract_keywords(text: str, limit: int = MAX_REQUIREMENT_KEYWORDS) -> list[str]:
    """
    Extract meaningful keywords from a requirement line.

    Words of three characters or fewer and stop words are dropped.

    Args:
        text: Requirement text.
        limit: Maximum number of keywords to keep.

    Returns:
        Lowercased keywords in encounter order.
    """
    words = text.lower().split()
    return [word for word in words if len(word) > 3 and word not in STOP_WORDS][:limit]

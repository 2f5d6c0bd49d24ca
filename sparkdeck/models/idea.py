"""
Core data model for SparkDeck.

Defines the Idea dataclass representing a single catalog entry (a startup
concept with descriptive and presentational metadata), plus the helpers
that turn submission form data into pending candidate ideas.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Optional


# Complexity level -> display label
COMPLEXITY_LABELS = {
    1: "Beginner",
    2: "Intermediate",
    3: "Advanced",
    4: "Expert",
}

STATUS_PUBLISHED = "published"
STATUS_PENDING = "pending"

DEFAULT_COLOR = "#6366f1"

# Wire (camelCase) key -> dataclass field name
_WIRE_KEYS = {
    "demoUrl": "demo_url",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def complexity_label(level) -> str:
    """Return the display label for a complexity level ("Unknown" if not 1-4)."""
    return COMPLEXITY_LABELS.get(level, "Unknown")


def parse_datetime(value) -> Optional[datetime]:
    """
    Parse an ISO date/datetime string into a datetime.

    Timezone-aware values are converted to naive UTC so that catalog
    dates and locally created submissions stay comparable. Malformed or
    empty values become None rather than raising.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


@dataclass(frozen=True)
class Idea:
    """
    Represents a single startup idea in the catalog.

    Ideas are immutable once loaded. List-valued fields are stored as
    tuples so a loaded catalog can be shared between views safely.

    Attributes:
        id: Unique integer identifier (None for a submission not yet accepted).
        title: The name of the idea.
        category: Category key used by the filter (e.g. "saas", "tech", "ai").
        subtitle: One-line pitch.
        complexity: Build complexity from 1 (Beginner) to 4 (Expert).
        rating: Average rating from 0.0 to 5.0.
        description: Longer description.
        problem: Problem statement (optional).
        solution: Proposed solution (optional).
        features: Ordered key features.
        tags: Ordered display tags.
        demo_url: Link to the demo page.
        color: Display color (hex) for the card header.
        icon: Icon class name for the card.
        created_at: When the idea was added.
        updated_at: When the idea was last changed.
        status: "published" for catalog entries, "pending" for submissions.
    """

    title: str
    category: str
    id: Optional[int] = None
    subtitle: str = ""
    complexity: int = 1
    rating: float = 0.0
    description: str = ""
    problem: Optional[str] = None
    solution: Optional[str] = None
    features: tuple = ()
    tags: tuple = ()
    demo_url: str = ""
    color: str = DEFAULT_COLOR
    icon: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    status: str = STATUS_PUBLISHED

    def __post_init__(self) -> None:
        """Normalize sequences to tuples, dates to naive UTC, and validate."""
        object.__setattr__(self, "features", tuple(self.features or ()))
        object.__setattr__(self, "tags", tuple(self.tags or ()))
        object.__setattr__(self, "created_at", parse_datetime(self.created_at))
        object.__setattr__(self, "updated_at", parse_datetime(self.updated_at))
        self.validate()

    def validate(self) -> None:
        """
        Validate that required fields are present and values are in range.

        Raises:
            ValueError: If validation fails.
        """
        errors = []

        if not self.title or not str(self.title).strip():
            errors.append("title is required and cannot be empty")

        if not self.category or not str(self.category).strip():
            errors.append("category is required and cannot be empty")

        if not isinstance(self.complexity, int) or not (1 <= self.complexity <= 4):
            errors.append(f"complexity must be an integer between 1 and 4, got {self.complexity!r}")

        if not isinstance(self.rating, (int, float)) or not (0.0 <= self.rating <= 5.0):
            errors.append(f"rating must be between 0.0 and 5.0, got {self.rating!r}")

        if self.status not in (STATUS_PUBLISHED, STATUS_PENDING):
            errors.append(f"status must be published or pending, got {self.status!r}")

        if errors:
            raise ValueError(f"Idea validation failed: {'; '.join(errors)}")

    @property
    def complexity_label(self) -> str:
        return complexity_label(self.complexity)

    @property
    def is_pending(self) -> bool:
        return self.status == STATUS_PENDING

    def to_dict(self) -> dict:
        """
        Convert Idea to the wire (JSON) representation.

        Keys use the catalog file's camelCase names and datetimes are
        converted to ISO format strings.

        Returns:
            Dictionary representation of this Idea.
        """
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "category": self.category,
            "complexity": self.complexity,
            "rating": self.rating,
            "description": self.description,
            "problem": self.problem,
            "solution": self.solution,
            "features": list(self.features),
            "tags": list(self.tags),
            "demoUrl": self.demo_url,
            "color": self.color,
            "icon": self.icon,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Idea":
        """
        Create an Idea from a dictionary (e.g., the catalog JSON or an API response).

        Accepts camelCase or snake_case keys, ignores unknown keys, and
        converts ISO strings back to datetime objects.

        Args:
            data: Dictionary with Idea fields.

        Returns:
            New Idea instance.

        Raises:
            ValueError: If the record fails validation.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _WIRE_KEYS.get(key, key)
            if name in known and value is not None:
                kwargs[name] = value

        if "rating" in kwargs:
            try:
                kwargs["rating"] = float(kwargs["rating"])
            except (TypeError, ValueError):
                raise ValueError(f"Idea validation failed: rating is not a number: {kwargs['rating']!r}")

        return cls(**kwargs)

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"[{self.category}] {self.title} (rating: {self.rating:.1f})"


def parse_tags(raw: str) -> list[str]:
    """Split a comma-separated tag string, dropping empty entries."""
    return [tag.strip() for tag in (raw or "").split(",") if tag.strip()]


def idea_from_submission(form: dict, now: Optional[datetime] = None) -> Idea:
    """
    Build a pending candidate Idea from submission form fields.

    Submissions start with rating 0 and status "pending"; they are never
    merged into the published catalog.

    Args:
        form: Form fields: title, category, complexity, description,
            problem, solution, url, tags (comma-separated string or list).
        now: Creation time (defaults to the current time).

    Returns:
        A new pending Idea.

    Raises:
        ValueError: If a required field is missing or invalid.
    """
    tags = form.get("tags") or []
    if isinstance(tags, str):
        tags = parse_tags(tags)

    try:
        complexity = int(form.get("complexity") or 1)
    except (TypeError, ValueError):
        raise ValueError(f"Idea validation failed: complexity is not a number: {form.get('complexity')!r}")

    if not (form.get("description") or "").strip():
        raise ValueError("Idea validation failed: description is required and cannot be empty")

    return Idea(
        title=(form.get("title") or "").strip(),
        category=(form.get("category") or "").strip(),
        complexity=complexity,
        rating=0.0,
        description=form["description"].strip(),
        problem=(form.get("problem") or "").strip() or None,
        solution=(form.get("solution") or "").strip() or None,
        tags=tags,
        demo_url=(form.get("url") or form.get("demoUrl") or "").strip(),
        created_at=now or datetime.now(),
        status=STATUS_PENDING,
    )


@dataclass(frozen=True)
class IdeaStats:
    """
    Summary statistics for a sequence of ideas.

    Attributes:
        total_ideas: Number of ideas.
        total_categories: Number of distinct categories among them.
        avg_rating: Mean rating rounded to one decimal (0.0 when empty).
    """

    total_ideas: int = 0
    total_categories: int = 0
    avg_rating: float = 0.0

    @property
    def avg_rating_text(self) -> str:
        return f"{self.avg_rating:.1f}"

    def to_dict(self) -> dict:
        return {
            "totalIdeas": self.total_ideas,
            "totalCategories": self.total_categories,
            "avgRating": self.avg_rating_text,
        }


def compute_stats(ideas) -> IdeaStats:
    """Compute count, distinct category count and mean rating for ideas."""
    ideas = list(ideas)
    if not ideas:
        return IdeaStats()
    mean = sum(idea.rating for idea in ideas) / len(ideas)
    return IdeaStats(
        total_ideas=len(ideas),
        total_categories=len({idea.category for idea in ideas}),
        avg_rating=float(f"{mean:.1f}"),
    )

"""Repository and profile health scores."""

import re
from dataclasses import asdict, dataclass, field
from typing import Iterable, Optional

from gitbrand.github.client import Profile, Repository


@dataclass
class ScoreCard:
    score: Optional[int]
    grade: str
    flags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def _grade(score: int, thresholds: Iterable[tuple[int, str]]) -> str:
    for minimum, grade in thresholds:
        if score >= minimum:
            return grade
    return "F"


def calculate_repo_score(repo: Repository, tree: Optional[list[dict]] = None) -> ScoreCard:
    tree = tree or []
    score = 0
    flags = []

    if repo.description:
        score += 20
    else:
        flags.append("Missing project description")

    if any("readme.md" in (item.get("path") or "").lower() for item in tree):
        score += 30
    else:
        flags.append("Missing README.md file")

    if re.match(r"^[A-Z]", repo.name) or "-" in repo.name or "_" in repo.name:
        score += 20
    else:
        flags.append("Generic or lowercase naming")

    if len(tree) > 10:
        score += 30
    elif tree:
        score += 15
        flags.append("Low repository file depth")
    else:
        # No tree yet: nothing to grade against
        return ScoreCard(score=None, grade="Scanning", flags=["Initial file analysis in progress..."])

    return ScoreCard(score=score, grade=_grade(score, [(90, "A"), (75, "B"), (50, "C")]), flags=flags)


def calculate_profile_score(profile: Optional[Profile]) -> ScoreCard:
    if profile is None:
        return ScoreCard(score=0, grade="F", flags=["No data fetched"])

    score = 0
    flags = []

    if profile.bio and len(profile.bio) > 50:
        score += 40
    else:
        flags.append("Bio is missing or too short (Target: 50+ chars)")

    if profile.display_name and len(profile.display_name) > 2:
        score += 20
    else:
        flags.append("Display name is missing")

    if profile.location:
        score += 20
    else:
        flags.append("Location is not specified")

    if profile.avatar_url and "default" not in profile.avatar_url:
        score += 20
    else:
        flags.append("Professional avatar recommended")

    return ScoreCard(score=score, grade=_grade(score, [(90, "A"), (70, "B"), (40, "C")]), flags=flags)

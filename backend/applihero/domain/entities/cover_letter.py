"""Domain entities for cover-letter generation and analysis."""

from dataclasses import dataclass, field


@dataclass
class CoverLetterSettings:
    """Style knobs for generated letters."""

    tone: str = "professional"  # "professional" | "enthusiastic" | "confident"
    formality: int = 70  # 0–100
    length: str = "standard"  # "concise" | "standard" | "detailed"
    focus: list[str] = field(default_factory=lambda: ["skills", "experience"])


@dataclass
class CoverLetterTemplate:
    id: str
    title: str
    preview: str
    full_content: str
    match_score: int = 0


@dataclass
class CoverLetterScores:
    relevance: int = 0
    professionalism: int = 0
    clarity: int = 0
    impact: int = 0


@dataclass
class CoverLetterAnalysis:
    """Scored feedback on a cover letter draft."""

    score: int
    suggestions: list[str] = field(default_factory=list)
    scores: CoverLetterScores = field(default_factory=CoverLetterScores)

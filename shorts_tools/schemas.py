"""Result entities and the response schemas Gemini must follow.

Each entity mirrors one JSON reply. ``from_dict`` takes the camelCase JSON
(already validated against the matching ``*_SCHEMA``) and ``to_dict`` gives
the same JSON back.

Schemas use the Gemini ``responseSchema`` dialect (OpenAPI subset with
upper-case type names).
"""

from dataclasses import dataclass, field
from typing import Optional

from shorts_tools.config import SCORE_MIN, SCORE_MAX


# ---------------------------------------------------------------------------
# Schema helpers
# ---------------------------------------------------------------------------

def _string(description: str = "") -> dict:
    prop = {"type": "STRING"}
    if description:
        prop["description"] = description
    return prop


def _score(description: str = "") -> dict:
    prop = {"type": "NUMBER", "minimum": SCORE_MIN, "maximum": SCORE_MAX}
    if description:
        prop["description"] = description
    return prop


def _string_list(description: str = "") -> dict:
    prop = {"type": "ARRAY", "items": {"type": "STRING"}}
    if description:
        prop["description"] = description
    return prop


def _object(properties: dict, required: Optional[list] = None) -> dict:
    return {
        "type": "OBJECT",
        "properties": properties,
        "required": list(properties) if required is None else required,
    }


def _object_list(properties: dict) -> dict:
    return {"type": "ARRAY", "items": _object(properties)}


TITLE_ANALYSIS_SCHEMA = _object(
    {
        "originalTitle": _string(),
        "score": _score("Viral score 0-100"),
        "critique": _string("One-sentence critique"),
        "viralSuggestions": _object_list({
            "title": _string(),
            "predictedViews": _string("e.g. 1.2M"),
            "hookType": _string("Curiosity, Urgency, Relatability, ..."),
            "whyItWorks": _string(),
        }),
    },
    required=["score", "critique", "viralSuggestions"],
)

THUMBNAIL_ANALYSIS_SCHEMA = _object({
    "score": _score("Clickability score 0-100"),
    "strengths": _string_list(),
    "weaknesses": _string_list(),
    "colorPaletteSuggestion": _string_list("Hex codes or color names"),
    "emotionalImpact": _string(),
    "improvements": _string(),
})

SEO_RESULT_SCHEMA = _object({
    "videoTitle": _string(),
    "description": _string(),
    "tags": _string_list(),
    "hashtags": _string_list(),
    "keywords": _object_list({
        "keyword": _string(),
        "volume": _string("High/Med/Low"),
        "competition": _string("Low/Med/High"),
    }),
    "nicheAdvice": _string(),
    "relatedTopics": _object_list({
        "topic": _string(),
        "reason": _string(),
    }),
})

OUTLINE_RESULT_SCHEMA = _object({
    "title": _string(),
    "hook": _string("Visual/audio hook for 0-3s"),
    "sections": _object_list({
        "timestamp": _string(),
        "narration": _string(),
        "visual": _string(),
    }),
    "callToAction": _string(),
    "estimatedDuration": _string(),
})

TREND_JACK_SCHEMA = _object({
    "trend": _string(),
    "viralPotential": _score("Viral potential 0-100"),
    "whyItIsTrending": _string(),
    "ideas": _object_list({
        "niche": _string(),
        "concept": _string(),
        "hook": _string(),
    }),
})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass
class TitleSuggestion:
    title: str
    predicted_views: str
    hook_type: str
    why_it_works: str

    @classmethod
    def from_dict(cls, data: dict) -> "TitleSuggestion":
        return cls(
            title=data["title"],
            predicted_views=data["predictedViews"],
            hook_type=data["hookType"],
            why_it_works=data["whyItWorks"],
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "predictedViews": self.predicted_views,
            "hookType": self.hook_type,
            "whyItWorks": self.why_it_works,
        }


@dataclass
class TitleAnalysis:
    """Viral score, critique and alternative titles for a draft title."""
    score: float
    critique: str
    viral_suggestions: list[TitleSuggestion] = field(default_factory=list)
    original_title: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "TitleAnalysis":
        return cls(
            score=data["score"],
            critique=data["critique"],
            viral_suggestions=[TitleSuggestion.from_dict(s) for s in data["viralSuggestions"]],
            original_title=data.get("originalTitle"),
        )

    def to_dict(self) -> dict:
        result = {}
        if self.original_title is not None:
            result["originalTitle"] = self.original_title
        result.update({
            "score": self.score,
            "critique": self.critique,
            "viralSuggestions": [s.to_dict() for s in self.viral_suggestions],
        })
        return result


@dataclass
class ThumbnailAnalysis:
    """CTR-oriented critique of a thumbnail image."""
    score: float
    strengths: list[str]
    weaknesses: list[str]
    color_palette_suggestion: list[str]
    emotional_impact: str
    improvements: str

    @classmethod
    def from_dict(cls, data: dict) -> "ThumbnailAnalysis":
        return cls(
            score=data["score"],
            strengths=list(data["strengths"]),
            weaknesses=list(data["weaknesses"]),
            color_palette_suggestion=list(data["colorPaletteSuggestion"]),
            emotional_impact=data["emotionalImpact"],
            improvements=data["improvements"],
        )

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "colorPaletteSuggestion": list(self.color_palette_suggestion),
            "emotionalImpact": self.emotional_impact,
            "improvements": self.improvements,
        }


@dataclass
class KeywordInsight:
    keyword: str
    volume: str
    competition: str

    def to_dict(self) -> dict:
        return {"keyword": self.keyword, "volume": self.volume, "competition": self.competition}


@dataclass
class RelatedTopic:
    topic: str
    reason: str

    def to_dict(self) -> dict:
        return {"topic": self.topic, "reason": self.reason}


@dataclass
class SEOResult:
    """Title, description, tags and keyword research for one topic."""
    video_title: str
    description: str
    tags: list[str]
    hashtags: list[str]
    keywords: list[KeywordInsight]
    niche_advice: str
    related_topics: list[RelatedTopic]

    @classmethod
    def from_dict(cls, data: dict) -> "SEOResult":
        return cls(
            video_title=data["videoTitle"],
            description=data["description"],
            tags=list(data["tags"]),
            hashtags=list(data["hashtags"]),
            keywords=[
                KeywordInsight(k["keyword"], k["volume"], k["competition"])
                for k in data["keywords"]
            ],
            niche_advice=data["nicheAdvice"],
            related_topics=[RelatedTopic(t["topic"], t["reason"]) for t in data["relatedTopics"]],
        )

    def to_dict(self) -> dict:
        return {
            "videoTitle": self.video_title,
            "description": self.description,
            "tags": list(self.tags),
            "hashtags": list(self.hashtags),
            "keywords": [k.to_dict() for k in self.keywords],
            "nicheAdvice": self.niche_advice,
            "relatedTopics": [t.to_dict() for t in self.related_topics],
        }


@dataclass
class OutlineSection:
    timestamp: str
    narration: str
    visual: str

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "narration": self.narration, "visual": self.visual}


@dataclass
class OutlineResult:
    """60-second script outline. Section order is the script timeline."""
    title: str
    hook: str
    sections: list[OutlineSection]
    call_to_action: str
    estimated_duration: str

    @classmethod
    def from_dict(cls, data: dict) -> "OutlineResult":
        return cls(
            title=data["title"],
            hook=data["hook"],
            sections=[
                OutlineSection(s["timestamp"], s["narration"], s["visual"])
                for s in data["sections"]
            ],
            call_to_action=data["callToAction"],
            estimated_duration=data["estimatedDuration"],
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "hook": self.hook,
            "sections": [s.to_dict() for s in self.sections],
            "callToAction": self.call_to_action,
            "estimatedDuration": self.estimated_duration,
        }

    def script_text(self) -> str:
        """Copy-ready script: title, hook, timestamped lines, CTA."""
        lines = "\n".join(
            f"[{s.timestamp}] {s.narration} (Visual: {s.visual})" for s in self.sections
        )
        return (
            f"Title: {self.title}\n\n"
            f"Hook: {self.hook}\n\n"
            f"Script:\n{lines}\n\n"
            f"CTA: {self.call_to_action}"
        )


@dataclass
class TrendIdea:
    niche: str
    concept: str
    hook: str

    def to_dict(self) -> dict:
        return {"niche": self.niche, "concept": self.concept, "hook": self.hook}


@dataclass
class TrendJackResult:
    """Why a trend is hot and how different niches can ride it."""
    trend: str
    viral_potential: float
    why_it_is_trending: str
    ideas: list[TrendIdea]

    @classmethod
    def from_dict(cls, data: dict) -> "TrendJackResult":
        return cls(
            trend=data["trend"],
            viral_potential=data["viralPotential"],
            why_it_is_trending=data["whyItIsTrending"],
            ideas=[TrendIdea(i["niche"], i["concept"], i["hook"]) for i in data["ideas"]],
        )

    def to_dict(self) -> dict:
        return {
            "trend": self.trend,
            "viralPotential": self.viral_potential,
            "whyItIsTrending": self.why_it_is_trending,
            "ideas": [i.to_dict() for i in self.ideas],
        }


@dataclass
class SeoBundle:
    """SEO metadata and script outline produced by one SEO submission."""
    seo: SEOResult
    outline: OutlineResult

    def to_dict(self) -> dict:
        return {"seo": self.seo.to_dict(), "outline": self.outline.to_dict()}


@dataclass
class ImagePayload:
    """Base64 image data (no data-URI header) plus its MIME type."""
    data: str
    mime_type: str

    def to_part(self) -> dict:
        return {"mime_type": self.mime_type, "data": self.data}

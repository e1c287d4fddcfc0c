"""Content suggestions for collaboration offers using Jinja2.

Suggestions come from a fixed lookup table of templates, one line per
suggestion, selected by category, content type and reward type. Rendering
uses strict undefined checking so a template referencing a missing variable
fails loudly instead of producing a blank line.
"""

from itertools import zip_longest
from typing import Dict, List, Optional

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError

from matchmaker.logging import get_logger

from .exceptions import SuggestionTemplateError

logger = get_logger(__name__, component="suggestions")

MAX_SUGGESTIONS = 5
MIN_SUGGESTIONS = 3

GENERIC_CATEGORY_TEMPLATE = "category/_generic.j2"

SUGGESTION_TEMPLATES: Dict[str, str] = {
    "category/fashion.j2": (
        "Outfit showcase featuring your product\n"
        "Styling tips with your brand\n"
        "Before/after transformation with your product\n"
    ),
    "category/beauty.j2": (
        "Product application tutorial\n"
        "Before/after results demonstration\n"
        "Day-to-night routine featuring your product\n"
    ),
    "category/food.j2": (
        "Recipe creation using your product\n"
        "Taste test or reaction video\n"
        "Behind-the-scenes at your restaurant/location\n"
    ),
    "category/tech.j2": (
        "Unboxing and first impressions\n"
        "Features walkthrough and demonstration\n"
        "Comparison with similar products\n"
    ),
    GENERIC_CATEGORY_TEMPLATE: (
        "{% if category_label %}{{ category_label }} product{% else %}Product{% endif %}"
        " showcase in a real-life setting\n"
        "Day-in-the-life featuring your product/service\n"
        "Creative uses for your{% if category_label %} {{ category_label | lower }}{% endif %}"
        " product\n"
    ),
    "content_type/image.j2": (
        "High-quality lifestyle product photography\n"
        "Carousel post showing multiple angles/features\n"
    ),
    "content_type/video.j2": (
        "15-30 second product demonstration\n"
        "Tutorial showing how to use your product\n"
    ),
    "content_type/story.j2": (
        "Behind-the-scenes story series\n"
        "24-hour product testing story\n"
    ),
    "content_type/multiple.j2": (
        "Coordinated feed post + story sequence\n"
        "Video reveal with image carousel follow-up\n"
    ),
    "reward_type/product.j2": (
        "Authentic 'gifted' product review\n"
        "Product unboxing experience\n"
    ),
}


def _key(value: Optional[str]) -> str:
    return (value or "").strip().casefold()


class SuggestionGenerator:
    """Generates content ideas for an offer.

    The output for a given (category, content_type, reward_type) is always
    the same list: 3 to 5 distinct lines. Lines are taken from the category,
    content type and reward type templates in turn, category first.
    """

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """Initialize the Jinja2 environment.

        Args:
            templates: Template table to use instead of SUGGESTION_TEMPLATES
        """
        self.templates = dict(SUGGESTION_TEMPLATES if templates is None else templates)
        self.env = Environment(
            loader=DictLoader(self.templates),
            autoescape=False,  # plain text output
            undefined=StrictUndefined,
        )

    def suggest(
        self,
        category: Optional[str],
        content_type: Optional[str] = None,
        reward_type: Optional[str] = None,
    ) -> List[str]:
        """Suggest content ideas.

        Args:
            category: Offer category, e.g. "fashion" (case-insensitive)
            content_type: image, video, story or multiple (case-insensitive)
            reward_type: monetary, product or both (case-insensitive)

        Returns:
            Ordered list of distinct suggestions

        Raises:
            SuggestionTemplateError: If a template fails to render
        """
        context = {
            "category": _key(category),
            "category_label": (category or "").strip(),
            "content_type": _key(content_type),
            "reward_type": _key(reward_type),
        }

        groups = [self._render(name, context) for name in self._template_names(context)]

        # One line per group in turn, so every input shows up before the cap
        suggestions: List[str] = []
        for row in zip_longest(*groups):
            for line in row:
                if line is not None and line not in suggestions:
                    suggestions.append(line)

        if len(suggestions) < MIN_SUGGESTIONS:
            for line in self._render(GENERIC_CATEGORY_TEMPLATE, context):
                if line not in suggestions:
                    suggestions.append(line)

        logger.debug(
            f"Generated {len(suggestions[:MAX_SUGGESTIONS])} content suggestions",
            extra={
                "event": "suggestions.generated",
                "category": context["category"],
                "content_type": context["content_type"],
                "reward_type": context["reward_type"],
            },
        )

        return suggestions[:MAX_SUGGESTIONS]

    def _template_names(self, context: Dict[str, str]) -> List[str]:
        category_template = f"category/{context['category']}.j2"
        if not context["category"] or category_template not in self.templates:
            category_template = GENERIC_CATEGORY_TEMPLATE

        names = [category_template]
        for group in ("content_type", "reward_type"):
            name = f"{group}/{context[group]}.j2"
            if context[group] and name in self.templates:
                names.append(name)
        return names

    def _render(self, template_name: str, context: Dict[str, str]) -> List[str]:
        try:
            rendered = self.env.get_template(template_name).render(context)
        except TemplateError as e:
            error_msg = f"Suggestion template {template_name!r} failed to render: {e}"
            logger.error(
                error_msg,
                exc_info=True,
                extra={"event": "suggestions.template.error", "template": template_name},
            )
            raise SuggestionTemplateError(error_msg) from e

        return [line.strip() for line in rendered.splitlines() if line.strip()]

"""Prompt templates for vocabulary enrichment."""
from __future__ import annotations

ENRICHMENT_PROMPT = """\
You are an experienced IELTS tutor building study cards for a Vietnamese \
learner. Here is a word list or a passage of text:

\"\"\"
{content}
\"\"\"

Instructions:
1. If the text contains explicit pairs such as "mitigate: giảm nhẹ", keep \
exactly those terms and translations.
2. If the text is running prose, pick the most useful IELTS Band 7.0+ terms \
from it and translate each into Vietnamese.
3. For every term produce a complete card:
   - term: the English word
   - translation: an accurate Vietnamese equivalent
   - definition: a concise academic English definition
   - example: a natural sentence using the term
   - level: the IELTS band, e.g. "7.5"
   - collocations: 3 common academic collocations

Respond with a JSON array only, no other text:
[
  {{
    "term": "mitigate",
    "translation": "giảm nhẹ",
    "definition": "...",
    "example": "...",
    "level": "7.5",
    "collocations": ["...", "...", "..."]
  }}
]
"""

RETRY_NO_JSON = (
    "Your response did not contain a valid JSON array. "
    "Respond with ONLY a JSON array of card objects, no other text."
)

RETRY_INVALID = (
    "Your previous response had errors:\n{errors}\n\n"
    "Please fix them and respond with the corrected JSON array only."
)


def format_enrichment_prompt(content: str, max_chars: int) -> str:
    return ENRICHMENT_PROMPT.format(content=content[:max_chars])

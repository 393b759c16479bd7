"""Heuristic re-paragraphing of long commentary text"""

import re
from typing import List, Optional

SENTENCES_PER_PARAGRAPH = 3

TRANSITIONS = (
  "Sin embargo", "No obstante", "Por otro lado", "Por otra parte", "Asimismo",
  "Además", "En este sentido", "De esta manera", "Por lo tanto",
  "En consecuencia", "Cabe señalar", "Es importante", "Es decir", "En efecto",
  "De igual forma", "De igual manera", "Finalmente", "Por último",
  "En primer lugar", "En segundo lugar", "Por ende", "Ahora bien",
  "Esta", "Este", "Estas", "Estos", "Dicha", "Dicho", "Dichas", "Dichos",
)

_SENTENCE_SPLIT_RE = re.compile(r"(?<=\.)\s+")
_TRANSITION_RE = re.compile(
  r"^(?:" + "|".join(re.escape(t) for t in TRANSITIONS) + r")",
  re.IGNORECASE
)
_ENUMERATION_RE = re.compile(r"^(?:\d+[.)\-]|[a-z]\))")


def _starts_new_block(sentence: str) -> bool:
  return bool(_TRANSITION_RE.match(sentence) or _ENUMERATION_RE.match(sentence))


def split_paragraphs(text: Optional[str]) -> List[str]:
  """
  Group the sentences of a text into paragraphs.

  A paragraph closes after three sentences, or earlier when the next
  sentence opens with a transition connective or an enumeration marker.
  Abbreviations ending in a period count as sentence ends.
  """
  if not text:
    return []

  sentences = _SENTENCE_SPLIT_RE.split(text)
  if len(sentences) <= SENTENCES_PER_PARAGRAPH:
    return [text]

  paragraphs = []
  current: List[str] = []
  for idx, sentence in enumerate(sentences):
    current.append(sentence)
    following = sentences[idx + 1] if idx + 1 < len(sentences) else ""
    if len(current) >= SENTENCES_PER_PARAGRAPH or _starts_new_block(following):
      paragraphs.append(" ".join(current).strip())
      current = []

  if current:
    paragraphs.append(" ".join(current).strip())
  return paragraphs


def format_text(text: Optional[str]) -> str:
  """Wrap each paragraph of a text in <p> tags, one per line"""
  paragraphs = split_paragraphs(text)
  if len(paragraphs) == 1:
    return "<p>" + paragraphs[0] + "</p>"
  return "\n".join("<p>" + p + "</p>" for p in paragraphs)

"""
Keyword relevance ranker.

Every article of the corpus is scored against the query with additive
heuristics and the best ones are returned for prompt injection. Matching is
plain substring containment on lowercased text, so partial and compound
words also count.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional
from econstitucional.pipeline.enrichment import extract_article_refs


DEFAULT_LIMIT = 3
DEFAULT_EXCERPT_CHARS = 2000
MIN_TOKEN_LENGTH = 4

CITATION_BONUS = 100
TITLE_WEIGHT = 10
CONTENT_WEIGHT = 2
DOMAIN_TERM_WEIGHT = 1

LEGAL_TERMS = (
  "derecho", "derechos", "garantía", "garantías", "deber", "deberes",
  "constitución", "constitucional", "estado", "plurinacional", "soberanía",
  "nación", "pueblo", "indígena", "originario", "campesino", "autonomía",
  "autonomías", "departamental", "municipal", "territorial",
  "órgano", "legislativo", "ejecutivo", "judicial", "electoral",
  "asamblea", "presidente", "vicepresidente", "ministro", "tribunal",
  "justicia", "jurisdicción", "ley", "reforma",
  "libertad", "igualdad", "dignidad", "educación", "salud", "trabajo",
  "propiedad", "vivienda", "agua", "medio ambiente", "recursos naturales",
  "nacionalidad", "ciudadanía", "elecciones", "participación",
  "defensoría", "policía", "fuerzas armadas", "economía",
)


@dataclass(frozen=True)
class RankedArticle:
  """Article selected by the ranker"""
  id: int
  titulo: Optional[str]
  content: str
  score: int


def tokenize(query: str) -> List[str]:
  """Lowercase whitespace tokens longer than three characters"""
  return [t for t in query.lower().split() if len(t) >= MIN_TOKEN_LENGTH]


def score_article(
    entry,
    tokens: List[str],
    query_lower: str,
    cited: Iterable[int] = ()) -> int:
  """Relevance score of one knowledge entry (id, titulo, content)"""
  score = 0
  if entry.id in cited:
    score += CITATION_BONUS

  title = (entry.titulo or "").lower()
  content = (entry.content or "").lower()

  for token in tokens:
    if token in title:
      score += TITLE_WEIGHT
    if token in content:
      score += CONTENT_WEIGHT

  for term in LEGAL_TERMS:
    if term in query_lower and term in content:
      score += DOMAIN_TERM_WEIGHT

  return score


def rank(
    query: str,
    corpus,
    limit: int = DEFAULT_LIMIT,
    excerpt_chars: int = DEFAULT_EXCERPT_CHARS) -> List[RankedArticle]:
  """
  Return the top `limit` articles for a query, best first.

  Args:
    query: Free-text user question
    corpus: Iterable of entries with id, titulo and content
    limit: Maximum number of results
    excerpt_chars: Content length kept in each result

  Articles cited by number ("artículo 15", "art. 15") always outrank
  keyword matches. Articles scoring zero are never returned; ties keep
  corpus order.
  """
  if not query or limit <= 0:
    return []

  query_lower = query.lower()
  tokens = tokenize(query)
  cited = set(extract_article_refs(query))

  scored = []
  for entry in corpus:
    score = score_article(entry, tokens, query_lower, cited)
    if score > 0:
      scored.append((score, entry))

  scored.sort(key=lambda item: item[0], reverse=True)

  return [
    RankedArticle(
      id = entry.id,
      titulo = entry.titulo,
      content = (entry.content or "")[:excerpt_chars],
      score = score
    )
    for score, entry in scored[:limit]
  ]

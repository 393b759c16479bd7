import re
import unicodedata
from dataclasses import dataclass
from typing import Dict, List, Optional
from tqdm import tqdm
from econstitucional.models.article import (
  Article, AnalysisItem, EnrichedArticle, GroupedAnalysis, Topic, TOPIC_TYPE
)
from econstitucional.pipeline.formatter import format_text


TOPIC_DESCRIPTION_CHARS = 300

# "Artículo 15", "articulo 15", "ARTÍCULO 15", "Art. 15"
ARTICLE_REF_RE = re.compile(r"\bart(?:[íi]culo|\.)\s*(\d+)", re.IGNORECASE)


def extract_article_refs(text: Optional[str]) -> List[int]:
  """Article numbers cited in a text, unique and ascending"""
  if not text:
    return []
  text = unicodedata.normalize("NFC", text)
  return sorted({int(n) for n in ARTICLE_REF_RE.findall(text)})


@dataclass
class EnrichmentResult:
  """Output of the enrichment pass"""
  articles: List[EnrichedArticle]
  topics: List[Topic]
  connections: Dict[int, List[int]]

  @property
  def total_connections(self) -> int:
    return sum(a.total_conexiones for a in self.articles)


def group_analysis(article: Article) -> GroupedAnalysis:
  """Partition the analysis of an article into its four type buckets"""
  grouped = GroupedAnalysis()
  for entry in article.analisis:
    bucket = grouped.bucket(entry.tipo)
    if bucket is None:
      continue
    bucket.append(AnalysisItem(
      titulo = entry.titulo,
      contenido = format_text(entry.contenido),
      concordancias = entry.concordancias,
      articulos_relacionados = [
        ref for ref in extract_article_refs(entry.concordancias) if ref != article.id
      ]
    ))
  return grouped


def cross_references(article: Article) -> List[int]:
  """Union of the concordancias references of an article, self excluded"""
  refs = set()
  for entry in article.analisis:
    refs.update(extract_article_refs(entry.concordancias))
  refs.discard(article.id)
  return sorted(refs)


def enrich_article(article: Article) -> EnrichedArticle:
  return EnrichedArticle(
    id = article.id,
    titulo = article.titulo,
    presentacion = format_text(article.presentacion),
    # Legal text is kept verbatim
    articulo_transcrito = article.articulo_transcrito,
    descripcion = format_text(article.descripcion),
    analisis = group_analysis(article),
    articulos_relacionados = cross_references(article)
  )


def build_topic_index(articles: List[Article]) -> List[Topic]:
  """
  Aggregate articles by Temática title.

  Titles are trimmed and compared exactly. The description comes from the
  first entry seen for a title. Topics are ordered by their lowest article id.
  """
  topics: Dict[str, Topic] = {}
  for article in articles:
    for entry in article.analisis:
      if entry.tipo != TOPIC_TYPE or not entry.titulo:
        continue
      key = entry.titulo.strip()
      if not key:
        continue
      topic = topics.get(key)
      if topic is None:
        topic = Topic(
          titulo = key,
          descripcion = (entry.contenido or "")[:TOPIC_DESCRIPTION_CHARS]
        )
        topics[key] = topic
      if article.id not in topic.articulos:
        topic.articulos.append(article.id)

  for topic in topics.values():
    topic.articulos.sort()
  return sorted(topics.values(), key=lambda t: t.articulos[0])


def enrich_articles(articles: List[Article], progress: bool = False) -> EnrichmentResult:
  """Group analysis, extract cross-references and build the topic index"""
  enriched = [
    enrich_article(article)
    for article in tqdm(articles, desc = "Enriqueciendo artículos", disable = not progress)
  ]
  connections = {a.id: list(a.articulos_relacionados) for a in enriched}
  return EnrichmentResult(
    articles = enriched,
    topics = build_topic_index(articles),
    connections = connections
  )

from pathlib import Path
from typing import Any, Dict, List, Set, Union
from econstitucional.exceptions import CorpusLoadError
from econstitucional.models.article import Article, ARTICLE_TEXT_FIELDS
from econstitucional.pipeline.artifacts import write_artifacts
from econstitucional.pipeline.dump_decoder import decode_dump, find_unmapped_entities
from econstitucional.pipeline.enrichment import enrich_articles
from econstitucional.utils.logger import logger


def read_dump(dump_path: Union[str, Path]) -> str:
  """Read the dump text; a missing or unreadable dump is fatal"""
  try:
    with open(dump_path, "r", encoding = "utf-8") as f:
      return f.read()
  except (IOError, OSError) as e:
    raise CorpusLoadError(f"No se pudo leer el dump {dump_path}: {e}") from e


def collect_unmapped_entities(articles: List[Article]) -> Set[str]:
  """Entities left in the decoded text because the entity table lacks them"""
  found = set()
  for article in articles:
    for attr, _ in ARTICLE_TEXT_FIELDS:
      found |= find_unmapped_entities(getattr(article, attr))
    for entry in article.analisis:
      found |= find_unmapped_entities(entry.contenido)
      found |= find_unmapped_entities(entry.concordancias)
  return found


def run_pipeline(
    dump_path: Union[str, Path],
    output_dir: Union[str, Path],
    pipeline_config: Dict[str, Any] = None,
    progress: bool = False) -> Dict[str, Any]:
  """Decode the dump, enrich it and rewrite all artifacts in output_dir"""

  logger.info(f"Extrayendo datos del dump {dump_path}...")
  dump = read_dump(dump_path)

  articles, analysis = decode_dump(dump)
  logger.info(f"✓ {len(articles)} artículos, {len(analysis)} entradas de análisis")

  if not articles:
    raise CorpusLoadError(f"El dump {dump_path} no contiene artículos")

  unmapped = collect_unmapped_entities(articles)
  if unmapped:
    logger.warning(f"⚠ Entidades HTML sin traducir: {', '.join(sorted(unmapped))}")

  enrichment = enrich_articles(articles, progress = progress)
  written = write_artifacts(output_dir, articles, enrichment, pipeline_config)

  stats = {
    "articles": len(articles),
    "analysis": len(analysis),
    "topics": len(enrichment.topics),
    "connections": enrichment.total_connections,
    "files": [str(p) for p in written.values()],
  }
  logger.info(
    f"✓ {stats['topics']} temáticas, {stats['connections']} conexiones, "
    f"{len(written)} archivos en {output_dir}"
  )
  return stats

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Union
from econstitucional.models.article import Article
from econstitucional.pipeline.enrichment import EnrichmentResult
from econstitucional.utils.logger import logger


FULL_CORPUS_FILE = "articulos_completos.json"
ENHANCED_FILE = "articulos_enhanced.json"
TOPICS_FILE = "tematicas.json"
CONNECTIONS_FILE = "conexiones.json"
KNOWLEDGE_BASE_FILE = "knowledge_base.json"
SUMMARY_FILE = "articulos_lista.json"

KNOWLEDGE_BASE_MAX_CHARS = 8000
KNOWLEDGE_BASE_MIN_CHARS = 50
SUMMARY_PRESENTATION_CHARS = 300


def knowledge_base_content(article: Article) -> str:
  """Plain-text rendering of an article used as prompt context"""
  content = f"ARTÍCULO {article.id}: {article.titulo or ''}\n"
  if article.articulo_transcrito:
    content += f"\nTEXTO: {article.articulo_transcrito}\n"
  if article.descripcion:
    content += f"\nDESCRIPCIÓN: {article.descripcion}\n"
  if article.analisis:
    content += "\nANÁLISIS:\n"
    for entry in article.analisis:
      if entry.contenido:
        content += f"- {entry.tipo or ''}: {entry.titulo or ''}\n{entry.contenido}\n"
  return content


def build_knowledge_base(
    articles: List[Article],
    max_chars: int = KNOWLEDGE_BASE_MAX_CHARS,
    min_chars: int = KNOWLEDGE_BASE_MIN_CHARS) -> List[Dict[str, Any]]:
  """Id, title and capped plain-text content per article"""
  entries = []
  for article in articles:
    content = knowledge_base_content(article)[:max_chars]
    if len(content) > min_chars:
      entries.append({"id": article.id, "titulo": article.titulo, "content": content})
  return entries


def build_summary(
    articles: List[Article],
    presentation_chars: int = SUMMARY_PRESENTATION_CHARS) -> List[Dict[str, Any]]:
  """Light list view: titled articles only"""
  return [
    {
      "id": article.id,
      "titulo": article.titulo,
      "presentacion": article.presentacion[:presentation_chars] + "..." if article.presentacion else None,
      "tieneAnalisis": bool(article.analisis)
    }
    for article in articles
    if article.titulo
  ]


def dump_json(data: Any) -> str:
  return json.dumps(data, indent = 2, ensure_ascii = False) + "\n"


def write_json(path: Union[str, Path], data: Any) -> Path:
  """Write JSON as a whole-file replacement of path"""
  path = Path(path)
  path.parent.mkdir(parents = True, exist_ok = True)
  fd, tmp_name = tempfile.mkstemp(dir = path.parent, prefix = f".{path.name}.", suffix = ".tmp")
  try:
    with os.fdopen(fd, "w", encoding = "utf-8", newline = "\n") as f:
      f.write(dump_json(data))
    os.replace(tmp_name, path)
  except (IOError, OSError) as e:
    logger.error(f"✗ Error al escribir {path}: {e}")
    if os.path.exists(tmp_name):
      os.remove(tmp_name)
    raise
  return path


def read_json(path: Union[str, Path]) -> Any:
  with open(path, "r", encoding = "utf-8") as f:
    return json.load(f)


def write_artifacts(
    output_dir: Union[str, Path],
    articles: List[Article],
    enrichment: EnrichmentResult,
    pipeline_config: Dict[str, Any] = None) -> Dict[str, Path]:
  """Write every derived artifact, overwriting previous runs"""
  pipeline_config = pipeline_config or {}
  output_dir = Path(output_dir)

  artifacts = {
    FULL_CORPUS_FILE: [a.to_dict() for a in articles],
    ENHANCED_FILE: [a.to_dict() for a in enrichment.articles],
    TOPICS_FILE: [t.to_dict() for t in enrichment.topics],
    CONNECTIONS_FILE: {str(k): v for k, v in enrichment.connections.items()},
    KNOWLEDGE_BASE_FILE: build_knowledge_base(
      articles,
      max_chars = pipeline_config.get('knowledge_base_max_chars', KNOWLEDGE_BASE_MAX_CHARS),
      min_chars = pipeline_config.get('knowledge_base_min_chars', KNOWLEDGE_BASE_MIN_CHARS)
    ),
    SUMMARY_FILE: build_summary(
      articles,
      presentation_chars = pipeline_config.get('summary_presentation_chars', SUMMARY_PRESENTATION_CHARS)
    ),
  }

  written = {}
  for name, data in artifacts.items():
    written[name] = write_json(output_dir / name, data)
    logger.debug(f"  → {written[name]}")
  return written

"""
Decoder for the PostgreSQL plain-text dump of the e-constitucional database.

Only the COPY data blocks are read: each block starts with a
``COPY public.<table> (...) FROM stdin;`` line and ends with a line holding
``\\.``. Rows are tab-separated and use the COPY text escapes.
"""

import re
from typing import Dict, List, Optional, Set, Tuple
from econstitucional.models.article import Article, AnalysisEntry, ARTICLE_TEXT_FIELDS
from econstitucional.utils.logger import logger


ARTICLES_TABLE = "COPY public.dbo_articulo"
ANALYSIS_TABLE = "COPY public.dbo_analisis"
END_OF_DATA = "\\."
NULL_MARKER = "\\N"

ARTICLE_MIN_FIELDS = 14
ANALYSIS_MIN_FIELDS = 6

_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\"}
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_ENTITY_RE = re.compile(r"&(?:[A-Za-z][A-Za-z0-9]*|#\d+|#x[0-9A-Fa-f]+);")

# Fixed entity table, applied in this order. Entities not listed here are
# left as they are (see find_unmapped_entities).
HTML_ENTITIES = (
  ("&nbsp;", " "),
  ("&aacute;", "á"),
  ("&eacute;", "é"),
  ("&iacute;", "í"),
  ("&oacute;", "ó"),
  ("&uacute;", "ú"),
  ("&ntilde;", "ñ"),
  ("&Aacute;", "Á"),
  ("&Eacute;", "É"),
  ("&Iacute;", "Í"),
  ("&Oacute;", "Ó"),
  ("&Uacute;", "Ú"),
  ("&Ntilde;", "Ñ"),
  ("&ldquo;", '"'),
  ("&rdquo;", '"'),
  ("&lsquo;", "'"),
  ("&rsquo;", "'"),
  ("&mdash;", "—"),
  ("&ndash;", "–"),
  ("&amp;", "&"),
  ("&lt;", "<"),
  ("&gt;", ">"),
)
_MAPPED_ENTITIES = {entity for entity, _ in HTML_ENTITIES}


def decode_copy_field(text: Optional[str]) -> Optional[str]:
  """Reverse the COPY text escapes; the null marker becomes None"""
  if text is None or text == NULL_MARKER:
    return None
  return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), text)


def strip_markup(html: Optional[str]) -> str:
  """Remove tags, expand the known entities and normalize whitespace"""
  if not html:
    return ""
  text = _TAG_RE.sub("", html)
  for entity, replacement in HTML_ENTITIES:
    text = text.replace(entity, replacement)
  return _WHITESPACE_RE.sub(" ", text).strip()


def find_unmapped_entities(text: Optional[str]) -> Set[str]:
  """Entities in a text that strip_markup does not expand"""
  if not text:
    return set()
  return {e for e in _ENTITY_RE.findall(text) if e not in _MAPPED_ENTITIES}


def extract_table_section(dump: str, start_token: str) -> Optional[List[str]]:
  """
  Return the data lines of a COPY block, or None if the table is absent.

  The block runs from the line after the start token up to the end-of-data
  line; without one it runs to the end of the dump.
  """
  start_idx = dump.find(start_token)
  if start_idx == -1:
    return None

  header_end = dump.find("\n", start_idx)
  if header_end == -1:
    return []

  lines = []
  for line in dump[header_end + 1:].split("\n"):
    line = line.rstrip("\r")
    if line == END_OF_DATA:
      break
    lines.append(line)
  return lines


def _parse_id(raw: str) -> int:
  """Positive integer id, or 0 when the field cannot be used"""
  try:
    value = int(raw.strip())
  except (ValueError, AttributeError):
    return 0
  return value if value > 0 else 0


def _rich_text(raw: str) -> str:
  return strip_markup(decode_copy_field(raw))


def parse_article_row(fields: List[str]) -> Optional[Article]:
  """Build an Article from a dbo_articulo row, None if the row is unusable"""
  if len(fields) < ARTICLE_MIN_FIELDS:
    return None
  article_id = _parse_id(fields[1])
  if not article_id:
    return None
  # Long-text columns start at offset 3, in ARTICLE_TEXT_FIELDS order
  texts = {
    attr: _rich_text(fields[3 + offset])
    for offset, (attr, _) in enumerate(ARTICLE_TEXT_FIELDS)
  }
  return Article(id = article_id, titulo = decode_copy_field(fields[2]), **texts)


def parse_analysis_row(fields: List[str]) -> Optional[AnalysisEntry]:
  """Build an AnalysisEntry from a dbo_analisis row"""
  if len(fields) < ANALYSIS_MIN_FIELDS:
    return None
  articulo_id = _parse_id(fields[1])
  if not articulo_id:
    return None
  return AnalysisEntry(
    articulo_id = articulo_id,
    tipo = decode_copy_field(fields[2]),
    titulo = decode_copy_field(fields[3]),
    contenido = _rich_text(fields[4]),
    concordancias = _rich_text(fields[5])
  )


def _parse_section(dump: str, start_token: str, row_parser) -> list:
  lines = extract_table_section(dump, start_token)
  if lines is None:
    logger.warning(f"⚠ Tabla no encontrada en el dump: {start_token}")
    return []

  records = []
  skipped = 0
  for line in lines:
    if not line.strip():
      continue
    record = row_parser(line.split("\t"))
    if record is None:
      skipped += 1
      continue
    records.append(record)

  if skipped:
    logger.debug(f"{start_token}: {skipped} filas ignoradas")
  return records


def extract_articles(dump: str) -> List[Article]:
  """Decode the articles table, sorted by id"""
  articles = _parse_section(dump, ARTICLES_TABLE, parse_article_row)
  return sorted(articles, key=lambda a: a.id)


def extract_analysis(dump: str) -> List[AnalysisEntry]:
  """Decode the analysis table, in source order"""
  return _parse_section(dump, ANALYSIS_TABLE, parse_analysis_row)


def attach_analysis(articles: List[Article], analysis: List[AnalysisEntry]) -> List[Article]:
  """Attach every analysis entry to its owning article, keeping source order"""
  by_article: Dict[int, List[AnalysisEntry]] = {}
  for entry in analysis:
    by_article.setdefault(entry.articulo_id, []).append(entry)
  for article in articles:
    article.analisis = by_article.get(article.id, [])
  return articles


def decode_dump(dump: str) -> Tuple[List[Article], List[AnalysisEntry]]:
  """Decode both tables and join the analysis onto the articles"""
  articles = extract_articles(dump)
  analysis = extract_analysis(dump)
  return attach_analysis(articles, analysis), analysis

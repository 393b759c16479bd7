from .dump_decoder import decode_dump, decode_copy_field, strip_markup
from .enrichment import enrich_articles, extract_article_refs, EnrichmentResult
from .formatter import format_text
from .runner import run_pipeline

__all__ = [
  'decode_dump', 'decode_copy_field', 'strip_markup',
  'enrich_articles', 'extract_article_refs', 'EnrichmentResult',
  'format_text', 'run_pipeline'
]

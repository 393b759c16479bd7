from typing import Any, Dict, List, Optional
from econstitucional.llm.llm_client import LLMClient, create_llm_client
from econstitucional.retrieval.ranker import RankedArticle, rank, DEFAULT_EXCERPT_CHARS
from econstitucional.utils.config import CONFIG
from econstitucional.utils.logger import logger


SYSTEM_PROMPT = """Eres un asistente legal especializado en la Constitución Política del Estado Plurinacional de Bolivia (CPE 2009).

Tu rol es:
- Responder preguntas sobre la Constitución boliviana de forma clara y precisa
- Citar artículos específicos cuando sea relevante
- Explicar conceptos constitucionales en lenguaje accesible
- Mencionar cuando una pregunta está fuera del ámbito constitucional

Responde siempre en español y de forma profesional pero amigable."""

CONTEXT_HEADER = """
A continuación tienes artículos de la Constitución relacionados con la pregunta. \
Basa tu respuesta en ellos y cítalos por su número cuando los uses:
"""


class ConstitutionalAssistant:
  """Answers questions about the constitution with retrieved article context"""

  def __init__(
      self,
      corpus,
      llm: Optional[LLMClient] = None,
      max_results: Optional[int] = None,
      excerpt_chars: Optional[int] = None):
    retrieval_config = CONFIG.get('retrieval', {})

    self.corpus = corpus
    self.llm = llm or create_llm_client(CONFIG)
    if max_results is None:
      max_results = retrieval_config.get('max_results', 3)
    if excerpt_chars is None:
      excerpt_chars = retrieval_config.get('excerpt_chars', DEFAULT_EXCERPT_CHARS)
    self.max_results = max_results
    self.excerpt_chars = excerpt_chars

    if not getattr(corpus, 'available', True):
      logger.warning(f"⚠ Corpus no disponible, se responderá sin contexto: {corpus.reason}")

  def retrieve(self, message: str) -> List[RankedArticle]:
    """Articles to inject for a message"""
    return rank(message, self.corpus, limit = self.max_results, excerpt_chars = self.excerpt_chars)

  def build_system_prompt(self, articles: List[RankedArticle]) -> str:
    if not articles:
      return SYSTEM_PROMPT
    excerpts = "\n\n---\n\n".join(a.content.strip() for a in articles)
    return f"{SYSTEM_PROMPT}\n{CONTEXT_HEADER}\n{excerpts}"

  def ask(self, message: str) -> Dict[str, Any]:
    """
    Answer a single question.

    Returns the model reply and the articles injected as context. Model
    failures propagate as ModelServiceError.
    """
    if not message or not message.strip():
      raise ValueError("Message is required")

    articles = self.retrieve(message)
    if articles:
      logger.info(f"  → Artículos de contexto: {', '.join(str(a.id) for a in articles)}")
    else:
      logger.info("  → Sin artículos relevantes, consulta sin contexto")

    reply = self.llm.generate(self.build_system_prompt(articles), message)
    logger.info("✓ Respuesta generada")

    return {
      "reply": reply,
      "articulosReferenciados": [{"id": a.id, "titulo": a.titulo} for a in articles]
    }

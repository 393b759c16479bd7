"""
Read-only corpus handle loaded once at process start.

``load_corpus`` never returns a silently empty collection: when the
artifacts cannot be read it returns an ``UnavailableCorpus`` carrying the
reason, so callers can tell "no data" apart from "no matches".
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union
from econstitucional.pipeline.artifacts import (
  FULL_CORPUS_FILE, KNOWLEDGE_BASE_FILE, SUMMARY_FILE, read_json
)
from econstitucional.utils.logger import logger


def freeze(value: Any) -> Any:
  """Read-only copy of decoded JSON: dicts become mapping proxies, lists tuples"""
  if isinstance(value, Mapping):
    return MappingProxyType({k: freeze(v) for k, v in value.items()})
  if isinstance(value, (list, tuple)):
    return tuple(freeze(v) for v in value)
  return value


def thaw(value: Any) -> Any:
  """Plain dicts and lists from a frozen record, for serialization"""
  if isinstance(value, Mapping):
    return {k: thaw(v) for k, v in value.items()}
  if isinstance(value, tuple):
    return [thaw(v) for v in value]
  return value


@dataclass(frozen=True)
class KnowledgeEntry:
  """Searchable rendering of one article"""
  id: int
  titulo: Optional[str]
  content: str

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'KnowledgeEntry':
    return cls(
      id = int(data['id']),
      titulo = data.get('titulo'),
      content = data.get('content') or ""
    )


class Corpus:
  """Immutable view over the knowledge base, summary list and full articles"""

  available = True

  def __init__(
      self,
      entries: List[KnowledgeEntry],
      summaries: List[Dict[str, Any]] = (),
      articles: List[Dict[str, Any]] = ()):
    self._entries: Tuple[KnowledgeEntry, ...] = tuple(entries)
    self._summaries: Tuple[Mapping[str, Any], ...] = tuple(freeze(s) for s in summaries)
    self._articles: Mapping[int, Mapping[str, Any]] = MappingProxyType(
      {int(a['id']): freeze(a) for a in articles}
    )

  @property
  def entries(self) -> Tuple[KnowledgeEntry, ...]:
    return self._entries

  @property
  def summaries(self) -> Tuple[Mapping[str, Any], ...]:
    return self._summaries

  def get(self, article_id: int) -> Optional[Mapping[str, Any]]:
    """Full article record by id"""
    return self._articles.get(article_id)

  def __iter__(self) -> Iterator[KnowledgeEntry]:
    return iter(self._entries)

  def __len__(self) -> int:
    return len(self._entries)

  def __bool__(self) -> bool:
    return True

  def __repr__(self) -> str:
    return f"Corpus({len(self._entries)} articles)"


class UnavailableCorpus:
  """Stand-in for a corpus that failed to load"""

  available = False
  entries: Tuple[KnowledgeEntry, ...] = ()
  summaries: Tuple[Mapping[str, Any], ...] = ()

  def __init__(self, reason: str):
    self.reason = reason

  def get(self, article_id: int) -> None:
    return None

  def __iter__(self) -> Iterator[KnowledgeEntry]:
    return iter(())

  def __len__(self) -> int:
    return 0

  def __bool__(self) -> bool:
    return False

  def __repr__(self) -> str:
    return f"UnavailableCorpus({self.reason!r})"


def load_corpus(data_dir: Union[str, Path]) -> Union[Corpus, UnavailableCorpus]:
  """Load the JSON artifacts produced by the pipeline"""
  data_dir = Path(data_dir)
  try:
    knowledge_base = read_json(data_dir / KNOWLEDGE_BASE_FILE)
    summaries = read_json(data_dir / SUMMARY_FILE)
    articles = read_json(data_dir / FULL_CORPUS_FILE)
    entries = [KnowledgeEntry.from_dict(e) for e in knowledge_base]
  except (IOError, OSError, ValueError, KeyError, TypeError) as e:
    # json.JSONDecodeError is a ValueError
    logger.error(f"✗ Corpus no disponible en {data_dir}: {e}")
    return UnavailableCorpus(str(e))

  if not entries:
    logger.error(f"✗ Corpus vacío en {data_dir}")
    return UnavailableCorpus(f"{KNOWLEDGE_BASE_FILE} no contiene artículos")

  corpus = Corpus(entries, summaries, articles)
  logger.info(f"✓ Corpus cargado: {len(corpus)} artículos")
  return corpus

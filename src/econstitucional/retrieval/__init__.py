from .corpus import Corpus, KnowledgeEntry, UnavailableCorpus, freeze, load_corpus, thaw
from .ranker import RankedArticle, rank

__all__ = ['Corpus', 'KnowledgeEntry', 'UnavailableCorpus', 'load_corpus', 'freeze', 'thaw', 'RankedArticle', 'rank']

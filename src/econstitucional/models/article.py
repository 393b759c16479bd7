from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field


# Analysis types in bucket order, mapped to their JSON bucket key
ANALYSIS_BUCKETS = {
  "Temática": "tematica",
  "Categoría": "categoria",
  "Subcategoría": "subcategoria",
  "Subtemática": "subtematica",
}

TOPIC_TYPE = "Temática"

# (attribute, JSON key) for the long-text fields of an article row
ARTICLE_TEXT_FIELDS = (
  ("presentacion", "presentacion"),
  ("articulo_transcrito", "articuloTranscrito"),
  ("descripcion", "descripcion"),
  ("tratamiento_constitucional", "tratamientoConstitucional"),
  ("tratamiento_actas", "tratamientoActas"),
  ("alcance_reserva_legal", "alcanceReservaLegal"),
  ("bibliografia", "bibliografia"),
  ("webgrafia", "webgrafia"),
  ("documentos_legales", "documentosLegales"),
  ("archivos_resoluciones", "archivosResoluciones"),
)


@dataclass
class AnalysisEntry:
  """Tagged commentary attached to an article"""
  articulo_id: int
  tipo: Optional[str]
  titulo: Optional[str]
  contenido: str = ""
  concordancias: str = ""

  def to_dict(self) -> Dict[str, Any]:
    return {
      "articuloId": self.articulo_id,
      "tipo": self.tipo,
      "titulo": self.titulo,
      "contenido": self.contenido,
      "concordancias": self.concordancias
    }


@dataclass
class Article:
  """One numbered article of the constitution, as decoded from the dump"""
  id: int
  titulo: Optional[str] = None
  presentacion: str = ""
  articulo_transcrito: str = ""
  descripcion: str = ""
  tratamiento_constitucional: str = ""
  tratamiento_actas: str = ""
  alcance_reserva_legal: str = ""
  bibliografia: str = ""
  webgrafia: str = ""
  documentos_legales: str = ""
  archivos_resoluciones: str = ""
  analisis: List[AnalysisEntry] = field(default_factory=list)

  def to_dict(self) -> Dict[str, Any]:
    """Convert to the full-corpus JSON layout"""
    data = {"id": self.id, "titulo": self.titulo}
    for attr, key in ARTICLE_TEXT_FIELDS:
      data[key] = getattr(self, attr)
    data["analisis"] = [entry.to_dict() for entry in self.analisis]
    return data


@dataclass
class AnalysisItem:
  """Analysis entry as stored inside an enriched article bucket"""
  titulo: Optional[str]
  contenido: str
  concordancias: str
  articulos_relacionados: List[int]

  def to_dict(self) -> Dict[str, Any]:
    return {
      "titulo": self.titulo,
      "contenido": self.contenido,
      "concordancias": self.concordancias,
      "articulosRelacionados": list(self.articulos_relacionados)
    }


@dataclass
class GroupedAnalysis:
  """Analysis entries partitioned by type"""
  tematica: List[AnalysisItem] = field(default_factory=list)
  categoria: List[AnalysisItem] = field(default_factory=list)
  subcategoria: List[AnalysisItem] = field(default_factory=list)
  subtematica: List[AnalysisItem] = field(default_factory=list)

  def bucket(self, tipo: Optional[str]) -> Optional[List[AnalysisItem]]:
    """Bucket for an analysis type, None for unrecognized types"""
    key = ANALYSIS_BUCKETS.get(tipo)
    return getattr(self, key) if key else None

  def to_dict(self) -> Dict[str, Any]:
    return {
      key: [item.to_dict() for item in getattr(self, key)]
      for key in ANALYSIS_BUCKETS.values()
    }


@dataclass
class EnrichedArticle:
  """Article with grouped analysis and its cross-reference list"""
  id: int
  titulo: Optional[str]
  presentacion: str
  articulo_transcrito: str
  descripcion: str
  analisis: GroupedAnalysis
  articulos_relacionados: List[int]

  @property
  def total_conexiones(self) -> int:
    return len(self.articulos_relacionados)

  def to_dict(self) -> Dict[str, Any]:
    return {
      "id": self.id,
      "titulo": self.titulo,
      "presentacion": self.presentacion,
      "articuloTranscrito": self.articulo_transcrito,
      "descripcion": self.descripcion,
      "analisis": self.analisis.to_dict(),
      "articulosRelacionados": list(self.articulos_relacionados),
      "totalConexiones": self.total_conexiones
    }


@dataclass
class Topic:
  """Articles sharing a Temática title"""
  titulo: str
  articulos: List[int] = field(default_factory=list)
  descripcion: str = ""

  def to_dict(self) -> Dict[str, Any]:
    return {
      "titulo": self.titulo,
      "articulos": list(self.articulos),
      "descripcion": self.descripcion
    }

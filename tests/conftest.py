"""
Shared fixtures: a small PostgreSQL dump with the two COPY blocks the
pipeline reads, and the artifacts produced from it.
"""

import pytest

from econstitucional.pipeline.dump_decoder import decode_dump
from econstitucional.pipeline.runner import run_pipeline
from econstitucional.retrieval.corpus import load_corpus


NULL = "\\N"


def article_row(pk, art_id, titulo, presentacion=NULL, transcrito=NULL, descripcion=NULL):
  """dbo_articulo row: pk, numero, titulo, 10 long-text columns, timestamp"""
  fields = [str(pk), str(art_id), titulo, presentacion, transcrito, descripcion]
  fields += [NULL] * 7
  fields.append("2021-03-01 00:00:00")
  return "\t".join(fields)


def analysis_row(pk, art_id, tipo, titulo, contenido=NULL, concordancias=NULL):
  return "\t".join([str(pk), str(art_id), tipo, titulo, contenido, concordancias])


def build_dump(article_rows, analysis_rows):
  parts = [
    "--",
    "-- PostgreSQL database dump",
    "--",
    "",
    "COPY public.dbo_articulo (id, numero, titulo, presentacion, articulo_transcrito, descripcion, "
    "tratamiento_constitucional, tratamiento_actas, alcance_reserva_legal, bibliografia, webgrafia, "
    "documentos_legales, archivos_resoluciones, fecha) FROM stdin;",
  ]
  parts += article_rows
  parts += [
    "\\.",
    "",
    "",
    "COPY public.dbo_analisis (id, articulo_id, tipo, titulo, contenido, concordancias) FROM stdin;",
  ]
  parts += analysis_rows
  parts += ["\\.", "", "-- PostgreSQL database dump complete", ""]
  return "\n".join(parts)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def dump_builder():
  """Expose the row and dump helpers to tests that need custom dumps"""
  class Builder:
    article = staticmethod(article_row)
    analysis = staticmethod(analysis_row)
    dump = staticmethod(build_dump)
  return Builder


@pytest.fixture
def sample_dump():
  articles = [
    article_row(
      10, 9, "Autonomía departamental",
      presentacion="<p>La autonom&iacute;a implica la elecci&oacute;n directa de sus autoridades.</p>",
      transcrito="I. La autonomía implica la elección directa.\\nII. Ejercicio de facultades."
    ),
    article_row(
      11, 1, "Modelo de Estado",
      presentacion="<p>Bolivia se constituye en un Estado Unitario Social de Derecho Plurinacional Comunitario.</p>",
      transcrito="Bolivia se constituye en un Estado Unitario Social de Derecho Plurinacional Comunitario, libre, independiente, soberano, democrático, intercultural, descentralizado y con autonomías.",
      descripcion="Primera oración. Segunda oración. Tercera oración. Cuarta oración. Quinta oración."
    ),
    article_row(
      12, 3, "Naciones y pueblos",
      transcrito="La nación boliviana está conformada por la totalidad de las bolivianas y los bolivianos."
    ),
    article_row(
      13, 15, "Derecho a la vida",
      transcrito="Toda persona tiene derecho a la vida y a la integridad física, psicológica y sexual."
    ),
    article_row(14, 0, "Fila sin número"),
    "99\t7\tfila truncada",
    article_row(15, "abc", "Número ilegible"),
  ]
  analysis = [
    analysis_row(1, 3, "Temática", "Autonomías", "Las naciones ejercen autonomía.", "Artículo 1 y Art. 9, también Artículo 3"),
    analysis_row(2, 1, "Temática", "Autonomías ", "Bolivia adopta un modelo autonómico.", "Véase el Artículo 15 y el Art. 22."),
    analysis_row(3, 9, "Temática", "Autonomías", "Régimen autonómico departamental.", "Articulo 3"),
    analysis_row(4, 9, "Categoría", "Organización territorial", "Distribución territorial del poder."),
    analysis_row(5, 9, "Otro", "Tipo desconocido", "No se agrupa.", "Artículo 1"),
    analysis_row(6, 15, "Subtemática", "Derechos fundamentales", "El derecho a la vida es el primero.", "ARTÍCULO 15, Artículo 22"),
    analysis_row(7, 0, "Temática", "Huérfana", "Sin artículo."),
    "8\t1\tTemática",
  ]
  return build_dump(articles, analysis)


@pytest.fixture
def decoded(sample_dump):
  """(articles, analysis) decoded from the sample dump"""
  return decode_dump(sample_dump)


@pytest.fixture
def dump_file(tmp_path, sample_dump):
  path = tmp_path / "db_econstitucional_backup.dump"
  path.write_text(sample_dump, encoding="utf-8")
  return path


@pytest.fixture
def data_dir(tmp_path, dump_file):
  """Directory holding the artifacts generated from the sample dump"""
  out = tmp_path / "data"
  run_pipeline(dump_file, out)
  return out


@pytest.fixture
def corpus(data_dir):
  return load_corpus(data_dir)

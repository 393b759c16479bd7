"""
End-to-end tests of the extraction pipeline on the sample dump: written
artifacts, reproducibility and fatal conditions.
"""

import json

import pytest

from econstitucional.exceptions import CorpusLoadError
from econstitucional.models.article import AnalysisEntry, Article
from econstitucional.pipeline.artifacts import (
  CONNECTIONS_FILE,
  ENHANCED_FILE,
  FULL_CORPUS_FILE,
  KNOWLEDGE_BASE_FILE,
  SUMMARY_FILE,
  TOPICS_FILE,
  build_knowledge_base,
  build_summary,
  write_json,
)
from econstitucional.pipeline.runner import run_pipeline

ALL_FILES = [
  FULL_CORPUS_FILE, ENHANCED_FILE, TOPICS_FILE,
  CONNECTIONS_FILE, KNOWLEDGE_BASE_FILE, SUMMARY_FILE,
]


def load(data_dir, name):
  return json.loads((data_dir / name).read_text(encoding="utf-8"))


# ============================================================================
# RUN
# ============================================================================

def test_all_artifacts_written(data_dir):
  for name in ALL_FILES:
    assert (data_dir / name).is_file(), name
  # no temp files left behind
  assert sorted(p.name for p in data_dir.iterdir()) == sorted(ALL_FILES)


def test_run_stats(dump_file, tmp_path):
  stats = run_pipeline(dump_file, tmp_path / "out")
  assert stats["articles"] == 4
  assert stats["analysis"] == 6
  assert stats["topics"] == 1
  assert stats["connections"] == 7
  assert len(stats["files"]) == len(ALL_FILES)


def test_pipeline_is_byte_reproducible(dump_file, tmp_path):
  first = tmp_path / "first"
  run_pipeline(dump_file, first)
  snapshot = {name: (first / name).read_bytes() for name in ALL_FILES}

  run_pipeline(dump_file, first)
  second = tmp_path / "second"
  run_pipeline(dump_file, second)

  for name in ALL_FILES:
    assert (first / name).read_bytes() == snapshot[name]
    assert (second / name).read_bytes() == snapshot[name]


def test_artifacts_are_utf8_pretty_printed(data_dir):
  raw = (data_dir / TOPICS_FILE).read_text(encoding="utf-8")
  assert "Autonomías" in raw
  assert raw.startswith("[\n  {")
  assert raw.endswith("\n")


def test_connections_graph_matches_enhanced_articles(data_dir):
  connections = load(data_dir, CONNECTIONS_FILE)
  enhanced = load(data_dir, ENHANCED_FILE)

  assert list(connections) == [str(a["id"]) for a in enhanced]
  for article in enhanced:
    assert connections[str(article["id"])] == article["articulosRelacionados"]
    assert article["totalConexiones"] == len(article["articulosRelacionados"])
    assert article["id"] not in article["articulosRelacionados"]


def test_full_corpus_layout(data_dir):
  articles = load(data_dir, FULL_CORPUS_FILE)
  first = articles[0]

  assert first["id"] == 1
  assert first["titulo"] == "Modelo de Estado"
  assert first["presentacion"].startswith("Bolivia se constituye")
  assert first["analisis"][0] == {
    "articuloId": 1,
    "tipo": "Temática",
    "titulo": "Autonomías ",
    "contenido": "Bolivia adopta un modelo autonómico.",
    "concordancias": "Véase el Artículo 15 y el Art. 22.",
  }


def test_enhanced_layout(data_dir):
  enhanced = {a["id"]: a for a in load(data_dir, ENHANCED_FILE)}

  assert enhanced[9]["presentacion"] == "<p>La autonomía implica la elección directa de sus autoridades.</p>"
  assert enhanced[1]["descripcion"] == (
    "<p>Primera oración. Segunda oración. Tercera oración.</p>\n"
    "<p>Cuarta oración. Quinta oración.</p>"
  )
  assert [i["titulo"] for i in enhanced[9]["analisis"]["categoria"]] == ["Organización territorial"]
  assert enhanced[15]["analisis"]["subtematica"][0]["articulosRelacionados"] == [22]


def test_topics_file(data_dir):
  assert load(data_dir, TOPICS_FILE) == [{
    "titulo": "Autonomías",
    "articulos": [1, 3, 9],
    "descripcion": "Bolivia adopta un modelo autonómico.",
  }]


def test_summary_file(data_dir):
  summary = {s["id"]: s for s in load(data_dir, SUMMARY_FILE)}

  assert summary[9]["presentacion"] == "La autonomía implica la elección directa de sus autoridades...."
  assert summary[3]["presentacion"] is None
  assert summary[3]["tieneAnalisis"] is True


# ============================================================================
# FAILURES
# ============================================================================

def test_missing_dump_is_fatal(tmp_path):
  with pytest.raises(CorpusLoadError):
    run_pipeline(tmp_path / "missing.dump", tmp_path / "out")


def test_dump_without_articles_is_fatal(tmp_path, dump_builder):
  dump = tmp_path / "empty.dump"
  dump.write_text(dump_builder.dump([], []), encoding="utf-8")
  with pytest.raises(CorpusLoadError):
    run_pipeline(dump, tmp_path / "out")
  assert not (tmp_path / "out").exists()


def test_missing_analysis_table_is_not_fatal(tmp_path, dump_builder):
  dump = tmp_path / "articles_only.dump"
  text = dump_builder.dump([dump_builder.article(1, 4, "Cuatro", transcrito="Texto suficientemente largo para la base de conocimiento.")], [])
  text = text.split("COPY public.dbo_analisis")[0]
  dump.write_text(text, encoding="utf-8")

  stats = run_pipeline(dump, tmp_path / "out")
  assert stats["articles"] == 1
  assert stats["analysis"] == 0
  assert load(tmp_path / "out", TOPICS_FILE) == []
  assert load(tmp_path / "out", CONNECTIONS_FILE) == {"4": []}


def test_write_json_overwrites(tmp_path):
  path = tmp_path / "a.json"
  write_json(path, {"v": 1})
  write_json(path, [1, 2])
  assert json.loads(path.read_text(encoding="utf-8")) == [1, 2]


# ============================================================================
# DERIVED LISTS
# ============================================================================

def test_knowledge_base_content_and_budget():
  article = Article(
    id = 8, titulo = "Principios",
    articulo_transcrito = "I. El Estado asume y promueve principios ético-morales.",
    descripcion = "Descripción del artículo.",
    analisis = [
      AnalysisEntry(8, "Temática", "Valores", "Contenido del análisis.", ""),
      AnalysisEntry(8, "Categoría", "Vacía", "", ""),
    ]
  )
  entry = build_knowledge_base([article])[0]

  assert entry["id"] == 8
  assert entry["content"] == (
    "ARTÍCULO 8: Principios\n"
    "\nTEXTO: I. El Estado asume y promueve principios ético-morales.\n"
    "\nDESCRIPCIÓN: Descripción del artículo.\n"
    "\nANÁLISIS:\n"
    "- Temática: Valores\nContenido del análisis.\n"
  )
  assert len(build_knowledge_base([article], max_chars = 40, min_chars = 0)[0]["content"]) == 40
  assert len(build_knowledge_base([article], max_chars = 60)[0]["content"]) == 60


def test_knowledge_base_drops_capped_content_below_minimum():
  article = Article(id = 8, titulo = "Principios", articulo_transcrito = "I. El Estado asume y promueve principios ético-morales.")
  assert build_knowledge_base([article], max_chars = 40) == []


def test_knowledge_base_drops_short_entries():
  assert build_knowledge_base([Article(id = 2, titulo = "Corto")]) == []


def test_summary_drops_untitled_articles():
  summary = build_summary([Article(id = 1, titulo = None), Article(id = 2, titulo = "Dos", presentacion = "abc")])
  assert summary == [{"id": 2, "titulo": "Dos", "presentacion": "abc...", "tieneAnalisis": False}]

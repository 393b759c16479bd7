#!/usr/bin/env python3
"""
Data Extraction Script

Rebuilds every JSON artifact of the knowledge base from the PostgreSQL dump.

Output files (written to the data directory, overwritten on each run):
  articulos_completos.json   full articles with their analysis entries
  articulos_enhanced.json    formatted articles, grouped analysis, cross-references
  tematicas.json             topic index
  conexiones.json            article id -> related article ids
  knowledge_base.json        plain-text content for the assistant
  articulos_lista.json       light list for the frontend
"""

import sys
import click
from econstitucional.exceptions import CorpusLoadError
from econstitucional.pipeline.artifacts import read_json, TOPICS_FILE
from econstitucional.pipeline.runner import run_pipeline
from econstitucional.utils.config import CONFIG
from econstitucional.utils.logger import setup_logger_from_config


@click.command()
@click.option('--dump', 'dump_path',
              default = CONFIG['paths']['dump'],
              help = 'PostgreSQL dump file')
@click.option('--output-dir',
              default = CONFIG['paths']['data_dir'],
              help = 'Directory for the generated JSON files')
@click.option('--show-topics', default = 10, help = 'Number of topics to print at the end')
@click.option('--debug', is_flag = True, help = 'Enable debug logging')
def main(dump_path, output_dir, show_topics, debug):
  """Extract and enrich the constitution data from the dump"""
  
  setup_logger_from_config(CONFIG, level = "DEBUG" if debug else None)
  
  print("="*80)
  print("EXTRACCIÓN DE DATOS")
  print("="*80)
  
  try:
    stats = run_pipeline(dump_path, output_dir, CONFIG.get('pipeline', {}), progress = True)
  except CorpusLoadError as e:
    print(f"\n✗ Error fatal: {e}")
    sys.exit(1)
  
  print("\n" + "="*80)
  print("EXTRACCIÓN COMPLETA")
  print("="*80)
  print(f"Artículos procesados: {stats['articles']}")
  print(f"Entradas de análisis: {stats['analysis']}")
  print(f"Temáticas encontradas: {stats['topics']}")
  print(f"Total conexiones: {stats['connections']}")
  print("\nArchivos generados:")
  for path in stats['files']:
    print(f"  - {path}")
  
  if show_topics > 0:
    topics = read_json(f"{output_dir}/{TOPICS_FILE}")
    print(f"\n=== Primeras {show_topics} Temáticas ===")
    for topic in topics[:show_topics]:
      print(f"• {topic['titulo']} (Arts: {', '.join(str(n) for n in topic['articulos'])})")


if __name__ == "__main__":
  main()

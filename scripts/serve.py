#!/usr/bin/env python3
"""
HTTP server for the articles and chat API
"""

import sys
import click
from dotenv import load_dotenv
from econstitucional.api.app import create_app
from econstitucional.rag.assistant import ConstitutionalAssistant
from econstitucional.retrieval.corpus import load_corpus
from econstitucional.utils.config import CONFIG
from econstitucional.utils.logger import setup_logger_from_config, logger


load_dotenv('.env')


@click.command()
@click.option('--host', default=CONFIG['server']['host'], help='Bind address')
@click.option('--port', default=CONFIG['server']['port'], type=int, help='Port')
@click.option('--data-dir', default=CONFIG['paths']['data_dir'], help='Directory with the JSON artifacts')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def main(host, port, data_dir, debug):
  """Serve the constitution API"""
  
  setup_logger_from_config(CONFIG, level = "DEBUG" if debug else None)
  
  corpus = load_corpus(data_dir)
  if not corpus:
    logger.error(f"✗ Corpus no disponible: {corpus.reason}")
    sys.exit(1)
  
  try:
    assistant = ConstitutionalAssistant(corpus)
  except ValueError as e:
    # Articles are still served; /api/chat answers 500
    logger.warning(f"⚠ Chat deshabilitado: {e}")
    assistant = None
  
  app = create_app(corpus, assistant, cors_origins = CONFIG['server'].get('cors_origins', '*'))
  app.run(host = host, port = port, debug = debug)


if __name__ == "__main__":
  main()

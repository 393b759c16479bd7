#!/usr/bin/env python3
"""
Query Script for the constitutional assistant
"""

import sys
import click
from colorama import Fore, Style, init
from dotenv import load_dotenv
from econstitucional.exceptions import ModelServiceError
from econstitucional.rag.assistant import ConstitutionalAssistant
from econstitucional.retrieval.corpus import load_corpus
from econstitucional.retrieval.ranker import rank
from econstitucional.utils.config import CONFIG
from econstitucional.utils.logger import setup_logger_from_config, logger


load_dotenv('.env')
init(autoreset = True)


def print_result(result):
  """Pretty print an assistant answer"""
  print(f"\n{Fore.GREEN}Asistente:{Style.RESET_ALL} {result['reply']}\n")
  
  referenced = result['articulosReferenciados']
  if referenced:
    print(f"{Fore.YELLOW}Artículos referenciados:{Style.RESET_ALL}")
    for art in referenced:
      print(f"  {Fore.MAGENTA}[{art['id']}]{Style.RESET_ALL} {art['titulo'] or ''}")


@click.command()
@click.option('--mode', type=click.Choice(['single', 'chat', 'rank']), default='chat',
              help='single question, interactive chat, or ranking only (no model call)')
@click.option('--limit', default=None, type=int, help='Number of articles injected as context')
@click.option('--data-dir', default=CONFIG['paths']['data_dir'], help='Directory with the JSON artifacts')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.argument('query', required=False)
def main(mode, limit, data_dir, debug, query):
  """Ask questions about the Bolivian constitution"""
  
  setup_logger_from_config(CONFIG, level = "DEBUG" if debug else None)
  logger.info("Iniciando el asistente constitucional")
  
  corpus = load_corpus(data_dir)
  if not corpus:
    logger.error(f"✗ Corpus no disponible: {corpus.reason}")
    sys.exit(1)
  
  if mode == 'rank':
    if not query:
      raise click.UsageError("rank mode needs a QUERY")
    for art in rank(query, corpus, limit = limit or CONFIG['retrieval']['max_results']):
      print(f"{Fore.MAGENTA}[{art.id}]{Style.RESET_ALL} {art.titulo or ''} (score {art.score})")
    return
  
  assistant = ConstitutionalAssistant(corpus, max_results = limit)
  
  if query:
    # Single query from command line
    try:
      print_result(assistant.ask(query))
    except ModelServiceError as e:
      logger.error(f"✗ Error del servicio de IA (status {e.status_code}): {e}")
      sys.exit(1)
    return
  
  print("\nModo interactivo - escribe 'salir' para terminar\n")
  
  while True:
    print("-"*80)
    user_query = input("Tú: ").strip()
    
    if user_query.lower() in ['salir', 'exit', 'quit', 'q']:
      print("¡Hasta luego!")
      break
    
    if not user_query:
      continue
    
    try:
      print_result(assistant.ask(user_query))
    except ModelServiceError as e:
      logger.error(f"✗ Error del servicio de IA (status {e.status_code}): {e}")
    
    if mode == 'single':
      break


if __name__ == "__main__":
  main()
